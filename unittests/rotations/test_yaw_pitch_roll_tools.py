"""
test_yaw_pitch_roll_tools
=========================

Tests the yaw-pitch-roll algebra in rotalgebra.rotations.yaw_pitch_roll_tools.

Test Cases
__________
"""

from unittest import TestCase

import math

import numpy as np

from scipy.spatial.transform import Rotation

from rotalgebra.exceptions import NotAnOrientation2DError, UnsupportedOrientationError
from rotalgebra.rotations import quaternion_tools as qt
from rotalgebra.rotations import yaw_pitch_roll_tools as ypt
from rotalgebra.rotations.orientations import AxisAngle, Quaternion, RotationMatrix, YawPitchRoll


RNG = np.random.default_rng(1414)


def random_yaw_pitch_roll():
    return YawPitchRoll(*RNG.uniform([-3, -1.4, -3], [3, 1.4, 3]))


def as_rotation(ypr):
    return Rotation.from_euler('ZYX', ypr.components)


class TestPredicates(TestCase):

    def test_is_zero(self):

        self.assertTrue(ypt.is_zero(YawPitchRoll()))
        self.assertTrue(ypt.is_zero(YawPitchRoll(2 * math.pi, 0, -2 * math.pi)))
        self.assertFalse(ypt.is_zero(YawPitchRoll(0, 1e-6, 0)))
        self.assertTrue(ypt.is_zero(YawPitchRoll(0, 1e-6, 0), epsilon=1e-5))

    def test_is_orientation_2d(self):

        self.assertTrue(ypt.is_orientation_2d(YawPitchRoll(1, 0, 0)))
        self.assertFalse(ypt.is_orientation_2d(YawPitchRoll(1, 0.1, 0)))
        self.assertTrue(ypt.is_orientation_2d(Quaternion(0, 0, 1, 1)))


class TestMultiply(TestCase):

    def test_multiply(self):

        for _ in range(10):
            ypr1 = random_yaw_pitch_roll()
            ypr2 = random_yaw_pitch_roll()

            product = ypt.multiply(ypr1, ypr2)

            self.assertIsInstance(product, YawPitchRoll)
            self.assertTrue(product.geometrically_equals(qt.multiply(ypr1, ypr2), 1e-10))

    def test_inverses(self):

        ypr1 = random_yaw_pitch_roll()
        ypr2 = random_yaw_pitch_roll()

        r1 = as_rotation(ypr1)
        r2 = as_rotation(ypr2)

        for result, expected in [(ypt.multiply_invert_left(ypr1, ypr2), r1.inv() * r2),
                                 (ypt.multiply_invert_right(ypr1, ypr2), r1 * r2.inv()),
                                 (ypt.multiply_invert_both(ypr1, ypr2), r1.inv() * r2.inv())]:
            self.assertLess((as_rotation(result).inv() * expected).magnitude(), 1e-10)

    def test_invert(self):

        ypr = random_yaw_pitch_roll()

        inverse = ypt.invert(ypr)

        self.assertLess((as_rotation(inverse) * as_rotation(ypr)).magnitude(), 1e-10)

        self.assertTrue(ypt.is_zero(ypt.multiply(ypr, inverse), 1e-10))

    def test_aliasing(self):

        ypr1 = random_yaw_pitch_roll()
        ypr2 = random_yaw_pitch_roll()

        expected = ypt.multiply(ypr1, ypr2).components

        ypt.multiply(ypr1, ypr2, out=ypr1)

        np.testing.assert_array_equal(ypr1.components, expected)

    def test_other_output(self):

        ypr1 = random_yaw_pitch_roll()
        ypr2 = random_yaw_pitch_roll()

        out = ypt.multiply(ypr1, ypr2, out=RotationMatrix())

        self.assertIsInstance(out, RotationMatrix)
        np.testing.assert_allclose(out.matrix, ypr1.as_matrix() @ ypr2.as_matrix(), atol=1e-12)

    def test_unsupported(self):

        with self.assertRaises(UnsupportedOrientationError):
            ypt.multiply(YawPitchRoll(), (0, 0, 0))


class TestTransform(TestCase):

    def test_transform(self):

        for _ in range(10):
            ypr = random_yaw_pitch_roll()
            vector = RNG.normal(size=3)

            np.testing.assert_allclose(ypt.transform(ypr, vector), as_rotation(ypr).apply(vector), atol=1e-12)
            np.testing.assert_allclose(ypt.inverse_transform(ypr, vector), as_rotation(ypr).inv().apply(vector),
                                       atol=1e-12)

    def test_quarter_turn(self):

        np.testing.assert_allclose(ypt.transform(YawPitchRoll(math.pi / 2, 0, 0), [1, 0, 0]), [0, 1, 0], atol=1e-9)

    def test_zero(self):

        vector = np.array([1.0, 2.0, 3.0])

        np.testing.assert_array_equal(ypt.transform(YawPitchRoll(), vector), vector)
        np.testing.assert_array_equal(ypt.transform(YawPitchRoll(2 * math.pi, 0, 0), vector), vector)

    def test_nan(self):

        self.assertTrue(np.isnan(ypt.transform(YawPitchRoll(math.nan, 0, 0), [1, 2, 3])).all())

    def test_add_sub_transform(self):

        ypr = YawPitchRoll(math.pi / 2, 0, 0)

        out = np.zeros(3)

        ypt.add_transform(ypr, [1, 0, 0], out)

        np.testing.assert_allclose(out, [0, 1, 0], atol=1e-15)

        ypt.sub_transform(ypr, [0, 1, 0], out)

        np.testing.assert_allclose(out, [1, 1, 0], atol=1e-15)

    def test_transform_2d(self):

        ypr = YawPitchRoll(math.pi / 2, 0, 0)

        np.testing.assert_allclose(ypt.transform_2d(ypr, [1, 0]), [0, 1], atol=1e-15)
        np.testing.assert_allclose(ypt.inverse_transform_2d(ypr, [1, 0]), [0, -1], atol=1e-15)

        with self.assertRaises(NotAnOrientation2DError):
            ypt.transform_2d(YawPitchRoll(math.pi / 2, 0.1, 0), [1, 0])

        np.testing.assert_allclose(ypt.transform_2d(YawPitchRoll(math.pi / 2, 0.1, 0), [1, 0],
                                                    check_if_orientation_2d=False), [0, 1], atol=1e-15)

    def test_transform_vector4(self):

        ypr = random_yaw_pitch_roll()
        vector = RNG.normal(size=4)

        result = ypt.transform_vector4(ypr, vector)

        np.testing.assert_allclose(result[:3], as_rotation(ypr).apply(vector[:3]), atol=1e-12)
        self.assertEqual(result[3], vector[3])

        result = ypt.transform_vector4(ypr, vector, inverse=True)

        np.testing.assert_allclose(result[:3], as_rotation(ypr).inv().apply(vector[:3]), atol=1e-12)

    def test_transform_matrix(self):

        ypr = random_yaw_pitch_roll()
        rotation = as_rotation(ypr).as_matrix()
        matrix = RNG.normal(size=(3, 3))

        np.testing.assert_allclose(ypt.transform_matrix(ypr, matrix), rotation @ matrix @ rotation.T, atol=1e-12)
        np.testing.assert_allclose(ypt.inverse_transform_matrix(ypr, matrix), rotation.T @ matrix @ rotation,
                                   atol=1e-12)

    def test_transform_rotation_matrix(self):

        ypr = random_yaw_pitch_roll()
        r = RotationMatrix(Rotation.from_rotvec([0.3, 0.1, -0.2]).as_matrix())

        result = ypt.transform_rotation_matrix(ypr, r)

        self.assertIsInstance(result, RotationMatrix)
        np.testing.assert_allclose(result.matrix, as_rotation(ypr).as_matrix() @ r.matrix, atol=1e-12)


class TestElementaryRotations(TestCase):

    def check(self, result, expected):
        self.assertIsInstance(result, YawPitchRoll)
        self.assertTrue(result.geometrically_equals(expected, 1e-10), f'{result!r} != {expected!r}')

    def test_append_yaw_from_zero(self):

        result = ypt.append_yaw_rotation(YawPitchRoll(), math.pi / 2)

        np.testing.assert_allclose(result.components, [math.pi / 2, 0, 0], atol=1e-11)

    def test_shortcuts(self):

        # the angle is simply added in these cases
        np.testing.assert_allclose(ypt.prepend_yaw_rotation(0.2, YawPitchRoll(0.1, 0.5, -0.3)).components,
                                   [0.3, 0.5, -0.3], atol=1e-11)
        np.testing.assert_allclose(ypt.append_roll_rotation(YawPitchRoll(0.1, 0.5, -0.3), 0.2).components,
                                   [0.1, 0.5, -0.1], atol=1e-11)
        np.testing.assert_allclose(ypt.append_pitch_rotation(YawPitchRoll(0.1, 0.5, 0), 0.2).components,
                                   [0.1, 0.7, 0], atol=1e-11)
        np.testing.assert_allclose(ypt.prepend_pitch_rotation(0.2, YawPitchRoll(0, 0.5, 0.4)).components,
                                   [0, 0.7, 0.4], atol=1e-11)
        np.testing.assert_allclose(ypt.prepend_roll_rotation(0.2, YawPitchRoll(0, 0, 0.4)).components,
                                   [0, 0, 0.6], atol=1e-11)

    def test_wrapping(self):

        result = ypt.prepend_yaw_rotation(math.pi / 2, YawPitchRoll(3 * math.pi / 4 + math.pi / 4 - 0.1, 0, 0))

        np.testing.assert_allclose(result.components, [-math.pi / 2 - 0.1, 0, 0], atol=1e-11)

    def test_against_composition(self):

        angle = 0.6

        elementary = {'yaw': YawPitchRoll(angle, 0, 0),
                      'pitch': YawPitchRoll(0, angle, 0),
                      'roll': YawPitchRoll(0, 0, angle)}

        starts = [random_yaw_pitch_roll() for _ in range(5)]
        starts.extend([YawPitchRoll(0, 1.2, 0), YawPitchRoll(0.3, 0, 0), YawPitchRoll(0, 0, -0.7)])

        for name, rotation in elementary.items():
            for start in starts:
                prepended = getattr(ypt, f'prepend_{name}_rotation')(angle, start)
                appended = getattr(ypt, f'append_{name}_rotation')(start, angle)

                self.check(prepended, qt.multiply(rotation, start))
                self.check(appended, qt.multiply(start, rotation))

    def test_pitch_past_vertical(self):

        start = YawPitchRoll(0, 1.2, 0)

        result = ypt.append_pitch_rotation(start, 0.6)

        # the pitch cannot exceed pi/2 so the orientation is re-expressed
        self.assertLessEqual(abs(result.pitch), math.pi / 2)
        self.check(result, Quaternion.from_rotation_vector([0, 1.8, 0]))

    def test_other_inputs(self):

        q = Quaternion.from_rotation_vector([0.1, 0.2, 0.3])

        result = ypt.append_roll_rotation(q, 0.4)

        self.check(result, qt.multiply(q, YawPitchRoll(0, 0, 0.4)))

        result = ypt.prepend_yaw_rotation(0.4, q, out=Quaternion())

        self.assertIsInstance(result, Quaternion)
        self.assertTrue(result.geometrically_equals(qt.multiply(YawPitchRoll(0.4, 0, 0), q), 1e-10))


class TestDistance(TestCase):

    def test_distance(self):

        for _ in range(20):
            ypr1 = random_yaw_pitch_roll()
            ypr2 = random_yaw_pitch_roll()

            expected = (as_rotation(ypr1).inv() * as_rotation(ypr2)).magnitude()

            self.assertAlmostEqual(ypt.distance(ypr1, ypr2, limit_to_pi=True), expected, delta=1e-10)
            self.assertAlmostEqual(ypt.distance(ypr1, ypr2), ypt.distance(ypr2, ypr1), delta=1e-10)

    def test_other_types(self):

        ypr = random_yaw_pitch_roll()

        for other in (AxisAngle(0, 1, 0, 0.4), Quaternion(1, 2, 3, 4),
                      RotationMatrix(Rotation.from_rotvec([0.1, 0.2, 0.3]).as_matrix())):
            self.assertAlmostEqual(ypt.distance(ypr, other, limit_to_pi=True),
                                   qt.distance(Quaternion.from_orientation(ypr), other, limit_to_pi=True),
                                   delta=1e-10)

    def test_nan(self):

        self.assertTrue(math.isnan(ypt.distance(YawPitchRoll(math.nan, 0, 0), YawPitchRoll())))
