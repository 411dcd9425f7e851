"""
test_axis_angle_tools
=====================

Tests the axis-angle algebra in rotalgebra.rotations.axis_angle_tools.

Test Cases
__________
"""

from unittest import TestCase

import math

import numpy as np

from scipy.spatial.transform import Rotation

from rotalgebra.exceptions import NotAnOrientation2DError, UnsupportedOrientationError
from rotalgebra.rotations import axis_angle_tools as aat
from rotalgebra.rotations import quaternion_tools as qt
from rotalgebra.rotations.orientations import AxisAngle, Quaternion, RotationMatrix, YawPitchRoll


RNG = np.random.default_rng(2718)


def random_axis_angle():
    axis = RNG.normal(size=3)
    axis /= np.linalg.norm(axis)
    return AxisAngle(*axis, RNG.uniform(0.1, 3.0))


def as_rotation(orientation):
    return Rotation.from_quat(orientation.quaternion_components())


class TestMultiply(TestCase):

    def test_multiply(self):

        for _ in range(20):
            aa1 = random_axis_angle()
            aa2 = random_axis_angle()

            product = aat.multiply(aa1, aa2)

            self.assertIsInstance(product, AxisAngle)
            self.assertAlmostEqual(np.linalg.norm(product.axis), 1, places=12)
            self.assertTrue(product.geometrically_equals(qt.multiply(aa1, aa2), 1e-10))

    def test_inverses(self):

        aa1 = random_axis_angle()
        aa2 = random_axis_angle()

        r1 = as_rotation(aa1)
        r2 = as_rotation(aa2)

        for result, expected in [(aat.multiply_invert_left(aa1, aa2), r1.inv() * r2),
                                 (aat.multiply_invert_right(aa1, aa2), r1 * r2.inv()),
                                 (aat.multiply_invert_both(aa1, aa2), r1.inv() * r2.inv())]:
            self.assertLess((as_rotation(result).inv() * expected).magnitude(), 1e-10)

    def test_multiply_by_inverse(self):

        for _ in range(10):
            aa = random_axis_angle()

            product = aat.multiply(aa, aat.invert(aa))

            np.testing.assert_array_equal(product.components, [1, 0, 0, 0])

    def test_degenerate_axis(self):

        product = aat.multiply(AxisAngle(0, 0, 0, 1.0), AxisAngle(0, 0, 1, 0.5))

        np.testing.assert_array_equal(product.components, [1, 0, 0, 0])

        product = aat.multiply(AxisAngle(0, 0, 1, 0.5), AxisAngle(0, 0, 0, 1.0))

        np.testing.assert_array_equal(product.components, [1, 0, 0, 0])

    def test_non_unit_axes(self):

        product = aat.multiply(AxisAngle(0, 0, 3, 0.25), AxisAngle(0, 0, 0.5, 0.5))

        np.testing.assert_allclose(product.components, [0, 0, 1, 0.75], atol=1e-15)

    def test_short_axis(self):

        short = AxisAngle(0, 0, 1e-9, 0.5)
        other = AxisAngle(0, 0, 1, 0.25)
        expected = AxisAngle(0, 0, 1, 0.75)

        for result in (aat.multiply(short, other), aat.multiply(short, Quaternion.from_orientation(other)),
                       qt.multiply(short, other), qt.multiply(Quaternion.from_orientation(short), other),
                       aat.multiply(short, YawPitchRoll(0.25, 0, 0), out=YawPitchRoll())):
            self.assertTrue(result.geometrically_equals(expected, 1e-10), repr(result))

        self.assertAlmostEqual(aat.distance(short, other), 0.25, delta=1e-12)
        self.assertAlmostEqual(qt.distance(Quaternion.from_orientation(short), other), 0.25, delta=1e-12)

    def test_aliasing(self):

        aa1 = random_axis_angle()
        aa2 = random_axis_angle()

        expected = aat.multiply(aa1, aa2).components

        out = aat.multiply(aa1, aa2, out=aa2)

        self.assertIs(out, aa2)
        np.testing.assert_array_equal(aa2.components, expected)

        aa = random_axis_angle()
        expected = aat.multiply(aa, aa).components

        aat.multiply(aa, aa, out=aa)

        np.testing.assert_array_equal(aa.components, expected)

    def test_other_types(self):

        aa = random_axis_angle()

        for other in (Quaternion.from_array(RNG.normal(size=4)), RotationMatrix.from_rotation_vector([0.1, 0.2, 0.3]),
                      YawPitchRoll(0.1, -0.2, 0.3)):
            result = aat.multiply(aa, other, out=Quaternion())

            self.assertIsInstance(result, Quaternion)
            self.assertTrue(result.geometrically_equals(qt.multiply(aa, other), 1e-10))

    def test_invert(self):

        aa = AxisAngle(0, 1, 0, 0.5)

        np.testing.assert_array_equal(aat.invert(aa).components, [0, 1, 0, -0.5])

        aat.invert(aa, out=aa)

        np.testing.assert_array_equal(aa.components, [0, 1, 0, -0.5])

    def test_unsupported(self):

        with self.assertRaises(UnsupportedOrientationError) as error:
            aat.multiply(AxisAngle(), np.eye(3))

        self.assertEqual(error.exception.types, (np.ndarray,))


class TestTransform(TestCase):

    def test_quarter_turn(self):

        np.testing.assert_allclose(aat.transform(AxisAngle(0, 0, 1, math.pi / 2), [1, 0, 0]), [0, 1, 0], atol=1e-9)

    def test_transform(self):

        for _ in range(10):
            aa = random_axis_angle()
            vector = RNG.normal(size=3)

            np.testing.assert_allclose(aat.transform(aa, vector), as_rotation(aa).apply(vector), atol=1e-12)
            np.testing.assert_allclose(aat.inverse_transform(aa, vector), as_rotation(aa).inv().apply(vector),
                                       atol=1e-12)

    def test_in_place(self):

        aa = random_axis_angle()
        vector = RNG.normal(size=3)

        expected = aat.transform(aa, vector)

        aat.transform(aa, vector, out=vector)

        np.testing.assert_array_equal(vector, expected)

    def test_add_sub_transform(self):

        aa = AxisAngle(0, 0, 1, math.pi / 2)

        out = np.zeros(3)

        aat.add_transform(aa, [1, 0, 0], out)
        aat.add_transform(aa, [1, 0, 0], out)

        np.testing.assert_allclose(out, [0, 2, 0], atol=1e-15)

        aat.sub_transform(aa, [0, 1, 0], out)

        np.testing.assert_allclose(out, [1, 2, 0], atol=1e-15)

    def test_transform_2d(self):

        aa = AxisAngle(0, 0, 1, math.pi / 2)

        np.testing.assert_allclose(aat.transform_2d(aa, [1, 0]), [0, 1], atol=1e-15)
        np.testing.assert_allclose(aat.inverse_transform_2d(aa, [1, 0]), [0, -1], atol=1e-15)

        # a negative z axis rotates the other way
        np.testing.assert_allclose(aat.transform_2d(AxisAngle(0, 0, -1, math.pi / 2), [1, 0]), [0, -1], atol=1e-15)

        with self.assertRaises(NotAnOrientation2DError):
            aat.transform_2d(AxisAngle(1, 0, 0, 0.5), [1, 0])

        np.testing.assert_allclose(aat.transform_2d(AxisAngle(1, 0, 0, 0.5), [1, 0], check_if_orientation_2d=False),
                                   [1, 0])

    def test_transform_vector4(self):

        aa = AxisAngle(0, 0, 1, math.pi / 2)

        np.testing.assert_allclose(aat.transform_vector4(aa, [1, 0, 0, -2]), [0, 1, 0, -2], atol=1e-15)
        np.testing.assert_allclose(aat.transform_vector4(aa, [1, 0, 0, -2], inverse=True), [0, -1, 0, -2],
                                   atol=1e-15)

    def test_transform_matrix(self):

        aa = random_axis_angle()
        rotation = aa.as_matrix()

        matrix = RNG.normal(size=(3, 3))

        np.testing.assert_allclose(aat.transform_matrix(aa, matrix), rotation @ matrix @ rotation.T, atol=1e-12)
        np.testing.assert_allclose(aat.inverse_transform_matrix(aa, matrix), rotation.T @ matrix @ rotation,
                                   atol=1e-12)

        expected = rotation @ matrix @ rotation.T

        aat.transform_matrix(aa, matrix, out=matrix)

        np.testing.assert_allclose(matrix, expected, atol=1e-12)


class TestElementaryRotations(TestCase):

    def test_prepend_append(self):

        angle = -0.4

        elementary = {'yaw': AxisAngle(0, 0, 1, angle),
                      'pitch': AxisAngle(0, 1, 0, angle),
                      'roll': AxisAngle(1, 0, 0, angle)}

        for name, rotation in elementary.items():
            for _ in range(5):
                aa = random_axis_angle()

                prepended = getattr(aat, f'prepend_{name}_rotation')(angle, aa)
                appended = getattr(aat, f'append_{name}_rotation')(aa, angle)

                self.assertIsInstance(prepended, AxisAngle)

                self.assertTrue(prepended.geometrically_equals(qt.multiply(rotation, aa), 1e-10), name)
                self.assertTrue(appended.geometrically_equals(qt.multiply(aa, rotation), 1e-10), name)

    def test_cancelling(self):

        result = aat.prepend_yaw_rotation(-0.5, AxisAngle(0, 0, 1, 0.5))

        np.testing.assert_array_equal(result.components, [1, 0, 0, 0])

    def test_in_place(self):

        aa = random_axis_angle()
        expected = aat.append_pitch_rotation(aa, 0.3).components

        aat.append_pitch_rotation(aa, 0.3, out=aa)

        np.testing.assert_array_equal(aa.components, expected)


class TestDistance(TestCase):

    def test_distance(self):

        for _ in range(20):
            aa1 = random_axis_angle()
            aa2 = random_axis_angle()

            expected = (as_rotation(aa1).inv() * as_rotation(aa2)).magnitude()

            self.assertAlmostEqual(aat.distance(aa1, aa2, limit_to_pi=True), expected, delta=1e-10)
            self.assertAlmostEqual(aat.distance(aa1, aa2), aat.distance(aa2, aa1), delta=1e-10)

            distance = aat.distance(aa1, aa2)

            self.assertGreaterEqual(distance, 0)
            self.assertLessEqual(distance, 2 * math.pi)

    def test_other_types(self):

        aa = random_axis_angle()

        for other in (Quaternion.from_array(RNG.normal(size=4)), YawPitchRoll(0.1, -0.2, 0.3),
                      RotationMatrix.from_rotation_vector([0.1, 0.2, 0.3])):
            self.assertAlmostEqual(aat.distance(aa, other, limit_to_pi=True), qt.distance(aa, other, limit_to_pi=True),
                                   delta=1e-10)

    def test_zero(self):

        aa = AxisAngle(0, 0, 1, 1.5 * math.pi)

        self.assertAlmostEqual(aat.distance(AxisAngle(), aa), 1.5 * math.pi, places=12)
        self.assertAlmostEqual(aat.distance(aa, AxisAngle()), 1.5 * math.pi, places=12)
        self.assertAlmostEqual(aat.distance(AxisAngle(), aa, limit_to_pi=True), 0.5 * math.pi, places=12)
        self.assertAlmostEqual(aat.distance(aa, Quaternion(), limit_to_pi=True), 0.5 * math.pi, places=12)

    def test_non_unit_axes(self):

        self.assertAlmostEqual(aat.distance(AxisAngle(0, 0, 2, 0.5), AxisAngle(0, 0, 5, 0.75)), 0.25, places=14)

    def test_matrix(self):

        aa = AxisAngle(0, 0, 1, 1.5 * math.pi)

        # the matrix distance is always folded
        self.assertAlmostEqual(aat.distance(aa, RotationMatrix()), 0.5 * math.pi, places=12)

    def test_nan(self):

        self.assertTrue(math.isnan(aat.distance(AxisAngle(0, 0, 1, math.nan), AxisAngle(0, 1, 0, 0.5))))

    def test_unsupported(self):

        with self.assertRaises(UnsupportedOrientationError) as error:
            aat.distance(AxisAngle(), [1, 0, 0, 0])

        self.assertEqual(error.exception.types, (AxisAngle, list))
