"""
test_orientation_tools
======================

Tests the representation independent entry points in rotalgebra.rotations.orientation_tools.

Test Cases
__________
"""

from unittest import TestCase

import math

from itertools import product

import numpy as np
import pandas as pd

from rotalgebra.exceptions import UnsupportedOrientationError
from rotalgebra.rotations import orientation_tools as ot
from rotalgebra.rotations import axis_angle_tools, quaternion_tools, rotation_matrix_tools, yaw_pitch_roll_tools
from rotalgebra.rotations.orientations import AxisAngle, Quaternion, RotationMatrix, YawPitchRoll


TYPES = (AxisAngle, Quaternion, RotationMatrix, YawPitchRoll)

ROTATION_VECTOR = np.array([0.4, -0.3, 0.8])


class TestDispatch(TestCase):

    def test_algebra_for(self):

        self.assertIs(ot.algebra_for(AxisAngle()), axis_angle_tools)
        self.assertIs(ot.algebra_for(Quaternion()), quaternion_tools)
        self.assertIs(ot.algebra_for(RotationMatrix()), rotation_matrix_tools)
        self.assertIs(ot.algebra_for(YawPitchRoll()), yaw_pitch_roll_tools)

        with self.assertRaises(UnsupportedOrientationError):
            ot.algebra_for(np.eye(3))

    def test_multiply_type(self):

        for first, second in product(TYPES, TYPES):
            o1 = first.from_rotation_vector(ROTATION_VECTOR)
            o2 = second.from_rotation_vector(-0.5 * ROTATION_VECTOR)

            result = ot.multiply(o1, o2)

            self.assertIsInstance(result, first)
            self.assertTrue(result.geometrically_equals(Quaternion.from_rotation_vector(0.5 * ROTATION_VECTOR), 1e-10),
                            f'{first.__name__} * {second.__name__}')

    def test_invert(self):

        for orientation_type in TYPES:
            orientation = orientation_type.from_rotation_vector(ROTATION_VECTOR)

            inverse = ot.invert(orientation)

            self.assertIsInstance(inverse, orientation_type)
            self.assertTrue(inverse.geometrically_equals(Quaternion.from_rotation_vector(-ROTATION_VECTOR), 1e-10))

    def test_transform_consistent(self):

        vector = np.array([0.3, 2.0, -1.0])

        results = [ot.transform(orientation_type.from_rotation_vector(ROTATION_VECTOR), vector)
                   for orientation_type in TYPES]

        for result in results[1:]:
            np.testing.assert_allclose(result, results[0], atol=1e-10)

        inverse_results = [ot.inverse_transform(orientation_type.from_rotation_vector(ROTATION_VECTOR), results[0])
                           for orientation_type in TYPES]

        for result in inverse_results:
            np.testing.assert_allclose(result, vector, atol=1e-10)

    def test_unsupported(self):

        with self.assertRaises(UnsupportedOrientationError) as error:
            ot.multiply([0, 0, 0, 1], Quaternion())

        self.assertEqual(error.exception.types, (list, Quaternion))

        with self.assertRaises(UnsupportedOrientationError) as error:
            ot.distance(Quaternion(), 'identity')

        self.assertEqual(error.exception.types, (Quaternion, str))


class TestDistance(TestCase):

    def test_symmetric(self):

        for first, second in product(TYPES, TYPES):
            o1 = first.from_rotation_vector(ROTATION_VECTOR)
            o2 = second.from_rotation_vector([-0.2, 0.5, 0.1])

            forward = ot.distance(o1, o2)
            backward = ot.distance(o2, o1)

            self.assertAlmostEqual(forward, backward, delta=1e-10, msg=f'{first.__name__}, {second.__name__}')

            self.assertGreaterEqual(forward, 0)
            self.assertLessEqual(ot.distance(o1, o2, limit_to_pi=True), math.pi)

    def test_value(self):

        for first, second in product(TYPES, TYPES):
            o1 = first.from_rotation_vector([0, 0, 0.25])
            o2 = second.from_rotation_vector([0, 0, -0.5])

            self.assertAlmostEqual(ot.distance(o1, o2), 0.75, delta=1e-10)

    def test_full_turn(self):

        # both are the identity rotation but with a negative quaternion scalar
        for full_turn in (AxisAngle(0, 0, 1, 2 * math.pi), Quaternion(0, 0, 0, -1)):
            for other_type in TYPES:
                other = other_type.from_rotation_vector([0, 0, 0.5])

                forward = ot.distance(full_turn, other)
                backward = ot.distance(other, full_turn)

                message = f'{full_turn!r}, {other_type.__name__}'

                self.assertAlmostEqual(forward, backward, delta=1e-10, msg=message)
                self.assertAlmostEqual(ot.distance(full_turn, other, limit_to_pi=True), 0.5, delta=1e-10, msg=message)
                self.assertAlmostEqual(ot.distance(other, full_turn, limit_to_pi=True), 0.5, delta=1e-10, msg=message)

        self.assertAlmostEqual(ot.distance(AxisAngle(0, 0, 1, 0.5), Quaternion(0, 0, 0, -1)), 2 * math.pi - 0.5,
                               delta=1e-10)
        self.assertAlmostEqual(ot.distance(Quaternion(0, 0, 0, -1), AxisAngle(0, 0, 1, 0.5)), 2 * math.pi - 0.5,
                               delta=1e-10)


class TestRates(TestCase):

    def test_finite_difference(self):

        angular_velocity = np.array([0.2, -0.1, 0.3])
        dt = 0.25

        start = Quaternion.from_rotation_vector(ROTATION_VECTOR)
        end = quaternion_tools.multiply(start, Quaternion.from_rotation_vector(angular_velocity * dt))

        for first, second in product(TYPES, TYPES):
            previous = first.from_orientation(start)
            current = second.from_orientation(end)

            np.testing.assert_allclose(ot.finite_difference(previous, current, dt), angular_velocity, atol=1e-9,
                                       err_msg=f'{first.__name__}, {second.__name__}')

    def test_shorter_arc(self):

        previous = Quaternion()
        current = Quaternion.from_rotation_vector([0, 0, 1.5 * math.pi])

        np.testing.assert_allclose(ot.finite_difference(previous, current, 1.0), [0, 0, -0.5 * math.pi], atol=1e-12)

    def test_integrate(self):

        angular_velocity = np.array([-0.3, 0.1, 0.2])
        dt = 0.5

        for orientation_type in TYPES:
            previous = orientation_type.from_rotation_vector(ROTATION_VECTOR)

            current = ot.integrate(previous, angular_velocity, dt)

            self.assertIsInstance(current, orientation_type)

            np.testing.assert_allclose(ot.finite_difference(previous, current, dt), angular_velocity, atol=1e-9,
                                       err_msg=orientation_type.__name__)

    def test_integrate_out(self):

        out = AxisAngle()

        result = ot.integrate(Quaternion(), [0, 0, 1], 0.5, out=out)

        self.assertIs(result, out)
        np.testing.assert_allclose(out.components, [0, 0, 1, 0.5], atol=1e-15)

    def test_unsupported(self):

        with self.assertRaises(UnsupportedOrientationError):
            ot.finite_difference(Quaternion(), np.eye(3), 1.0)

        with self.assertRaises(UnsupportedOrientationError):
            ot.integrate(np.eye(3), [0, 0, 1], 1.0)


class TestInterpolate(TestCase):

    def test_interpolate(self):

        for first, second in product(TYPES, TYPES):
            o0 = first.from_rotation_vector([0, 0, 0.2])
            o1 = second.from_rotation_vector([0, 0, 1.0])

            result = ot.interpolate(o0, o1, 0.5)

            self.assertIsInstance(result, first)
            self.assertTrue(result.geometrically_equals(Quaternion.from_rotation_vector([0, 0, 0.6]), 1e-10))

    def test_times(self):

        o0 = RotationMatrix.from_rotation_vector([0.2, 0, 0])
        o1 = YawPitchRoll(0, 0, 1.0)

        result = ot.interpolate(o0, o1, pd.Timestamp('2021-01-01T00:00:03'), '2021-01-01', '2021-01-01T00:00:04')

        self.assertTrue(result.geometrically_equals(AxisAngle(1, 0, 0, 0.8), 1e-10))

        result = ot.interpolate(YawPitchRoll(0, 0, 0.2), o1, 3, 2, 4, out=Quaternion())

        self.assertIsInstance(result, Quaternion)
        self.assertTrue(result.geometrically_equals(AxisAngle(1, 0, 0, 0.6), 1e-10))
