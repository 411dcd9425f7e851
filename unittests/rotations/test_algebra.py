"""
test_algebra
============

Tests the configurable RotationAlgebra front end in rotalgebra.rotations.algebra.

Test Cases
__________
"""

from unittest import TestCase

import doctest
import math
import warnings

import numpy as np
import pandas as pd

from rotalgebra.exceptions import NotAnOrientation2DError, UnsupportedOrientationError
from rotalgebra.rotations import algebra
from rotalgebra.rotations.algebra import RotationAlgebra, RotationAlgebraOptions
from rotalgebra.rotations.orientations import AxisAngle, Quaternion, RotationMatrix, YawPitchRoll


class TestOptions(TestCase):

    def test_defaults(self):

        rotation_algebra = RotationAlgebra()

        self.assertEqual(rotation_algebra.epsilon, 1e-12)
        self.assertTrue(rotation_algebra.check_if_orientation_2d)
        self.assertFalse(rotation_algebra.limit_distance_to_pi)
        self.assertFalse(rotation_algebra.warn_on_degenerate)
        self.assertFalse(rotation_algebra.normalize_outputs)

    def test_options(self):

        options = RotationAlgebraOptions(epsilon=1e-6, limit_distance_to_pi=True)

        rotation_algebra = RotationAlgebra(options)

        self.assertEqual(rotation_algebra.epsilon, 1e-6)
        self.assertTrue(rotation_algebra.limit_distance_to_pi)

        # the instance keeps its own copy
        options.epsilon = 1.0

        self.assertEqual(rotation_algebra.original_options.epsilon, 1e-6)

    def test_reset_settings(self):

        rotation_algebra = RotationAlgebra(RotationAlgebraOptions(warn_on_degenerate=True))

        rotation_algebra.warn_on_degenerate = False
        rotation_algebra.epsilon = 0.5

        rotation_algebra.reset_settings()

        self.assertTrue(rotation_algebra.warn_on_degenerate)
        self.assertEqual(rotation_algebra.epsilon, 1e-12)

    def test_negative_epsilon(self):

        with self.assertRaises(ValueError):
            RotationAlgebra(RotationAlgebraOptions(epsilon=-1.0))


class TestWarnings(TestCase):

    def test_degenerate_axis(self):

        rotation_algebra = RotationAlgebra(RotationAlgebraOptions(warn_on_degenerate=True))

        with self.assertWarns(UserWarning):
            result = rotation_algebra.multiply(AxisAngle(0, 0, 0, 1.0), AxisAngle(0, 0, 1, 0.5))

        np.testing.assert_array_equal(result.components, [1, 0, 0, 0])

    def test_degenerate_quaternion(self):

        rotation_algebra = RotationAlgebra(RotationAlgebraOptions(warn_on_degenerate=True))

        quaternion = Quaternion()
        quaternion.set_unsafe(0, 0, 0, 0)

        with self.assertWarns(UserWarning):
            rotation_algebra.transform(quaternion, [1, 2, 3])

    def test_nan(self):

        rotation_algebra = RotationAlgebra(RotationAlgebraOptions(warn_on_degenerate=True))

        with self.assertWarns(UserWarning):
            result = rotation_algebra.transform(YawPitchRoll(math.nan, 0, 0), [1, 0, 0])

        self.assertTrue(np.isnan(result).all())

    def test_disabled(self):

        rotation_algebra = RotationAlgebra()

        with warnings.catch_warnings():
            warnings.simplefilter('error')

            result = rotation_algebra.multiply(AxisAngle(0, 0, 0, 1.0), AxisAngle(0, 0, 1, 0.5))
            rotation_algebra.transform(YawPitchRoll(math.nan, 0, 0), [1, 0, 0])

        np.testing.assert_array_equal(result.components, [1, 0, 0, 0])

    def test_clean_input(self):

        rotation_algebra = RotationAlgebra(RotationAlgebraOptions(warn_on_degenerate=True))

        with warnings.catch_warnings():
            warnings.simplefilter('error')

            rotation_algebra.multiply(Quaternion.from_rotation_vector([0.1, 0.2, 0.3]), RotationMatrix())
            rotation_algebra.distance(YawPitchRoll(0.1, 0.2, 0.3), AxisAngle(0, 1, 0, 0.4))


class TestOperations(TestCase):

    def test_multiply(self):

        rotation_algebra = RotationAlgebra()

        result = rotation_algebra.multiply(YawPitchRoll(0.3, 0, 0), AxisAngle(0, 0, 1, 0.2))

        self.assertIsInstance(result, YawPitchRoll)
        np.testing.assert_allclose(result.components, [0.5, 0, 0], atol=1e-11)

    def test_normalize_outputs(self):

        rotation_algebra = RotationAlgebra(RotationAlgebraOptions(normalize_outputs=True))

        result = rotation_algebra.multiply(AxisAngle(0, 0, 1, 0.25), AxisAngle(0, 0, 1, 0.5))

        self.assertAlmostEqual(np.linalg.norm(result.axis), 1, places=15)

        out = Quaternion()

        rotation_algebra.invert(Quaternion.from_rotation_vector([0.1, 0.2, 0.3]), out=out)

        self.assertAlmostEqual(np.linalg.norm(out.components), 1, places=14)

        matrix = rotation_algebra.integrate(RotationMatrix(), [0.1, -0.2, 0.3], 2.0)

        np.testing.assert_allclose(matrix.matrix @ matrix.matrix.T, np.eye(3), atol=1e-14)

    def test_transform_2d(self):

        rotation_algebra = RotationAlgebra()

        np.testing.assert_allclose(rotation_algebra.transform_2d(YawPitchRoll(math.pi / 2, 0, 0), [1, 0]), [0, 1],
                                   atol=1e-15)

        with self.assertRaises(NotAnOrientation2DError):
            rotation_algebra.transform_2d(YawPitchRoll(0.1, 0.2, 0), [1, 0])

        rotation_algebra.check_if_orientation_2d = False

        np.testing.assert_allclose(rotation_algebra.transform_2d(AxisAngle(0, 0, 1, math.pi / 2), [1, 0]), [0, 1],
                                   atol=1e-15)
        rotation_algebra.transform_2d(YawPitchRoll(0.1, 0.2, 0), [1, 0])

    def test_transform_2d_epsilon(self):

        tilted = YawPitchRoll(0.1, 1e-8, 0)

        with self.assertRaises(NotAnOrientation2DError):
            RotationAlgebra().transform_2d(tilted, [1, 0])

        loose = RotationAlgebra(RotationAlgebraOptions(epsilon=1e-6))

        np.testing.assert_allclose(loose.transform_2d(tilted, [1, 0]), [math.cos(0.1), math.sin(0.1)], atol=1e-15)

    def test_transform(self):

        rotation_algebra = RotationAlgebra()

        vector = np.array([0.5, -1.0, 2.0])
        orientation = RotationMatrix.from_rotation_vector([0.3, 0.2, -0.1])

        rotated = rotation_algebra.transform(orientation, vector)

        np.testing.assert_allclose(rotated, orientation.matrix @ vector, atol=1e-14)
        np.testing.assert_allclose(rotation_algebra.inverse_transform(orientation, rotated), vector, atol=1e-14)

    def test_distance(self):

        rotation_algebra = RotationAlgebra()

        aa = AxisAngle(0, 0, 1, 1.5 * math.pi)

        self.assertAlmostEqual(rotation_algebra.distance(aa, Quaternion()), 1.5 * math.pi, places=12)

        rotation_algebra.limit_distance_to_pi = True

        self.assertAlmostEqual(rotation_algebra.distance(aa, Quaternion()), 0.5 * math.pi, places=12)

    def test_is_zero_orientation(self):

        rotation_algebra = RotationAlgebra()

        self.assertTrue(rotation_algebra.is_zero_orientation(YawPitchRoll()))
        self.assertFalse(rotation_algebra.is_zero_orientation(YawPitchRoll(1e-6, 0, 0)))

        rotation_algebra.epsilon = 1e-3

        self.assertTrue(rotation_algebra.is_zero_orientation(YawPitchRoll(1e-6, 0, 0)))

    def test_rates(self):

        rotation_algebra = RotationAlgebra()

        previous = Quaternion.from_rotation_vector([0.2, 0.1, -0.4])

        current = rotation_algebra.integrate(previous, [0.3, 0.0, -0.1], 0.5)

        self.assertIsInstance(current, Quaternion)
        np.testing.assert_allclose(rotation_algebra.finite_difference(previous, current, 0.5), [0.3, 0.0, -0.1],
                                   atol=1e-12)

    def test_interpolate(self):

        rotation_algebra = RotationAlgebra()

        result = rotation_algebra.interpolate(AxisAngle(0, 1, 0, 0.2), Quaternion.from_rotation_vector([0, 1.0, 0]),
                                              pd.Timestamp('2020-02-01T12:00:00'), pd.Timestamp('2020-02-01'),
                                              pd.Timestamp('2020-02-02'))

        self.assertIsInstance(result, AxisAngle)
        self.assertTrue(result.geometrically_equals(AxisAngle(0, 1, 0, 0.6), 1e-10))

    def test_convert(self):

        rotation_algebra = RotationAlgebra()

        orientation = YawPitchRoll(0.3, -0.2, 0.1)

        for target_type in (AxisAngle, Quaternion, RotationMatrix, YawPitchRoll):
            converted = rotation_algebra.convert(orientation, target_type)

            self.assertIsInstance(converted, target_type)
            self.assertTrue(converted.geometrically_equals(orientation, 1e-10))

        with self.assertRaises(UnsupportedOrientationError) as error:
            rotation_algebra.convert(orientation, np.ndarray)

        self.assertEqual(error.exception.types, (YawPitchRoll, type))

    def test_unsupported(self):

        rotation_algebra = RotationAlgebra()

        with self.assertRaises(UnsupportedOrientationError) as error:
            rotation_algebra.multiply(AxisAngle(), np.eye(3))

        self.assertEqual(error.exception.types, (AxisAngle, np.ndarray))

        with self.assertRaises(UnsupportedOrientationError):
            rotation_algebra.transform([0, 0, 0, 1], [1, 0, 0])


class TestDocumentation(TestCase):

    def test_examples(self):

        results = doctest.testmod(algebra)

        self.assertEqual(results.failed, 0)
