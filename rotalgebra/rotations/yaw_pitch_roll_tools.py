r"""
Yaw-pitch-roll algebra.

Yaw, pitch, and roll are the angles of the rotation :math:`\mathbf{R}=\mathbf{R}_z(yaw)\mathbf{R}_y(pitch)\mathbf{R}_x(roll)`.
Vector transformations are done with the explicit coefficients of this product.  Compositions go through the
quaternion product and the result is extracted back into angles, except for the elementary rotations where adding the
angle is exact:

* a yaw prepended to any orientation, and a roll appended to any orientation, always add to the yaw (roll),
* a yaw appended to an orientation with zero pitch and roll adds to the yaw,
* a pitch appended to an orientation with zero roll, or prepended to one with zero yaw, adds to the pitch as long as
  the result stays in :math:`[-\pi/2, \pi/2]`,
* a roll prepended to an orientation with zero yaw and pitch adds to the roll.

Resulting angles are wrapped into :math:`[-\pi, \pi)`.
"""

import math

from rotalgebra._typing import ARRAY_LIKE, DOUBLE_ARRAY, MATRIX_COMPONENTS, VECTOR_COMPONENTS
from rotalgebra.exceptions import UnsupportedOrientationError

from rotalgebra.rotations import quaternion_tools, rotation_matrix_tools
from rotalgebra.rotations.core import conversions
from rotalgebra.rotations.core._helpers import _matrix_components, _prepare_output, _vector_components
from rotalgebra.rotations.core.scalar_math import (EPS, HALF_PI, contains_nan, is_angle_zero,
                                                   trim_angle_minus_pi_to_pi)
from rotalgebra.rotations.orientations import Orientation3D, RotationMatrix, YawPitchRoll, ZERO_EPS


__all__ = ['is_zero', 'is_orientation_2d', 'multiply', 'multiply_invert_left', 'multiply_invert_right',
           'multiply_invert_both', 'invert',
           'transform', 'inverse_transform', 'add_transform', 'sub_transform', 'transform_2d', 'inverse_transform_2d',
           'transform_vector4', 'transform_matrix', 'inverse_transform_matrix', 'transform_rotation_matrix',
           'prepend_yaw_rotation', 'append_yaw_rotation', 'prepend_pitch_rotation', 'append_pitch_rotation',
           'prepend_roll_rotation', 'append_roll_rotation', 'distance']


def _angles(yaw_pitch_roll: Orientation3D, operation: str) -> VECTOR_COMPONENTS:
    if isinstance(yaw_pitch_roll, YawPitchRoll):
        return yaw_pitch_roll.yaw, yaw_pitch_roll.pitch, yaw_pitch_roll.roll

    if isinstance(yaw_pitch_roll, RotationMatrix):
        return conversions.matrix_to_yaw_pitch_roll(*yaw_pitch_roll.matrix_components())

    if isinstance(yaw_pitch_roll, Orientation3D):
        return conversions.quaternion_to_yaw_pitch_roll(*yaw_pitch_roll.quaternion_components())

    raise UnsupportedOrientationError(operation, yaw_pitch_roll)


def _write_angles(out: Orientation3D | None, yaw: float, pitch: float, roll: float) -> Orientation3D:
    if out is None:
        out = YawPitchRoll()

    if isinstance(out, YawPitchRoll):
        out.set(trim_angle_minus_pi_to_pi(yaw), trim_angle_minus_pi_to_pi(pitch), trim_angle_minus_pi_to_pi(roll))
    else:
        out.set_quaternion(*conversions.yaw_pitch_roll_to_quaternion(yaw, pitch, roll))

    return out


def is_zero(yaw_pitch_roll: YawPitchRoll, epsilon: float = EPS) -> bool:
    """
    Checks whether all three angles are zero (modulo :math:`2\\pi`) to within `epsilon`.
    """

    return all(is_angle_zero(a, epsilon) for a in _angles(yaw_pitch_roll, 'is_zero'))


def is_orientation_2d(yaw_pitch_roll: YawPitchRoll, epsilon: float = ZERO_EPS) -> bool:
    """
    Checks whether the orientation only rotates about the z axis (pitch and roll within `epsilon` of zero).
    """

    _, pitch, roll = _angles(yaw_pitch_roll, 'is_orientation_2d')

    return abs(pitch) <= epsilon and abs(roll) <= epsilon


# ---------------------------------------------------------------------------------------------------------------------
# composition
# ---------------------------------------------------------------------------------------------------------------------

def multiply(orientation1: Orientation3D, orientation2: Orientation3D, out: Orientation3D | None = None,
             invert_first: bool = False, invert_second: bool = False) -> Orientation3D:
    """
    This function composes two orientations and stores the result as yaw-pitch-roll angles.

    Both operands are promoted to quaternion components, composed with the Hamilton product, and the product is
    converted back into angles.  Either operand can be inverted first.

    :param orientation1: the left operand (any orientation type)
    :param orientation2: the right operand (any orientation type)
    :param out: where to store the result.  A new :class:`.YawPitchRoll` when ``None``; other orientation types are
                set through :meth:`.Orientation3D.set_quaternion`.
    :param invert_first: whether to invert the left operand
    :param invert_second: whether to invert the right operand
    :return: `out`
    """

    q2 = quaternion_tools.quaternion_components_of(orientation2, 'multiply')
    q1 = quaternion_tools.quaternion_components_of(orientation1, 'multiply')

    qx, qy, qz, qs = quaternion_tools.multiply_components(*q1, invert_first, *q2, invert_second)

    if out is None:
        out = YawPitchRoll()

    out.set_quaternion(qx, qy, qz, qs)

    return out


def multiply_invert_left(orientation1: Orientation3D, orientation2: Orientation3D,
                         out: Orientation3D | None = None) -> Orientation3D:
    return multiply(orientation1, orientation2, out, invert_first=True)


def multiply_invert_right(orientation1: Orientation3D, orientation2: Orientation3D,
                          out: Orientation3D | None = None) -> Orientation3D:
    return multiply(orientation1, orientation2, out, invert_second=True)


def multiply_invert_both(orientation1: Orientation3D, orientation2: Orientation3D,
                         out: Orientation3D | None = None) -> Orientation3D:
    return multiply(orientation1, orientation2, out, invert_first=True, invert_second=True)


def invert(yaw_pitch_roll: Orientation3D, out: Orientation3D | None = None) -> Orientation3D:
    """
    Stores the inverse of `yaw_pitch_roll` in `out` by way of the conjugated quaternion.
    """

    qx, qy, qz, qs = quaternion_tools.quaternion_components_of(yaw_pitch_roll, 'invert')

    if out is None:
        out = YawPitchRoll()

    out.set_quaternion(-qx, -qy, -qz, qs)

    return out


# ---------------------------------------------------------------------------------------------------------------------
# transformations
# ---------------------------------------------------------------------------------------------------------------------

def _rotate(yaw_pitch_roll: Orientation3D, inverse: bool, x: float, y: float, z: float,
            operation: str) -> VECTOR_COMPONENTS:
    yaw, pitch, roll = _angles(yaw_pitch_roll, operation)

    if contains_nan(yaw, pitch, roll):
        return math.nan, math.nan, math.nan

    if is_angle_zero(yaw) and is_angle_zero(pitch) and is_angle_zero(roll):
        return x, y, z

    m00, m01, m02, m10, m11, m12, m20, m21, m22 = conversions.yaw_pitch_roll_to_matrix(yaw, pitch, roll)

    if inverse:
        return (m00 * x + m10 * y + m20 * z,
                m01 * x + m11 * y + m21 * z,
                m02 * x + m12 * y + m22 * z)

    return (m00 * x + m01 * y + m02 * z,
            m10 * x + m11 * y + m12 * z,
            m20 * x + m21 * y + m22 * z)


def transform(yaw_pitch_roll: YawPitchRoll, vector: ARRAY_LIKE, out: DOUBLE_ARRAY | None = None) -> DOUBLE_ARRAY:
    """
    This function rotates a vector by the yaw-pitch-roll orientation.

    The zero orientation copies the vector and NaN angles give a NaN vector.

        >>> from math import pi
        >>> from rotalgebra.rotations import YawPitchRoll, yaw_pitch_roll_tools
        >>> yaw_pitch_roll_tools.transform(YawPitchRoll(pi/2, 0, 0), [1, 0, 0]).round(12)
        array([0., 1., 0.])

    :param yaw_pitch_roll: the rotation to apply
    :param vector: the length 3 vector to rotate
    :param out: where to store the result (may be `vector`)
    :return: the rotated vector
    """

    x, y, z = _vector_components(vector)

    out = _prepare_output(out, (3,))
    out[:] = _rotate(yaw_pitch_roll, False, x, y, z, 'transform')

    return out


def inverse_transform(yaw_pitch_roll: YawPitchRoll, vector: ARRAY_LIKE,
                      out: DOUBLE_ARRAY | None = None) -> DOUBLE_ARRAY:
    """
    Rotates a vector by the inverse (transpose) of the yaw-pitch-roll orientation.
    """

    x, y, z = _vector_components(vector)

    out = _prepare_output(out, (3,))
    out[:] = _rotate(yaw_pitch_roll, True, x, y, z, 'inverse_transform')

    return out


def add_transform(yaw_pitch_roll: YawPitchRoll, vector: ARRAY_LIKE, out: DOUBLE_ARRAY) -> DOUBLE_ARRAY:
    x, y, z = _vector_components(vector)

    out = _prepare_output(out, (3,))
    out += _rotate(yaw_pitch_roll, False, x, y, z, 'add_transform')

    return out


def sub_transform(yaw_pitch_roll: YawPitchRoll, vector: ARRAY_LIKE, out: DOUBLE_ARRAY) -> DOUBLE_ARRAY:
    x, y, z = _vector_components(vector)

    out = _prepare_output(out, (3,))
    out -= _rotate(yaw_pitch_roll, False, x, y, z, 'sub_transform')

    return out


def _transform_2d(yaw_pitch_roll: YawPitchRoll, vector: ARRAY_LIKE, out: DOUBLE_ARRAY | None,
                  check_if_orientation_2d: bool, sign: float, operation: str) -> DOUBLE_ARRAY:
    x, y = _vector_components(vector, 2)
    yaw, _, _ = _angles(yaw_pitch_roll, operation)

    if check_if_orientation_2d:
        yaw_pitch_roll.check_if_orientation_2d(ZERO_EPS)

    cos_yaw = math.cos(sign * yaw)
    sin_yaw = math.sin(sign * yaw)

    out = _prepare_output(out, (2,))
    out[:] = (cos_yaw * x - sin_yaw * y, sin_yaw * x + cos_yaw * y)

    return out


def transform_2d(yaw_pitch_roll: YawPitchRoll, vector: ARRAY_LIKE, out: DOUBLE_ARRAY | None = None,
                 check_if_orientation_2d: bool = True) -> DOUBLE_ARRAY:
    """
    Rotates a length 2 vector by the yaw angle.

    :raises NotAnOrientation2DError: if `check_if_orientation_2d` is ``True`` and the pitch or roll is not zero
    """

    return _transform_2d(yaw_pitch_roll, vector, out, check_if_orientation_2d, 1.0, 'transform_2d')


def inverse_transform_2d(yaw_pitch_roll: YawPitchRoll, vector: ARRAY_LIKE, out: DOUBLE_ARRAY | None = None,
                         check_if_orientation_2d: bool = True) -> DOUBLE_ARRAY:
    return _transform_2d(yaw_pitch_roll, vector, out, check_if_orientation_2d, -1.0, 'inverse_transform_2d')


def transform_vector4(yaw_pitch_roll: YawPitchRoll, vector: ARRAY_LIKE, out: DOUBLE_ARRAY | None = None,
                      inverse: bool = False) -> DOUBLE_ARRAY:
    """
    Rotates the first 3 components of a length 4 vector.  The last component is copied.
    """

    x, y, z, s = _vector_components(vector, 4)

    out = _prepare_output(out, (4,))
    out[:3] = _rotate(yaw_pitch_roll, inverse, x, y, z, 'transform_vector4')
    out[3] = s

    return out


def transform_matrix(yaw_pitch_roll: YawPitchRoll, matrix: ARRAY_LIKE, out: DOUBLE_ARRAY | None = None,
                     inverse: bool = False) -> DOUBLE_ARRAY:
    r"""
    Computes :math:`\mathbf{R}\mathbf{M}\mathbf{R}^T` (or :math:`\mathbf{R}^T\mathbf{M}\mathbf{R}` when `inverse`)
    for a 3x3 matrix `matrix`.
    """

    m: MATRIX_COMPONENTS = _matrix_components(matrix)  # type: ignore[assignment]
    r = conversions.yaw_pitch_roll_to_matrix(*_angles(yaw_pitch_roll, 'transform_matrix'))

    transformed = rotation_matrix_tools.conjugate_matrix_components(r, m, inverse)

    out = _prepare_output(out, (3, 3))
    out.flat[:] = transformed

    return out


def inverse_transform_matrix(yaw_pitch_roll: YawPitchRoll, matrix: ARRAY_LIKE,
                             out: DOUBLE_ARRAY | None = None) -> DOUBLE_ARRAY:
    return transform_matrix(yaw_pitch_roll, matrix, out, inverse=True)


def transform_rotation_matrix(yaw_pitch_roll: YawPitchRoll, rotation_matrix: RotationMatrix,
                              out: RotationMatrix | None = None) -> RotationMatrix:
    r"""
    Composes the yaw-pitch-roll with a rotation matrix, :math:`\mathbf{R}\mathbf{M}`, into a
    :class:`.RotationMatrix`.
    """

    if out is None:
        out = RotationMatrix()

    return rotation_matrix_tools.multiply(yaw_pitch_roll, rotation_matrix, out)


# ---------------------------------------------------------------------------------------------------------------------
# elementary rotations
# ---------------------------------------------------------------------------------------------------------------------

def _compose_with_elementary(yaw_pitch_roll: Orientation3D, out: Orientation3D | None,
                             elementary: tuple[float, float, float, float], prepend: bool) -> Orientation3D:
    q = quaternion_tools.quaternion_components_of(yaw_pitch_roll, 'elementary rotation')

    if prepend:
        qx, qy, qz, qs = quaternion_tools.multiply_components(*elementary, False, *q, False)
    else:
        qx, qy, qz, qs = quaternion_tools.multiply_components(*q, False, *elementary, False)

    return _write_angles(out, *conversions.quaternion_to_yaw_pitch_roll(qx, qy, qz, qs))


def _yaw_quaternion(yaw: float) -> tuple[float, float, float, float]:
    return 0.0, 0.0, math.sin(0.5 * yaw), math.cos(0.5 * yaw)


def _pitch_quaternion(pitch: float) -> tuple[float, float, float, float]:
    return 0.0, math.sin(0.5 * pitch), 0.0, math.cos(0.5 * pitch)


def _roll_quaternion(roll: float) -> tuple[float, float, float, float]:
    return math.sin(0.5 * roll), 0.0, 0.0, math.cos(0.5 * roll)


def prepend_yaw_rotation(yaw: float, yaw_pitch_roll: YawPitchRoll,
                         out: Orientation3D | None = None) -> Orientation3D:
    r"""
    Computes :math:`\mathbf{R}_z(yaw)\mathbf{R}`, which simply adds `yaw` to the yaw angle.
    """

    original_yaw, pitch, roll = _angles(yaw_pitch_roll, 'prepend_yaw_rotation')

    return _write_angles(out, original_yaw + yaw, pitch, roll)


def append_yaw_rotation(yaw_pitch_roll: YawPitchRoll, yaw: float, out: Orientation3D | None = None) -> Orientation3D:
    r"""
    Computes :math:`\mathbf{R}\mathbf{R}_z(yaw)`.

        >>> from math import pi
        >>> from rotalgebra.rotations import YawPitchRoll, yaw_pitch_roll_tools
        >>> round(yaw_pitch_roll_tools.append_yaw_rotation(YawPitchRoll(), pi/2).yaw, 12)
        1.570796326795
    """

    original_yaw, pitch, roll = _angles(yaw_pitch_roll, 'append_yaw_rotation')

    if is_angle_zero(pitch) and is_angle_zero(roll):
        return _write_angles(out, original_yaw + yaw, pitch, roll)

    return _compose_with_elementary(yaw_pitch_roll, out, _yaw_quaternion(yaw), prepend=False)


def prepend_pitch_rotation(pitch: float, yaw_pitch_roll: YawPitchRoll,
                           out: Orientation3D | None = None) -> Orientation3D:
    r"""
    Computes :math:`\mathbf{R}_y(pitch)\mathbf{R}`.
    """

    yaw, original_pitch, roll = _angles(yaw_pitch_roll, 'prepend_pitch_rotation')
    new_pitch = original_pitch + pitch

    if is_angle_zero(yaw) and abs(new_pitch) <= HALF_PI:
        return _write_angles(out, yaw, new_pitch, roll)

    return _compose_with_elementary(yaw_pitch_roll, out, _pitch_quaternion(pitch), prepend=True)


def append_pitch_rotation(yaw_pitch_roll: YawPitchRoll, pitch: float,
                          out: Orientation3D | None = None) -> Orientation3D:
    r"""
    Computes :math:`\mathbf{R}\mathbf{R}_y(pitch)`.
    """

    yaw, original_pitch, roll = _angles(yaw_pitch_roll, 'append_pitch_rotation')
    new_pitch = original_pitch + pitch

    if is_angle_zero(roll) and abs(new_pitch) <= HALF_PI:
        return _write_angles(out, yaw, new_pitch, roll)

    return _compose_with_elementary(yaw_pitch_roll, out, _pitch_quaternion(pitch), prepend=False)


def prepend_roll_rotation(roll: float, yaw_pitch_roll: YawPitchRoll,
                          out: Orientation3D | None = None) -> Orientation3D:
    r"""
    Computes :math:`\mathbf{R}_x(roll)\mathbf{R}`.
    """

    yaw, pitch, original_roll = _angles(yaw_pitch_roll, 'prepend_roll_rotation')

    if is_angle_zero(yaw) and is_angle_zero(pitch):
        return _write_angles(out, yaw, pitch, original_roll + roll)

    return _compose_with_elementary(yaw_pitch_roll, out, _roll_quaternion(roll), prepend=True)


def append_roll_rotation(yaw_pitch_roll: YawPitchRoll, roll: float, out: Orientation3D | None = None) -> Orientation3D:
    r"""
    Computes :math:`\mathbf{R}\mathbf{R}_x(roll)`, which simply adds `roll` to the roll angle.
    """

    yaw, pitch, original_roll = _angles(yaw_pitch_roll, 'append_roll_rotation')

    return _write_angles(out, yaw, pitch, original_roll + roll)


# ---------------------------------------------------------------------------------------------------------------------
# distance
# ---------------------------------------------------------------------------------------------------------------------

def distance(yaw_pitch_roll: YawPitchRoll, other: Orientation3D, limit_to_pi: bool = False) -> float:
    r"""
    Returns the angle of the rotation between `yaw_pitch_roll` and `other`.

    The quaternion of the yaw-pitch-roll is computed inline and the geodesic angle of the relative quaternion is
    returned, in :math:`[0, 2\pi]` or folded into :math:`[0, \pi]` when `limit_to_pi` is ``True``.  A rotation matrix
    operand uses the matrix distance instead.  NaN angles give NaN.
    """

    if isinstance(other, RotationMatrix):
        return rotation_matrix_tools.distance(yaw_pitch_roll, other, limit_to_pi)

    q1 = conversions.yaw_pitch_roll_to_quaternion(*_angles(yaw_pitch_roll, 'distance'))
    q2 = quaternion_tools.quaternion_components_of(other, 'distance')

    if contains_nan(*q1, *q2):
        return math.nan

    gamma = quaternion_tools.relative_angle(*q1, *q2)

    if limit_to_pi and gamma > math.pi:
        gamma = 2.0 * math.pi - gamma

    return abs(gamma)
