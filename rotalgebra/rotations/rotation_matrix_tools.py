r"""
Rotation matrix algebra.

This module implements the operations of the rotation algebra for :class:`.RotationMatrix` orientations (and, where it
makes sense, plain 3x3 numpy arrays).  Everything is written out on the 9 matrix coefficients so that the output can
be the same object as any of the inputs.

Operands of another representation are converted to their matrix coefficients through
:meth:`.Orientation3D.matrix_components`.  Composing with a rotation matrix is therefore always exact up to the
conversion of the other operand.

The composition convention is the usual one: ``multiply(a, b)`` gives :math:`\mathbf{R}_a\mathbf{R}_b`, so that the
vector is first rotated by ``b`` and then by ``a``.
"""

import math

import numpy as np

from rotalgebra._typing import ARRAY_LIKE, DOUBLE_ARRAY, MATRIX_COMPONENTS
from rotalgebra.exceptions import NotAMatrix2DError, UnsupportedOrientationError

from rotalgebra.rotations.core import conversions
from rotalgebra.rotations.core._helpers import _matrix_components, _prepare_output, _vector_components
from rotalgebra.rotations.core.scalar_math import contains_nan
from rotalgebra.rotations.orientations import Orientation3D, RotationMatrix, ZERO_EPS


__all__ = ['multiply', 'multiply_transpose_left', 'multiply_transpose_right', 'multiply_transpose_both',
           'invert', 'transform', 'inverse_transform', 'add_transform', 'sub_transform', 'transform_2d',
           'transform_vector4', 'transform_matrix', 'inverse_transform_matrix', 'conjugate_matrix_components',
           'check_if_matrix_2d', 'is_matrix_2d',
           'prepend_yaw_rotation', 'append_yaw_rotation', 'prepend_pitch_rotation', 'append_pitch_rotation',
           'prepend_roll_rotation', 'append_roll_rotation',
           'apply_yaw_rotation', 'apply_pitch_rotation', 'apply_roll_rotation',
           'interpolate', 'angle', 'distance', 'finite_difference', 'integrate']


MatrixLike = Orientation3D | DOUBLE_ARRAY


def _coefficients(matrix: MatrixLike | ARRAY_LIKE, operation: str) -> MATRIX_COMPONENTS:
    if isinstance(matrix, Orientation3D):
        return matrix.matrix_components()

    if isinstance(matrix, (np.ndarray, list, tuple)):
        return _matrix_components(matrix)  # type: ignore[return-value]

    raise UnsupportedOrientationError(operation, matrix)


def _write_matrix(out, m: MATRIX_COMPONENTS):
    """
    Writes the coefficients `m` into `out`, which is either a numpy array or an orientation.
    """

    if isinstance(out, RotationMatrix):
        out.set_components(*m)
    elif isinstance(out, Orientation3D):
        out.set_quaternion(*conversions.matrix_to_quaternion(*m))
    else:
        out[...] = np.reshape(m, (3, 3))

    return out


def _new_output_like(matrix):
    if isinstance(matrix, Orientation3D):
        return RotationMatrix()
    return np.zeros((3, 3), dtype=np.float64)


def _multiply_coefficients(a: MATRIX_COMPONENTS, transpose_a: bool,
                           b: MATRIX_COMPONENTS, transpose_b: bool) -> MATRIX_COMPONENTS:
    a00, a01, a02, a10, a11, a12, a20, a21, a22 = a
    b00, b01, b02, b10, b11, b12, b20, b21, b22 = b

    if transpose_a:
        a01, a10 = a10, a01
        a02, a20 = a20, a02
        a12, a21 = a21, a12

    if transpose_b:
        b01, b10 = b10, b01
        b02, b20 = b20, b02
        b12, b21 = b21, b12

    return (a00 * b00 + a01 * b10 + a02 * b20,
            a00 * b01 + a01 * b11 + a02 * b21,
            a00 * b02 + a01 * b12 + a02 * b22,
            a10 * b00 + a11 * b10 + a12 * b20,
            a10 * b01 + a11 * b11 + a12 * b21,
            a10 * b02 + a11 * b12 + a12 * b22,
            a20 * b00 + a21 * b10 + a22 * b20,
            a20 * b01 + a21 * b11 + a22 * b21,
            a20 * b02 + a21 * b12 + a22 * b22)


# ---------------------------------------------------------------------------------------------------------------------
# composition
# ---------------------------------------------------------------------------------------------------------------------

def multiply(orientation1: MatrixLike, orientation2: MatrixLike, out=None,
             transpose_first: bool = False, transpose_second: bool = False):
    r"""
    Computes :math:`\mathbf{R}_1\mathbf{R}_2`, optionally transposing (inverting) either operand first.

    Both operands may be any orientation type (or a 3x3 array).  The result is written into `out` which may be the
    same object as either operand.  If `out` is ``None`` a new :class:`.RotationMatrix` (or a new array when the first
    operand is an array) is returned.

    :param orientation1: the first (left) operand
    :param orientation2: the second (right) operand
    :param out: where to store the product
    :param transpose_first: whether to use the inverse of the first operand
    :param transpose_second: whether to use the inverse of the second operand
    :return: `out`
    """

    a = _coefficients(orientation1, 'multiply')
    b = _coefficients(orientation2, 'multiply')

    if out is None:
        out = _new_output_like(orientation1)

    return _write_matrix(out, _multiply_coefficients(a, transpose_first, b, transpose_second))


def multiply_transpose_left(orientation1: MatrixLike, orientation2: MatrixLike, out=None):
    return multiply(orientation1, orientation2, out, transpose_first=True)


def multiply_transpose_right(orientation1: MatrixLike, orientation2: MatrixLike, out=None):
    return multiply(orientation1, orientation2, out, transpose_second=True)


def multiply_transpose_both(orientation1: MatrixLike, orientation2: MatrixLike, out=None):
    return multiply(orientation1, orientation2, out, transpose_first=True, transpose_second=True)


def invert(matrix: MatrixLike, out=None):
    """
    Stores the transpose of `matrix` in `out` (a new :class:`.RotationMatrix` if ``None``).
    """

    m00, m01, m02, m10, m11, m12, m20, m21, m22 = _coefficients(matrix, 'invert')

    if out is None:
        out = _new_output_like(matrix)

    return _write_matrix(out, (m00, m10, m20, m01, m11, m21, m02, m12, m22))


# ---------------------------------------------------------------------------------------------------------------------
# transformations
# ---------------------------------------------------------------------------------------------------------------------

def _rotate(m: MATRIX_COMPONENTS, inverse: bool, x: float, y: float, z: float) -> tuple[float, float, float]:
    m00, m01, m02, m10, m11, m12, m20, m21, m22 = m

    if inverse:
        return (m00 * x + m10 * y + m20 * z,
                m01 * x + m11 * y + m21 * z,
                m02 * x + m12 * y + m22 * z)

    return (m00 * x + m01 * y + m02 * z,
            m10 * x + m11 * y + m12 * z,
            m20 * x + m21 * y + m22 * z)


def transform(matrix: MatrixLike, vector: ARRAY_LIKE, out: DOUBLE_ARRAY | None = None) -> DOUBLE_ARRAY:
    r"""
    Computes :math:`\mathbf{R}\mathbf{v}`.

    :param matrix: the rotation to apply
    :param vector: the length 3 vector to rotate
    :param out: where to store the result, may be `vector` itself
    :return: the rotated vector
    """

    x, y, z = _vector_components(vector)
    out = _prepare_output(out, (3,))

    out[:] = _rotate(_coefficients(matrix, 'transform'), False, x, y, z)

    return out


def inverse_transform(matrix: MatrixLike, vector: ARRAY_LIKE, out: DOUBLE_ARRAY | None = None) -> DOUBLE_ARRAY:
    r"""
    Computes :math:`\mathbf{R}^T\mathbf{v}`.
    """

    x, y, z = _vector_components(vector)
    out = _prepare_output(out, (3,))

    out[:] = _rotate(_coefficients(matrix, 'inverse_transform'), True, x, y, z)

    return out


def add_transform(matrix: MatrixLike, vector: ARRAY_LIKE, out: DOUBLE_ARRAY) -> DOUBLE_ARRAY:
    """
    Adds the rotated `vector` to `out`.
    """

    x, y, z = _vector_components(vector)
    out = _prepare_output(out, (3,))

    out += _rotate(_coefficients(matrix, 'add_transform'), False, x, y, z)

    return out


def sub_transform(matrix: MatrixLike, vector: ARRAY_LIKE, out: DOUBLE_ARRAY) -> DOUBLE_ARRAY:
    """
    Subtracts the rotated `vector` from `out`.
    """

    x, y, z = _vector_components(vector)
    out = _prepare_output(out, (3,))

    out -= _rotate(_coefficients(matrix, 'sub_transform'), False, x, y, z)

    return out


def is_matrix_2d(matrix: MatrixLike, epsilon: float = ZERO_EPS) -> bool:
    """
    Checks that the matrix only acts in the XY plane, that is, it is of the form ``[[a, b, 0], [c, d, 0], [0, 0, 1]]``
    to within `epsilon`.
    """

    _, _, m02, _, _, m12, m20, m21, m22 = _coefficients(matrix, 'is_matrix_2d')

    return (abs(m02) <= epsilon and abs(m12) <= epsilon and abs(m20) <= epsilon and abs(m21) <= epsilon and
            abs(m22 - 1.0) <= epsilon)


def check_if_matrix_2d(matrix: MatrixLike, epsilon: float = ZERO_EPS) -> None:
    """
    Raises :class:`.NotAMatrix2DError` if the matrix does not only act in the XY plane.
    """

    if not is_matrix_2d(matrix, epsilon):
        raise NotAMatrix2DError(matrix, epsilon)


def transform_2d(matrix: MatrixLike, vector: ARRAY_LIKE, out: DOUBLE_ARRAY | None = None,
                 check_if_orientation_2d: bool = True, inverse: bool = False) -> DOUBLE_ARRAY:
    """
    Rotates a length 2 vector by the upper left 2x2 block of the matrix.

    When `check_if_orientation_2d` is ``True`` the matrix is first checked to only act in the XY plane.  Orientation
    inputs raise :class:`.NotAnOrientation2DError` and plain arrays raise :class:`.NotAMatrix2DError`.
    """

    x, y = _vector_components(vector, 2)

    if check_if_orientation_2d:
        if isinstance(matrix, Orientation3D):
            matrix.check_if_orientation_2d()
        else:
            check_if_matrix_2d(matrix)

    m00, m01, _, m10, m11, _, _, _, _ = _coefficients(matrix, 'transform_2d')

    if inverse:
        m01, m10 = m10, m01

    out = _prepare_output(out, (2,))
    out[:] = (m00 * x + m01 * y, m10 * x + m11 * y)

    return out


def transform_vector4(matrix: MatrixLike, vector: ARRAY_LIKE, out: DOUBLE_ARRAY | None = None,
                      inverse: bool = False) -> DOUBLE_ARRAY:
    """
    Rotates the first 3 components of a length 4 vector, the last component is copied as is.
    """

    x, y, z, s = _vector_components(vector, 4)
    out = _prepare_output(out, (4,))

    out[:3] = _rotate(_coefficients(matrix, 'transform_vector4'), inverse, x, y, z)
    out[3] = s

    return out


def conjugate_matrix_components(r: MATRIX_COMPONENTS, m: MATRIX_COMPONENTS, inverse: bool = False) -> MATRIX_COMPONENTS:
    r"""
    Returns the coefficients of :math:`\mathbf{R}\mathbf{M}\mathbf{R}^T` (or :math:`\mathbf{R}^T\mathbf{M}\mathbf{R}`
    when `inverse` is ``True``) where `r` are the rotation coefficients and `m` are the matrix coefficients.
    """

    rm = _multiply_coefficients(r, inverse, m, False)
    return _multiply_coefficients(rm, False, r, not inverse)


def transform_matrix(matrix: MatrixLike, matrix_original: ARRAY_LIKE | MatrixLike,
                     out: DOUBLE_ARRAY | None = None) -> DOUBLE_ARRAY:
    r"""
    Re-expresses a 3x3 matrix in the rotated frame: :math:`\mathbf{R}\mathbf{M}\mathbf{R}^T`.

    :param matrix: the rotation
    :param matrix_original: the 3x3 matrix to transform
    :param out: where to store the result, may be `matrix_original` itself
    :return: the transformed matrix as a 3x3 array
    """

    m = _coefficients(matrix_original, 'transform_matrix')
    r = _coefficients(matrix, 'transform_matrix')

    out = _prepare_output(out, (3, 3))

    return _write_matrix(out, conjugate_matrix_components(r, m))


def inverse_transform_matrix(matrix: MatrixLike, matrix_original: ARRAY_LIKE | MatrixLike,
                             out: DOUBLE_ARRAY | None = None) -> DOUBLE_ARRAY:
    r"""
    Computes :math:`\mathbf{R}^T\mathbf{M}\mathbf{R}`.
    """

    m = _coefficients(matrix_original, 'inverse_transform_matrix')
    r = _coefficients(matrix, 'inverse_transform_matrix')

    out = _prepare_output(out, (3, 3))

    return _write_matrix(out, conjugate_matrix_components(r, m, inverse=True))


# ---------------------------------------------------------------------------------------------------------------------
# elementary rotations
# ---------------------------------------------------------------------------------------------------------------------

def prepend_yaw_rotation(yaw: float, matrix: MatrixLike, out=None):
    r"""
    Computes :math:`\mathbf{R}_z(yaw)\mathbf{M}`.
    """

    m00, m01, m02, m10, m11, m12, m20, m21, m22 = _coefficients(matrix, 'prepend_yaw_rotation')

    c = math.cos(yaw)
    s = math.sin(yaw)

    if out is None:
        out = _new_output_like(matrix)

    return _write_matrix(out, (c * m00 - s * m10, c * m01 - s * m11, c * m02 - s * m12,
                               s * m00 + c * m10, s * m01 + c * m11, s * m02 + c * m12,
                               m20, m21, m22))


def append_yaw_rotation(matrix: MatrixLike, yaw: float, out=None):
    r"""
    Computes :math:`\mathbf{M}\mathbf{R}_z(yaw)`.
    """

    m00, m01, m02, m10, m11, m12, m20, m21, m22 = _coefficients(matrix, 'append_yaw_rotation')

    c = math.cos(yaw)
    s = math.sin(yaw)

    if out is None:
        out = _new_output_like(matrix)

    return _write_matrix(out, (c * m00 + s * m01, -s * m00 + c * m01, m02,
                               c * m10 + s * m11, -s * m10 + c * m11, m12,
                               c * m20 + s * m21, -s * m20 + c * m21, m22))


def prepend_pitch_rotation(pitch: float, matrix: MatrixLike, out=None):
    r"""
    Computes :math:`\mathbf{R}_y(pitch)\mathbf{M}`.
    """

    m00, m01, m02, m10, m11, m12, m20, m21, m22 = _coefficients(matrix, 'prepend_pitch_rotation')

    c = math.cos(pitch)
    s = math.sin(pitch)

    if out is None:
        out = _new_output_like(matrix)

    return _write_matrix(out, (c * m00 + s * m20, c * m01 + s * m21, c * m02 + s * m22,
                               m10, m11, m12,
                               -s * m00 + c * m20, -s * m01 + c * m21, -s * m02 + c * m22))


def append_pitch_rotation(matrix: MatrixLike, pitch: float, out=None):
    r"""
    Computes :math:`\mathbf{M}\mathbf{R}_y(pitch)`.
    """

    m00, m01, m02, m10, m11, m12, m20, m21, m22 = _coefficients(matrix, 'append_pitch_rotation')

    c = math.cos(pitch)
    s = math.sin(pitch)

    if out is None:
        out = _new_output_like(matrix)

    return _write_matrix(out, (c * m00 - s * m02, m01, s * m00 + c * m02,
                               c * m10 - s * m12, m11, s * m10 + c * m12,
                               c * m20 - s * m22, m21, s * m20 + c * m22))


def prepend_roll_rotation(roll: float, matrix: MatrixLike, out=None):
    r"""
    Computes :math:`\mathbf{R}_x(roll)\mathbf{M}`.
    """

    m00, m01, m02, m10, m11, m12, m20, m21, m22 = _coefficients(matrix, 'prepend_roll_rotation')

    c = math.cos(roll)
    s = math.sin(roll)

    if out is None:
        out = _new_output_like(matrix)

    return _write_matrix(out, (m00, m01, m02,
                               c * m10 - s * m20, c * m11 - s * m21, c * m12 - s * m22,
                               s * m10 + c * m20, s * m11 + c * m21, s * m12 + c * m22))


def append_roll_rotation(matrix: MatrixLike, roll: float, out=None):
    r"""
    Computes :math:`\mathbf{M}\mathbf{R}_x(roll)`.
    """

    m00, m01, m02, m10, m11, m12, m20, m21, m22 = _coefficients(matrix, 'append_roll_rotation')

    c = math.cos(roll)
    s = math.sin(roll)

    if out is None:
        out = _new_output_like(matrix)

    return _write_matrix(out, (m00, c * m01 + s * m02, -s * m01 + c * m02,
                               m10, c * m11 + s * m12, -s * m11 + c * m12,
                               m20, c * m21 + s * m22, -s * m21 + c * m22))


def apply_yaw_rotation(yaw: float, vector: ARRAY_LIKE, out: DOUBLE_ARRAY | None = None) -> DOUBLE_ARRAY:
    """
    Rotates a length 2 or length 3 vector about the z axis by `yaw`.
    """

    components = _vector_components(vector, np.size(vector))

    if len(components) not in (2, 3):
        raise ValueError('The vector must have a length of 2 or 3')

    x, y = components[:2]

    c = math.cos(yaw)
    s = math.sin(yaw)

    out = _prepare_output(out, (len(components),))

    out[:2] = (c * x - s * y, s * x + c * y)
    if len(components) == 3:
        out[2] = components[2]

    return out


def apply_pitch_rotation(pitch: float, vector: ARRAY_LIKE, out: DOUBLE_ARRAY | None = None) -> DOUBLE_ARRAY:
    """
    Rotates a length 3 vector about the y axis by `pitch`.
    """

    x, y, z = _vector_components(vector)

    c = math.cos(pitch)
    s = math.sin(pitch)

    out = _prepare_output(out, (3,))
    out[:] = (c * x + s * z, y, -s * x + c * z)

    return out


def apply_roll_rotation(roll: float, vector: ARRAY_LIKE, out: DOUBLE_ARRAY | None = None) -> DOUBLE_ARRAY:
    """
    Rotates a length 3 vector about the x axis by `roll`.
    """

    x, y, z = _vector_components(vector)

    c = math.cos(roll)
    s = math.sin(roll)

    out = _prepare_output(out, (3,))
    out[:] = (x, c * y - s * z, s * y + c * z)

    return out


# ---------------------------------------------------------------------------------------------------------------------
# interpolation, distances and rates
# ---------------------------------------------------------------------------------------------------------------------

def interpolate(r0: MatrixLike, rf: MatrixLike, alpha: float, out=None):
    r"""
    Interpolates between two rotations at constant angular rate.

    The relative rotation :math:`\mathbf{R}_0^T\mathbf{R}_f` is converted into a rotation vector, scaled by `alpha`,
    and applied on the right of :math:`\mathbf{R}_0`.  `alpha` is not clamped so it can also be used to extrapolate.

    :param r0: the rotation at ``alpha = 0``
    :param rf: the rotation at ``alpha = 1``
    :param alpha: the interpolation fraction
    :param out: where to store the result, may be `r0` or `rf`
    :return: `out`
    """

    start = _coefficients(r0, 'interpolate')
    relative = _multiply_coefficients(start, True, _coefficients(rf, 'interpolate'), False)

    rx, ry, rz = conversions.matrix_to_rotation_vector(*relative)

    delta = conversions.rotation_vector_to_matrix(alpha * rx, alpha * ry, alpha * rz)

    if out is None:
        out = _new_output_like(r0)

    return _write_matrix(out, _multiply_coefficients(start, False, delta, False))


def angle(matrix: MatrixLike) -> float:
    r"""
    Returns the angle between `matrix` and the identity, in :math:`[0, \pi]`.
    """

    return conversions.matrix_angle(*_coefficients(matrix, 'angle'))


def distance(matrix: MatrixLike, other: MatrixLike, limit_to_pi: bool = False) -> float:
    r"""
    Returns the angle of the smallest rotation taking `other` onto `matrix`.

    This is the angle of :math:`\mathbf{R}_a\mathbf{R}_b^T`, which is always in :math:`[0, \pi]` so `limit_to_pi`
    has no effect and is only accepted for symmetry with the other algebra modules.
    """

    a = _coefficients(matrix, 'distance')
    b = _coefficients(other, 'distance')

    if contains_nan(*a, *b):
        return math.nan

    return conversions.matrix_angle(*_multiply_coefficients(a, False, b, True))


def finite_difference(previous: MatrixLike, current: MatrixLike, dt: float,
                      out: DOUBLE_ARRAY | None = None) -> DOUBLE_ARRAY:
    r"""
    Computes the angular velocity, expressed in the local frame, that takes `previous` to `current` in `dt`.

    .. math::
        \boldsymbol{\omega}=\frac{\log\left(\mathbf{R}_p^T\mathbf{R}_c\right)}{\Delta t}

    where :math:`\log` gives the rotation vector of a rotation matrix.

    :return: the angular velocity as a length 3 array
    """

    relative = _multiply_coefficients(_coefficients(previous, 'finite_difference'), True,
                                      _coefficients(current, 'finite_difference'), False)

    rx, ry, rz = conversions.matrix_to_rotation_vector(*relative)

    out = _prepare_output(out, (3,))
    out[:] = (rx / dt, ry / dt, rz / dt)

    return out


def integrate(previous: MatrixLike, angular_velocity: ARRAY_LIKE, dt: float, out=None):
    r"""
    Applies the local frame `angular_velocity` to `previous` for `dt`: :math:`\mathbf{R}_p\exp(\boldsymbol{\omega}\Delta t)`.

    This is the inverse of :func:`finite_difference`.
    """

    wx, wy, wz = _vector_components(angular_velocity)

    delta = conversions.rotation_vector_to_matrix(wx * dt, wy * dt, wz * dt)
    start = _coefficients(previous, 'integrate')

    if out is None:
        out = _new_output_like(previous)

    return _write_matrix(out, _multiply_coefficients(start, False, delta, False))

