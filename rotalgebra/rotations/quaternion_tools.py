r"""
Quaternion algebra.

This module implements the rotation algebra on raw quaternion components.  Quaternions are stored scalar last,
:math:`\mathbf{q}=[q_x, q_y, q_z, q_s]`, and composed with the Hamilton product

.. math::
    \mathbf{q}_1\otimes\mathbf{q}_2=\left[\begin{array}{c}q_{s1}\mathbf{q}_{v2} + q_{s2}\mathbf{q}_{v1} +
    \mathbf{q}_{v1}\times\mathbf{q}_{v2}\\
    q_{s1}q_{s2}-\mathbf{q}_{v1}^T\mathbf{q}_{v2}\end{array}\right]

so that ``multiply(q_b_to_c, q_a_to_b)`` gives ``q_a_to_c``.

Operands of any other representation are promoted to quaternion components through
:meth:`.Orientation3D.quaternion_components`; no intermediate orientation object is created.  Conjugating a quaternion
(negating its vector part) is used in place of inverting it, which is only correct for unit quaternions.

The matrix conjugation kernel :func:`transform_matrix_components` is also used by the axis-angle module.
"""

import math

from datetime import datetime

import numpy as np
import pandas as pd

from rotalgebra._typing import ARRAY_LIKE, DOUBLE_ARRAY, DatetimeLike, MATRIX_COMPONENTS, QUATERNION_COMPONENTS
from rotalgebra.exceptions import UnsupportedOrientationError

from rotalgebra.rotations import rotation_matrix_tools
from rotalgebra.rotations.core._helpers import _matrix_components, _prepare_output, _vector_components
from rotalgebra.rotations.core.scalar_math import EPS, norm, fast_norm, contains_nan
from rotalgebra.rotations.orientations import Orientation3D, Quaternion, RotationMatrix, ZERO_EPS


__all__ = ['multiply', 'multiply_conjugate_left', 'multiply_conjugate_right', 'multiply_conjugate_both',
           'multiply_vector4', 'invert',
           'transform', 'inverse_transform', 'add_transform', 'sub_transform', 'transform_2d', 'inverse_transform_2d',
           'transform_vector4', 'inverse_transform_vector4', 'transform_matrix', 'inverse_transform_matrix',
           'transform_matrix_components', 'transform_rotation_matrix', 'inverse_transform_rotation_matrix',
           'prepend_yaw_rotation', 'append_yaw_rotation', 'prepend_pitch_rotation', 'append_pitch_rotation',
           'prepend_roll_rotation', 'append_roll_rotation',
           'distance_precise', 'distance', 'angle', 'is_neutral_quaternion', 'nlerp', 'slerp']


def quaternion_components_of(orientation: Orientation3D, operation: str = 'quaternion algebra') -> QUATERNION_COMPONENTS:
    """
    Returns the quaternion components of any orientation, raising :class:`.UnsupportedOrientationError` for anything
    else.
    """

    if isinstance(orientation, Orientation3D):
        return orientation.quaternion_components()

    raise UnsupportedOrientationError(operation, orientation)


def _write_quaternion(out: Orientation3D, qx: float, qy: float, qz: float, qs: float, unsafe: bool = False):
    if unsafe and isinstance(out, Quaternion):
        out.set_unsafe(qx, qy, qz, qs)
    else:
        out.set_quaternion(qx, qy, qz, qs)

    return out


def multiply_components(x1: float, y1: float, z1: float, s1: float, conjugate1: bool,
                        x2: float, y2: float, z2: float, s2: float, conjugate2: bool) -> QUATERNION_COMPONENTS:
    """
    The Hamilton product on raw components, conjugating either operand first if requested.
    """

    if conjugate1:
        x1, y1, z1 = -x1, -y1, -z1

    if conjugate2:
        x2, y2, z2 = -x2, -y2, -z2

    x = s1 * x2 + x1 * s2 + y1 * z2 - z1 * y2
    y = s1 * y2 - x1 * z2 + y1 * s2 + z1 * x2
    z = s1 * z2 + x1 * y2 - y1 * x2 + z1 * s2
    s = s1 * s2 - x1 * x2 - y1 * y2 - z1 * z2

    return x, y, z, s


# ---------------------------------------------------------------------------------------------------------------------
# composition
# ---------------------------------------------------------------------------------------------------------------------

def multiply(orientation1: Orientation3D, orientation2: Orientation3D, out: Orientation3D | None = None,
             conjugate_first: bool = False, conjugate_second: bool = False) -> Orientation3D:
    r"""
    This function performs the Hamilton product :math:`\mathbf{q}_1\otimes\mathbf{q}_2`.

    Either operand can be any orientation type; it is promoted to quaternion components first.  Either operand can
    also be conjugated (inverted) before the multiplication.

    The result is stored in `out` through :meth:`.Orientation3D.set_quaternion` so `out` may be of any orientation
    type, and it may be the same object as either operand.  When `out` is ``None`` a new :class:`.Quaternion` is
    created.

    :param orientation1: the left operand
    :param orientation2: the right operand
    :param out: where to store the product
    :param conjugate_first: whether to conjugate the left operand
    :param conjugate_second: whether to conjugate the right operand
    :return: `out`
    """

    x1, y1, z1, s1 = quaternion_components_of(orientation1, 'multiply')
    x2, y2, z2, s2 = quaternion_components_of(orientation2, 'multiply')

    if out is None:
        out = Quaternion()

    return _write_quaternion(out, *multiply_components(x1, y1, z1, s1, conjugate_first,
                                                       x2, y2, z2, s2, conjugate_second))


def multiply_conjugate_left(orientation1: Orientation3D, orientation2: Orientation3D,
                            out: Orientation3D | None = None) -> Orientation3D:
    r"""
    Computes :math:`\mathbf{q}_1^*\otimes\mathbf{q}_2`.
    """

    return multiply(orientation1, orientation2, out, conjugate_first=True)


def multiply_conjugate_right(orientation1: Orientation3D, orientation2: Orientation3D,
                             out: Orientation3D | None = None) -> Orientation3D:
    r"""
    Computes :math:`\mathbf{q}_1\otimes\mathbf{q}_2^*`.
    """

    return multiply(orientation1, orientation2, out, conjugate_second=True)


def multiply_conjugate_both(orientation1: Orientation3D, orientation2: Orientation3D,
                            out: Orientation3D | None = None) -> Orientation3D:
    r"""
    Computes :math:`\mathbf{q}_1^*\otimes\mathbf{q}_2^*`.
    """

    return multiply(orientation1, orientation2, out, conjugate_first=True, conjugate_second=True)


def multiply_vector4(first: Orientation3D | ARRAY_LIKE, second: Orientation3D | ARRAY_LIKE,
                     out: DOUBLE_ARRAY | None = None,
                     conjugate_first: bool = False, conjugate_second: bool = False) -> DOUBLE_ARRAY:
    """
    Hamilton product where one or both operands are length 4 vectors ``(x, y, z, s)`` treated as (not necessarily
    unit) quaternions.  The result is a length 4 array and is not normalized.
    """

    def components(operand) -> QUATERNION_COMPONENTS:
        if isinstance(operand, Orientation3D):
            return operand.quaternion_components()
        return _vector_components(operand, 4)  # type: ignore[return-value]

    x1, y1, z1, s1 = components(first)
    x2, y2, z2, s2 = components(second)

    out = _prepare_output(out, (4,))
    out[:] = multiply_components(x1, y1, z1, s1, conjugate_first, x2, y2, z2, s2, conjugate_second)

    return out


def invert(quaternion: Orientation3D, out: Orientation3D | None = None) -> Orientation3D:
    """
    Stores the conjugate of `quaternion` in `out` (a new :class:`.Quaternion` when ``None``).
    """

    qx, qy, qz, qs = quaternion_components_of(quaternion, 'invert')

    if out is None:
        out = Quaternion()

    return _write_quaternion(out, -qx, -qy, -qz, qs, unsafe=True)


# ---------------------------------------------------------------------------------------------------------------------
# transformations
# ---------------------------------------------------------------------------------------------------------------------

def _normalized(qx: float, qy: float, qz: float, qs: float) -> QUATERNION_COMPONENTS | None:
    quaternion_norm = norm(qx, qy, qz, qs)

    if quaternion_norm < EPS:
        return None

    quaternion_norm = 1.0 / quaternion_norm

    return qx * quaternion_norm, qy * quaternion_norm, qz * quaternion_norm, qs * quaternion_norm


def _rotate(quaternion: Orientation3D, conjugate: bool,
            x: float, y: float, z: float, operation: str) -> tuple[float, float, float]:
    r"""
    Rotates ``(x, y, z)`` with :math:`\mathbf{v}'=\mathbf{v}+2q_s(\mathbf{u}\times\mathbf{v})+
    2\mathbf{u}\times(\mathbf{u}\times\mathbf{v})`.  A degenerate quaternion leaves the vector unchanged.
    """

    normalized = _normalized(*quaternion_components_of(quaternion, operation))

    if normalized is None:
        return x, y, z

    qx, qy, qz, qs = normalized

    if conjugate:
        qx, qy, qz = -qx, -qy, -qz

    cross_x = 2.0 * (qy * z - qz * y)
    cross_y = 2.0 * (qz * x - qx * z)
    cross_z = 2.0 * (qx * y - qy * x)

    cross_cross_x = qy * cross_z - qz * cross_y
    cross_cross_y = qz * cross_x - qx * cross_z
    cross_cross_z = qx * cross_y - qy * cross_x

    return (x + qs * cross_x + cross_cross_x,
            y + qs * cross_y + cross_cross_y,
            z + qs * cross_z + cross_cross_z)


def transform(quaternion: Orientation3D, vector: ARRAY_LIKE, out: DOUBLE_ARRAY | None = None) -> DOUBLE_ARRAY:
    r"""
    This function rotates a vector by a quaternion.

    The quaternion is normalized first.  If its norm is smaller than ``1e-12`` the vector is returned unchanged.

    .. math::
        \mathbf{v}'=\mathbf{v}+2q_s(\mathbf{q}_v\times\mathbf{v})+2\mathbf{q}_v\times(\mathbf{q}_v\times\mathbf{v})

    :param quaternion: the rotation to apply
    :param vector: the length 3 vector to rotate
    :param out: where to store the result (may be `vector`).  A new array is created when ``None``.
    :return: the rotated vector
    """

    x, y, z = _vector_components(vector)
    out = _prepare_output(out, (3,))

    out[:] = _rotate(quaternion, False, x, y, z, 'transform')

    return out


def inverse_transform(quaternion: Orientation3D, vector: ARRAY_LIKE, out: DOUBLE_ARRAY | None = None) -> DOUBLE_ARRAY:
    """
    Rotates a vector by the conjugate of `quaternion`.  See :func:`transform`.
    """

    x, y, z = _vector_components(vector)
    out = _prepare_output(out, (3,))

    out[:] = _rotate(quaternion, True, x, y, z, 'inverse_transform')

    return out


def add_transform(quaternion: Orientation3D, vector: ARRAY_LIKE, out: DOUBLE_ARRAY) -> DOUBLE_ARRAY:
    """
    Rotates `vector` and adds the result to `out`.
    """

    x, y, z = _vector_components(vector)
    out = _prepare_output(out, (3,))

    out += _rotate(quaternion, False, x, y, z, 'add_transform')

    return out


def sub_transform(quaternion: Orientation3D, vector: ARRAY_LIKE, out: DOUBLE_ARRAY) -> DOUBLE_ARRAY:
    """
    Rotates `vector` and subtracts the result from `out`.
    """

    x, y, z = _vector_components(vector)
    out = _prepare_output(out, (3,))

    out -= _rotate(quaternion, False, x, y, z, 'sub_transform')

    return out


def _rotate_2d(quaternion: Orientation3D, conjugate: bool, x: float, y: float,
               check_if_orientation_2d: bool, operation: str) -> tuple[float, float]:
    _, _, qz, qs = quaternion_components_of(quaternion, operation)

    if check_if_orientation_2d:
        quaternion.check_if_orientation_2d(ZERO_EPS)

    # only the rotation about z is used
    half_norm = norm(qz, qs)

    if half_norm < EPS:
        return x, y

    qz /= half_norm
    qs /= half_norm

    if conjugate:
        qz = -qz

    cos_theta = qs * qs - qz * qz
    sin_theta = 2.0 * qs * qz

    return cos_theta * x - sin_theta * y, sin_theta * x + cos_theta * y


def transform_2d(quaternion: Orientation3D, vector: ARRAY_LIKE, out: DOUBLE_ARRAY | None = None,
                 check_if_orientation_2d: bool = True) -> DOUBLE_ARRAY:
    """
    Rotates a length 2 vector by a quaternion that represents a rotation about the z axis.

    :param quaternion: the rotation to apply
    :param vector: the length 2 vector to rotate
    :param out: where to store the result
    :param check_if_orientation_2d: whether to verify that the quaternion only rotates about z
    :return: the rotated vector
    :raises NotAnOrientation2DError: if `check_if_orientation_2d` is ``True`` and the quaternion is not 2D
    """

    x, y = _vector_components(vector, 2)
    rotated = _rotate_2d(quaternion, False, x, y, check_if_orientation_2d, 'transform_2d')

    out = _prepare_output(out, (2,))
    out[:] = rotated

    return out


def inverse_transform_2d(quaternion: Orientation3D, vector: ARRAY_LIKE, out: DOUBLE_ARRAY | None = None,
                         check_if_orientation_2d: bool = True) -> DOUBLE_ARRAY:
    """
    Inverse of :func:`transform_2d`.
    """

    x, y = _vector_components(vector, 2)
    rotated = _rotate_2d(quaternion, True, x, y, check_if_orientation_2d, 'inverse_transform_2d')

    out = _prepare_output(out, (2,))
    out[:] = rotated

    return out


def transform_vector4(quaternion: Orientation3D, vector: ARRAY_LIKE, out: DOUBLE_ARRAY | None = None) -> DOUBLE_ARRAY:
    """
    Rotates the first 3 components of a length 4 vector.  The last component is copied.
    """

    x, y, z, s = _vector_components(vector, 4)
    out = _prepare_output(out, (4,))

    out[:3] = _rotate(quaternion, False, x, y, z, 'transform_vector4')
    out[3] = s

    return out


def inverse_transform_vector4(quaternion: Orientation3D, vector: ARRAY_LIKE,
                              out: DOUBLE_ARRAY | None = None) -> DOUBLE_ARRAY:
    x, y, z, s = _vector_components(vector, 4)
    out = _prepare_output(out, (4,))

    out[:3] = _rotate(quaternion, True, x, y, z, 'inverse_transform_vector4')
    out[3] = s

    return out


def transform_matrix_components(qx: float, qy: float, qz: float, qs: float, matrix: MATRIX_COMPONENTS,
                                conjugate: bool = False) -> MATRIX_COMPONENTS:
    r"""
    This function computes the conjugation :math:`\mathbf{R}(\mathbf{q})\mathbf{M}\mathbf{R}(\mathbf{q})^T` of a 3x3
    matrix by a quaternion, working on raw components.

    The rotation matrix of the quaternion is expanded algebraically into its 9 coefficients :math:`q_{00}..q_{22}`
    and the two matrix products are written out.  The quaternion does not need to be unit length; when its norm is
    smaller than ``1e-12`` the matrix is returned unchanged.  When `conjugate` is ``True`` the conjugate of the
    quaternion is used, which gives :math:`\mathbf{R}^T\mathbf{M}\mathbf{R}`.

    This is the kernel that the axis-angle matrix transformation delegates to.

    :param qx: the x component of the quaternion
    :param qy: the y component of the quaternion
    :param qz: the z component of the quaternion
    :param qs: the scalar component of the quaternion
    :param matrix: the row major coefficients of the matrix to transform
    :param conjugate: whether to apply the inverse rotation
    :return: the row major coefficients of the transformed matrix
    """

    quaternion_norm = fast_norm(qx, qy, qz, qs)

    if quaternion_norm < EPS:
        return matrix

    quaternion_norm = 1.0 / quaternion_norm
    qx *= quaternion_norm
    qy *= quaternion_norm
    qz *= quaternion_norm
    qs *= quaternion_norm

    if conjugate:
        qx, qy, qz = -qx, -qy, -qz

    yy2 = 2.0 * qy * qy
    zz2 = 2.0 * qz * qz
    xx2 = 2.0 * qx * qx
    xy2 = 2.0 * qx * qy
    sz2 = 2.0 * qs * qz
    xz2 = 2.0 * qx * qz
    sy2 = 2.0 * qs * qy
    yz2 = 2.0 * qy * qz
    sx2 = 2.0 * qs * qx

    q00 = 1.0 - yy2 - zz2
    q01 = xy2 - sz2
    q02 = xz2 + sy2
    q10 = xy2 + sz2
    q11 = 1.0 - xx2 - zz2
    q12 = yz2 - sx2
    q20 = xz2 - sy2
    q21 = yz2 + sx2
    q22 = 1.0 - xx2 - yy2

    m00, m01, m02, m10, m11, m12, m20, m21, m22 = matrix

    # q * M
    qm00 = q00 * m00 + q01 * m10 + q02 * m20
    qm01 = q00 * m01 + q01 * m11 + q02 * m21
    qm02 = q00 * m02 + q01 * m12 + q02 * m22
    qm10 = q10 * m00 + q11 * m10 + q12 * m20
    qm11 = q10 * m01 + q11 * m11 + q12 * m21
    qm12 = q10 * m02 + q11 * m12 + q12 * m22
    qm20 = q20 * m00 + q21 * m10 + q22 * m20
    qm21 = q20 * m01 + q21 * m11 + q22 * m21
    qm22 = q20 * m02 + q21 * m12 + q22 * m22

    # (q * M) * q^T
    return (qm00 * q00 + qm01 * q01 + qm02 * q02,
            qm00 * q10 + qm01 * q11 + qm02 * q12,
            qm00 * q20 + qm01 * q21 + qm02 * q22,
            qm10 * q00 + qm11 * q01 + qm12 * q02,
            qm10 * q10 + qm11 * q11 + qm12 * q12,
            qm10 * q20 + qm11 * q21 + qm12 * q22,
            qm20 * q00 + qm21 * q01 + qm22 * q02,
            qm20 * q10 + qm21 * q11 + qm22 * q12,
            qm20 * q20 + qm21 * q21 + qm22 * q22)


def transform_matrix(quaternion: Orientation3D, matrix: ARRAY_LIKE, out: DOUBLE_ARRAY | None = None) -> DOUBLE_ARRAY:
    r"""
    Re-expresses the 3x3 `matrix` in the rotated frame: :math:`\mathbf{R}(\mathbf{q})\mathbf{M}\mathbf{R}(\mathbf{q})^T`.

    :param quaternion: the rotation
    :param matrix: the 3x3 matrix to transform
    :param out: where to store the result (may be `matrix`)
    :return: the transformed matrix
    """

    m = _matrix_components(matrix)
    qx, qy, qz, qs = quaternion_components_of(quaternion, 'transform_matrix')

    out = _prepare_output(out, (3, 3))
    out[...] = np.reshape(transform_matrix_components(qx, qy, qz, qs, m), (3, 3))  # type: ignore[arg-type]

    return out


def inverse_transform_matrix(quaternion: Orientation3D, matrix: ARRAY_LIKE,
                             out: DOUBLE_ARRAY | None = None) -> DOUBLE_ARRAY:
    r"""
    Computes :math:`\mathbf{R}(\mathbf{q})^T\mathbf{M}\mathbf{R}(\mathbf{q})`.
    """

    m = _matrix_components(matrix)
    qx, qy, qz, qs = quaternion_components_of(quaternion, 'inverse_transform_matrix')

    out = _prepare_output(out, (3, 3))
    out[...] = np.reshape(transform_matrix_components(qx, qy, qz, qs, m, conjugate=True),  # type: ignore[arg-type]
                          (3, 3))

    return out


def transform_rotation_matrix(quaternion: Orientation3D, rotation_matrix: RotationMatrix,
                              out: RotationMatrix | None = None) -> RotationMatrix:
    r"""
    Applies the quaternion to a rotation matrix, which is a composition: :math:`\mathbf{R}(\mathbf{q})\mathbf{R}`.
    """

    if out is None:
        out = RotationMatrix()

    return rotation_matrix_tools.multiply(quaternion, rotation_matrix, out)


def inverse_transform_rotation_matrix(quaternion: Orientation3D, rotation_matrix: RotationMatrix,
                                      out: RotationMatrix | None = None) -> RotationMatrix:
    r"""
    Computes :math:`\mathbf{R}(\mathbf{q})^T\mathbf{R}`.
    """

    if out is None:
        out = RotationMatrix()

    return rotation_matrix_tools.multiply(quaternion, rotation_matrix, out, transpose_first=True)


# ---------------------------------------------------------------------------------------------------------------------
# elementary rotations
# ---------------------------------------------------------------------------------------------------------------------

def prepend_yaw_rotation(yaw: float, quaternion: Orientation3D, out: Orientation3D | None = None) -> Orientation3D:
    r"""
    Computes :math:`\mathbf{q}_z(yaw)\otimes\mathbf{q}` where :math:`\mathbf{q}_z(yaw)=[0, 0, \sin(yaw/2),
    \cos(yaw/2)]`.  The result is not normalized.
    """

    qx, qy, qz, qs = quaternion_components_of(quaternion, 'prepend_yaw_rotation')

    half_yaw = 0.5 * yaw
    c = math.cos(half_yaw)
    s = math.sin(half_yaw)

    if out is None:
        out = Quaternion()

    return _write_quaternion(out, c * qx - s * qy, c * qy + s * qx, c * qz + s * qs, c * qs - s * qz, unsafe=True)


def append_yaw_rotation(quaternion: Orientation3D, yaw: float, out: Orientation3D | None = None) -> Orientation3D:
    r"""
    Computes :math:`\mathbf{q}\otimes\mathbf{q}_z(yaw)`.  The result is not normalized.
    """

    qx, qy, qz, qs = quaternion_components_of(quaternion, 'append_yaw_rotation')

    half_yaw = 0.5 * yaw
    c = math.cos(half_yaw)
    s = math.sin(half_yaw)

    if out is None:
        out = Quaternion()

    return _write_quaternion(out, qx * c + qy * s, -qx * s + qy * c, qs * s + qz * c, qs * c - qz * s, unsafe=True)


def prepend_pitch_rotation(pitch: float, quaternion: Orientation3D, out: Orientation3D | None = None) -> Orientation3D:
    r"""
    Computes :math:`\mathbf{q}_y(pitch)\otimes\mathbf{q}`.  The result is not normalized.
    """

    qx, qy, qz, qs = quaternion_components_of(quaternion, 'prepend_pitch_rotation')

    half_pitch = 0.5 * pitch
    c = math.cos(half_pitch)
    s = math.sin(half_pitch)

    if out is None:
        out = Quaternion()

    return _write_quaternion(out, c * qx + s * qz, c * qy + s * qs, c * qz - s * qx, c * qs - s * qy, unsafe=True)


def append_pitch_rotation(quaternion: Orientation3D, pitch: float, out: Orientation3D | None = None) -> Orientation3D:
    r"""
    Computes :math:`\mathbf{q}\otimes\mathbf{q}_y(pitch)`.  The result is not normalized.
    """

    qx, qy, qz, qs = quaternion_components_of(quaternion, 'append_pitch_rotation')

    half_pitch = 0.5 * pitch
    c = math.cos(half_pitch)
    s = math.sin(half_pitch)

    if out is None:
        out = Quaternion()

    return _write_quaternion(out, qx * c - qz * s, qs * s + qy * c, qx * s + qz * c, qs * c - qy * s, unsafe=True)


def prepend_roll_rotation(roll: float, quaternion: Orientation3D, out: Orientation3D | None = None) -> Orientation3D:
    r"""
    Computes :math:`\mathbf{q}_x(roll)\otimes\mathbf{q}`.  The result is not normalized.
    """

    qx, qy, qz, qs = quaternion_components_of(quaternion, 'prepend_roll_rotation')

    half_roll = 0.5 * roll
    c = math.cos(half_roll)
    s = math.sin(half_roll)

    if out is None:
        out = Quaternion()

    return _write_quaternion(out, c * qx + s * qs, c * qy - s * qz, c * qz + s * qy, c * qs - s * qx, unsafe=True)


def append_roll_rotation(quaternion: Orientation3D, roll: float, out: Orientation3D | None = None) -> Orientation3D:
    r"""
    Computes :math:`\mathbf{q}\otimes\mathbf{q}_x(roll)`.  The result is not normalized.
    """

    qx, qy, qz, qs = quaternion_components_of(quaternion, 'append_roll_rotation')

    half_roll = 0.5 * roll
    c = math.cos(half_roll)
    s = math.sin(half_roll)

    if out is None:
        out = Quaternion()

    return _write_quaternion(out, qs * s + qx * c, qy * c + qz * s, -qy * s + qz * c, qs * c - qx * s, unsafe=True)


# ---------------------------------------------------------------------------------------------------------------------
# distances
# ---------------------------------------------------------------------------------------------------------------------

def relative_angle(x1: float, y1: float, z1: float, s1: float,
                   x2: float, y2: float, z2: float, s2: float) -> float:
    r"""
    Returns the geodesic angle :math:`2\text{atan2}(\|\mathbf{r}_v\|, r_s)` of
    :math:`\mathbf{r}=\mathbf{q}_1^*\otimes\mathbf{q}_2`, in :math:`[0, 2\pi]`.
    """

    x = s1 * x2 - x1 * s2 - y1 * z2 + z1 * y2
    y = s1 * y2 + x1 * z2 - y1 * s2 - z1 * x2
    z = s1 * z2 - x1 * y2 + y1 * x2 - z1 * s2
    s = s1 * s2 + x1 * x2 + y1 * y2 + z1 * z2

    return 2.0 * math.atan2(norm(x, y, z), s)


def distance_precise(quaternion1: Orientation3D, quaternion2: Orientation3D) -> float:
    r"""
    This function computes the angle of the relative rotation between two quaternions.

    The relative quaternion :math:`\mathbf{r}=\mathbf{q}_1^*\otimes\mathbf{q}_2` is formed and the angle
    :math:`2\text{atan2}(\|\mathbf{r}_v\|, r_s)` is returned.  Using ``atan2`` instead of ``acos`` keeps full precision
    for small angles.  The result lies in :math:`[0, 2\pi]`.

        >>> from math import sin, cos, pi
        >>> from rotalgebra.rotations import Quaternion, quaternion_tools
        >>> round(quaternion_tools.distance_precise(Quaternion(), Quaternion(0, 0, sin(pi/4), cos(pi/4))), 12)
        1.570796326795

    :param quaternion1: the first quaternion
    :param quaternion2: the second quaternion
    :return: the angle between the quaternions in radians
    """

    return relative_angle(*quaternion_components_of(quaternion1, 'distance_precise'),
                          *quaternion_components_of(quaternion2, 'distance_precise'))


def _fold(gamma: float, limit_to_pi: bool) -> float:
    if limit_to_pi and gamma > math.pi:
        gamma = 2.0 * math.pi - gamma

    return abs(gamma)


def distance(quaternion: Orientation3D, other: Orientation3D, limit_to_pi: bool = False) -> float:
    r"""
    Returns the angle of the rotation between `quaternion` and `other` (any orientation type).

    For a rotation matrix operand the matrix distance is used, which is in :math:`[0, \pi]`.  Otherwise the result is
    in :math:`[0, 2\pi]`, or in :math:`[0, \pi]` when `limit_to_pi` is ``True``.  NaN components give NaN.
    """

    if isinstance(other, RotationMatrix):
        return rotation_matrix_tools.distance(quaternion, other, limit_to_pi)

    q1 = quaternion_components_of(quaternion, 'distance')
    q2 = quaternion_components_of(other, 'distance')

    if contains_nan(*q1, *q2):
        return math.nan

    return _fold(relative_angle(*q1, *q2), limit_to_pi)


def angle(quaternion: Orientation3D, limit_to_pi: bool = False) -> float:
    r"""
    Returns the angle of the rotation from the neutral quaternion, :math:`2\text{atan2}(\|\mathbf{q}_v\|, q_s)`.
    """

    qx, qy, qz, qs = quaternion_components_of(quaternion, 'angle')

    return _fold(2.0 * math.atan2(norm(qx, qy, qz), qs), limit_to_pi)


def is_neutral_quaternion(quaternion: Orientation3D, epsilon: float = ZERO_EPS) -> bool:
    """
    Checks whether the components are ``(0, 0, 0, 1)`` to within `epsilon`.
    """

    qx, qy, qz, qs = quaternion_components_of(quaternion, 'is_neutral_quaternion')

    return abs(qx) <= epsilon and abs(qy) <= epsilon and abs(qz) <= epsilon and abs(qs - 1.0) <= epsilon


# ---------------------------------------------------------------------------------------------------------------------
# interpolation
# ---------------------------------------------------------------------------------------------------------------------

def _to_timestamp(value):
    if isinstance(value, (datetime, np.datetime64, str)):
        return pd.Timestamp(value)
    return value


def interpolation_fraction(time: float | DatetimeLike, time0: float | DatetimeLike = 0,
                           time1: float | DatetimeLike = 1) -> float:
    """
    Returns the fraction of the way `time` is between `time0` and `time1`.

    The times can all be floats, or all be datetime like objects (``datetime``, ``pandas.Timestamp``,
    ``numpy.datetime64`` or ISO strings), which are converted to ``pandas.Timestamp`` first so they can be mixed.
    """

    time = _to_timestamp(time)
    time0 = _to_timestamp(time0)
    time1 = _to_timestamp(time1)

    try:
        return float((time - time0) / (time1 - time0))  # type: ignore
    except TypeError:
        raise TypeError('time, time0, and time1 must support subtraction resulting in a type that supports true '
                        'division. Typically this means they should all be floats or all be DatetimeLike objects')


def nlerp(quaternion0: Orientation3D, quaternion1: Orientation3D, time: float | DatetimeLike,
          time0: float | DatetimeLike = 0, time1: float | DatetimeLike = 1,
          out: Orientation3D | None = None) -> Orientation3D:
    r"""
    This function performs normalized linear interpolation of rotation quaternions.

    NLERP of quaternions involves first performing a linear interpolation between the two vectors, and then normalizing
    the interpolated result to have unit length.  That is:

    .. math::
        \mathbf{q}=\frac{\mathbf{q}_0(1-p)+\mathbf{q}_1p}
        {\left\|\mathbf{q}_0(1-p)+\mathbf{q}_1p\right\|}

    You can either give `time` as the fractional percent :math:`p`, or give `time0` and `time1` as the times of the
    two quaternions and `time` as the actual time.

    .. warning::
        NLERP does not interpolate at a constant angular rate so it is only suited for short intervals.  Use
        :func:`slerp` otherwise.

    :param quaternion0: the starting orientation
    :param quaternion1: the ending orientation
    :param time: the time to interpolate at
    :param time0: the time of `quaternion0`
    :param time1: the time of `quaternion1`
    :param out: where to store the result (a new :class:`.Quaternion` when ``None``)
    :return: `out`
    """

    fraction = interpolation_fraction(time, time0, time1)

    x0, y0, z0, s0 = quaternion_components_of(quaternion0, 'nlerp')
    x1, y1, z1, s1 = quaternion_components_of(quaternion1, 'nlerp')

    if out is None:
        out = Quaternion()

    # set_quaternion normalizes
    return _write_quaternion(out, x0 * (1 - fraction) + x1 * fraction, y0 * (1 - fraction) + y1 * fraction,
                             z0 * (1 - fraction) + z1 * fraction, s0 * (1 - fraction) + s1 * fraction)


def slerp(quaternion0: Orientation3D, quaternion1: Orientation3D, time: float | DatetimeLike,
          time0: float | DatetimeLike = 0, time1: float | DatetimeLike = 1,
          out: Orientation3D | None = None) -> Orientation3D:
    r"""
    This function performs spherical linear interpolation of rotation quaternions.

    SLERP of quaternions involves performing a linear interpolation along the great circle arc connecting the two
    quaternions. That is:

    .. math::
        \omega = \text{cos}^{-1}(\mathbf{q}_0^T\mathbf{q}_1)\\
        \mathbf{q}=\mathbf{q}_0\text{cos}(p\omega)+
        \text{sin}(p\omega)\frac{\mathbf{q}_1-\mathbf{q}_0\text{cos}(\omega)}
        {\left\|\mathbf{q}_1-\mathbf{q}_0\text{cos}(\omega)\right\|}

    The shorter arc is always used.  When the quaternions are very close this falls back to :func:`nlerp`.

    :param quaternion0: the starting orientation
    :param quaternion1: the ending orientation
    :param time: the time to interpolate at
    :param time0: the time of `quaternion0`
    :param time1: the time of `quaternion1`
    :param out: where to store the result (a new :class:`.Quaternion` when ``None``)
    :return: `out`
    """

    fraction = interpolation_fraction(time, time0, time1)

    start = _normalized(*quaternion_components_of(quaternion0, 'slerp')) or (0.0, 0.0, 0.0, 1.0)
    end = _normalized(*quaternion_components_of(quaternion1, 'slerp')) or (0.0, 0.0, 0.0, 1.0)

    if out is None:
        out = Quaternion()

    cos_angle = sum(a * b for a, b in zip(start, end))

    if cos_angle < 0:
        # negate the second quaternion to take the shorter path
        end = tuple(-e for e in end)  # type: ignore[assignment]
        cos_angle = -cos_angle

    if cos_angle > 0.9995:
        return _write_quaternion(out, *(a * (1 - fraction) + b * fraction for a, b in zip(start, end)))

    angle0 = math.acos(min(cos_angle, 1.0))
    theta = angle0 * fraction

    # orthonormal basis
    basis = [b - a * cos_angle for a, b in zip(start, end)]
    basis_norm = norm(*basis)

    cos_theta = math.cos(theta)
    sin_theta = math.sin(theta) / basis_norm

    return _write_quaternion(out, *(a * cos_theta + b * sin_theta for a, b in zip(start, basis)))
