r"""
Axis-angle algebra.

The operations in this module work directly on the components ``(ux, uy, uz, angle)`` of axis-angles.  Composition is
done with the half angle formula that a quaternion product would give, without ever forming the quaternions:

.. math::
    \text{cos}\frac{\gamma}{2} = \text{cos}\frac{\alpha}{2}\text{cos}\frac{\beta}{2} -
    \text{sin}\frac{\alpha}{2}\text{sin}\frac{\beta}{2}\,\hat{\mathbf{u}}_1\cdot\hat{\mathbf{u}}_2 \\
    \text{sin}\frac{\gamma}{2}\hat{\mathbf{u}} = \text{sin}\frac{\alpha}{2}\text{cos}\frac{\beta}{2}\hat{\mathbf{u}}_1 +
    \text{cos}\frac{\alpha}{2}\text{sin}\frac{\beta}{2}\hat{\mathbf{u}}_2 +
    \text{sin}\frac{\alpha}{2}\text{sin}\frac{\beta}{2}\,\hat{\mathbf{u}}_1\times\hat{\mathbf{u}}_2

Operands of the other representations are converted to axis-angle components first.
"""

import math

from rotalgebra._typing import ARRAY_LIKE, AXIS_ANGLE_COMPONENTS, DOUBLE_ARRAY
from rotalgebra.exceptions import UnsupportedOrientationError

from rotalgebra.rotations import quaternion_tools, rotation_matrix_tools
from rotalgebra.rotations.core import conversions
from rotalgebra.rotations.core._helpers import _matrix_components, _prepare_output, _vector_components
from rotalgebra.rotations.core.scalar_math import EPS, fast_norm, norm, norm_squared, contains_nan
from rotalgebra.rotations.orientations import (Orientation3D, AxisAngle, Quaternion, RotationMatrix, YawPitchRoll,
                                               ZERO_EPS)


__all__ = ['multiply', 'multiply_invert_left', 'multiply_invert_right', 'multiply_invert_both', 'invert',
           'transform', 'inverse_transform', 'add_transform', 'sub_transform', 'transform_2d', 'inverse_transform_2d',
           'transform_vector4', 'transform_matrix', 'inverse_transform_matrix',
           'prepend_yaw_rotation', 'append_yaw_rotation', 'prepend_pitch_rotation', 'append_pitch_rotation',
           'prepend_roll_rotation', 'append_roll_rotation', 'distance']


_ZERO_AXIS_ANGLE = (1.0, 0.0, 0.0, 0.0)


def axis_angle_components_of(orientation: Orientation3D, operation: str = 'axis-angle algebra') -> AXIS_ANGLE_COMPONENTS:
    """
    Returns the axis-angle components of any orientation.
    """

    if isinstance(orientation, AxisAngle):
        x, y, z, angle = orientation.components
        return float(x), float(y), float(z), float(angle)

    if isinstance(orientation, RotationMatrix):
        return conversions.matrix_to_axis_angle(*orientation.matrix_components())

    if isinstance(orientation, YawPitchRoll):
        return conversions.yaw_pitch_roll_to_axis_angle(orientation.yaw, orientation.pitch, orientation.roll)

    if isinstance(orientation, Orientation3D):
        return conversions.quaternion_to_axis_angle(*orientation.quaternion_components())

    raise UnsupportedOrientationError(operation, orientation)


def _write_axis_angle(out: Orientation3D, ux: float, uy: float, uz: float, angle: float) -> Orientation3D:
    if isinstance(out, AxisAngle):
        out.set(ux, uy, uz, angle)
    else:
        out.set_quaternion(*conversions.axis_angle_to_quaternion(ux, uy, uz, angle))

    return out


def _compose(u1x: float, u1y: float, u1z: float, alpha: float,
             u2x: float, u2y: float, u2z: float, beta: float) -> tuple[float, float, float, float]:
    """
    The half angle composition core.  Returns ``cos(gamma/2)`` and ``sin(gamma/2) * u`` for unit input axes.
    """

    cos_half_alpha = math.cos(0.5 * alpha)
    sin_half_alpha = math.sin(0.5 * alpha)
    cos_half_beta = math.cos(0.5 * beta)
    sin_half_beta = math.sin(0.5 * beta)

    dot = u1x * u2x + u1y * u2y + u1z * u2z
    cross_x = u1y * u2z - u1z * u2y
    cross_y = u1z * u2x - u1x * u2z
    cross_z = u1x * u2y - u1y * u2x

    sin_cos = sin_half_alpha * cos_half_beta
    cos_sin = cos_half_alpha * sin_half_beta
    cos_cos = cos_half_alpha * cos_half_beta
    sin_sin = sin_half_alpha * sin_half_beta

    cos_half_gamma = cos_cos - sin_sin * dot

    sin_half_gamma_ux = sin_cos * u1x + cos_sin * u2x + sin_sin * cross_x
    sin_half_gamma_uy = sin_cos * u1y + cos_sin * u2y + sin_sin * cross_y
    sin_half_gamma_uz = sin_cos * u1z + cos_sin * u2z + sin_sin * cross_z

    return cos_half_gamma, sin_half_gamma_ux, sin_half_gamma_uy, sin_half_gamma_uz


def multiply_components(u1x: float, u1y: float, u1z: float, alpha: float, invert1: bool,
                        u2x: float, u2y: float, u2z: float, beta: float, invert2: bool) -> AXIS_ANGLE_COMPONENTS:
    """
    Composes two axis-angles given by their components.

    Both axes are normalized first.  If either axis is degenerate (norm below ``1e-12``) the zero axis-angle
    ``(1, 0, 0, 0)`` is returned, as it is when the composition is (numerically) the identity.
    """

    u1_norm = fast_norm(u1x, u1y, u1z)
    u2_norm = fast_norm(u2x, u2y, u2z)

    if u1_norm < EPS or u2_norm < EPS:
        return _ZERO_AXIS_ANGLE

    u1x, u1y, u1z = u1x / u1_norm, u1y / u1_norm, u1z / u1_norm
    u2x, u2y, u2z = u2x / u2_norm, u2y / u2_norm, u2z / u2_norm

    if invert1:
        alpha = -alpha

    if invert2:
        beta = -beta

    cos_half_gamma, x, y, z = _compose(u1x, u1y, u1z, alpha, u2x, u2y, u2z, beta)

    sin_half_gamma_squared = norm_squared(x, y, z)

    if sin_half_gamma_squared < EPS:
        return _ZERO_AXIS_ANGLE

    sin_half_gamma = math.sqrt(sin_half_gamma_squared)
    gamma = 2.0 * math.atan2(sin_half_gamma, cos_half_gamma)

    return x / sin_half_gamma, y / sin_half_gamma, z / sin_half_gamma, gamma


# ---------------------------------------------------------------------------------------------------------------------
# composition
# ---------------------------------------------------------------------------------------------------------------------

def multiply(orientation1: Orientation3D, orientation2: Orientation3D, out: Orientation3D | None = None,
             invert_first: bool = False, invert_second: bool = False) -> Orientation3D:
    """
    This function composes two orientations using the axis-angle half angle formula.

    The operands can be of any orientation type, they are converted into axis-angle components first (the second
    operand is read before the first, and both before anything is written, so `out` may be either operand).  Either
    operand can be inverted before composing.

    A degenerate axis on either operand results in the zero axis-angle ``(1, 0, 0, 0)``.

    :param orientation1: the left operand
    :param orientation2: the right operand
    :param out: where to store the result.  When not an :class:`.AxisAngle` it is set through
                :meth:`.Orientation3D.set_quaternion`.  A new :class:`.AxisAngle` is created when ``None``.
    :param invert_first: whether to invert the left operand
    :param invert_second: whether to invert the right operand
    :return: `out`
    """

    u2x, u2y, u2z, beta = axis_angle_components_of(orientation2, 'multiply')
    u1x, u1y, u1z, alpha = axis_angle_components_of(orientation1, 'multiply')

    if out is None:
        out = AxisAngle()

    return _write_axis_angle(out, *multiply_components(u1x, u1y, u1z, alpha, invert_first,
                                                       u2x, u2y, u2z, beta, invert_second))


def multiply_invert_left(orientation1: Orientation3D, orientation2: Orientation3D,
                         out: Orientation3D | None = None) -> Orientation3D:
    return multiply(orientation1, orientation2, out, invert_first=True)


def multiply_invert_right(orientation1: Orientation3D, orientation2: Orientation3D,
                          out: Orientation3D | None = None) -> Orientation3D:
    return multiply(orientation1, orientation2, out, invert_second=True)


def multiply_invert_both(orientation1: Orientation3D, orientation2: Orientation3D,
                         out: Orientation3D | None = None) -> Orientation3D:
    return multiply(orientation1, orientation2, out, invert_first=True, invert_second=True)


def invert(axis_angle: Orientation3D, out: Orientation3D | None = None) -> Orientation3D:
    """
    Stores the inverse of `axis_angle` (the same axis with the negated angle) in `out`.
    """

    ux, uy, uz, angle = axis_angle_components_of(axis_angle, 'invert')

    if out is None:
        out = AxisAngle()

    return _write_axis_angle(out, ux, uy, uz, -angle)


# ---------------------------------------------------------------------------------------------------------------------
# transformations
# ---------------------------------------------------------------------------------------------------------------------

def _rodrigues(ux: float, uy: float, uz: float, angle: float,
               x: float, y: float, z: float) -> tuple[float, float, float]:
    sin_angle = math.sin(angle)
    one_minus_cos_angle = 1.0 - math.cos(angle)

    cross_x = uy * z - uz * y
    cross_y = uz * x - ux * z
    cross_z = ux * y - uy * x

    cross_cross_x = uy * cross_z - uz * cross_y
    cross_cross_y = uz * cross_x - ux * cross_z
    cross_cross_z = ux * cross_y - uy * cross_x

    return (x + sin_angle * cross_x + one_minus_cos_angle * cross_cross_x,
            y + sin_angle * cross_y + one_minus_cos_angle * cross_cross_y,
            z + sin_angle * cross_z + one_minus_cos_angle * cross_cross_z)


def transform(axis_angle: AxisAngle, vector: ARRAY_LIKE, out: DOUBLE_ARRAY | None = None) -> DOUBLE_ARRAY:
    r"""
    This function rotates a vector with Rodrigues' rotation formula:

    .. math::
        \mathbf{v}'=\mathbf{v}+\text{sin}(\theta)(\mathbf{u}\times\mathbf{v})+
        (1-\text{cos}(\theta))\mathbf{u}\times(\mathbf{u}\times\mathbf{v})

    The axis is used as stored, it is not normalized here, so the result is only a rotation for a unit axis.

    For example, rotating the x axis a quarter turn about z::

        >>> from math import pi
        >>> from rotalgebra.rotations import AxisAngle, axis_angle_tools
        >>> axis_angle_tools.transform(AxisAngle(0, 0, 1, pi/2), [1, 0, 0]).round(12)
        array([0., 1., 0.])

    :param axis_angle: the rotation to apply
    :param vector: the length 3 vector to rotate
    :param out: where to store the result (may be `vector`)
    :return: the rotated vector
    """

    x, y, z = _vector_components(vector)
    ux, uy, uz, angle = axis_angle_components_of(axis_angle, 'transform')

    out = _prepare_output(out, (3,))
    out[:] = _rodrigues(ux, uy, uz, angle, x, y, z)

    return out


def inverse_transform(axis_angle: AxisAngle, vector: ARRAY_LIKE, out: DOUBLE_ARRAY | None = None) -> DOUBLE_ARRAY:
    """
    Rotates a vector by the inverse of `axis_angle` (:func:`transform` with the negated angle).
    """

    x, y, z = _vector_components(vector)
    ux, uy, uz, angle = axis_angle_components_of(axis_angle, 'inverse_transform')

    out = _prepare_output(out, (3,))
    out[:] = _rodrigues(ux, uy, uz, -angle, x, y, z)

    return out


def add_transform(axis_angle: AxisAngle, vector: ARRAY_LIKE, out: DOUBLE_ARRAY) -> DOUBLE_ARRAY:
    """
    Rotates `vector` and adds the result to `out`.
    """

    x, y, z = _vector_components(vector)
    ux, uy, uz, angle = axis_angle_components_of(axis_angle, 'add_transform')

    out = _prepare_output(out, (3,))
    out += _rodrigues(ux, uy, uz, angle, x, y, z)

    return out


def sub_transform(axis_angle: AxisAngle, vector: ARRAY_LIKE, out: DOUBLE_ARRAY) -> DOUBLE_ARRAY:
    """
    Rotates `vector` and subtracts the result from `out`.
    """

    x, y, z = _vector_components(vector)
    ux, uy, uz, angle = axis_angle_components_of(axis_angle, 'sub_transform')

    out = _prepare_output(out, (3,))
    out -= _rodrigues(ux, uy, uz, angle, x, y, z)

    return out


def _transform_2d(axis_angle: AxisAngle, vector: ARRAY_LIKE, out: DOUBLE_ARRAY | None,
                  check_if_orientation_2d: bool, sign: float, operation: str) -> DOUBLE_ARRAY:
    x, y = _vector_components(vector, 2)
    _, _, uz, angle = axis_angle_components_of(axis_angle, operation)

    if check_if_orientation_2d:
        axis_angle.check_if_orientation_2d(ZERO_EPS)

    # only the rotation about z is used
    theta = sign * uz * angle
    cos_theta = math.cos(theta)
    sin_theta = math.sin(theta)

    out = _prepare_output(out, (2,))
    out[:] = (cos_theta * x - sin_theta * y, sin_theta * x + cos_theta * y)

    return out


def transform_2d(axis_angle: AxisAngle, vector: ARRAY_LIKE, out: DOUBLE_ARRAY | None = None,
                 check_if_orientation_2d: bool = True) -> DOUBLE_ARRAY:
    """
    Rotates a length 2 vector by the z rotation of `axis_angle`, that is by ``uz * angle``.

    :raises NotAnOrientation2DError: if `check_if_orientation_2d` is ``True`` and `axis_angle` is not 2D
    """

    return _transform_2d(axis_angle, vector, out, check_if_orientation_2d, 1.0, 'transform_2d')


def inverse_transform_2d(axis_angle: AxisAngle, vector: ARRAY_LIKE, out: DOUBLE_ARRAY | None = None,
                         check_if_orientation_2d: bool = True) -> DOUBLE_ARRAY:
    return _transform_2d(axis_angle, vector, out, check_if_orientation_2d, -1.0, 'inverse_transform_2d')


def transform_vector4(axis_angle: AxisAngle, vector: ARRAY_LIKE, out: DOUBLE_ARRAY | None = None,
                      inverse: bool = False) -> DOUBLE_ARRAY:
    """
    Rotates the first 3 components of a length 4 vector.  The last component is copied.
    """

    x, y, z, s = _vector_components(vector, 4)
    ux, uy, uz, angle = axis_angle_components_of(axis_angle, 'transform_vector4')

    if inverse:
        angle = -angle

    out = _prepare_output(out, (4,))
    out[:3] = _rodrigues(ux, uy, uz, angle, x, y, z)
    out[3] = s

    return out


def _half_angle_quaternion(ux: float, uy: float, uz: float, angle: float) -> tuple[float, float, float, float]:
    half_angle = 0.5 * angle
    sin_half_angle = math.sin(half_angle)

    return ux * sin_half_angle, uy * sin_half_angle, uz * sin_half_angle, math.cos(half_angle)


def transform_matrix(axis_angle: AxisAngle, matrix: ARRAY_LIKE, out: DOUBLE_ARRAY | None = None,
                     inverse: bool = False) -> DOUBLE_ARRAY:
    r"""
    Re-expresses a 3x3 matrix in the rotated frame, :math:`\mathbf{R}\mathbf{M}\mathbf{R}^T`.

    The half angle quaternion components ``(u sin(angle/2), cos(angle/2))`` are formed and handed to the quaternion
    matrix conjugation kernel :func:`.quaternion_tools.transform_matrix_components`.

    :param axis_angle: the rotation
    :param matrix: the 3x3 matrix to transform
    :param out: where to store the result (may be `matrix`)
    :param inverse: whether to compute :math:`\mathbf{R}^T\mathbf{M}\mathbf{R}` instead
    :return: the transformed matrix
    """

    m = _matrix_components(matrix)
    qx, qy, qz, qs = _half_angle_quaternion(*axis_angle_components_of(axis_angle, 'transform_matrix'))

    transformed = quaternion_tools.transform_matrix_components(qx, qy, qz, qs, m, conjugate=inverse)  # type: ignore

    out = _prepare_output(out, (3, 3))
    out.flat[:] = transformed

    return out


def inverse_transform_matrix(axis_angle: AxisAngle, matrix: ARRAY_LIKE, out: DOUBLE_ARRAY | None = None) -> DOUBLE_ARRAY:
    return transform_matrix(axis_angle, matrix, out, inverse=True)


# ---------------------------------------------------------------------------------------------------------------------
# elementary rotations
# ---------------------------------------------------------------------------------------------------------------------

def _elementary_terms(alpha: float, beta: float) -> tuple[float, float, float, float]:
    cos_half_alpha = math.cos(0.5 * alpha)
    sin_half_alpha = math.sin(0.5 * alpha)
    cos_half_beta = math.cos(0.5 * beta)
    sin_half_beta = math.sin(0.5 * beta)

    return (sin_half_alpha * cos_half_beta, cos_half_alpha * sin_half_beta,
            cos_half_alpha * cos_half_beta, sin_half_alpha * sin_half_beta)


def _finish_elementary(out: Orientation3D | None, cos_half_gamma: float,
                       x: float, y: float, z: float) -> Orientation3D:
    sin_half_gamma = norm(x, y, z)

    if out is None:
        out = AxisAngle()

    if sin_half_gamma < EPS:
        return _write_axis_angle(out, *_ZERO_AXIS_ANGLE)

    gamma = 2.0 * math.atan2(sin_half_gamma, cos_half_gamma)

    return _write_axis_angle(out, x / sin_half_gamma, y / sin_half_gamma, z / sin_half_gamma, gamma)


def prepend_yaw_rotation(yaw: float, axis_angle: AxisAngle, out: Orientation3D | None = None) -> Orientation3D:
    """
    Composes a rotation of `yaw` about z on the left of `axis_angle`.  The axis of `axis_angle` is assumed to be unit
    length.
    """

    ux, uy, uz, beta = axis_angle_components_of(axis_angle, 'prepend_yaw_rotation')

    sin_cos, cos_sin, cos_cos, sin_sin = _elementary_terms(yaw, beta)

    return _finish_elementary(out, cos_cos - sin_sin * uz,
                              cos_sin * ux - sin_sin * uy,
                              cos_sin * uy + sin_sin * ux,
                              sin_cos + cos_sin * uz)


def append_yaw_rotation(axis_angle: AxisAngle, yaw: float, out: Orientation3D | None = None) -> Orientation3D:
    """
    Composes a rotation of `yaw` about z on the right of `axis_angle`.
    """

    ux, uy, uz, alpha = axis_angle_components_of(axis_angle, 'append_yaw_rotation')

    sin_cos, cos_sin, cos_cos, sin_sin = _elementary_terms(alpha, yaw)

    return _finish_elementary(out, cos_cos - sin_sin * uz,
                              sin_cos * ux + sin_sin * uy,
                              sin_cos * uy - sin_sin * ux,
                              sin_cos * uz + cos_sin)


def prepend_pitch_rotation(pitch: float, axis_angle: AxisAngle, out: Orientation3D | None = None) -> Orientation3D:
    """
    Composes a rotation of `pitch` about y on the left of `axis_angle`.
    """

    ux, uy, uz, beta = axis_angle_components_of(axis_angle, 'prepend_pitch_rotation')

    sin_cos, cos_sin, cos_cos, sin_sin = _elementary_terms(pitch, beta)

    return _finish_elementary(out, cos_cos - sin_sin * uy,
                              cos_sin * ux + sin_sin * uz,
                              sin_cos + cos_sin * uy,
                              cos_sin * uz - sin_sin * ux)


def append_pitch_rotation(axis_angle: AxisAngle, pitch: float, out: Orientation3D | None = None) -> Orientation3D:
    """
    Composes a rotation of `pitch` about y on the right of `axis_angle`.
    """

    ux, uy, uz, alpha = axis_angle_components_of(axis_angle, 'append_pitch_rotation')

    sin_cos, cos_sin, cos_cos, sin_sin = _elementary_terms(alpha, pitch)

    return _finish_elementary(out, cos_cos - sin_sin * uy,
                              sin_cos * ux - sin_sin * uz,
                              sin_cos * uy + cos_sin,
                              sin_cos * uz + sin_sin * ux)


def prepend_roll_rotation(roll: float, axis_angle: AxisAngle, out: Orientation3D | None = None) -> Orientation3D:
    """
    Composes a rotation of `roll` about x on the left of `axis_angle`.
    """

    ux, uy, uz, beta = axis_angle_components_of(axis_angle, 'prepend_roll_rotation')

    sin_cos, cos_sin, cos_cos, sin_sin = _elementary_terms(roll, beta)

    return _finish_elementary(out, cos_cos - sin_sin * ux,
                              sin_cos + cos_sin * ux,
                              cos_sin * uy - sin_sin * uz,
                              cos_sin * uz + sin_sin * uy)


def append_roll_rotation(axis_angle: AxisAngle, roll: float, out: Orientation3D | None = None) -> Orientation3D:
    """
    Composes a rotation of `roll` about x on the right of `axis_angle`.
    """

    ux, uy, uz, alpha = axis_angle_components_of(axis_angle, 'append_roll_rotation')

    sin_cos, cos_sin, cos_cos, sin_sin = _elementary_terms(alpha, roll)

    return _finish_elementary(out, cos_cos - sin_sin * ux,
                              sin_cos * ux + cos_sin,
                              sin_cos * uy + sin_sin * uz,
                              sin_cos * uz - sin_sin * uy)


# ---------------------------------------------------------------------------------------------------------------------
# distance
# ---------------------------------------------------------------------------------------------------------------------

def distance(axis_angle: AxisAngle, other: Orientation3D, limit_to_pi: bool = False) -> float:
    r"""
    This function computes the angle of the smallest rotation between `axis_angle` and `other`.

    `other` can be any orientation type.  A rotation matrix is handled by the matrix distance (and so the result is
    always in :math:`[0, \pi]`).  Every other type is converted into an axis and an angle and composed with the
    inverse of `axis_angle` using the half angle formula; the angle :math:`\gamma` of the result is returned as
    :math:`|\gamma|`, folded into :math:`[0, \pi]` when `limit_to_pi` is ``True``.

    A zero length axis on either operand is treated as the identity, so the angle of the other operand is returned.
    A :math:`2\pi` turn is not a shortcut case: its quaternion is the negated neutral quaternion and the
    distance to it is measured like any other rotation.  NaN components give NaN.

    :param axis_angle: the first orientation
    :param other: the second orientation
    :param limit_to_pi: whether to fold the result into :math:`[0, \pi]`
    :return: the angular distance in radians
    :raises UnsupportedOrientationError: if `other` is not an orientation
    """

    if not isinstance(other, (AxisAngle, Quaternion, RotationMatrix, YawPitchRoll)):
        raise UnsupportedOrientationError('distance', axis_angle, other)

    if isinstance(other, RotationMatrix):
        return rotation_matrix_tools.distance(axis_angle, other, limit_to_pi)

    u1x, u1y, u1z, alpha = axis_angle_components_of(axis_angle, 'distance')
    u2x, u2y, u2z, beta = axis_angle_components_of(other, 'distance')

    if contains_nan(u1x, u1y, u1z, alpha, u2x, u2y, u2z, beta):
        return math.nan

    u1_norm = fast_norm(u1x, u1y, u1z)
    u2_norm = fast_norm(u2x, u2y, u2z)

    if u1_norm < EPS:
        return quaternion_tools.angle(other, limit_to_pi)

    if u2_norm < EPS:
        return quaternion_tools.angle(axis_angle, limit_to_pi)

    cos_half_gamma, x, y, z = _compose(u1x / u1_norm, u1y / u1_norm, u1z / u1_norm, alpha,
                                       u2x / u2_norm, u2y / u2_norm, u2z / u2_norm, -beta)

    gamma = 2.0 * math.atan2(norm(x, y, z), cos_half_gamma)

    if limit_to_pi and gamma > math.pi:
        gamma = 2.0 * math.pi - gamma

    return abs(gamma)
