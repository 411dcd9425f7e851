# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.

r"""
Core conversion routines for rotation representations

This module contains the routines for converting between the rotation representations used by rotalgebra.  All routines
work on raw scalar components (python floats) and return tuples of floats so that the algebra modules can chain them
without creating intermediate orientation objects.

The component orderings are:

==================  ===================================================================================================
Representation      Components
==================  ===================================================================================================
axis-angle          ``(ux, uy, uz, angle)``
quaternion          ``(qx, qy, qz, qs)`` (scalar last)
rotation matrix     ``(m00, m01, m02, m10, m11, m12, m20, m21, m22)`` (row major)
yaw-pitch-roll      ``(yaw, pitch, roll)`` with :math:`\mathbf{R}=\mathbf{R}_z(yaw)\mathbf{R}_y(pitch)\mathbf{R}_x(roll)`
rotation vector     ``(rx, ry, rz)`` :math:`=\theta\hat{\mathbf{x}}`
==================  ===================================================================================================

Every routine propagates NaN inputs to NaN outputs.  Degenerate inputs (zero axis, zero norm quaternion) produce the
zero rotation.
"""

import math

from rotalgebra._typing import AXIS_ANGLE_COMPONENTS, QUATERNION_COMPONENTS, MATRIX_COMPONENTS, VECTOR_COMPONENTS

from rotalgebra.rotations.core.scalar_math import EPS, norm, fast_norm, clamp, contains_nan


__all__ = ['axis_angle_to_quaternion', 'axis_angle_to_matrix', 'axis_angle_to_rotation_vector',
           'axis_angle_to_yaw_pitch_roll',
           'quaternion_to_axis_angle', 'quaternion_to_matrix', 'quaternion_to_rotation_vector',
           'quaternion_to_yaw_pitch_roll',
           'matrix_to_axis_angle', 'matrix_to_quaternion', 'matrix_to_rotation_vector', 'matrix_to_yaw_pitch_roll',
           'yaw_pitch_roll_to_axis_angle', 'yaw_pitch_roll_to_quaternion', 'yaw_pitch_roll_to_matrix',
           'rotation_vector_to_axis_angle', 'rotation_vector_to_quaternion', 'rotation_vector_to_matrix',
           'matrix_angle', 'is_identity_matrix', 'SAFE_THRESHOLD_PITCH', 'MAX_SAFE_PITCH_ANGLE']


SAFE_THRESHOLD_PITCH: float = math.radians(1.82)
"""
Distance from :math:`\\pm\\pi/2` below which the pitch of a yaw-pitch-roll becomes numerically unreliable
"""

MAX_SAFE_PITCH_ANGLE: float = 0.5 * math.pi - SAFE_THRESHOLD_PITCH

_NAN4 = (math.nan, math.nan, math.nan, math.nan)
_NAN3 = (math.nan, math.nan, math.nan)
_NAN9 = (math.nan,) * 9
_IDENTITY9 = (1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0)


def is_identity_matrix(m00: float, m01: float, m02: float,
                       m10: float, m11: float, m12: float,
                       m20: float, m21: float, m22: float, epsilon: float = EPS) -> bool:
    """
    Checks each coefficient of the matrix against the identity to within `epsilon`.
    """

    return (abs(m00 - 1.0) <= epsilon and abs(m11 - 1.0) <= epsilon and abs(m22 - 1.0) <= epsilon and
            abs(m01) <= epsilon and abs(m02) <= epsilon and abs(m12) <= epsilon and
            abs(m10) <= epsilon and abs(m20) <= epsilon and abs(m21) <= epsilon)


# ---------------------------------------------------------------------------------------------------------------------
# axis-angle
# ---------------------------------------------------------------------------------------------------------------------

def axis_angle_to_quaternion(ux: float, uy: float, uz: float, angle: float) -> QUATERNION_COMPONENTS:
    r"""
    This function converts an axis-angle into a rotation quaternion.

    The axis does not need to be normalized.  Mathematically:

    .. math::
        \mathbf{q}=\left[\begin{array}{c}\text{sin}(\frac{\theta}{2})\frac{\mathbf{u}}{\|\mathbf{u}\|}\\
        \text{cos}(\frac{\theta}{2})\end{array}\right]

    If the axis norm is smaller than :data:`.EPS` the neutral quaternion is returned.

    :param ux: the x component of the rotation axis
    :param uy: the y component of the rotation axis
    :param uz: the z component of the rotation axis
    :param angle: the rotation angle in radians
    :return: the quaternion components ``(qx, qy, qz, qs)``
    """

    if contains_nan(ux, uy, uz, angle):
        return _NAN4

    axis_norm = norm(ux, uy, uz)

    if axis_norm < EPS:
        return 0.0, 0.0, 0.0, 1.0

    half_angle = 0.5 * angle
    sin_half_angle = math.sin(half_angle) / axis_norm

    return ux * sin_half_angle, uy * sin_half_angle, uz * sin_half_angle, math.cos(half_angle)


def axis_angle_to_matrix(ux: float, uy: float, uz: float, angle: float) -> MATRIX_COMPONENTS:
    r"""
    This function converts an axis-angle into the 9 coefficients of a rotation matrix using Rodrigues' formula.

    .. math::
        \mathbf{R} = \text{cos}(\theta)\mathbf{I} + \text{sin}(\theta)\left[\hat{\mathbf{u}}\times\right] +
        (1-\text{cos}(\theta))\hat{\mathbf{u}}\hat{\mathbf{u}}^T

    :param ux: the x component of the rotation axis
    :param uy: the y component of the rotation axis
    :param uz: the z component of the rotation axis
    :param angle: the rotation angle in radians
    :return: the row major matrix coefficients
    """

    if contains_nan(ux, uy, uz, angle):
        return _NAN9

    axis_norm = norm(ux, uy, uz)

    if axis_norm < EPS:
        return _IDENTITY9

    ux /= axis_norm
    uy /= axis_norm
    uz /= axis_norm

    sin_theta = math.sin(angle)
    cos_theta = math.cos(angle)
    t = 1.0 - cos_theta

    xyt = ux * uy * t
    xzt = ux * uz * t
    yzt = uy * uz * t
    xs = ux * sin_theta
    ys = uy * sin_theta
    zs = uz * sin_theta

    return (t * ux * ux + cos_theta, xyt - zs, xzt + ys,
            xyt + zs, t * uy * uy + cos_theta, yzt - xs,
            xzt - ys, yzt + xs, t * uz * uz + cos_theta)


def axis_angle_to_rotation_vector(ux: float, uy: float, uz: float, angle: float) -> VECTOR_COMPONENTS:
    """
    Converts an axis-angle into a rotation vector (the normalized axis scaled by the angle).
    """

    if contains_nan(ux, uy, uz, angle):
        return _NAN3

    axis_norm = norm(ux, uy, uz)

    if axis_norm < EPS:
        return 0.0, 0.0, 0.0

    scale = angle / axis_norm

    return ux * scale, uy * scale, uz * scale


def axis_angle_to_yaw_pitch_roll(ux: float, uy: float, uz: float, angle: float) -> VECTOR_COMPONENTS:
    """
    Converts an axis-angle into yaw-pitch-roll angles.
    """

    return quaternion_to_yaw_pitch_roll(*axis_angle_to_quaternion(ux, uy, uz, angle))


# ---------------------------------------------------------------------------------------------------------------------
# quaternion
# ---------------------------------------------------------------------------------------------------------------------

def quaternion_to_axis_angle(qx: float, qy: float, qz: float, qs: float) -> AXIS_ANGLE_COMPONENTS:
    r"""
    This function converts a rotation quaternion into an axis-angle.

    The axis is the normalized vector part of the quaternion and the angle is
    :math:`2\text{atan2}(\|\mathbf{q}_v\|, q_s)`, which lies in :math:`[0, 2\pi]`.  When the vector part is
    (numerically) zero the axis is ``(1, 0, 0)`` and the angle is
    :math:`2\text{atan2}(0, q_s)`, so the neutral quaternion gives 0 and its negation gives :math:`2\pi`.

    The quaternion does not need to be unit length since only the ratio of its parts is used.

    :param qx: the x component of the quaternion
    :param qy: the y component of the quaternion
    :param qz: the z component of the quaternion
    :param qs: the scalar component of the quaternion
    :return: the axis-angle components ``(ux, uy, uz, angle)``
    """

    if contains_nan(qx, qy, qz, qs):
        return _NAN4

    vector_norm = norm(qx, qy, qz)

    if vector_norm > EPS:
        angle = 2.0 * math.atan2(vector_norm, qs)
        inverse_norm = 1.0 / vector_norm
        return qx * inverse_norm, qy * inverse_norm, qz * inverse_norm, angle

    return 1.0, 0.0, 0.0, 2.0 * math.atan2(0.0, qs)


def quaternion_to_matrix(qx: float, qy: float, qz: float, qs: float) -> MATRIX_COMPONENTS:
    """
    Converts a quaternion into the 9 coefficients of a rotation matrix.

    The quaternion is normalized first.  A zero norm quaternion gives the identity matrix.
    """

    if contains_nan(qx, qy, qz, qs):
        return _NAN9

    quaternion_norm = norm(qx, qy, qz, qs)

    if quaternion_norm < EPS:
        return _IDENTITY9

    quaternion_norm = 1.0 / quaternion_norm
    qx *= quaternion_norm
    qy *= quaternion_norm
    qz *= quaternion_norm
    qs *= quaternion_norm

    yy2 = 2.0 * qy * qy
    zz2 = 2.0 * qz * qz
    xx2 = 2.0 * qx * qx
    xy2 = 2.0 * qx * qy
    sz2 = 2.0 * qs * qz
    xz2 = 2.0 * qx * qz
    sy2 = 2.0 * qs * qy
    yz2 = 2.0 * qy * qz
    sx2 = 2.0 * qs * qx

    return (1.0 - yy2 - zz2, xy2 - sz2, xz2 + sy2,
            xy2 + sz2, 1.0 - xx2 - zz2, yz2 - sx2,
            xz2 - sy2, yz2 + sx2, 1.0 - xx2 - yy2)


def quaternion_to_rotation_vector(qx: float, qy: float, qz: float, qs: float) -> VECTOR_COMPONENTS:
    r"""
    Converts a quaternion into a rotation vector :math:`\theta\hat{\mathbf{x}}` with
    :math:`\theta\in[0, 2\pi]`.
    """

    if contains_nan(qx, qy, qz, qs):
        return _NAN3

    quaternion_norm = norm(qx, qy, qz, qs)

    if quaternion_norm < EPS:
        return 0.0, 0.0, 0.0

    vector_norm = norm(qx, qy, qz) / quaternion_norm

    if vector_norm > EPS:
        # both the vector norm and qs are scaled by the same (positive) factor so the ratio is unchanged
        scale = 2.0 * math.atan2(vector_norm, qs / quaternion_norm) / (vector_norm * quaternion_norm)
        return qx * scale, qy * scale, qz * scale

    return 0.0, 0.0, 0.0


def quaternion_to_yaw_pitch_roll(qx: float, qy: float, qz: float, qs: float) -> VECTOR_COMPONENTS:
    """
    Converts a quaternion into yaw-pitch-roll angles.

    The quaternion is normalized first.  A zero norm quaternion gives ``(0, 0, 0)``.  The pitch argument is clamped
    into ``[-1, 1]`` before taking the arcsine.
    """

    if contains_nan(qx, qy, qz, qs):
        return _NAN3

    quaternion_norm = norm(qx, qy, qz, qs)

    if quaternion_norm < EPS:
        return 0.0, 0.0, 0.0

    quaternion_norm = 1.0 / quaternion_norm
    qx *= quaternion_norm
    qy *= quaternion_norm
    qz *= quaternion_norm
    qs *= quaternion_norm

    yaw = math.atan2(2.0 * (qx * qy + qz * qs), 1.0 - 2.0 * (qy * qy + qz * qz))

    pitch_argument = 2.0 * (qs * qy - qx * qz)
    pitch = math.asin(min(1.0, max(-1.0, pitch_argument)))

    roll = math.atan2(2.0 * (qy * qz + qx * qs), 1.0 - 2.0 * (qx * qx + qy * qy))

    return yaw, pitch, roll


# ---------------------------------------------------------------------------------------------------------------------
# rotation matrix
# ---------------------------------------------------------------------------------------------------------------------

def _matrix_axis_and_angle(m00: float, m01: float, m02: float,
                           m10: float, m11: float, m12: float,
                           m20: float, m21: float, m22: float) -> AXIS_ANGLE_COMPONENTS | None:
    """
    Extracts the unit axis and the angle from a rotation matrix.  Returns ``None`` for the identity.
    """

    x = m21 - m12
    y = m02 - m20
    z = m10 - m01

    s = norm(x, y, z)

    if s > EPS:
        angle = math.atan2(0.5 * s, 0.5 * (m00 + m11 + m22 - 1.0))
        return x / s, y / s, z / s, angle

    if is_identity_matrix(m00, m01, m02, m10, m11, m12, m20, m21, m22):
        return None

    # the skew part vanishes: this is a half turn and the axis comes from the symmetric part
    xx = 0.50 * (m00 + 1.0)
    yy = 0.50 * (m11 + 1.0)
    zz = 0.50 * (m22 + 1.0)
    xy = 0.25 * (m01 + m10)
    xz = 0.25 * (m02 + m20)
    yz = 0.25 * (m12 + m21)

    if xx > yy and xx > zz:
        x = math.sqrt(xx)
        y = xy / x
        z = xz / x
    elif yy > zz:
        y = math.sqrt(yy)
        x = xy / y
        z = yz / y
    else:
        z = math.sqrt(zz)
        x = xz / z
        y = yz / z

    return x, y, z, math.pi


def matrix_angle(m00: float, m01: float, m02: float,
                 m10: float, m11: float, m12: float,
                 m20: float, m21: float, m22: float) -> float:
    r"""
    Returns the angle of the rotation described by the matrix coefficients, in :math:`[0, \pi]`.

    This only looks at the skew symmetric part and the trace so it is cheaper than a full conversion.
    """

    if contains_nan(m00, m01, m02, m10, m11, m12, m20, m21, m22):
        return math.nan

    s = fast_norm(m21 - m12, m02 - m20, m10 - m01)

    if s > EPS:
        return math.atan2(0.5 * s, 0.5 * (m00 + m11 + m22 - 1.0))

    if m00 + m11 + m22 > 3.0 - 1.0e-7:
        return 0.0

    return math.pi


def matrix_to_axis_angle(m00: float, m01: float, m02: float,
                         m10: float, m11: float, m12: float,
                         m20: float, m21: float, m22: float) -> AXIS_ANGLE_COMPONENTS:
    r"""
    This function converts a rotation matrix into an axis-angle with the angle in :math:`[0, \pi]`.

    The axis is recovered from the skew symmetric part of the matrix.  When that part vanishes the matrix is either the
    identity (giving ``(1, 0, 0, 0)``) or a half turn, in which case the axis is recovered from the largest diagonal
    term.

    :return: the axis-angle components ``(ux, uy, uz, angle)``
    """

    if contains_nan(m00, m01, m02, m10, m11, m12, m20, m21, m22):
        return _NAN4

    result = _matrix_axis_and_angle(m00, m01, m02, m10, m11, m12, m20, m21, m22)

    if result is None:
        return 1.0, 0.0, 0.0, 0.0

    return result


def matrix_to_rotation_vector(m00: float, m01: float, m02: float,
                              m10: float, m11: float, m12: float,
                              m20: float, m21: float, m22: float) -> VECTOR_COMPONENTS:
    """
    Converts a rotation matrix into a rotation vector.
    """

    if contains_nan(m00, m01, m02, m10, m11, m12, m20, m21, m22):
        return _NAN3

    result = _matrix_axis_and_angle(m00, m01, m02, m10, m11, m12, m20, m21, m22)

    if result is None:
        return 0.0, 0.0, 0.0

    x, y, z, angle = result

    return x * angle, y * angle, z * angle


def matrix_to_quaternion(m00: float, m01: float, m02: float,
                         m10: float, m11: float, m12: float,
                         m20: float, m21: float, m22: float) -> QUATERNION_COMPONENTS:
    """
    This function converts a rotation matrix into a quaternion.

    One quaternion element is computed from the diagonal of the matrix and the three others are deduced from it by a
    division.  Since the quaternion is unit length at least one element has a magnitude of at least 0.5, so the first
    element found to be larger than 0.45 (equivalently ``4 q_i**2 - 1 > -0.19``) is used as the divisor.

    :return: the quaternion components ``(qx, qy, qz, qs)``
    """

    if contains_nan(m00, m01, m02, m10, m11, m12, m20, m21, m22):
        return _NAN4

    s = m00 + m11 + m22

    if s > -0.19:
        qs = 0.5 * math.sqrt(s + 1.0)
        inv = 0.25 / qs
        qx = inv * (m21 - m12)
        qy = inv * (m02 - m20)
        qz = inv * (m10 - m01)
        return qx, qy, qz, qs

    s = m00 - m11 - m22

    if s > -0.19:
        qx = 0.5 * math.sqrt(s + 1.0)
        inv = 0.25 / qx
        qs = inv * (m21 - m12)
        qy = inv * (m10 + m01)
        qz = inv * (m20 + m02)
        return qx, qy, qz, qs

    s = m11 - m00 - m22

    if s > -0.19:
        qy = 0.5 * math.sqrt(s + 1.0)
        inv = 0.25 / qy
        qs = inv * (m02 - m20)
        qx = inv * (m10 + m01)
        qz = inv * (m12 + m21)
        return qx, qy, qz, qs

    s = m22 - m00 - m11
    qz = 0.5 * math.sqrt(s + 1.0)
    inv = 0.25 / qz
    qs = inv * (m10 - m01)
    qx = inv * (m20 + m02)
    qy = inv * (m12 + m21)

    return qx, qy, qz, qs


def matrix_to_yaw_pitch_roll(m00: float, m01: float, m02: float,
                             m10: float, m11: float, m12: float,
                             m20: float, m21: float, m22: float) -> VECTOR_COMPONENTS:
    """
    Converts a rotation matrix into yaw-pitch-roll angles.
    """

    if contains_nan(m00, m01, m02, m10, m11, m12, m20, m21, m22):
        return _NAN3

    yaw = math.atan2(m10, m00)
    pitch = math.asin(-clamp(m20, -1.0, 1.0))
    roll = math.atan2(m21, m22)

    return yaw, pitch, roll


# ---------------------------------------------------------------------------------------------------------------------
# yaw-pitch-roll
# ---------------------------------------------------------------------------------------------------------------------

def yaw_pitch_roll_to_quaternion(yaw: float, pitch: float, roll: float) -> QUATERNION_COMPONENTS:
    r"""
    This function converts yaw-pitch-roll angles into a rotation quaternion.

    The result is the product :math:`\mathbf{q}_z(yaw)\otimes\mathbf{q}_y(pitch)\otimes\mathbf{q}_x(roll)` expanded
    in terms of the half angles.

    :param yaw: the rotation about the z axis in radians
    :param pitch: the rotation about the y axis in radians
    :param roll: the rotation about the x axis in radians
    :return: the quaternion components ``(qx, qy, qz, qs)``
    """

    if contains_nan(yaw, pitch, roll):
        return _NAN4

    half_yaw = 0.5 * yaw
    cos_yaw = math.cos(half_yaw)
    sin_yaw = math.sin(half_yaw)

    half_pitch = 0.5 * pitch
    cos_pitch = math.cos(half_pitch)
    sin_pitch = math.sin(half_pitch)

    half_roll = 0.5 * roll
    cos_roll = math.cos(half_roll)
    sin_roll = math.sin(half_roll)

    qs = cos_yaw * cos_pitch * cos_roll + sin_yaw * sin_pitch * sin_roll
    qx = cos_yaw * cos_pitch * sin_roll - sin_yaw * sin_pitch * cos_roll
    qy = sin_yaw * cos_pitch * sin_roll + cos_yaw * sin_pitch * cos_roll
    qz = sin_yaw * cos_pitch * cos_roll - cos_yaw * sin_pitch * sin_roll

    return qx, qy, qz, qs


def yaw_pitch_roll_to_matrix(yaw: float, pitch: float, roll: float) -> MATRIX_COMPONENTS:
    r"""
    Returns the 9 coefficients of :math:`\mathbf{R}_z(yaw)\mathbf{R}_y(pitch)\mathbf{R}_x(roll)`.
    """

    if contains_nan(yaw, pitch, roll):
        return _NAN9

    cos_yaw = math.cos(yaw)
    sin_yaw = math.sin(yaw)
    cos_pitch = math.cos(pitch)
    sin_pitch = math.sin(pitch)
    cos_roll = math.cos(roll)
    sin_roll = math.sin(roll)

    return (cos_yaw * cos_pitch,
            cos_yaw * sin_pitch * sin_roll - sin_yaw * cos_roll,
            cos_yaw * sin_pitch * cos_roll + sin_yaw * sin_roll,
            sin_yaw * cos_pitch,
            sin_yaw * sin_pitch * sin_roll + cos_yaw * cos_roll,
            sin_yaw * sin_pitch * cos_roll - cos_yaw * sin_roll,
            -sin_pitch,
            cos_pitch * sin_roll,
            cos_pitch * cos_roll)


def yaw_pitch_roll_to_axis_angle(yaw: float, pitch: float, roll: float) -> AXIS_ANGLE_COMPONENTS:
    """
    Converts yaw-pitch-roll angles into an axis-angle.
    """

    return quaternion_to_axis_angle(*yaw_pitch_roll_to_quaternion(yaw, pitch, roll))


# ---------------------------------------------------------------------------------------------------------------------
# rotation vector
# ---------------------------------------------------------------------------------------------------------------------

def rotation_vector_to_axis_angle(rx: float, ry: float, rz: float) -> AXIS_ANGLE_COMPONENTS:
    """
    Converts a rotation vector into an axis-angle.  A zero vector gives ``(1, 0, 0, 0)``.
    """

    if contains_nan(rx, ry, rz):
        return _NAN4

    vector_norm = norm(rx, ry, rz)

    if vector_norm > EPS:
        inverse_norm = 1.0 / vector_norm
        return rx * inverse_norm, ry * inverse_norm, rz * inverse_norm, vector_norm

    return 1.0, 0.0, 0.0, 0.0


def rotation_vector_to_quaternion(rx: float, ry: float, rz: float) -> QUATERNION_COMPONENTS:
    r"""
    This function converts a rotation vector into a rotation quaternion.

    For very small rotation vectors the first order approximation
    :math:`\mathbf{q}\approx\left[\begin{array}{cc}\frac{1}{2}\mathbf{r} & 1\end{array}\right]^T` is returned
    (the result is then not exactly unit length).

    :return: the quaternion components ``(qx, qy, qz, qs)``
    """

    if contains_nan(rx, ry, rz):
        return _NAN4

    vector_norm = norm(rx, ry, rz)

    if vector_norm < EPS:
        return 0.5 * rx, 0.5 * ry, 0.5 * rz, 1.0

    half_theta = 0.5 * vector_norm
    sin_half_theta = math.sin(half_theta) / vector_norm

    return rx * sin_half_theta, ry * sin_half_theta, rz * sin_half_theta, math.cos(half_theta)


def rotation_vector_to_matrix(rx: float, ry: float, rz: float) -> MATRIX_COMPONENTS:
    """
    Converts a rotation vector into the 9 coefficients of a rotation matrix.
    """

    return axis_angle_to_matrix(*rotation_vector_to_axis_angle(rx, ry, rz))
