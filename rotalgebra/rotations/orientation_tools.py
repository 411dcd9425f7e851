"""
Representation independent entry points.

The functions here accept any of the four orientation types and dispatch to the algebra module that fits the
operands.  :func:`finite_difference` and :func:`integrate` convert between orientations and angular velocities
expressed in the local (body) frame of the previous orientation.  The remaining functions dispatch on the type of the
first operand so that, for instance, ``multiply(axis_angle, quaternion)`` composes with the axis-angle algebra and
returns a new :class:`.AxisAngle`.
"""

from rotalgebra._typing import ARRAY_LIKE, DOUBLE_ARRAY, DatetimeLike
from rotalgebra.exceptions import UnsupportedOrientationError

from rotalgebra.rotations import axis_angle_tools, quaternion_tools, rotation_matrix_tools, yaw_pitch_roll_tools
from rotalgebra.rotations.core import conversions
from rotalgebra.rotations.core._helpers import _prepare_output, _vector_components
from rotalgebra.rotations.orientations import Orientation3D, AxisAngle, Quaternion, RotationMatrix, YawPitchRoll


__all__ = ['algebra_for', 'finite_difference', 'integrate', 'multiply', 'transform', 'inverse_transform',
           'distance', 'invert', 'interpolate']


_ALGEBRAS = {AxisAngle: axis_angle_tools,
             Quaternion: quaternion_tools,
             RotationMatrix: rotation_matrix_tools,
             YawPitchRoll: yaw_pitch_roll_tools}


def algebra_for(orientation: Orientation3D, operation: str = 'orientation algebra', *operands):
    """
    Returns the algebra module that handles `orientation`.

    :raises UnsupportedOrientationError: if `orientation` is not one of the four orientation types
    """

    for orientation_type, module in _ALGEBRAS.items():
        if isinstance(orientation, orientation_type):
            return module

    raise UnsupportedOrientationError(operation, orientation, *operands)


def _check_pair(previous, current, operation: str):
    if not (isinstance(previous, tuple(_ALGEBRAS)) and isinstance(current, tuple(_ALGEBRAS))):
        raise UnsupportedOrientationError(operation, previous, current)


def finite_difference(previous: Orientation3D, current: Orientation3D, dt: float,
                      out: DOUBLE_ARRAY | None = None) -> DOUBLE_ARRAY:
    r"""
    This function estimates the angular velocity that takes `previous` onto `current` in `dt`.

    The velocity is expressed in the local frame of `previous`:

    .. math::
        \boldsymbol{\omega} = \frac{\log\left(\mathbf{R}_p^{-1}\mathbf{R}_c\right)}{\Delta t}

    Any pair of orientation types is accepted.  When either one is a :class:`.RotationMatrix` the difference is formed
    on the matrices, otherwise on the quaternions (along the shorter arc).

    :param previous: the orientation at the start of the interval
    :param current: the orientation at the end of the interval
    :param dt: the length of the interval
    :param out: where to store the angular velocity
    :return: the angular velocity as a length 3 array
    :raises UnsupportedOrientationError: if either argument is not an orientation
    """

    _check_pair(previous, current, 'finite_difference')

    if isinstance(previous, RotationMatrix) or isinstance(current, RotationMatrix):
        return rotation_matrix_tools.finite_difference(previous, current, dt, out)

    qx, qy, qz, qs = quaternion_tools.multiply_components(*previous.quaternion_components(), True,
                                                          *current.quaternion_components(), False)

    if qs < 0:
        qx, qy, qz, qs = -qx, -qy, -qz, -qs

    rx, ry, rz = conversions.quaternion_to_rotation_vector(qx, qy, qz, qs)

    out = _prepare_output(out, (3,))
    out[:] = (rx / dt, ry / dt, rz / dt)

    return out


def integrate(previous: Orientation3D, angular_velocity: ARRAY_LIKE, dt: float,
              out: Orientation3D | None = None) -> Orientation3D:
    r"""
    Applies a local frame `angular_velocity` to `previous` for `dt`, the inverse of :func:`finite_difference`.

    When `out` is ``None`` the result has the same type as `previous`.
    """

    if not isinstance(previous, tuple(_ALGEBRAS)):
        raise UnsupportedOrientationError('integrate', previous)

    if out is None:
        out = type(previous)()

    if isinstance(previous, RotationMatrix):
        return rotation_matrix_tools.integrate(previous, angular_velocity, dt, out)

    wx, wy, wz = _vector_components(angular_velocity)

    delta = conversions.rotation_vector_to_quaternion(wx * dt, wy * dt, wz * dt)

    out.set_quaternion(*quaternion_tools.multiply_components(*previous.quaternion_components(), False,
                                                             *delta, False))

    return out


def multiply(orientation1: Orientation3D, orientation2: Orientation3D,
             out: Orientation3D | None = None) -> Orientation3D:
    """
    Composes two orientations with the algebra of the first one.
    """

    return algebra_for(orientation1, 'multiply', orientation2).multiply(orientation1, orientation2, out)


def transform(orientation: Orientation3D, vector: ARRAY_LIKE, out: DOUBLE_ARRAY | None = None) -> DOUBLE_ARRAY:
    return algebra_for(orientation, 'transform').transform(orientation, vector, out)


def inverse_transform(orientation: Orientation3D, vector: ARRAY_LIKE,
                      out: DOUBLE_ARRAY | None = None) -> DOUBLE_ARRAY:
    return algebra_for(orientation, 'inverse_transform').inverse_transform(orientation, vector, out)


def distance(orientation1: Orientation3D, orientation2: Orientation3D, limit_to_pi: bool = False) -> float:
    """
    Returns the angular distance between two orientations.

    :raises UnsupportedOrientationError: if either argument is not an orientation
    """

    _check_pair(orientation1, orientation2, 'distance')

    return algebra_for(orientation1, 'distance').distance(orientation1, orientation2, limit_to_pi)


def invert(orientation: Orientation3D, out: Orientation3D | None = None) -> Orientation3D:
    return algebra_for(orientation, 'invert').invert(orientation, out)


def interpolate(orientation0: Orientation3D, orientation1: Orientation3D, time: float | DatetimeLike,
                time0: float | DatetimeLike = 0, time1: float | DatetimeLike = 1,
                out: Orientation3D | None = None) -> Orientation3D:
    """
    Interpolates between two orientations at a constant angular rate.

    Rotation matrices are interpolated on the matrices, everything else with :func:`.quaternion_tools.slerp`.  The
    result has the type of `orientation0` when `out` is ``None``.
    """

    _check_pair(orientation0, orientation1, 'interpolate')

    if out is None:
        out = type(orientation0)()

    if isinstance(orientation0, RotationMatrix):
        fraction = quaternion_tools.interpolation_fraction(time, time0, time1)

        return rotation_matrix_tools.interpolate(orientation0, orientation1, fraction, out)

    return quaternion_tools.slerp(orientation0, orientation1, time, time0, time1, out)
