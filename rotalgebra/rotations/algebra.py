"""
This module provides :class:`RotationAlgebra`, a configurable front end to the rotation algebra modules.

The algebra modules are plain functions with fixed defaults.  :class:`RotationAlgebra` bundles the choices a caller
usually wants to make once (the tolerance of the zero and 2D checks, whether 2D transforms verify their input, whether
distances are folded into :math:`[0, \\pi]`, whether results are renormalized, and whether degenerate input should be
reported) into a :class:`RotationAlgebraOptions` dataclass, and dispatches to the right algebra module based on the
type of the operands.

Example:
    >>> from math import pi
    >>> from rotalgebra.rotations import RotationAlgebra, RotationAlgebraOptions, AxisAngle, Quaternion
    >>> algebra = RotationAlgebra(RotationAlgebraOptions(limit_distance_to_pi=True))
    >>> round(algebra.distance(AxisAngle(0, 0, 1, 1.5 * pi), Quaternion()), 12)
    1.570796326795

Degenerate input never raises.  When :attr:`~RotationAlgebraOptions.warn_on_degenerate` is set a ``UserWarning`` is
issued through the ``warnings`` module whenever an operand has a zero length axis or quaternion (which the algebra
treats as the identity) or contains NaN.
"""

import warnings

from dataclasses import dataclass

from rotalgebra._typing import ARRAY_LIKE, DOUBLE_ARRAY, DatetimeLike
from rotalgebra.exceptions import UnsupportedOrientationError

from rotalgebra.rotations import orientation_tools
from rotalgebra.rotations.core.scalar_math import EPS, norm
from rotalgebra.rotations.orientations import Orientation3D, AxisAngle, Quaternion, RotationMatrix, YawPitchRoll

from rotalgebra.utilities.mixin_classes import UserOptionConfigured
from rotalgebra.utilities.options import UserOptions


__all__ = ['RotationAlgebraOptions', 'RotationAlgebra']


_ORIENTATION_TYPES = (AxisAngle, Quaternion, RotationMatrix, YawPitchRoll)


@dataclass
class RotationAlgebraOptions(UserOptions):
    """
    Options for configuring the :class:`RotationAlgebra` class.
    """

    epsilon: float = 1e-12
    """
    The tolerance used by the zero orientation and 2D orientation checks and to detect degenerate operands.
    """

    check_if_orientation_2d: bool = True
    """
    Whether :meth:`RotationAlgebra.transform_2d` verifies that the orientation only rotates about the z axis.

    When this is ``True`` and the orientation is not 2D a :class:`.NotAnOrientation2DError` is raised.
    """

    limit_distance_to_pi: bool = False
    r"""
    Whether distances are folded into :math:`[0, \pi]` instead of :math:`[0, 2\pi]`.
    """

    warn_on_degenerate: bool = False
    """
    Whether to issue a warning when an operand is degenerate or contains NaN, or when an output had to be
    renormalized.
    """

    normalize_outputs: bool = False
    """
    Whether orientation outputs are renormalized (unit quaternion, unit axis, orthonormal matrix) before being
    returned.
    """

    def validate(self) -> None:
        if self.epsilon < 0:
            raise ValueError(f'epsilon must be non-negative, got {self.epsilon}')


class RotationAlgebra(UserOptionConfigured[RotationAlgebraOptions], RotationAlgebraOptions):
    """
    A configured front end over the rotation algebra.

    Every method accepts any of the four orientation types and dispatches on the type of the first orientation operand
    (see :mod:`.orientation_tools`).  The options can be changed on the instance at any time and restored with
    :meth:`reset_settings`.
    """

    def __init__(self, options: RotationAlgebraOptions | None = None) -> None:
        """
        :param options: the options to configure the instance with.  The defaults of :class:`RotationAlgebraOptions`
                        are used when ``None``.
        """

        super().__init__(RotationAlgebraOptions, options=options)

    # -----------------------------------------------------------------------------------------------------------------
    # helpers
    # -----------------------------------------------------------------------------------------------------------------

    def _is_degenerate(self, orientation: Orientation3D) -> bool:
        if isinstance(orientation, AxisAngle):
            return norm(orientation.x, orientation.y, orientation.z) < max(self.epsilon, EPS)

        if isinstance(orientation, Quaternion):
            return norm(*orientation.quaternion_components()) < max(self.epsilon, EPS)

        return False

    def _inspect(self, operation: str, *orientations: Orientation3D) -> None:
        for orientation in orientations:
            if not isinstance(orientation, _ORIENTATION_TYPES):
                raise UnsupportedOrientationError(operation, *orientations)

        if not self.warn_on_degenerate:
            return

        for orientation in orientations:
            if orientation.contains_nan():
                warnings.warn(f'{operation}: {orientation!r} contains NaN.  The result will be NaN.')
            elif self._is_degenerate(orientation):
                warnings.warn(f'{operation}: {orientation!r} is degenerate and is treated as the identity rotation.')

    def _finish(self, out: Orientation3D) -> Orientation3D:
        if not self.normalize_outputs:
            return out

        if isinstance(out, Quaternion):
            if self.warn_on_degenerate and abs(norm(*out.quaternion_components()) - 1.0) > max(self.epsilon, EPS):
                warnings.warn(f'{out!r} is not unit length and is being normalized.')
            out.normalize()
        elif isinstance(out, AxisAngle):
            out.normalize_axis()
        elif isinstance(out, RotationMatrix):
            out.normalize()

        return out

    # -----------------------------------------------------------------------------------------------------------------
    # operations
    # -----------------------------------------------------------------------------------------------------------------

    def is_zero_orientation(self, orientation: Orientation3D) -> bool:
        """
        Checks whether `orientation` is the identity rotation to within :attr:`epsilon`.
        """

        self._inspect('is_zero_orientation', orientation)

        return orientation.is_zero_orientation(self.epsilon)

    def multiply(self, orientation1: Orientation3D, orientation2: Orientation3D,
                 out: Orientation3D | None = None) -> Orientation3D:
        """
        Composes `orientation1` and `orientation2` with the algebra of `orientation1`.

        :param orientation1: the left operand
        :param orientation2: the right operand
        :param out: where to store the result (a new orientation of the same type as `orientation1` when ``None``)
        :return: the composed orientation
        """

        self._inspect('multiply', orientation1, orientation2)

        return self._finish(orientation_tools.multiply(orientation1, orientation2, out))

    def invert(self, orientation: Orientation3D, out: Orientation3D | None = None) -> Orientation3D:
        self._inspect('invert', orientation)

        return self._finish(orientation_tools.invert(orientation, out))

    def transform(self, orientation: Orientation3D, vector: ARRAY_LIKE,
                  out: DOUBLE_ARRAY | None = None) -> DOUBLE_ARRAY:
        self._inspect('transform', orientation)

        return orientation_tools.transform(orientation, vector, out)

    def inverse_transform(self, orientation: Orientation3D, vector: ARRAY_LIKE,
                          out: DOUBLE_ARRAY | None = None) -> DOUBLE_ARRAY:
        self._inspect('inverse_transform', orientation)

        return orientation_tools.inverse_transform(orientation, vector, out)

    def transform_2d(self, orientation: Orientation3D, vector: ARRAY_LIKE,
                     out: DOUBLE_ARRAY | None = None) -> DOUBLE_ARRAY:
        """
        Rotates a length 2 vector by the z rotation of `orientation`.

        The 2D check uses :attr:`epsilon` and is only done when :attr:`check_if_orientation_2d` is ``True``.

        :raises NotAnOrientation2DError: if the check is enabled and `orientation` is not 2D
        """

        self._inspect('transform_2d', orientation)

        if self.check_if_orientation_2d:
            orientation.check_if_orientation_2d(self.epsilon)

        return orientation_tools.algebra_for(orientation, 'transform_2d').transform_2d(
            orientation, vector, out, check_if_orientation_2d=False
        )

    def distance(self, orientation1: Orientation3D, orientation2: Orientation3D) -> float:
        r"""
        Returns the angle between two orientations, folded into :math:`[0, \pi]` if :attr:`limit_distance_to_pi`.
        """

        self._inspect('distance', orientation1, orientation2)

        return orientation_tools.distance(orientation1, orientation2, self.limit_distance_to_pi)

    def finite_difference(self, previous: Orientation3D, current: Orientation3D, dt: float,
                          out: DOUBLE_ARRAY | None = None) -> DOUBLE_ARRAY:
        """
        Returns the local frame angular velocity taking `previous` onto `current` in `dt`.
        """

        self._inspect('finite_difference', previous, current)

        return orientation_tools.finite_difference(previous, current, dt, out)

    def integrate(self, previous: Orientation3D, angular_velocity: ARRAY_LIKE, dt: float,
                  out: Orientation3D | None = None) -> Orientation3D:
        self._inspect('integrate', previous)

        return self._finish(orientation_tools.integrate(previous, angular_velocity, dt, out))

    def interpolate(self, orientation0: Orientation3D, orientation1: Orientation3D, time: float | DatetimeLike,
                    time0: float | DatetimeLike = 0, time1: float | DatetimeLike = 1,
                    out: Orientation3D | None = None) -> Orientation3D:
        """
        Interpolates between two orientations at a constant angular rate.

        The times can be floats or datetime like values, see :func:`.quaternion_tools.interpolation_fraction`.
        """

        self._inspect('interpolate', orientation0, orientation1)

        return self._finish(orientation_tools.interpolate(orientation0, orientation1, time, time0, time1, out))

    def convert(self, orientation: Orientation3D, target_type: type[Orientation3D]) -> Orientation3D:
        """
        Returns a new orientation of `target_type` representing the same rotation as `orientation`.

        :raises UnsupportedOrientationError: if `target_type` is not one of the four orientation types
        """

        self._inspect('convert', orientation)

        if not (isinstance(target_type, type) and issubclass(target_type, _ORIENTATION_TYPES)):
            raise UnsupportedOrientationError('convert', orientation, target_type)

        return self._finish(target_type.from_orientation(orientation))
