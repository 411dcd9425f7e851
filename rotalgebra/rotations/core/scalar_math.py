"""
Scalar helpers shared by every rotation algebra module.

This module contains the small numerical building blocks used throughout :mod:`rotalgebra.rotations`: norms (including
a fast square root for arguments known to be very close to 1), angle wrapping, clamping, linear interpolation, and the
scalar finite difference/integration primitives.  Everything here works on plain python floats.
"""

import math


__all__ = ['EPS', 'EPS_NORM_FAST_SQRT', 'EPS_ANGLE_SHIFT', 'CLAMP_EPS', 'TWO_PI', 'HALF_PI',
           'square_root', 'fast_square_root', 'norm', 'fast_norm', 'norm_squared',
           'shift_angle_in_range', 'trim_angle_minus_pi_to_pi', 'angle_difference_minus_pi_to_pi',
           'is_angle_zero', 'epsilon_equals', 'is_zero', 'contains_nan', 'med', 'clamp', 'interpolate',
           'finite_difference', 'finite_difference_angle', 'integrate', 'integrate_angle']


EPS: float = 1.0e-12
"""
Default tolerance used to detect degenerate axes, quaternions and angles
"""

EPS_NORM_FAST_SQRT: float = 2.107342e-08
"""
Range around 1 within which :func:`fast_square_root` uses the first order Taylor expansion.

Below this distance from 1 the linearization error is smaller than the double precision rounding of the exact root.
"""

EPS_ANGLE_SHIFT: float = 1.0e-12
"""
Tolerance used by :func:`shift_angle_in_range` to snap angles sitting on the upper bound back to the lower bound
"""

CLAMP_EPS: float = 1.0e-10
"""
Tolerance on the bounds given to :func:`clamp`
"""

TWO_PI: float = 2.0 * math.pi

HALF_PI: float = 0.5 * math.pi


def square_root(value: float) -> float:
    """
    Returns the exact square root of `value`.
    """

    return math.sqrt(value)


def fast_square_root(squared_value: float) -> float:
    r"""
    Computes the square root of a value that is expected to be close to 1.

    When :math:`|1-x|` is less than :data:`EPS_NORM_FAST_SQRT` the first order Taylor expansion

    .. math::
        \sqrt{x}\approx\frac{1+x}{2}

    is used instead of the exact square root.  Otherwise this is just :func:`math.sqrt`.

    This is intended for squared norms of vectors/quaternions that are already (almost) normalized.

    :param squared_value: the value to take the square root of
    :return: the (approximate) square root
    """

    if abs(1.0 - squared_value) < EPS_NORM_FAST_SQRT:
        return 0.5 * (1.0 + squared_value)

    return math.sqrt(squared_value)


def norm_squared(*components: float) -> float:
    """
    Returns the sum of the squares of the components (2, 3 or 4 of them in practice).
    """

    return sum(c * c for c in components)


def norm(*components: float) -> float:
    """
    Returns the Euclidean norm of the components.
    """

    return math.sqrt(norm_squared(*components))


def fast_norm(*components: float) -> float:
    """
    Returns the Euclidean norm of the components using :func:`fast_square_root`.
    """

    return fast_square_root(norm_squared(*components))


def shift_angle_in_range(angle: float, start: float) -> float:
    r"""
    Shifts `angle` by a multiple of :math:`2\pi` so that it lies in :math:`[start, start+2\pi)`.

    Angles within :data:`EPS_ANGLE_SHIFT` of the upper bound are snapped to `start` rather than to
    :math:`start+2\pi`.

    >>> from math import pi
    >>> round(shift_angle_in_range(3*pi/2, -pi), 12)
    -1.570796326795

    :param angle: the angle to shift in radians
    :param start: the lower bound of the range in radians
    :return: the shifted angle
    """

    start -= EPS_ANGLE_SHIFT

    # python's modulo already returns a value with the sign of the divisor
    delta = (angle - start) % TWO_PI

    if delta < 0.0:
        delta += TWO_PI

    return start + delta


def trim_angle_minus_pi_to_pi(angle: float) -> float:
    r"""
    Wraps `angle` into :math:`[-\pi, \pi)`.
    """

    return shift_angle_in_range(angle, -math.pi)


def angle_difference_minus_pi_to_pi(first_angle: float, second_angle: float) -> float:
    r"""
    Returns the signed shortest angular difference `first_angle - second_angle` in :math:`[-\pi, \pi)`.
    """

    return trim_angle_minus_pi_to_pi(first_angle - second_angle)


def is_angle_zero(angle: float, epsilon: float = EPS) -> bool:
    r"""
    Checks whether `angle` is a multiple of :math:`2\pi` to within `epsilon`.
    """

    angle = abs(angle) % TWO_PI

    if angle > math.pi:
        angle -= TWO_PI

    return abs(angle) <= epsilon


def epsilon_equals(expected: float, actual: float, epsilon: float) -> bool:
    """
    Checks whether two scalars are equal to within `epsilon`.

    Two NaNs are considered equal.
    """

    if math.isnan(expected) and math.isnan(actual):
        return True

    return abs(expected - actual) <= epsilon


def is_zero(value: float, epsilon: float = EPS) -> bool:
    return abs(value) < epsilon


def contains_nan(*values: float) -> bool:
    """
    Returns ``True`` if any of the values is NaN.
    """

    return any(math.isnan(v) for v in values)


def med(a: float, b: float, c: float) -> float:
    """
    Returns the median of three values.
    """

    if a > b:
        if a > c:
            return b if b > c else c
        return a

    if b > c:
        return a if a > c else c

    return b


def clamp(value: float, minimum: float, maximum: float) -> float:
    """
    Clamps `value` into ``[minimum, maximum]``.

    :param value: the value to clamp
    :param minimum: the lower bound
    :param maximum: the upper bound
    :return: the clamped value
    :raises RuntimeError: if `minimum` is greater than `maximum` by more than :data:`CLAMP_EPS`
    """

    if minimum > maximum + CLAMP_EPS:
        raise RuntimeError(f'Inconsistent min/max values: min = {minimum}, max = {maximum}')

    if value < minimum:
        return minimum
    if value > maximum:
        return maximum
    return value


def interpolate(a: float, b: float, alpha: float) -> float:
    """
    Linear interpolation ``(1 - alpha) * a + alpha * b``.  `alpha` is not clamped so this also extrapolates.
    """

    return (1.0 - alpha) * a + alpha * b


def finite_difference(previous: float, current: float, dt: float) -> float:
    """
    Returns the first order rate of change between two samples separated by `dt`.
    """

    return (current - previous) / dt


def finite_difference_angle(previous: float, current: float, dt: float) -> float:
    r"""
    Returns the rate of change between two angle samples using the shortest angular difference, so that crossing the
    :math:`\pm\pi` boundary does not produce a spurious jump.
    """

    return angle_difference_minus_pi_to_pi(current, previous) / dt


def integrate(previous: float, rate: float, dt: float) -> float:
    """
    Explicit Euler integration of `rate` over `dt` starting from `previous`.
    """

    return previous + rate * dt


def integrate_angle(previous: float, rate: float, dt: float) -> float:
    r"""
    Like :func:`integrate` but wraps the result into :math:`[-\pi, \pi)`.
    """

    return trim_angle_minus_pi_to_pi(previous + rate * dt)
