"""
This package contains the scalar building blocks of the rotation algebra.

It has no dependencies on the orientation types so that every other module can use it without circular imports.

* :mod:`.scalar_math` provides norms, angle wrapping, clamping, and the scalar interpolation/rate primitives,
* :mod:`.conversions` converts raw components between axis-angle, quaternion, rotation matrix, yaw-pitch-roll, and
  rotation vector.
"""

import rotalgebra.rotations.core.scalar_math
import rotalgebra.rotations.core.conversions

from rotalgebra.rotations.core.scalar_math import (shift_angle_in_range, trim_angle_minus_pi_to_pi,
                                                   angle_difference_minus_pi_to_pi, fast_square_root, clamp)

__all__ = ['shift_angle_in_range', 'trim_angle_minus_pi_to_pi', 'angle_difference_minus_pi_to_pi',
           'fast_square_root', 'clamp']
