r"""
This package implements an algebra of 3D rotations over four interchangeable representations.

.. _rotation-representation-table:

=================  =====================================================================================================
Representation     Description
=================  =====================================================================================================
axis-angle         A rotation of :math:`\theta` radians about an axis :math:`\hat{\mathbf{u}}`, stored as
                   ``(x, y, z, angle)``.  The axis should be unit length but is not normalized automatically.  The
                   identity is ``(1, 0, 0, 0)``.
quaternion         A 4 element rotation quaternion with the scalar last,
                   :math:`\mathbf{q}=\left[\begin{array}{c}\text{sin}(\frac{\theta}{2})\hat{\mathbf{u}}\\
                   \text{cos}(\frac{\theta}{2})\end{array}\right]`.  :math:`\mathbf{q}` and :math:`-\mathbf{q}`
                   represent the same rotation.  The identity is ``(0, 0, 0, 1)``.
rotation matrix    A :math:`3\times 3` orthonormal matrix.  Rotation matrices uniquely represent a single rotation.
yaw-pitch-roll     Three angles such that
                   :math:`\mathbf{R}=\mathbf{R}_z(yaw)\mathbf{R}_y(pitch)\mathbf{R}_x(roll)`.  The identity is
                   ``(0, 0, 0)``.
=================  =====================================================================================================

Each representation is a mutable orientation object (:class:`.AxisAngle`, :class:`.Quaternion`,
:class:`.RotationMatrix`, :class:`.YawPitchRoll`) and has a module of plain functions implementing the algebra on it:
:mod:`.axis_angle_tools`, :mod:`.quaternion_tools`, :mod:`.rotation_matrix_tools`, and :mod:`.yaw_pitch_roll_tools`.
Every function accepts operands of any representation and writes its result into an optional ``out`` argument which
may be the same object as an input.

:mod:`.orientation_tools` dispatches on the operand types and provides the finite difference and integration between
orientations and angular velocities, and :class:`.RotationAlgebra` is a configurable front end over all of it.

Degenerate input (a zero length axis or quaternion) is treated as the identity rotation and NaN input gives NaN output;
neither raises.
"""

import rotalgebra.rotations.core
import rotalgebra.rotations.orientations
import rotalgebra.rotations.rotation_matrix_tools
import rotalgebra.rotations.quaternion_tools
import rotalgebra.rotations.axis_angle_tools
import rotalgebra.rotations.yaw_pitch_roll_tools
import rotalgebra.rotations.orientation_tools
import rotalgebra.rotations.algebra

from rotalgebra.rotations.orientations import (Orientation3D, AxisAngle, Quaternion, RotationMatrix, YawPitchRoll,
                                               NEUTRAL_QUATERNION, IDENTITY_MATRIX)
from rotalgebra.rotations import (axis_angle_tools, quaternion_tools, rotation_matrix_tools, yaw_pitch_roll_tools,
                                  orientation_tools)
from rotalgebra.rotations.algebra import RotationAlgebra, RotationAlgebraOptions

__all__ = ['Orientation3D', 'AxisAngle', 'Quaternion', 'RotationMatrix', 'YawPitchRoll',
           'NEUTRAL_QUATERNION', 'IDENTITY_MATRIX',
           'axis_angle_tools', 'quaternion_tools', 'rotation_matrix_tools', 'yaw_pitch_roll_tools', 'orientation_tools',
           'RotationAlgebra', 'RotationAlgebraOptions']
