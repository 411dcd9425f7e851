# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


"""
rotalgebra

A rotation algebra over axis-angles, quaternions, rotation matrices, and yaw-pitch-roll angles.  See
:mod:`rotalgebra.rotations` for the representations and the operations available on them.
"""

from rotalgebra.exceptions import NotAnOrientation2DError, NotAMatrix2DError, UnsupportedOrientationError

from rotalgebra.rotations import (Orientation3D, AxisAngle, Quaternion, RotationMatrix, YawPitchRoll,
                                  RotationAlgebra, RotationAlgebraOptions)

__version__ = '1.0.0'

__all__ = ['NotAnOrientation2DError', 'NotAMatrix2DError', 'UnsupportedOrientationError',
           'Orientation3D', 'AxisAngle', 'Quaternion', 'RotationMatrix', 'YawPitchRoll',
           'RotationAlgebra', 'RotationAlgebraOptions']
