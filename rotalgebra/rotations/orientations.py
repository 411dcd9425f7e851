r"""
This module provides the four orientation types understood by the rotation algebra.

Each orientation is a small mutable value object wrapping a numpy array of its components:

=========================  =====================================  ==============================================
Class                      Components                             Zero orientation
=========================  =====================================  ==============================================
:class:`AxisAngle`         ``(x, y, z, angle)``                   ``(1, 0, 0, 0)``
:class:`Quaternion`        ``(x, y, z, s)`` (scalar last)         ``(0, 0, 0, 1)``
:class:`RotationMatrix`    3x3 array ``m00 .. m22``               identity
:class:`YawPitchRoll`      ``(yaw, pitch, roll)``                 ``(0, 0, 0)``
=========================  =====================================  ==============================================

All of them derive from :class:`Orientation3D`, which defines the contract used by the algebra modules:

* :meth:`~Orientation3D.set_quaternion` stores the orientation equivalent to a raw quaternion quadruple,
* :meth:`~Orientation3D.quaternion_components` and :meth:`~Orientation3D.matrix_components` give the raw components
  of the equivalent quaternion/rotation matrix,
* :meth:`~Orientation3D.set_to_zero`, :meth:`~Orientation3D.set_to_nan`, :meth:`~Orientation3D.contains_nan`,
  :meth:`~Orientation3D.is_zero_orientation`, :meth:`~Orientation3D.is_orientation_2d`, and
  :meth:`~Orientation3D.check_if_orientation_2d`.

Orientations are mutable so that the algebra routines can write their results in place (the output may be the same
object as one of the inputs).  They are therefore not hashable.
"""

import math

from abc import ABCMeta, abstractmethod
from typing import Self

import numpy as np

from rotalgebra._typing import ARRAY_LIKE, DOUBLE_ARRAY, QUATERNION_COMPONENTS, MATRIX_COMPONENTS
from rotalgebra.exceptions import NotAnOrientation2DError

from rotalgebra.rotations.core import conversions
from rotalgebra.rotations.core._helpers import _check_matrix_and_shape, _check_vector_and_shape
from rotalgebra.rotations.core.scalar_math import EPS, norm, is_angle_zero, trim_angle_minus_pi_to_pi


__all__ = ['Orientation3D', 'AxisAngle', 'Quaternion', 'RotationMatrix', 'YawPitchRoll',
           'NEUTRAL_QUATERNION', 'IDENTITY_MATRIX', 'ZERO_EPS']


ZERO_EPS: float = 1.0e-12
"""
Default tolerance for the zero orientation and 2D orientation checks
"""

NEUTRAL_QUATERNION: DOUBLE_ARRAY = np.array([0.0, 0.0, 0.0, 1.0])
"""
The components of the neutral (identity) quaternion.  Read only.
"""
NEUTRAL_QUATERNION.setflags(write=False)

IDENTITY_MATRIX: DOUBLE_ARRAY = np.eye(3)
"""
The identity rotation matrix.  Read only.
"""
IDENTITY_MATRIX.setflags(write=False)


class Orientation3D(metaclass=ABCMeta):
    """
    Abstract base class for every orientation representation.

    Subclasses store their components in the ``_components`` numpy array and implement the conversion hooks below.
    Two orientations compare equal with ``==`` only if they are the same type and have exactly the same components;
    use :meth:`geometrically_equals` to compare the rotations they represent.
    """

    _components: DOUBLE_ARRAY

    @abstractmethod
    def set_quaternion(self, qx: float, qy: float, qz: float, qs: float) -> None:
        """
        Stores the orientation equivalent to the (not necessarily unit) quaternion ``(qx, qy, qz, qs)``.
        """

    @abstractmethod
    def quaternion_components(self) -> QUATERNION_COMPONENTS:
        """
        Returns the components ``(qx, qy, qz, qs)`` of the quaternion equivalent to this orientation.
        """

    @abstractmethod
    def matrix_components(self) -> MATRIX_COMPONENTS:
        """
        Returns the 9 row major coefficients of the rotation matrix equivalent to this orientation.
        """

    @abstractmethod
    def set_to_zero(self) -> None:
        """
        Sets this orientation to the zero (identity) rotation.
        """

    @abstractmethod
    def is_zero_orientation(self, epsilon: float = ZERO_EPS) -> bool:
        """
        Checks whether this orientation is the zero rotation to within `epsilon`.
        """

    @abstractmethod
    def is_orientation_2d(self, epsilon: float = ZERO_EPS) -> bool:
        """
        Checks whether this orientation only rotates about the z axis to within `epsilon`.
        """

    def set_to_nan(self) -> None:
        self._components[...] = np.nan

    def contains_nan(self) -> bool:
        return bool(np.isnan(self._components).any())

    def check_if_orientation_2d(self, epsilon: float = ZERO_EPS) -> None:
        """
        Raises :class:`.NotAnOrientation2DError` if this orientation is not a rotation about the z axis only.

        :param epsilon: the tolerance to use
        :raises NotAnOrientation2DError: if the orientation is not 2D
        """

        if not self.is_orientation_2d(epsilon):
            raise NotAnOrientation2DError(self, epsilon)

    def set_orientation(self, other: 'Orientation3D') -> None:
        """
        Sets this orientation to be equivalent to `other`, whatever its type.
        """

        if type(other) is type(self):
            self._components[...] = other._components
        else:
            self.set_quaternion(*other.quaternion_components())

    def rotation_angle(self) -> float:
        r"""
        Returns the angle of the rotation from the zero orientation in :math:`[0, 2\pi]`.

        This is computed as :math:`2\text{atan2}(\|\mathbf{q}_v\|, q_s)` from the equivalent quaternion.
        """

        qx, qy, qz, qs = self.quaternion_components()

        return 2.0 * math.atan2(norm(qx, qy, qz), qs)

    def as_rotation_vector(self) -> DOUBLE_ARRAY:
        """
        Returns the equivalent rotation vector as a numpy array.
        """

        return np.array(conversions.quaternion_to_rotation_vector(*self.quaternion_components()))

    def as_matrix(self) -> DOUBLE_ARRAY:
        """
        Returns the equivalent rotation matrix as a 3x3 numpy array.
        """

        return np.array(self.matrix_components()).reshape(3, 3)

    @property
    def components(self) -> DOUBLE_ARRAY:
        """
        A copy of the raw components of this orientation.
        """

        return self._components.copy()

    def copy(self) -> Self:
        """
        Returns a deep copy of this orientation.
        """

        out = self.__class__.__new__(self.__class__)
        out._components = self._components.copy()
        return out

    def epsilon_equals(self, other: object, epsilon: float) -> bool:
        """
        Checks that `other` is the same type and that each component differs by at most `epsilon`.
        """

        if type(other) is not type(self):
            return False

        assert isinstance(other, Orientation3D)

        return bool(np.allclose(self._components, other._components, rtol=0.0, atol=epsilon, equal_nan=True))

    def geometrically_equals(self, other: 'Orientation3D', epsilon: float) -> bool:
        r"""
        Checks that `other` (of any type) represents the same rotation as this orientation.

        The test is performed on the angle of the relative rotation, folded into :math:`[0, \pi]`.
        """

        x1, y1, z1, s1 = self.quaternion_components()
        x2, y2, z2, s2 = other.quaternion_components()

        # conjugate of the first times the second
        x = s1 * x2 - x1 * s2 - y1 * z2 + z1 * y2
        y = s1 * y2 + x1 * z2 - y1 * s2 - z1 * x2
        z = s1 * z2 - x1 * y2 + y1 * x2 - z1 * s2
        s = s1 * s2 + x1 * x2 + y1 * y2 + z1 * z2

        return 2.0 * math.atan2(norm(x, y, z), abs(s)) <= epsilon

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented

        assert isinstance(other, Orientation3D)

        return bool(np.array_equal(self._components, other._components))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}({", ".join(repr(float(c)) for c in self._components.ravel())})'


class AxisAngle(Orientation3D):
    """
    An orientation expressed as a rotation of :attr:`angle` radians about the axis ``(x, y, z)``.

    The axis is stored as given and is not normalized automatically (use :meth:`normalize_axis`).  The algebra
    routines normalize it internally where needed, except for the vector transformation which uses the raw axis.
    """

    def __init__(self, x: float = 1.0, y: float = 0.0, z: float = 0.0, angle: float = 0.0):
        self._components = np.array([x, y, z, angle], dtype=np.float64)

    @classmethod
    def from_rotation_vector(cls, rotation_vector: ARRAY_LIKE) -> Self:
        """
        Creates an axis-angle from a rotation vector (axis times angle).
        """

        rx, ry, rz = _check_vector_and_shape(rotation_vector)

        return cls(*conversions.rotation_vector_to_axis_angle(rx, ry, rz))

    @classmethod
    def from_orientation(cls, orientation: Orientation3D) -> Self:
        out = cls()
        out.set_orientation(orientation)
        return out

    @property
    def x(self) -> float:
        return float(self._components[0])

    @x.setter
    def x(self, value: float):
        self._components[0] = value

    @property
    def y(self) -> float:
        return float(self._components[1])

    @y.setter
    def y(self, value: float):
        self._components[1] = value

    @property
    def z(self) -> float:
        return float(self._components[2])

    @z.setter
    def z(self, value: float):
        self._components[2] = value

    @property
    def angle(self) -> float:
        """
        The rotation angle in radians
        """
        return float(self._components[3])

    @angle.setter
    def angle(self, value: float):
        self._components[3] = value

    @property
    def axis(self) -> DOUBLE_ARRAY:
        """
        A copy of the (not necessarily unit) rotation axis
        """
        return self._components[:3].copy()

    def set(self, x: float, y: float, z: float, angle: float) -> None:
        self._components[:] = (x, y, z, angle)

    def set_quaternion(self, qx: float, qy: float, qz: float, qs: float) -> None:
        self._components[:] = conversions.quaternion_to_axis_angle(qx, qy, qz, qs)

    def set_to_zero(self) -> None:
        self._components[:] = (1.0, 0.0, 0.0, 0.0)

    def normalize_axis(self) -> None:
        """
        Scales the axis to unit length in place.  A degenerate axis makes this the zero orientation.
        """

        axis_norm = norm(*self._components[:3])

        if axis_norm < EPS:
            self.set_to_zero()
        else:
            self._components[:3] /= axis_norm

    def quaternion_components(self) -> QUATERNION_COMPONENTS:
        return conversions.axis_angle_to_quaternion(*self._components)

    def matrix_components(self) -> MATRIX_COMPONENTS:
        return conversions.axis_angle_to_matrix(*self._components)

    def is_zero_orientation(self, epsilon: float = ZERO_EPS) -> bool:
        return abs(trim_angle_minus_pi_to_pi(self.angle)) < epsilon or norm(*self._components[:3]) < epsilon

    def is_orientation_2d(self, epsilon: float = ZERO_EPS) -> bool:
        angle = self.angle
        return abs(self.x * angle) <= epsilon and abs(self.y * angle) <= epsilon


class Quaternion(Orientation3D):
    """
    A rotation quaternion ``(x, y, z, s)`` with the scalar last.

    :meth:`set` (and the constructor) normalize the input so that the quaternion is unit length, :meth:`set_unsafe`
    stores the components as given.  A zero norm input to :meth:`set` gives the neutral quaternion.
    """

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0, s: float = 1.0):
        self._components = np.zeros(4, dtype=np.float64)
        self.set(x, y, z, s)

    @classmethod
    def from_rotation_vector(cls, rotation_vector: ARRAY_LIKE) -> Self:
        """
        Creates a quaternion from a rotation vector (axis times angle).
        """

        rx, ry, rz = _check_vector_and_shape(rotation_vector)

        return cls(*conversions.rotation_vector_to_quaternion(rx, ry, rz))

    @classmethod
    def from_array(cls, quaternion: ARRAY_LIKE) -> Self:
        """
        Creates a quaternion from a length 4 array like ``[x, y, z, s]``.
        """

        return cls(*_check_vector_and_shape(quaternion, 4))

    @classmethod
    def from_orientation(cls, orientation: Orientation3D) -> Self:
        out = cls()
        out.set_orientation(orientation)
        return out

    @property
    def x(self) -> float:
        return float(self._components[0])

    @property
    def y(self) -> float:
        return float(self._components[1])

    @property
    def z(self) -> float:
        return float(self._components[2])

    @property
    def s(self) -> float:
        """
        The scalar component
        """
        return float(self._components[3])

    @property
    def vector(self) -> DOUBLE_ARRAY:
        """
        A copy of the vector part ``(x, y, z)``
        """
        return self._components[:3].copy()

    def set(self, x: float, y: float, z: float, s: float) -> None:
        self._components[:] = (x, y, z, s)
        self.normalize()

    def set_unsafe(self, x: float, y: float, z: float, s: float) -> None:
        self._components[:] = (x, y, z, s)

    def set_quaternion(self, qx: float, qy: float, qz: float, qs: float) -> None:
        self.set(qx, qy, qz, qs)

    def set_to_zero(self) -> None:
        self._components[:] = NEUTRAL_QUATERNION

    def normalize(self) -> None:
        """
        Scales this quaternion to unit length in place.  NaN components are left untouched.
        """

        if self.contains_nan():
            return

        quaternion_norm = norm(*self._components)

        if quaternion_norm < EPS:
            self.set_to_zero()
        else:
            self._components /= quaternion_norm

    def normalize_and_limit_to_pi(self) -> None:
        r"""
        Normalizes this quaternion and negates it if needed so that the scalar part is positive, which limits the
        angle it represents to :math:`[-\pi, \pi]`.
        """

        self.normalize()

        if self._components[3] < 0.0:
            self._components *= -1.0

    def quaternion_components(self) -> QUATERNION_COMPONENTS:
        x, y, z, s = self._components
        return float(x), float(y), float(z), float(s)

    def matrix_components(self) -> MATRIX_COMPONENTS:
        return conversions.quaternion_to_matrix(*self._components)

    def is_zero_orientation(self, epsilon: float = ZERO_EPS) -> bool:
        return abs(self.x) < epsilon and abs(self.y) < epsilon and abs(self.z) < epsilon

    def is_orientation_2d(self, epsilon: float = ZERO_EPS) -> bool:
        return abs(self.x) <= epsilon and abs(self.y) <= epsilon


def _coefficient(row: int, column: int) -> property:
    def getter(self: 'RotationMatrix') -> float:
        return float(self._components[row, column])

    return property(getter, doc=f'The coefficient at row {row}, column {column}')


class RotationMatrix(Orientation3D):
    r"""
    A 3x3 orthonormal matrix with a determinant of +1.

    The matrix rotates vectors as :math:`\mathbf{v}'=\mathbf{R}\mathbf{v}`.  :meth:`set` stores the matrix as given;
    call :meth:`normalize` to project an almost orthonormal matrix back onto the rotation group.
    """

    m00 = _coefficient(0, 0)
    m01 = _coefficient(0, 1)
    m02 = _coefficient(0, 2)
    m10 = _coefficient(1, 0)
    m11 = _coefficient(1, 1)
    m12 = _coefficient(1, 2)
    m20 = _coefficient(2, 0)
    m21 = _coefficient(2, 1)
    m22 = _coefficient(2, 2)

    def __init__(self, matrix: ARRAY_LIKE | None = None):
        self._components = np.eye(3, dtype=np.float64)

        if matrix is not None:
            self.set(matrix)

    @classmethod
    def from_rotation_vector(cls, rotation_vector: ARRAY_LIKE) -> Self:
        """
        Creates a rotation matrix from a rotation vector (axis times angle).
        """

        rx, ry, rz = _check_vector_and_shape(rotation_vector)

        out = cls()
        out.set_components(*conversions.rotation_vector_to_matrix(rx, ry, rz))
        return out

    @classmethod
    def from_orientation(cls, orientation: Orientation3D) -> Self:
        out = cls()
        out.set_orientation(orientation)
        return out

    @property
    def matrix(self) -> DOUBLE_ARRAY:
        """
        A copy of the 3x3 matrix
        """
        return self._components.copy()

    def set(self, matrix: ARRAY_LIKE) -> None:
        self._components[...] = _check_matrix_and_shape(matrix)

    def set_components(self, m00: float, m01: float, m02: float,
                       m10: float, m11: float, m12: float,
                       m20: float, m21: float, m22: float) -> None:
        self._components[...] = ((m00, m01, m02), (m10, m11, m12), (m20, m21, m22))

    def set_orientation(self, other: Orientation3D) -> None:
        if isinstance(other, RotationMatrix):
            self._components[...] = other._components
        else:
            self.set_components(*other.matrix_components())

    def set_quaternion(self, qx: float, qy: float, qz: float, qs: float) -> None:
        self.set_components(*conversions.quaternion_to_matrix(qx, qy, qz, qs))

    def set_to_zero(self) -> None:
        self._components[...] = IDENTITY_MATRIX

    def normalize(self) -> None:
        """
        Replaces this matrix with the closest rotation matrix (in the Frobenius sense) using a singular value
        decomposition.
        """

        if self.contains_nan():
            return

        u, _, vt = np.linalg.svd(self._components)

        rotation = u @ vt

        if np.linalg.det(rotation) < 0:
            u[:, -1] *= -1
            rotation = u @ vt

        self._components[...] = rotation

    def quaternion_components(self) -> QUATERNION_COMPONENTS:
        return conversions.matrix_to_quaternion(*self.matrix_components())

    def matrix_components(self) -> MATRIX_COMPONENTS:
        return tuple(float(c) for c in self._components.ravel())  # type: ignore[return-value]

    def is_zero_orientation(self, epsilon: float = ZERO_EPS) -> bool:
        return conversions.is_identity_matrix(*self.matrix_components(), epsilon=epsilon)

    def is_orientation_2d(self, epsilon: float = ZERO_EPS) -> bool:
        m = self._components
        return (abs(m[0, 2]) <= epsilon and abs(m[1, 2]) <= epsilon and abs(m[2, 0]) <= epsilon and
                abs(m[2, 1]) <= epsilon and abs(m[2, 2] - 1.0) <= epsilon)

    def rotation_angle(self) -> float:
        # natively in [0, pi]
        return conversions.matrix_angle(*self.matrix_components())


class YawPitchRoll(Orientation3D):
    r"""
    An orientation expressed with yaw, pitch, and roll angles such that
    :math:`\mathbf{R}=\mathbf{R}_z(yaw)\mathbf{R}_y(pitch)\mathbf{R}_x(roll)`.

    At a pitch of :math:`\pm\pi/2` yaw and roll rotate about the same axis (gimbal lock) and only their sum (or
    difference) is meaningful.
    """

    def __init__(self, yaw: float = 0.0, pitch: float = 0.0, roll: float = 0.0):
        self._components = np.array([yaw, pitch, roll], dtype=np.float64)

    @classmethod
    def from_rotation_vector(cls, rotation_vector: ARRAY_LIKE) -> Self:
        """
        Creates a yaw-pitch-roll from a rotation vector (axis times angle).
        """

        rx, ry, rz = _check_vector_and_shape(rotation_vector)

        return cls(*conversions.quaternion_to_yaw_pitch_roll(*conversions.rotation_vector_to_quaternion(rx, ry, rz)))

    @classmethod
    def from_orientation(cls, orientation: Orientation3D) -> Self:
        out = cls()
        out.set_orientation(orientation)
        return out

    @property
    def yaw(self) -> float:
        """
        The rotation about the z axis in radians
        """
        return float(self._components[0])

    @yaw.setter
    def yaw(self, value: float):
        self._components[0] = value

    @property
    def pitch(self) -> float:
        """
        The rotation about the y axis in radians
        """
        return float(self._components[1])

    @pitch.setter
    def pitch(self, value: float):
        self._components[1] = value

    @property
    def roll(self) -> float:
        """
        The rotation about the x axis in radians
        """
        return float(self._components[2])

    @roll.setter
    def roll(self, value: float):
        self._components[2] = value

    def set(self, yaw: float, pitch: float, roll: float) -> None:
        self._components[:] = (yaw, pitch, roll)

    def set_orientation(self, other: Orientation3D) -> None:
        if isinstance(other, YawPitchRoll):
            self._components[:] = other._components
        elif isinstance(other, RotationMatrix):
            self._components[:] = conversions.matrix_to_yaw_pitch_roll(*other.matrix_components())
        else:
            self.set_quaternion(*other.quaternion_components())

    def set_quaternion(self, qx: float, qy: float, qz: float, qs: float) -> None:
        self._components[:] = conversions.quaternion_to_yaw_pitch_roll(qx, qy, qz, qs)

    def set_to_zero(self) -> None:
        self._components[:] = 0.0

    def quaternion_components(self) -> QUATERNION_COMPONENTS:
        return conversions.yaw_pitch_roll_to_quaternion(*self._components)

    def matrix_components(self) -> MATRIX_COMPONENTS:
        return conversions.yaw_pitch_roll_to_matrix(*self._components)

    def is_zero_orientation(self, epsilon: float = ZERO_EPS) -> bool:
        return (is_angle_zero(self.yaw, epsilon) and is_angle_zero(self.pitch, epsilon) and
                is_angle_zero(self.roll, epsilon))

    def is_orientation_2d(self, epsilon: float = ZERO_EPS) -> bool:
        return abs(self.pitch) <= epsilon and abs(self.roll) <= epsilon
