"""
This module defines the exceptions raised by rotalgebra.

Only two kinds of problems are ever signaled by raising:

* a geometric precondition the caller explicitly asked to be checked (for instance that an orientation only rotates
  about the z axis before applying it to a 2D vector), signaled by :class:`NotAnOrientation2DError` or
  :class:`NotAMatrix2DError`, and
* a programmer error, such as requesting an operation on a pair of representations which has no implementation,
  signaled by :class:`UnsupportedOrientationError` (or a plain ``RuntimeError`` for invalid scalar bounds).

Degenerate geometric input (a zero length axis, a zero norm quaternion, NaN angles) never raises.
"""

from typing import Any


__all__ = ['NotAnOrientation2DError', 'NotAMatrix2DError', 'UnsupportedOrientationError']


class NotAnOrientation2DError(ValueError):
    """
    Raised when an orientation that was required to represent a rotation about the z axis only does not.
    """

    def __init__(self, orientation: Any, epsilon: float | None = None):
        message = f'The orientation is not 2D: {orientation!r}'
        if epsilon is not None:
            message += f' (epsilon={epsilon})'
        super().__init__(message)

        self.orientation = orientation
        """
        The offending orientation
        """


class NotAMatrix2DError(ValueError):
    """
    Raised when a 3x3 matrix that was required to only act in the XY plane does not.
    """

    def __init__(self, matrix: Any, epsilon: float | None = None):
        message = f'The matrix is not 2D:\n{matrix!r}'
        if epsilon is not None:
            message += f'\n(epsilon={epsilon})'
        super().__init__(message)

        self.matrix = matrix
        """
        The offending matrix
        """


class UnsupportedOrientationError(TypeError):
    """
    Raised when an operation is requested for a representation (or pair of representations) that has no
    implementation.

    The types involved are stored in :attr:`types` to make debugging easier.
    """

    def __init__(self, operation: str, *operands: Any):
        self.types = tuple(type(operand) for operand in operands)
        """
        The concrete types of the operands that were provided
        """

        names = ', '.join(t.__name__ for t in self.types)
        super().__init__(f'{operation} is not supported for the operand type(s): {names}')
