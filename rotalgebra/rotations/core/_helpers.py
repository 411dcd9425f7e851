import numpy as np

from rotalgebra._typing import ARRAY_LIKE, DOUBLE_ARRAY


def _check_array_and_shape(input: ARRAY_LIKE, shape: tuple[int, ...]) -> DOUBLE_ARRAY:
    in_shape = np.shape(input)

    if not in_shape:
        raise ValueError('The input must be shaped')

    if in_shape != shape:
        raise ValueError(f'The input must have shape {shape} but has shape {in_shape}')

    return np.asanyarray(input, dtype=np.float64)


def _check_vector_and_shape(vector: ARRAY_LIKE, length: int = 3) -> DOUBLE_ARRAY:
    return _check_array_and_shape(vector, (length,))


def _check_matrix_and_shape(matrix: ARRAY_LIKE) -> DOUBLE_ARRAY:
    return _check_array_and_shape(matrix, (3, 3))


def _vector_components(vector: ARRAY_LIKE, length: int = 3) -> tuple[float, ...]:
    """
    Returns the components of `vector` as python floats so they can be staged before any output is written.
    """

    return tuple(float(c) for c in _check_vector_and_shape(vector, length))


def _matrix_components(matrix: ARRAY_LIKE) -> tuple[float, ...]:
    return tuple(float(c) for c in _check_matrix_and_shape(matrix).ravel())


def _prepare_output(out: DOUBLE_ARRAY | None, shape: tuple[int, ...]) -> DOUBLE_ARRAY:
    """
    Returns `out` after checking it can be written in place, or a new zero array of `shape`.
    """

    if out is None:
        return np.zeros(shape, dtype=np.float64)

    if not isinstance(out, np.ndarray):
        raise TypeError('out must be a numpy array so that it can be updated in place')

    if out.shape != shape:
        raise ValueError(f'out must have shape {shape} but has shape {out.shape}')

    return out
