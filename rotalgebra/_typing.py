from typing import Union, Tuple
from datetime import datetime
from pandas import Timestamp

import numpy as np
import numpy.typing as npt

DOUBLE_ARRAY = npt.NDArray[np.float64]
ARRAY_LIKE = npt.ArrayLike

DatetimeLike = Union[datetime, Timestamp, np.datetime64]

QUATERNION_COMPONENTS = Tuple[float, float, float, float]
AXIS_ANGLE_COMPONENTS = Tuple[float, float, float, float]
VECTOR_COMPONENTS = Tuple[float, float, float]
MATRIX_COMPONENTS = Tuple[float, float, float, float, float, float, float, float, float]
