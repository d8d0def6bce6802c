"""Core type definitions shared by the vector and structured SVM packages.

This module contains:
- numpy dtypes used for stored vector components
- Type aliases for index/value arrays and element functions
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import numpy as np

__all__ = [
    "VALUE_DTYPE",
    "INDEX_DTYPE",
    "ValueArray",
    "IndexArray",
    "UnaryOp",
    "BinaryOp",
    "FoldOp",
    "IndexedOp",
]

# Vector components are single precision, indices are 64-bit
VALUE_DTYPE = np.float32
INDEX_DTYPE = np.int64

# Type aliases for the raw storage of vectors
ValueArray = np.ndarray
IndexArray = np.ndarray

# Element functions
UnaryOp = Callable[[float], float]
BinaryOp = Callable[[float, float], float]
FoldOp = Callable[[Any, float, float], Any]
IndexedOp = Callable[[int, float], float]
