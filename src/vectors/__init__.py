"""Vectors module.

This package contains the two vector representations and their operators:
- DenseVector: fixed-length float32 array, zeros stored explicitly
- SparseVector: strictly increasing indices with non-zero float32 values
- merge: merge-join primitives used by all sparse-sparse operators
- operators: named functions for every operator and representation pair
"""

from __future__ import annotations

from vectors.dense import DenseVector
from vectors.operators import (
    Vector,
    add,
    divide,
    dot,
    fold2,
    map2,
    map_vector,
    multiply,
    negate,
    scale,
    subtract,
    sum_by,
)
from vectors.sparse import SparseVector

__all__ = [
    "Vector",
    "DenseVector",
    "SparseVector",
    # Operators
    "add",
    "subtract",
    "multiply",
    "negate",
    "scale",
    "divide",
    "dot",
    # Combinators
    "map_vector",
    "map2",
    "fold2",
    "sum_by",
]
