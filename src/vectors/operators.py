"""Named vector operators.

Function forms of the operators defined on DenseVector and SparseVector, so
callers can pass them around or use them without operator syntax. Elementwise
operators are defined for dense-dense and sparse-sparse pairs; mixing the two
representations raises TypeError. ``dot`` is defined for every pair.
"""

from __future__ import annotations

from typing import Any, TypeVar

from core.types import BinaryOp, FoldOp, IndexedOp, UnaryOp
from vectors.dense import DenseVector
from vectors.sparse import SparseVector

__all__ = [
    "Vector",
    "add",
    "subtract",
    "multiply",
    "negate",
    "scale",
    "divide",
    "dot",
    "map_vector",
    "map2",
    "fold2",
    "sum_by",
]

# Closed union of the two vector representations
Vector = DenseVector | SparseVector

_V = TypeVar("_V", DenseVector, SparseVector)


def _check_pair(a: Any, b: Any, op: str) -> None:
    if isinstance(a, DenseVector) and isinstance(b, DenseVector):
        return
    if isinstance(a, SparseVector) and isinstance(b, SparseVector):
        return
    raise TypeError(
        f"{op} is not defined for {type(a).__name__} and {type(b).__name__}; "
        "convert one operand with as_dense() or as_sparse()"
    )


def add(a: _V, b: _V) -> _V:
    """Elementwise sum of two vectors of the same representation."""
    _check_pair(a, b, "add")
    return a + b


def subtract(a: _V, b: _V) -> _V:
    """Elementwise difference of two vectors of the same representation."""
    _check_pair(a, b, "subtract")
    return a - b


def multiply(a: _V, b: _V) -> _V:
    """Elementwise product of two vectors of the same representation."""
    _check_pair(a, b, "multiply")
    return a * b


def negate(a: _V) -> _V:
    """Negate every component."""
    return -a


def scale(a: _V, c: float) -> _V:
    """Multiply every component by the scalar ``c``."""
    return a * c


def divide(a: _V, c: float) -> _V:
    """Divide every component by the scalar ``c``."""
    return a / c


def dot(a: Vector, b: Vector) -> float:
    """Scalar product of any two vectors.

    Args:
        a: Dense or sparse vector.
        b: Dense or sparse vector.

    Returns:
        The scalar product.

    Raises:
        ValueError: If both are dense with different lengths.
        TypeError: If an operand is not a vector.
    """
    if not isinstance(a, (DenseVector, SparseVector)) or not isinstance(
        b, (DenseVector, SparseVector)
    ):
        raise TypeError(f"dot is not defined for {type(a).__name__} and {type(b).__name__}")
    return a @ b


def map_vector(f: UnaryOp, a: _V) -> _V:
    """Apply ``f`` to the components of ``a``.

    For a sparse vector only stored values are visited and zero results are
    dropped.
    """
    return a.map(f)


def map2(f: BinaryOp, a: _V, b: _V) -> _V:
    """Combine two vectors of the same representation elementwise with ``f``."""
    _check_pair(a, b, "map2")
    return a.map2(f, b)


def fold2(f: FoldOp, state: Any, a: SparseVector, b: SparseVector) -> Any:
    """Merge-join fold of two sparse vectors."""
    if not isinstance(a, SparseVector) or not isinstance(b, SparseVector):
        raise TypeError(
            f"fold2 is only defined for two sparse vectors, got {type(a).__name__} "
            f"and {type(b).__name__}"
        )
    return a.fold2(f, state, b)


def sum_by(f: IndexedOp, a: Vector) -> float:
    """Sum ``f(index, value)`` over the stored components of ``a``."""
    return a.sum_by(f)
