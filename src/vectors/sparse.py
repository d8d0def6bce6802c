"""Sparse vector representation.

A SparseVector stores parallel arrays of strictly increasing component
indices and their values. Operators keep the representation minimal by never
storing a zero result. It satisfies the Vector protocol.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

import numpy as np

from core.types import (
    INDEX_DTYPE,
    VALUE_DTYPE,
    BinaryOp,
    FoldOp,
    IndexArray,
    IndexedOp,
    UnaryOp,
    ValueArray,
)
from vectors.dense import DenseVector
from vectors.merge import merge_dot, merge_fold2, merge_map, merge_map2

__all__ = ["SparseVector"]


def _is_scalar(value: object) -> bool:
    return isinstance(value, (int, float, np.number)) and not isinstance(value, bool)


class SparseVector:
    """Vector storing only non-zero components.

    Invariants:
    - ``len(indices) == len(values)``
    - indices are non-negative and strictly increasing
    - no stored value is zero (operators filter zero results; a caller that
      constructs a vector directly is responsible for this one)

    Attributes:
        indices: Read-only int64 array of component indices.
        values: Read-only float32 array of component values.

    Example:
        >>> a = SparseVector([1, 3], [2.0, 4.0])
        >>> b = SparseVector([1, 2], [1.0, 5.0])
        >>> a + b
        SparseVector({1: 3.0, 2: 5.0, 3: 4.0})
        >>> a @ b
        2.0
    """

    __slots__ = ("_indices", "_values")

    # Numpy scalars and arrays on the left defer to the reflected operators
    __array_ufunc__ = None

    def __init__(
        self,
        indices: Iterable[int] | np.ndarray,
        values: Iterable[float] | np.ndarray,
    ) -> None:
        """Initialize the vector from index and value sequences.

        Args:
            indices: Strictly increasing, non-negative component indices.
            values: Component values aligned with ``indices``.

        Raises:
            ValueError: If the arrays are not 1-dimensional, have different
                lengths, or the indices are not integers, are negative or are
                not strictly increasing.
        """
        raw = np.array(indices, copy=True)
        with np.errstate(invalid="ignore"):
            idx = raw.astype(INDEX_DTYPE)
        vals = np.array(values, dtype=VALUE_DTYPE, copy=True)

        if idx.ndim != 1 or vals.ndim != 1:
            raise ValueError(
                f"indices and values must be 1-dimensional, got ndim={idx.ndim} and ndim={vals.ndim}"
            )
        if idx.shape != vals.shape:
            raise ValueError(
                f"indices and values must have the same length, got {idx.shape[0]} and {vals.shape[0]}"
            )
        if raw.dtype.kind not in "iub" and not np.array_equal(idx, raw):
            raise ValueError(f"indices must be integers, got {raw.tolist()}")
        if idx.size and idx[0] < 0:
            raise ValueError(f"indices must be non-negative, got {int(idx[0])}")
        if idx.size > 1 and not np.all(idx[1:] > idx[:-1]):
            raise ValueError("indices must be strictly increasing")

        idx.flags.writeable = False
        vals.flags.writeable = False
        self._indices: IndexArray = idx
        self._values: ValueArray = vals

    @classmethod
    def _wrap(cls, indices: IndexArray, values: ValueArray) -> SparseVector:
        # Trusted constructor for arrays produced by operators that already
        # satisfy the invariants
        vector = cls.__new__(cls)
        idx = np.asarray(indices, dtype=INDEX_DTYPE)
        vals = np.asarray(values, dtype=VALUE_DTYPE)
        idx.flags.writeable = False
        vals.flags.writeable = False
        vector._indices = idx
        vector._values = vals
        return vector

    @classmethod
    def zero(cls) -> SparseVector:
        """Return the empty sparse vector."""
        return cls([], [])

    @classmethod
    def from_dict(cls, components: Mapping[int, float]) -> SparseVector:
        """Build a vector from an ``{index: value}`` mapping.

        Keys are sorted, so the mapping may be given in any order. Zero values
        are kept as given.
        """
        keys = sorted(components)
        return cls(keys, [components[k] for k in keys])

    def to_dict(self) -> dict[int, float]:
        """Return the stored components as an ``{index: value}`` dict."""
        return dict(zip(self._indices.tolist(), self._values.tolist()))

    # -------------------------------------------------------------------------
    # Vector protocol
    # -------------------------------------------------------------------------

    @property
    def dimensions(self) -> int:
        """One past the highest stored index, or 0 for the empty vector."""
        if self._indices.size == 0:
            return 0
        return int(self._indices[-1]) + 1

    def sum_by(self, f: IndexedOp) -> float:
        """Sum ``f(i, v)`` over stored components in ascending index order."""
        total = VALUE_DTYPE(0.0)
        for i, v in zip(self._indices.tolist(), self._values.tolist()):
            total = VALUE_DTYPE(total + VALUE_DTYPE(f(i, v)))
        return float(total)

    def as_dense(self) -> DenseVector:
        """Return the dense representation, sized to ``dimensions``."""
        values = np.zeros(self.dimensions, dtype=VALUE_DTYPE)
        values[self._indices] = self._values
        return DenseVector._wrap(values)

    def as_sparse(self) -> SparseVector:
        """Return self (already sparse)."""
        return self

    # -------------------------------------------------------------------------
    # Element access
    # -------------------------------------------------------------------------

    @property
    def indices(self) -> IndexArray:
        """Read-only index array."""
        return self._indices

    @property
    def values(self) -> ValueArray:
        """Read-only value array."""
        return self._values

    @property
    def nnz(self) -> int:
        """Number of stored components."""
        return int(self._indices.shape[0])

    def __iter__(self) -> Iterator[tuple[int, float]]:
        """Iterate over stored ``(index, value)`` pairs."""
        return zip(self._indices.tolist(), self._values.tolist())

    def item(self, i: int) -> float:
        """Return the component at index ``i`` (0.0 when not stored)."""
        pos = int(np.searchsorted(self._indices, i, side="left"))
        if pos < self.nnz and self._indices[pos] == i:
            return float(self._values[pos])
        return 0.0

    def __getitem__(self, i: int) -> float:
        return self.item(i)

    def slice(self, a: int | None = None, b: int | None = None) -> SparseVector:
        """Return the stored components whose index lies in ``[a, b]``.

        Both bounds are inclusive and refer to component indices, not array
        positions. A missing bound leaves that side open.

        Args:
            a: Lowest index to keep.
            b: Highest index to keep.

        Returns:
            A new SparseVector.
        """
        first = 0 if a is None else int(np.searchsorted(self._indices, a, side="left"))
        stop = self.nnz if b is None else int(np.searchsorted(self._indices, b, side="right"))
        if stop <= first:
            return SparseVector.zero()
        return SparseVector._wrap(
            self._indices[first:stop].copy(),
            self._values[first:stop].copy(),
        )

    # -------------------------------------------------------------------------
    # Merge-join combinators
    # -------------------------------------------------------------------------

    def map(self, f: UnaryOp) -> SparseVector:
        """Apply ``f`` to every stored value, dropping zero results."""
        return SparseVector._wrap(*merge_map(f, self._indices, self._values))

    def map2(self, f: BinaryOp, other: SparseVector) -> SparseVector:
        """Combine with ``other`` elementwise using a merge-join.

        ``f`` receives 0.0 for a component missing on one side. Zero results
        are not stored.
        """
        return SparseVector._wrap(
            *merge_map2(f, self._indices, self._values, other._indices, other._values)
        )

    def fold2(self, f: FoldOp, state: Any, other: SparseVector) -> Any:
        """Fold with ``other`` using ``f(state, a_val, b_val)`` in index order."""
        return merge_fold2(f, state, self._indices, self._values, other._indices, other._values)

    def _scaled(self, values: ValueArray) -> SparseVector:
        keep = values != 0.0
        return SparseVector._wrap(self._indices[keep], values[keep])

    # -------------------------------------------------------------------------
    # Operators
    # -------------------------------------------------------------------------

    def __add__(self, other: object) -> SparseVector:
        if not isinstance(other, SparseVector):
            return NotImplemented
        return self.map2(lambda a, b: a + b, other)

    def __sub__(self, other: object) -> SparseVector:
        if not isinstance(other, SparseVector):
            return NotImplemented
        return self.map2(lambda a, b: a - b, other)

    def __mul__(self, other: object) -> SparseVector:
        if isinstance(other, SparseVector):
            return self.map2(lambda a, b: a * b, other)
        if _is_scalar(other):
            return self._scaled(self._values * VALUE_DTYPE(other))
        return NotImplemented

    def __rmul__(self, other: object) -> SparseVector:
        if _is_scalar(other):
            return self._scaled(self._values * VALUE_DTYPE(other))
        return NotImplemented

    def __truediv__(self, other: object) -> SparseVector:
        if _is_scalar(other):
            return self._scaled(self._values / VALUE_DTYPE(other))
        return NotImplemented

    def __neg__(self) -> SparseVector:
        # Negating a non-zero value never yields zero
        return SparseVector._wrap(self._indices, -self._values)

    def __matmul__(self, other: object) -> float:
        """Scalar product with a sparse or dense vector."""
        if isinstance(other, SparseVector):
            if other is self:
                return float(np.dot(self._values, self._values))
            return merge_dot(self._indices, self._values, other._indices, other._values)
        if isinstance(other, DenseVector):
            return other @ self
        return NotImplemented

    # -------------------------------------------------------------------------
    # Equality and representation
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SparseVector):
            return NotImplemented
        return bool(
            np.array_equal(self._indices, other._indices)
            and np.array_equal(self._values, other._values)
        )

    def __hash__(self) -> int:
        return hash((self._indices.tobytes(), (self._values + VALUE_DTYPE(0.0)).tobytes()))

    def __repr__(self) -> str:
        return f"SparseVector({self.to_dict()!r})"

    def __str__(self) -> str:
        return "(" + ", ".join(f"{i!r}:{v!r}" for i, v in self) + ")"
