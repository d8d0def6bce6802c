"""Dense vector representation.

A DenseVector stores every component, zeros included, in a fixed-length
read-only float32 array. It satisfies the Vector protocol.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

import numpy as np

from core.types import VALUE_DTYPE, BinaryOp, IndexedOp, UnaryOp, ValueArray

if TYPE_CHECKING:
    from vectors.sparse import SparseVector

__all__ = ["DenseVector"]


def _frozen_values(values: Iterable[float] | np.ndarray) -> ValueArray:
    array = np.array(values, dtype=VALUE_DTYPE, copy=True)
    if array.ndim != 1:
        raise ValueError(f"values must be 1-dimensional, got ndim={array.ndim}")
    array.flags.writeable = False
    return array


class DenseVector:
    """Vector storing both zero and non-zero components.

    The vector is immutable: every operation returns a new vector and the
    underlying array is marked read-only.

    Attributes:
        values: Read-only float32 array of components.

    Example:
        >>> a = DenseVector([1.0, 0.0, 2.0])
        >>> b = DenseVector([0.5, 1.0, 1.0])
        >>> (a + b).values.tolist()
        [1.5, 1.0, 3.0]
        >>> a @ b
        2.5
    """

    __slots__ = ("_values",)

    # Numpy scalars and arrays on the left defer to the reflected operators
    __array_ufunc__ = None

    def __init__(self, values: Iterable[float] | np.ndarray) -> None:
        """Initialize the vector from a sequence of components.

        Args:
            values: 1D sequence or array of component values.

        Raises:
            ValueError: If values is not 1-dimensional.
        """
        self._values: ValueArray = _frozen_values(values)

    @classmethod
    def zero(cls) -> DenseVector:
        """Return the empty dense vector."""
        return cls([])

    @classmethod
    def _wrap(cls, values: ValueArray) -> DenseVector:
        # Takes ownership of a freshly computed array without copying it again
        vector = cls.__new__(cls)
        array = np.asarray(values, dtype=VALUE_DTYPE)
        array.flags.writeable = False
        vector._values = array
        return vector

    # -------------------------------------------------------------------------
    # Vector protocol
    # -------------------------------------------------------------------------

    @property
    def dimensions(self) -> int:
        """Number of stored components."""
        return int(self._values.shape[0])

    def sum_by(self, f: IndexedOp) -> float:
        """Sum ``f(i, v)`` over all components in ascending index order."""
        total = VALUE_DTYPE(0.0)
        for i, v in enumerate(self._values.tolist()):
            total = VALUE_DTYPE(total + VALUE_DTYPE(f(i, v)))
        return float(total)

    def as_dense(self) -> DenseVector:
        """Return self (already dense)."""
        return self

    def as_sparse(self) -> SparseVector:
        """Return the sparse representation, dropping exactly-zero components."""
        from vectors.sparse import SparseVector

        indices = np.flatnonzero(self._values)
        return SparseVector._wrap(indices, self._values[indices])

    # -------------------------------------------------------------------------
    # Element access
    # -------------------------------------------------------------------------

    @property
    def values(self) -> ValueArray:
        """Read-only component array."""
        return self._values

    def __len__(self) -> int:
        return self.dimensions

    def __iter__(self) -> Iterator[float]:
        return iter(self._values.tolist())

    def item(self, i: int) -> float:
        """Return the component at index ``i``.

        Args:
            i: Component index.

        Returns:
            The component value.

        Raises:
            IndexError: If ``i`` is outside ``[0, len(self))``.
        """
        if not 0 <= i < self.dimensions:
            raise IndexError(f"index {i} out of range for vector of length {self.dimensions}")
        return float(self._values[i])

    def slice(self, a: int | None = None, b: int | None = None) -> DenseVector:
        """Return the components in the inclusive range ``[a, b]``.

        Args:
            a: First index, defaults to 0.
            b: Last index (inclusive), defaults to the last component.

        Returns:
            A new DenseVector.

        Raises:
            IndexError: If ``a`` is negative.
        """
        first = 0 if a is None else a
        if first < 0:
            raise IndexError(f"slice start {first} must be non-negative")
        last = self.dimensions - 1 if b is None else b
        if last < first:
            return DenseVector.zero()
        return DenseVector._wrap(self._values[first : last + 1].copy())

    def __getitem__(self, i: int) -> float:
        return self.item(i)

    # -------------------------------------------------------------------------
    # Elementwise combinators
    # -------------------------------------------------------------------------

    def map(self, f: UnaryOp) -> DenseVector:
        """Apply ``f`` to every component."""
        return DenseVector._wrap(
            np.fromiter(
                (f(v) for v in self._values.tolist()),
                dtype=VALUE_DTYPE,
                count=self.dimensions,
            )
        )

    def map2(self, f: BinaryOp, other: DenseVector) -> DenseVector:
        """Apply ``f`` pairwise to the components of two equal-length vectors.

        Raises:
            ValueError: If the lengths differ.
        """
        self._check_same_length(other)
        return DenseVector._wrap(
            np.fromiter(
                (f(a, b) for a, b in zip(self._values.tolist(), other._values.tolist())),
                dtype=VALUE_DTYPE,
                count=self.dimensions,
            )
        )

    def _check_same_length(self, other: DenseVector) -> None:
        if self.dimensions != other.dimensions:
            raise ValueError(
                f"Shape mismatch: vectors have lengths {self.dimensions} and {other.dimensions}"
            )

    # -------------------------------------------------------------------------
    # Operators
    # -------------------------------------------------------------------------

    def __add__(self, other: object) -> DenseVector:
        if not isinstance(other, DenseVector):
            return NotImplemented
        self._check_same_length(other)
        return DenseVector._wrap(self._values + other._values)

    def __sub__(self, other: object) -> DenseVector:
        if not isinstance(other, DenseVector):
            return NotImplemented
        self._check_same_length(other)
        return DenseVector._wrap(self._values - other._values)

    def __mul__(self, other: object) -> DenseVector:
        if isinstance(other, DenseVector):
            self._check_same_length(other)
            return DenseVector._wrap(self._values * other._values)
        if isinstance(other, (int, float, np.number)) and not isinstance(other, bool):
            return DenseVector._wrap(self._values * VALUE_DTYPE(other))
        return NotImplemented

    def __rmul__(self, other: object) -> DenseVector:
        if isinstance(other, (int, float, np.number)) and not isinstance(other, bool):
            return self.__mul__(other)
        return NotImplemented

    def __truediv__(self, other: object) -> DenseVector:
        if isinstance(other, (int, float, np.number)) and not isinstance(other, bool):
            return DenseVector._wrap(self._values / VALUE_DTYPE(other))
        return NotImplemented

    def __neg__(self) -> DenseVector:
        return DenseVector._wrap(-self._values)

    def __matmul__(self, other: object) -> float:
        """Scalar product with a dense or sparse vector.

        Dense operands must have equal length. For a sparse operand only its
        stored components are visited; indices beyond this vector's length are
        skipped.

        Raises:
            ValueError: If a dense operand has a different length.
        """
        from vectors.sparse import SparseVector

        if isinstance(other, DenseVector):
            if other is self:
                # x @ x only needs one pass over the values
                return float(np.dot(self._values, self._values))
            self._check_same_length(other)
            return float(np.dot(self._values, other._values))
        if isinstance(other, SparseVector):
            indices = other.indices
            inside = indices < self.dimensions
            return float(np.dot(self._values[indices[inside]], other.values[inside]))
        return NotImplemented

    # -------------------------------------------------------------------------
    # Equality and representation
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        # Vectors of different length are never equal, even if the extra
        # components of the longer one are all zero.
        if not isinstance(other, DenseVector):
            return NotImplemented
        return bool(np.array_equal(self._values, other._values))

    def __hash__(self) -> int:
        # Adding zero folds -0.0 into 0.0 so equal vectors hash alike
        return hash((self.dimensions, (self._values + VALUE_DTYPE(0.0)).tobytes()))

    def __repr__(self) -> str:
        return f"DenseVector({self._values.tolist()!r})"

    def __str__(self) -> str:
        return "(" + ", ".join(repr(v) for v in self._values.tolist()) + ")"
