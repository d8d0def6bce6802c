"""Joint feature encoding for multi-class structured SVMs.

A base feature function F maps a sample to a sparse vector of dimension D.
For K distinct labels, the joint feature vector of (x, y) moves every stored
feature index i to

    i * K + k

where k is the position of y in the label tuple. Per-class blocks are thus
interleaved with stride K inside a D*K dimensional space, and a single weight
vector of that size scores any (x, y) pair with one dot product. The stride
convention must not change, since trained weight vectors depend on it.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable
from typing import Any, Generic, TypeVar

from vectors.sparse import SparseVector

__all__ = ["FeatureFunction", "distinct_labels", "joint_index", "JointFeatureMap"]

_X = TypeVar("_X")
_Y = TypeVar("_Y", bound=Hashable)

# Base feature function: sample -> sparse feature vector
FeatureFunction = Callable[[Any], SparseVector]


def distinct_labels(Y: Iterable[_Y]) -> tuple[_Y, ...]:
    """Deduplicate labels keeping the order of first occurrence.

    Args:
        Y: Labels, possibly with repeats.

    Returns:
        Tuple of distinct labels in first-seen order.

    Example:
        >>> distinct_labels(["b", "a", "b", "c", "a"])
        ('b', 'a', 'c')
    """
    return tuple(dict.fromkeys(Y))


def joint_index(i: int, k: int, num_classes: int) -> int:
    """Position of base feature ``i`` for class ``k`` in the joint space."""
    return i * num_classes + k


class JointFeatureMap(Generic[_X, _Y]):
    """Joint feature function closed over a fixed label ordering.

    Attributes:
        feature_function: Base feature function F.
        labels: Distinct labels; a label's position is its class index.

    Example:
        >>> F = lambda x: SparseVector([0, 2], [1.0, 1.0])
        >>> jf = JointFeatureMap(F, ("A", "B"))
        >>> jf(None, "B")
        SparseVector({1: 1.0, 5: 1.0})
    """

    def __init__(
        self,
        feature_function: Callable[[_X], SparseVector],
        labels: Iterable[_Y],
    ) -> None:
        """Initialize the map.

        Args:
            feature_function: Base feature function F.
            labels: Distinct labels in class-index order.

        Raises:
            ValueError: If labels is empty or contains duplicates.
        """
        self.feature_function = feature_function
        self.labels: tuple[_Y, ...] = tuple(labels)
        if not self.labels:
            raise ValueError("labels must not be empty")
        self._positions: dict[_Y, int] = {y: k for k, y in enumerate(self.labels)}
        if len(self._positions) != len(self.labels):
            raise ValueError(f"labels must be distinct, got {self.labels!r}")

    @property
    def num_classes(self) -> int:
        """Number of distinct labels K."""
        return len(self.labels)

    def label_index(self, y: _Y) -> int:
        """Return the class index of a label.

        Raises:
            KeyError: If ``y`` is not one of the labels.
        """
        try:
            return self._positions[y]
        except KeyError:
            raise KeyError(f"Unknown label {y!r}; known labels are {self.labels!r}") from None

    def joint_index(self, i: int, k: int) -> int:
        """Position of base feature ``i`` for class index ``k``."""
        return joint_index(i, k, self.num_classes)

    def dimensions(self, base_dimensions: int) -> int:
        """Size of the joint space for base features of dimension D."""
        return base_dimensions * self.num_classes

    def encode(self, features: SparseVector, y: _Y) -> SparseVector:
        """Move already computed base features into the block of label ``y``."""
        k = self.label_index(y)
        # i -> i*K + k is strictly increasing, so the result stays sorted
        return SparseVector(features.indices * self.num_classes + k, features.values)

    def __call__(self, x: _X, y: _Y) -> SparseVector:
        """Joint feature vector of sample ``x`` with label ``y``."""
        return self.encode(self.feature_function(x), y)

    def __repr__(self) -> str:
        return f"JointFeatureMap(labels={self.labels!r})"
