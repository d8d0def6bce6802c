"""Protocol definitions for the vector algebra and structured SVM packages.

This module contains Protocol classes defining interfaces for:
- Vectors: the capability shared by dense and sparse representations
- OneSlackModels: trained weights produced by a one-slack solver
- OneSlackOptimizers: the external cutting-plane solver that finds the weights
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from core.types import IndexedOp

if TYPE_CHECKING:
    from ssvm.parameters import OneSlackParameters
    from vectors.dense import DenseVector
    from vectors.sparse import SparseVector

__all__ = [
    "Vector",
    "OneSlackModel",
    "OneSlackOptimizer",
    "JointFeatureFunction",
]

# Joint feature function handed to the solver: (x, y) -> sparse joint vector
JointFeatureFunction = Callable[[Any, Any], "SparseVector"]


@runtime_checkable
class Vector(Protocol):
    """Protocol for vectors.

    A Vector is implemented by exactly two representations, DenseVector and
    SparseVector. Both expose:
    - The number of dimensions (one past the highest stored index)
    - A fold-style reduction over stored (index, value) pairs
    - Lossless conversion to either representation
    """

    @property
    def dimensions(self) -> int:
        """Return the number of vector dimensions."""
        ...

    def sum_by(self, f: IndexedOp) -> float:
        """Sum ``f(index, value)`` over stored components in ascending index order.

        Args:
            f: Function of a component index and its value.

        Returns:
            The accumulated sum.
        """
        ...

    def as_dense(self) -> DenseVector:
        """Return the dense representation of the vector."""
        ...

    def as_sparse(self) -> SparseVector:
        """Return the sparse representation of the vector."""
        ...


@runtime_checkable
class OneSlackModel(Protocol):
    """Protocol for the trained weights of a one-slack structured SVM.

    The model is opaque to the multi-class layer except for its weight vector,
    which can score a joint feature vector by a dot product.
    """

    @property
    def weights(self) -> DenseVector:
        """Return the weight vector in the joint feature space."""
        ...

    def score(self, v: SparseVector) -> float:
        """Score a joint feature vector.

        Args:
            v: Sparse vector in the joint feature space.

        Returns:
            The dot product of the weights with ``v``.
        """
        ...


@runtime_checkable
class OneSlackOptimizer(Protocol):
    """Protocol for the one-slack cutting-plane solver.

    The solver repeatedly calls ``params.argmax_loss(model, i)`` to find the
    most violated constraint for example ``i`` and adds cutting planes until
    the violation falls below ``params.epsilon``.
    """

    def optimize(
        self,
        X: Sequence[Any],
        Y: Sequence[Any],
        joint_features: JointFeatureFunction,
        params: OneSlackParameters,
    ) -> OneSlackModel:
        """Find the weight vector of a structured SVM.

        Args:
            X: Training samples.
            Y: Training labels, aligned with ``X``.
            joint_features: Joint feature function ``(x, y) -> SparseVector``.
            params: Solver parameters including the loss-augmented decoder.

        Returns:
            The trained one-slack model.
        """
        ...
