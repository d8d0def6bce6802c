"""Boundary types of the one-slack cutting-plane solver.

The solver itself lives outside this package and is injected through the
OneSlackOptimizer protocol (see core.protocols). This module defines what
flows across that boundary:
- OneSlack: trained weights in the joint feature space
- ArgmaxLossResult: the most violated constraint for one training example
- ArgmaxLoss: signature of the loss-augmented decoder callback
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

from core.protocols import OneSlackModel
from vectors.dense import DenseVector
from vectors.sparse import SparseVector

__all__ = ["OneSlack", "ArgmaxLossResult", "ArgmaxLoss"]


@dataclass(frozen=True, slots=True)
class OneSlack:
    """Weight vector found by the one-slack solver.

    Attributes:
        weights: Weight vector in the joint class-by-feature space.
    """

    weights: DenseVector

    def __post_init__(self) -> None:
        """Validate the weight vector type."""
        if not isinstance(self.weights, DenseVector):
            raise ValueError(f"weights must be a DenseVector, got {type(self.weights).__name__}")

    def score(self, v: SparseVector) -> float:
        """Dot product of the weights with a joint feature vector."""
        return self.weights @ v


@dataclass(frozen=True, slots=True)
class ArgmaxLossResult:
    """Most violated constraint for a training example.

    Unpacks as ``label, loss, delta, cost``.

    Attributes:
        label: Candidate label maximizing the cost.
        loss: Loss between the true label and ``label``.
        delta: Joint feature difference ``JF(x, y_true) - JF(x, label)``.
        cost: Loss-augmented cost ``loss - m * <w, delta>``.
    """

    label: Any
    loss: float
    delta: SparseVector
    cost: float

    def __iter__(self) -> Iterator[Any]:
        return iter((self.label, self.loss, self.delta, self.cost))


# Loss-augmented decoder: (current model, example index) -> most violated constraint
ArgmaxLoss = Callable[[OneSlackModel, int], ArgmaxLossResult]
