"""Tests for core protocols and types.

This module contains:
- Protocol compliance checks for both vector representations
- Protocol compliance checks for the one-slack model and a dummy optimizer
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np

from core.protocols import (
    JointFeatureFunction,
    OneSlackModel,
    OneSlackOptimizer,
    Vector,
)
from core.types import INDEX_DTYPE, VALUE_DTYPE
from ssvm.one_slack import OneSlack
from ssvm.parameters import OneSlackParameters
from vectors.dense import DenseVector
from vectors.sparse import SparseVector

# =============================================================================
# Dummy implementations for protocol verification
# =============================================================================


class DummyOptimizer:
    """An optimizer that ignores its inputs and returns zero weights."""

    def __init__(self, dim: int = 4) -> None:
        self._dim = dim

    def optimize(
        self,
        X: Sequence[Any],
        Y: Sequence[Any],
        joint_features: JointFeatureFunction,
        params: OneSlackParameters,
    ) -> OneSlackModel:
        return OneSlack(DenseVector(np.zeros(self._dim)))


class NotAVector:
    """Has dimensions but none of the other vector operations."""

    dimensions = 3


# =============================================================================
# Protocol compliance
# =============================================================================


class TestVectorProtocol:
    """Both representations satisfy the Vector protocol."""

    def test_dense_is_vector(self) -> None:
        assert isinstance(DenseVector([1.0, 2.0]), Vector)

    def test_sparse_is_vector(self) -> None:
        assert isinstance(SparseVector([0, 3], [1.0, 2.0]), Vector)

    def test_partial_implementation_is_not_vector(self) -> None:
        assert not isinstance(NotAVector(), Vector)

    def test_conversions_through_protocol(self) -> None:
        vectors: list[Vector] = [DenseVector([0.0, 2.0, 0.0, 4.0]), SparseVector([1, 3], [2.0, 4.0])]
        for v in vectors:
            assert v.dimensions == 4
            assert v.as_dense() == DenseVector([0.0, 2.0, 0.0, 4.0])
            assert v.as_sparse() == SparseVector([1, 3], [2.0, 4.0])
            assert v.sum_by(lambda i, x: i * x) == 14.0


class TestOneSlackProtocols:
    """The one-slack model and optimizer protocols."""

    def test_one_slack_is_model(self) -> None:
        assert isinstance(OneSlack(DenseVector([1.0])), OneSlackModel)

    def test_dummy_optimizer_is_optimizer(self) -> None:
        assert isinstance(DummyOptimizer(), OneSlackOptimizer)

    def test_weights_are_dense(self) -> None:
        model = DummyOptimizer(3).optimize([], [], lambda x, y: SparseVector.zero(), None)  # type: ignore[arg-type]
        assert model.weights == DenseVector([0.0, 0.0, 0.0])
        assert model.weights.dimensions == 3


class TestDtypes:
    """Storage dtypes of the vector representations."""

    def test_dense_values_dtype(self) -> None:
        assert DenseVector([1, 2, 3]).values.dtype == VALUE_DTYPE

    def test_sparse_dtypes(self) -> None:
        v = SparseVector([0, 5], [1, 2])
        assert v.indices.dtype == INDEX_DTYPE
        assert v.values.dtype == VALUE_DTYPE
