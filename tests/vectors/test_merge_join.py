"""Tests for the merge-join primitives.

This module tests:
- merge_map2: union traversal, remainder draining, zero filtering
- merge_fold2: traversal order and values seen by the accumulator
- merge_dot: restricted merge-join on matching indices
- Randomized agreement of every sparse operation with its dense definition
"""

from __future__ import annotations

from collections.abc import Callable

import numpy as np
import pytest

from vectors.dense import DenseVector
from vectors.merge import merge_dot, merge_fold2, merge_map, merge_map2
from vectors.sparse import SparseVector


def _arrays(components: dict[int, float]) -> tuple[np.ndarray, np.ndarray]:
    keys = sorted(components)
    return (
        np.array(keys, dtype=np.int64),
        np.array([components[k] for k in keys], dtype=np.float32),
    )


def _random_sparse(rng: np.random.Generator, dim: int, density: float) -> SparseVector:
    mask = rng.random(dim) < density
    values = np.where(mask, rng.integers(-4, 5, size=dim), 0).astype(np.float32)
    return DenseVector(values).as_sparse()


def _padded(v: SparseVector, n: int) -> np.ndarray:
    out = np.zeros(n, dtype=np.float32)
    dense = v.as_dense().values
    out[: len(dense)] = dense
    return out


# =============================================================================
# merge_map2
# =============================================================================


class TestMergeMap2:
    """Tests for the elementwise merge-join."""

    def test_calls_f_with_zero_for_missing_side(self) -> None:
        calls: list[tuple[float, float]] = []

        def f(a: float, b: float) -> float:
            calls.append((a, b))
            return a + b

        a_idx, a_val = _arrays({1: 2.0, 3: 4.0})
        b_idx, b_val = _arrays({1: 1.0, 2: 5.0})
        indices, values = merge_map2(f, a_idx, a_val, b_idx, b_val)

        assert calls == [(2.0, 1.0), (0.0, 5.0), (4.0, 0.0)]
        assert indices.tolist() == [1, 2, 3]
        assert values.tolist() == [3.0, 5.0, 4.0]

    def test_drains_longer_side(self) -> None:
        a_idx, a_val = _arrays({0: 1.0})
        b_idx, b_val = _arrays({2: 1.0, 5: 2.0, 9: 3.0})
        indices, values = merge_map2(lambda x, y: x - y, a_idx, a_val, b_idx, b_val)
        assert indices.tolist() == [0, 2, 5, 9]
        assert values.tolist() == [1.0, -1.0, -2.0, -3.0]

    def test_both_empty(self) -> None:
        empty_idx, empty_val = _arrays({})
        indices, values = merge_map2(lambda x, y: x + y, empty_idx, empty_val, empty_idx, empty_val)
        assert indices.size == 0
        assert values.size == 0

    def test_zero_results_are_not_stored(self) -> None:
        a_idx, a_val = _arrays({0: 1.0, 1: 2.0, 2: 3.0})
        b_idx, b_val = _arrays({0: 1.0, 2: 1.0})
        indices, values = merge_map2(lambda x, y: x * y, a_idx, a_val, b_idx, b_val)
        assert indices.tolist() == [0, 2]
        assert values.tolist() == [1.0, 3.0]

    def test_output_is_trimmed_copy(self) -> None:
        a_idx, a_val = _arrays({0: 1.0, 1: 1.0})
        b_idx, b_val = _arrays({0: -1.0, 1: -1.0})
        indices, values = merge_map2(lambda x, y: x + y, a_idx, a_val, b_idx, b_val)
        assert indices.shape == (0,)
        assert values.shape == (0,)

    def test_merge_map_filters_zeros(self) -> None:
        idx, val = _arrays({0: 1.0, 4: 2.0})
        indices, values = merge_map(lambda x: x - 1.0, idx, val)
        assert indices.tolist() == [4]
        assert values.tolist() == [1.0]


# =============================================================================
# merge_fold2 and merge_dot
# =============================================================================


class TestMergeFold2:
    """Tests for the merge-join fold."""

    def test_sees_every_union_position_in_order(self) -> None:
        a_idx, a_val = _arrays({1: 2.0, 3: 4.0})
        b_idx, b_val = _arrays({1: 1.0, 2: 5.0})
        pairs = merge_fold2(lambda s, x, y: [*s, (x, y)], [], a_idx, a_val, b_idx, b_val)
        assert pairs == [(2.0, 1.0), (0.0, 5.0), (4.0, 0.0)]

    def test_returns_initial_state_for_empty_inputs(self) -> None:
        empty_idx, empty_val = _arrays({})
        assert merge_fold2(lambda s, x, y: s + 1, 7, empty_idx, empty_val, empty_idx, empty_val) == 7

    def test_squared_distance(self) -> None:
        a = SparseVector([0, 2], [1.0, 3.0])
        b = SparseVector([1, 2], [2.0, 1.0])
        distance = a.fold2(lambda s, x, y: s + (x - y) ** 2, 0.0, b)
        assert distance == pytest.approx(1.0 + 4.0 + 4.0)


class TestMergeDot:
    """Tests for the restricted merge-join scalar product."""

    def test_only_matching_indices_contribute(self) -> None:
        a_idx, a_val = _arrays({0: 1.0, 2: 3.0, 4: 5.0})
        b_idx, b_val = _arrays({1: 7.0, 2: 2.0, 4: 0.5, 6: 9.0})
        assert merge_dot(a_idx, a_val, b_idx, b_val) == pytest.approx(6.0 + 2.5)

    def test_matches_fold2(self) -> None:
        rng = np.random.default_rng(0)
        for _ in range(20):
            a = _random_sparse(rng, 30, 0.4)
            b = _random_sparse(rng, 25, 0.4)
            folded = a.fold2(lambda s, x, y: s + x * y, 0.0, b)
            assert a @ b == pytest.approx(folded)


# =============================================================================
# Randomized agreement with the dense definitions
# =============================================================================


class TestDenseAgreement:
    """Sparse elementwise operations agree with dense ones at every position."""

    @pytest.mark.parametrize(
        "f",
        [
            lambda x, y: x + y,
            lambda x, y: x - y,
            lambda x, y: x * y,
            lambda x, y: max(x, y),
        ],
        ids=["add", "subtract", "multiply", "max"],
    )
    def test_map2_matches_dense(self, f: Callable[[float, float], float]) -> None:
        rng = np.random.default_rng(42)
        for _ in range(25):
            a = _random_sparse(rng, int(rng.integers(0, 20)), 0.5)
            b = _random_sparse(rng, int(rng.integers(0, 20)), 0.5)
            result = a.map2(f, b)

            n = max(a.dimensions, b.dimensions)
            expected = [f(x, y) for x, y in zip(_padded(a, n).tolist(), _padded(b, n).tolist())]
            np.testing.assert_array_equal(_padded(result, n), np.array(expected, dtype=np.float32))

            # Invariants of the result
            assert np.all(np.diff(result.indices) > 0)
            assert not np.any(result.values == 0.0)

    def test_dot_matches_dense(self) -> None:
        rng = np.random.default_rng(7)
        for _ in range(25):
            x = DenseVector(rng.standard_normal(16).astype(np.float32))
            y = DenseVector(rng.standard_normal(16).astype(np.float32))
            sparse_dot = x.as_sparse().fold2(lambda s, a, b: s + a * b, 0.0, y.as_sparse())
            assert x @ y == pytest.approx(sparse_dot, rel=1e-4, abs=1e-4)
            assert x.as_sparse() @ y.as_sparse() == pytest.approx(sparse_dot, rel=1e-4, abs=1e-4)
