"""Merge-join primitives over sorted sparse index arrays.

Every sparse-sparse binary operation is built from the functions in this
module. They walk the two strictly increasing index arrays with one cursor
each:

    a behind  -> f(a_val, 0) at a's index, advance a
    b behind  -> f(0, b_val) at b's index, advance b
    equal     -> f(a_val, b_val) at the shared index, advance both

and drain whichever side is left once the other is exhausted. The functions
operate on raw numpy arrays so they can be shared by the vector classes
without import cycles.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from core.types import INDEX_DTYPE, VALUE_DTYPE, BinaryOp, FoldOp, IndexArray, UnaryOp, ValueArray

__all__ = ["merge_map", "merge_map2", "merge_fold2", "merge_dot"]


def merge_map(
    f: UnaryOp,
    indices: IndexArray,
    values: ValueArray,
) -> tuple[IndexArray, ValueArray]:
    """Apply ``f`` to every stored value, dropping results equal to zero.

    Args:
        f: Function applied to each stored value.
        indices: Strictly increasing component indices.
        values: Component values aligned with ``indices``.

    Returns:
        Tuple of (indices, values) of the non-zero results.
    """
    n = len(indices)
    new_indices = np.empty(n, dtype=INDEX_DTYPE)
    new_values = np.empty(n, dtype=VALUE_DTYPE)

    k = 0
    for index, value in zip(indices.tolist(), values.tolist()):
        new_values[k] = f(value)
        if new_values[k] != 0.0:
            new_indices[k] = index
            k += 1

    return new_indices[:k].copy(), new_values[:k].copy()


def merge_map2(
    f: BinaryOp,
    a_indices: IndexArray,
    a_values: ValueArray,
    b_indices: IndexArray,
    b_values: ValueArray,
) -> tuple[IndexArray, ValueArray]:
    """Combine two sparse vectors elementwise with ``f``.

    Output indices are the sorted union of the input indices, restricted to
    positions where the float32 result is non-zero.

    Args:
        f: Function of the two component values (0.0 where a side is absent).
        a_indices: Strictly increasing indices of the first vector.
        a_values: Values of the first vector.
        b_indices: Strictly increasing indices of the second vector.
        b_values: Values of the second vector.

    Returns:
        Tuple of (indices, values) of the combined vector.
    """
    ai, av = a_indices.tolist(), a_values.tolist()
    bi, bv = b_indices.tolist(), b_values.tolist()
    na, nb = len(ai), len(bi)

    # Output can never be longer than the two inputs together
    new_indices = np.empty(na + nb, dtype=INDEX_DTYPE)
    new_values = np.empty(na + nb, dtype=VALUE_DTYPE)

    i = j = k = 0

    while i < na and j < nb:
        if ai[i] < bi[j]:
            index, value = ai[i], f(av[i], 0.0)
            i += 1
        elif ai[i] > bi[j]:
            index, value = bi[j], f(0.0, bv[j])
            j += 1
        else:
            index, value = ai[i], f(av[i], bv[j])
            i += 1
            j += 1
        new_values[k] = value
        if new_values[k] != 0.0:
            new_indices[k] = index
            k += 1

    while i < na:
        new_values[k] = f(av[i], 0.0)
        if new_values[k] != 0.0:
            new_indices[k] = ai[i]
            k += 1
        i += 1

    while j < nb:
        new_values[k] = f(0.0, bv[j])
        if new_values[k] != 0.0:
            new_indices[k] = bi[j]
            k += 1
        j += 1

    return new_indices[:k].copy(), new_values[:k].copy()


def merge_fold2(
    f: FoldOp,
    state: Any,
    a_indices: IndexArray,
    a_values: ValueArray,
    b_indices: IndexArray,
    b_values: ValueArray,
) -> Any:
    """Fold two sparse vectors with ``f(state, a_val, b_val)``.

    Uses the same traversal as :func:`merge_map2` but accumulates a single
    value instead of materializing a vector.

    Args:
        f: Accumulator function.
        state: Initial accumulator value.
        a_indices: Strictly increasing indices of the first vector.
        a_values: Values of the first vector.
        b_indices: Strictly increasing indices of the second vector.
        b_values: Values of the second vector.

    Returns:
        The final accumulator value.
    """
    ai, av = a_indices.tolist(), a_values.tolist()
    bi, bv = b_indices.tolist(), b_values.tolist()
    na, nb = len(ai), len(bi)

    i = j = 0
    s = state

    while i < na and j < nb:
        if ai[i] < bi[j]:
            s = f(s, av[i], 0.0)
            i += 1
        elif ai[i] > bi[j]:
            s = f(s, 0.0, bv[j])
            j += 1
        else:
            s = f(s, av[i], bv[j])
            i += 1
            j += 1

    while i < na:
        s = f(s, av[i], 0.0)
        i += 1

    while j < nb:
        s = f(s, 0.0, bv[j])
        j += 1

    return s


def merge_dot(
    a_indices: IndexArray,
    a_values: ValueArray,
    b_indices: IndexArray,
    b_values: ValueArray,
) -> float:
    """Scalar product of two sparse vectors.

    Non-overlapping positions contribute nothing, so mismatched cursors are
    only advanced and products are accumulated at shared indices.

    Args:
        a_indices: Strictly increasing indices of the first vector.
        a_values: Values of the first vector.
        b_indices: Strictly increasing indices of the second vector.
        b_values: Values of the second vector.

    Returns:
        The float32-accumulated scalar product.
    """
    ai, av = a_indices.tolist(), a_values.tolist()
    bi, bv = b_indices.tolist(), b_values.tolist()
    na, nb = len(ai), len(bi)

    i = j = 0
    total = VALUE_DTYPE(0.0)

    while i < na and j < nb:
        if ai[i] < bi[j]:
            i += 1
        elif ai[i] > bi[j]:
            j += 1
        else:
            total = VALUE_DTYPE(total + VALUE_DTYPE(av[i] * bv[j]))
            i += 1
            j += 1

    return float(total)
