"""Optimization parameters for structured SVMs.

This module provides:
- Rescaling: slack or margin rescaling of the loss-augmented cost
- WorkingSetStrategy / OptimizationOptions: tuning passed through to the
  SMO-based one-slack solver
- MultiClassParameters: user-facing parameters of multi-class learning
- OneSlackParameters: the bundle handed to the one-slack solver
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ssvm.one_slack import ArgmaxLoss

__all__ = [
    "Rescaling",
    "WorkingSetStrategy",
    "OptimizationOptions",
    "LossFunction",
    "zero_one_loss",
    "MultiClassParameters",
    "OneSlackParameters",
    "DEFAULTS",
]

# Loss between the true label and a candidate label
LossFunction = Callable[[Any, Any], float]


class Rescaling(Enum):
    """How the loss scales the margin requirement.

    - SLACK: cost = loss - loss * <w, dF>
    - MARGIN: cost = loss - <w, dF>
    """

    SLACK = "slack"
    MARGIN = "margin"


class WorkingSetStrategy(Enum):
    """Working set selection strategy of the SMO solver."""

    MAXIMAL_VIOLATING_PAIR = "maximal_violating_pair"
    SECOND_ORDER_INFORMATION = "second_order_information"


@dataclass(frozen=True, slots=True)
class OptimizationOptions:
    """General SMO optimization options.

    Attributes:
        strategy: Working set selection strategy.
        max_iterations: Iteration cap of the solver.
        shrinking: Whether the solver may shrink the active set.
        cache_size_mb: Kernel cache size in megabytes.
    """

    strategy: WorkingSetStrategy = WorkingSetStrategy.SECOND_ORDER_INFORMATION
    max_iterations: int = 1_000_000
    shrinking: bool = True
    cache_size_mb: int = 200

    def __post_init__(self) -> None:
        """Validate iteration cap and cache size."""
        if self.max_iterations <= 0:
            raise ValueError(f"max_iterations must be positive, got {self.max_iterations}")
        if self.cache_size_mb <= 0:
            raise ValueError(f"cache_size_mb must be positive, got {self.cache_size_mb}")


def zero_one_loss(y: Any, y_prime: Any) -> float:
    """Return 0.0 when the labels are equal and 1.0 otherwise."""
    return 0.0 if y == y_prime else 1.0


def _validate_settings(rescaling: Rescaling, C: float, epsilon: float) -> None:
    if not isinstance(rescaling, Rescaling):
        raise ValueError(f"rescaling must be a Rescaling member, got {rescaling!r}")
    if C <= 0:
        raise ValueError(f"C must be positive, got {C}")
    if epsilon <= 0:
        raise ValueError(f"epsilon must be positive, got {epsilon}")


@dataclass(frozen=True, slots=True)
class MultiClassParameters:
    """Optimization parameters for multi-class structured SVMs.

    Attributes:
        rescaling: Slack or margin rescaling.
        C: Penalty for slack variables.
        epsilon: Maximum optimization error.
        loss: Loss between the true and a candidate label.
        options: SMO solver options.

    Example:
        >>> params = MultiClassParameters(C=10.0)
        >>> params.replace(rescaling=Rescaling.MARGIN).rescaling
        <Rescaling.MARGIN: 'margin'>
    """

    rescaling: Rescaling = Rescaling.SLACK
    C: float = 1.0
    epsilon: float = 0.001
    loss: LossFunction = zero_one_loss
    options: OptimizationOptions = field(default_factory=OptimizationOptions)

    def __post_init__(self) -> None:
        """Validate rescaling, penalty and tolerance."""
        _validate_settings(self.rescaling, self.C, self.epsilon)

    def replace(self, **changes: Any) -> MultiClassParameters:
        """Return a copy with the given fields replaced."""
        return dataclasses.replace(self, **changes)


@dataclass(frozen=True, slots=True)
class OneSlackParameters:
    """Parameters of the one-slack cutting-plane solver.

    Attributes:
        rescaling: Slack or margin rescaling.
        C: Penalty for slack variables.
        epsilon: Maximum optimization error.
        loss: Loss between the true and a candidate label.
        argmax_loss: Loss-augmented decoder ``(model, i) -> ArgmaxLossResult``.
        options: SMO solver options.
    """

    rescaling: Rescaling
    C: float
    epsilon: float
    loss: LossFunction
    argmax_loss: ArgmaxLoss
    options: OptimizationOptions

    def __post_init__(self) -> None:
        """Validate rescaling, penalty and tolerance."""
        _validate_settings(self.rescaling, self.C, self.epsilon)


# Default parameters for multi-class learning
DEFAULTS = MultiClassParameters()
