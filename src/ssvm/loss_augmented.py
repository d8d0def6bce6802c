"""Loss-augmented decoding for one-slack cutting-plane training.

For the current weights w and training example i, every candidate label y is
scored by

    dF   = JF(x_i, y_i) - JF(x_i, y)
    cost = loss(y_i, y) - m * <w, dF>

with m = loss(y_i, y) under slack rescaling and m = 1 under margin rescaling.
The label with the highest cost is the most violated constraint; ties go to
the label that comes first in the label tuple.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from core.protocols import OneSlackModel
from ssvm.joint_features import JointFeatureMap
from ssvm.one_slack import ArgmaxLossResult
from ssvm.parameters import LossFunction, Rescaling

__all__ = ["margin_factor", "argmax_loss", "LossAugmentedDecoder"]

logger = logging.getLogger(__name__)


def margin_factor(rescaling: Rescaling, loss: float) -> float:
    """Return the factor applied to the margin term of the cost.

    Args:
        rescaling: Slack or margin rescaling.
        loss: Loss of the candidate label.

    Returns:
        ``loss`` for slack rescaling, ``1.0`` for margin rescaling.
    """
    if rescaling is Rescaling.SLACK:
        return loss
    if rescaling is Rescaling.MARGIN:
        return 1.0
    raise ValueError(f"Unknown rescaling: {rescaling!r}")


def argmax_loss(
    model: OneSlackModel,
    i: int,
    *,
    X: Sequence[Any],
    Y: Sequence[Any],
    joint_features: JointFeatureMap[Any, Any],
    loss: LossFunction,
    rescaling: Rescaling,
) -> ArgmaxLossResult:
    """Find the most violated constraint for training example ``i``.

    Args:
        model: Current one-slack model.
        i: Index of the training example.
        X: Training samples.
        Y: Training labels.
        joint_features: Joint feature map over the training labels.
        loss: Loss between the true label and a candidate label.
        rescaling: Slack or margin rescaling.

    Returns:
        The candidate with the highest cost (first one on ties).
    """
    y_true = Y[i]
    features = joint_features.feature_function(X[i])
    true_joint = joint_features.encode(features, y_true)

    best: ArgmaxLossResult | None = None
    for y in joint_features.labels:
        delta = true_joint - joint_features.encode(features, y)
        w_delta = model.score(delta)
        label_loss = float(loss(y_true, y))
        cost = label_loss - margin_factor(rescaling, label_loss) * w_delta
        # Strict comparison keeps the first maximum
        if best is None or cost > best.cost:
            best = ArgmaxLossResult(label=y, loss=label_loss, delta=delta, cost=cost)

    if best is None:
        raise ValueError("joint_features has no candidate labels")
    return best


class LossAugmentedDecoder:
    """Loss-augmented decoder bound to a training set.

    Instances are passed to the one-slack solver as ``argmax_loss`` and are
    called as ``decoder(model, i)``. They hold no mutable state and can be
    called from several threads at once.

    Attributes:
        X: Training samples.
        Y: Training labels.
        joint_features: Joint feature map over the training labels.
        loss: Loss between the true label and a candidate label.
        rescaling: Slack or margin rescaling.
    """

    def __init__(
        self,
        X: Sequence[Any],
        Y: Sequence[Any],
        joint_features: JointFeatureMap[Any, Any],
        loss: LossFunction,
        rescaling: Rescaling,
    ) -> None:
        if len(X) != len(Y):
            raise ValueError(f"X and Y must have the same length, got {len(X)} and {len(Y)}")
        self.X = X
        self.Y = Y
        self.joint_features = joint_features
        self.loss = loss
        self.rescaling = rescaling

    def __call__(self, model: OneSlackModel, i: int) -> ArgmaxLossResult:
        result = argmax_loss(
            model,
            i,
            X=self.X,
            Y=self.Y,
            joint_features=self.joint_features,
            loss=self.loss,
            rescaling=self.rescaling,
        )
        logger.debug(
            "example %d: most violated label %r (loss=%.4g, cost=%.4g)",
            i,
            result.label,
            result.loss,
            result.cost,
        )
        return result
