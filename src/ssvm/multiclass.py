"""Multi-class classification with a one-slack structured SVM.

This module provides:
- MultiClass: immutable trained model (feature function, weights, labels)
- learn: builds the joint feature map and loss-augmented decoder and hands
  them to a one-slack optimizer
- predict / decision_scores: score every known label against the weights

Only labels seen during training can ever be predicted.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import numpy as np

from core.protocols import OneSlackModel, OneSlackOptimizer
from ssvm.joint_features import JointFeatureMap, distinct_labels
from ssvm.loss_augmented import LossAugmentedDecoder
from ssvm.parameters import DEFAULTS, MultiClassParameters, OneSlackParameters
from vectors.sparse import SparseVector

__all__ = ["MultiClass", "learn", "predict", "decision_scores"]

logger = logging.getLogger(__name__)

_X = TypeVar("_X")
_Y = TypeVar("_Y")


@dataclass(frozen=True, slots=True)
class MultiClass(Generic[_X, _Y]):
    """Trained multi-class structured SVM.

    Attributes:
        feature_function: Base feature function F.
        model: Trained one-slack model holding the joint weight vector.
        labels: Distinct training labels; a label's position is its class index.
    """

    feature_function: Callable[[_X], SparseVector]
    model: OneSlackModel
    labels: tuple[_Y, ...]

    def predict(self, x: _X) -> _Y:
        """Predict the label of ``x``."""
        return predict(self, x)

    def scores(self, x: _X) -> dict[_Y, float]:
        """Score every known label for ``x``."""
        return decision_scores(self, x)


def learn(
    X: Sequence[_X],
    Y: Sequence[_Y],
    F: Callable[[_X], SparseVector],
    parameters: MultiClassParameters = DEFAULTS,
    *,
    optimizer: OneSlackOptimizer,
) -> MultiClass[_X, _Y]:
    """Learn a multi-class structured SVM.

    Labels are deduplicated in first-seen order; that order fixes the class
    index of every label for both training and prediction.

    Args:
        X: Training samples.
        Y: Training labels, aligned with ``X``.
        F: Base feature function mapping a sample to a sparse vector.
        parameters: Multi-class optimization parameters.
        optimizer: One-slack solver that finds the joint weight vector.

    Returns:
        The trained model.

    Raises:
        ValueError: If X and Y differ in length or are empty.
    """
    if len(X) != len(Y):
        raise ValueError(f"X and Y must have the same length, got {len(X)} and {len(Y)}")
    if len(X) == 0:
        raise ValueError("Cannot learn from an empty training set")

    labels = distinct_labels(Y)
    joint_features = JointFeatureMap(F, labels)
    decoder = LossAugmentedDecoder(X, Y, joint_features, parameters.loss, parameters.rescaling)

    logger.info(
        "learning multi-class SSVM: %d examples, %d classes, rescaling=%s, C=%g, epsilon=%g",
        len(X),
        joint_features.num_classes,
        parameters.rescaling.value,
        parameters.C,
        parameters.epsilon,
    )

    model = optimizer.optimize(
        X,
        Y,
        joint_features,
        OneSlackParameters(
            rescaling=parameters.rescaling,
            C=parameters.C,
            epsilon=parameters.epsilon,
            loss=parameters.loss,
            argmax_loss=decoder,
            options=parameters.options,
        ),
    )

    logger.info("trained weight vector has %d dimensions", model.weights.dimensions)
    return MultiClass(feature_function=F, model=model, labels=labels)


def decision_scores(model: MultiClass[_X, _Y], x: _X) -> dict[_Y, float]:
    """Score every known label for ``x``.

    The score of label k is ``sum_i W[i*K + k] * F(x)[i]``, computed directly
    from the base features without building the joint vector. Joint indices
    beyond the weight vector contribute nothing.

    Args:
        model: Trained model.
        x: Sample to score.

    Returns:
        Mapping from label to score, in class-index order.
    """
    features = model.feature_function(x)
    weights = model.model.weights.values
    num_classes = len(model.labels)

    scores: dict[_Y, float] = {}
    for k, y in enumerate(model.labels):
        positions = features.indices * num_classes + k
        inside = positions < weights.shape[0]
        scores[y] = float(np.dot(weights[positions[inside]], features.values[inside]))
    return scores


def predict(model: MultiClass[_X, _Y], x: _X) -> _Y:
    """Predict the label of ``x``.

    Args:
        model: Trained model.
        x: Sample to classify.

    Returns:
        The highest scoring label; the first one in class-index order on ties.
    """
    best_label: Any = None
    best_score = 0.0
    for k, (y, score) in enumerate(decision_scores(model, x).items()):
        # Strict comparison keeps the first maximum
        if k == 0 or score > best_score:
            best_label, best_score = y, score
    return best_label
