"""Structured SVM module.

This package contains the multi-class structured SVM layer built on the
vectors package:
- Parameters (rescaling, solver options, multi-class defaults)
- Joint feature encoding of (sample, label) pairs
- Loss-augmented decoding for one-slack cutting-plane training
- MultiClass model with learn / predict
- JSON configuration of parameters
"""

from __future__ import annotations

from ssvm.config import apply_overrides, load_parameters, parameters_from_config
from ssvm.joint_features import FeatureFunction, JointFeatureMap, distinct_labels, joint_index
from ssvm.loss_augmented import LossAugmentedDecoder, argmax_loss, margin_factor
from ssvm.multiclass import MultiClass, decision_scores, learn, predict
from ssvm.one_slack import ArgmaxLoss, ArgmaxLossResult, OneSlack
from ssvm.parameters import (
    DEFAULTS,
    LossFunction,
    MultiClassParameters,
    OneSlackParameters,
    OptimizationOptions,
    Rescaling,
    WorkingSetStrategy,
    zero_one_loss,
)

__all__ = [
    # Parameters
    "Rescaling",
    "WorkingSetStrategy",
    "OptimizationOptions",
    "LossFunction",
    "zero_one_loss",
    "MultiClassParameters",
    "OneSlackParameters",
    "DEFAULTS",
    # One-slack boundary
    "OneSlack",
    "ArgmaxLoss",
    "ArgmaxLossResult",
    # Joint features
    "FeatureFunction",
    "JointFeatureMap",
    "distinct_labels",
    "joint_index",
    # Loss-augmented decoding
    "margin_factor",
    "argmax_loss",
    "LossAugmentedDecoder",
    # Multi-class model
    "MultiClass",
    "learn",
    "predict",
    "decision_scores",
    # Configuration
    "apply_overrides",
    "parameters_from_config",
    "load_parameters",
]
