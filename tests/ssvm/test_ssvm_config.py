"""Tests for JSON configuration of multi-class parameters."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from ssvm.config import (
    apply_overrides,
    import_object,
    load_parameters,
    parameters_from_config,
)
from ssvm.parameters import DEFAULTS, Rescaling, WorkingSetStrategy, zero_one_loss


def test_empty_config_gives_defaults() -> None:
    assert parameters_from_config({}) == DEFAULTS


def test_full_config() -> None:
    params = parameters_from_config(
        {
            "rescaling": "margin",
            "C": 10,
            "epsilon": 0.01,
            "loss": "ssvm.parameters:zero_one_loss",
            "options": {
                "strategy": "maximal_violating_pair",
                "max_iterations": 500,
                "shrinking": False,
                "cache_size_mb": 64,
            },
        }
    )
    assert params.rescaling is Rescaling.MARGIN
    assert params.C == 10.0
    assert params.epsilon == 0.01
    assert params.loss is zero_one_loss
    assert params.options.strategy is WorkingSetStrategy.MAXIMAL_VIOLATING_PAIR
    assert params.options.max_iterations == 500
    assert params.options.shrinking is False
    assert params.options.cache_size_mb == 64


def test_enum_names_are_case_insensitive() -> None:
    assert parameters_from_config({"rescaling": "SLACK"}).rescaling is Rescaling.SLACK


def test_unknown_enum_value() -> None:
    with pytest.raises(ValueError, match="expected one of: slack, margin"):
        parameters_from_config({"rescaling": "hinge"})


def test_unknown_keys() -> None:
    with pytest.raises(ValueError, match="Unknown parameter keys: gamma"):
        parameters_from_config({"gamma": 0.1})
    with pytest.raises(ValueError, match="Unknown options keys: eta"):
        parameters_from_config({"options": {"eta": 0.1}})


def test_invalid_value_is_rejected() -> None:
    with pytest.raises(ValueError, match="must be positive"):
        parameters_from_config({"C": -2})


def test_loss_must_be_callable() -> None:
    with pytest.raises(ValueError, match="callable"):
        parameters_from_config({"loss": "ssvm.parameters:DEFAULTS"})


def test_import_object_both_separators() -> None:
    assert import_object("ssvm.parameters:zero_one_loss") is zero_one_loss
    assert import_object("ssvm.parameters.zero_one_loss") is zero_one_loss


def test_apply_overrides() -> None:
    config = {"C": 1.0, "options": {"shrinking": True}}
    result = apply_overrides(config, ["C=0.5", "options.shrinking=false", "rescaling=margin"])
    assert result == {"C": 0.5, "options": {"shrinking": False}, "rescaling": "margin"}
    # The input is left untouched
    assert config == {"C": 1.0, "options": {"shrinking": True}}


def test_apply_overrides_requires_key_value() -> None:
    with pytest.raises(ValueError, match="key=value"):
        apply_overrides({}, ["C"])


def test_load_parameters(tmp_path: Path) -> None:
    path = tmp_path / "params.json"
    path.write_text(json.dumps({"C": 2.0, "rescaling": "margin"}), encoding="utf-8")

    params = load_parameters(path, ["options.max_iterations=10"])

    assert params.C == 2.0
    assert params.rescaling is Rescaling.MARGIN
    assert params.options.max_iterations == 10


def test_apply_overrides_keeps_callable_loss() -> None:
    config = {"loss": zero_one_loss, "C": 1.0}
    result = apply_overrides(config, ["rescaling=margin"])
    assert result["loss"] is zero_one_loss
    params = parameters_from_config(result)
    assert params.loss is zero_one_loss
    assert params.rescaling is Rescaling.MARGIN
