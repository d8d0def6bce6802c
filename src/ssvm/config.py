"""JSON configuration for multi-class structured SVM parameters.

A configuration is a JSON object whose keys mirror MultiClassParameters:

    {
        "rescaling": "margin",
        "C": 10.0,
        "epsilon": 0.001,
        "loss": "ssvm.parameters:zero_one_loss",
        "options": {"strategy": "second_order_information", "shrinking": false}
    }

Every key is optional. Dotted ``key=value`` overrides (values parsed as JSON)
can be applied on top, e.g. ``["C=0.5", "options.max_iterations=1000"]``.
"""

from __future__ import annotations

import copy
import importlib
import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from ssvm.parameters import (
    MultiClassParameters,
    OptimizationOptions,
    Rescaling,
    WorkingSetStrategy,
)

__all__ = [
    "load_json",
    "import_object",
    "apply_overrides",
    "parameters_from_config",
    "load_parameters",
]

_PARAMETER_KEYS = {"rescaling", "C", "epsilon", "loss", "options"}
_OPTION_KEYS = {"strategy", "max_iterations", "shrinking", "cache_size_mb"}


def load_json(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def import_object(path: str) -> Any:
    """Import an attribute given as ``module:attr`` or ``module.attr``."""
    if ":" in path:
        module_name, attr_name = path.split(":", 1)
    else:
        module_name, attr_name = path.rsplit(".", 1)
    module = importlib.import_module(module_name)
    return getattr(module, attr_name)


def _parse_value(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def apply_overrides(config: Mapping[str, Any], overrides: Iterable[str]) -> dict[str, Any]:
    """Return a copy of ``config`` with dotted ``key=value`` overrides applied.

    Values are parsed as JSON and fall back to the raw string. The input may
    hold non-JSON values such as a callable ``loss``; it is never modified.
    """
    result = copy.deepcopy(dict(config))
    for item in overrides:
        if "=" not in item:
            raise ValueError(f"Override must be key=value, got: {item}")
        path, raw_val = item.split("=", 1)
        keys = path.split(".")
        target = result
        for key in keys[:-1]:
            if key not in target or not isinstance(target[key], dict):
                target[key] = {}
            target = target[key]
        target[keys[-1]] = _parse_value(raw_val)
    return result


def _enum_value(enum_cls: type[Any], value: Any) -> Any:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        choices = ", ".join(member.value for member in enum_cls)
        raise ValueError(f"Unknown {enum_cls.__name__} {value!r}; expected one of: {choices}") from None


def _check_keys(section: str, config: Mapping[str, Any], allowed: set[str]) -> None:
    unknown = sorted(set(config) - allowed)
    if unknown:
        raise ValueError(f"Unknown {section} keys: {', '.join(unknown)}")


def _options_from_config(config: Mapping[str, Any]) -> OptimizationOptions:
    _check_keys("options", config, _OPTION_KEYS)
    kwargs = dict(config)
    if "strategy" in kwargs:
        kwargs["strategy"] = _enum_value(WorkingSetStrategy, kwargs["strategy"])
    return OptimizationOptions(**kwargs)


def parameters_from_config(config: Mapping[str, Any]) -> MultiClassParameters:
    """Build MultiClassParameters from a configuration mapping.

    Args:
        config: Mapping with any of the keys rescaling, C, epsilon, loss, options.

    Returns:
        The parameters, with defaults for missing keys.

    Raises:
        ValueError: If a key or enum value is unknown, or a value is invalid.
    """
    _check_keys("parameter", config, _PARAMETER_KEYS)
    kwargs: dict[str, Any] = {}
    if "rescaling" in config:
        kwargs["rescaling"] = _enum_value(Rescaling, config["rescaling"])
    if "C" in config:
        kwargs["C"] = float(config["C"])
    if "epsilon" in config:
        kwargs["epsilon"] = float(config["epsilon"])
    if "loss" in config:
        loss = config["loss"]
        kwargs["loss"] = import_object(loss) if isinstance(loss, str) else loss
        if not callable(kwargs["loss"]):
            raise ValueError(f"loss must be callable, got {loss!r}")
    if "options" in config:
        kwargs["options"] = _options_from_config(config["options"])
    return MultiClassParameters(**kwargs)


def load_parameters(path: Path, overrides: Iterable[str] = ()) -> MultiClassParameters:
    """Load parameters from a JSON file, applying dotted overrides."""
    return parameters_from_config(apply_overrides(load_json(path), overrides))
