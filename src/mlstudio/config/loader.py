"""
Configuration loading utilities.

Supports environment variable interpolation and config inheritance
through an optional base.yaml next to the main file.
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from mlstudio.config.settings import EngineConfig, TrainingConfig

# ${VAR} or ${VAR:default}
ENV_VAR_PATTERN = re.compile(r"\$\{(?P<name>[^}:]+)(?::(?P<default>[^}]*))?\}")


def _env_value(match: re.Match[str]) -> str:
    return os.environ.get(match["name"], match["default"] or "")


def _expand_env(node: Any) -> Any:
    """Substitute environment variables in every string of a YAML tree."""
    if isinstance(node, str):
        return ENV_VAR_PATTERN.sub(_env_value, node)
    if isinstance(node, dict):
        return {key: _expand_env(child) for key, child in node.items()}
    if isinstance(node, list):
        return [_expand_env(child) for child in node]
    return node


def _merge_sections(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge config sections key by key; scalars and lists in override win."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _merge_sections(current, value)
        else:
            merged[key] = value
    return merged


def load_yaml(path: Path) -> dict[str, Any]:
    """Read a YAML mapping with environment variables expanded."""
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return _expand_env(data)


def load_config(
    config_path: Path,
    base_path: Path | None = None,
) -> EngineConfig:
    """
    Load engine configuration from YAML file(s).

    Every section is optional; missing keys take the model defaults.
    Values substituted from the environment arrive as strings and are
    coerced by pydantic.

    Args:
        config_path: Path to the main configuration file.
        base_path: Optional base configuration. Defaults to base.yaml in
            the same directory when it exists.

    Returns:
        Validated EngineConfig.
    """
    if base_path is not None:
        base_data = load_yaml(base_path)
    else:
        potential_base = config_path.parent / "base.yaml"
        if potential_base.exists() and potential_base != config_path:
            base_data = load_yaml(potential_base)
        else:
            base_data = {}

    merged = _merge_sections(base_data, load_yaml(config_path))

    # The training section describes runs, not the engine
    merged.pop("training", None)
    return EngineConfig.model_validate(merged)


def load_training_config(config_path: Path) -> TrainingConfig:
    """
    Load a TrainingConfig from the ``training`` section of a YAML file.

    Accepts either a file whose top level is the training section or a
    full engine config containing a ``training`` key.
    """
    data = load_yaml(config_path)
    section = data.get("training", data)
    return TrainingConfig.model_validate(section)
