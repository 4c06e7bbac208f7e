"""Layered configuration loading: defaults < YAML < environment < CLI."""

from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv

from .defaults import DEFAULT_CONFIG
from .schema import SECTIONED_KEYS, SECTIONS, AppConfig, EnvOverrides

_TOP_LEVEL_KEYS = ("app_name", "environment")


def _merge_into(target: dict[str, Any], layer: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``layer`` into ``target`` in place; nested mappings merge, scalars replace."""
    for key, value in layer.items():
        current = target.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            _merge_into(current, value)
        else:
            target[key] = value
    return target


def _sectioned_layer(data: Mapping[str, Any]) -> dict[str, Any]:
    """Bring one layer into the sectioned shape of config.yaml.

    Flat keys (``cache_dir``, ``page_size``) are moved under their section.
    When a layer carries both forms, the flat key wins.
    """
    layer: dict[str, Any] = {k: data[k] for k in _TOP_LEVEL_KEYS if k in data}
    for section in SECTIONS:
        block = data.get(section)
        if isinstance(block, Mapping):
            layer[section] = dict(block)
    for flat_key, (section, key) in SECTIONED_KEYS.items():
        if flat_key in data:
            layer.setdefault(section, {})[key] = data[flat_key]
    return layer


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(path)
    with path.open(encoding="utf-8") as fh:
        parsed = yaml.safe_load(fh)
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ValueError(f"{path}: top level must be a mapping, got {type(parsed).__name__}")
    return parsed


def load_config(
    *,
    config_path: Path | None = None,
    dotenv_path: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> AppConfig:
    """
    Build the validated AppConfig from all layers.

    A dotenv file only fills variables not already set in the process
    environment. Nothing is created on disk here; the cache directory is
    made lazily by the cache adapters.
    """
    if dotenv_path is not None:
        if not dotenv_path.exists():
            raise FileNotFoundError(dotenv_path)
        load_dotenv(dotenv_path, override=False)

    layers: list[Mapping[str, Any]] = [deepcopy(DEFAULT_CONFIG)]
    if config_path is not None:
        layers.append(_read_yaml(config_path))
    layers.append(EnvOverrides().to_update_dict())
    layers.append(cli_overrides or {})

    merged: dict[str, Any] = {}
    for layer in layers:
        _merge_into(merged, _sectioned_layer(layer))
    return AppConfig.model_validate(merged)
