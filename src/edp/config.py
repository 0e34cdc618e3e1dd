"""Settings loading: YAML file plus ``EDP_`` environment overrides.

``EDP_EXCHANGES__BINANCE__CREDENTIALS__API_KEY=...`` sets
``exchanges.binance.credentials.api_key``; values are parsed as YAML scalars.
"""

from __future__ import annotations

import copy
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .settings import Settings

ENV_PREFIX = "EDP_"
RESERVED_ENV = {"CONFIG", "LOG_LEVEL"}


def _deep_set(obj: dict[str, Any], path: list[str], value: Any) -> None:
    cur: dict[str, Any] = obj
    for key in path[:-1]:
        nxt = cur.get(key)
        if not isinstance(nxt, dict):
            nxt = {}
            cur[key] = nxt
        cur = nxt
    cur[path[-1]] = value


def _parse_env_value(raw: str) -> Any:
    try:
        value = yaml.safe_load(raw)
    except yaml.YAMLError:
        return raw
    return raw if value is None else value


def _apply_env_overrides(
    data: dict[str, Any],
    environ: dict[str, str] | None = None,
    *,
    prefix: str = ENV_PREFIX,
) -> dict[str, Any]:
    merged: dict[str, Any] = copy.deepcopy(data)
    environ = os.environ if environ is None else environ

    for key, raw_value in environ.items():
        if not key.startswith(prefix):
            continue

        remainder = key[len(prefix) :]
        if remainder in RESERVED_ENV:
            continue

        path = [p.lower() for p in remainder.split("__") if p]
        if not path:
            continue

        value = _parse_env_value(raw_value)
        # keys and secrets stay strings even when they look numeric
        if path[-1] in {"api_key", "api_secret", "password"}:
            value = raw_value
        _deep_set(merged, path, value)

    return merged


def load_settings(config_path: str | Path | None = None) -> Settings:
    if config_path is None:
        config_path = os.environ.get(f"{ENV_PREFIX}CONFIG", "config.yml")

    path = Path(config_path)
    if path.exists():
        loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
        if loaded is None:
            data: dict[str, Any] = {}
        elif isinstance(loaded, dict):
            data = loaded
        else:
            raise ValueError(f"Config root must be a mapping, got: {type(loaded)!r}")
    else:
        data = {}

    data = _apply_env_overrides(data)

    try:
        return Settings.model_validate(data)
    except ValidationError as exc:
        raise ValueError(f"Invalid configuration: {exc}") from exc
