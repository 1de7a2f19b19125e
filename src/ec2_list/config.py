from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

DEFAULT_CONFIG_PATH = Path("~/.config/ec2-list.yaml")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(slots=True, frozen=True)
class ListConfig:
    profile: str | None = None
    region: str | None = None
    color: bool = True
    headers: bool = True
    log_level: str = "WARNING"

    @property
    def log_level_number(self) -> int:
        return getattr(logging, self.log_level)


DEFAULT_LIST_CONFIG = ListConfig()


def load_config(config_path: str | Path | None = None) -> ListConfig:
    path = Path(config_path or DEFAULT_CONFIG_PATH).expanduser()
    if not path.is_file():
        return DEFAULT_LIST_CONFIG

    with path.open("r", encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle) or {}

    return ListConfig(
        profile=_coerce_name(_safe_mapping_get(loaded, "profile")),
        region=_coerce_name(_safe_mapping_get(loaded, "region")),
        color=_coerce_bool(_safe_mapping_get(loaded, "color"), fallback=DEFAULT_LIST_CONFIG.color),
        headers=_coerce_bool(_safe_mapping_get(loaded, "headers"), fallback=DEFAULT_LIST_CONFIG.headers),
        log_level=_coerce_log_level(_safe_mapping_get(loaded, "log_level")),
    )


def _coerce_name(value: Any) -> str | None:
    if value is None:
        return None
    name = str(value).strip()
    return name or None


def _coerce_bool(value: Any, fallback: bool) -> bool:
    if isinstance(value, bool):
        return value
    return fallback


def _coerce_log_level(value: Any) -> str:
    level = str(value).strip().upper() if value is not None else ""
    if level in LOG_LEVELS:
        return level
    return DEFAULT_LIST_CONFIG.log_level


def _safe_mapping_get(mapping: Any, key: str, fallback: Any = None) -> Any:
    try:
        return mapping[key]
    except (KeyError, TypeError):
        return fallback
