"""Centralized, immutable virtualization configuration sourced from environment."""

from __future__ import annotations

import math
import os
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Mapping

from vscroll.api.virtualization import DEFAULTS


@dataclass(frozen=True, slots=True)
class VirtualizationConfig:
    overscan: int
    enable_telemetry: bool
    telemetry_window_ms: float
    log_level: str
    log_format: str
    log_file: str | None


_VIRTUALIZATION_CONFIG: ContextVar[VirtualizationConfig | None] = ContextVar(
    "vscroll_virtualization_config", default=None
)


def _raw(name: str, *, env: Mapping[str, str] | None = None) -> str | None:
    value = os.getenv(name) if env is None else env.get(name)
    return None if value is None else str(value)


def _flag(name: str, default: bool, *, env: Mapping[str, str] | None = None) -> bool:
    raw = _raw(name, env=env)
    if raw is None:
        return bool(default)
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return bool(default)


def _int(
    name: str,
    default: int,
    *,
    minimum: int | None = None,
    env: Mapping[str, str] | None = None,
) -> int:
    raw = _raw(name, env=env)
    if raw is None:
        value = int(default)
    else:
        try:
            value = int(raw.strip())
        except ValueError:
            value = int(default)
    if minimum is None:
        return value
    return max(int(minimum), value)


def _float(
    name: str,
    default: float,
    *,
    minimum: float | None = None,
    env: Mapping[str, str] | None = None,
) -> float:
    raw = _raw(name, env=env)
    if raw is None:
        value = float(default)
    else:
        try:
            value = float(raw.strip())
        except ValueError:
            value = float(default)
    if not math.isfinite(value):
        value = float(default)
    if minimum is None:
        return value
    return max(float(minimum), value)


def _text(name: str, default: str, *, env: Mapping[str, str] | None = None) -> str:
    raw = _raw(name, env=env)
    if raw is None:
        return str(default)
    value = raw.strip()
    return value if value else str(default)


def resolve_log_level_name(default: str = "INFO", *, env: Mapping[str, str] | None = None) -> str:
    """Resolve log level with package-prefixed override."""
    value = _raw("VSCROLL_LOG_LEVEL", env=env)
    if value is None or not value.strip():
        value = _text("LOG_LEVEL", default, env=env)
    return value.strip().upper()


def _normalize_log_format(raw: str) -> str:
    value = str(raw).strip().lower()
    return value if value in {"text", "json"} else "text"


def load_virtualization_config(*, env: Mapping[str, str] | None = None) -> VirtualizationConfig:
    log_file = _text("VSCROLL_LOG_FILE", "", env=env)
    return VirtualizationConfig(
        overscan=_int("VSCROLL_OVERSCAN", DEFAULTS.default_overscan, minimum=0, env=env),
        enable_telemetry=_flag("VSCROLL_ENABLE_TELEMETRY", False, env=env),
        telemetry_window_ms=_float("VSCROLL_TELEMETRY_WINDOW_MS", 1000.0, minimum=1.0, env=env),
        log_level=resolve_log_level_name(env=env),
        log_format=_normalize_log_format(_text("VSCROLL_LOG_FORMAT", "text", env=env)),
        log_file=log_file or None,
    )


def initialize_virtualization_config(
    *, env: Mapping[str, str] | None = None
) -> VirtualizationConfig:
    config = load_virtualization_config(env=env)
    _VIRTUALIZATION_CONFIG.set(config)
    return config


def set_virtualization_config(config: VirtualizationConfig) -> VirtualizationConfig:
    _VIRTUALIZATION_CONFIG.set(config)
    return config


def get_virtualization_config() -> VirtualizationConfig:
    config = _VIRTUALIZATION_CONFIG.get()
    if config is not None:
        return config
    return initialize_virtualization_config()


__all__ = [
    "VirtualizationConfig",
    "get_virtualization_config",
    "initialize_virtualization_config",
    "load_virtualization_config",
    "resolve_log_level_name",
    "set_virtualization_config",
]
