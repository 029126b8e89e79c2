"""Minimal strict schema for YAML settings validation."""

from __future__ import annotations

from solar_insights.common.constants import MODES
from solar_insights.common.errors import ConfigError


def _assert_required_keys(obj: dict, required: set[str], ctx: str) -> None:
    if not isinstance(obj, dict):
        raise ConfigError(f"{ctx} must be a mapping")
    missing = required - set(obj)
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ConfigError(f"Missing keys in {ctx}: {missing_str}")


def _assert_no_unknown_keys(obj: dict, known: set[str], ctx: str, allow_unknown: bool) -> None:
    if allow_unknown:
        return
    unknown = set(obj) - known
    if unknown:
        unknown_str = ", ".join(sorted(unknown))
        raise ConfigError(f"Unknown keys in {ctx}: {unknown_str}")


def validate_settings_config(cfg: dict, *, allow_unknown: bool = False) -> dict:
    top_required = {"mode", "verify_credentials", "endpoints", "timeouts"}
    _assert_required_keys(cfg, top_required, "settings")
    _assert_no_unknown_keys(cfg, top_required, "settings", allow_unknown)

    if cfg["mode"] not in MODES:
        raise ConfigError(f"settings.mode must be one of {', '.join(MODES)}, got {cfg['mode']!r}")
    if not isinstance(cfg["verify_credentials"], bool):
        raise ConfigError("settings.verify_credentials must be a boolean")

    endpoint_keys = {"geocode", "static_map", "solar"}
    _assert_required_keys(cfg["endpoints"], endpoint_keys, "endpoints")
    _assert_no_unknown_keys(cfg["endpoints"], endpoint_keys, "endpoints", allow_unknown)
    for name in sorted(endpoint_keys):
        url = cfg["endpoints"][name]
        if not isinstance(url, str) or not url.startswith(("http://", "https://")):
            raise ConfigError(f"endpoints.{name} must be an http(s) URL")

    timeout_keys = {"connect_seconds", "read_seconds"}
    _assert_required_keys(cfg["timeouts"], timeout_keys, "timeouts")
    _assert_no_unknown_keys(cfg["timeouts"], timeout_keys, "timeouts", allow_unknown)
    for name in sorted(timeout_keys):
        value = cfg["timeouts"][name]
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
            raise ConfigError(f"timeouts.{name} must be a positive number, got {value!r}")

    return cfg
