"""Configuration loading and validation."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping

from dotenv import load_dotenv

from solar_insights.common.constants import MAPS_API_KEY_ENV, SOLAR_API_KEY_ENV
from solar_insights.common.errors import ConfigError
from solar_insights.common.fs import read_yaml
from solar_insights.common.http import TimeoutConfig
from solar_insights.common.schema import validate_settings_config

SETTINGS_FILENAME = "settings.yml"


@dataclass(frozen=True)
class Endpoints:
    geocode: str
    static_map: str
    solar: str


@dataclass(frozen=True)
class Settings:
    mode: str
    verify_credentials: bool
    endpoints: Endpoints
    timeout: TimeoutConfig
    maps_api_key: str
    solar_api_key: str

    def with_overrides(self, *, mode: str | None = None, verify_credentials: bool | None = None) -> "Settings":
        changes: dict[str, Any] = {}
        if mode is not None:
            changes["mode"] = mode
        if verify_credentials is not None:
            changes["verify_credentials"] = verify_credentials
        return replace(self, **changes)


def _deep_merge(base: Any, overlay: Any) -> Any:
    if isinstance(base, dict) and isinstance(overlay, dict):
        merged = dict(base)
        for key, value in overlay.items():
            if key in merged:
                merged[key] = _deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged
    return overlay


def _load_yaml_with_overlay(path: Path, overlay_path: Path | None) -> dict:
    if not path.exists():
        raise ConfigError(f"Settings file not found: {path}")
    base = read_yaml(path)
    if overlay_path is None or not overlay_path.exists():
        return base
    overlay = read_yaml(overlay_path)
    if overlay is None:
        return base
    return _deep_merge(base, overlay)


def read_api_keys(environ: Mapping[str, str] | None = None) -> tuple[str, str]:
    """Return ``(maps_key, solar_key)``; missing keys come back as empty strings."""
    if environ is None:
        load_dotenv()
        environ = os.environ
    maps_key = (environ.get(MAPS_API_KEY_ENV) or "").strip()
    solar_key = (environ.get(SOLAR_API_KEY_ENV) or "").strip()
    return maps_key, solar_key


def load_settings(
    config_dir: Path,
    *,
    allow_unknown: bool = False,
    overlay_config_dir: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    overlay_path = overlay_config_dir / SETTINGS_FILENAME if overlay_config_dir is not None else None
    cfg = validate_settings_config(
        _load_yaml_with_overlay(config_dir / SETTINGS_FILENAME, overlay_path),
        allow_unknown=allow_unknown,
    )
    maps_key, solar_key = read_api_keys(environ)
    endpoints = cfg["endpoints"]
    timeouts = cfg["timeouts"]
    return Settings(
        mode=cfg["mode"],
        verify_credentials=cfg["verify_credentials"],
        endpoints=Endpoints(
            geocode=endpoints["geocode"],
            static_map=endpoints["static_map"],
            solar=endpoints["solar"],
        ),
        timeout=TimeoutConfig(
            connect=float(timeouts["connect_seconds"]),
            read=float(timeouts["read_seconds"]),
        ),
        maps_api_key=maps_key,
        solar_api_key=solar_key,
    )
