from __future__ import annotations

from pathlib import Path

import pytest

from solar_insights.common.config_loader import load_settings, read_api_keys
from solar_insights.common.errors import ConfigError

BASE_SETTINGS = """mode: live
verify_credentials: true
endpoints:
  geocode: "https://geocode.test/json"
  static_map: "https://maps.test/staticmap"
  solar: "https://solar.test/findClosest"
timeouts:
  connect_seconds: 5
  read_seconds: 15
"""


def _write(dir_path: Path, text: str) -> Path:
    dir_path.mkdir(parents=True, exist_ok=True)
    (dir_path / "settings.yml").write_text(text, encoding="utf-8")
    return dir_path


def test_load_settings_from_repo_config_dir():
    settings = load_settings(Path("config"), environ={})
    assert settings.mode == "live"
    assert settings.verify_credentials is True
    assert settings.endpoints.static_map.endswith("/staticmap")
    assert settings.timeout.connect > 0


def test_load_settings_reads_keys_from_environment(tmp_path: Path):
    base = _write(tmp_path / "base", BASE_SETTINGS)
    settings = load_settings(
        base,
        environ={"GOOGLE_MAPS_API_KEY": " maps ", "GOOGLE_SOLAR_API_KEY": "solar"},
    )
    assert settings.maps_api_key == "maps"
    assert settings.solar_api_key == "solar"
    assert settings.timeout.read == 15.0


def test_missing_keys_do_not_crash():
    assert read_api_keys({}) == ("", "")


def test_load_settings_applies_overlay_values(tmp_path: Path):
    base = _write(tmp_path / "base", BASE_SETTINGS)
    overlay = _write(
        tmp_path / "overlay",
        """mode: mock
timeouts:
  read_seconds: 60
""",
    )

    settings = load_settings(base, overlay_config_dir=overlay, environ={})

    assert settings.mode == "mock"
    assert settings.timeout.read == 60.0
    assert settings.timeout.connect == 5.0
    assert settings.endpoints.geocode == "https://geocode.test/json"


def test_load_settings_ignores_empty_overlay_file(tmp_path: Path):
    base = _write(tmp_path / "base", BASE_SETTINGS)
    overlay = _write(tmp_path / "overlay", "")

    settings = load_settings(base, overlay_config_dir=overlay, environ={})

    assert settings.mode == "live"


def test_load_settings_missing_file_raises(tmp_path: Path):
    with pytest.raises(ConfigError):
        load_settings(tmp_path, environ={})


@pytest.mark.parametrize(
    "text,fragment",
    [
        (BASE_SETTINGS.replace("mode: live", "mode: offline"), "settings.mode"),
        (BASE_SETTINGS.replace("connect_seconds: 5", "connect_seconds: 0"), "timeouts.connect_seconds"),
        (BASE_SETTINGS.replace('"https://solar.test/findClosest"', "solar.test"), "endpoints.solar"),
        (BASE_SETTINGS + "extra: 1\n", "Unknown keys in settings"),
        (BASE_SETTINGS.replace("verify_credentials: true\n", ""), "Missing keys in settings"),
    ],
)
def test_invalid_settings_raise_config_error(tmp_path: Path, text: str, fragment: str):
    base = _write(tmp_path / "base", text)
    with pytest.raises(ConfigError) as excinfo:
        load_settings(base, environ={})
    assert fragment in str(excinfo.value)


def test_unknown_keys_allowed_when_requested(tmp_path: Path):
    base = _write(tmp_path / "base", BASE_SETTINGS + "extra: 1\n")
    settings = load_settings(base, allow_unknown=True, environ={})
    assert settings.mode == "live"


def test_with_overrides_only_touches_given_fields(tmp_path: Path):
    settings = load_settings(_write(tmp_path / "base", BASE_SETTINGS), environ={})

    assert settings.with_overrides(mode="mock").mode == "mock"
    assert settings.with_overrides(verify_credentials=False).verify_credentials is False
    assert settings.with_overrides() == settings
