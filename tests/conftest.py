from __future__ import annotations

import pytest

from solar_insights.common.config_loader import Endpoints, Settings
from solar_insights.common.http import TimeoutConfig

GEOCODE_ENDPOINT = "https://geocode.test/json"
STATIC_MAP_ENDPOINT = "https://maps.test/staticmap"
SOLAR_ENDPOINT = "https://solar.test/v1/buildingInsights:findClosest"

FORMATTED_ADDRESS = "4711 N Via Zurburan, Tucson, AZ 85718, USA"


@pytest.fixture
def make_settings():
    def _make(**overrides) -> Settings:
        values = {
            "mode": "live",
            "verify_credentials": True,
            "endpoints": Endpoints(
                geocode=GEOCODE_ENDPOINT,
                static_map=STATIC_MAP_ENDPOINT,
                solar=SOLAR_ENDPOINT,
            ),
            "timeout": TimeoutConfig(connect=1, read=2),
            "maps_api_key": "maps-key",
            "solar_api_key": "solar-key",
        }
        values.update(overrides)
        return Settings(**values)

    return _make


@pytest.fixture
def geocode_ok_payload() -> dict:
    return {
        "status": "OK",
        "results": [
            {
                "formatted_address": FORMATTED_ADDRESS,
                "geometry": {"location": {"lat": 32.3, "lng": -110.9}},
            }
        ],
    }


@pytest.fixture
def solar_payload() -> dict:
    return {
        "name": "buildings/abc",
        "solarPotential": {
            "maxArrayPanelsCount": 24,
            "panelCapacityWatts": 400,
            "yearlyEnergyDcKwh": 1000,
            "sunshineQuantiles": [10, 20, 30, 40],
            "maxArrayAreaMeters2": 85.4,
        },
    }
