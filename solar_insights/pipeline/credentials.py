"""API key pre-flight checks."""

from __future__ import annotations

from solar_insights.common.config_loader import Settings
from solar_insights.common.constants import MAPS_API_KEY_ENV, SOLAR_API_KEY_ENV
from solar_insights.common.errors import CredentialError
from solar_insights.common.http import HttpClient
from solar_insights.providers.geocode import check_geocode_key
from solar_insights.providers.static_map import check_maps_key


def verify_credentials(client: HttpClient, settings: Settings) -> None:
    if not settings.maps_api_key:
        raise CredentialError(f"Maps API key is not configured (set {MAPS_API_KEY_ENV})")
    check_maps_key(client, settings.endpoints.static_map, settings.maps_api_key, timeout=settings.timeout)

    if not settings.solar_api_key:
        raise CredentialError(f"Solar API key is not configured (set {SOLAR_API_KEY_ENV})")
    check_geocode_key(
        client,
        settings.endpoints.geocode,
        settings.solar_api_key,
        label="Solar",
        timeout=settings.timeout,
    )
