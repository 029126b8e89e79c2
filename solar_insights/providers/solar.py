"""Solar insights provider."""

from __future__ import annotations

from typing import Any

from solar_insights.common.constants import SOLAR_API_KEY_HEADER
from solar_insights.common.errors import SolarApiError
from solar_insights.common.http import HttpClient, HttpRequestError, TimeoutConfig
from solar_insights.common.models import GeocodeResult


def fetch_building_insights(
    client: HttpClient,
    endpoint: str,
    api_key: str,
    location: GeocodeResult,
    *,
    timeout: TimeoutConfig | None = None,
) -> dict[str, Any]:
    body = {"location": {"latitude": location.latitude, "longitude": location.longitude}}
    try:
        return client.post_json(
            endpoint,
            payload=body,
            headers={SOLAR_API_KEY_HEADER: api_key},
            timeout=timeout,
        )
    except HttpRequestError as exc:
        raise SolarApiError(f"Solar API request failed ({exc.describe()})") from exc
