"""Static satellite map tiles."""

from __future__ import annotations

from urllib.parse import urlencode

from solar_insights.common.constants import MAP_SIZE, MAP_TYPE, MAP_ZOOM, KEY_CHECK_MAP_PARAMS
from solar_insights.common.errors import CredentialError, MapImageError
from solar_insights.common.http import HttpClient, TimeoutConfig, is_success
from solar_insights.common.models import GeocodeResult


def build_map_url(endpoint: str, api_key: str, center: str) -> str:
    params = {
        "center": center,
        "zoom": MAP_ZOOM,
        "size": MAP_SIZE,
        "maptype": MAP_TYPE,
        "key": api_key,
    }
    return f"{endpoint}?{urlencode(params)}"


def _describe(status: int, detail: str | None) -> str:
    return f"HTTP {status}: {detail}" if detail else f"HTTP {status}"


def fetch_map_tile(
    client: HttpClient,
    endpoint: str,
    api_key: str,
    location: GeocodeResult,
    *,
    timeout: TimeoutConfig | None = None,
) -> str:
    """Check that the tile for ``location`` loads and return its URL."""
    url = build_map_url(endpoint, api_key, location.center)
    status, detail = client.fetch_status(url, timeout=timeout)
    if not is_success(status):
        raise MapImageError(f"Failed to load map image ({_describe(status, detail)})")
    return url


def check_maps_key(
    client: HttpClient,
    endpoint: str,
    api_key: str,
    *,
    timeout: TimeoutConfig | None = None,
) -> None:
    status, detail = client.fetch_status(endpoint, params={**KEY_CHECK_MAP_PARAMS, "key": api_key}, timeout=timeout)
    if not is_success(status):
        raise CredentialError(
            f"Invalid Maps API key or API access is restricted ({_describe(status, detail)})"
        )
