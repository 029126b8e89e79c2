"""Geocoding provider: free-text address to coordinates."""

from __future__ import annotations

from typing import Any

from solar_insights.common.constants import KEY_CHECK_GEOCODE_ADDRESS
from solar_insights.common.errors import CredentialError, GeocodeError, NotFoundError
from solar_insights.common.http import HttpClient, HttpRequestError, TimeoutConfig, is_success
from solar_insights.common.models import GeocodeResult

DENIED_STATUSES = {"REQUEST_DENIED", "OVER_DAILY_LIMIT", "OVER_QUERY_LIMIT"}


def _status_message(payload: dict[str, Any]) -> str:
    status = str(payload.get("status"))
    error_message = payload.get("error_message")
    if error_message:
        return f"{status}: {error_message}"
    return status


def _http_status(exc: HttpRequestError) -> str:
    # A 2xx here means the body was not a JSON object.
    if exc.status_code is None or is_success(exc.status_code):
        return "INVALID_RESPONSE"
    return f"HTTP_{exc.status_code}"


def _parse_result(result: dict[str, Any]) -> GeocodeResult:
    try:
        location = result["geometry"]["location"]
        latitude = float(location["lat"])
        longitude = float(location["lng"])
    except (KeyError, TypeError, ValueError) as exc:
        raise GeocodeError("Failed to geocode address (malformed geocoding result)", status="OK") from exc
    formatted_address = result.get("formatted_address")
    if not isinstance(formatted_address, str) or not formatted_address.strip():
        raise GeocodeError("Failed to geocode address (result has no formatted address)", status="OK")
    return GeocodeResult(latitude=latitude, longitude=longitude, formatted_address=formatted_address)


def geocode_address(
    client: HttpClient,
    endpoint: str,
    api_key: str,
    address: str,
    *,
    timeout: TimeoutConfig | None = None,
) -> GeocodeResult:
    try:
        payload = client.get_json(endpoint, params={"address": address, "key": api_key}, timeout=timeout)
    except HttpRequestError as exc:
        raise GeocodeError(f"Failed to geocode address ({exc.describe()})", status=_http_status(exc)) from exc

    status = payload.get("status")
    if status == "ZERO_RESULTS":
        raise NotFoundError(f"No results found for address: {address}")
    if status != "OK":
        raise GeocodeError(f"Failed to geocode address ({_status_message(payload)})", status=str(status))

    results = payload.get("results") or []
    if not results:
        raise NotFoundError(f"No results found for address: {address}")
    return _parse_result(results[0])


def check_geocode_key(
    client: HttpClient,
    endpoint: str,
    api_key: str,
    *,
    label: str,
    timeout: TimeoutConfig | None = None,
) -> None:
    """Issue a throwaway geocode request and fail if the provider refuses ``api_key``."""
    try:
        payload = client.get_json(
            endpoint,
            params={"address": KEY_CHECK_GEOCODE_ADDRESS, "key": api_key},
            timeout=timeout,
        )
    except HttpRequestError as exc:
        raise CredentialError(f"Invalid {label} API key or API access is restricted ({exc.describe()})") from exc

    if payload.get("status") in DENIED_STATUSES:
        raise CredentialError(
            f"Invalid {label} API key or API access is restricted ({_status_message(payload)})"
        )
