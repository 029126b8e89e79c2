"""Domain errors and failure typing."""

from __future__ import annotations


class PipelineError(Exception):
    """Base class for pipeline failures.

    ``str(exc)`` is the user-facing message shown in the error banner.
    """

    error_code = "PIPELINE_ERROR"


class ConfigError(PipelineError):
    """Raised for invalid or missing configuration."""

    error_code = "CONFIG_ERROR"


class ValidationError(PipelineError):
    """Raised for bad input, before any network call."""

    error_code = "VALIDATION_ERROR"


class CredentialError(PipelineError):
    """Raised when an API key is missing, invalid or restricted."""

    error_code = "CREDENTIAL_ERROR"


class NetworkError(PipelineError):
    """Raised when a request was sent but no response came back."""

    error_code = "NETWORK_ERROR"


class RequestTimeoutError(PipelineError):
    """Raised when a request exceeded its configured deadline."""

    error_code = "TIMEOUT_ERROR"


class GeocodeError(PipelineError):
    """Raised when the geocoder answers with a non-OK status."""

    error_code = "GEOCODE_ERROR"

    def __init__(self, message: str, status: str | None = None) -> None:
        super().__init__(message)
        self.status = status


class NotFoundError(PipelineError):
    """Raised when the address yields zero geocoding results."""

    error_code = "NOT_FOUND_ERROR"


class MapImageError(PipelineError):
    """Raised when the satellite tile fetch fails."""

    error_code = "MAP_IMAGE_ERROR"


class SolarApiError(PipelineError):
    """Raised for solar provider error statuses and malformed payloads."""

    error_code = "SOLAR_API_ERROR"
