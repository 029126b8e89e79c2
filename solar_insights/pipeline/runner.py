"""Address to solar insights pipeline."""

from __future__ import annotations

import logging
import time
from types import TracebackType
from typing import Any, Callable, TypeVar

from solar_insights.common.config_loader import Settings
from solar_insights.common.constants import (
    STAGE_FETCH_MAP,
    STAGE_FETCH_SOLAR,
    STAGE_GEOCODE,
    STAGE_VALIDATE,
    STAGE_VERIFY_CREDENTIALS,
)
from solar_insights.common.errors import PipelineError, ValidationError
from solar_insights.common.http import HttpClient
from solar_insights.common.ids import generate_run_id, generate_submission_id
from solar_insights.common.logging import log_event
from solar_insights.common.models import GeocodeResult, PipelineOutcome, SolarInsights
from solar_insights.common.time_utils import elapsed_ms
from solar_insights.pipeline.credentials import verify_credentials
from solar_insights.pipeline.insights import derive_solar_insights, placeholder_insights
from solar_insights.providers.geocode import geocode_address
from solar_insights.providers.solar import fetch_building_insights
from solar_insights.providers.static_map import fetch_map_tile

T = TypeVar("T")

UNKNOWN_ERROR_MESSAGE = "An unknown error occurred"


def validate_address(address: str | None) -> str:
    query = (address or "").strip()
    if not query:
        raise ValidationError("Please enter a valid address")
    return query


class AddressInsightsPipeline:
    """Runs one submission at a time: validate, verify keys, geocode, map tile, solar.

    Steps run strictly in order and the first failure ends the submission.
    Nothing carries over between submissions.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        http_client: HttpClient | None = None,
        logger: logging.Logger | None = None,
        run_id: str | None = None,
    ) -> None:
        self.settings = settings
        self.owns_client = http_client is None
        self.http_client = http_client or HttpClient(timeout=settings.timeout)
        self.logger = logger or logging.getLogger("solar_insights")
        self.run_id = run_id or generate_run_id()
        self.submission_count = 0

    def close(self) -> None:
        if self.owns_client:
            self.http_client.close()

    def __enter__(self) -> "AddressInsightsPipeline":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _run_stage(
        self,
        submission_id: str,
        stage: str,
        provider: str | None,
        func: Callable[..., T],
        *args: Any,
    ) -> T:
        started_at = time.monotonic()
        log_event(
            self.logger,
            "stage start",
            submission_id=submission_id,
            stage=stage,
            provider=provider,
            event="STAGE_START",
            status="ok",
        )
        try:
            result = func(*args)
        except PipelineError as exc:
            log_event(
                self.logger,
                f"stage failed: {exc}",
                submission_id=submission_id,
                stage=stage,
                provider=provider,
                event="STAGE_FAIL",
                status="error",
                http_status=getattr(exc.__cause__, "status_code", None),
                duration_ms=elapsed_ms(started_at),
                error_code=exc.error_code,
            )
            raise
        log_event(
            self.logger,
            "stage end",
            submission_id=submission_id,
            stage=stage,
            provider=provider,
            event="STAGE_END",
            status="ok",
            duration_ms=elapsed_ms(started_at),
        )
        return result

    def _geocode(self, query: str) -> GeocodeResult:
        return geocode_address(
            self.http_client,
            self.settings.endpoints.geocode,
            self.settings.solar_api_key,
            query,
            timeout=self.settings.timeout,
        )

    def _map_tile(self, location: GeocodeResult) -> str:
        return fetch_map_tile(
            self.http_client,
            self.settings.endpoints.static_map,
            self.settings.maps_api_key,
            location,
            timeout=self.settings.timeout,
        )

    def _solar(self, location: GeocodeResult) -> SolarInsights:
        if self.settings.mode == "mock":
            return placeholder_insights(location.formatted_address)
        payload = fetch_building_insights(
            self.http_client,
            self.settings.endpoints.solar,
            self.settings.solar_api_key,
            location,
            timeout=self.settings.timeout,
        )
        return derive_solar_insights(payload, location.formatted_address)

    def submit(self, address: str) -> PipelineOutcome:
        """Run the whole chain for ``address``. Never raises."""
        self.submission_count += 1
        submission_id = generate_submission_id(self.run_id, self.submission_count)
        # Raw input until validate_address returns the trimmed query.
        query = address or ""

        stage = STAGE_VALIDATE
        try:
            query = self._run_stage(submission_id, stage, None, validate_address, address)
            if self.settings.verify_credentials:
                stage = STAGE_VERIFY_CREDENTIALS
                self._run_stage(submission_id, stage, "google", verify_credentials, self.http_client, self.settings)
            stage = STAGE_GEOCODE
            location = self._run_stage(submission_id, stage, "geocoding", self._geocode, query)
            stage = STAGE_FETCH_MAP
            map_url = self._run_stage(submission_id, stage, "static-map", self._map_tile, location)
            stage = STAGE_FETCH_SOLAR
            solar_provider = "mock" if self.settings.mode == "mock" else "solar"
            insights = self._run_stage(submission_id, stage, solar_provider, self._solar, location)
        except PipelineError as exc:
            return PipelineOutcome(submission_id=submission_id, address=query, error=exc, failed_stage=stage)
        except Exception:
            self.logger.exception(
                "unexpected failure",
                extra={
                    "submission_id": submission_id,
                    "stage": stage,
                    "event": "STAGE_FAIL",
                    "status": "error",
                    "error_code": "UNEXPECTED_ERROR",
                },
            )
            return PipelineOutcome(
                submission_id=submission_id,
                address=query,
                error=PipelineError(UNKNOWN_ERROR_MESSAGE),
                failed_stage=stage,
            )

        log_event(
            self.logger,
            "submission complete",
            submission_id=submission_id,
            event="SUBMISSION_DONE",
            status="ok",
        )
        return PipelineOutcome(submission_id=submission_id, address=query, insights=insights, map_url=map_url)
