"""Data models used across the pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from solar_insights.common.errors import PipelineError


@dataclass(frozen=True)
class GeocodeResult:
    latitude: float
    longitude: float
    formatted_address: str

    @property
    def center(self) -> str:
        return f"{self.latitude},{self.longitude}"


@dataclass(frozen=True)
class SolarInsights:
    yearly_generation_kwh: float
    potential_savings_usd: int
    annual_sunshine_hours: int
    roof_space_m2: int
    number_of_panels: int
    address: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class PipelineOutcome:
    """Tagged result of one submission: either ``insights`` or ``error`` is set, never both."""

    submission_id: str
    address: str
    insights: SolarInsights | None = None
    map_url: str | None = None
    error: PipelineError | None = None
    failed_stage: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str | None:
        return str(self.error) if self.error is not None else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "submission_id": self.submission_id,
            "address": self.address,
            "ok": self.ok,
            "map_url": self.map_url,
            "insights": self.insights.to_dict() if self.insights is not None else None,
            "error": None
            if self.error is None
            else {
                "error_code": self.error.error_code,
                "message": str(self.error),
                "stage": self.failed_stage,
            },
        }
