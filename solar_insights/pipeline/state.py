"""Form state and its transitions."""

from __future__ import annotations

from dataclasses import dataclass, replace

from solar_insights.common.models import PipelineOutcome, SolarInsights


@dataclass(frozen=True)
class PipelineState:
    loading: bool = False
    error: str | None = None
    map_url: str | None = None
    solar_data: SolarInsights | None = None


def begin_submission(state: PipelineState) -> PipelineState:
    return replace(state, loading=True, error=None, map_url=None, solar_data=None)


def finish_submission(state: PipelineState, outcome: PipelineOutcome) -> PipelineState:
    # A failed submission never shows a map, even when the tile itself loaded.
    if outcome.ok:
        return replace(state, loading=False, error=None, map_url=outcome.map_url, solar_data=outcome.insights)
    return replace(state, loading=False, error=outcome.message, map_url=None, solar_data=None)


def dismiss_error(state: PipelineState) -> PipelineState:
    return replace(state, error=None)
