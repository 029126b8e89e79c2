"""Solar metric derivation from raw building insights."""

from __future__ import annotations

import math
from typing import Any

from solar_insights.common.constants import (
    ELECTRICITY_RATE_USD_PER_KWH,
    HOURS_PER_YEAR,
    PLACEHOLDER_INSIGHTS,
    SAVINGS_HORIZON_YEARS,
)
from solar_insights.common.errors import SolarApiError
from solar_insights.common.models import SolarInsights


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _as_number(value: Any, key: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SolarApiError(f"Solar API response is missing a numeric {key}")
    if not math.isfinite(value) or value < 0:
        raise SolarApiError(f"Solar API response has an invalid {key}: {value!r}")
    return float(value)


def _number(container: dict[str, Any], key: str) -> float:
    return _as_number(container.get(key), key)


def _yearly_energy_dc_kwh(potential: dict[str, Any]) -> float:
    if "yearlyEnergyDcKwh" in potential:
        return _number(potential, "yearlyEnergyDcKwh")
    # The largest panel configuration is listed last.
    configs = potential.get("solarPanelConfigs")
    if isinstance(configs, list) and configs and isinstance(configs[-1], dict):
        return _number(configs[-1], "yearlyEnergyDcKwh")
    raise SolarApiError("Solar API response is missing a numeric yearlyEnergyDcKwh")


def _mean_sunshine(potential: dict[str, Any]) -> float:
    quantiles = potential.get("sunshineQuantiles")
    if not isinstance(quantiles, list) or not quantiles:
        raise SolarApiError("Solar API response has no sunshineQuantiles")
    values = [_as_number(q, "sunshineQuantiles") for q in quantiles]
    return sum(values) / len(values)


def derive_solar_insights(payload: dict[str, Any], formatted_address: str) -> SolarInsights:
    """Turn a building insights payload into the displayed metrics.

    yearly_generation_kwh multiplies panel count, panel wattage and the
    array's yearly DC energy together. The units do not line up; the
    figure is kept as-is pending a product decision.
    """
    potential = payload.get("solarPotential")
    if not isinstance(potential, dict):
        raise SolarApiError("Solar API response has no solarPotential")

    panels = _number(potential, "maxArrayPanelsCount")
    if not panels.is_integer():
        raise SolarApiError(f"Solar API response has an invalid maxArrayPanelsCount: {panels!r}")
    panel_watts = _number(potential, "panelCapacityWatts")
    yearly_energy = _yearly_energy_dc_kwh(potential)
    roof_area = _number(potential, "maxArrayAreaMeters2")
    mean_sunshine = _mean_sunshine(potential)

    return SolarInsights(
        yearly_generation_kwh=panels * panel_watts * yearly_energy,
        potential_savings_usd=round_half_up(yearly_energy * ELECTRICITY_RATE_USD_PER_KWH * SAVINGS_HORIZON_YEARS),
        annual_sunshine_hours=round_half_up(mean_sunshine * HOURS_PER_YEAR),
        roof_space_m2=round_half_up(roof_area),
        number_of_panels=int(panels),
        address=formatted_address,
    )


def placeholder_insights(formatted_address: str) -> SolarInsights:
    return SolarInsights(address=formatted_address, **PLACEHOLDER_INSIGHTS)
