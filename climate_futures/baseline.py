"""Baseline climate and human-impact figures.

Static per-decade forecasts to 2100 for the four tracked indicators and a
snapshot of human-impact metrics. Both are frozen pydantic models built
once at import; the pipeline receives them as injected read-only objects
instead of reading module globals, so tests can swap in fixtures.

Overrides from a request are laid over these defaults by
:func:`merge_baseline` and :func:`merge_impacts`, which always return a
fully-populated object.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from climate_futures.utils import InvalidInput

FORECAST_YEARS = (2024, 2030, 2040, 2050, 2060, 2070, 2080, 2090, 2100)


class ForecastPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    value: float


class BaselineSeries(BaseModel):
    model_config = ConfigDict(frozen=True)

    current: float
    forecast: tuple[ForecastPoint, ...] = ()


class BaselineData(BaseModel):
    """The set of tracked indicator series."""

    model_config = ConfigDict(frozen=True)

    global_temp: BaselineSeries
    carbon_emissions: BaselineSeries
    sea_level_rise: BaselineSeries
    forest_loss: BaselineSeries


class HumanImpactSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    death_toll_annual: float
    population: float
    arable_land_loss_percent: float
    refugees: float
    gdp_loss_percent: float
    biodiversity_loss_percent: float
    conflict_index: float


def _series(current: float, values: tuple[float, ...]) -> BaselineSeries:
    return BaselineSeries(
        current=current,
        forecast=tuple(ForecastPoint(year=y, value=v) for y, v in zip(FORECAST_YEARS, values)),
    )


DEFAULT_BASELINE = BaselineData(
    global_temp=_series(1.1, (1.1, 1.3, 1.6, 2.0, 2.4, 2.8, 3.2, 3.5, 3.8)),
    carbon_emissions=_series(36.8, (36.8, 38.2, 39.5, 40.1, 39.8, 38.5, 36.2, 33.1, 29.5)),
    sea_level_rise=_series(0.22, (0.22, 0.28, 0.38, 0.52, 0.71, 0.95, 1.24, 1.58, 1.95)),
    forest_loss=_series(10.1, (10.1, 12.3, 15.1, 18.2, 20.8, 22.5, 23.8, 24.5, 25.0)),
)

DEFAULT_IMPACTS = HumanImpactSnapshot(
    death_toll_annual=500_000,
    population=8.1e9,
    arable_land_loss_percent=15,
    refugees=25_000_000,
    gdp_loss_percent=8,
    biodiversity_loss_percent=35,
    conflict_index=0.7,
)


def merge_baseline(defaults: BaselineData, override: dict[str, Any] | None) -> BaselineData:
    """Overlay a (possibly partial) baseline override, series by series."""
    if not override:
        return defaults
    merged = defaults.model_dump()
    merged.update({k: v for k, v in override.items() if k in BaselineData.model_fields and v is not None})
    try:
        return BaselineData.model_validate(merged)
    except ValidationError as exc:
        raise InvalidInput(f"Invalid baselineData: {exc.errors()[0]['msg']}") from exc


def merge_impacts(defaults: HumanImpactSnapshot, override: dict[str, Any] | None) -> HumanImpactSnapshot:
    """Overlay a (possibly partial) human-impact override, field by field."""
    if not override:
        return defaults
    merged = defaults.model_dump()
    merged.update({k: v for k, v in override.items() if k in HumanImpactSnapshot.model_fields and v is not None})
    try:
        return HumanImpactSnapshot.model_validate(merged)
    except ValidationError as exc:
        raise InvalidInput(f"Invalid humanImpacts: {exc.errors()[0]['msg']}") from exc
