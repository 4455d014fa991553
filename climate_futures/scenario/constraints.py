"""Forecast constraint engine - speculative curves bounded by committed change.

Blends each baseline indicator toward the scenario's 2100 target, sampled
every ten years from the present year, while respecting physical floors:

- Temperature: at least ``current + 1.5`` °C (committed warming), plus a
  non-negative tipping-point perturbation of at most 0.3 °C.
- Emissions: an explicit target is trusted as-is. Without one the curve
  falls to residual emissions (15% of today, doubled for pathways at or
  above 2 °C) following a 20-year deployment lag.
- Sea level: an explicit target is trusted as-is. Without one the floor is
  ``current + 0.3`` m (committed thermal expansion), scaled by 1.2 or 1.8
  depending on the paired temperature target, plus a non-negative ice-sheet
  perturbation of at most 0.1 m.

The perturbation source is injected: anything with ``random() -> [0, 1)``.
"""

from __future__ import annotations

import random
from datetime import datetime, timezone
from enum import Enum
from typing import Protocol, Sequence

from climate_futures.baseline import BaselineData, ForecastPoint
from climate_futures.scenario.models import AltForecast, SpeculativeForecast, SpeculativePoint

END_YEAR = 2100
STEP_YEARS = 10

COMMITTED_WARMING_C = 1.5
TIPPING_POINT_MAX_C = 0.3
RESIDUAL_EMISSIONS_SHARE = 0.15
DEPLOYMENT_LAG_YEARS = 20
COMMITTED_SEA_LEVEL_M = 0.3
ICE_SHEET_MAX_M = 0.1
LOW_WARMING_THRESHOLD_C = 2.0


class IndicatorKind(str, Enum):
    TEMPERATURE = "temperature"
    EMISSIONS = "emissions"
    SEA_LEVEL = "sea_level"


class RandomSource(Protocol):
    def random(self) -> float:
        ...


def sample_years(present_year: int, end_year: int = END_YEAR, step: int = STEP_YEARS) -> list[int]:
    """Decade samples anchored to *present_year*, inclusive of *end_year* when aligned."""
    if present_year >= end_year:
        return [present_year]
    return list(range(present_year, end_year + 1, step))


def _progress(year: int, present_year: int) -> float:
    span = END_YEAR - present_year
    if span <= 0:
        return 1.0
    return min(max((year - present_year) / span, 0.0), 1.0)


def _low_warming(paired_temperature_target: float | None) -> bool:
    return paired_temperature_target is not None and paired_temperature_target < LOW_WARMING_THRESHOLD_C


def _speculative_value(
    kind: IndicatorKind,
    year: int,
    present_year: int,
    current: float,
    target: float | None,
    paired_temperature_target: float | None,
    rng: RandomSource,
) -> float:
    progress = _progress(year, present_year)

    if kind is IndicatorKind.TEMPERATURE:
        floor = current + COMMITTED_WARMING_C
        floored = floor if target is None else max(target, floor)
        return current + (floored - current) * progress + rng.random() * TIPPING_POINT_MAX_C

    if kind is IndicatorKind.EMISSIONS:
        if target is not None:
            return current + (target - current) * progress
        residual = current * RESIDUAL_EMISSIONS_SHARE
        floored = residual if _low_warming(paired_temperature_target) else residual * 2
        lagged = min(progress + (year - present_year) / DEPLOYMENT_LAG_YEARS, 1.0)
        return current + (floored - current) * lagged

    # Sea level
    if target is not None:
        return current + (target - current) * progress
    floor = current + COMMITTED_SEA_LEVEL_M
    scaled = floor * 1.2 if _low_warming(paired_temperature_target) else floor * 1.8
    return current + (scaled - current) * progress + rng.random() * ICE_SHEET_MAX_M


def interpolate(
    baseline_curve: Sequence[ForecastPoint],
    current: float,
    target_2100: float | None,
    kind: IndicatorKind,
    *,
    present_year: int | None = None,
    rng: RandomSource | None = None,
    paired_temperature_target: float | None = None,
) -> list[SpeculativePoint]:
    """Pair each sampled year's baseline value with a constrained speculative value.

    The baseline value is looked up by sample index in *baseline_curve*,
    falling back to *current* past the end of the curve.
    """
    if present_year is None:
        present_year = datetime.now(timezone.utc).year
    if rng is None:
        rng = random.Random()

    points: list[SpeculativePoint] = []
    for index, year in enumerate(sample_years(present_year)):
        baseline = baseline_curve[index].value if index < len(baseline_curve) else current
        speculative = _speculative_value(
            kind, year, present_year, current, target_2100, paired_temperature_target, rng,
        )
        points.append(SpeculativePoint(year=year, baseline=baseline, speculative=speculative))
    return points


def build_speculative_forecast(
    baseline: BaselineData,
    alt_forecasts: AltForecast,
    *,
    present_year: int | None = None,
    rng: RandomSource | None = None,
) -> SpeculativeForecast:
    """Temperature, emissions and sea-level curves for one scenario."""
    if present_year is None:
        present_year = datetime.now(timezone.utc).year
    if rng is None:
        rng = random.Random()
    temp_target = alt_forecasts.global_temp_2100

    return SpeculativeForecast(
        temperature=interpolate(
            baseline.global_temp.forecast,
            baseline.global_temp.current,
            temp_target,
            IndicatorKind.TEMPERATURE,
            present_year=present_year,
            rng=rng,
        ),
        emissions=interpolate(
            baseline.carbon_emissions.forecast,
            baseline.carbon_emissions.current,
            alt_forecasts.carbon_emissions_2100,
            IndicatorKind.EMISSIONS,
            present_year=present_year,
            rng=rng,
            paired_temperature_target=temp_target,
        ),
        sea_level=interpolate(
            baseline.sea_level_rise.forecast,
            baseline.sea_level_rise.current,
            alt_forecasts.sea_level_rise_2100,
            IndicatorKind.SEA_LEVEL,
            present_year=present_year,
            rng=rng,
            paired_temperature_target=temp_target,
        ),
    )
