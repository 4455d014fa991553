"""Tests for the forecast constraint engine."""

import random
from datetime import datetime, timezone

import pytest

from climate_futures.baseline import DEFAULT_BASELINE, ForecastPoint
from climate_futures.scenario.constraints import (
    IndicatorKind,
    build_speculative_forecast,
    interpolate,
    sample_years,
)
from climate_futures.scenario.models import AltForecast
from tests.conftest import FixedRandom

TEMP = DEFAULT_BASELINE.global_temp
EMISSIONS = DEFAULT_BASELINE.carbon_emissions
SEA = DEFAULT_BASELINE.sea_level_rise


def _ends(points):
    return points[0], points[-1]


class TestSampleYears:
    def test_decades_from_present(self):
        assert sample_years(2030) == [2030, 2040, 2050, 2060, 2070, 2080, 2090, 2100]

    def test_unaligned_present_stops_before_end(self):
        assert sample_years(2026) == [2026, 2036, 2046, 2056, 2066, 2076, 2086, 2096]

    def test_present_at_or_after_end(self):
        assert sample_years(2100) == [2100]
        assert sample_years(2110) == [2110]


class TestTemperature:
    def _curve(self, target, rng, present_year=2030):
        return interpolate(
            TEMP.forecast, TEMP.current, target, IndicatorKind.TEMPERATURE,
            present_year=present_year, rng=rng,
        )

    def test_floor_replaces_optimistic_target(self, fixed_rng):
        first, last = _ends(self._curve(1.2, fixed_rng))
        assert first.speculative == pytest.approx(1.1)
        assert last.speculative == pytest.approx(2.6)

    def test_target_above_floor_is_kept(self, fixed_rng):
        _, last = _ends(self._curve(3.0, fixed_rng))
        assert last.speculative == pytest.approx(3.0)

    def test_missing_target_uses_floor(self, fixed_rng):
        _, last = _ends(self._curve(None, fixed_rng))
        assert last.speculative == pytest.approx(2.6)

    def test_perturbation_is_bounded(self):
        _, last = _ends(self._curve(1.2, FixedRandom(0.999)))
        assert 2.6 <= last.speculative < 2.6 + 0.3

    def test_never_below_committed_warming_at_end(self):
        for seed in range(20):
            _, last = _ends(self._curve(0.5, random.Random(seed)))
            assert last.speculative >= TEMP.current + 1.5

    def test_linear_between_endpoints(self, fixed_rng):
        points = self._curve(3.0, fixed_rng)
        # 2060 is 30/70 of the way through 2030..2100
        assert points[3].year == 2060
        assert points[3].speculative == pytest.approx(1.1 + (3.0 - 1.1) * 30 / 70)


class TestEmissions:
    def _curve(self, target, paired, fixed_rng):
        return interpolate(
            EMISSIONS.forecast, EMISSIONS.current, target, IndicatorKind.EMISSIONS,
            present_year=2030, rng=fixed_rng, paired_temperature_target=paired,
        )

    def test_explicit_target_is_trusted(self, fixed_rng):
        first, last = _ends(self._curve(10.0, 1.8, fixed_rng))
        assert first.speculative == pytest.approx(36.8)
        assert last.speculative == pytest.approx(10.0)

    def test_residual_floor_for_low_warming(self, fixed_rng):
        _, last = _ends(self._curve(None, 1.8, fixed_rng))
        assert last.speculative == pytest.approx(36.8 * 0.15)

    def test_doubled_residual_for_high_warming(self, fixed_rng):
        _, last = _ends(self._curve(None, 2.5, fixed_rng))
        assert last.speculative == pytest.approx(36.8 * 0.15 * 2)

    def test_doubled_residual_without_temperature_target(self, fixed_rng):
        _, last = _ends(self._curve(None, None, fixed_rng))
        assert last.speculative == pytest.approx(36.8 * 0.15 * 2)

    def test_deployment_lag_reaches_floor_early(self, fixed_rng):
        points = self._curve(None, 1.8, fixed_rng)
        lagged = 10 / 70 + 10 / 20
        assert points[1].speculative == pytest.approx(36.8 + (5.52 - 36.8) * lagged)
        assert points[2].speculative == pytest.approx(5.52)


class TestSeaLevel:
    def _curve(self, target, paired, rng):
        return interpolate(
            SEA.forecast, SEA.current, target, IndicatorKind.SEA_LEVEL,
            present_year=2030, rng=rng, paired_temperature_target=paired,
        )

    def test_explicit_target_is_trusted(self, fixed_rng):
        _, last = _ends(self._curve(0.85, 1.8, fixed_rng))
        assert last.speculative == pytest.approx(0.85)

    def test_low_warming_scaling(self, fixed_rng):
        _, last = _ends(self._curve(None, 1.8, fixed_rng))
        assert last.speculative == pytest.approx((0.22 + 0.3) * 1.2)

    def test_high_warming_scaling(self, fixed_rng):
        _, last = _ends(self._curve(None, 2.5, fixed_rng))
        assert last.speculative == pytest.approx((0.22 + 0.3) * 1.8)

    def test_ice_sheet_perturbation(self):
        _, last = _ends(self._curve(None, 1.8, FixedRandom(0.5)))
        assert last.speculative == pytest.approx((0.22 + 0.3) * 1.2 + 0.05)


class TestInterpolate:
    def test_baseline_looked_up_by_index(self, fixed_rng):
        points = interpolate(
            TEMP.forecast, TEMP.current, None, IndicatorKind.TEMPERATURE,
            present_year=2030, rng=fixed_rng,
        )
        assert [p.baseline for p in points] == [1.1, 1.3, 1.6, 2.0, 2.4, 2.8, 3.2, 3.5]

    def test_short_curve_falls_back_to_current(self, fixed_rng):
        curve = (ForecastPoint(year=2024, value=1.0), ForecastPoint(year=2030, value=1.2))
        points = interpolate(
            curve, 1.1, None, IndicatorKind.TEMPERATURE, present_year=2030, rng=fixed_rng,
        )
        assert [p.baseline for p in points[:3]] == [1.0, 1.2, 1.1]

    def test_present_at_end_is_single_point(self, fixed_rng):
        points = interpolate(
            TEMP.forecast, TEMP.current, 1.8, IndicatorKind.TEMPERATURE,
            present_year=2100, rng=fixed_rng,
        )
        assert len(points) == 1
        assert points[0].speculative == pytest.approx(2.6)

    def test_default_present_year_is_now(self):
        points = interpolate(TEMP.forecast, TEMP.current, None, IndicatorKind.TEMPERATURE)
        assert points[0].year == datetime.now(timezone.utc).year


class TestBuildSpeculativeForecast:
    def test_fusion_targets(self, fixed_rng):
        forecast = build_speculative_forecast(
            DEFAULT_BASELINE, AltForecast(global_temp_2100=1.8), present_year=2030, rng=fixed_rng,
        )
        assert len(forecast.temperature) == len(forecast.emissions) == len(forecast.sea_level) == 8
        assert forecast.temperature[-1].speculative == pytest.approx(2.6)
        assert forecast.emissions[-1].speculative == pytest.approx(5.52)
        assert forecast.sea_level[-1].speculative == pytest.approx(0.624)

    def test_explicit_targets(self, fixed_rng):
        alt = AltForecast(global_temp_2100=3.2, carbon_emissions_2100=12.0, sea_level_rise_2100=0.9)
        forecast = build_speculative_forecast(DEFAULT_BASELINE, alt, present_year=2030, rng=fixed_rng)
        assert forecast.temperature[-1].speculative == pytest.approx(3.2)
        assert forecast.emissions[-1].speculative == pytest.approx(12.0)
        assert forecast.sea_level[-1].speculative == pytest.approx(0.9)

    def test_seeded_runs_are_reproducible(self):
        alt = AltForecast(global_temp_2100=2.4)
        a = build_speculative_forecast(DEFAULT_BASELINE, alt, present_year=2030, rng=random.Random(7))
        b = build_speculative_forecast(DEFAULT_BASELINE, alt, present_year=2030, rng=random.Random(7))
        assert a == b
