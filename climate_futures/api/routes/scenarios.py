"""Scenario endpoints - generation, listing, lookup and forecast curves."""

import logging

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse

from climate_futures.api.deps import get_baseline, get_scenario_generator, get_store
from climate_futures.api.models import ErrorResponse
from climate_futures.baseline import BaselineData
from climate_futures.scenario.constraints import build_speculative_forecast
from climate_futures.scenario.models import Scenario, ScenarioRequest, SpeculativeForecast
from climate_futures.scenario.pipeline import ScenarioGenerator
from climate_futures.storage.base import ScenarioStore
from climate_futures.utils import ClimateFuturesError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["scenarios"])

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
}


@router.get("/scenarios", response_model=list[Scenario], response_model_exclude_none=True)
def list_scenarios(store: ScenarioStore = Depends(get_store)):
    """All scenarios, newest first; an empty list when there are none."""
    return store.list()


@router.post(
    "/scenarios",
    response_model=Scenario,
    response_model_exclude_none=True,
    responses=_ERROR_RESPONSES,
)
def create_scenario(
    request: ScenarioRequest | None = Body(default=None),
    generator: ScenarioGenerator = Depends(get_scenario_generator),
):
    """Generate, persist and return a speculative scenario for ``userInput``.

    Taxonomy errors (invalid input, malformed completion, no fallback
    match) are rendered by the app-level handler as ``{"error": ...}``.
    A missing body is treated as an empty ``userInput``.
    """
    if request is None:
        request = ScenarioRequest()
    try:
        return generator.create(request)
    except ClimateFuturesError:
        raise
    except Exception:
        logger.exception("Scenario creation failed for %r", request.user_input[:100])
        return JSONResponse(status_code=500, content={"error": "Failed to create scenario"})


@router.get(
    "/scenarios/{scenario_id}",
    response_model=Scenario,
    response_model_exclude_none=True,
    responses={404: {"model": ErrorResponse}},
)
def get_scenario(scenario_id: int, store: ScenarioStore = Depends(get_store)):
    return store.get(scenario_id)


@router.get(
    "/scenarios/{scenario_id}/forecast",
    response_model=SpeculativeForecast,
    responses={404: {"model": ErrorResponse}},
)
def scenario_forecast(
    scenario_id: int,
    present_year: int | None = Query(default=None, ge=1900, le=2100),
    store: ScenarioStore = Depends(get_store),
    baseline: BaselineData = Depends(get_baseline),
):
    """Year-by-year baseline vs. speculative curves for a stored scenario."""
    scenario = store.get(scenario_id)
    return build_speculative_forecast(baseline, scenario.alt_forecasts, present_year=present_year)
