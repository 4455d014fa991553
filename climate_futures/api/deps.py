"""FastAPI dependencies resolving the services wired in ``create_app``."""

from fastapi import Request

from climate_futures.baseline import BaselineData, HumanImpactSnapshot
from climate_futures.llm.adapter import CompletionClient
from climate_futures.narrative import NarrativeGenerator
from climate_futures.scenario.pipeline import ScenarioGenerator
from climate_futures.storage.base import ScenarioStore


def get_store(request: Request) -> ScenarioStore:
    return request.app.state.store


def get_completion_client(request: Request) -> CompletionClient:
    return request.app.state.completion_client


def get_baseline(request: Request) -> BaselineData:
    return request.app.state.baseline


def get_impacts(request: Request) -> HumanImpactSnapshot:
    return request.app.state.impacts


def get_scenario_generator(request: Request) -> ScenarioGenerator:
    return request.app.state.scenario_generator


def get_narrative_generator(request: Request) -> NarrativeGenerator:
    return request.app.state.narrative_generator
