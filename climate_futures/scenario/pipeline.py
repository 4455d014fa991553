"""Scenario generation pipeline - user input to persisted Scenario.

Steps: validate input, normalize baseline overrides, build the prompt,
call the completion service, parse the response, persist.

"Service down" and "service confused" are handled differently:
``CompletionUnavailable`` routes to the keyword fallback, while a
``MalformedCompletion`` (a response arrived but could not be parsed) is
surfaced to the caller unchanged.
"""

from __future__ import annotations

import logging

from climate_futures.baseline import (
    DEFAULT_BASELINE,
    DEFAULT_IMPACTS,
    BaselineData,
    HumanImpactSnapshot,
    merge_baseline,
    merge_impacts,
)
from climate_futures.llm.adapter import CompletionClient
from climate_futures.llm.prompts import build_scenario_prompt
from climate_futures.scenario.fallback import fallback_scenario
from climate_futures.scenario.models import Scenario, ScenarioDraft, ScenarioRequest
from climate_futures.scenario.parser import parse_completion
from climate_futures.storage.base import ScenarioStore
from climate_futures.utils import CompletionUnavailable, InvalidInput

logger = logging.getLogger(__name__)

DEMO_SCENARIO_INPUT = "What if we master fusion energy before 2025?"


class ScenarioGenerator:
    """Turns a ScenarioRequest into a stored Scenario."""

    def __init__(
        self,
        completion_client: CompletionClient,
        store: ScenarioStore,
        baseline: BaselineData = DEFAULT_BASELINE,
        impacts: HumanImpactSnapshot = DEFAULT_IMPACTS,
        max_tokens: int = 1200,
        temperature: float = 0.9,
    ):
        self.completion_client = completion_client
        self.store = store
        self.baseline = baseline
        self.impacts = impacts
        self.max_tokens = max_tokens
        self.temperature = temperature

    def normalize(self, request: ScenarioRequest) -> tuple[str, BaselineData, HumanImpactSnapshot]:
        """Validate input and fill any missing baseline figures from defaults."""
        user_input = request.user_input.strip()
        if not user_input:
            raise InvalidInput("userInput is required")
        baseline = merge_baseline(self.baseline, request.baseline_data)
        impacts = merge_impacts(self.impacts, request.human_impacts)
        return user_input, baseline, impacts

    def generate(
        self,
        user_input: str,
        baseline: BaselineData,
        impacts: HumanImpactSnapshot,
    ) -> ScenarioDraft:
        """Produce the pre-insert record, falling back to keywords when the service is down."""
        prompt = build_scenario_prompt(user_input, baseline, impacts)
        try:
            raw = self.completion_client.complete(
                prompt, max_tokens=self.max_tokens, temperature=self.temperature,
            )
        except CompletionUnavailable as exc:
            logger.warning("Completion unavailable (%s); using keyword fallback", exc)
            return fallback_scenario(user_input)

        draft = parse_completion(raw)
        return draft.model_copy(update={"user_input": user_input})

    def create(self, request: ScenarioRequest) -> Scenario:
        user_input, baseline, impacts = self.normalize(request)
        draft = self.generate(user_input, baseline, impacts)
        scenario = self.store.create(draft)
        logger.info("Created scenario id=%d theme=%r", scenario.id, scenario.theme)
        return scenario


def seed_demo_scenario(store: ScenarioStore) -> Scenario | None:
    """Insert the fusion demo scenario once; returns it when inserted."""
    if store.exists_for_input(DEMO_SCENARIO_INPUT):
        logger.info("Demo scenario already present")
        return None
    scenario = store.create(fallback_scenario(DEMO_SCENARIO_INPUT))
    logger.info("Seeded demo scenario id=%d", scenario.id)
    return scenario
