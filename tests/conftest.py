"""Shared test fixtures for the climate-futures test suite."""

import json
import os

import pytest

# Ensure test environment variables are set before any config import
os.environ["CLIMATE_LLM_API_KEY"] = ""
os.environ["CLIMATE_STORE_BACKEND"] = "memory"
os.environ["CLIMATE_SEED_DEMO_SCENARIO"] = "false"

from climate_futures.storage import InMemoryScenarioStore  # noqa: E402
from climate_futures.utils import CompletionUnavailable  # noqa: E402


class FakeCompletionClient:
    """Scripted stand-in for the completion service.

    ``responses`` are returned (or raised, when they are exceptions) in
    order; the last one repeats. Every call is recorded in ``calls``.
    """

    def __init__(self, *responses, available: bool = True):
        self.responses = list(responses) or [CompletionUnavailable("not configured")]
        self.available = available
        self.calls: list[dict] = []

    def complete(self, prompt: str, *, max_tokens: int, temperature: float) -> str:
        self.calls.append({"prompt": prompt, "max_tokens": max_tokens, "temperature": temperature})
        response = self.responses[min(len(self.calls) - 1, len(self.responses) - 1)]
        if isinstance(response, BaseException):
            raise response
        return response


class FixedRandom:
    """Perturbation source that always returns the same draw."""

    def __init__(self, value: float = 0.0):
        self.value = value

    def random(self) -> float:
        return self.value


@pytest.fixture(autouse=True)
def reset_config():
    """Reset the config singleton around every test."""
    import climate_futures.config
    climate_futures.config._config = None
    yield
    climate_futures.config._config = None


@pytest.fixture
def sample_scenario_payload():
    """A well-formed scenario object as the completion service returns it."""
    return {
        "theme": "Fusion abundance rewires the global economy",
        "alt_forecasts": {
            "global_temp_2100": 1.7,
            "carbon_emissions_2100": 4.2,
            "sea_level_rise_2100": 0.55,
            "death_toll_annual": 120000,
            "refugees": 8000000,
            "arable_land_loss_percent": 6,
            "population": 9400000000,
            "biodiversity_loss_percent": 18,
            "gdp_loss_percent": 2.5,
            "conflict_index": 0.3,
        },
        "narrative": "Cheap fusion arrives early.\n\nGrids decarbonize within two decades.",
    }


@pytest.fixture
def sample_completion(sample_scenario_payload):
    """The same payload wrapped in chatty prose, as models often answer."""
    return (
        "Here is your scenario:\n\n"
        + json.dumps(sample_scenario_payload, indent=2)
        + "\n\nLet me know if you want another one."
    )


@pytest.fixture
def unavailable_client():
    return FakeCompletionClient(CompletionUnavailable("Completion service is not configured"), available=False)


@pytest.fixture
def memory_store():
    return InMemoryScenarioStore()


@pytest.fixture
def fixed_rng():
    return FixedRandom(0.0)
