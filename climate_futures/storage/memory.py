"""In-memory scenario store."""

from __future__ import annotations

import threading
from datetime import datetime, timezone

from climate_futures.scenario.models import Scenario, ScenarioDraft
from climate_futures.storage.base import ScenarioStore
from climate_futures.utils import ScenarioNotFound


class InMemoryScenarioStore(ScenarioStore):
    """Thread-safe dict-based scenario store.

    Scenario records are frozen, so they are shared rather than copied.
    Ids come from a counter advanced under the lock.
    """

    def __init__(self) -> None:
        self._store: dict[int, Scenario] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def create(self, draft: ScenarioDraft) -> Scenario:
        with self._lock:
            scenario = Scenario(
                id=self._next_id,
                user_input=draft.user_input,
                theme=draft.theme,
                alt_forecasts=draft.alt_forecasts,
                narrative=draft.narrative,
                created_at=datetime.now(timezone.utc),
            )
            self._store[scenario.id] = scenario
            self._next_id += 1
            return scenario

    def list(self) -> list[Scenario]:
        with self._lock:
            return sorted(self._store.values(), key=lambda s: s.id, reverse=True)

    def get(self, scenario_id: int) -> Scenario:
        with self._lock:
            scenario = self._store.get(scenario_id)
        if scenario is None:
            raise ScenarioNotFound(scenario_id)
        return scenario

    def count(self) -> int:
        with self._lock:
            return len(self._store)

