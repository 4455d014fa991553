"""Abstract base class for scenario stores."""

from __future__ import annotations

from abc import ABC, abstractmethod

from climate_futures.scenario.models import Scenario, ScenarioDraft


class ScenarioStore(ABC):
    """Append-only table of generated scenarios.

    Identifiers are unique and strictly increasing. There is no update or
    delete operation.
    """

    @abstractmethod
    def create(self, draft: ScenarioDraft) -> Scenario:
        """Assign an id and timestamp, persist the record and return it."""
        ...

    @abstractmethod
    def list(self) -> list[Scenario]:
        """All scenarios, newest first. Empty list when none exist."""
        ...

    @abstractmethod
    def get(self, scenario_id: int) -> Scenario:
        """Get a scenario by id. Raises ScenarioNotFound on a miss."""
        ...

    @abstractmethod
    def count(self) -> int:
        """Number of stored scenarios."""
        ...

    def exists_for_input(self, user_input: str) -> bool:
        """True when some stored scenario was generated from *user_input*."""
        return any(s.user_input == user_input for s in self.list())

    def close(self) -> None:
        """Release backend resources."""
