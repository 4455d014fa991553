"""Scenario store backends."""

from climate_futures.storage.base import ScenarioStore
from climate_futures.storage.memory import InMemoryScenarioStore
from climate_futures.storage.sqlite import SQLiteScenarioStore

__all__ = ["ScenarioStore", "InMemoryScenarioStore", "SQLiteScenarioStore", "create_store"]


def create_store(config) -> ScenarioStore:
    """Build the store backend named by ``config.store_backend``."""
    if config.store_backend == "memory":
        return InMemoryScenarioStore()
    return SQLiteScenarioStore(config.database_path)
