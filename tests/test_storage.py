"""Tests for the in-memory and SQLite scenario stores."""

import threading
from datetime import timezone

import pytest

from climate_futures.config import Config
from climate_futures.scenario.models import AltForecast, ScenarioDraft
from climate_futures.storage import (
    InMemoryScenarioStore,
    SQLiteScenarioStore,
    create_store,
)
from climate_futures.utils import ScenarioNotFound


def _draft(user_input="What if fusion?", temp=1.8):
    return ScenarioDraft(
        user_input=user_input,
        theme=f"Theme for {user_input}",
        alt_forecasts=AltForecast(global_temp_2100=temp, refugees=1_000_000),
        narrative="Para one.\n\nPara two.",
    )


@pytest.fixture(params=["memory", "sqlite"])
def store(request, tmp_path):
    if request.param == "memory":
        s = InMemoryScenarioStore()
    else:
        s = SQLiteScenarioStore(tmp_path / "scenarios.db")
    yield s
    s.close()


class TestScenarioStore:
    def test_empty_store_lists_nothing(self, store):
        assert store.list() == []
        assert store.count() == 0

    def test_create_assigns_id_and_timestamp(self, store):
        scenario = store.create(_draft())
        assert scenario.id == 1
        assert scenario.created_at.tzinfo is not None
        assert scenario.user_input == "What if fusion?"
        assert scenario.alt_forecasts.global_temp_2100 == 1.8

    def test_ids_strictly_increase(self, store):
        ids = [store.create(_draft(f"input {i}")).id for i in range(5)]
        assert ids == sorted(ids)
        assert len(set(ids)) == 5

    def test_list_newest_first(self, store):
        for i in range(3):
            store.create(_draft(f"input {i}"))
        assert [s.user_input for s in store.list()] == ["input 2", "input 1", "input 0"]

    def test_list_is_idempotent(self, store):
        store.create(_draft())
        store.create(_draft("second"))
        assert store.list() == store.list()

    def test_get_round_trips(self, store):
        created = store.create(_draft())
        fetched = store.get(created.id)
        assert fetched.id == created.id
        assert fetched.theme == created.theme
        assert fetched.narrative == created.narrative
        assert fetched.alt_forecasts == created.alt_forecasts
        assert fetched.created_at.tzinfo is not None

    def test_absent_targets_stay_absent(self, store):
        created = store.create(_draft())
        fetched = store.get(created.id)
        assert fetched.alt_forecasts.carbon_emissions_2100 is None
        assert fetched.alt_forecasts.present() == {"global_temp_2100": 1.8, "refugees": 1_000_000}

    def test_get_missing_raises(self, store):
        with pytest.raises(ScenarioNotFound) as exc_info:
            store.get(999)
        assert exc_info.value.scenario_id == 999
        assert exc_info.value.status_code == 404

    def test_exists_for_input(self, store):
        store.create(_draft("What if fusion?"))
        assert store.exists_for_input("What if fusion?")
        assert not store.exists_for_input("What if aliens?")

    def test_concurrent_creates_get_distinct_ids(self, store):
        ids = []
        lock = threading.Lock()

        def worker(i):
            scenario = store.create(_draft(f"thread {i}"))
            with lock:
                ids.append(scenario.id)

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(set(ids)) == 8
        assert store.count() == 8


class TestSQLiteScenarioStore:
    def test_persists_across_instances(self, tmp_path):
        path = tmp_path / "scenarios.db"
        first = SQLiteScenarioStore(path)
        created = first.create(_draft())
        first.close()

        second = SQLiteScenarioStore(path)
        try:
            fetched = second.get(created.id)
            assert fetched.theme == created.theme
            assert fetched.created_at.astimezone(timezone.utc) == created.created_at
        finally:
            second.close()

    def test_creates_parent_directory(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "scenarios.db"
        store = SQLiteScenarioStore(path)
        store.close()
        assert path.exists()


class TestCreateStore:
    def test_memory_backend(self):
        assert isinstance(create_store(Config(store_backend="memory")), InMemoryScenarioStore)

    def test_sqlite_backend(self, tmp_path):
        store = create_store(Config(store_backend="sqlite", database_path=str(tmp_path / "x.db")))
        try:
            assert isinstance(store, SQLiteScenarioStore)
        finally:
            store.close()
