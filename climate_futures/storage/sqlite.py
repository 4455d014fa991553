"""SQLite scenario store using SQLAlchemy."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from sqlalchemy import DateTime, Integer, Text, create_engine, func, select
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, sessionmaker

from climate_futures.scenario.models import AltForecast, Scenario, ScenarioDraft
from climate_futures.storage.base import ScenarioStore
from climate_futures.utils import ScenarioNotFound

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class ScenarioRow(Base):
    """Generated scenarios, one row per successful generation."""

    __tablename__ = "scenarios"
    # AUTOINCREMENT keeps ids strictly increasing, never reused
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_input: Mapped[str] = mapped_column(Text)
    theme: Mapped[str] = mapped_column(Text)
    alt_forecasts: Mapped[str] = mapped_column(Text)  # JSON object
    narrative: Mapped[str] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime)


class SQLiteScenarioStore(ScenarioStore):
    """SQLite-backed scenario store.

    Each ``create`` runs in its own committed transaction, so a reader
    never sees a partially written record.
    """

    def __init__(self, db_path: str | Path = "climate_dashboard.db"):
        """Initialize SQLite storage.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = Path(db_path)
        if self.db_path.parent and not self.db_path.parent.exists():
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._engine = create_engine(
            f"sqlite:///{self.db_path}",
            echo=False,
            connect_args={"check_same_thread": False},
        )
        self._session_factory = sessionmaker(self._engine, expire_on_commit=False)
        Base.metadata.create_all(self._engine)
        logger.info("SQLite scenario store ready at %s", self.db_path)

    def _row_to_scenario(self, row: ScenarioRow) -> Scenario:
        created_at = row.created_at
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return Scenario(
            id=row.id,
            user_input=row.user_input,
            theme=row.theme,
            alt_forecasts=AltForecast.model_validate(json.loads(row.alt_forecasts)),
            narrative=row.narrative,
            created_at=created_at,
        )

    def create(self, draft: ScenarioDraft) -> Scenario:
        row = ScenarioRow(
            user_input=draft.user_input,
            theme=draft.theme,
            alt_forecasts=json.dumps(draft.alt_forecasts.present()),
            narrative=draft.narrative,
            created_at=datetime.now(timezone.utc).replace(tzinfo=None),
        )
        with self._session_factory() as session, session.begin():
            session.add(row)
        return self._row_to_scenario(row)

    def list(self) -> list[Scenario]:
        with self._session_factory() as session:
            rows = session.scalars(
                select(ScenarioRow).order_by(ScenarioRow.created_at.desc(), ScenarioRow.id.desc())
            ).all()
            return [self._row_to_scenario(row) for row in rows]

    def get(self, scenario_id: int) -> Scenario:
        with self._session_factory() as session:
            row = session.get(ScenarioRow, scenario_id)
            if row is None:
                raise ScenarioNotFound(scenario_id)
            return self._row_to_scenario(row)

    def count(self) -> int:
        with self._session_factory() as session:
            return session.scalar(select(func.count()).select_from(ScenarioRow)) or 0

    def exists_for_input(self, user_input: str) -> bool:
        with self._session_factory() as session:
            found = session.scalar(
                select(ScenarioRow.id).where(ScenarioRow.user_input == user_input).limit(1)
            )
            return found is not None

    def close(self) -> None:
        self._engine.dispose()
