"""Pydantic request/response models for the climate-futures API."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Narrative
# ---------------------------------------------------------------------------

class NarrativeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    baseline_data: dict[str, Any] | None = Field(default=None, alias="baselineData")
    human_impacts: dict[str, Any] | None = Field(default=None, alias="humanImpacts")
    question: str | None = Field(default=None, max_length=500)


class NarrativeResponse(BaseModel):
    narrative: str


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class ErrorResponse(BaseModel):
    error: str


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------

class HealthResponse(BaseModel):
    status: str = "healthy"
    timestamp: datetime
    llm_available: bool = False
