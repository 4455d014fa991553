"""Pydantic v2 models for scenario generation request/response types.

Importable without the completion service or a datastore.
"""

from __future__ import annotations

import math
import re
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

_SEPARATOR_RE = re.compile(r"[,_\s]")
_FRACTION_RE = re.compile(r"^(\d+(?:\.\d+)?)/(\d+(?:\.\d+)?)$")


def coerce_forecast_number(value: Any) -> float | None:
    """Coerce a model-supplied value into a non-negative finite float.

    Repairs thousands separators ("9,000,000") and fractions-as-strings
    ("1/2"). Raises ValueError for anything else that is not a number,
    and for negative or non-finite numbers.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError("boolean is not a numeric forecast value")
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            raise ValueError("non-finite value: number too large") from None
    elif isinstance(value, str):
        text = _SEPARATOR_RE.sub("", value)
        fraction = _FRACTION_RE.match(text)
        if fraction:
            denominator = float(fraction.group(2))
            if denominator == 0:
                raise ValueError(f"division by zero in {value!r}")
            number = float(fraction.group(1)) / denominator
        else:
            try:
                number = float(text)
            except ValueError:
                raise ValueError(f"not a plain number: {value!r}") from None
    else:
        raise ValueError(f"not a number: {value!r}")

    if not math.isfinite(number):
        raise ValueError(f"non-finite value: {value!r}")
    if number < 0:
        raise ValueError(f"negative value: {value!r}")
    return number


class AltForecast(BaseModel):
    """AI-supplied endpoint targets and impact figures.

    Every field is optional: an absent target means "no AI-provided
    target for this indicator", never zero.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    global_temp_2100: float | None = None
    carbon_emissions_2100: float | None = None
    sea_level_rise_2100: float | None = None
    death_toll_annual: float | None = None
    refugees: float | None = None
    arable_land_loss_percent: float | None = None
    population: float | None = None
    biodiversity_loss_percent: float | None = None
    gdp_loss_percent: float | None = None
    conflict_index: float | None = None

    @field_validator("*", mode="before")
    @classmethod
    def repair_number(cls, v):
        return coerce_forecast_number(v)

    def present(self) -> dict[str, float]:
        """Only the fields that were actually supplied."""
        return self.model_dump(exclude_none=True)


class ScenarioDraft(BaseModel):
    """Pre-insert scenario record produced by the generation pipeline."""

    model_config = ConfigDict(extra="ignore")

    user_input: str = ""
    theme: str = ""
    alt_forecasts: AltForecast = AltForecast()
    narrative: str = ""

    @field_validator("theme", "narrative", mode="before")
    @classmethod
    def coerce_none_to_empty(cls, v):
        return v if v is not None else ""

    @field_validator("alt_forecasts", mode="before")
    @classmethod
    def coerce_missing_forecasts(cls, v):
        return v if v is not None else {}


class Scenario(BaseModel):
    """A persisted scenario; immutable once stored."""

    model_config = ConfigDict(frozen=True)

    id: int
    user_input: str
    theme: str
    alt_forecasts: AltForecast
    narrative: str
    created_at: datetime


class ScenarioRequest(BaseModel):
    """Inbound scenario-creation body (camelCase on the wire)."""

    model_config = ConfigDict(populate_by_name=True)

    user_input: str = Field(default="", alias="userInput", max_length=2000)
    baseline_data: dict[str, Any] | None = Field(default=None, alias="baselineData")
    human_impacts: dict[str, Any] | None = Field(default=None, alias="humanImpacts")

    @field_validator("user_input", mode="before")
    @classmethod
    def coerce_none_to_empty(cls, v):
        return v if v is not None else ""


class SpeculativePoint(BaseModel):
    year: int
    baseline: float
    speculative: float


class SpeculativeForecast(BaseModel):
    temperature: list[SpeculativePoint]
    emissions: list[SpeculativePoint]
    sea_level: list[SpeculativePoint]
