"""Completion parser - recover a ScenarioDraft from free completion text.

Two stages composed with first-success-wins semantics:

1. ``try_strict``: decode the whole trimmed text as JSON.
2. ``try_lenient``: decode only the first ``{ ... }`` span (first opening
   brace to last closing brace).

A stage fails when the text does not decode, decodes to something other
than an object, or carries ``alt_forecasts`` values that break the numeric
contract (see :func:`climate_futures.scenario.models.coerce_forecast_number`).
Field completeness is not checked here; absent targets stay absent.

When the response holds several objects the greedy span covers all of
them and usually fails to decode. That is a known limitation and is kept.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Callable

from pydantic import ValidationError

from climate_futures.scenario.models import ScenarioDraft
from climate_futures.utils import MalformedCompletion, truncate

logger = logging.getLogger(__name__)

_OBJECT_SPAN_RE = re.compile(r"\{[\s\S]*\}")


@dataclass(frozen=True)
class ParseOutcome:
    record: ScenarioDraft | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.record is not None


def _decode(candidate: str) -> ParseOutcome:
    try:
        payload = json.loads(candidate)
    except json.JSONDecodeError as exc:
        return ParseOutcome(error=f"invalid JSON: {exc.msg}")
    except ValueError as exc:
        # integer literals past the interpreter's digit limit
        return ParseOutcome(error=f"invalid JSON: {exc}")
    if not isinstance(payload, dict):
        return ParseOutcome(error=f"expected a JSON object, got {type(payload).__name__}")
    try:
        return ParseOutcome(record=ScenarioDraft.model_validate(payload))
    except ValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(p) for p in first["loc"])
        return ParseOutcome(error=f"{location}: {first['msg']}")


def try_strict(text: str) -> ParseOutcome:
    """Decode the full trimmed text."""
    return _decode(text.strip())


def try_lenient(text: str) -> ParseOutcome:
    """Decode the first brace-bounded span of *text*."""
    match = _OBJECT_SPAN_RE.search(text)
    if match is None:
        return ParseOutcome(error="no JSON object found")
    return _decode(match.group(0))


_STAGES: tuple[Callable[[str], ParseOutcome], ...] = (try_strict, try_lenient)


def parse_completion(raw_text: str) -> ScenarioDraft:
    """Return the first record any stage recovers from *raw_text*.

    Raises MalformedCompletion, carrying the first 200 characters of the
    raw text, when every stage fails.
    """
    errors: list[str] = []
    for stage in _STAGES:
        outcome = stage(raw_text)
        if outcome.ok:
            return outcome.record
        errors.append(f"{stage.__name__}: {outcome.error}")
        logger.debug("Parse stage %s failed: %s", stage.__name__, outcome.error)

    prefix = truncate(raw_text)
    logger.warning("Unrecoverable completion (%s). Response: %s...", "; ".join(errors), prefix)
    raise MalformedCompletion(
        f"AI generated invalid JSON. Response: {prefix}...",
        raw_prefix=prefix,
    )
