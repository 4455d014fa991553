"""Climate bulletins and data-grounded Q&A.

Unlike scenario creation, this path never fails: when the completion
service is unavailable, or answers with an empty string, a templated
narrative built from the same figures is returned instead.
"""

from __future__ import annotations

import logging
from datetime import date

from climate_futures.baseline import BaselineData, HumanImpactSnapshot
from climate_futures.llm.adapter import CompletionClient
from climate_futures.llm.prompts import build_bulletin_prompt, build_question_prompt
from climate_futures.utils import CompletionUnavailable, format_count

logger = logging.getLogger(__name__)

QUESTION_FALLBACK_TEMPLATE = """\
Based on current climate data, here is what can be said about "{question}":

This question touches several climate indicators at once. Global temperatures are currently {global_temp}°C above pre-industrial levels and sea levels have risen by {sea_level}m. These changes contribute to {death_toll} annual climate-related deaths and {refugees} climate refugees today.

For a more detailed picture, explore the Dashboard and Human Futures charts, or ask a narrower question about a specific indicator."""

BULLETIN_FALLBACK_TEMPLATE = """\
Climate Bulletin - {today}

The Earth's climate system continues to show concerning trends. Global temperatures have risen to {global_temp}°C above pre-industrial levels, and sea levels have risen by {sea_level}m since 1900. The human toll is already severe: {death_toll} annual deaths are attributed to climate-related causes and {refugees} people have been displaced as climate refugees.

The economic picture is equally stark, with {gdp_loss}% of global GDP at risk. Projections suggest these impacts will intensify through 2100 without coordinated global action."""


def fallback_narrative(
    baseline: BaselineData,
    impacts: HumanImpactSnapshot,
    question: str | None = None,
    today: date | None = None,
) -> str:
    """Templated bulletin or answer used when the completion service fails."""
    figures = {
        "global_temp": baseline.global_temp.current,
        "sea_level": baseline.sea_level_rise.current,
        "death_toll": format_count(impacts.death_toll_annual),
        "refugees": format_count(impacts.refugees),
        "gdp_loss": impacts.gdp_loss_percent,
    }
    if question:
        return QUESTION_FALLBACK_TEMPLATE.format(question=question, **figures)
    today = today or date.today()
    return BULLETIN_FALLBACK_TEMPLATE.format(today=today.isoformat(), **figures)


class NarrativeGenerator:
    """Bulletin mode without a question, Q&A mode with one."""

    def __init__(
        self,
        completion_client: CompletionClient,
        qa_max_tokens: int = 400,
        bulletin_max_tokens: int = 300,
        temperature: float = 0.7,
    ):
        self.completion_client = completion_client
        self.qa_max_tokens = qa_max_tokens
        self.bulletin_max_tokens = bulletin_max_tokens
        self.temperature = temperature

    def generate(
        self,
        baseline: BaselineData,
        impacts: HumanImpactSnapshot,
        question: str | None = None,
    ) -> str:
        question = question.strip() if question else None
        if question:
            prompt = build_question_prompt(question, baseline, impacts)
            max_tokens = self.qa_max_tokens
        else:
            prompt = build_bulletin_prompt(baseline, impacts)
            max_tokens = self.bulletin_max_tokens

        try:
            text = self.completion_client.complete(
                prompt, max_tokens=max_tokens, temperature=self.temperature,
            ).strip()
        except CompletionUnavailable as exc:
            logger.warning("Narrative completion unavailable (%s); using template", exc)
            return fallback_narrative(baseline, impacts, question)

        if not text:
            logger.warning("Narrative completion was empty; using template")
            return fallback_narrative(baseline, impacts, question)
        return text
