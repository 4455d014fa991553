"""Prompt templates for climate-futures LLM interactions."""

from __future__ import annotations

from climate_futures.baseline import BaselineData, HumanImpactSnapshot
from climate_futures.utils import format_count

# ---------------------------------------------------------------------------
# Speculative scenario generation
# ---------------------------------------------------------------------------

SCENARIO_GENERATION_PROMPT = """\
You are a science fiction writer who specializes in climate futures. Write an imaginative, detailed speculative scenario based on the user's input.

USER SCENARIO: "{user_input}"

BASELINE CLIMATE DATA:
- Global temperature: {global_temp}°C above pre-industrial
- Sea level rise: {sea_level}m since 1900
- Annual climate deaths: {death_toll}
- Climate refugees: {refugees}
- GDP at risk: {gdp_loss}%

The scenario must be specific to "{user_input}". Do not return a generic future.

CLIMATE REALITY CONSTRAINTS:
1. Committed warming: about 1.5°C of warming above today is already locked in, even with zero emissions.
2. Tipping points: Arctic sea ice and permafrost have crossed irreversible thresholds.
3. Sea level rise: thermal expansion and ice sheet dynamics continue for centuries.
4. Technology limits: breakthrough technologies take decades to scale globally.
5. Physical laws: no scenario may violate basic climate physics or thermodynamics.

CREATIVE REQUIREMENTS:
- Give specific, concrete mechanisms for how the scenario moves each metric.
- Include positive and negative consequences, cascading effects and unintended consequences.
- Consider geopolitical, economic and cultural ripple effects.
- Do not show impossible reversals such as temperatures dropping below committed warming.

Return ONLY a JSON object. No text before or after it, no code fences, no explanations.

JSON STRUCTURE (copy it exactly, replacing the values):
{{
  "theme": "One sentence describing how civilization is transformed in this specific scenario",
  "alt_forecasts": {{
    "global_temp_2100": 2.1,
    "carbon_emissions_2100": 12.5,
    "sea_level_rise_2100": 0.85,
    "death_toll_annual": 350000,
    "refugees": 18000000,
    "arable_land_loss_percent": 12,
    "population": 9200000000,
    "biodiversity_loss_percent": 22,
    "gdp_loss_percent": 7
  }},
  "narrative": "Three or four paragraphs covering how the scenario unfolds, concrete examples of each metric change, positive and negative consequences, and the new challenges it creates."
}}

FORMATTING RULES:
- Use ONLY plain decimal numbers (write 9000000000, never "9 billion").
- No fractions (write 0.5, never 1/2).
- No negative numbers.
- No units inside values.
- No quotes around numbers.
- No thousands separators (write 9000000000, never 9,000,000,000).
- Use ONLY the property names shown above and do NOT add any others.
"""


def build_scenario_prompt(
    user_input: str,
    baseline: BaselineData,
    impacts: HumanImpactSnapshot,
) -> str:
    """Render the scenario-generation instruction for *user_input*.

    Pure function of its inputs. The caller is responsible for rejecting
    empty input before getting here.
    """
    return SCENARIO_GENERATION_PROMPT.format(
        user_input=user_input,
        global_temp=baseline.global_temp.current,
        sea_level=baseline.sea_level_rise.current,
        death_toll=format_count(impacts.death_toll_annual),
        refugees=format_count(impacts.refugees),
        gdp_loss=impacts.gdp_loss_percent,
    )


# ---------------------------------------------------------------------------
# Climate bulletin and Q&A
# ---------------------------------------------------------------------------

_DATA_SUMMARY = """\
Use this data: Global temperature: {global_temp}°C above pre-industrial,
Sea level rise: {sea_level}m,
Annual climate deaths: {death_toll},
Climate refugees: {refugees},
GDP at risk: {gdp_loss}%."""

QUESTION_PROMPT = """\
Answer this question about climate data: "{question}"

{data_summary}

Provide a thoughtful, data-informed response in 2-3 paragraphs.
"""

BULLETIN_PROMPT = """\
Generate a climate bulletin summarizing current climate status and human impacts.
{data_summary}
Write 2-3 paragraphs in a professional but engaging tone.
"""


def _data_summary(baseline: BaselineData, impacts: HumanImpactSnapshot) -> str:
    return _DATA_SUMMARY.format(
        global_temp=baseline.global_temp.current,
        sea_level=baseline.sea_level_rise.current,
        death_toll=format_count(impacts.death_toll_annual),
        refugees=format_count(impacts.refugees),
        gdp_loss=impacts.gdp_loss_percent,
    )


def build_question_prompt(question: str, baseline: BaselineData, impacts: HumanImpactSnapshot) -> str:
    return QUESTION_PROMPT.format(question=question, data_summary=_data_summary(baseline, impacts))


def build_bulletin_prompt(baseline: BaselineData, impacts: HumanImpactSnapshot) -> str:
    return BULLETIN_PROMPT.format(data_summary=_data_summary(baseline, impacts))
