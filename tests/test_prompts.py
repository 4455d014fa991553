"""Tests for prompt construction."""

from climate_futures.baseline import DEFAULT_BASELINE, DEFAULT_IMPACTS, merge_impacts
from climate_futures.llm.prompts import (
    build_bulletin_prompt,
    build_question_prompt,
    build_scenario_prompt,
)


class TestScenarioPrompt:
    def test_embeds_input_and_figures(self):
        prompt = build_scenario_prompt("What if fusion?", DEFAULT_BASELINE, DEFAULT_IMPACTS)
        assert prompt.count('"What if fusion?"') == 2
        assert "1.1°C" in prompt
        assert "0.22m" in prompt
        assert "500,000" in prompt
        assert "25,000,000" in prompt
        assert "8.0%" in prompt or "8%" in prompt

    def test_json_skeleton_is_literal(self):
        prompt = build_scenario_prompt("x", DEFAULT_BASELINE, DEFAULT_IMPACTS)
        assert '"alt_forecasts": {' in prompt
        assert "{{" not in prompt

    def test_braces_in_input_are_safe(self):
        prompt = build_scenario_prompt("What if {everything} changed?", DEFAULT_BASELINE, DEFAULT_IMPACTS)
        assert "What if {everything} changed?" in prompt

    def test_pure_function(self):
        a = build_scenario_prompt("same", DEFAULT_BASELINE, DEFAULT_IMPACTS)
        b = build_scenario_prompt("same", DEFAULT_BASELINE, DEFAULT_IMPACTS)
        assert a == b

    def test_formatting_rules_present(self):
        prompt = build_scenario_prompt("x", DEFAULT_BASELINE, DEFAULT_IMPACTS)
        assert "No thousands separators" in prompt
        assert "No negative numbers" in prompt


class TestNarrativePrompts:
    def test_question_prompt(self):
        prompt = build_question_prompt("Why is the sea rising?", DEFAULT_BASELINE, DEFAULT_IMPACTS)
        assert '"Why is the sea rising?"' in prompt
        assert "Sea level rise: 0.22m" in prompt

    def test_bulletin_prompt_uses_overrides(self):
        impacts = merge_impacts(DEFAULT_IMPACTS, {"death_toll_annual": 750_000})
        prompt = build_bulletin_prompt(DEFAULT_BASELINE, impacts)
        assert "climate bulletin" in prompt
        assert "750,000" in prompt
