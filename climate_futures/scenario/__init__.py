"""Scenario generation: models, parsing, keyword fallback, forecast constraints, pipeline."""
