"""
Utility functions for climate-futures

Provides logging setup, number formatting and the exception taxonomy
"""

import logging
from pathlib import Path
from typing import Optional


# ═══════════════════════════════════════════════════════════════════
# LOGGING
# ═══════════════════════════════════════════════════════════════════

def setup_logging(log_level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Configure logging for climate-futures"""
    level = getattr(logging, log_level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


# ═══════════════════════════════════════════════════════════════════
# FORMATTING
# ═══════════════════════════════════════════════════════════════════

def format_count(value: float) -> str:
    """Render a headcount-style figure with thousands separators (500,000)."""
    return f"{value:,.0f}"


def truncate(text: str, limit: int = 200) -> str:
    """Return at most *limit* characters of *text*."""
    return text[:limit]


# ═══════════════════════════════════════════════════════════════════
# EXCEPTIONS
# ═══════════════════════════════════════════════════════════════════

class ClimateFuturesError(Exception):
    """Base exception for climate-futures"""

    status_code = 500


class InvalidInput(ClimateFuturesError):
    """Empty user input or malformed baseline overrides"""

    status_code = 400


class CompletionUnavailable(ClimateFuturesError):
    """Completion service timed out, refused, or is not configured"""

    status_code = 503


class MalformedCompletion(ClimateFuturesError):
    """Completion text holds no recoverable scenario object"""

    status_code = 502

    def __init__(self, message: str, raw_prefix: str = ""):
        super().__init__(message)
        self.raw_prefix = raw_prefix


class NoFallbackMatch(ClimateFuturesError):
    """No pre-authored scenario matches the user input"""

    status_code = 503

    def __init__(self, user_input: str):
        super().__init__(
            f'Failed to generate scenario for: "{user_input}". '
            "The AI service is unavailable and no fallback scenario matches this input."
        )
        self.user_input = user_input


class ScenarioNotFound(ClimateFuturesError):
    """Scenario id lookup miss"""

    status_code = 404

    def __init__(self, scenario_id: int):
        super().__init__("Scenario not found")
        self.scenario_id = scenario_id
