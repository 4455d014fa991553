"""Model-agnostic completion client using the OpenAI-compatible API.

Supports OpenAI, DeepSeek and Ollama. Non-Ollama providers require
``CLIMATE_LLM_API_KEY`` (or ``OPENAI_API_KEY``); without one the adapter is
unavailable and every call raises :class:`CompletionUnavailable`. Calls are
retried once on timeouts, connection errors and transient HTTP errors
(429, 500, 502, 503). Whatever still fails after retries is reported as
:class:`CompletionUnavailable` so callers can route to their fallback.
"""

import functools
import logging
import time
from typing import Protocol

from openai import APIConnectionError, APIError, APIStatusError, OpenAI

from climate_futures.config import Config, get_config
from climate_futures.utils import CompletionUnavailable

logger = logging.getLogger(__name__)


class CompletionClient(Protocol):
    """Opaque text-completion boundary: prompt in, free text out."""

    def complete(self, prompt: str, *, max_tokens: int, temperature: float) -> str:
        ...


# ---------------------------------------------------------------------------
# Retry decorator for LLM calls
# ---------------------------------------------------------------------------

_LLM_RETRYABLE_STATUS = (429, 500, 502, 503)


def _llm_retry(max_attempts: int = 2, backoff_seconds: tuple[float, ...] = (1.0,)):
    """Retry decorator for LLM API calls on timeout or transient HTTP errors."""
    def decorator(fn):
        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            last_exc: Exception | None = None
            for attempt in range(1, max_attempts + 1):
                try:
                    return fn(*args, **kwargs)
                except APIConnectionError as exc:
                    # APITimeoutError is a subclass
                    last_exc = exc
                    if attempt < max_attempts:
                        wait = backoff_seconds[min(attempt - 1, len(backoff_seconds) - 1)]
                        logger.warning(
                            "LLM retry %d/%d for %s after %s: sleeping %.1fs",
                            attempt, max_attempts, fn.__name__, type(exc).__name__, wait,
                        )
                        time.sleep(wait)
                except APIStatusError as exc:
                    last_exc = exc
                    if exc.status_code in _LLM_RETRYABLE_STATUS and attempt < max_attempts:
                        wait = backoff_seconds[min(attempt - 1, len(backoff_seconds) - 1)]
                        logger.warning(
                            "LLM retry %d/%d for %s after HTTP %d: sleeping %.1fs",
                            attempt, max_attempts, fn.__name__, exc.status_code, wait,
                        )
                        time.sleep(wait)
                    else:
                        raise
            if last_exc is not None:
                logger.error("All %d LLM attempts failed for %s", max_attempts, fn.__name__)
                raise last_exc
        return wrapper
    return decorator


class LLMAdapter:
    """Unified completion client for OpenAI-compatible providers."""

    PROVIDER_CONFIGS = {
        "openai": {"base_url": "https://api.openai.com/v1", "default_model": "gpt-3.5-turbo"},
        "deepseek": {"base_url": "https://api.deepseek.com/v1", "default_model": "deepseek-chat"},
        "ollama": {"base_url": "http://localhost:11434/v1", "default_model": "llama3.1:8b"},
    }

    def __init__(self, config: Config | None = None):
        self.config = config or get_config()
        provider = self.config.llm_provider.lower()
        provider_cfg = self.PROVIDER_CONFIGS.get(provider, {})

        base_url = self.config.llm_base_url or provider_cfg.get("base_url", "")
        self.default_model = self.config.llm_model or provider_cfg.get("default_model", "")
        self.client: OpenAI | None = None

        if not self.config.llm_configured:
            logger.warning(
                "No API key for provider '%s'; completions will use local fallbacks. "
                "Set CLIMATE_LLM_API_KEY or OPENAI_API_KEY to enable them.",
                provider,
            )
            return

        self.client = OpenAI(
            base_url=base_url,
            api_key=self.config.llm_api_key or "ollama",
            timeout=self.config.llm_timeout,
        )
        logger.info("LLMAdapter initialized: provider=%s, model=%s", provider, self.default_model)

    @property
    def available(self) -> bool:
        return self.client is not None

    @_llm_retry(max_attempts=2, backoff_seconds=(1.0,))
    def _create(self, prompt: str, max_tokens: int, temperature: float) -> str:
        response = self.client.chat.completions.create(
            model=self.default_model,
            messages=[{"role": "user", "content": prompt}],
            max_tokens=max_tokens,
            temperature=temperature,
        )
        return response.choices[0].message.content or ""

    def complete(self, prompt: str, *, max_tokens: int, temperature: float) -> str:
        """Send *prompt* and return the text response.

        Raises CompletionUnavailable on missing credentials, timeouts,
        network failures and provider errors.
        """
        if self.client is None:
            raise CompletionUnavailable("Completion service is not configured")
        try:
            return self._create(prompt, max_tokens, temperature)
        except APIError as exc:
            logger.warning("Completion request failed: %s", exc)
            raise CompletionUnavailable(f"Completion service error: {type(exc).__name__}") from exc
