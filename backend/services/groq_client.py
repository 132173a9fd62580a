"""
Groq chat completion capability.

CORE GOAL:
- Turn (system prompt, user prompt) into one text blob, or fail
- Hard timeout, no retries - callers decide whether to retry a request
- Surface every failure as LLMError so the pipeline can map it

The client is built once from ChartSettings and passed in explicitly.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol

from groq import Groq

from services.settings import ChartSettings

logger = logging.getLogger(__name__)


class LLMError(Exception):
    """The LLM call failed (network, timeout, API error, missing key)."""


class LLMEmptyResponseError(LLMError):
    """The LLM answered without any content."""


@dataclass(frozen=True)
class CompletionOptions:
    max_output_tokens: int
    temperature: float


class LLMCompletion(Protocol):
    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        options: CompletionOptions,
    ) -> str:
        ...


def create_groq_client(settings: ChartSettings) -> Optional[Groq]:
    """Return a Groq client, or None if no API key is configured."""
    if not settings.groq_api_key:
        logger.warning("GROQ_API_KEY not set - chart generation will be unavailable")
        return None
    return Groq(api_key=settings.groq_api_key)


class GroqCompletion:
    """LLMCompletion backed by Groq chat completions."""

    def __init__(self, client: Optional[Groq], settings: ChartSettings):
        self.client = client
        self.model = settings.model
        self.timeout_seconds = settings.timeout_seconds

    @classmethod
    def from_settings(cls, settings: ChartSettings) -> "GroqCompletion":
        return cls(create_groq_client(settings), settings)

    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        options: CompletionOptions,
    ) -> str:
        if self.client is None:
            raise LLMError("GROQ_API_KEY not set")

        messages: List[Dict[str, str]] = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        kwargs: Dict[str, Any] = dict(
            model=self.model,
            messages=messages,
            temperature=options.temperature,
            max_tokens=options.max_output_tokens,
        )

        started = time.monotonic()
        try:
            logger.info("Calling Groq model: %s", self.model)
            response = self.client.with_options(
                timeout=self.timeout_seconds,
                max_retries=0,
            ).chat.completions.create(**kwargs)
        except Exception as exc:  # noqa: BLE001 - every client failure maps to LLMError
            elapsed_ms = (time.monotonic() - started) * 1000
            logger.error("Groq call failed for model %s after %.0fms: %s", self.model, elapsed_ms, exc)
            raise LLMError(str(exc) or type(exc).__name__) from exc

        elapsed_ms = (time.monotonic() - started) * 1000
        usage = getattr(response, "usage", None)
        if usage is not None:
            logger.info(
                "Groq responded in %.0fms (prompt=%s, completion=%s, total=%s tokens)",
                elapsed_ms,
                getattr(usage, "prompt_tokens", None),
                getattr(usage, "completion_tokens", None),
                getattr(usage, "total_tokens", None),
            )

        choices = getattr(response, "choices", None) or []
        content = choices[0].message.content if choices else None
        if not content or not content.strip():
            raise LLMEmptyResponseError("LLM returned empty response")
        return content
