"""LLM-backed headline significance scoring.

Supports any OpenAI-compatible chat completions endpoint (OpenRouter by
default) and Anthropic. One request scores a whole batch of headlines; the
model is asked for a JSON array with one object per headline, in order.
"""

from __future__ import annotations

import json
import logging
import os
import re
from typing import Any

import anthropic
import openai
from pydantic import BaseModel, ValidationError, field_validator

logger = logging.getLogger(__name__)

NEUTRAL_SIGNIFICANCE = 5

_DEFAULT_MODEL = "mistralai/ministral-8b"
_DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
_MAX_HEADLINE_LEN = 300
_BASE_REPLY_TOKENS = 200
_TOKENS_PER_HEADLINE = 60
_JSON_ARRAY_RE = re.compile(r"\[[\s\S]*\]")

_SYSTEM_PROMPT = """You are a geopolitical analyst. For each headline, provide:
1. A significance score (1-10) where 10 is extremely important global news
   (10 = war declared, leader assassinated, major attack, nuclear event;
   8-9 = military action, major sanctions, diplomatic crisis;
   6-7 = policy changes, significant protests, economic moves;
   4-5 = regular political news; 1-3 = routine updates)
2. A brief one-sentence summary of why it matters

Respond in JSON format: [{"significance": number, "summary": "string"}, ...]
Return exactly one object per headline, in the order given."""


class Significance(BaseModel):
    """One headline's assessment."""

    significance: int = NEUTRAL_SIGNIFICANCE
    summary: str = ""

    @field_validator("significance", mode="before")
    @classmethod
    def _clamp(cls, value: Any) -> int:
        try:
            number = round(float(value))
        except (TypeError, ValueError):
            return NEUTRAL_SIGNIFICANCE
        return max(1, min(10, number))

    @field_validator("summary", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return "" if value is None else str(value)


def neutral(count: int) -> list[Significance]:
    return [Significance() for _ in range(count)]


def reply_token_budget(count: int) -> int:
    """Completion token limit for a batch of *count* headlines."""
    return _BASE_REPLY_TOKENS + _TOKENS_PER_HEADLINE * count


def _sanitize_headline(text: str) -> str:
    cleaned = "".join(ch for ch in text if ch.isprintable())
    return cleaned[:_MAX_HEADLINE_LEN]


def parse_assessments(text: str, expected: int) -> list[Significance] | None:
    """Extract the JSON array from a model reply.

    Bare numbers are accepted as scores without a summary. Returns ``None``
    when no array can be decoded. Short replies are padded with neutral
    entries and long ones truncated, so the result always has *expected*
    elements.
    """
    match = _JSON_ARRAY_RE.search(text)
    if match is None:
        return None
    try:
        raw = json.loads(match.group(0))
    except json.JSONDecodeError:
        return None
    if not isinstance(raw, list):
        return None

    results: list[Significance] = []
    for element in raw[:expected]:
        try:
            if isinstance(element, dict):
                results.append(Significance.model_validate(element))
            else:
                results.append(Significance(significance=element))
        except ValidationError:
            results.append(Significance())
    if len(results) != expected:
        logger.warning("Model returned %d assessments for %d headlines", len(raw), expected)
        results.extend(neutral(expected - len(results)))
    return results


class SignificanceAnalyzer:
    """Score headlines with an LLM; any failure yields neutral scores.

    Disabled (always neutral) when the API key environment variable is unset.
    """

    def __init__(
        self,
        *,
        provider: str = "openai",
        model: str = _DEFAULT_MODEL,
        base_url: str | None = _DEFAULT_BASE_URL,
        api_key_env: str = "OPENROUTER_API_KEY",
        timeout: float = 30.0,
        client: Any = None,
    ) -> None:
        self._provider = provider
        self._model = model
        self._base_url = base_url
        self._api_key_env = api_key_env
        self._timeout = timeout
        self._client: Any = client
        if self._client is None:
            self._init_client()

    def _init_client(self) -> None:
        api_key = os.environ.get(self._api_key_env)
        if not api_key:
            logger.info("%s not set; headline analysis disabled", self._api_key_env)
            return
        if self._provider == "anthropic":
            self._client = anthropic.AsyncAnthropic(api_key=api_key, timeout=self._timeout)
            return
        kwargs: dict[str, Any] = {"api_key": api_key, "timeout": self._timeout}
        if self._base_url:
            kwargs["base_url"] = self._base_url
        self._client = openai.AsyncOpenAI(**kwargs)

    @property
    def enabled(self) -> bool:
        return self._client is not None

    async def analyze_batch(self, headlines: list[str]) -> list[Significance]:
        """Return one assessment per headline, in input order."""
        if not headlines:
            return []
        if self._client is None:
            logger.warning("No AI API key configured; returning neutral scores")
            return neutral(len(headlines))

        numbered = "\n".join(f"{i + 1}. {_sanitize_headline(h)}" for i, h in enumerate(headlines))
        prompt = f"Analyze these headlines:\n{numbered}"
        try:
            text = await self._call_llm(prompt, max_tokens=reply_token_budget(len(headlines)))
        except Exception:
            logger.exception("AI analysis call failed for %d headlines", len(headlines))
            return neutral(len(headlines))

        parsed = parse_assessments(text, len(headlines))
        if parsed is None:
            logger.warning("Could not parse AI response: %s", text[:200])
            return neutral(len(headlines))
        return parsed

    async def _call_llm(self, prompt: str, *, max_tokens: int) -> str:
        if self._provider == "anthropic":
            response = await self._client.messages.create(
                model=self._model,
                max_tokens=max_tokens,
                temperature=0.3,
                system=_SYSTEM_PROMPT,
                messages=[{"role": "user", "content": prompt}],
            )
            return str(response.content[0].text).strip()

        response = await self._client.chat.completions.create(
            model=self._model,
            max_tokens=max_tokens,
            temperature=0.3,
            messages=[
                {"role": "system", "content": _SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            extra_headers={"HTTP-Referer": "https://situation-monitor.app", "X-Title": "Situation Monitor"},
        )
        content = response.choices[0].message.content
        return content.strip() if content else ""
