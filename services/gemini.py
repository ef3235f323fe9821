"""Gemini API client wrapper for chat-style text completions."""

import asyncio
import json
import logging
import os
import time
from typing import Any

from google import genai
from google.genai import types

from core.exceptions import UpstreamServiceError

logger = logging.getLogger(__name__)


class RateLimiter:
    """Simple in-memory rate limiter shared by concurrent completions."""

    def __init__(self, max_calls: int = 60, period: float = 60.0) -> None:
        self.max_calls = max_calls
        self.period = period
        self.calls: list[float] = []
        self._lock = asyncio.Lock()

    async def wait_if_needed(self) -> None:
        async with self._lock:
            now = time.monotonic()
            self.calls = [call_time for call_time in self.calls if now - call_time < self.period]
            if len(self.calls) >= self.max_calls:
                sleep_time = self.period - (now - self.calls[0])
                if sleep_time > 0:
                    await asyncio.sleep(sleep_time)
            self.calls.append(time.monotonic())


class GeminiClient:
    """Wrapper for Google Gemini completion calls."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gemini-2.5-flash",
        temperature: float | None = None,
        rate_limiter: RateLimiter | None = None,
    ):
        """
        Initialize Gemini client.

        Args:
            api_key: Google API key (defaults to GOOGLE_API_KEY env var)
            model: Model name to use
            temperature: Default sampling temperature (None = model default)
            rate_limiter: Optional limiter applied before every request
        """
        self.api_key = api_key or os.getenv("GOOGLE_API_KEY")
        if not self.api_key:
            raise ValueError("GOOGLE_API_KEY must be provided or set in environment")

        self.model = model
        self.temperature = temperature
        self.rate_limiter = rate_limiter or RateLimiter()
        self.client = genai.Client(api_key=self.api_key)
        self.usage_log: list[dict[str, Any]] = []

    def _extract_usage(self, response: Any) -> dict[str, int] | None:
        usage = getattr(response, "usage_metadata", None)
        if usage is None:
            return None

        prompt_tokens = getattr(usage, "prompt_token_count", None)
        output_tokens = getattr(usage, "candidates_token_count", None)
        total_tokens = getattr(usage, "total_token_count", None)

        if prompt_tokens is None and output_tokens is None and total_tokens is None:
            return None

        return {
            "prompt_tokens": int(prompt_tokens or 0),
            "output_tokens": int(output_tokens or 0),
            "total_tokens": int(total_tokens or 0),
        }

    def _record_usage(self, response: Any, stage: str, duration_ms: float) -> None:
        usage = self._extract_usage(response)
        if not usage:
            return
        self.usage_log.append(
            {
                "stage": stage,
                "model": self.model,
                "duration_ms": duration_ms,
                **usage,
            }
        )

    def _build_config(
        self,
        system_prompt: str | None,
        max_output_tokens: int,
        temperature: float | None,
        json_response: bool,
    ) -> types.GenerateContentConfig:
        config_kwargs: dict[str, Any] = {"max_output_tokens": max_output_tokens}
        if system_prompt:
            config_kwargs["system_instruction"] = system_prompt
        effective_temperature = temperature if temperature is not None else self.temperature
        if effective_temperature is not None:
            config_kwargs["temperature"] = effective_temperature
        if json_response:
            config_kwargs["response_mime_type"] = "application/json"
        return types.GenerateContentConfig(**config_kwargs)

    async def complete(
        self,
        user_prompt: str,
        system_prompt: str | None = None,
        max_output_tokens: int = 512,
        temperature: float | None = None,
        json_response: bool = False,
        stage: str = "completion",
    ) -> str:
        """
        Run one completion and return the response text.

        Args:
            user_prompt: User message content
            system_prompt: Optional system instruction
            max_output_tokens: Cap on generated tokens
            temperature: Overrides the client default when given
            json_response: Request a strict JSON object response
            stage: Stage name for usage tracking

        Returns:
            Stripped response text

        Raises:
            UpstreamServiceError: If the API call fails
        """
        config = self._build_config(system_prompt, max_output_tokens, temperature, json_response)

        await self.rate_limiter.wait_if_needed()
        start_time = time.perf_counter()
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=user_prompt,
                config=config,
            )
        except Exception as e:
            logger.error(f"Gemini completion failed at stage {stage}: {e}")
            raise UpstreamServiceError("completion", str(e)) from e
        duration_ms = (time.perf_counter() - start_time) * 1000
        self._record_usage(response, stage=stage, duration_ms=duration_ms)

        return (response.text or "").strip()

    async def complete_json(
        self,
        user_prompt: str,
        system_prompt: str | None = None,
        max_output_tokens: int = 512,
        temperature: float | None = None,
        stage: str = "structured_completion",
    ) -> dict[str, Any]:
        """
        Run a JSON-mode completion and parse the response.

        Raises:
            UpstreamServiceError: If the API call fails
            json.JSONDecodeError: If the response is not valid JSON
        """
        text = await self.complete(
            user_prompt,
            system_prompt=system_prompt,
            max_output_tokens=max_output_tokens,
            temperature=temperature,
            json_response=True,
            stage=stage,
        )
        return self._safe_json_parse(text, context=stage)

    def _safe_json_parse(self, response_text: str, context: str = "") -> dict[str, Any]:
        """
        Parse JSON response, logging a preview of the payload on failure.

        Raises:
            json.JSONDecodeError: Re-raised after logging
        """
        try:
            return json.loads(response_text)
        except json.JSONDecodeError as e:
            preview_length = 500
            error_msg = "Failed to parse JSON response"
            if context:
                error_msg += f" ({context})"
            error_msg += f": {e}; response start: {response_text[:preview_length]!r}"
            logger.warning(error_msg)
            raise
