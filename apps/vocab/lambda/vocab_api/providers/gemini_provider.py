"""Google Gemini generateContent provider implementation."""

import logging
import time
from collections.abc import Callable
from typing import Any

import httpx

from vocab_api.config import ProviderCredentials
from vocab_api.constants import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE
from vocab_api.schemas import GenerationRequest

from .base import ProviderResponse, optional_int, post_json, unexpected_shape

logger = logging.getLogger(__name__)


def build_gemini_url(credentials: ProviderCredentials) -> str:
    """Substitute the configured model into URLs that carry a ``{model}`` placeholder."""
    return credentials.api_url.replace("{model}", credentials.model)


def build_gemini_body(request: GenerationRequest) -> dict[str, Any]:
    return {
        "contents": [{"parts": [{"text": request.prompt}]}],
        "generationConfig": {
            "temperature": (
                request.temperature if request.temperature is not None else DEFAULT_TEMPERATURE
            ),
            "maxOutputTokens": request.max_tokens or DEFAULT_MAX_TOKENS,
        },
    }


def parse_gemini_content(payload: dict[str, Any]) -> str:
    candidates = payload.get("candidates")
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        raise unexpected_shape("gemini", "missing candidates")
    content = candidates[0].get("content")
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        raise unexpected_shape("gemini", "missing candidates[0].content.parts")
    texts = [
        part["text"]
        for part in parts
        if isinstance(part, dict) and isinstance(part.get("text"), str)
    ]
    if not texts:
        raise unexpected_shape("gemini", "no text parts in candidate")
    return "".join(texts)


class GeminiProvider:
    def __init__(self, get_http_client: Callable[[], httpx.Client]) -> None:
        self._get_http_client = get_http_client

    def invoke(
        self,
        request: GenerationRequest,
        credentials: ProviderCredentials,
        timeout_seconds: float,
    ) -> ProviderResponse:
        start = time.time()
        payload = post_json(
            self._get_http_client(),
            "gemini",
            build_gemini_url(credentials),
            headers={"x-goog-api-key": credentials.api_key or ""},
            body=build_gemini_body(request),
            timeout_seconds=timeout_seconds,
        )
        duration_ms = int((time.time() - start) * 1000)
        content = parse_gemini_content(payload)

        usage = payload.get("usageMetadata")
        usage = usage if isinstance(usage, dict) else {}
        prompt_tokens = optional_int(usage.get("promptTokenCount"))
        completion_tokens = optional_int(usage.get("candidatesTokenCount"))

        logger.info(
            "LLM response generated",
            extra={
                "provider": "gemini",
                "gemini_duration_ms": duration_ms,
                "model": credentials.model,
                "usage_prompt_tokens": prompt_tokens,
                "usage_completion_tokens": completion_tokens,
                "response_length": len(content),
            },
        )
        return ProviderResponse(
            content=content,
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            total_tokens=optional_int(usage.get("totalTokenCount")),
            duration_seconds=round(duration_ms / 1000, 2),
        )
