"""OpenAI Chat Completions provider implementation."""

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


def build_openai_body(request: GenerationRequest, model: str) -> dict[str, Any]:
    return {
        "model": model,
        "messages": [{"role": "user", "content": request.prompt}],
        "max_tokens": request.max_tokens or DEFAULT_MAX_TOKENS,
        "temperature": (
            request.temperature if request.temperature is not None else DEFAULT_TEMPERATURE
        ),
    }


def parse_openai_content(payload: dict[str, Any]) -> str:
    choices = payload.get("choices")
    if not isinstance(choices, list) or not choices:
        raise unexpected_shape("openai", "missing choices")
    message = choices[0].get("message") if isinstance(choices[0], dict) else None
    content = message.get("content") if isinstance(message, dict) else None
    if not isinstance(content, str):
        raise unexpected_shape("openai", "missing choices[0].message.content")
    return content


class OpenAIProvider:
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
            "openai",
            credentials.api_url,
            headers={"Authorization": f"Bearer {credentials.api_key}"},
            body=build_openai_body(request, credentials.model),
            timeout_seconds=timeout_seconds,
        )
        duration_ms = int((time.time() - start) * 1000)
        content = parse_openai_content(payload)

        usage = payload.get("usage")
        usage = usage if isinstance(usage, dict) else {}
        prompt_tokens = optional_int(usage.get("prompt_tokens"))
        completion_tokens = optional_int(usage.get("completion_tokens"))

        logger.info(
            "LLM response generated",
            extra={
                "provider": "openai",
                "openai_duration_ms": duration_ms,
                "model": payload.get("model", credentials.model),
                "usage_prompt_tokens": prompt_tokens,
                "usage_completion_tokens": completion_tokens,
                "response_length": len(content),
            },
        )
        return ProviderResponse(
            content=content,
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            total_tokens=optional_int(usage.get("total_tokens")),
            duration_seconds=round(duration_ms / 1000, 2),
        )
