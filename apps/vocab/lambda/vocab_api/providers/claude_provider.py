"""Anthropic Claude Messages provider implementation."""

import logging
import time
from collections.abc import Callable
from typing import Any

import httpx

from vocab_api.config import ProviderCredentials
from vocab_api.constants import ANTHROPIC_VERSION, DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE
from vocab_api.schemas import GenerationRequest

from .base import ProviderResponse, optional_int, post_json, unexpected_shape

logger = logging.getLogger(__name__)


def build_claude_body(request: GenerationRequest, model: str) -> dict[str, Any]:
    return {
        "model": model,
        "max_tokens": request.max_tokens or DEFAULT_MAX_TOKENS,
        "temperature": (
            request.temperature if request.temperature is not None else DEFAULT_TEMPERATURE
        ),
        "messages": [{"role": "user", "content": request.prompt}],
    }


def parse_claude_content(payload: dict[str, Any]) -> str:
    blocks = payload.get("content")
    if not isinstance(blocks, list):
        raise unexpected_shape("claude", "missing content blocks")
    texts = [
        block["text"]
        for block in blocks
        if isinstance(block, dict)
        and block.get("type", "text") == "text"
        and isinstance(block.get("text"), str)
    ]
    if not texts:
        raise unexpected_shape("claude", "no text content blocks")
    return "".join(texts)


class ClaudeProvider:
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
            "claude",
            credentials.api_url,
            headers={
                "x-api-key": credentials.api_key or "",
                "anthropic-version": ANTHROPIC_VERSION,
            },
            body=build_claude_body(request, credentials.model),
            timeout_seconds=timeout_seconds,
        )
        duration_ms = int((time.time() - start) * 1000)
        content = parse_claude_content(payload)

        usage = payload.get("usage")
        usage = usage if isinstance(usage, dict) else {}
        input_tokens = optional_int(usage.get("input_tokens"))
        output_tokens = optional_int(usage.get("output_tokens"))
        # Anthropic does not report a total.
        reported = [count for count in (input_tokens, output_tokens) if count is not None]
        total_tokens = sum(reported) if reported else None

        logger.info(
            "LLM response generated",
            extra={
                "provider": "claude",
                "claude_duration_ms": duration_ms,
                "model": payload.get("model", credentials.model),
                "usage_prompt_tokens": input_tokens,
                "usage_completion_tokens": output_tokens,
                "response_length": len(content),
                "response_id": payload.get("id"),
            },
        )
        return ProviderResponse(
            content=content,
            prompt_tokens=input_tokens,
            completion_tokens=output_tokens,
            total_tokens=total_tokens,
            duration_seconds=round(duration_ms / 1000, 2),
        )
