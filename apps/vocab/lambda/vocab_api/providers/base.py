"""Provider interfaces, shared response model, and HTTP helpers."""

import json
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

import httpx

from vocab_api.config import ProviderCredentials
from vocab_api.constants import MAX_ERROR_DETAIL_LENGTH, Provider
from vocab_api.errors import ProviderCallError
from vocab_api.schemas import GenerationRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderResponse:
    content: str
    prompt_tokens: int | None
    completion_tokens: int | None
    total_tokens: int | None
    duration_seconds: float


class LLMProvider(Protocol):
    def invoke(
        self,
        request: GenerationRequest,
        credentials: ProviderCredentials,
        timeout_seconds: float,
    ) -> ProviderResponse:
        """Send a single generation request to the vendor API."""
        ...


def _error_detail(body: bytes) -> str:
    try:
        payload = json.loads(body)
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            return error["message"]
        if isinstance(error, str):
            return error
    return body.decode("utf-8", errors="replace")[:MAX_ERROR_DETAIL_LENGTH]


def _timed_out(provider: Provider, timeout_seconds: float) -> ProviderCallError:
    return ProviderCallError(
        provider, f"{provider} API request timed out after {timeout_seconds:g}s"
    )


def post_json(
    client: httpx.Client,
    provider: Provider,
    url: str,
    headers: dict[str, str],
    body: dict[str, Any],
    timeout_seconds: float,
    clock: Callable[[], float] = time.monotonic,
) -> dict[str, Any]:
    """POST a JSON body and return the decoded JSON object.

    ``timeout_seconds`` bounds each attempt: httpx applies it to every
    connect/read/write operation, and the body is streamed against a
    wall-clock deadline checked per chunk, so a vendor trickling bytes is
    cut off instead of holding the attempt open.

    Transport errors, timeouts, non-2xx statuses and non-object payloads are
    all raised as ``ProviderCallError``.
    """
    deadline = clock() + timeout_seconds
    chunks: list[bytes] = []
    try:
        with client.stream(
            "POST", url, headers=headers, json=body, timeout=timeout_seconds
        ) as response:
            for chunk in response.iter_bytes():
                if clock() > deadline:
                    raise _timed_out(provider, timeout_seconds)
                chunks.append(chunk)
    except httpx.TimeoutException as exc:
        raise _timed_out(provider, timeout_seconds) from exc
    except httpx.HTTPError as exc:
        raise ProviderCallError(provider, f"{provider} API request failed: {exc}") from exc
    content = b"".join(chunks)

    if not response.is_success:
        logger.warning(
            "LLM provider returned an error status",
            extra={"provider": provider, "status_code": response.status_code},
        )
        message = f"{provider} API error: {response.status_code} {response.reason_phrase}".rstrip()
        detail = _error_detail(content)
        if detail:
            message = f"{message} - {detail}"
        raise ProviderCallError(provider, message, status_code=response.status_code)

    try:
        payload = json.loads(content)
    except ValueError as exc:
        raise ProviderCallError(provider, f"{provider} API returned a non-JSON response") from exc
    if not isinstance(payload, dict):
        raise ProviderCallError(provider, f"{provider} API returned an unexpected response shape")
    return payload


def optional_int(value: Any) -> int | None:
    return value if isinstance(value, int) and not isinstance(value, bool) else None


def unexpected_shape(provider: Provider, reason: str) -> ProviderCallError:
    return ProviderCallError(
        provider, f"{provider} API returned an unexpected response shape: {reason}"
    )
