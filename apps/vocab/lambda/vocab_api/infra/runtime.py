"""Runtime infrastructure helpers for the HTTP client and tracing."""

import logging
import os
from functools import lru_cache

import httpx
from langsmith.run_trees import get_cached_client

from vocab_api.constants import DEFAULT_TIMEOUT_SECONDS, LANGSMITH_PROJECT

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_http_client() -> httpx.Client:
    """Shared connection pool; adapters pass an explicit timeout on each request."""
    return httpx.Client(timeout=DEFAULT_TIMEOUT_SECONDS)


def _configure_langsmith(langsmith_api_key: str | None) -> None:
    if not langsmith_api_key:
        os.environ.pop("LANGSMITH_TRACING", None)
        logger.info("LangSmith tracing disabled because API key is unavailable")
        return

    os.environ.setdefault("LANGSMITH_TRACING", "true")
    os.environ.setdefault("LANGSMITH_PROJECT", LANGSMITH_PROJECT)


@lru_cache(maxsize=1)
def ensure_langsmith_configured() -> None:
    """Configure LangSmith environment variables (called once via lru_cache)."""
    _configure_langsmith(os.environ.get("LANGSMITH_API_KEY", "").strip() or None)


def flush_langsmith_traces() -> None:
    if os.environ.get("LANGSMITH_TRACING", "").lower() != "true":
        return
    if not os.environ.get("LANGSMITH_API_KEY"):
        return
    try:
        get_cached_client().flush()
    except Exception:
        logger.warning("Failed to flush LangSmith traces", exc_info=True)
