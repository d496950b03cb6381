"""Environment-driven LLM configuration snapshots.

Configuration is never cached: callers load a fresh ``ConfigSnapshot`` for each
operation so rotated or newly added credentials apply without a restart.
"""

import logging
import math
import os
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from .constants import (
    API_KEY_ENV_VARS,
    API_URL_ENV_VARS,
    DEFAULT_API_URLS,
    DEFAULT_MODELS,
    DEFAULT_TIMEOUT_SECONDS,
    FALLBACK_PROVIDER_ENV_VAR,
    MODEL_ENV_VARS,
    PRIMARY_PROVIDER_ENV_VAR,
    PROVIDER_PRIORITY,
    TIMEOUT_ENV_VAR,
    Provider,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderCredentials:
    api_key: str | None
    api_url: str
    model: str


@dataclass(frozen=True)
class ConfigSnapshot:
    credentials: Mapping[Provider, ProviderCredentials]
    preferred_primary: str | None = None
    preferred_fallback: str | None = None
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS


def _read(environ: Mapping[str, str], name: str) -> str | None:
    value = environ.get(name, "").strip()
    return value or None


def _read_provider_name(environ: Mapping[str, str], name: str) -> str | None:
    value = _read(environ, name)
    return value.lower() if value else None


def _read_timeout(environ: Mapping[str, str]) -> float:
    raw = _read(environ, TIMEOUT_ENV_VAR)
    if raw is None:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        timeout = float(raw)
    except ValueError:
        timeout = math.nan
    if not math.isfinite(timeout) or timeout <= 0:
        logger.warning(
            "Ignoring invalid LLM timeout; using default",
            extra={"value": raw, "default_timeout_seconds": DEFAULT_TIMEOUT_SECONDS},
        )
        return DEFAULT_TIMEOUT_SECONDS
    return timeout


def load_provider_credentials(
    provider: Provider, environ: Mapping[str, str] | None = None
) -> ProviderCredentials:
    env = os.environ if environ is None else environ
    return ProviderCredentials(
        api_key=_read(env, API_KEY_ENV_VARS[provider]),
        api_url=_read(env, API_URL_ENV_VARS[provider]) or DEFAULT_API_URLS[provider],
        model=_read(env, MODEL_ENV_VARS[provider]) or DEFAULT_MODELS[provider],
    )


def load_config(environ: Mapping[str, str] | None = None) -> ConfigSnapshot:
    """Read the current LLM configuration from the process environment."""
    env = os.environ if environ is None else environ
    return ConfigSnapshot(
        credentials=MappingProxyType(
            {provider: load_provider_credentials(provider, env) for provider in PROVIDER_PRIORITY}
        ),
        preferred_primary=_read_provider_name(env, PRIMARY_PROVIDER_ENV_VAR),
        preferred_fallback=_read_provider_name(env, FALLBACK_PROVIDER_ENV_VAR),
        timeout_seconds=_read_timeout(env),
    )
