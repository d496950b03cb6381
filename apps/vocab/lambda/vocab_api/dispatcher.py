"""Primary/fallback dispatch of generation requests across LLM providers."""

import logging
from collections.abc import Mapping

from langsmith import traceable

from .config import ConfigSnapshot
from .constants import API_KEY_ENV_VARS, Provider
from .errors import (
    AllProvidersFailedError,
    ConfigurationError,
    ProviderCallError,
    ProviderCredentialMissingError,
)
from .provider_registry import ProviderRegistry, no_provider_configured_message
from .providers.base import LLMProvider
from .schemas import GenerationRequest, GenerationResult, TokenUsage

logger = logging.getLogger(__name__)


def _traced_inputs(inputs: dict) -> dict:
    # Snapshots carry API keys and must never reach a trace.
    return {"request": inputs.get("request")}


class LLMDispatcher:
    """Runs a request against the primary provider and, on failure, the fallback.

    Both providers are resolved from a single configuration snapshot, either
    the one passed in or one taken at the start of the dispatch. Attempts are
    sequential and each provider is tried at most once.
    """

    def __init__(
        self, registry: ProviderRegistry, providers: Mapping[Provider, LLMProvider]
    ) -> None:
        self._registry = registry
        self._providers = providers

    @traceable(run_type="chain", name="llm_dispatch", process_inputs=_traced_inputs)
    def dispatch(
        self, request: GenerationRequest, config: ConfigSnapshot | None = None
    ) -> GenerationResult:
        if config is None:
            config = self._registry.load_config()
        primary = self._registry.resolve_primary(config)
        if primary is None:
            raise ConfigurationError(no_provider_configured_message())
        fallback = self._registry.resolve_fallback(config)

        logger.info(
            "LLM dispatch started",
            extra={
                "available_providers": self._registry.list_available_providers(config),
                "primary_provider": primary,
                "fallback_provider": fallback,
            },
        )

        try:
            return self._attempt(primary, request, config)
        except Exception as primary_error:
            if fallback is None:
                logger.error(
                    "LLM provider failed and no fallback is available",
                    extra={"provider": primary, "error": str(primary_error)},
                )
                raise
            logger.warning(
                "Primary LLM provider failed; switching to fallback",
                extra={
                    "provider": primary,
                    "fallback_provider": fallback,
                    "error": str(primary_error),
                },
            )
            try:
                return self._attempt(fallback, request, config)
            except Exception as fallback_error:
                logger.error(
                    "Fallback LLM provider failed",
                    extra={"provider": fallback, "error": str(fallback_error)},
                )
                raise AllProvidersFailedError(
                    primary, primary_error, fallback, fallback_error
                ) from fallback_error

    def _attempt(
        self, provider: Provider, request: GenerationRequest, config: ConfigSnapshot
    ) -> GenerationResult:
        credentials = self._registry.credentials_for(provider, config)
        if not credentials.api_key:
            raise ProviderCredentialMissingError(provider, API_KEY_ENV_VARS[provider])

        adapter = self._providers.get(provider)
        if adapter is None:
            raise ProviderCallError(provider, f"Unsupported provider: {provider}")

        response = adapter.invoke(request, credentials, config.timeout_seconds)
        logger.info("LLM provider call succeeded", extra={"provider": provider})

        usage = TokenUsage(
            prompt_tokens=response.prompt_tokens,
            completion_tokens=response.completion_tokens,
            total_tokens=response.total_tokens,
        )
        if usage == TokenUsage():
            usage = None
        return GenerationResult(
            content=response.content,
            provider=provider,
            usage=usage,
            duration_seconds=response.duration_seconds,
        )
