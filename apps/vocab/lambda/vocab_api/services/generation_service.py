"""Application service for LLM generation requests."""

import logging

from vocab_api.dispatcher import LLMDispatcher
from vocab_api.errors import ConfigurationError
from vocab_api.provider_registry import ProviderRegistry
from vocab_api.schemas import GenerationRequest, GenerationResult, ProviderStatus

logger = logging.getLogger(__name__)


class GenerationService:
    def __init__(self, registry: ProviderRegistry, dispatcher: LLMDispatcher) -> None:
        self._registry = registry
        self._dispatcher = dispatcher

    def provider_status(self) -> ProviderStatus:
        return self._registry.describe()

    def generate(self, request: GenerationRequest) -> GenerationResult:
        logger.info(
            "Generation request received",
            extra={"prompt_length": len(request.prompt), "max_tokens": request.max_tokens},
        )

        # Validation and dispatch must see the same credentials.
        config = self._registry.load_config()
        report = self._registry.validate(config)
        if not report.is_valid:
            logger.error("LLM configuration is invalid", extra={"errors": report.errors})
            raise ConfigurationError(" ".join(report.errors))
        for warning in report.warnings:
            logger.warning("LLM configuration warning", extra={"warning": warning})

        result = self._dispatcher.dispatch(request, config)
        logger.info(
            "Generation completed",
            extra={"provider": result.provider, "response_length": len(result.content)},
        )
        return result
