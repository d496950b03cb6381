"""Vocabulary LLM API backend using FastAPI + Mangum for AWS Lambda."""

import logging
from functools import lru_cache

from fastapi import APIRouter, FastAPI, HTTPException
from mangum import Mangum

from vocab_api.dispatcher import LLMDispatcher
from vocab_api.errors import (
    AllProvidersFailedError,
    ConfigurationError,
    ProviderError,
)
from vocab_api.infra.runtime import (
    ensure_langsmith_configured,
    flush_langsmith_traces,
    get_http_client,
)
from vocab_api.provider_registry import ProviderRegistry
from vocab_api.providers.claude_provider import ClaudeProvider
from vocab_api.providers.gemini_provider import GeminiProvider
from vocab_api.providers.openai_provider import OpenAIProvider
from vocab_api.schemas import GenerationRequest, GenerationResult, ProviderStatus
from vocab_api.services.generation_service import GenerationService

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

app = FastAPI()
router = APIRouter(prefix="/api")


@lru_cache(maxsize=1)
def get_generation_service() -> GenerationService:
    # Credentials are not pinned here; the registry re-reads the environment per call.
    registry = ProviderRegistry()
    dispatcher = LLMDispatcher(
        registry=registry,
        providers={
            "openai": OpenAIProvider(get_http_client),
            "gemini": GeminiProvider(get_http_client),
            "claude": ClaudeProvider(get_http_client),
        },
    )
    return GenerationService(registry=registry, dispatcher=dispatcher)


@router.get("/health")
def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


@router.get("/llm/status", response_model=ProviderStatus)
def llm_status() -> ProviderStatus:
    """Report provider availability and configuration problems."""
    return get_generation_service().provider_status()


@router.post("/generate", response_model=GenerationResult)
def generate(request: GenerationRequest) -> GenerationResult:
    """Generate text with the primary LLM provider, falling back on failure."""
    ensure_langsmith_configured()
    try:
        return get_generation_service().generate(request)
    except ConfigurationError as e:
        logger.error("LLM configuration error", extra={"error": str(e)})
        raise HTTPException(status_code=503, detail=str(e)) from e
    except AllProvidersFailedError as e:
        logger.exception("All LLM providers failed")
        raise HTTPException(status_code=503, detail=str(e)) from e
    except ProviderError as e:
        logger.exception("LLM provider call failed", extra={"provider": e.provider})
        raise HTTPException(status_code=502, detail=str(e)) from e
    except Exception as e:
        logger.exception("Generation request failed")
        raise HTTPException(status_code=500, detail="Internal server error") from e
    finally:
        flush_langsmith_traces()


app.include_router(router)


handler = Mangum(app)
