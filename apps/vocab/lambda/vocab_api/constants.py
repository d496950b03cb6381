"""Shared constants and literal types for the vocabulary LLM Lambda."""

from typing import Literal

Provider = Literal["openai", "gemini", "claude"]

PROVIDER_PRIORITY: tuple[Provider, ...] = ("openai", "gemini", "claude")

API_KEY_ENV_VARS: dict[Provider, str] = {
    "openai": "OPENAI_API_KEY",
    "gemini": "GEMINI_API_KEY",
    "claude": "CLAUDE_API_KEY",
}
API_URL_ENV_VARS: dict[Provider, str] = {
    "openai": "OPENAI_API_URL",
    "gemini": "GEMINI_API_URL",
    "claude": "CLAUDE_API_URL",
}
MODEL_ENV_VARS: dict[Provider, str] = {
    "openai": "OPENAI_MODEL",
    "gemini": "GEMINI_MODEL",
    "claude": "CLAUDE_MODEL",
}
PRIMARY_PROVIDER_ENV_VAR = "LLM_PROVIDER"
FALLBACK_PROVIDER_ENV_VAR = "LLM_FALLBACK_PROVIDER"
TIMEOUT_ENV_VAR = "LLM_TIMEOUT_SECONDS"

DEFAULT_API_URLS: dict[Provider, str] = {
    "openai": "https://api.openai.com/v1/chat/completions",
    "gemini": "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent",
    "claude": "https://api.anthropic.com/v1/messages",
}
DEFAULT_MODELS: dict[Provider, str] = {
    "openai": "gpt-4o-mini",
    "gemini": "gemini-1.5-flash",
    "claude": "claude-3-5-sonnet-latest",
}
# Values shipped in .env.example; never treated as real credentials.
PLACEHOLDER_API_KEYS: dict[Provider, str] = {
    "openai": "your_openai_api_key_here",
    "gemini": "your_gemini_api_key_here",
    "claude": "your_claude_api_key_here",
}

DEFAULT_MAX_TOKENS = 2000
DEFAULT_TEMPERATURE = 0.7
DEFAULT_TIMEOUT_SECONDS = 20.0
ANTHROPIC_VERSION = "2023-06-01"
MAX_ERROR_DETAIL_LENGTH = 500

LANGSMITH_PROJECT = "vocab-llm"
