"""Domain-level exceptions for the vocabulary LLM API."""

from .constants import Provider


class LLMError(RuntimeError):
    """Base class for LLM configuration and dispatch failures."""


class ConfigurationError(LLMError):
    """Raised when no LLM provider has usable credentials."""


class ProviderError(LLMError):
    """A single provider attempt failed."""

    def __init__(self, provider: Provider, message: str) -> None:
        super().__init__(message)
        self.provider = provider


class ProviderCredentialMissingError(ProviderError):
    def __init__(self, provider: Provider, env_var: str) -> None:
        super().__init__(provider, f"{provider} API key is not configured ({env_var})")
        self.env_var = env_var


class ProviderCallError(ProviderError):
    """HTTP, network or payload failure from one vendor API."""

    def __init__(self, provider: Provider, message: str, status_code: int | None = None) -> None:
        super().__init__(provider, message)
        self.status_code = status_code


class AllProvidersFailedError(LLMError):
    """Both the primary and the fallback provider failed."""

    def __init__(
        self,
        primary: Provider,
        primary_error: Exception,
        fallback: Provider,
        fallback_error: Exception,
    ) -> None:
        super().__init__(
            "All LLM providers failed. "
            f"Primary ({primary}): {primary_error}; "
            f"Fallback ({fallback}): {fallback_error}"
        )
        self.primary = primary
        self.primary_error = primary_error
        self.fallback = fallback
        self.fallback_error = fallback_error
