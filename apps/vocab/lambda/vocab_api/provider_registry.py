"""Provider availability and primary/fallback resolution.

Every operation is a pure function of a ``ConfigSnapshot``. When no snapshot is
passed, a fresh one is loaded from the environment, so credential changes take
effect on the next call. Nothing here raises; configuration problems are
reported through ``validate``.
"""

from collections.abc import Callable

from .config import ConfigSnapshot, ProviderCredentials, load_config
from .constants import (
    API_KEY_ENV_VARS,
    FALLBACK_PROVIDER_ENV_VAR,
    PLACEHOLDER_API_KEYS,
    PRIMARY_PROVIDER_ENV_VAR,
    PROVIDER_PRIORITY,
    Provider,
)
from .schemas import ConfigValidationReport, ProviderStatus

_KEY_SHAPES: dict[Provider, Callable[[str], bool]] = {
    "openai": lambda key: key.startswith("sk-"),
    "gemini": lambda key: key.startswith("AIza") or len(key) > 20,
    "claude": lambda key: key.startswith("sk-ant-"),
}


def is_usable_api_key(provider: Provider, api_key: str | None) -> bool:
    """Return True when ``api_key`` looks like a real credential for ``provider``."""
    if not api_key or api_key == PLACEHOLDER_API_KEYS[provider]:
        return False
    return _KEY_SHAPES[provider](api_key)


def no_provider_configured_message() -> str:
    key_names = ", ".join(API_KEY_ENV_VARS[p] for p in PROVIDER_PRIORITY)
    return f"No LLM API key is configured. Set at least one of: {key_names}."


def _format_providers(providers: list[Provider]) -> str:
    return ", ".join(providers) if providers else "none"


class ProviderRegistry:
    def __init__(self, config_loader: Callable[[], ConfigSnapshot] = load_config) -> None:
        self._config_loader = config_loader

    def load_config(self) -> ConfigSnapshot:
        return self._config_loader()

    def _snapshot(self, config: ConfigSnapshot | None) -> ConfigSnapshot:
        return config if config is not None else self._config_loader()

    def credentials_for(
        self, provider: Provider, config: ConfigSnapshot | None = None
    ) -> ProviderCredentials:
        return self._snapshot(config).credentials[provider]

    def list_available_providers(self, config: ConfigSnapshot | None = None) -> list[Provider]:
        config = self._snapshot(config)
        return [
            provider
            for provider in PROVIDER_PRIORITY
            if is_usable_api_key(provider, config.credentials[provider].api_key)
        ]

    def resolve_primary(self, config: ConfigSnapshot | None = None) -> Provider | None:
        """Preferred primary if available, else the first available provider.

        Returns None when no provider is available at all.
        """
        config = self._snapshot(config)
        available = self.list_available_providers(config)
        for provider in available:
            if provider == config.preferred_primary:
                return provider
        return available[0] if available else None

    def resolve_fallback(self, config: ConfigSnapshot | None = None) -> Provider | None:
        """Preferred fallback if available, else the first available non-primary provider."""
        config = self._snapshot(config)
        primary = self.resolve_primary(config)
        alternatives = [p for p in self.list_available_providers(config) if p != primary]
        for provider in alternatives:
            if provider == config.preferred_fallback:
                return provider
        return alternatives[0] if alternatives else None

    def validate(self, config: ConfigSnapshot | None = None) -> ConfigValidationReport:
        config = self._snapshot(config)
        available = self.list_available_providers(config)
        errors: list[str] = []
        warnings: list[str] = []

        if not available:
            errors.append(no_provider_configured_message())

        for env_var, preferred in (
            (PRIMARY_PROVIDER_ENV_VAR, config.preferred_primary),
            (FALLBACK_PROVIDER_ENV_VAR, config.preferred_fallback),
        ):
            if preferred and preferred not in available:
                warnings.append(
                    f"{env_var} is set to '{preferred}' but no usable API key is configured "
                    f"for it. Available providers: {_format_providers(available)}"
                )

        return ConfigValidationReport(is_valid=not errors, errors=errors, warnings=warnings)

    def describe(self, config: ConfigSnapshot | None = None) -> ProviderStatus:
        config = self._snapshot(config)
        report = self.validate(config)
        return ProviderStatus(
            is_valid=report.is_valid,
            errors=report.errors,
            warnings=report.warnings,
            available_providers=self.list_available_providers(config),
            primary_provider=self.resolve_primary(config),
            fallback_provider=self.resolve_fallback(config),
        )
