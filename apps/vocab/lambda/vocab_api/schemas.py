"""Pydantic schemas for the vocabulary LLM API."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import Provider


class GenerationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    prompt: str = Field(min_length=1)
    max_tokens: int | None = Field(default=None, alias="maxTokens", ge=1)
    temperature: float | None = Field(default=None, ge=0, le=2)

    @field_validator("prompt")
    @classmethod
    def validate_prompt(cls, prompt: str) -> str:
        if not prompt.strip():
            raise ValueError("prompt must not be blank")
        return prompt


class TokenUsage(BaseModel):
    prompt_tokens: int | None = Field(default=None, serialization_alias="promptTokens")
    completion_tokens: int | None = Field(default=None, serialization_alias="completionTokens")
    total_tokens: int | None = Field(default=None, serialization_alias="totalTokens")


class GenerationResult(BaseModel):
    content: str
    provider: Provider
    usage: TokenUsage | None = None
    duration_seconds: float = Field(serialization_alias="durationSeconds")


class ConfigValidationReport(BaseModel):
    is_valid: bool = Field(serialization_alias="isValid")
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class ProviderStatus(BaseModel):
    is_valid: bool = Field(serialization_alias="isValid")
    errors: list[str]
    warnings: list[str]
    available_providers: list[Provider] = Field(serialization_alias="availableProviders")
    primary_provider: Provider | None = Field(serialization_alias="primaryProvider")
    fallback_provider: Provider | None = Field(serialization_alias="fallbackProvider")
