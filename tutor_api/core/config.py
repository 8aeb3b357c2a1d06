"""Configuration management."""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Final

import yaml
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tutor_api.models.providers import ProviderType

# Placeholder used when a provider key is missing; real providers reject it.
DEMO_API_KEY: Final = "demo-key"

# Keys come from the environment only, never from the YAML file.
_ENV_ONLY_KEYS: Final = frozenset({"groq_api_key", "deepseek_api_key"})


class ProviderSettings(BaseModel):
    """Tunable settings for one chat-completions provider."""

    enabled: bool = Field(default=True, description="Whether this provider takes part in fallback")
    endpoint: str = Field(description="Chat-completions endpoint URL")
    model: str = Field(description="Model identifier sent upstream")
    label: str = Field(description="Model label reported in response metadata")
    max_tokens: int = Field(default=4096, ge=1, description="Completion token limit")
    temperature: float = Field(default=0.3, ge=0.0, le=2.0, description="Sampling temperature")
    timeout_seconds: float = Field(default=60.0, gt=0, description="Request timeout in seconds")


class ProvidersConfig(BaseModel):
    """Configuration for all chat providers."""

    groq: ProviderSettings = Field(
        default_factory=lambda: ProviderSettings(
            endpoint="https://api.groq.com/openai/v1/chat/completions",
            model="llama-3.3-70b-versatile",
            label="groq-llama-3.3-70b",
        ),
        description="Groq configuration (primary)",
    )
    deepseek: ProviderSettings = Field(
        default_factory=lambda: ProviderSettings(
            endpoint="https://api.deepseek.com/chat/completions",
            model="deepseek-chat",
            label="deepseek-chat",
        ),
        description="DeepSeek configuration (secondary)",
    )
    order: list[ProviderType] = Field(
        default_factory=lambda: [ProviderType.GROQ, ProviderType.DEEPSEEK],
        description="Order in which providers are tried",
    )

    @field_validator("order")
    @classmethod
    def _unique_order(cls, order: list[ProviderType]) -> list[ProviderType]:
        """Reject chains that would call the same provider twice."""
        duplicates = sorted({p.value for p in order if order.count(p) > 1})
        if duplicates:
            raise ValueError(f"Provider listed more than once in order: {', '.join(duplicates)}")
        return order

    def get(self, provider: ProviderType) -> ProviderSettings:
        """Return the settings block for a provider."""
        if provider == ProviderType.GROQ:
            return self.groq
        return self.deepseek


class ProviderConfig(BaseModel):
    """Immutable, fully resolved configuration handed to a provider client."""

    model_config = ConfigDict(frozen=True)

    provider: ProviderType
    api_key: str
    endpoint: str
    model: str
    label: str
    max_tokens: int
    temperature: float
    timeout_seconds: float = 60.0


class Settings(BaseSettings):
    """Application settings."""

    # Application
    app_name: str = Field(default="AI Tutor Backend", description="Application name")
    version: str = Field(default="2.0.0", description="Application version")
    debug: bool = Field(default=False, description="Debug mode")

    # Server
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(
        default=3000,
        validation_alias=AliasChoices("port", "PORT", "TUTOR_PORT"),
        description="Server port",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Log format: json or text")

    # CORS
    cors_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")

    # Provider credentials
    groq_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("groq_api_key", "GROQ_API_KEY"),
        description="Groq API key",
    )
    deepseek_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("deepseek_api_key", "DEEPSEEK_API_KEY"),
        description="DeepSeek API key",
    )

    providers: ProvidersConfig = Field(
        default_factory=ProvidersConfig, description="Chat provider configurations"
    )

    config_file: str = Field(
        default="config/main.yaml",
        description="Path to configuration file",
    )

    model_config = SettingsConfigDict(
        env_prefix="TUTOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    def api_key_for(self, provider: ProviderType) -> str | None:
        """Return the configured key for a provider, or None when unset or empty."""
        key = self.groq_api_key if provider == ProviderType.GROQ else self.deepseek_api_key
        return key or None

    def is_configured(self, provider: ProviderType) -> bool:
        """Whether the provider's key environment variable holds a non-empty value."""
        return self.api_key_for(provider) is not None

    def provider_configs(self) -> list[ProviderConfig]:
        """
        Resolve the ordered, immutable provider configurations.

        Disabled providers are left out. Missing keys fall back to the demo
        placeholder so the request is still attempted and fails upstream.
        """
        configs = []
        for provider in self.providers.order:
            block = self.providers.get(provider)
            if not block.enabled:
                continue
            configs.append(
                ProviderConfig(
                    provider=provider,
                    api_key=self.api_key_for(provider) or DEMO_API_KEY,
                    endpoint=block.endpoint,
                    model=block.model,
                    label=block.label,
                    max_tokens=block.max_tokens,
                    temperature=block.temperature,
                    timeout_seconds=block.timeout_seconds,
                )
            )
        return configs

    def load_yaml_config(self) -> dict[str, Any]:
        """
        Load configuration from YAML file.

        Returns:
            Configuration dictionary
        """
        config_path = Path(self.config_file)
        if not config_path.exists():
            return {}

        with open(config_path, encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    def merge_yaml_config(self) -> None:
        """Merge YAML configuration into settings."""
        yaml_config = self.load_yaml_config()

        for key, value in yaml_config.items():
            if not hasattr(self, key) or key in _ENV_ONLY_KEYS:
                continue
            if key == "providers" and isinstance(value, dict):
                merged = self.providers.model_dump()
                for name, overrides in value.items():
                    if isinstance(overrides, dict) and isinstance(merged.get(name), dict):
                        merged[name].update(overrides)
                    else:
                        merged[name] = overrides
                self.providers = ProvidersConfig(**merged)
            else:
                setattr(self, key, value)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Application settings
    """
    settings = Settings()

    if os.path.exists(settings.config_file):
        settings.merge_yaml_config()

    return settings
