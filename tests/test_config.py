"""Tests for configuration management."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from tutor_api.core.config import DEMO_API_KEY, ProviderConfig, ProvidersConfig, Settings
from tutor_api.models.providers import ProviderType


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove provider and port variables from the environment."""
    for name in ("GROQ_API_KEY", "DEEPSEEK_API_KEY", "PORT", "TUTOR_PORT"):
        monkeypatch.delenv(name, raising=False)


class TestSettings:
    """Test settings defaults and environment handling."""

    def test_defaults(self, clean_env: None) -> None:
        """Test server and provider defaults."""
        settings = Settings(_env_file=None)

        assert settings.port == 3000
        assert settings.host == "0.0.0.0"
        assert settings.version == "2.0.0"
        assert settings.providers.order == [ProviderType.GROQ, ProviderType.DEEPSEEK]

    def test_port_from_environment(self, clean_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test PORT sets the listen port."""
        monkeypatch.setenv("PORT", "8080")

        assert Settings(_env_file=None).port == 8080

    def test_api_keys_from_environment(
        self, clean_env: None, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test provider keys are read from their unprefixed variables."""
        monkeypatch.setenv("GROQ_API_KEY", "gsk_env")
        monkeypatch.setenv("DEEPSEEK_API_KEY", "sk-env")

        settings = Settings(_env_file=None)

        assert settings.groq_api_key == "gsk_env"
        assert settings.deepseek_api_key == "sk-env"
        assert settings.is_configured(ProviderType.GROQ)
        assert settings.is_configured(ProviderType.DEEPSEEK)

    def test_empty_key_is_not_configured(self, clean_env: None) -> None:
        """Test empty keys count as unset."""
        settings = Settings(_env_file=None, groq_api_key="")

        assert settings.api_key_for(ProviderType.GROQ) is None
        assert not settings.is_configured(ProviderType.GROQ)


class TestProviderConfigs:
    """Test resolution of immutable provider configurations."""

    def test_default_provider_table(self, clean_env: None) -> None:
        """Test the fixed endpoints, models and limits."""
        groq, deepseek = Settings(_env_file=None).provider_configs()

        assert groq.provider == ProviderType.GROQ
        assert groq.endpoint == "https://api.groq.com/openai/v1/chat/completions"
        assert groq.model == "llama-3.3-70b-versatile"
        assert groq.label == "groq-llama-3.3-70b"
        assert deepseek.provider == ProviderType.DEEPSEEK
        assert deepseek.endpoint == "https://api.deepseek.com/chat/completions"
        assert deepseek.model == "deepseek-chat"
        assert deepseek.label == "deepseek-chat"
        for config in (groq, deepseek):
            assert config.max_tokens == 4096
            assert config.temperature == 0.3

    def test_missing_keys_use_demo_placeholder(self, clean_env: None) -> None:
        """Test unset keys resolve to the demo placeholder."""
        configs = Settings(_env_file=None).provider_configs()

        assert [config.api_key for config in configs] == [DEMO_API_KEY, DEMO_API_KEY]

    def test_configured_keys_are_used(self, clean_env: None) -> None:
        """Test configured keys end up in the provider configs."""
        settings = Settings(_env_file=None, groq_api_key="gsk_1", deepseek_api_key="sk_2")

        groq, deepseek = settings.provider_configs()

        assert groq.api_key == "gsk_1"
        assert deepseek.api_key == "sk_2"

    def test_disabled_provider_is_skipped(self, clean_env: None) -> None:
        """Test disabled providers are left out of the chain."""
        settings = Settings(_env_file=None)
        settings.providers.deepseek.enabled = False

        configs = settings.provider_configs()

        assert [config.provider for config in configs] == [ProviderType.GROQ]

    def test_provider_config_is_frozen(self, groq_config: ProviderConfig) -> None:
        """Test resolved configs cannot be mutated."""
        with pytest.raises(ValidationError):
            groq_config.api_key = "other"  # type: ignore[misc]


class TestYamlConfig:
    """Test merging of the YAML configuration file."""

    def test_missing_file_is_ignored(self, clean_env: None, tmp_path: Path) -> None:
        """Test a missing config file yields no overrides."""
        settings = Settings(_env_file=None, config_file=str(tmp_path / "absent.yaml"))

        assert settings.load_yaml_config() == {}

    def test_merge_provider_overrides(self, clean_env: None, tmp_path: Path) -> None:
        """Test YAML overrides individual provider fields and order."""
        config_file = tmp_path / "main.yaml"
        config_file.write_text(
            "log_level: DEBUG\n"
            "providers:\n"
            "  groq:\n"
            "    temperature: 0.7\n"
            "    timeout_seconds: 15\n"
            "  order: [deepseek, groq]\n",
            encoding="utf-8",
        )
        settings = Settings(_env_file=None, config_file=str(config_file))

        settings.merge_yaml_config()

        assert settings.log_level == "DEBUG"
        assert settings.providers.groq.temperature == 0.7
        assert settings.providers.groq.timeout_seconds == 15
        assert settings.providers.groq.model == "llama-3.3-70b-versatile"
        assert settings.providers.order == [ProviderType.DEEPSEEK, ProviderType.GROQ]
        assert [c.provider for c in settings.provider_configs()] == [
            ProviderType.DEEPSEEK,
            ProviderType.GROQ,
        ]

    def test_duplicate_provider_in_order_is_rejected(
        self, clean_env: None, tmp_path: Path
    ) -> None:
        """Test a chain naming the same provider twice fails validation."""
        config_file = tmp_path / "main.yaml"
        config_file.write_text(
            "providers:\n  order: [groq, groq, deepseek]\n",
            encoding="utf-8",
        )
        settings = Settings(_env_file=None, config_file=str(config_file))

        with pytest.raises(ValidationError) as exc_info:
            settings.merge_yaml_config()

        assert "more than once" in str(exc_info.value)
        assert [c.provider for c in settings.provider_configs()] == [
            ProviderType.GROQ,
            ProviderType.DEEPSEEK,
        ]

    def test_api_keys_in_yaml_are_ignored(self, clean_env: None, tmp_path: Path) -> None:
        """Test provider keys can only come from the environment."""
        config_file = tmp_path / "main.yaml"
        config_file.write_text(
            "groq_api_key: gsk_from_yaml\ndeepseek_api_key: sk_from_yaml\n",
            encoding="utf-8",
        )
        settings = Settings(_env_file=None, config_file=str(config_file))

        settings.merge_yaml_config()

        assert settings.groq_api_key is None
        assert not settings.is_configured(ProviderType.GROQ)
        assert not settings.is_configured(ProviderType.DEEPSEEK)
        assert [c.api_key for c in settings.provider_configs()] == [DEMO_API_KEY, DEMO_API_KEY]


class TestProvidersConfig:
    """Test provider chain validation."""

    def test_order_rejects_duplicates(self) -> None:
        with pytest.raises(ValidationError):
            ProvidersConfig(order=[ProviderType.DEEPSEEK, ProviderType.DEEPSEEK])

    def test_order_accepts_single_provider(self) -> None:
        config = ProvidersConfig(order=[ProviderType.DEEPSEEK])

        assert config.order == [ProviderType.DEEPSEEK]
