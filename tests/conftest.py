"""Pytest configuration and fixtures."""

from collections.abc import Callable, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from tests.helpers import UpstreamStub
from tutor_api.agents.tutor import TutorAgent
from tutor_api.core.config import ProviderConfig, Settings
from tutor_api.main import create_app
from tutor_api.models.providers import ProviderType
from tutor_api.services.providers import ProviderClient, ProviderManager


@pytest.fixture
def groq_config() -> ProviderConfig:
    """Primary provider config for testing."""
    return ProviderConfig(
        provider=ProviderType.GROQ,
        api_key="test-groq-key",
        endpoint="https://api.groq.com/openai/v1/chat/completions",
        model="llama-3.3-70b-versatile",
        label="groq-llama-3.3-70b",
        max_tokens=4096,
        temperature=0.3,
        timeout_seconds=5,
    )


@pytest.fixture
def deepseek_config() -> ProviderConfig:
    """Secondary provider config for testing."""
    return ProviderConfig(
        provider=ProviderType.DEEPSEEK,
        api_key="test-deepseek-key",
        endpoint="https://api.deepseek.com/chat/completions",
        model="deepseek-chat",
        label="deepseek-chat",
        max_tokens=4096,
        temperature=0.3,
        timeout_seconds=5,
    )


@pytest.fixture
def make_manager(
    groq_config: ProviderConfig, deepseek_config: ProviderConfig
) -> Callable[[UpstreamStub, UpstreamStub], ProviderManager]:
    """Factory wiring primary and secondary stubs into a provider manager."""

    def _make(primary: UpstreamStub, secondary: UpstreamStub) -> ProviderManager:
        return ProviderManager(
            [
                ProviderClient(groq_config, transport=primary.transport),
                ProviderClient(deepseek_config, transport=secondary.transport),
            ]
        )

    return _make


@pytest.fixture
def test_settings() -> Settings:
    """Deterministic settings that do not depend on the local environment."""
    return Settings(groq_api_key=None, deepseek_api_key=None, log_format="text")


@pytest.fixture
def app(test_settings: Settings) -> FastAPI:
    """Application instance built from test settings."""
    return create_app(test_settings)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    """
    Create a test client for the FastAPI app.

    Yields:
        TestClient for making requests to the app
    """
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def use_upstreams(
    app: FastAPI, make_manager: Callable[[UpstreamStub, UpstreamStub], ProviderManager]
) -> Callable[[UpstreamStub, UpstreamStub], None]:
    """Swap the app's provider chain for the given upstream stubs."""

    def _use(primary: UpstreamStub, secondary: UpstreamStub) -> None:
        app.state.tutor_agent = TutorAgent(make_manager(primary, secondary))

    return _use
