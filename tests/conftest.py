"""Pytest fixtures and configuration."""
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from decision_lab.ai import AIService
from decision_lab.config import AIConfig, Settings


@pytest.fixture
def settings():
    """Settings isolated from any local .env file, AI disabled."""
    return Settings(_env_file=None, ai_provider="none")


@pytest.fixture
def mock_ai():
    """AI service double; every call succeeds unless a test says otherwise."""
    mock = MagicMock(spec=AIService)
    mock.enabled = True
    mock.config = AIConfig("anthropic", "test-key", "test-model")
    return mock


@pytest.fixture
def disabled_ai():
    return AIService(AIConfig("none", "", ""))


@pytest.fixture
def client(settings, mock_ai):
    """Test client wired to the mocked AI service."""
    from decision_lab.main import create_app
    return TestClient(create_app(settings=settings, ai_service=mock_ai))


@pytest.fixture
def local_client(settings, disabled_ai):
    """Test client with no AI provider: only the local fallbacks run."""
    from decision_lab.main import create_app
    return TestClient(create_app(settings=settings, ai_service=disabled_ai))


@pytest.fixture
def sample_scenario():
    return {
        "title": "Rivian Battery Strategy",
        "summary": "Should Rivian make, buy, or partner for battery cells?",
        "context": "EV startup with strong engineering talent.",
        "keyFactors": ["Batteries are 30-40% of vehicle cost"],
        "stakeholders": ["Investors"],
        "constraints": ["Time pressure"],
        "sourceType": "example",
    }


@pytest.fixture
def sample_stance():
    return {
        "decision": "make",
        "reasoning": "Batteries define range and performance, so we must own them.",
        "confidence": 4,
    }
