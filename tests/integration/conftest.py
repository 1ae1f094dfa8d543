"""Integration test fixtures and configuration."""

import pytest
import yaml
from fastapi.testclient import TestClient

from movie_recommender.api import create_app
from movie_recommender.config import ConfigManager
from movie_recommender.core.interfaces import ILLMService, IMetadataExtractor
from movie_recommender.infrastructure import Container


@pytest.fixture
def integration_config(tmp_path):
    """Create integration test configuration."""
    config_data = {
        "llm": {"provider": "openai", "model": "gpt-4o-mini", "api_key": "test-key"},
        "guardrail": {"enabled": True},
        "recommendation": {
            "request_timeout": 5,
            "catalog": ["Inception (2010)", "Toy Story (1995)", "Up (2009)"],
        },
        "logging": {"level": "WARNING"},
    }

    config_file = tmp_path / "integration_config.yaml"
    with open(config_file, "w") as f:
        yaml.dump(config_data, f)

    return config_file


@pytest.fixture
def integration_container(integration_config, scripted_llm, fake_extractor):
    """Fully wired container with network-facing services replaced."""
    container = Container(ConfigManager(integration_config))
    container.configure_default_services()
    container.register_instance(ILLMService, scripted_llm)
    container.register_instance(IMetadataExtractor, fake_extractor)
    return container


@pytest.fixture
def client(integration_container):
    """HTTP client bound to the application, with lifespan events run."""
    with TestClient(create_app(integration_container)) as test_client:
        yield test_client
