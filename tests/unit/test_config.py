"""Test configuration management."""

from pathlib import Path

import pytest

from movie_recommender.config import Config, ConfigManager
from movie_recommender.utils.constants import DEFAULT_CATALOG


def test_config_manager_loads_config(config_manager, temp_config_file):
    """Test that config manager loads configuration correctly."""
    config = config_manager.load_config()

    assert isinstance(config, Config)
    assert config.llm.provider == "openai"
    assert config.llm.model == "gpt-4"
    assert config.llm.api_key == "test-key"
    assert config.recommendation.catalog == ["Inception (2010)", "Toy Story (1995)", "Up (2009)"]
    assert config.logging.level == "DEBUG"


def test_config_defaults_for_missing_sections(config):
    """Test that omitted sections fall back to defaults."""
    assert config.guardrail.temperature == 0.1
    assert config.guardrail.max_tokens == 200
    assert config.recommendation.temperature == 0.1
    assert config.recommendation.max_tokens == 20
    assert config.recommendation.validate_output is False
    assert config.scraper.cache_ttl_hours == 24
    assert config.server.port == 8080


def test_config_manager_caches_config(config_manager):
    """Test that config manager caches loaded configuration."""
    config1 = config_manager.load_config()
    config2 = config_manager.get_config()

    assert config1 is config2


def test_config_manager_reload_config(config_manager):
    """Test that config manager can reload configuration."""
    config1 = config_manager.load_config()
    config2 = config_manager.reload_config()

    assert config1 is not config2
    assert config1.llm.provider == config2.llm.provider


def test_config_manager_missing_file():
    """Test that config manager raises error for missing file."""
    config_manager = ConfigManager(Path("nonexistent.yaml"))

    with pytest.raises(FileNotFoundError):
        config_manager.load_config()


def test_config_manager_uses_env_location(tmp_path, monkeypatch):
    """Test that the config path can come from the environment."""
    config_file = tmp_path / "elsewhere.yaml"
    config_file.write_text("llm:\n  model: gpt-4o-mini\n")
    monkeypatch.setenv("MOVIE_RECOMMENDER_CONFIG", str(config_file))

    config = ConfigManager().load_config()

    assert config.llm.model == "gpt-4o-mini"


def test_empty_config_file_uses_defaults(tmp_path):
    """Test that an empty YAML file yields a fully defaulted config."""
    config_file = tmp_path / "empty.yaml"
    config_file.write_text("")

    config = ConfigManager(config_file).load_config()

    assert config.recommendation.catalog == list(DEFAULT_CATALOG)
    assert config.guardrail.enabled is True


def test_config_validation_invalid_provider(tmp_path):
    """Test config validation with invalid LLM provider."""
    config_file = tmp_path / "invalid.yaml"
    config_file.write_text('llm:\n  provider: "invalid"\n  model: "test"\n')

    config_manager = ConfigManager(config_file)

    with pytest.raises(ValueError):
        config_manager.load_config()


def test_config_validation_rejects_out_of_range_values(tmp_path):
    """Test that numeric bounds are enforced."""
    config_file = tmp_path / "invalid.yaml"
    config_file.write_text("guardrail:\n  confidence_threshold: 1.5\n")

    with pytest.raises(ValueError):
        ConfigManager(config_file).load_config()


def test_unexpanded_api_key_counts_as_absent(tmp_path, monkeypatch):
    """Test that an unresolved ${VAR} placeholder is not used as a credential."""
    monkeypatch.delenv("MR_TEST_MISSING_KEY", raising=False)
    config_file = tmp_path / "config.yaml"
    config_file.write_text('llm:\n  api_key: "${MR_TEST_MISSING_KEY}"\n')

    config = ConfigManager(config_file).load_config()

    assert config.llm.api_key is None


def test_api_key_expanded_from_environment(tmp_path, monkeypatch):
    """Test environment variable expansion in the YAML file."""
    monkeypatch.setenv("MR_TEST_KEY", "sk-from-env")
    config_file = tmp_path / "config.yaml"
    config_file.write_text('llm:\n  api_key: "${MR_TEST_KEY}"\n')

    config = ConfigManager(config_file).load_config()

    assert config.llm.api_key == "sk-from-env"


def test_api_key_loaded_from_dotenv(tmp_path, monkeypatch):
    """Test that a .env file beside the config is loaded before expansion."""
    # Registers the variable for removal at teardown, then unsets it
    monkeypatch.setenv("MR_TEST_DOTENV_KEY", "placeholder")
    monkeypatch.delenv("MR_TEST_DOTENV_KEY")
    (tmp_path / ".env").write_text("MR_TEST_DOTENV_KEY=sk-from-dotenv\n")
    config_file = tmp_path / "config.yaml"
    config_file.write_text('llm:\n  api_key: "${MR_TEST_DOTENV_KEY}"\n')

    config = ConfigManager(config_file).load_config()

    assert config.llm.api_key == "sk-from-dotenv"


def test_create_default_config(tmp_path):
    """Test creating default configuration file."""
    output_path = tmp_path / "default_config.yaml"

    ConfigManager.create_default_config(output_path)

    assert output_path.exists()

    config_manager = ConfigManager(output_path)
    config = config_manager.load_config()
    assert isinstance(config, Config)
    assert config.recommendation.catalog == list(DEFAULT_CATALOG)


def test_validate_config_file(tmp_path, config_manager, temp_config_file):
    """Test validating a file without replacing the current config."""
    bad_file = tmp_path / "bad.yaml"
    bad_file.write_text("logging:\n  level: LOUD\n")

    assert config_manager.validate_config_file(temp_config_file) is True
    assert config_manager.validate_config_file(bad_file) is False
