"""
Unit tests for application configuration.
"""

from pathlib import Path

import pytest

from quizdrill.core.config import AppConfig, get_config, reload_config, set_config
from quizdrill.core.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in ("QUIZDRILL_DATABASE_URL", "QUIZDRILL_SIMILARITY_THRESHOLD", "LOG_LEVEL", "DEBUG", "ENVIRONMENT"):
        monkeypatch.delenv(name, raising=False)
    yield
    set_config(None)


class TestAppConfig:
    """Test cases for AppConfig."""

    def test_defaults(self):
        config = AppConfig.from_dict({})

        assert config.name == "quizdrill"
        assert config.evaluation.similarity_threshold_percent == 80
        assert config.evaluation.keyword_min_length == 3
        assert config.session.shuffle is False
        assert config.session.default_limit is None
        assert config.documents.preview_characters == 500
        assert config.storage.url == "sqlite:///data/quizdrill.db"

    def test_nested_app_section(self):
        config = AppConfig.from_dict({"app": {"name": "drill", "debug": True}})

        assert config.name == "drill"
        assert config.debug is True

    def test_sections_from_dict(self):
        config = AppConfig.from_dict({
            "evaluation": {"similarity_threshold_percent": 70},
            "session": {"shuffle": True, "default_limit": 10},
        })

        assert config.evaluation.similarity_threshold_percent == 70
        assert config.session.shuffle is True
        assert config.session.default_limit == 10

    @pytest.mark.parametrize("data", [
        {"evaluation": {"similarity_threshold_percent": 101}},
        {"evaluation": {"similarity_threshold_percent": -1}},
        {"evaluation": {"keyword_min_length": 0}},
        {"session": {"default_limit": 0}},
        {"storage": {"url": ""}},
        {"evaluation": {"unknown_setting": 1}},
        {"not_a_section": True},
    ])
    def test_invalid_values(self, data):
        with pytest.raises(ConfigurationError):
            AppConfig.from_dict(data)

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("QUIZDRILL_SIMILARITY_THRESHOLD", "70")
        monkeypatch.setenv("QUIZDRILL_DATABASE_URL", "sqlite:///elsewhere.db")
        monkeypatch.setenv("DEBUG", "true")

        config = AppConfig.from_dict({})

        assert config.evaluation.similarity_threshold_percent == 70
        assert config.storage.url == "sqlite:///elsewhere.db"
        assert config.debug is True

    def test_invalid_env_threshold(self, monkeypatch):
        monkeypatch.setenv("QUIZDRILL_SIMILARITY_THRESHOLD", "high")

        with pytest.raises(ConfigurationError):
            AppConfig.from_dict({})

    def test_to_dict(self):
        data = AppConfig.from_dict({}).to_dict()

        assert data["evaluation"]["similarity_threshold_percent"] == 80
        assert data["logging"]["level"] == "INFO"


class TestConfigFiles:
    """Test cases for YAML loading and the global instance."""

    def test_from_yaml(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("evaluation:\n  similarity_threshold_percent: 65\n", encoding="utf-8")

        assert AppConfig.from_yaml(path).evaluation.similarity_threshold_percent == 65

    def test_invalid_yaml(self, temp_dir):
        path = temp_dir / "broken.yaml"
        path.write_text("evaluation: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            AppConfig.from_yaml(path)

    def test_yaml_root_must_be_mapping(self, temp_dir):
        path = temp_dir / "list.yaml"
        path.write_text("- one\n- two\n", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            AppConfig.from_yaml(path)

    def test_missing_file_uses_defaults(self, temp_dir):
        config = reload_config(temp_dir / "missing.yaml")
        assert config.evaluation.similarity_threshold_percent == 80

    def test_global_instance(self, temp_dir):
        config = AppConfig.from_dict({"evaluation": {"similarity_threshold_percent": 55}})
        set_config(config)

        assert get_config() is config
        assert get_config(Path("ignored.yaml")) is config
