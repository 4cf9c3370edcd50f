"""Tests for config loading and validation."""

import pytest

from cover_letter.config import AppConfig, LLMConfig, StorageConfig, load_config
from cover_letter.errors import ConfigurationError


class TestConfig:
    def test_defaults(self):
        config = AppConfig()
        assert config.llm.provider is None
        assert config.llm.timeout == 60
        assert config.llm.extraction_temperature == 0.1
        assert config.llm.letter_temperature == 0.5
        assert config.page.page_width == 215.9
        assert config.page.font_size == 12
        assert config.output.directory == "output"

    def test_load_config_defaults(self, tmp_path):
        """Loading from non-existent path returns defaults."""
        config = load_config(tmp_path / "nonexistent.yaml")
        assert config == AppConfig()

    def test_load_config_from_yaml(self, tmp_path):
        yaml_path = tmp_path / "config.yaml"
        yaml_path.write_text(
            "llm:\n  provider: anthropic\n  timeout: 30\npage:\n  font_size: 11\n"
        )
        config = load_config(yaml_path)
        assert config.llm.provider == "anthropic"
        assert config.llm.timeout == 30
        assert config.page.font_size == 11
        # Defaults for unspecified
        assert config.page.line_height == 7.0
        assert config.llm.letter_temperature == 0.5

    def test_empty_yaml(self, tmp_path):
        yaml_path = tmp_path / "config.yaml"
        yaml_path.write_text("")
        assert load_config(yaml_path) == AppConfig()

    def test_storage_resolved_path(self):
        resolved = StorageConfig(db_path="~/test.db").resolved_db_path
        assert "~" not in str(resolved)

    def test_frozen_config(self):
        config = LLMConfig()
        with pytest.raises(AttributeError):
            config.timeout = 10


class TestConfigValidation:
    def test_invalid_timeout(self, tmp_path):
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("llm:\n  timeout: 0\n")
        with pytest.raises(ValueError, match="timeout"):
            load_config(yaml)

    def test_invalid_temperature(self, tmp_path):
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("llm:\n  letter_temperature: 1.5\n")
        with pytest.raises(ConfigurationError, match="letter_temperature"):
            load_config(yaml)

    def test_invalid_page(self, tmp_path):
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("page:\n  page_width: 40\n")
        with pytest.raises(ConfigurationError, match="page"):
            load_config(yaml)

    def test_unknown_provider(self, tmp_path):
        yaml = tmp_path / "bad.yaml"
        yaml.write_text("llm:\n  provider: antropic\n")
        with pytest.raises(ConfigurationError, match="llm.provider"):
            load_config(yaml)

    def test_known_provider(self, tmp_path):
        yaml = tmp_path / "ok.yaml"
        yaml.write_text("llm:\n  provider: deepseek\n")
        assert load_config(yaml).llm.provider == "deepseek"
