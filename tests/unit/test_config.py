"""Unit tests for configuration models."""

import os

import pytest

from essaypuzzle.models.config import Config, LLMConfig


def write_config(path, text, mode=0o600):
    path.write_text(text)
    os.chmod(path, mode)
    return path


class TestLLMConfig:
    """Test LLM configuration model."""

    def test_defaults(self):
        config = LLMConfig()

        assert "generativelanguage.googleapis.com" in str(config.endpoint)
        assert config.model == "gemini-2.5-flash"
        assert config.api_key is None
        assert not config.has_api_key
        assert config.num_ctx == 32768

    def test_valid_llm_config(self):
        config = LLMConfig(
            endpoint="http://localhost:11434/v1",
            api_key="ollama",
            model="llama3",
            num_ctx=16384,
        )

        assert config.has_api_key
        assert config.num_ctx == 16384

    def test_blank_api_key_counts_as_missing(self):
        assert not LLMConfig(api_key="   ").has_api_key

    def test_invalid_endpoint(self):
        with pytest.raises(ValueError):
            LLMConfig(endpoint="not a url")

    def test_num_ctx_minimum(self):
        with pytest.raises(ValueError):
            LLMConfig(num_ctx=512)

    def test_llm_config_immutable(self):
        config = LLMConfig(api_key="k")

        with pytest.raises(Exception):  # Pydantic ValidationError
            config.api_key = "new-key"


class TestConfigLoad:
    """Test loading config from YAML and the environment."""

    def test_missing_file_uses_defaults(self, tmp_path):
        config = Config.load(tmp_path / "config.yaml")

        assert config.llm.model == "gemini-2.5-flash"
        assert not config.llm.has_api_key

    def test_load_yaml(self, tmp_path):
        path = write_config(
            tmp_path / "config.yaml",
            "llm:\n"
            "  endpoint: https://api.openai.com/v1\n"
            "  api_key: sk-test\n"
            "  model: gpt-4o-mini\n",
        )

        config = Config.load(path)

        assert config.llm.api_key == "sk-test"
        assert config.llm.model == "gpt-4o-mini"

    def test_empty_file(self, tmp_path):
        path = write_config(tmp_path / "config.yaml", "")
        assert Config.load(path).llm.model == "gemini-2.5-flash"

    def test_permissive_file_rejected(self, tmp_path):
        path = write_config(tmp_path / "config.yaml", "llm: {}\n", mode=0o644)

        with pytest.raises(PermissionError, match="chmod 600"):
            Config.load(path)

    def test_invalid_yaml(self, tmp_path):
        path = write_config(tmp_path / "config.yaml", "llm: [unclosed\n")

        with pytest.raises(ValueError, match="Invalid YAML"):
            Config.load(path)

    def test_non_mapping_rejected(self, tmp_path):
        path = write_config(tmp_path / "config.yaml", "- just\n- a list\n")

        with pytest.raises(ValueError, match="mapping"):
            Config.load(path)

    def test_invalid_value(self, tmp_path):
        path = write_config(tmp_path / "config.yaml", "llm:\n  num_ctx: 10\n")

        with pytest.raises(ValueError):
            Config.load(path)

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        path = write_config(tmp_path / "config.yaml", "llm:\n  api_key: from-file\n  model: a\n")
        monkeypatch.setenv("ESSAYPUZZLE_LLM_API_KEY", "from-env")
        monkeypatch.setenv("ESSAYPUZZLE_LLM_MODEL", "b")
        monkeypatch.setenv("ESSAYPUZZLE_LLM_ENDPOINT", "http://localhost:11434/v1")

        config = Config.load(path)

        assert config.llm.api_key == "from-env"
        assert config.llm.model == "b"
        assert "localhost:11434" in str(config.llm.endpoint)

    def test_api_key_fallback(self, tmp_path, monkeypatch):
        monkeypatch.setenv("API_KEY", "legacy-key")

        config = Config.load(tmp_path / "config.yaml")

        assert config.llm.api_key == "legacy-key"

    def test_fallback_does_not_override_file_key(self, tmp_path, monkeypatch):
        path = write_config(tmp_path / "config.yaml", "llm:\n  api_key: from-file\n")
        monkeypatch.setenv("API_KEY", "legacy-key")

        assert Config.load(path).llm.api_key == "from-file"
