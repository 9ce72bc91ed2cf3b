"""Configuration models for Essay Puzzle.

Configuration is read from ~/.config/essaypuzzle/config.yaml when it exists,
and environment variables override individual values:

- ESSAYPUZZLE_LLM_ENDPOINT: Override llm.endpoint
- ESSAYPUZZLE_LLM_API_KEY: Override llm.api_key (API_KEY is accepted as a fallback)
- ESSAYPUZZLE_LLM_MODEL: Override llm.model

A missing API key is not an error here: the AI features are disabled and the
rest of the tool keeps working.
"""

from pydantic import BaseModel, Field, HttpUrl
from pathlib import Path
from typing import Any, Dict, Optional
import yaml
import os
import stat


DEFAULT_CONFIG_PATH = Path.home() / ".config" / "essaypuzzle" / "config.yaml"


class LLMConfig(BaseModel):
    """Configuration for LLM API connection."""

    endpoint: HttpUrl = Field(
        default="https://generativelanguage.googleapis.com/v1beta/openai",
        description="LLM API endpoint URL (OpenAI or Ollama compatible)"
    )

    api_key: Optional[str] = Field(
        default=None,
        description="API key for authentication; AI features are disabled without it"
    )

    model: str = Field(
        default="gemini-2.5-flash",
        description="Model identifier (e.g., 'gemini-2.5-flash', 'gpt-4o-mini', 'llama3')"
    )

    num_ctx: int = Field(
        default=32768,
        ge=1024,
        description="Context window size (Ollama-specific, controls VRAM usage)"
    )

    model_config = {"frozen": True}

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key and self.api_key.strip())


class Config(BaseModel):
    """Root configuration for Essay Puzzle."""

    llm: LLMConfig = Field(default_factory=LLMConfig, description="LLM API settings")

    @classmethod
    def load(cls, path: Path = DEFAULT_CONFIG_PATH) -> "Config":
        """
        Load configuration from YAML file with environment variable overrides.

        The file is optional. When present, its permissions are checked
        before loading because it may hold the API key.

        Args:
            path: Path to config.yaml file

        Returns:
            Validated Config instance

        Raises:
            PermissionError: If file is group/world accessible
            ValueError: If YAML is invalid or validation fails
        """
        data: Dict[str, Any] = {}

        if path.exists():
            mode = os.stat(path).st_mode
            if mode & (stat.S_IRWXG | stat.S_IRWXO):
                raise PermissionError(
                    f"Config file has overly permissive permissions: {oct(mode)}\n"
                    f"Run: chmod 600 {path}"
                )

            with open(path) as f:
                try:
                    data = yaml.safe_load(f) or {}
                except yaml.YAMLError as e:
                    raise ValueError(f"Invalid YAML in {path}: {e}") from e

            if not isinstance(data, dict):
                raise ValueError(f"Config file {path} must contain a mapping")

        data = _apply_env_overrides(data)

        return cls(**data)

    model_config = {"frozen": True}


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    """Apply environment variable overrides to configuration data.

    Environment variables use the format: ESSAYPUZZLE_SECTION_KEY
    For example: ESSAYPUZZLE_LLM_MODEL sets data['llm']['model']

    Args:
        data: Base configuration dictionary from YAML

    Returns:
        Configuration dictionary with environment overrides applied
    """
    llm = dict(data.get("llm") or {})

    if env_endpoint := os.getenv("ESSAYPUZZLE_LLM_ENDPOINT"):
        llm["endpoint"] = env_endpoint

    if env_api_key := os.getenv("ESSAYPUZZLE_LLM_API_KEY"):
        llm["api_key"] = env_api_key
    elif not llm.get("api_key") and (fallback_key := os.getenv("API_KEY")):
        llm["api_key"] = fallback_key

    if env_model := os.getenv("ESSAYPUZZLE_LLM_MODEL"):
        llm["model"] = env_model

    return {**data, "llm": llm}
