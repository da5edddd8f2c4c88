"""Runtime configuration and API key lookup."""

import logging
import os
from functools import cached_property, lru_cache
from typing import Protocol

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://openrouter.ai/api/v1/chat/completions"
DEFAULT_MODEL = "mistralai/mistral-7b-instruct-v0.2:free"

AVAILABLE_MODELS: dict[str, str] = {
    DEFAULT_MODEL: "Mistral-7b-instruct-v0.2",
    "nvidia/llama-3.1-nemotron-nano-8b-v1:free": "Llama-3.1-nemotron-nano-8b",
    "qwen/qwen-2.5-coder-32b-instruct:free": "Qwen-2.5-coder-32b-instruct",
}

# Checked in order; the VITE_ name is what older front-end builds exported.
API_KEY_ENV_VARS = ("OPENROUTER_API_KEY", "VITE_OPENROUTER_API_KEY")


class Settings(BaseModel):
    """Settings for the OpenRouter chat-completion call."""

    api_url: str = Field(default=DEFAULT_API_URL, description="Chat-completion endpoint URL")
    default_model: str = Field(default=DEFAULT_MODEL, description="Model used when none is selected")
    timeout: float = Field(default=60.0, gt=0, description="Request timeout in seconds")
    site_url: str = Field(default="http://localhost:8000", description="Sent as HTTP-Referer")
    app_title: str = Field(default="Code Vulnerability Analyzer", description="Sent as X-Title")
    temperature: float = 0.1
    max_tokens: int = 2048

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from OPENROUTER_* environment variables."""
        values: dict[str, object] = {}
        if api_url := os.environ.get("OPENROUTER_API_URL"):
            values["api_url"] = api_url
        if model := os.environ.get("OPENROUTER_MODEL"):
            values["default_model"] = model
        if timeout := os.environ.get("OPENROUTER_TIMEOUT"):
            values["timeout"] = timeout
        if site_url := os.environ.get("OPENROUTER_SITE_URL"):
            values["site_url"] = site_url
        return cls(**values)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, read from the environment once."""
    return Settings.from_env()


def selectable_models(settings: Settings) -> dict[str, str]:
    """Models a caller may pick, including a default configured outside the list."""
    models = dict(AVAILABLE_MODELS)
    models.setdefault(settings.default_model, settings.default_model)
    return models


class CredentialProvider(Protocol):
    """Supplies the API key for the remote call, or None when there is none."""

    def get_credential(self) -> str | None: ...


class StaticCredentialProvider:
    """Credential provider holding a fixed key."""

    def __init__(self, api_key: str | None):
        self._api_key = api_key or None

    def get_credential(self) -> str | None:
        return self._api_key


class EnvCredentialProvider:
    """Reads the API key from the environment on first use and caches it."""

    def __init__(self, env_vars: tuple[str, ...] = API_KEY_ENV_VARS):
        self.env_vars = env_vars

    @cached_property
    def _api_key(self) -> str | None:
        for name in self.env_vars:
            value = os.environ.get(name, "").strip()
            if value:
                logger.info(f"OpenRouter API key found in {name}")
                return value
        logger.warning("OpenRouter API key not found, local analysis will be used")
        return None

    def get_credential(self) -> str | None:
        return self._api_key
