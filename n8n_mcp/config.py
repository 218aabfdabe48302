"""Configuration management for the n8n MCP Server.

Loads configuration from environment variables (or a .env file) with
sensible defaults. The API key is never logged or exposed in responses.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """n8n MCP Server configuration settings.

    All settings can be overridden via environment variables.
    Prefix: None (uses exact variable names).
    """

    # n8n connection
    n8n_url: str = Field(
        default="http://localhost:5678",
        description="Base URL of the n8n instance (without /api/v1)"
    )
    n8n_api_key: str = Field(
        default="",
        description="n8n API key sent as X-N8N-API-KEY (never logged)"
    )
    n8n_timeout: float = Field(
        default=60,
        description="Timeout for n8n API requests in seconds"
    )

    # Server settings
    mcp_log_level: str = Field(default="INFO", description="Logging level")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",  # Ignore unknown environment variables
    }

    @property
    def n8n_base_url(self) -> str:
        """n8n URL without a trailing slash."""
        return self.n8n_url.rstrip("/")

    def get_safe_dict(self) -> dict:
        """Return config as dict with secrets masked.

        Use this for logging or debugging - never exposes secrets.
        """
        data = self.model_dump()
        if data.get("n8n_api_key"):
            data["n8n_api_key"] = "***MASKED***"
        return data


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance.

    Creates the instance on first call, then returns cached version.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Force reload settings from the environment.

    Useful for testing or after environment changes.
    """
    global _settings
    _settings = None
    return get_settings()
