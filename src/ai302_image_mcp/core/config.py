# ============================================================================
# 302AI IMAGE MCP - SETTINGS
# ============================================================================
# Copyright 2026 302.AI. All Rights Reserved.
#
# Process configuration, read once at startup from the environment / .env.
# Command-line parameters are passed as init arguments and win over env.
#
# Environment Variables:
#   302AI_API_KEY     - Fallback API key (used when no key is given per request)
#   BASE_URL          - Upstream base URL (default https://api.302.ai/mcp)
#   MODE              - Transport: stdio (default) or rest
#   HOST / PORT       - REST listener address (default 0.0.0.0:9593)
#   ENDPOINT          - REST path (default /rest)
#   LOG_DIR           - Log directory (default ./logs)
#   LOG_LEVEL         - Log level (default DEBUG)
#   UPSTREAM_TIMEOUT  - Seconds; unset means no client-side timeout
# ============================================================================

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_PORT",
    "DEFAULT_ENDPOINT",
    "Settings",
]

DEFAULT_BASE_URL = "https://api.302.ai/mcp"
DEFAULT_PORT = 9593
DEFAULT_ENDPOINT = "/rest"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # ---------- Transport ----------
    # "rest" selects HTTP; any other value runs over STDIO
    mode: str = "stdio"
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    endpoint: str = DEFAULT_ENDPOINT

    # ---------- Upstream ----------
    base_url: str = DEFAULT_BASE_URL
    env_api_key: str | None = Field(default=None, validation_alias="302AI_API_KEY")
    upstream_timeout: float | None = None

    # ---------- Logging ----------
    log_dir: Path = Path("logs")
    log_level: str = "DEBUG"

    @field_validator("mode")
    @classmethod
    def _lower_mode(cls, v: str) -> str:
        return v.strip().lower() or "stdio"

    @field_validator("endpoint")
    @classmethod
    def _leading_slash(cls, v: str) -> str:
        v = v.strip() or DEFAULT_ENDPOINT
        return v if v.startswith("/") else f"/{v}"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"):
            raise ValueError(f"unknown log level: {v}")
        return v

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")
