"""Tests for settings loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from ai302_image_mcp.core.config import Settings


def test_defaults():
    settings = Settings()

    assert settings.mode == "stdio"
    assert settings.port == 9593
    assert settings.endpoint == "/rest"
    assert settings.base_url == "https://api.302.ai/mcp"
    assert settings.env_api_key is None
    assert settings.upstream_timeout is None
    assert settings.log_dir == Path("logs")


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("302AI_API_KEY", "sk-env")
    monkeypatch.setenv("BASE_URL", "https://proxy.example/mcp/")
    monkeypatch.setenv("MODE", "REST")
    monkeypatch.setenv("PORT", "8080")

    settings = Settings()

    assert settings.env_api_key == "sk-env"
    assert settings.base_url == "https://proxy.example/mcp"
    assert settings.mode == "rest"
    assert settings.port == 8080


def test_reads_dotenv_file(tmp_path):
    (tmp_path / ".env").write_text("302AI_API_KEY=sk-dotenv\nENDPOINT=api\n")

    settings = Settings()

    assert settings.env_api_key == "sk-dotenv"
    assert settings.endpoint == "/api"


def test_init_arguments_win_over_environment(monkeypatch):
    monkeypatch.setenv("PORT", "8080")

    assert Settings(port=9000).port == 9000


def test_mode_is_normalized_not_restricted(monkeypatch):
    monkeypatch.setenv("MODE", " SSE ")

    assert Settings().mode == "sse"
    assert Settings(mode="").mode == "stdio"


def test_unknown_log_level_rejected():
    with pytest.raises(ValidationError):
        Settings(log_level="verbose")
