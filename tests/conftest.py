# tests/conftest.py
import logging
from collections.abc import Generator
from typing import Any

import pytest
from mcp import types

from ai302_image_mcp.backend import AI302Client, ImageToolsMCPServer
from ai302_image_mcp.core import Settings

BASE_URL = "https://upstream.test/mcp"

_ENV_VARS = (
    "302AI_API_KEY",
    "BASE_URL",
    "MODE",
    "PORT",
    "ENDPOINT",
    "HOST",
    "LOG_DIR",
    "LOG_LEVEL",
    "UPSTREAM_TIMEOUT",
)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Run each test without ambient config and away from any real .env file."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def reset_package_logger() -> Generator[None, None, None]:
    yield
    logger = logging.getLogger("ai302_image_mcp")
    for handler in list(logger.handlers):
        if getattr(handler, "_ai302_handler", False):
            logger.removeHandler(handler)
            handler.close()


class CountingFactory:
    """Client factory that records every construction."""

    def __init__(self) -> None:
        self.created: list[str] = []

    def __call__(self, api_key: str) -> AI302Client:
        self.created.append(api_key)
        return AI302Client(api_key, base_url=BASE_URL)


@pytest.fixture
def factory() -> CountingFactory:
    return CountingFactory()


@pytest.fixture
def make_server(factory: CountingFactory):
    def _make(api_key: str | None = None, env_api_key: str | None = None, **settings: Any) -> ImageToolsMCPServer:
        return ImageToolsMCPServer(
            settings=Settings(base_url=BASE_URL, env_api_key=env_api_key, **settings),
            api_key=api_key,
            client_factory=factory,
        )

    return _make


def list_request(auth_key: str | None = None) -> types.ListToolsRequest:
    params = {"_meta": {"auth": {"302AI_API_KEY": auth_key}}} if auth_key else None
    return types.ListToolsRequest.model_validate({"method": "tools/list", "params": params})


def call_request(
    name: str,
    arguments: dict[str, Any] | None = None,
    auth_key: str | None = None,
) -> types.CallToolRequest:
    params: dict[str, Any] = {"name": name, "arguments": arguments}
    if auth_key:
        params["_meta"] = {"auth": {"302AI_API_KEY": auth_key}}
    return types.CallToolRequest.model_validate({"method": "tools/call", "params": params})
