# ============================================================================
# 302AI IMAGE MCP - UPSTREAM API CLIENT
# ============================================================================
# Copyright 2026 302.AI. All Rights Reserved.
#
# HTTP client for the 302.AI MCP tool gateway.
#
#   GET  {base}/v1/tool/list?packId=imageTools&user302=user302  → {"tools": [...]}
#   POST {base}/v1/tool/call  {"nameOrId": ..., "arguments": {...}} → any JSON
#
# Auth: Bearer token on both; the call endpoint also requires x-api-key.
# Tool descriptors and call results are returned verbatim.
# ============================================================================

import logging
from typing import Any

import httpx

from ..core.config import DEFAULT_BASE_URL
from ..core.errors import UpstreamHTTPError, UpstreamTransportError

logger = logging.getLogger(__name__)

LIST_PATH = "/v1/tool/list"
CALL_PATH = "/v1/tool/call"
PACK_ID = "imageTools"
USER_CLASS = "user302"

__all__ = ["AI302Client"]


class AI302Client:
    """Async client bound to a single API key.

    Every request opens its own httpx.AsyncClient, so an instance can be
    dropped at any time without affecting calls still in flight.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        logger.info("AI302Client initialized", extra={"data": {"baseUrl": self.base_url}})

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout)

    def _headers(self, with_api_key_header: bool = False) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }
        if with_api_key_header:
            headers["x-api-key"] = self.api_key
        return headers

    # ====================================================================
    # TOOL CATALOG
    # ====================================================================

    async def list_tools(self) -> list[dict[str, Any]]:
        params = {"packId": PACK_ID, "user302": USER_CLASS}
        logger.debug(
            "Fetching tools list",
            extra={"data": {"url": f"{self.base_url}{LIST_PATH}", "params": params}},
        )

        try:
            async with self._client() as client:
                resp = await client.get(LIST_PATH, params=params, headers=self._headers())
                if not resp.is_success:
                    logger.error(
                        "Failed to fetch tools list",
                        extra={"data": {
                            "status": resp.status_code,
                            "statusText": resp.reason_phrase,
                            "error": resp.text,
                        }},
                    )
                    raise UpstreamHTTPError(resp.status_code, resp.reason_phrase, resp.text)
                data = resp.json()
            tools = data["tools"]
            if not isinstance(tools, list):
                raise TypeError(f"expected a list of tools, got {type(tools).__name__}")
        except UpstreamHTTPError:
            raise
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            message = _describe(e)
            logger.error("Tools list fetch exception", extra={"data": {"error": message}})
            raise UpstreamTransportError(f"Failed to fetch tools: {message}") from e

        logger.info("Successfully fetched tools list", extra={"data": {"toolsCount": len(tools)}})
        return tools

    # ====================================================================
    # TOOL INVOCATION
    # ====================================================================

    async def call_tool(self, name: str, arguments: dict[str, Any] | None) -> Any:
        body = {"nameOrId": name, "arguments": arguments}
        logger.debug("Calling tool", extra={"data": {"name": name, "arguments": arguments}})

        try:
            async with self._client() as client:
                resp = await client.post(
                    CALL_PATH,
                    json=body,
                    headers=self._headers(with_api_key_header=True),
                )
                if not resp.is_success:
                    logger.error(
                        "Tool call failed",
                        extra={"data": {
                            "name": name,
                            "status": resp.status_code,
                            "statusText": resp.reason_phrase,
                            "error": resp.text,
                        }},
                    )
                    raise UpstreamHTTPError(resp.status_code, resp.reason_phrase, resp.text)
                data = resp.json()
        except UpstreamHTTPError:
            raise
        except (httpx.HTTPError, ValueError) as e:
            message = _describe(e)
            logger.error("Tool call exception", extra={"data": {"name": name, "error": message}})
            raise UpstreamTransportError(f"Tool call failed: {message}") from e

        logger.info("Tool called successfully", extra={"data": {"name": name}})
        return data


def _describe(exc: Exception) -> str:
    # httpx timeouts often stringify to ""
    return str(exc) or type(exc).__name__
