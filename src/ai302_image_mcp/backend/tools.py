# ============================================================================
# 302AI IMAGE MCP - IMAGE TOOLS SERVER
# ============================================================================
# Copyright 2026 302.AI. All Rights Reserved.
#
# No tools are defined locally. The catalog and every tool execution live in
# the 302.AI "imageTools" pack; this server resolves the caller's API key and
# relays:
#
#   tools/list  → AI302Client.list_tools()       → {"tools": [...]}
#   tools/call  → AI302Client.call_tool(name, a) → {"content": [text(json)]}
#
# One AI302Client is cached and rebuilt whenever the resolved key changes.
# ============================================================================

import json
import logging
from typing import Any, Callable

from mcp import types

from .. import __version__
from ..core import BaseMCPServer, CredentialResolver, Settings, API_KEY_NAME
from .client import AI302Client

logger = logging.getLogger(__name__)

__all__ = [
    "SERVER_NAME",
    "ImageToolsMCPServer",
    "create_image_server",
]

SERVER_NAME = "302ai-image-mcp"

ClientFactory = Callable[[str], AI302Client]


class ImageToolsMCPServer(BaseMCPServer):
    """302.AI image tools, proxied over MCP.

    Extends BaseMCPServer with:
    - CredentialResolver (static key → per-request key → environment)
    - a single cached AI302Client, keyed by API key
    """

    INSTRUCTIONS = """302.AI Image Tools MCP Server

Image generation and editing tools from 302.AI (upscale, background removal,
generation, and more). Call tools/list for the current catalog; every call is
executed by the 302.AI API and returns its JSON result as text.

Requires a 302.AI API key (302AI_API_KEY)."""

    def __init__(
        self,
        settings: Settings | None = None,
        api_key: str | None = None,
        client_factory: ClientFactory | None = None,
    ) -> None:
        logger.info("Initializing ImageToolsMCPServer")
        super().__init__(
            name=SERVER_NAME,
            version=__version__,
            instructions=self.INSTRUCTIONS,
        )
        self.settings = settings or Settings()
        self.resolver = CredentialResolver(
            static_key=api_key,
            env_key=self.settings.env_api_key,
        )
        self._client_factory = client_factory or self._default_client_factory
        self._api: AI302Client | None = None

        self.setup_handlers()
        logger.info("ImageToolsMCPServer initialized successfully")

    def _default_client_factory(self, api_key: str) -> AI302Client:
        return AI302Client(
            api_key,
            base_url=self.settings.base_url,
            timeout=self.settings.upstream_timeout,
        )

    def get_api_instance(self, request: Any = None) -> AI302Client:
        """Resolve the key for `request` and return a client bound to it."""
        api_key = self.resolver.resolve(request, self.get_http_request())

        if self._api is None or self._api.api_key != api_key:
            logger.debug("Creating new API instance")
            self._api = self._client_factory(api_key)

        return self._api

    # ====================================================================
    # REQUEST HANDLERS
    # ====================================================================

    async def handle_list_tools(self, request: types.ListToolsRequest | None = None) -> dict[str, Any]:
        logger.debug("Handling list tools request")

        api = self.get_api_instance(request)
        tools = await api.list_tools()

        logger.info("List tools request completed", extra={"data": {"toolsCount": len(tools)}})
        return {"tools": tools}

    async def handle_call_tool(self, request: types.CallToolRequest) -> dict[str, Any]:
        name = request.params.name
        logger.debug("Handling call tool request", extra={"data": {"toolName": name}})

        api = self.get_api_instance(request)
        content = await api.call_tool(name, request.params.arguments or {})

        logger.info("Call tool request completed", extra={"data": {"toolName": name}})
        return {
            "content": [
                {
                    "type": "text",
                    "text": json.dumps({"content": content}, indent=2, ensure_ascii=False),
                },
            ],
        }

    def build_server_card(self) -> dict:
        card = super().build_server_card()
        card.update({
            "displayName": "302AI Image MCP",
            "vendor": "302.AI",
            "homepage": "https://302.ai",
            "authentication": {
                "type": "bearer",
                "scheme": "Bearer",
                "description": "302.AI API Key",
                "header": "Authorization: Bearer <302AI_API_KEY>",
            },
            "configSchema": {
                "type": "object",
                "title": "302AI Configuration",
                "required": [API_KEY_NAME],
                "properties": {
                    API_KEY_NAME: {
                        "type": "string",
                        "description": "302AI API Key",
                        "x-from": {"header": "authorization"},
                    }
                },
            },
        })
        return card

    def serve(self) -> None:
        """Run on the transport selected by settings."""
        self.run(
            mode=self.settings.mode,
            host=self.settings.host,
            port=self.settings.port,
            endpoint=self.settings.endpoint,
        )


# ============================================================================
# FACTORY FUNCTION
# ============================================================================

def create_image_server(
    settings: Settings | None = None,
    api_key: str | None = None,
) -> ImageToolsMCPServer:
    """Factory function to create the 302AI image tools MCP server."""
    return ImageToolsMCPServer(settings=settings, api_key=api_key)
