# ============================================================================
# 302AI IMAGE MCP - CREDENTIAL RESOLUTION
# ============================================================================
# Copyright 2026 302.AI. All Rights Reserved.
#
# Decides which 302.AI API key a request runs with. Priority:
#   1. Key fixed at process start (--302ai_api_key)
#   2. Key carried by the request:
#        - MCP params._meta.auth["302AI_API_KEY"]
#        - HTTP "Authorization: Bearer <key>" or "x-api-key: <key>"
#   3. 302AI_API_KEY environment variable
# ============================================================================

import logging
from typing import Any

from starlette.requests import Request

from .errors import MissingCredentialError

logger = logging.getLogger(__name__)

__all__ = [
    "API_KEY_NAME",
    "extract_api_key_from_meta",
    "extract_api_key_from_request",
    "CredentialResolver",
]

# Name of the key in request auth metadata and in the environment
API_KEY_NAME = "302AI_API_KEY"
BEARER_PREFIX = "Bearer "


def extract_api_key_from_meta(request: Any, key_name: str = API_KEY_NAME) -> str | None:
    """Read params._meta.auth[key_name] from an MCP request object."""
    params = getattr(request, "params", None)
    meta = getattr(params, "meta", None)
    if meta is None:
        return None

    extra = getattr(meta, "model_extra", None) or {}
    auth = extra.get("auth")
    if not isinstance(auth, dict):
        return None

    value = auth.get(key_name)
    return value if isinstance(value, str) and value else None


def extract_api_key_from_request(request: Request | None) -> str | None:
    """Extract API key from HTTP headers.
    Expected format: Authorization: Bearer <key>, or x-api-key: <key>.
    """
    if request is None:
        return None

    auth_header = request.headers.get("authorization", "")
    if auth_header.startswith(BEARER_PREFIX):
        api_key = auth_header[len(BEARER_PREFIX):].strip()
        if api_key:
            return api_key

    return request.headers.get("x-api-key") or None


class CredentialResolver:
    """Resolves the API key for one request.

    static_key and env_key are fixed for the process lifetime; only the
    per-request value varies between calls.
    """

    def __init__(self, static_key: str | None = None, env_key: str | None = None) -> None:
        self.static_key = static_key or None
        self.env_key = env_key or None

    def resolve(self, request: Any = None, http_request: Request | None = None) -> str:
        api_key = self.static_key
        if not api_key and request is not None:
            api_key = extract_api_key_from_meta(request) or extract_api_key_from_request(
                http_request
            )
        if not api_key:
            api_key = self.env_key

        if not api_key:
            logger.error("API key is missing")
            raise MissingCredentialError()
        return api_key
