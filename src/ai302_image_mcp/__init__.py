# ============================================================================
# 302AI IMAGE MCP - Image Tools Server
# ============================================================================
# Copyright 2026 302.AI. All Rights Reserved.
#
# Exposes the 302.AI image tool pack (generation, upscaling, background
# removal, ...) to MCP clients. Tool catalog and execution are remote.
#
# Usage:
#   export 302AI_API_KEY=sk-your_key_here
#   302ai-image-mcp
#   302ai-image-mcp --mode rest --port 9593 --endpoint /rest
#
# Parameters (command line, falling back to environment):
#   --302ai_api_key   API key fixed for the whole process
#   --mode            stdio (default) or rest                   [MODE]
#   --port            REST port (default 9593)                  [PORT]
#   --endpoint        REST path (default /rest)                 [ENDPOINT]
#   --host            REST bind address (default 0.0.0.0)       [HOST]
#
# Environment Variables:
#   302AI_API_KEY - Fallback API key when none is given at start or per request
#   BASE_URL      - Upstream base URL (default https://api.302.ai/mcp)
# ============================================================================

import argparse
import logging
import sys
from typing import Sequence

# Version from package metadata
from importlib.metadata import version as _get_version
__version__ = _get_version("302ai-image-mcp")

# Public API
__all__ = [
    "__version__",
    "main",
    "parse_args",
]

logger = logging.getLogger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="302ai-image-mcp",
        description="302.AI image tools MCP server",
    )
    parser.add_argument("--302ai_api_key", dest="api_key", default=None, help="302.AI API key")
    parser.add_argument("--mode", default=None, help="Transport: stdio (default) or rest")
    parser.add_argument("--port", type=int, default=None, help="REST port (default 9593)")
    parser.add_argument("--endpoint", default=None, help="REST path (default /rest)")
    parser.add_argument("--host", default=None, help="REST bind address (default 0.0.0.0)")
    args, _unknown = parser.parse_known_args(argv)
    return args


def main(argv: Sequence[str] | None = None) -> None:
    """Main entry point - runs the 302AI image MCP server."""
    from pydantic import ValidationError

    from .core import Settings, configure_logging

    args = parse_args(argv)
    overrides = {
        key: value
        for key, value in vars(args).items()
        if key != "api_key" and value is not None
    }

    try:
        settings = Settings(**overrides)
    except ValidationError as e:
        print(f"ERROR: invalid configuration: {e}", file=sys.stderr)
        sys.exit(1)

    configure_logging(settings.log_dir, settings.log_level)

    try:
        from .backend import create_image_server
        server = create_image_server(settings=settings, api_key=args.api_key)
        server.serve()
    except KeyboardInterrupt:
        logger.info("Received SIGINT, shutting down server")
        sys.exit(0)
    except Exception as e:
        logger.error("Server failed to start", extra={"data": {"error": str(e)}}, exc_info=True)
        sys.exit(1)

    logger.info("Server stopped")


if __name__ == "__main__":
    main()
