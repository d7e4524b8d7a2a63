# ============================================================================
# 302AI IMAGE MCP - LOGGING
# ============================================================================
# Copyright 2026 302.AI. All Rights Reserved.
#
# One line per event, appended to <log_dir>/mcp-server.log and mirrored to
# stderr (stdout is reserved for the STDIO transport):
#
#   [2026-01-01T00:00:00.000Z] [INFO] Tool called successfully {"name": "upscale"}
#
# Structured payloads are passed as logger.info(msg, extra={"data": {...}}).
# ============================================================================

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

__all__ = [
    "LOG_FILE_NAME",
    "LineFormatter",
    "configure_logging",
]

LOG_FILE_NAME = "mcp-server.log"
PACKAGE_LOGGER = "ai302_image_mcp"

# Marks handlers installed here so reconfiguration only replaces our own
_HANDLER_FLAG = "_ai302_handler"


class LineFormatter(logging.Formatter):
    """[timestamp] [LEVEL] message {payload}"""

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        return ts.isoformat(timespec="milliseconds").replace("+00:00", "Z")

    def format(self, record: logging.LogRecord) -> str:
        line = f"[{self.formatTime(record)}] [{record.levelname}] {record.getMessage()}"
        data = getattr(record, "data", None)
        if data is not None:
            line = f"{line} {json.dumps(data, default=str, ensure_ascii=False)}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def configure_logging(
    log_dir: Path | str = "logs",
    level: int | str = logging.DEBUG,
) -> logging.Logger:
    """Attach file + stderr handlers to the package logger.

    A log directory that cannot be created only costs the file handler;
    the failure is reported on stderr and console logging continues.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_FLAG, False):
            logger.removeHandler(handler)
            handler.close()

    formatter = LineFormatter()

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    setattr(console, _HANDLER_FLAG, True)
    logger.addHandler(console)

    log_path = Path(log_dir) / LOG_FILE_NAME
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    except OSError as e:
        print(f"Failed to open log file {log_path}: {e}", file=sys.stderr)
    else:
        file_handler.setFormatter(formatter)
        setattr(file_handler, _HANDLER_FLAG, True)
        logger.addHandler(file_handler)

    return logger
