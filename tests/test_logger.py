"""Tests for log formatting and the log file."""

import logging
import re

from ai302_image_mcp.core.logger import LOG_FILE_NAME, configure_logging

LINE = re.compile(r"^\[\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z\] \[(\w+)\] (.*)$")


def installed_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [h for h in logger.handlers if getattr(h, "_ai302_handler", False)]


def test_writes_line_with_payload(tmp_path, capsys):
    configure_logging(tmp_path)
    logger = logging.getLogger("ai302_image_mcp.backend.client")

    logger.info("Tool called successfully", extra={"data": {"name": "upscale"}})
    logger.debug("Creating new API instance")

    lines = (tmp_path / LOG_FILE_NAME).read_text().splitlines()
    assert len(lines) == 2
    first = LINE.match(lines[0])
    assert first.group(1) == "INFO"
    assert first.group(2) == 'Tool called successfully {"name": "upscale"}'
    assert LINE.match(lines[1]).group(2) == "Creating new API instance"

    # Mirrored to stderr, never stdout
    captured = capsys.readouterr()
    assert "Tool called successfully" in captured.err
    assert captured.out == ""


def test_appends_across_configurations(tmp_path):
    logger = logging.getLogger("ai302_image_mcp")

    configure_logging(tmp_path)
    logger.error("first")
    configure_logging(tmp_path)
    logger.error("second")

    lines = (tmp_path / LOG_FILE_NAME).read_text().splitlines()
    assert [LINE.match(line).group(2) for line in lines] == ["first", "second"]
    assert len(installed_handlers(logger)) == 2


def test_unusable_log_dir_falls_back_to_console(tmp_path, capsys):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("")

    logger = configure_logging(blocker / "logs")
    logger.info("still logging")

    err = capsys.readouterr().err
    assert "Failed to open log file" in err
    assert "still logging" in err
    assert len(installed_handlers(logger)) == 1


def test_level_filters(tmp_path):
    configure_logging(tmp_path, "INFO")
    logger = logging.getLogger("ai302_image_mcp")

    logger.debug("hidden")
    logger.info("shown")

    content = (tmp_path / LOG_FILE_NAME).read_text()
    assert "hidden" not in content
    assert "shown" in content
