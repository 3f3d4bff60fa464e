"""Tests for logging configuration helpers."""

from __future__ import annotations

import io
import logging
import sys
from typing import Any

import pytest

from gridstage.cli import config as cli_config


def test_setup_logging_calls_basic_config(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure setup_logging configures handlers and logger levels."""
    captured: dict[str, Any] = {}

    def fake_basic_config(**kwargs: Any) -> None:
        captured.update(kwargs)

    monkeypatch.setattr(logging, "basicConfig", fake_basic_config)

    cli_config.setup_logging()

    assert captured["level"] == logging.INFO
    assert captured["style"] == "{"
    assert captured["force"] is True
    assert captured["handlers"][0].stream is sys.stderr
    assert logging.getLogger("requests").level == logging.WARNING
    assert logging.getLogger("urllib3").level == logging.WARNING


def test_setup_logging_accepts_explicit_level_and_stream(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure setup_logging forwards custom level and stream overrides."""
    captured: dict[str, Any] = {}

    def fake_basic_config(**kwargs: Any) -> None:
        captured.update(kwargs)

    monkeypatch.setattr(logging, "basicConfig", fake_basic_config)
    stream = io.StringIO()

    cli_config.setup_logging(level=logging.DEBUG, stream=stream)

    assert captured["level"] == logging.DEBUG
    assert captured["handlers"][0].stream is stream
