"""Unit tests for the JSON log formatter."""

from __future__ import annotations

import json
import logging

import pytest

from committer_lookup.logging import JsonFormatter, configure_logging


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="committer_lookup.lookup",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="No committer information available for %s",
        args=("aaa111",),
        exc_info=None,
    )
    record.__dict__.update(extra)
    return record


def test_formatter_emits_message_and_extra() -> None:
    payload = json.loads(JsonFormatter().format(_record(hash1="aaa111", error="boom")))

    assert payload["level"] == "WARNING"
    assert payload["logger"] == "committer_lookup.lookup"
    assert payload["message"] == "No committer information available for aaa111"
    assert payload["extra"] == {"hash1": "aaa111", "error": "boom"}
    assert "exception" not in payload


def test_formatter_omits_empty_extra() -> None:
    payload = json.loads(JsonFormatter().format(_record()))

    assert "extra" not in payload


def test_configure_logging_replaces_handlers(monkeypatch: pytest.MonkeyPatch) -> None:
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [logging.NullHandler()])
    original_level = root.level

    try:
        configure_logging("debug")

        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)
        assert root.level == logging.DEBUG
    finally:
        root.setLevel(original_level)
