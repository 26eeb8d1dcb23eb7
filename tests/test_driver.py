"""Tests for the example driver."""

from __future__ import annotations

import logging

import pytest

import tagcomb.__main__ as driver
from tagcomb.main import ParseError


@pytest.fixture
def no_logging_setup(monkeypatch: pytest.MonkeyPatch) -> None:
    # setup_logging() would remove the caplog handler
    monkeypatch.setattr(driver, "setup_logging", lambda: None)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_run_logs_every_result(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="tagcomb")
    driver.run()
    messages = [r.getMessage() for r in caplog.records if r.name == "tagcomb"]
    assert len(messages) == 6
    assert messages[0].startswith("parse_hello(msg) = ")
    assert "('Hello', 'world')" in messages[3]
    assert "{True}" in messages[4]
    assert "{'false'}" in messages[5]


def test_run_raises_on_failure() -> None:
    with pytest.raises(ParseError):
        driver.run("Goodbye, world!")


def test_main_succeeds(no_logging_setup: None) -> None:
    assert driver.main() == 0


def test_main_reports_failure(no_logging_setup: None, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="tagcomb")
    assert driver.main("Goodbye, world!") == 1
    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert len(errors) == 1
    assert "Expected `Hello`." in errors[0].getMessage()
    assert "At position 0" in errors[0].getMessage()


def test_setup_logging_replaces_handlers(restore_root_logger: logging.Logger) -> None:
    driver.setup_logging()
    driver.setup_logging(logging.INFO)
    assert len(restore_root_logger.handlers) == 1
    assert isinstance(restore_root_logger.handlers[0], logging.StreamHandler)
    assert restore_root_logger.level == logging.INFO
