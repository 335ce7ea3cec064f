from __future__ import annotations

import io
import logging
from typing import Generator
from unittest.mock import patch

import pytest

from depspec.utils.logger import (
    ColoredFormatter,
    get_logger,
    level_for_verbosity,
    setup_logging,
)


@pytest.fixture(autouse=True)
def clean_logger_state() -> Generator[None, None, None]:
    """Reset the ``depspec`` logger around each test."""
    root_logger = logging.getLogger("depspec")
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)

    yield

    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)
    root_logger.propagate = True


@pytest.fixture
def captured_stream() -> io.StringIO:
    return io.StringIO()


def _record(level: int = logging.INFO, msg: str = "hello") -> logging.LogRecord:
    return logging.LogRecord("depspec.test", level, __file__, 1, msg, None, None)


@pytest.mark.unit
class TestLevelForVerbosity:
    @pytest.mark.parametrize(
        "verbose, expected",
        [(0, logging.WARNING), (1, logging.INFO), (2, logging.DEBUG), (5, logging.DEBUG)],
    )
    def test_mapping(self, verbose: int, expected: int) -> None:
        assert level_for_verbosity(verbose) == expected


@pytest.mark.unit
class TestColoredFormatter:
    def test_plain_when_color_disabled(self) -> None:
        formatter = ColoredFormatter("%(levelname)s: %(message)s", use_color=False)

        assert formatter.format(_record()) == "INFO: hello"

    def test_colors_level_on_tty(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("CI", raising=False)
        formatter = ColoredFormatter("%(levelname)s: %(message)s")

        with patch.object(ColoredFormatter, "_should_use_color", return_value=True):
            output = formatter.format(_record(logging.ERROR))

        assert output == "\033[31mERROR\033[0m: hello"

    def test_restores_level_name(self) -> None:
        formatter = ColoredFormatter("%(levelname)s")
        record = _record(logging.WARNING)

        with patch.object(ColoredFormatter, "_should_use_color", return_value=True):
            formatter.format(record)

        assert record.levelname == "WARNING"

    def test_no_color_env_disables_color(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NO_COLOR", "1")

        assert ColoredFormatter._should_use_color() is False


@pytest.mark.unit
class TestSetupLogging:
    def test_writes_to_stream_at_level(self, captured_stream: io.StringIO) -> None:
        setup_logging(level=logging.INFO, stream=captured_stream)
        logger = get_logger("parser")

        logger.debug("hidden")
        logger.info("visible")

        output = captured_stream.getvalue()
        assert "visible" in output
        assert "hidden" not in output
        assert logging.getLogger("depspec").propagate is False

    def test_verbose_format_includes_logger_name(self, captured_stream: io.StringIO) -> None:
        setup_logging(level=logging.DEBUG, verbose=True, stream=captured_stream)

        get_logger("config").debug("loaded")

        assert "depspec.config" in captured_stream.getvalue()

    def test_repeated_setup_replaces_handler(self, captured_stream: io.StringIO) -> None:
        setup_logging(stream=io.StringIO())
        setup_logging(stream=captured_stream)

        assert len(logging.getLogger("depspec").handlers) == 1

    def test_repeated_setup_applies_new_level(self, captured_stream: io.StringIO) -> None:
        setup_logging(level=logging.DEBUG, stream=captured_stream)
        setup_logging(level=logging.WARNING, stream=captured_stream)

        get_logger("cli").info("quiet")
        get_logger("cli").warning("loud")

        output = captured_stream.getvalue()
        assert "loud" in output
        assert "quiet" not in output


@pytest.mark.unit
class TestGetLogger:
    @pytest.mark.parametrize(
        "name, expected",
        [
            (None, "depspec"),
            ("depspec", "depspec"),
            ("parser", "depspec.parser"),
            ("depspec.core.parser", "depspec.core.parser"),
        ],
    )
    def test_namespacing(self, name, expected: str) -> None:
        assert get_logger(name).name == expected

    def test_unconfigured_logger_has_null_handler(self) -> None:
        logger = get_logger("fresh-module")

        assert any(isinstance(h, logging.NullHandler) for h in logger.handlers)
