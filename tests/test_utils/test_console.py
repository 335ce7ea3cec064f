from __future__ import annotations

import json
import sys
from typing import Generator
from unittest.mock import patch

import pytest
from rich.console import Console

from depspec.utils import console as console_module
from depspec.utils.console import (
    DEPSPEC_THEME,
    _get_console,
    _should_use_color,
    get_raw_console,
    print_error,
    print_json,
    print_table,
    print_warning,
    reconfigure_console,
)


@pytest.fixture(autouse=True)
def reset_console() -> Generator[None, None, None]:
    reconfigure_console()
    yield
    reconfigure_console()


@pytest.fixture
def plain_console(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Force a colorless console so captured output is plain text."""
    monkeypatch.setenv("NO_COLOR", "1")
    yield


@pytest.mark.unit
class TestConsoleSingleton:
    def test_theme_styles(self) -> None:
        for style in ("error", "warning", "info"):
            assert style in DEPSPEC_THEME.styles

    def test_same_instance_until_reconfigured(self) -> None:
        first = _get_console()

        assert get_raw_console() is first
        reconfigure_console()
        assert _get_console() is not first

    def test_returns_rich_console(self) -> None:
        assert isinstance(get_raw_console(), Console)


@pytest.mark.unit
class TestShouldUseColor:
    def test_no_color(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NO_COLOR", "1")

        assert _should_use_color() is False

    def test_ci(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("CI", "true")

        assert _should_use_color() is False

    def test_tty(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("CI", raising=False)

        with patch.object(sys.stdout, "isatty", return_value=True):
            assert _should_use_color() is True


@pytest.mark.unit
class TestPrinting:
    def test_print_error(self, plain_console: None, capsys: pytest.CaptureFixture) -> None:
        print_error("boom")

        assert "[ERROR] boom" in capsys.readouterr().out

    def test_print_warning(self, plain_console: None, capsys: pytest.CaptureFixture) -> None:
        print_warning("careful")

        assert "[WARNING] careful" in capsys.readouterr().out

    def test_print_table(self, plain_console: None, capsys: pytest.CaptureFixture) -> None:
        print_table(
            [{"Type": "requirement", "Requirement": "flask>=2.0"}],
            headers=["Type", "Requirement"],
            title="Project: demo",
        )

        out = capsys.readouterr().out
        assert "Project: demo" in out
        assert "flask>=2.0" in out
        assert "requirement" in out

    def test_print_table_empty(self, plain_console: None, capsys: pytest.CaptureFixture) -> None:
        print_table([])

        assert capsys.readouterr().out == ""

    def test_print_json_is_parseable(
        self, plain_console: None, capsys: pytest.CaptureFixture
    ) -> None:
        data = {"requirements": ["flask[async]>=2.0"], "project": None}

        print_json(data)

        assert json.loads(capsys.readouterr().out) == data

    def test_module_console_is_reset(self) -> None:
        _get_console()
        reconfigure_console()

        assert console_module._console is None
