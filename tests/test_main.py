from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from depspec.__main__ import _print_startup_error, main


@pytest.mark.unit
class TestMain:
    @pytest.mark.parametrize(
        "exit_code",
        [0, 1, 2, 130],
        ids=["success", "error", "usage", "interrupted"],
    )
    def test_returns_cli_exit_code(self, exit_code: int) -> None:
        mock_cli_module = MagicMock()
        mock_cli_module.main = MagicMock(return_value=exit_code)

        with patch.dict("sys.modules", {"depspec.cli": mock_cli_module}):
            result = main()

        assert result == exit_code
        mock_cli_module.main.assert_called_once_with()

    def test_import_error_returns_one(self, capsys: pytest.CaptureFixture) -> None:
        # A None entry in sys.modules makes the import raise ImportError
        with patch.dict("sys.modules", {"depspec.cli": None}):
            result = main()

        assert result == 1
        err = capsys.readouterr().err
        assert "depspec CLI could not be started." in err
        assert "ImportError:" in err


@pytest.mark.unit
class TestPrintStartupError:
    def test_reports_versions(self, capsys: pytest.CaptureFixture) -> None:
        from depspec import __version__

        _print_startup_error(ImportError("No module named 'rich'"))

        err = capsys.readouterr().err
        assert "Python version" in err
        assert f"depspec version: {__version__}" in err
        assert "ImportError: No module named 'rich'" in err

    def test_unknown_version(self, capsys: pytest.CaptureFixture) -> None:
        with patch.dict("sys.modules", {"depspec.__version__": None}):
            _print_startup_error(ImportError("boom"))

        assert "depspec version: <unknown>" in capsys.readouterr().err
