from __future__ import annotations

from pathlib import Path

import click
import pytest
from click.testing import CliRunner

from depspec.config import DepSpecConfig
from depspec.context import DepSpecContext, pass_context


@pytest.mark.unit
class TestDepSpecContext:
    def test_defaults(self) -> None:
        ctx = DepSpecContext()

        assert ctx.config_path is None
        assert ctx.config == DepSpecConfig()
        assert ctx.verbose == 0
        assert ctx.color is True

    def test_slots_reject_unknown_attributes(self) -> None:
        with pytest.raises(AttributeError):
            DepSpecContext().unknown = 1  # type: ignore[attr-defined]

    def test_configured_path_relative_to_config_file(self, tmp_path: Path) -> None:
        ctx = DepSpecContext()
        ctx.config = DepSpecConfig(source_path=tmp_path / "conf" / "depspec.toml")

        assert ctx.configured_path("constraints.txt") == tmp_path / "conf" / "constraints.txt"

    def test_configured_path_absolute(self, tmp_path: Path) -> None:
        ctx = DepSpecContext()
        ctx.config = DepSpecConfig(source_path=tmp_path / "depspec.toml")
        absolute = tmp_path / "elsewhere" / "c.txt"

        assert ctx.configured_path(str(absolute)) == absolute

    def test_configured_path_without_config_file(self) -> None:
        assert DepSpecContext().configured_path("c.txt") == Path("c.txt")


@pytest.mark.unit
class TestPassContext:
    def test_creates_context_when_missing(self) -> None:
        seen = []

        @click.command()
        @pass_context
        def command(ctx: DepSpecContext) -> None:
            seen.append(ctx)

        result = CliRunner().invoke(command, [])

        assert result.exit_code == 0
        assert isinstance(seen[0], DepSpecContext)
