"""Unit tests for depspec.models.requirement."""

from __future__ import annotations

import pytest
from packaging.requirements import Requirement

from depspec.models.requirement import RequirementEntry, RequirementsTxt


@pytest.mark.unit
class TestRequirementEntry:
    def test_defaults(self) -> None:
        entry = RequirementEntry(requirement=Requirement("requests"))

        assert entry.name == "requests"
        assert entry.file_path is None
        assert entry.line_number == 0
        assert entry.editable is False
        assert entry.hashes == []
        assert entry.comment is None

    def test_to_string_with_editable_and_hashes(self) -> None:
        entry = RequirementEntry(
            requirement=Requirement("pkg==1.0"),
            editable=True,
            hashes=["sha256:abc"],
        )

        assert entry.to_string() == "-e pkg==1.0 --hash=sha256:abc"
        assert entry.to_string(include_hashes=False) == "-e pkg==1.0"

    def test_str_matches_to_string(self) -> None:
        entry = RequirementEntry(requirement=Requirement("flask>=2.0"))

        assert str(entry) == "flask>=2.0"


@pytest.mark.unit
class TestRequirementsTxt:
    def test_extend_appends_both_lists_in_order(self) -> None:
        first = RequirementsTxt(
            requirements=[RequirementEntry(Requirement("a"))],
            constraints=[Requirement("x<2")],
        )
        second = RequirementsTxt(
            requirements=[RequirementEntry(Requirement("b"))],
            constraints=[Requirement("y<3")],
        )

        first.extend(second)

        assert [e.name for e in first.requirements] == ["a", "b"]
        assert [str(c) for c in first.constraints] == ["x<2", "y<3"]
