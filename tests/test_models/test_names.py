"""Unit tests for depspec.models.names."""

from __future__ import annotations

import pytest

from depspec.exceptions import DepSpecError, InvalidNameError
from depspec.models.names import ExtraName, PackageName


@pytest.mark.unit
class TestPackageName:
    """Tests for PackageName validation and normalization."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("requests", "requests"),
            ("Flask_Login", "flask-login"),
            ("zope.interface", "zope-interface"),
            ("A--B__C..D", "a-b-c-d"),
            ("x", "x"),
        ],
    )
    def test_normalizes_valid_names(self, raw: str, expected: str) -> None:
        assert PackageName(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        ["", "-leading", "trailing-", "has space", "bad!name", "ünïcode"],
    )
    def test_rejects_invalid_names(self, raw: str) -> None:
        with pytest.raises(InvalidNameError) as exc_info:
            PackageName(raw)

        assert exc_info.value.name == raw
        assert exc_info.value.kind == "package"

    def test_error_is_a_depspec_error(self) -> None:
        with pytest.raises(DepSpecError):
            PackageName("not valid")

    def test_behaves_like_a_string(self) -> None:
        name = PackageName("My.Package")

        assert isinstance(name, str)
        assert name in {"my-package"}
        assert hash(name) == hash("my-package")

    def test_constructing_from_instance_returns_same_value(self) -> None:
        name = PackageName("requests")

        assert PackageName(name) is name

    def test_repr_includes_type(self) -> None:
        assert repr(PackageName("Django")) == "PackageName('django')"


@pytest.mark.unit
class TestExtraName:
    """Tests for ExtraName validation and normalization."""

    def test_normalizes(self) -> None:
        assert ExtraName("Dev_Tools") == "dev-tools"

    def test_rejects_invalid(self) -> None:
        with pytest.raises(InvalidNameError) as exc_info:
            ExtraName("dev tools")

        assert exc_info.value.kind == "extra"
        assert "extra" in str(exc_info.value)

    def test_equal_extras_collapse_in_sets(self) -> None:
        assert {ExtraName("Docs"), ExtraName("docs"), ExtraName("DOCS")} == {"docs"}
