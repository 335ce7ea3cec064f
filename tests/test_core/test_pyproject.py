"""Unit tests for depspec.core.pyproject."""

from __future__ import annotations

import pytest

from depspec.core.pyproject import Project, PyProjectToml
from depspec.exceptions import ManifestError


@pytest.mark.unit
class TestPyProjectToml:
    def test_full_project_table(self) -> None:
        manifest = PyProjectToml.from_string(
            """
            [project]
            name = "my-app"
            dependencies = ["flask>=2", "requests"]

            [project.optional-dependencies]
            dev = ["pytest"]
            docs = ["sphinx", "furo"]
            """
        )

        assert manifest.project == Project(
            name="my-app",
            dependencies=["flask>=2", "requests"],
            optional_dependencies={"dev": ["pytest"], "docs": ["sphinx", "furo"]},
        )

    def test_optional_groups_keep_table_order(self) -> None:
        manifest = PyProjectToml.from_string(
            '[project]\nname = "x"\n'
            "[project.optional-dependencies]\n"
            'zeta = ["a"]\nalpha = ["b"]\nmid = ["c"]\n'
        )

        assert list(manifest.project.optional_dependencies) == ["zeta", "alpha", "mid"]

    def test_missing_project_table(self) -> None:
        manifest = PyProjectToml.from_string('[tool.black]\nline-length = 88\n')

        assert manifest.project is None

    def test_empty_document(self) -> None:
        assert PyProjectToml.from_string("").project is None

    def test_absent_lists_stay_none(self) -> None:
        manifest = PyProjectToml.from_string('[project]\nname = "x"\n')

        assert manifest.project.dependencies is None
        assert manifest.project.optional_dependencies is None

    def test_invalid_toml(self) -> None:
        with pytest.raises(ManifestError) as exc_info:
            PyProjectToml.from_string("[project\nname = ", "some/pyproject.toml")

        assert exc_info.value.file_path == "some/pyproject.toml"
        assert "some/pyproject.toml" in str(exc_info.value)

    @pytest.mark.parametrize(
        "document, fragment",
        [
            ('project = "flat"\n', "`project` must be a table"),
            ("[project]\nversion = '1.0'\n", "`project.name`"),
            ("[project]\nname = 3\n", "`project.name`"),
            ('[project]\nname = "x"\ndependencies = "flask"\n', "project.dependencies"),
            ('[project]\nname = "x"\ndependencies = [1]\n', "project.dependencies"),
            (
                '[project]\nname = "x"\noptional-dependencies = ["dev"]\n',
                "project.optional-dependencies",
            ),
            (
                '[project]\nname = "x"\n[project.optional-dependencies]\ndev = "pytest"\n',
                "project.optional-dependencies.dev",
            ),
        ],
    )
    def test_wrong_shapes(self, document: str, fragment: str) -> None:
        with pytest.raises(ManifestError, match=fragment.replace(".", r"\.")):
            PyProjectToml.from_string(document)

    def test_invalid_name_is_not_checked_here(self) -> None:
        manifest = PyProjectToml.from_string('[project]\nname = "not valid!"\n')

        assert manifest.project.name == "not valid!"
