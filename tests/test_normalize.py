"""Tests for projinfo.detect.normalize module."""

from pathlib import Path

import pytest

from projinfo.detect.conventions import Convention, package_manager_for
from projinfo.detect.normalize import normalize, parse_python_major
from projinfo.detect.probe import probe
from projinfo.detect.result import RawProjectData


class TestParsePythonMajor:
    """Tests for parse_python_major()."""

    @pytest.mark.parametrize(
        "constraint,expected",
        [
            (">=3.6", 3),
            (">= 3.8", 3),
            ("~=3.10", 3),
            (">3", 3),
            ("<4", 3),
            (">=2.7, !=3.0.*, <4", 3),
            (">=2.7", 2),
            ("==2.7", 2),
            ("", 2),
        ],
    )
    def test_classification(self, constraint: str, expected: int) -> None:
        """Constraints are classified by their Python 3 bounds."""
        assert parse_python_major(constraint) == expected

    def test_missing_constraint_is_undetermined(self) -> None:
        """No constraint means no guess."""
        assert parse_python_major(None) is None


class TestNormalizePython:
    """Tests for normalization of Python projects."""

    def test_metadata_is_promoted(self) -> None:
        """setup.cfg [metadata] keys move to the top level."""
        raw = RawProjectData(
            convention=Convention.PYTHON,
            parsed_fields={
                "name": "from-py",
                "metadata": {"name": "from-cfg", "version": "2.0"},
            },
        )

        project = normalize(raw, "dirname")

        assert project.fields["name"] == "from-cfg"
        assert project.fields["version"] == "2.0"
        assert "metadata" not in project.fields

    def test_raw_data_is_not_modified(self) -> None:
        """Normalization leaves the probe result untouched."""
        parsed = {"metadata": {"name": "pkg"}}
        raw = RawProjectData(convention=Convention.PYTHON, parsed_fields=parsed)

        normalize(raw, "dirname")

        assert raw.parsed_fields == {"metadata": {"name": "pkg"}}

    @pytest.mark.parametrize(
        "parsed,expected",
        [
            (
                {
                    "metadata": {"home-page": "https://a", "url": "https://b"},
                    "url": "https://c",
                },
                "https://a",
            ),
            ({"metadata": {"url": "https://b"}, "url": "https://c"}, "https://b"),
            ({"home-page": "https://d", "url": "https://c"}, "https://d"),
            ({"url": "https://c"}, "https://c"),
            ({"metadata": {"home-page": ""}, "url": "https://c"}, "https://c"),
            ({"name": "pkg"}, None),
        ],
    )
    def test_homepage_resolution_order(self, parsed: dict, expected: str | None) -> None:
        """The first non-empty homepage candidate wins."""
        raw = RawProjectData(convention=Convention.PYTHON, parsed_fields=parsed)

        assert normalize(raw, "dirname").fields["homepage"] == expected

    def test_python_version_from_options(self) -> None:
        """python_requires in [options] sets the version hint."""
        raw = RawProjectData(
            convention=Convention.PYTHON,
            parsed_fields={"options": {"python_requires": ">=3.6"}},
        )

        assert normalize(raw, "dirname").fields["python_version"] == 3

    def test_python_version_without_options_is_none(self) -> None:
        """No python_requires leaves the hint undetermined."""
        raw = RawProjectData(
            convention=Convention.PYTHON, parsed_fields={"name": "pkg"}
        )

        assert normalize(raw, "dirname").fields["python_version"] is None

    @pytest.mark.parametrize(
        "python_requires,expected", [(">=3.6", 3), ("<4", 3), (">=2.7", 2)]
    )
    def test_setup_cfg_end_to_end(
        self, tmp_path: Path, python_requires: str, expected: int
    ) -> None:
        """A real setup.cfg yields the expected version hint."""
        (tmp_path / "setup.cfg").write_text(
            "[metadata]\nname = pkg\n\n"
            f"[options]\npython_requires = {python_requires}\n"
        )

        project = normalize(probe(tmp_path), tmp_path.name)

        assert project.fields["python_version"] == expected
        assert project.name == "pkg"


class TestNormalizeOtherConventions:
    """Tests for pass-through conventions and defaults."""

    def test_node_fields_pass_through(self) -> None:
        """package.json fields are used unchanged."""
        fields = {
            "name": "pkg",
            "version": "1.0.0",
            "homepage": "https://example.com",
            "scripts": {"test": "jest"},
        }
        raw = RawProjectData(
            convention=Convention.NODE,
            parsed_fields=fields,
            auxiliary_existence={"package.json": True, "yarn.lock": False},
        )

        project = normalize(raw, "dirname")

        assert project.fields == fields
        assert project.scripts == {"test": "jest"}
        assert project.is_valid

    def test_name_falls_back_to_directory(self) -> None:
        """Projects without a name use the directory name."""
        raw = RawProjectData(convention=Convention.PHP, parsed_fields={"version": "1"})

        assert normalize(raw, "my-dir").name == "my-dir"

    def test_no_convention(self) -> None:
        """Without probe data the project is invalid."""
        project = normalize(None, "my-dir")

        assert project.convention is None
        assert project.fields == {"name": "my-dir"}
        assert project.auxiliary_existence == {}
        assert project.is_valid is False
        assert project.package_manager_hint is None

    def test_extension_fallback(self) -> None:
        """A fallback convention makes the project valid with only a name."""
        project = normalize(None, "my-dir", fallback=Convention.NODE)

        assert project.convention is Convention.NODE
        assert project.fields == {"name": "my-dir"}
        assert project.is_valid is True
        assert project.package_manager_hint == "npm"


class TestPackageManagerHint:
    """Tests for the package manager hint."""

    @pytest.mark.parametrize(
        "existence,expected",
        [
            ({"yarn.lock": True, "package-lock.json": False}, "yarn"),
            ({"yarn.lock": False, "package-lock.json": True}, "npm"),
            ({"yarn.lock": False, "package-lock.json": False}, "npm"),
            ({}, "npm"),
        ],
    )
    def test_node_lock_files(self, existence: dict, expected: str) -> None:
        """Node projects pick the package manager from lock files."""
        assert package_manager_for(Convention.NODE, existence) == expected

    @pytest.mark.parametrize("convention", [Convention.PHP, Convention.PYTHON])
    def test_other_conventions_use_identifier(self, convention: Convention) -> None:
        """Other conventions use their own identifier."""
        raw = RawProjectData(convention=convention, parsed_fields={"name": "x"})

        assert normalize(raw, "dirname").package_manager_hint == convention.value
