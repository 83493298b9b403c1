"""Integration tests for projinfo.detect.inspect_project().

Each test builds a small project tree and checks the complete report.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from projinfo.detect import ProbeMiss, ResolutionError, detect_project, inspect_project
from projinfo.detect.conventions import Convention
from projinfo.detect.result import CommitInfo


@pytest.fixture(autouse=True)
def no_git():
    """Keep tests independent of git on the host."""
    with patch("projinfo.detect.get_commit", return_value=CommitInfo()) as mock:
        yield mock


class TestInspectProject:
    """End-to-end inspection of project directories."""

    def test_php_project(self, tmp_path: Path) -> None:
        """composer.json alone gives a valid PHP report."""
        composer = {"name": "acme/lib", "version": "1.4.0", "homepage": "https://acme.test"}
        (tmp_path / "composer.json").write_text(json.dumps(composer))

        report = inspect_project(tmp_path)

        assert report.project.convention is Convention.PHP
        assert report.project.fields == composer
        assert report.project.is_valid
        assert report.project.package_manager_hint == "php"
        assert report.monorepo is None

    def test_python_requirements_only(self, tmp_path: Path) -> None:
        """requirements.txt identifies a Python project but is not a doc."""
        (tmp_path / "requirements.txt").write_text("click\n")
        (tmp_path / "README.rst").write_text("")
        (tmp_path / "run.py").write_text("")

        report = inspect_project(tmp_path)

        assert report.project.convention is Convention.PYTHON
        assert report.project.name == tmp_path.name
        assert report.project.fields["python_version"] is None
        assert report.docs == ("README.rst",)
        assert report.bins == ("run.py",)

    def test_python_setup_cfg_and_setup_py(self, tmp_path: Path) -> None:
        """setup.py values override setup.cfg; metadata is lifted."""
        (tmp_path / "setup.cfg").write_text(
            "[metadata]\nname = cfg-name\nurl = https://example.com\n\n"
            "[options]\npython_requires = >=3.8\n"
        )
        (tmp_path / "setup.py").write_text(
            "from setuptools import setup\n\nsetup(\n    version='0.9',\n)\n"
        )

        report = inspect_project(tmp_path)
        fields = report.project.fields

        assert fields["name"] == "cfg-name"
        assert fields["version"] == "0.9"
        assert fields["homepage"] == "https://example.com"
        assert fields["python_version"] == 3
        assert report.display_version == "0.9"
        assert report.bins == ()

    def test_yarn_monorepo(self, tmp_path: Path) -> None:
        """A yarn workspace project reports its packages."""
        (tmp_path / "package.json").write_text(
            json.dumps(
                {
                    "name": "mono",
                    "private": True,
                    "workspaces": ["packages/*"],
                    "bin": {"foo": "./bin/foo.js", "bar": "./bin/bar.js"},
                }
            )
        )
        (tmp_path / "yarn.lock").write_text("")
        for name in ("a", "b", "c"):
            (tmp_path / "packages" / name).mkdir(parents=True)

        report = inspect_project(tmp_path)

        assert report.project.package_manager_hint == "yarn"
        assert report.monorepo is not None
        assert report.monorepo.is_monorepo
        assert report.monorepo.groups[0].glob_prefix == "packages"
        assert report.monorepo.all_members == ["a", "b", "c"]
        assert report.bins == ("foo", "bar")

    def test_lerna_version_fallback(self, tmp_path: Path) -> None:
        """The lerna.json version is shown when package.json has none."""
        (tmp_path / "package.json").write_text('{"name": "mono"}')
        (tmp_path / "lerna.json").write_text('{"version": "3.0.0", "packages": []}')

        report = inspect_project(tmp_path)

        assert report.display_version == "3.0.0"
        assert report.monorepo is not None
        assert report.monorepo.source_kind == "external-manifest"

    def test_extension_fallback(self, tmp_path: Path) -> None:
        """Without manifests, subdirectory sources decide the convention."""
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "index.js").write_text("")

        report = inspect_project(tmp_path)

        assert report.project.convention is Convention.NODE
        assert report.project.fields == {"name": tmp_path.name}
        assert report.project.package_manager_hint == "npm"

    def test_empty_directory_raises_probe_miss(self, tmp_path: Path) -> None:
        """An empty directory is not a project."""
        with pytest.raises(ProbeMiss):
            inspect_project(tmp_path)

    def test_empty_directory_detect_project(self, tmp_path: Path) -> None:
        """detect_project reports an invalid project instead of raising."""
        project = detect_project(tmp_path)

        assert project.is_valid is False
        assert project.convention is None
        assert project.name == tmp_path.name

    def test_broken_workspace_raises(self, tmp_path: Path) -> None:
        """Missing workspace directories propagate ResolutionError."""
        (tmp_path / "package.json").write_text(
            json.dumps({"name": "mono", "workspaces": ["missing/*"]})
        )

        with pytest.raises(ResolutionError):
            inspect_project(tmp_path)

    def test_quick_is_passed_to_git(self, tmp_path: Path, no_git) -> None:
        """quick controls the git lookups."""
        (tmp_path / "package.json").write_text('{"name": "x"}')

        inspect_project(tmp_path, quick=True)

        no_git.assert_called_once_with(tmp_path.resolve(), quick=True)

    def test_relative_path_uses_directory_name(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A relative path falls back to the real directory name."""
        (tmp_path / "yarn.lock").write_text("")
        monkeypatch.chdir(tmp_path)

        report = inspect_project(Path("."))

        assert report.project.name == tmp_path.resolve().name

    def test_detect_project_relative_path(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """detect_project resolves relative paths before naming the project."""
        (tmp_path / "requirements.txt").write_text("")
        monkeypatch.chdir(tmp_path)

        project = detect_project(Path("."))

        assert project.name == tmp_path.resolve().name
