"""Commit information from git."""

import logging
import subprocess
from pathlib import Path

from .result import CommitInfo

logger = logging.getLogger(__name__)

# git log output: ISO date | relative date | abbreviated hash
_LOG_FORMAT = "format:%ai|%ar|%h"
_NO_COMMITS_MARKER = "does not have any commits yet"
_INITIAL_BRANCHES = ("master", "main")


def _git(project_path: Path, *args: str) -> str:
    """Run a git command in project_path and return its stripped stdout.

    Raises:
        FileNotFoundError: If git is not installed
        subprocess.CalledProcessError: If git exits with an error
    """
    result = subprocess.run(
        ["git", *args],
        cwd=project_path,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


def _git_optional(project_path: Path, *args: str) -> str | None:
    try:
        return _git(project_path, *args) or None
    except (subprocess.CalledProcessError, FileNotFoundError):
        return None


def clean_branch(branch: str) -> str:
    """Strip the `heads/` prefix git describe --all puts on branch names."""
    return branch.removeprefix("heads/")


def get_commit(project_path: Path, *, quick: bool = False) -> CommitInfo:
    """Return information about the latest commit of the repository.

    CONTRACT:
      Inputs:
        - project_path: directory inside the repository
        - quick: skip the branch and commit count lookups

      Outputs:
        - CommitInfo; every field None if git is unavailable or the
          directory is not a repository
        - exists_but_empty=True if the repository has no commits yet

      Invariants:
        - Never raises for git failures
    """
    try:
        log = _git(project_path, "log", "-n", "1", f"--format={_LOG_FORMAT}")
    except FileNotFoundError:
        logger.debug("git is not installed")
        return CommitInfo()
    except subprocess.CalledProcessError as e:
        if _NO_COMMITS_MARKER in (e.stderr or ""):
            logger.debug("Repository has no commits yet")
            return CommitInfo(exists_but_empty=True)
        logger.debug(f"git log failed: {(e.stderr or '').strip()}")
        return CommitInfo()

    parts = log.split("|")
    if len(parts) != 3:
        logger.debug(f"Unexpected git log output: {log!r}")
        return CommitInfo()
    date_iso, date_relative, commit_hash = parts

    if quick:
        return CommitInfo(
            date_iso=date_iso, date_relative=date_relative, hash=commit_hash
        )

    describe = _git_optional(project_path, "describe", "--all")
    branch = clean_branch(describe) if describe else None
    count_str = _git_optional(project_path, "rev-list", "HEAD", "--count")
    commit_count = int(count_str) if count_str and count_str.isdigit() else None

    return CommitInfo(
        date_iso=date_iso,
        date_relative=date_relative,
        hash=commit_hash,
        branch=branch,
        commit_count=commit_count,
        is_initial_commit=branch in _INITIAL_BRANCHES and commit_count == 1,
    )
