"""Main CLI entry point for projinfo."""

import logging
import subprocess
from importlib.metadata import version
from pathlib import Path

import click

from .config import Config, ConfigValidationError, ConfigVersionError
from .constants import CONFIG_FILENAME
from .detect import ProbeMiss, ResolutionError, inspect_project
from .render import display_report, display_report_json

logger = logging.getLogger(__name__)

try:
    from ._build_info import __commit__
except ImportError:
    # Development mode - read from git
    def _get_git_commit() -> str:
        repo_root = Path(__file__).parent.parent.parent
        try:
            result = subprocess.run(
                ["git", "rev-parse", "--short", "HEAD"],
                cwd=repo_root,
                capture_output=True,
                text=True,
                check=True,
            )
            return result.stdout.strip()
        except (subprocess.CalledProcessError, FileNotFoundError):
            return "unknown"

    __commit__ = _get_git_commit()


def _load_config(project_path: Path, config_path: Path | None) -> Config:
    """Load the explicit config file, or the project's .projinfo.yaml if any."""
    if config_path is not None:
        return Config.load(config_path)
    return Config.load_optional(project_path / CONFIG_FILENAME)


@click.command()
@click.version_option(
    version=version("projinfo"),
    prog_name="projinfo",
    message=f"%(prog)s, version %(version)s (commit {__commit__})",
)
@click.argument(
    "path",
    required=False,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.option(
    "--quick",
    is_flag=True,
    help="Skip branch and commit count lookups",
)
@click.option("--json", "as_json", is_flag=True, help="Output the report as JSON")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help=f"Config file to use instead of {CONFIG_FILENAME}",
)
@click.option("--debug", is_flag=True, help="Enable verbose detection output")
def main(
    path: Path | None,
    quick: bool,
    as_json: bool,
    no_color: bool,
    config_path: Path | None,
    debug: bool,
) -> None:
    """projinfo - Show an overview of the project in a directory.

    Prints the project's name, version, description and last commit,
    followed by its scripts, binaries and documentation files. Prints
    nothing if the directory is not a recognized project.
    """
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="[DEBUG] %(name)s: %(message)s",
        )

    project_path = (path or Path.cwd()).resolve()

    try:
        config = _load_config(project_path, config_path)
    except (ConfigVersionError, ConfigValidationError) as e:
        click.echo(f"Invalid config: {e}", err=True)
        raise SystemExit(1) from None

    try:
        report = inspect_project(
            project_path,
            quick=quick or config.quick,
            doc_extensions=config.doc_extensions,
        )
    except ProbeMiss as e:
        logger.debug(str(e))
        return
    except ResolutionError as e:
        click.echo(f"Invalid workspace declaration: {e}", err=True)
        raise SystemExit(1) from None

    if as_json:
        display_report_json(report)
        return

    display_report(
        report,
        color=config.color and not no_color,
        width=config.column_width,
    )


if __name__ == "__main__":
    main()
