"""Terminal presentation of a ProjectReport.

Example output:

    acme-tools (2.0.0) <https://example.com/acme-tools>
    Command line tools for Acme
    Last commit: 2024-03-02 10:15:00 +0100 (2 days ago)

    lerna │ bootstrap (4 packages)
     yarn │ run build               │ bin acme                │ doc readme.md
          │     test                │     acme-sync           │     license.md
"""

import json
from typing import Any

import click

from .constants import COLUMN_LABELS, DEFAULT_COLUMN_WIDTH, LINE
from .detect.result import ProjectReport


def str_limit(text: str, length: int, align: str = "left") -> str:
    """Pad or cut text to exactly length characters."""
    if align == "left":
        return text.ljust(length)[:length]
    return text.rjust(length)[:length]


def str_limit_ellipsis(text: str, length: int, align: str = "left") -> str:
    """Cut text to at most length characters, marking cuts with an ellipsis."""
    if len(text) <= length:
        return text
    return str_limit(text, length - 1, align) + "…"


def format_header(report: ProjectReport) -> str:
    """Format name, version, homepage, description and last commit."""
    fields = report.project.fields
    homepage = fields.get("homepage")
    description = fields.get("description")
    commit = report.commit

    parts = [
        click.style(report.project.name, fg="red"),
        click.style(f" ({report.display_version})", fg="magenta"),
    ]
    if homepage:
        parts.append(
            click.style(" <", fg="blue")
            + click.style(str(homepage), fg="blue", underline=True)
            + click.style(">", fg="blue")
        )
    if description:
        parts.append("\n" + click.style(str(description), fg="green"))
    if commit.date_iso:
        parts.append(
            "\n"
            + click.style(
                f"Last commit: {commit.date_iso} ({commit.date_relative})",
                fg="yellow",
            )
        )
    return "".join(parts)


def _column(label: str, items: list[str], width: int) -> list[str]:
    """Lay out one labelled column, one item per line."""
    indent = len(label) + 1
    lines = []
    for index, item in enumerate(items):
        prefix = f"{label} " if index == 0 else " " * indent
        lines.append(str_limit_ellipsis(prefix + item, width))
    return lines


def build_rows(
    report: ProjectReport, width: int = DEFAULT_COLUMN_WIDTH
) -> list[tuple[str, str, list[list[str]]]]:
    """Build table rows as (label, color, columns) tuples.

    The monorepo row is only present for monorepos. The package manager
    row holds the scripts, bin and doc columns that have entries.
    """
    rows: list[tuple[str, str, list[list[str]]]] = []
    monorepo = report.monorepo
    package_manager = report.project.package_manager_hint or ""

    if monorepo and monorepo.is_monorepo:
        label = (
            "lerna" if monorepo.source_kind == "external-manifest" else package_manager
        )
        count = len(monorepo.all_members)
        rows.append((label, "blue", [[f"bootstrap ({count} packages)"]]))

    contents = {
        "scripts": list(report.project.scripts),
        "bins": list(report.bins),
        "docs": list(report.docs),
    }
    columns = [
        _column(COLUMN_LABELS[key], items, width)
        for key, items in contents.items()
        if items
    ]
    rows.append((package_manager, "yellow", columns))
    return rows


def format_table(report: ProjectReport, width: int = DEFAULT_COLUMN_WIDTH) -> list[str]:
    """Format the table rows into output lines."""
    rows = build_rows(report, width)
    short_width = max(len(label) for label, _, _ in rows)
    lines = []

    for label, color, columns in rows:
        height = max((len(column) for column in columns), default=1)
        for index in range(height):
            short = str_limit(label if index == 0 else "", short_width, "right")
            cells = [
                column[index] if index < len(column) else ""
                for column in columns
            ]
            cells = [str_limit(cell, width) for cell in cells]
            line = LINE.join([short, *cells]) if cells else short + LINE.rstrip()
            lines.append(click.style(line.rstrip(), fg=color))
    return lines


def display_report(
    report: ProjectReport,
    *,
    color: bool = True,
    width: int = DEFAULT_COLUMN_WIDTH,
) -> None:
    """Print the header block and table."""
    echo_color = None if color else False
    click.echo("", color=echo_color)
    click.echo(format_header(report), color=echo_color)
    click.echo("", color=echo_color)
    for line in format_table(report, width):
        click.echo(line, color=echo_color)
    click.echo("", color=echo_color)


def report_to_dict(report: ProjectReport) -> dict[str, Any]:
    """Convert a report into JSON-serializable data."""
    project = report.project
    monorepo = report.monorepo
    commit = report.commit
    return {
        "type": project.convention.value if project.convention else None,
        "package_manager": project.package_manager_hint,
        "version": project.fields.get("version"),
        "display_version": report.display_version,
        "config": project.fields,
        "other_files": project.auxiliary_existence,
        "monorepo": (
            {
                "is_monorepo": monorepo.is_monorepo,
                "source_kind": monorepo.source_kind,
                "groups": {
                    group.glob_prefix: list(group.member_dirs)
                    for group in monorepo.groups
                },
                "all_packages": monorepo.all_members,
            }
            if monorepo
            else None
        ),
        "docs": list(report.docs),
        "bins": list(report.bins),
        "commit": {
            "date_iso": commit.date_iso,
            "date_relative": commit.date_relative,
            "hash": commit.hash,
            "branch": commit.branch,
            "commit_count": commit.commit_count,
            "is_initial_commit": commit.is_initial_commit,
            "exists_but_empty": commit.exists_but_empty,
        },
    }


def display_report_json(report: ProjectReport) -> None:
    """Print the report as indented JSON."""
    click.echo(json.dumps(report_to_dict(report), indent=2, default=str))
