"""``odmcheck show``: print declared and actual versions side by side.

Read-only: never draws the diagnostic screen and never powers off.
"""

from __future__ import annotations

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from odmcheck.config import CheckSettings
from odmcheck.core.checker import OdmChecker
from odmcheck.core.comparator import compare_versions
from odmcheck.core.errors import OdmCheckError, PropertyReadError
from odmcheck.models.versions import FIELD_ORDER, FIELD_TAGS, VersionRecord

console = Console()


def build_version_table(declared: VersionRecord, actual: VersionRecord) -> Table:
    """Build a Rich Table comparing two records field by field."""
    table = Table(title="ODM versions", header_style="bold cyan")
    table.add_column("Field", style="cyan")
    table.add_column("Tag", style="dim")
    table.add_column("odm_version.prop")
    table.add_column("build.prop")

    for name in FIELD_ORDER:
        left = getattr(declared, name)
        right = getattr(actual, name)
        style = "green" if left and left == right else "red"
        table.add_row(
            name,
            FIELD_TAGS[name],
            f"[{style}]{escape(left) or '-'}[/{style}]",
            f"[{style}]{escape(right) or '-'}[/{style}]",
        )
    return table


def show_cmd() -> None:
    """Show the declared and actual versions without acting on them."""
    checker = OdmChecker(CheckSettings())

    declared = VersionRecord()
    actual = VersionRecord()
    try:
        declared = checker.read_declared()
    except OdmCheckError as exc:
        console.print(f"[bold red]Descriptor:[/bold red] {exc}")
    try:
        actual = checker.read_actual()
    except PropertyReadError as exc:
        actual = exc.partial
        console.print(f"[bold red]Build properties:[/bold red] {exc}")

    console.print(build_version_table(declared, actual))

    if declared.is_complete and actual.is_complete:
        result = compare_versions(
            declared, actual, field_width=checker.settings.field_width
        )
        if result.equal:
            console.print("[green]ODM partition matches the running build.[/green]")
            return
    console.print("[bold red]ODM partition does NOT match the running build.[/bold red]")
    raise typer.Exit(code=1)
