"""``odmcheck snapshot OUTPUT``: write a descriptor for the running build.

Produces the ``odm_version.prop`` an ODM image needs in order to pass the
check on this system build.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from odmcheck.config import CheckSettings
from odmcheck.core.checker import OdmChecker
from odmcheck.core.descriptor import write_version_file
from odmcheck.core.errors import PropertyReadError

console = Console()


def snapshot_cmd(
    output: Path = typer.Argument(
        ...,
        help="Where to write the descriptor file.",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite OUTPUT if it exists.",
    ),
) -> None:
    """Write the current build's versions as a descriptor file."""
    if output.exists() and not force:
        console.print(f"[bold red]Refusing to overwrite:[/bold red] {output}")
        console.print("[dim]Pass --force to replace it.[/dim]")
        raise typer.Exit(code=1)

    checker = OdmChecker(CheckSettings())
    try:
        record = checker.read_actual()
    except PropertyReadError as exc:
        console.print(f"[bold red]Cannot snapshot:[/bold red] {exc}")
        raise typer.Exit(code=exc.exit_code)

    write_version_file(record, output)
    console.print(f"[green]Wrote[/green] {output}")
    console.print(record.to_descriptor(), end="", highlight=False)
