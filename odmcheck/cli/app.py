"""Main Typer application: imports and registers all CLI commands.

Entry point: ``odmcheck`` (configured via pyproject.toml console_scripts).

Commands: check, show, snapshot.
"""

from __future__ import annotations

import logging

import typer

from odmcheck.cli.commands.check import check_cmd
from odmcheck.cli.commands.show import show_cmd
from odmcheck.cli.commands.snapshot import snapshot_cmd
from odmcheck.config import CheckSettings

app = typer.Typer(
    name="odmcheck",
    help="odmcheck: verify the ODM partition matches the running system build.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def main_callback() -> None:
    """Configure logging from ODMCHECK_LOG_LEVEL before any command runs."""
    level = CheckSettings().log_level.upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="odmcheck: %(levelname)s %(name)s: %(message)s",
    )


# Register subcommands
app.command(name="check", help="Run the boot-time ODM version check.")(check_cmd)
app.command(name="show", help="Show declared and actual versions.")(show_cmd)
app.command(name="snapshot", help="Write a descriptor for the running build.")(snapshot_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
