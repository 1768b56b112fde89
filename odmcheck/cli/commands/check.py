"""``odmcheck check``: the boot-time ODM version check.

Runs the full check once with settings from ODMCHECK_* environment
variables.  On failure the diagnostic screen is shown and, in enforce mode,
the device is powered off.  The exit code is the run's exit code.
"""

from __future__ import annotations

from typing import Optional

import typer

from odmcheck.config import CheckSettings
from odmcheck.core.checker import OdmChecker
from odmcheck.models.verdict import VerdictMode


def check_cmd(
    mode: Optional[VerdictMode] = typer.Option(
        None,
        "--mode",
        "-m",
        help="Override the configured verdict mode (warn_only or enforce).",
        case_sensitive=False,
    ),
) -> None:
    """Compare the ODM descriptor against the running build."""
    settings = CheckSettings()
    if mode is not None:
        settings = settings.model_copy(update={"mode": mode})

    report = OdmChecker(settings).run()
    raise typer.Exit(code=report.exit_code)
