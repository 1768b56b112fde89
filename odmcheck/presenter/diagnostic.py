"""Diagnostic presentation and enforced shutdown.

``DiagnosticPresenter.present`` shows the declared and actual versions on a
full-screen surface for a fixed dwell time:

    backlight on -> open surface -> clear -> draw -> flip -> dwell
        -> backlight off -> close surface

The surface is always closed and every failure is logged, never raised:
the device must not crash while reporting a problem.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from odmcheck.core.errors import PropertyWriteError
from odmcheck.core.properties import (
    SYS_PROP_POWERCTL,
    SYS_PROP_POWERCTL_SHUTDOWN,
    PropertyStore,
)
from odmcheck.models.versions import VersionRecord
from odmcheck.presenter.backlight import Backlight
from odmcheck.presenter.surface import DisplaySurface, ScreenLayout

logger = logging.getLogger(__name__)

DECLARED_TITLE = "odm_version.prop"
ACTUAL_TITLE = "build.prop"
DEFAULT_DWELL_SECONDS = 10.0


class DiagnosticPresenter:
    """Shows the version mismatch screen.

    Parameters
    ----------
    surface:
        Where the diagnostic is drawn.
    backlight:
        Backlight to switch on for the dwell time.  ``None`` skips it.
    layout:
        Positions and colours for this screen.
    dwell_seconds:
        How long the screen stays up.
    sleep:
        Called with *dwell_seconds*; replaceable in tests.
    """

    def __init__(
        self,
        surface: DisplaySurface,
        backlight: Backlight | None = None,
        *,
        layout: ScreenLayout | None = None,
        dwell_seconds: float = DEFAULT_DWELL_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.surface = surface
        self.backlight = backlight
        self.layout = layout or ScreenLayout()
        self.dwell_seconds = dwell_seconds
        self._sleep = sleep

    def screen_lines(
        self, declared: VersionRecord, actual: VersionRecord
    ) -> list[str]:
        """Return the four lines of the diagnostic, top to bottom."""
        return [
            DECLARED_TITLE,
            declared.summary(),
            ACTUAL_TITLE,
            actual.summary(),
        ]

    def present(self, declared: VersionRecord, actual: VersionRecord) -> bool:
        """Show the diagnostic.  Returns True if it was drawn."""
        drawn = False
        try:
            self.surface.open(self.layout)
        except Exception as exc:
            logger.warning("Could not initialize display: %s", exc)
            return False

        try:
            if self.backlight is not None:
                self.backlight.enable()
            self.surface.clear()
            y = self.layout.origin_y
            for line in self.screen_lines(declared, actual):
                y = self.surface.draw_text(line, self.layout.origin_x, y)
            self.surface.flip()
            drawn = True
            self._sleep(self.dwell_seconds)
        except Exception as exc:
            logger.warning("Diagnostic screen failed: %s", exc)
        finally:
            if self.backlight is not None:
                self.backlight.disable()
            try:
                self.surface.close()
            except Exception as exc:
                logger.warning("Could not release display: %s", exc)
        return drawn


def request_shutdown(store: PropertyStore) -> bool:
    """Ask init for an orderly power-off.  Returns True if the request was sent."""
    logger.info("Shutting down everything...")
    try:
        store.set(SYS_PROP_POWERCTL, SYS_PROP_POWERCTL_SHUTDOWN)
    except PropertyWriteError as exc:
        logger.error("Shutdown request failed: %s", exc)
        return False
    return True
