"""Panel backlight control through the LED class sysfs node.

All failures are logged and swallowed: the backlight is a courtesy for the
diagnostic screen, never a reason to abort it.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

BACKLIGHT_PATH = Path("/sys/class/leds/lcd-backlight/brightness")
BACKLIGHT_ON_LEVEL = 100


class Backlight:
    """Switches the display backlight on and off.

    Parameters
    ----------
    path:
        The ``brightness`` node to write.
    on_level:
        Brightness written when enabling.
    """

    def __init__(
        self,
        path: Path | str = BACKLIGHT_PATH,
        on_level: int = BACKLIGHT_ON_LEVEL,
    ) -> None:
        self.path = Path(path)
        self.on_level = on_level

    def set_enabled(self, enable: bool) -> bool:
        """Write the on or off level.  Returns True if the write succeeded."""
        if not os.access(self.path, os.R_OK | os.W_OK):
            logger.warning("Backlight control not supported")
            return False

        logger.debug("%s backlight", "Enabling" if enable else "Disabling")
        level = self.on_level if enable else 0
        try:
            with self.path.open("w", encoding="ascii") as fh:
                fh.write(f"{level}\n")
        except OSError as exc:
            logger.warning("Could not write to backlight node: %s", exc)
            return False
        return True

    def enable(self) -> bool:
        return self.set_enabled(True)

    def disable(self) -> bool:
        return self.set_enabled(False)
