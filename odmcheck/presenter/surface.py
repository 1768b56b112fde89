"""Display surfaces for the diagnostic screen.

Defines the ``DisplaySurface`` Protocol and the Rich-based surface that
renders onto a console or a tty device.  Layout is passed explicitly as a
``ScreenLayout`` on every ``open`` rather than held in module state.

Colour scheme
-------------
- background : rgb(0,128,255)
- text       : rgb(255,255,255)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict
from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

logger = logging.getLogger(__name__)


class ScreenLayout(BaseModel):
    """Positions and metrics for one diagnostic screen.

    Coordinates are in pixels; ``char_width`` and ``char_height`` map them
    onto character cells for text surfaces.
    """

    model_config = ConfigDict(frozen=True)

    origin_x: int = 50
    origin_y: int = 300
    line_pitch: int = 50
    char_width: int = 10
    char_height: int = 18
    background: tuple[int, int, int] = (0, 128, 255)
    foreground: tuple[int, int, int] = (255, 255, 255)

    @property
    def style(self) -> str:
        fg = "rgb({},{},{})".format(*self.foreground)
        bg = "rgb({},{},{})".format(*self.background)
        return f"{fg} on {bg}"


@runtime_checkable
class DisplaySurface(Protocol):
    """Protocol for a full-screen surface the diagnostic is drawn on."""

    def open(self, layout: ScreenLayout) -> None:
        """Acquire the display."""
        ...

    def clear(self) -> None:
        """Fill the screen with the layout's background colour."""
        ...

    def draw_text(self, text: str, x: int, y: int) -> int:
        """Draw *text* at ``(x, y)``.

        A negative ``x`` centres the text horizontally; a negative ``y``
        places it at the layout's ``origin_y``.  Returns the ``y`` of the
        next line.
        """
        ...

    def flip(self) -> None:
        """Make everything drawn so far visible."""
        ...

    def close(self) -> None:
        """Release the display.  Safe to call more than once."""
        ...


class RichConsoleSurface:
    """Renders the diagnostic as a full-width Rich ``Panel``.

    Parameters
    ----------
    device:
        A tty device to open, such as ``/dev/tty0``.  ``None`` uses *console*
        or stdout.
    console:
        An existing Rich Console to draw on instead of opening *device*.
    """

    def __init__(
        self,
        device: Path | str | None = None,
        console: Console | None = None,
    ) -> None:
        self._device = Path(device) if device else None
        self._external_console = console
        self._fh: IO[str] | None = None
        self.console: Console | None = None
        self._layout = ScreenLayout()
        self._lines: list[tuple[int, int, str]] = []

    def open(self, layout: ScreenLayout) -> None:
        self._layout = layout
        self._lines = []
        if self._external_console is not None:
            self.console = self._external_console
        elif self._device is not None:
            self._fh = self._device.open("w", encoding="utf-8")
            self.console = Console(file=self._fh, force_terminal=True)
        else:
            self.console = Console()

    def clear(self) -> None:
        self._lines = []
        if self.console is not None and self.console.is_terminal:
            self.console.clear()

    def draw_text(self, text: str, x: int, y: int) -> int:
        if y < 0:
            y = self._layout.origin_y
        self._lines.append((y, x, text))
        return y + self._layout.line_pitch

    def flip(self) -> None:
        if self.console is None:
            raise RuntimeError("Surface is not open")
        self.console.print(self.render())

    def render(self) -> Panel:
        """Build the Panel for everything drawn since the last clear."""
        layout = self._layout
        rows: list[Text] = []
        previous_row = 0
        for y, x, text in sorted(self._lines, key=lambda item: item[0]):
            row = y // layout.char_height
            # Keep vertical gaps between lines, one blank row at most.
            if rows and row - previous_row > 1:
                rows.append(Text(""))
            previous_row = row
            if x < 0:
                rows.append(Text(text, justify="center"))
            else:
                rows.append(Text(" " * (x // layout.char_width) + text))

        return Panel(
            Group(*rows),
            style=layout.style,
            border_style=layout.style,
            expand=True,
            padding=(1, 0),
        )

    def close(self) -> None:
        if self._fh is not None:
            try:
                self._fh.close()
            except OSError as exc:
                logger.warning("Could not close display device: %s", exc)
            self._fh = None
        self.console = None
