"""odmcheck diagnostic presenter: the device-facing side of a failed check.

Modules
-------
backlight
    ``Backlight`` switches the panel backlight through sysfs.
surface
    ``DisplaySurface`` protocol, ``ScreenLayout`` and the Rich-based
    ``RichConsoleSurface``.
diagnostic
    ``DiagnosticPresenter`` draws the declared/actual screen and
    ``request_shutdown`` asks init to power off.
"""

from odmcheck.presenter.backlight import Backlight
from odmcheck.presenter.diagnostic import DiagnosticPresenter, request_shutdown
from odmcheck.presenter.surface import DisplaySurface, RichConsoleSurface, ScreenLayout

__all__ = [
    "Backlight",
    "DiagnosticPresenter",
    "DisplaySurface",
    "RichConsoleSurface",
    "ScreenLayout",
    "request_shutdown",
]
