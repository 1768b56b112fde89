"""Shared test fixtures for odmcheck."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from odmcheck.config import CheckSettings
from odmcheck.core.properties import MappingPropertyStore
from odmcheck.models.verdict import VerdictMode
from odmcheck.models.versions import VersionRecord
from odmcheck.presenter.diagnostic import DiagnosticPresenter
from odmcheck.presenter.surface import ScreenLayout

KERNEL_BANNER = (
    "Linux version 4.9.117-perf+ (build@host) (gcc version 4.9.x) "
    "#1 SMP PREEMPT Mon Jan 1 00:00:00 UTC 2018\n"
)

BUILD_PROPERTIES = {
    "ro.build.version.release": "9",
    "ro.vendor.version": "R1",
    "ro.board.platform": "sdm660",
}

MATCHING_DESCRIPTOR = (
    "ro.build.version = 9\n"
    "ro.vendor.version = R1\n"
    "ro.kernel.version = 4.9\n"
    "ro.platform.version = sdm660\n"
)


class RecordingSurface:
    """DisplaySurface that keeps everything drawn on it."""

    def __init__(self, fail_on: str | None = None) -> None:
        self.fail_on = fail_on
        self.layout: ScreenLayout | None = None
        self.lines: list[tuple[str, int, int]] = []
        self.calls: list[str] = []
        self.closed = False

    def _call(self, name: str) -> None:
        self.calls.append(name)
        if self.fail_on == name:
            raise OSError(f"{name} failed")

    def open(self, layout: ScreenLayout) -> None:
        self._call("open")
        self.layout = layout

    def clear(self) -> None:
        self._call("clear")

    def draw_text(self, text: str, x: int, y: int) -> int:
        self._call("draw_text")
        self.lines.append((text, x, y))
        return y + (self.layout.line_pitch if self.layout else 50)

    def flip(self) -> None:
        self._call("flip")

    def close(self) -> None:
        self.calls.append("close")
        self.closed = True

    @property
    def texts(self) -> list[str]:
        return [text for text, _, _ in self.lines]


@pytest.fixture
def proc_version(tmp_path: Path) -> Path:
    """A /proc/version stand-in for a 4.9.117 kernel."""
    path = tmp_path / "version"
    path.write_text(KERNEL_BANNER)
    return path


@pytest.fixture
def make_descriptor(tmp_path: Path) -> Callable[[str], Path]:
    """Factory fixture: write descriptor text to a temp odm_version.prop."""

    def _factory(text: str = MATCHING_DESCRIPTOR) -> Path:
        path = tmp_path / "odm" / "odm_version.prop"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text)
        return path

    return _factory


@pytest.fixture
def store() -> MappingPropertyStore:
    """A property store holding build values that match the descriptor."""
    return MappingPropertyStore(BUILD_PROPERTIES)


@pytest.fixture
def make_surface() -> Callable[..., RecordingSurface]:
    """Factory fixture: a RecordingSurface, optionally failing on one call."""
    return RecordingSurface


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def presenter(surface: RecordingSurface) -> DiagnosticPresenter:
    """A presenter with no dwell time and no backlight."""
    return DiagnosticPresenter(surface, None, dwell_seconds=0)


@pytest.fixture
def make_settings(
    tmp_path: Path, proc_version: Path
) -> Callable[..., CheckSettings]:
    """Factory fixture: CheckSettings pointed at temp files."""

    def _factory(**overrides: object) -> CheckSettings:
        defaults: dict[str, object] = {
            "version_file": tmp_path / "odm" / "odm_version.prop",
            "proc_version": proc_version,
            "odm_dir": tmp_path / "odm",
            "root_dir": tmp_path,
            "backlight_path": tmp_path / "no-backlight",
            "dwell_seconds": 0,
            "mode": VerdictMode.WARN_ONLY,
            "property_backend": "file",
            "build_prop_paths": [],
        }
        defaults.update(overrides)
        return CheckSettings(**defaults)

    return _factory


@pytest.fixture
def matching_record() -> VersionRecord:
    return VersionRecord(
        android_version="9",
        kernel_version="4.9",
        odm_revision="R1",
        platform_version="sdm660",
    )
