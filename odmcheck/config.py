"""Runtime configuration: env-driven, resolved once at startup.

Centralized settings using pydantic-settings.  Reads from a .env file and
ODMCHECK_* environment variables, so the boot service can be tuned per
device without rebuilding.  The warn-only/enforce choice lives here as
``mode`` and defaults to the safer ``warn_only``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from odmcheck.models.verdict import VerdictMode
from odmcheck.models.versions import LengthPolicy, PROPERTY_VALUE_MAX


class CheckSettings(BaseSettings):
    """Settings for a single odmcheck run.

    Examples
    --------
    Enforce shutdown on mismatch::

        export ODMCHECK_MODE=enforce

    Read build properties from files instead of ``getprop``::

        export ODMCHECK_PROPERTY_BACKEND=file
        export ODMCHECK_BUILD_PROP_PATHS='["/system/build.prop"]'
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="ODMCHECK_",
        env_file_encoding="utf-8",
    )

    # Input sources
    version_file: Path = Path("/odm/odm_version.prop")
    proc_version: Path = Path("/proc/version")
    odm_dir: Path = Path("/odm")
    root_dir: Path = Path("/")

    # Property store
    property_backend: Literal["android", "file"] = "android"
    build_prop_paths: list[Path] = [
        Path("/system/build.prop"),
        Path("/vendor/build.prop"),
    ]

    # Field bounds
    max_value_length: int = PROPERTY_VALUE_MAX - 1
    length_policy: LengthPolicy = LengthPolicy.WARN

    # Verdict
    mode: VerdictMode = VerdictMode.WARN_ONLY

    # Diagnostic presentation
    backlight_path: Path = Path("/sys/class/leds/lcd-backlight/brightness")
    backlight_on_level: int = 100
    dwell_seconds: float = 10.0
    display_device: Path | None = None  # None writes to stdout

    # Logging
    log_level: str = "INFO"

    @property
    def enforcing(self) -> bool:
        """Whether a failed check powers the device off."""
        return self.mode == VerdictMode.ENFORCE

    @property
    def field_width(self) -> int:
        """Packed width of one field, terminator included."""
        return self.max_value_length + 1
