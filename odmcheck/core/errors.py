"""Error hierarchy for the check pipeline.

Every error carries the process exit code the boot service reports when
the run ends on it.  The checker catches these at stage boundaries and
still proceeds to the diagnostic screen.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from odmcheck.models.verdict import EXIT_MISSING_FIELDS, EXIT_READ_FAILURE

if TYPE_CHECKING:
    from odmcheck.models.versions import VersionRecord


class OdmCheckError(RuntimeError):
    """Base class for all odmcheck failures."""

    exit_code: int = EXIT_READ_FAILURE


class VersionFileError(OdmCheckError):
    """Raised when a version source file cannot be opened."""

    def __init__(self, path: object, reason: str = "") -> None:
        self.path = path
        detail = f": {reason}" if reason else ""
        super().__init__(f"Failed to open {path}{detail}")


class KernelBannerError(OdmCheckError):
    """Raised when the kernel banner does not match the expected format."""


class PropertyReadError(OdmCheckError):
    """Raised when one or more build properties could not be read.

    ``partial`` keeps every field that was read successfully.
    """

    def __init__(self, failed: list[str], partial: VersionRecord) -> None:
        self.failed = failed
        self.partial = partial
        super().__init__(f"Failed to get all properties: {', '.join(failed)}")


class PropertyWriteError(OdmCheckError):
    """Raised when a property store cannot accept a write."""


class MissingFieldError(OdmCheckError):
    """Raised when a parsed record is missing required fields."""

    exit_code = EXIT_MISSING_FIELDS

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(f"Missing properties: {', '.join(missing)}")


class MismatchError(OdmCheckError):
    """Raised when declared and actual versions differ."""

    def __init__(self, difference: int) -> None:
        self.difference = difference
        self.exit_code = difference
        super().__init__(f"Mismatch between versions, difference={difference}")
