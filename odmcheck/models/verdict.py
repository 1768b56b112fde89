"""Verdict models: comparison result and the outcome of a whole run."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from odmcheck.models.versions import VersionRecord

EXIT_OK = 0
EXIT_READ_FAILURE = -1
EXIT_MISSING_FIELDS = -2


class VerdictMode(str, Enum):
    """Whether a failed check only warns or also powers the device off."""

    WARN_ONLY = "warn_only"
    ENFORCE = "enforce"


class CheckOutcome(str, Enum):
    """What the check found."""

    MATCH = "match"
    MISMATCH = "mismatch"
    MISSING_FIELDS = "missing_fields"
    READ_FAILURE = "read_failure"


class Verdict(str, Enum):
    """What the device does about it."""

    CONTINUE = "continue"
    WARN = "warn"
    HALT = "halt"


class ComparisonResult(BaseModel):
    """Result of comparing two version records.

    ``difference`` is zero when the records are equal and an opaque
    nonzero value otherwise.  Its sign and magnitude carry no meaning.
    """

    model_config = ConfigDict(frozen=True)

    difference: int = 0

    @property
    def equal(self) -> bool:
        return self.difference == 0


class CheckReport(BaseModel):
    """Everything a single run decided, for logging and display."""

    model_config = ConfigDict(frozen=True)

    outcome: CheckOutcome
    verdict: Verdict
    exit_code: int
    declared: VersionRecord = VersionRecord()
    actual: VersionRecord = VersionRecord()
    difference: int = 0
    odm_mounted: bool = False
    missing: list[str] = []
    error: str | None = None

    @property
    def passed(self) -> bool:
        return self.outcome == CheckOutcome.MATCH
