"""Check runner: the central coordinator for one boot-time check.

The ``OdmChecker`` wires the descriptor parser, the build property reader,
the comparator and the diagnostic presenter into a single linear pass:

    MOUNT_CHECK -> PARSE_DECLARED -> PARSE_ACTUAL -> VALIDATE -> COMPARE
        -> DONE                        (match)
        -> PRESENT [-> SHUTDOWN]       (anything else)

A failing stage skips the stages after it but the run still reaches
PRESENT with whatever was read so far.  Nothing is retried.
"""

from __future__ import annotations

import logging
from enum import Enum

from odmcheck.config import CheckSettings
from odmcheck.core.comparator import compare_versions
from odmcheck.core.descriptor import parse_version_file
from odmcheck.core.errors import (
    MismatchError,
    MissingFieldError,
    OdmCheckError,
    PropertyReadError,
)
from odmcheck.core.mount import is_separately_mounted
from odmcheck.core.properties import (
    PropertyStore,
    make_property_store,
    read_build_properties,
)
from odmcheck.models.verdict import (
    EXIT_OK,
    CheckOutcome,
    CheckReport,
    Verdict,
)
from odmcheck.models.versions import VersionRecord
from odmcheck.presenter.backlight import Backlight
from odmcheck.presenter.diagnostic import DiagnosticPresenter, request_shutdown
from odmcheck.presenter.surface import RichConsoleSurface

logger = logging.getLogger(__name__)


class CheckStage(str, Enum):
    """Stages of a check run, in order."""

    START = "start"
    MOUNT_CHECK = "mount_check"
    PARSE_DECLARED = "parse_declared"
    PARSE_ACTUAL = "parse_actual"
    VALIDATE = "validate"
    COMPARE = "compare"
    PRESENT = "present"
    SHUTDOWN = "shutdown"
    DONE = "done"


class OdmChecker:
    """Runs the ODM version check once.

    Parameters
    ----------
    settings:
        Run configuration.  Uses env-driven defaults if not provided.
    store:
        Property store for build values and the shutdown request.  Built
        from ``settings.property_backend`` if not provided.
    presenter:
        Diagnostic presenter.  Built from settings if not provided.
    """

    def __init__(
        self,
        settings: CheckSettings | None = None,
        *,
        store: PropertyStore | None = None,
        presenter: DiagnosticPresenter | None = None,
    ) -> None:
        self.settings = settings or CheckSettings()
        self.store = store or make_property_store(
            self.settings.property_backend, self.settings.build_prop_paths
        )
        self.presenter = presenter or self._default_presenter()
        self.stage = CheckStage.START
        self.history: list[CheckStage] = [CheckStage.START]

    def _default_presenter(self) -> DiagnosticPresenter:
        return DiagnosticPresenter(
            RichConsoleSurface(self.settings.display_device),
            Backlight(self.settings.backlight_path, self.settings.backlight_on_level),
            dwell_seconds=self.settings.dwell_seconds,
        )

    def _enter(self, stage: CheckStage) -> None:
        logger.debug("%s -> %s", self.stage.value, stage.value)
        self.stage = stage
        self.history.append(stage)

    # ------------------------------------------------------------------
    # Individual reads
    # ------------------------------------------------------------------

    def read_declared(self) -> VersionRecord:
        """Parse the ODM descriptor file."""
        return parse_version_file(
            self.settings.version_file,
            max_value_length=self.settings.max_value_length,
            length_policy=self.settings.length_policy,
        )

    def read_actual(self) -> VersionRecord:
        """Read the build-time values from the property store and kernel."""
        return read_build_properties(
            self.store,
            proc_version=self.settings.proc_version,
            max_value_length=self.settings.max_value_length,
            length_policy=self.settings.length_policy,
        )

    # ------------------------------------------------------------------
    # Full run
    # ------------------------------------------------------------------

    def run(self) -> CheckReport:
        """Execute the check, present on failure and return the report."""
        self._enter(CheckStage.MOUNT_CHECK)
        odm_mounted = is_separately_mounted(
            self.settings.odm_dir, self.settings.root_dir
        )
        logger.info("ODM partition mounted = %s", odm_mounted)

        declared = VersionRecord()
        actual = VersionRecord()
        failure: OdmCheckError | None = None

        try:
            self._enter(CheckStage.PARSE_DECLARED)
            declared = self.read_declared()

            self._enter(CheckStage.PARSE_ACTUAL)
            try:
                actual = self.read_actual()
            except PropertyReadError as exc:
                actual = exc.partial
                raise

            self._enter(CheckStage.VALIDATE)
            missing = declared.missing_fields()
            if missing:
                logger.error("Missing properties: %s", ", ".join(missing))
                raise MissingFieldError(missing)

            self._enter(CheckStage.COMPARE)
            result = compare_versions(
                declared, actual, field_width=self.settings.field_width
            )
            if not result.equal:
                raise MismatchError(result.difference)
        except OdmCheckError as exc:
            failure = exc

        if failure is None:
            self._enter(CheckStage.DONE)
            logger.info("ODM versions match")
            return CheckReport(
                outcome=CheckOutcome.MATCH,
                verdict=Verdict.CONTINUE,
                exit_code=EXIT_OK,
                declared=declared,
                actual=actual,
                odm_mounted=odm_mounted,
            )

        report = self._failure_report(failure, declared, actual, odm_mounted)

        self._enter(CheckStage.PRESENT)
        self.presenter.present(declared, actual)

        if report.verdict == Verdict.HALT:
            self._enter(CheckStage.SHUTDOWN)
            request_shutdown(self.store)
        else:
            self._enter(CheckStage.DONE)
            logger.warning("ODM check failed, continuing boot (warn only)")
        return report

    def _failure_report(
        self,
        failure: OdmCheckError,
        declared: VersionRecord,
        actual: VersionRecord,
        odm_mounted: bool,
    ) -> CheckReport:
        if isinstance(failure, MismatchError):
            outcome = CheckOutcome.MISMATCH
        elif isinstance(failure, MissingFieldError):
            outcome = CheckOutcome.MISSING_FIELDS
        else:
            outcome = CheckOutcome.READ_FAILURE

        return CheckReport(
            outcome=outcome,
            verdict=Verdict.HALT if self.settings.enforcing else Verdict.WARN,
            exit_code=failure.exit_code,
            declared=declared,
            actual=actual,
            difference=getattr(failure, "difference", 0),
            odm_mounted=odm_mounted,
            missing=getattr(failure, "missing", []),
            error=str(failure),
        )
