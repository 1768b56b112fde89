"""odmcheck data models: all Pydantic v2, all frozen (immutable)."""

from odmcheck.models.verdict import (
    EXIT_MISSING_FIELDS,
    EXIT_OK,
    EXIT_READ_FAILURE,
    CheckOutcome,
    CheckReport,
    ComparisonResult,
    Verdict,
    VerdictMode,
)
from odmcheck.models.versions import (
    FIELD_ORDER,
    FIELD_TAGS,
    PROPERTY_VALUE_MAX,
    TAG_FIELDS,
    LengthPolicy,
    VersionRecord,
)

__all__ = [
    # versions
    "VersionRecord",
    "LengthPolicy",
    "FIELD_ORDER",
    "FIELD_TAGS",
    "TAG_FIELDS",
    "PROPERTY_VALUE_MAX",
    # verdict
    "VerdictMode",
    "CheckOutcome",
    "Verdict",
    "ComparisonResult",
    "CheckReport",
    "EXIT_OK",
    "EXIT_READ_FAILURE",
    "EXIT_MISSING_FIELDS",
]
