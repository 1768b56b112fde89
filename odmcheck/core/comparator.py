"""Version comparison: the four fields as one opaque block.

A mismatch in any field is equally fatal, so no field is singled out:
both records are packed into fixed-width NUL-padded blocks and compared
byte for byte.
"""

from __future__ import annotations

import logging

from odmcheck.models.verdict import ComparisonResult
from odmcheck.models.versions import PROPERTY_VALUE_MAX, VersionRecord

logger = logging.getLogger(__name__)


def compare_versions(
    declared: VersionRecord,
    actual: VersionRecord,
    *,
    field_width: int = PROPERTY_VALUE_MAX,
) -> ComparisonResult:
    """Compare *declared* against *actual*.

    ``difference`` is the signed difference of the first unequal byte pair,
    which is never zero for unequal records.
    """
    left = declared.packed(field_width)
    right = actual.packed(field_width)

    difference = 0
    for a, b in zip(left, right):
        if a != b:
            difference = a - b
            break
    else:
        # Identical prefix, different block length: one field overflowed
        # the width on one side only.
        if len(left) != len(right):
            difference = 1 if len(left) > len(right) else -1

    if difference:
        logger.error("Mismatch between versions, difference=%d", difference)
    else:
        logger.debug("ODM partition matches expectations")
    return ComparisonResult(difference=difference)
