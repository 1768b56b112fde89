"""Version record model and field bounds."""

from __future__ import annotations

import logging
from enum import Enum

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

# Platform property value limit, terminator included.
PROPERTY_VALUE_MAX = 92

# Descriptor-file tag for each record field, in comparison order.
FIELD_TAGS: dict[str, str] = {
    "android_version": "ro.build.version",
    "kernel_version": "ro.kernel.version",
    "odm_revision": "ro.vendor.version",
    "platform_version": "ro.platform.version",
}

TAG_FIELDS: dict[str, str] = {tag: field for field, tag in FIELD_TAGS.items()}

# Field order used for packing and completeness checks.
FIELD_ORDER: tuple[str, ...] = tuple(FIELD_TAGS)


class LengthPolicy(str, Enum):
    """What to do with a value longer than the field bound."""

    TRUNCATE = "truncate"  # silent, legacy behaviour
    WARN = "warn"
    REJECT = "reject"


class VersionRecord(BaseModel):
    """The four version identifiers that must agree across partitions.

    One record is declared by the ODM partition's descriptor file, the
    other is read from the running system.  Unset fields are empty strings.
    """

    model_config = ConfigDict(frozen=True)

    android_version: str = ""
    kernel_version: str = ""
    odm_revision: str = ""
    platform_version: str = ""

    def missing_fields(self) -> list[str]:
        """Return the names of empty fields, in comparison order."""
        return [name for name in FIELD_ORDER if not getattr(self, name)]

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields()

    def summary(self) -> str:
        """One-line human-readable form shown on the diagnostic screen."""
        return (
            f"Android: {self.android_version} Kernel: {self.kernel_version} "
            f"Platform: {self.platform_version} ODM rev: {self.odm_revision}"
        )

    def to_descriptor(self) -> str:
        """Render the record as descriptor-file lines."""
        return "".join(
            f"{FIELD_TAGS[name]} = {getattr(self, name)}\n" for name in FIELD_ORDER
        )

    def packed(self, field_width: int) -> bytes:
        """Return the record as one block of NUL-padded fixed-width fields."""
        chunks: list[bytes] = []
        for name in FIELD_ORDER:
            raw = encode_value(getattr(self, name))
            width = max(field_width, len(raw) + 1)
            chunks.append(raw.ljust(width, b"\0"))
        return b"".join(chunks)


def encode_value(value: str) -> bytes:
    """Encode a field value back to the bytes it was read from."""
    return value.encode("utf-8", errors="surrogateescape")


def until_nul(value: str) -> str:
    """Return *value* up to its first NUL, the way a C string reads it."""
    return value.partition("\0")[0]


def clip_bytes(value: str, limit: int) -> str:
    """Cut *value* to at most *limit* encoded bytes."""
    return encode_value(value)[:limit].decode("utf-8", errors="surrogateescape")


def bound_value(
    field: str,
    value: str,
    limit: int,
    policy: LengthPolicy = LengthPolicy.WARN,
) -> str:
    """Apply *policy* to a value that may exceed *limit* bytes.

    Returns the value to store.  ``REJECT`` returns an empty string so the
    field is later reported as missing; it never raises.
    """
    raw = encode_value(value)
    if len(raw) <= limit:
        return value

    if policy == LengthPolicy.REJECT:
        logger.warning(
            "Dropping %s: value is %d bytes, limit is %d", field, len(raw), limit
        )
        return ""

    if policy == LengthPolicy.WARN:
        logger.warning(
            "Truncating %s from %d to %d bytes", field, len(raw), limit
        )
    return clip_bytes(value, limit)
