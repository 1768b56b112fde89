"""Version descriptor parsing: the ODM partition's ``key = value`` file.

The descriptor declares which system build the ODM image was made for::

    ro.build.version = 9
    ro.vendor.version = R1
    ro.kernel.version = 4.9
    ro.platform.version = sdm660

Parsing is lenient: lines without ``=``, blank tokens and unknown tags are
skipped.  Whether the result is complete is for the caller to decide.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path

from odmcheck.core.errors import VersionFileError
from odmcheck.models.versions import (
    FIELD_ORDER,
    PROPERTY_VALUE_MAX,
    TAG_FIELDS,
    LengthPolicy,
    VersionRecord,
    bound_value,
    clip_bytes,
    until_nul,
)

logger = logging.getLogger(__name__)

# Lines are read through a 256-byte buffer; bytes past it are dropped.
MAX_LINE_LENGTH = 255


def parse_line(line: str) -> tuple[str, str] | None:
    """Split one descriptor line into a trimmed ``(name, value)`` pair.

    A NUL ends the line.  Returns ``None`` for lines without ``=`` or with an
    empty name or value.
    """
    name, sep, value = until_nul(line).partition("=")
    if not sep:
        return None
    name = name.strip()
    value = value.strip()
    if not name or not value:
        return None
    return name, value


def parse_version_text(
    lines: list[str] | str,
    *,
    max_value_length: int = PROPERTY_VALUE_MAX - 1,
    length_policy: LengthPolicy = LengthPolicy.WARN,
) -> VersionRecord:
    """Build a ``VersionRecord`` from descriptor lines.

    A repeated tag overwrites the earlier value.  Text is split into lines
    the same way a file opened in text mode is.
    """
    if isinstance(lines, str):
        lines = io.StringIO(lines, newline=None).readlines()

    fields: dict[str, str] = {}
    for raw_line in lines:
        pair = parse_line(clip_bytes(raw_line, MAX_LINE_LENGTH))
        if pair is None:
            continue
        name, value = pair
        field = TAG_FIELDS.get(name)
        if field is None:
            continue
        fields[field] = bound_value(field, value, max_value_length, length_policy)
        logger.debug("%s: %s", field, fields[field])

    return VersionRecord(**fields)


def parse_version_file(
    path: Path | str,
    *,
    max_value_length: int = PROPERTY_VALUE_MAX - 1,
    length_policy: LengthPolicy = LengthPolicy.WARN,
) -> VersionRecord:
    """Parse the descriptor file at *path*.

    Raises
    ------
    VersionFileError
        If the file cannot be opened or read.
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8", errors="surrogateescape") as fh:
            lines = fh.readlines()
    except OSError as exc:
        logger.warning("Failed to open version prop file: %s", path)
        raise VersionFileError(path, exc.strerror or str(exc)) from exc

    return parse_version_text(
        lines,
        max_value_length=max_value_length,
        length_policy=length_policy,
    )


def write_version_file(record: VersionRecord, path: Path | str) -> Path:
    """Write *record* as a descriptor file that parses back to the same record."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        record.to_descriptor(), encoding="utf-8", errors="surrogateescape"
    )
    logger.info(
        "Wrote %s (%s)",
        path,
        ", ".join(f"{name}={getattr(record, name)}" for name in FIELD_ORDER),
    )
    return path
