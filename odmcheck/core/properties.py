"""Build property access: the system image's side of the comparison.

Defines the ``PropertyStore`` Protocol that property backends must satisfy,
along with the backends odmcheck ships:

1. **AndroidPropertyStore**: ``getprop`` / ``setprop`` on a running device.
2. **BuildPropFileStore**: read-only view over ``build.prop`` style files.
3. **MappingPropertyStore**: in-memory dict, for tests and dry runs.

``read_build_properties`` fills the "actual" ``VersionRecord``.  Every
lookup is attempted; failure is reported after all of them ran, with the
successful fields preserved.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Protocol, runtime_checkable

from odmcheck.core.descriptor import parse_line
from odmcheck.core.errors import OdmCheckError, PropertyReadError, PropertyWriteError
from odmcheck.core.kernel import PROC_VERSION, read_kernel_version
from odmcheck.models.versions import (
    PROPERTY_VALUE_MAX,
    LengthPolicy,
    VersionRecord,
    bound_value,
    until_nul,
)

logger = logging.getLogger(__name__)

# Build property key for each record field filled from the store.
BUILD_PROPERTY_KEYS: dict[str, str] = {
    "android_version": "ro.build.version.release",
    "odm_revision": "ro.vendor.version",
    "platform_version": "ro.board.platform",
}

SYS_PROP_POWERCTL = "sys.powerctl"
SYS_PROP_POWERCTL_SHUTDOWN = "shutdown"


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------


@runtime_checkable
class PropertyStore(Protocol):
    """Protocol for system property backends.

    ``get`` returns an empty string for unset keys rather than raising.
    """

    def get(self, key: str) -> str:
        """Return the value of *key*, or ``""`` if it is not set."""
        ...

    def set(self, key: str, value: str) -> None:
        """Set *key* to *value*.  Raises ``PropertyWriteError`` on failure."""
        ...


# ---------------------------------------------------------------------------
# Backends
# ---------------------------------------------------------------------------


class MappingPropertyStore:
    """Property store backed by a plain dict.

    Writes are kept in ``written`` so callers can inspect them.
    """

    def __init__(self, values: Mapping[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(values or {})
        self.written: dict[str, str] = {}

    def get(self, key: str) -> str:
        return self._values.get(key, "")

    def set(self, key: str, value: str) -> None:
        self._values[key] = value
        self.written[key] = value


class BuildPropFileStore:
    """Read-only store over one or more ``build.prop`` files.

    Files are loaded in order; a key in a later file overrides the same key
    in an earlier one.  Missing files are skipped with a warning.

    Parameters
    ----------
    paths:
        The property files to load.
    """

    def __init__(self, paths: Iterable[Path | str]) -> None:
        self._paths = [Path(p) for p in paths]
        self._values: dict[str, str] = {}
        for path in self._paths:
            self._load(path)

    def _load(self, path: Path) -> None:
        try:
            text = path.read_text(encoding="utf-8", errors="surrogateescape")
        except OSError as exc:
            logger.warning("Skipping property file %s: %s", path, exc)
            return
        for line in text.split("\n"):
            if line.lstrip().startswith("#"):
                continue
            pair = parse_line(line)
            if pair is not None:
                self._values[pair[0]] = pair[1]

    def get(self, key: str) -> str:
        return self._values.get(key, "")

    def set(self, key: str, value: str) -> None:
        raise PropertyWriteError(
            f"Cannot set {key}={value}: build.prop files are read-only"
        )


class AndroidPropertyStore:
    """Property store that shells out to ``getprop`` and ``setprop``."""

    def __init__(
        self,
        getprop: str = "getprop",
        setprop: str = "setprop",
        *,
        timeout: float = 5.0,
    ) -> None:
        self._getprop = getprop
        self._setprop = setprop
        self._timeout = timeout

    def get(self, key: str) -> str:
        try:
            result = subprocess.run(
                [self._getprop, key],
                capture_output=True,
                text=True,
                errors="surrogateescape",
                timeout=self._timeout,
            )
        except (subprocess.SubprocessError, OSError) as exc:
            logger.error("getprop %s failed: %s", key, exc)
            return ""
        if result.returncode != 0:
            return ""
        return result.stdout.rstrip("\n")

    def set(self, key: str, value: str) -> None:
        try:
            result = subprocess.run(
                [self._setprop, key, value],
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except (subprocess.SubprocessError, OSError) as exc:
            raise PropertyWriteError(f"setprop {key} failed: {exc}") from exc
        if result.returncode != 0:
            raise PropertyWriteError(
                f"setprop {key} exited {result.returncode}: {result.stderr.strip()}"
            )


def make_property_store(backend: str, build_prop_paths: Iterable[Path]) -> PropertyStore:
    """Create the property store named by *backend* (``android`` or ``file``)."""
    if backend == "android":
        return AndroidPropertyStore()
    if backend == "file":
        return BuildPropFileStore(build_prop_paths)
    raise ValueError(f"Unknown property backend: {backend!r}")


# ---------------------------------------------------------------------------
# Reading the build-time record
# ---------------------------------------------------------------------------


def read_build_properties(
    store: PropertyStore,
    *,
    proc_version: Path | str = PROC_VERSION,
    max_value_length: int = PROPERTY_VALUE_MAX - 1,
    length_policy: LengthPolicy = LengthPolicy.WARN,
) -> VersionRecord:
    """Read the build-time ``VersionRecord`` from *store* and the kernel banner.

    Raises
    ------
    PropertyReadError
        If any property is empty or the kernel version cannot be read.  The
        error's ``failed`` list names each property key and the banner path
        that could not be read; ``partial`` holds every field that was read.
    """
    fields: dict[str, str] = {}
    failed: list[str] = []

    for field, key in BUILD_PROPERTY_KEYS.items():
        value = until_nul(store.get(key))
        if value:
            value = bound_value(field, value, max_value_length, length_policy)
        if value:
            fields[field] = value
        else:
            logger.error("Property %s is not set", key)
            failed.append(key)

    try:
        fields["kernel_version"] = read_kernel_version(proc_version)
    except OdmCheckError as exc:
        logger.error("Kernel version unavailable: %s", exc)
        failed.append(str(proc_version))

    record = VersionRecord(**fields)
    if failed:
        logger.error("Failed to get all properties")
        raise PropertyReadError(failed, record)
    return record
