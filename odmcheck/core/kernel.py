"""Kernel version from the ``/proc/version`` banner.

Only ``major.minor`` takes part in the comparison; the micro release and
everything after it (build tag, compiler, date) are ignored.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from odmcheck.core.errors import KernelBannerError, VersionFileError

logger = logging.getLogger(__name__)

PROC_VERSION = Path("/proc/version")

_BANNER_RE = re.compile(r"Linux\s+version\s+(\d+)\.(\d+)\.(\d+)-")


def parse_kernel_banner(line: str) -> str:
    """Return ``"<major>.<minor>"`` from a kernel banner line.

    Raises
    ------
    KernelBannerError
        If the line does not start with ``Linux version N.N.N-``.
    """
    match = _BANNER_RE.match(line)
    if match is None:
        raise KernelBannerError(f"Unrecognized kernel banner: {line.strip()!r}")
    major, minor, micro = (int(group) for group in match.groups())
    logger.debug("Parsed version = %d.%d.%d", major, minor, micro)
    return f"{major}.{minor}"


def read_kernel_version(path: Path | str = PROC_VERSION) -> str:
    """Read the first line of *path* and parse the kernel version from it.

    Raises
    ------
    VersionFileError
        If *path* cannot be opened.
    KernelBannerError
        If the banner is not in the expected format.
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8", errors="replace") as fh:
            first_line = fh.readline()
    except OSError as exc:
        logger.error("Failed to open %s", path)
        raise VersionFileError(path, exc.strerror or str(exc)) from exc

    return parse_kernel_banner(first_line)
