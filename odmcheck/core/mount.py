"""Mount probe: is the ODM directory a partition of its own?"""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


def is_separately_mounted(directory: Path | str, root: Path | str = "/") -> bool:
    """Return True if *directory* lives on a different device than *root*.

    Any ``stat`` failure counts as not mounted.
    """
    try:
        dir_dev = os.stat(directory).st_dev
        root_dev = os.stat(root).st_dev
    except OSError as exc:
        logger.debug("Cannot stat %s or %s: %s", directory, root, exc)
        return False
    return dir_dev != root_dev
