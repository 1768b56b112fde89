"""odmcheck: boot-time ODM partition version check.

Verifies that the version identifiers declared on the ODM partition
(``/odm/odm_version.prop``) match the running system build: Android
release, kernel ``major.minor``, ODM revision and board platform.  A
mismatch is shown on screen and, in enforce mode, powers the device off.
"""

__version__ = "1.0.0"
__description__ = "Boot-time ODM partition version check"

from odmcheck.core.checker import OdmChecker
from odmcheck.models.versions import VersionRecord
from odmcheck.cli.app import app as cli

__all__ = ["OdmChecker", "VersionRecord", "cli", "__version__"]
