import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

VERSION_FILE = Path(__file__).absolute().parent / "version.txt"


def get_version() -> str:
    """The content of version.txt, falling back to $MNT_VERSION."""
    try:
        return VERSION_FILE.read_text().strip()
    except OSError:
        logger.info(f"Could not read {VERSION_FILE}", exc_info=True)

    # do not fail due to not able to find version
    return os.environ.get("MNT_VERSION", "unknown")


__version__ = get_version()
