"""File timestamp collection."""

import logging
import os
from datetime import datetime

logger = logging.getLogger(__name__)

SORTABLE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def last_access(path: str) -> str:
    """
    Return the file's last access time in a sortable local-time format.

    Returns:
        Timestamp like "2026-02-05T10:30:00", or an empty string when the
        file cannot be stat'ed or the time is out of range.
    """
    try:
        atime = os.stat(path).st_atime
        return datetime.fromtimestamp(atime).strftime(SORTABLE_FORMAT)
    except (OSError, OverflowError, ValueError) as e:
        logger.debug("No access time for %s: %s", path, e)
        return ""
