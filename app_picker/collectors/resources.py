"""Single-pass reading of PE resources (version strings and icon)."""

import logging
from contextlib import contextmanager
from typing import Iterator

import pefile

from app_picker.collectors.icon import icon_png
from app_picker.collectors.versioninfo import file_description

logger = logging.getLogger(__name__)

_RESOURCE_DIRECTORY = pefile.DIRECTORY_ENTRY["IMAGE_DIRECTORY_ENTRY_RESOURCE"]


@contextmanager
def open_pe(path: str) -> Iterator[pefile.PE]:
    """
    Open an executable with only its resource directory parsed.

    The underlying file mapping is released on every exit path.

    Raises:
        pefile.PEFormatError: If the file is not a PE image
        OSError: If the file cannot be read
    """
    pe = pefile.PE(path, fast_load=True)
    try:
        pe.parse_data_directories(directories=[_RESOURCE_DIRECTORY])
        yield pe
    finally:
        pe.close()


def read_pe_resources(path: str, with_icon: bool = True) -> tuple[str | None, bytes | None]:
    """
    Read the description and icon of an executable.

    Never raises: a file that is not a valid PE, or whose resources are
    malformed, simply yields None for the affected value.

    Args:
        path: Path to the executable
        with_icon: Skip icon decoding when False

    Returns:
        Tuple of (description, PNG icon bytes)
    """
    description = None
    icon = None

    try:
        with open_pe(path) as pe:
            try:
                description = file_description(pe)
            except Exception as e:
                logger.debug("Unreadable version info in %s: %s", path, e)

            if with_icon:
                try:
                    icon = icon_png(pe)
                except Exception as e:
                    logger.debug("Icon extraction failed for %s: %s", path, e)
    except Exception as e:
        # Not a PE image, truncated file, or vanished since listing
        logger.debug("Cannot parse %s: %s", path, e)

    return description, icon
