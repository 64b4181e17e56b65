"""Executables the Windows shell recorded as recently run."""

import logging

from app_picker.rules import TARGET_EXTENSION
from app_picker.util import registry

logger = logging.getLogger(__name__)

# Value names under these keys are executable paths
RECENT_EXECUTABLE_KEYS = [
    r"Software\Classes\Local Settings\Software\Microsoft\Windows\Shell\MuiCache",
    r"Software\Microsoft\Windows\ShellNoRoam\MUICache",
    r"Software\Microsoft\Windows NT\CurrentVersion\AppCompatFlags\Compatibility Assistant\Persisted",
    r"Software\Microsoft\Windows NT\CurrentVersion\AppCompatFlags\Compatibility Assistant\Store",
]


def normalize_recent_entry(value_name: str, extension: str = TARGET_EXTENSION) -> str | None:
    """
    Turn a recorded value name into an executable path.

    MuiCache names carry a suffix such as ".FriendlyAppName" after the
    executable path; that suffix is dropped.

    Example:
        >>> normalize_recent_entry("C:\\\\Games\\\\foo.exe.FriendlyAppName")
        'C:\\\\Games\\\\foo.exe'
    """
    marker = value_name.lower().rfind(extension.lower())
    if marker <= 0:
        return None

    end = marker + len(extension)
    if end < len(value_name) and value_name[end] != ".":
        return None
    return value_name[:end]


def collect_recent_executables(extension: str = TARGET_EXTENSION) -> list[str]:
    """
    Collect executable paths from the shell's MuiCache and compatibility stores.

    Returns:
        Unique paths in registry order; empty outside Windows or on errors
    """
    paths: dict[str, None] = {}

    for key_path in RECENT_EXECUTABLE_KEYS:
        for value_name in registry.value_names(registry.HKEY_CURRENT_USER, key_path):
            path = normalize_recent_entry(value_name, extension)
            if path:
                paths.setdefault(path, None)

    logger.debug("Collected %d recently run executables", len(paths))
    return list(paths)
