"""Read-only Windows registry helpers that never raise."""

import logging
import sys

logger = logging.getLogger(__name__)

if sys.platform == "win32":
    import winreg

    HKEY_LOCAL_MACHINE = winreg.HKEY_LOCAL_MACHINE
    HKEY_CURRENT_USER = winreg.HKEY_CURRENT_USER
else:
    winreg = None
    HKEY_LOCAL_MACHINE = "HKLM"
    HKEY_CURRENT_USER = "HKCU"


def read_string(hive, key_path: str, value_name: str) -> str | None:
    """
    Read a string value from the registry.

    Args:
        hive: HKEY_LOCAL_MACHINE or HKEY_CURRENT_USER
        key_path: Key below the hive (e.g. r"Software\\Valve\\Steam")
        value_name: Name of the value to read

    Returns:
        Stripped string value, or None if missing, not a string, or unreadable
    """
    if winreg is None:
        return None

    try:
        with winreg.OpenKey(hive, key_path) as key:
            value, reg_type = winreg.QueryValueEx(key, value_name)
    except OSError as e:
        # FileNotFoundError for missing keys is the normal case
        logger.debug("Registry value %s\\%s unavailable: %s", key_path, value_name, e)
        return None

    if reg_type not in (winreg.REG_SZ, winreg.REG_EXPAND_SZ):
        return None
    return str(value).strip()


def subkey_names(hive, key_path: str) -> list[str]:
    """List the names of a key's direct subkeys (empty on any error)."""
    if winreg is None:
        return []

    names = []
    try:
        with winreg.OpenKey(hive, key_path) as key:
            subkey_count = winreg.QueryInfoKey(key)[0]
            for index in range(subkey_count):
                names.append(winreg.EnumKey(key, index))
    except OSError as e:
        logger.debug("Registry key %s unavailable: %s", key_path, e)
    return names


def value_names(hive, key_path: str) -> list[str]:
    """List the names of a key's values (empty on any error)."""
    if winreg is None:
        return []

    names = []
    try:
        with winreg.OpenKey(hive, key_path) as key:
            value_count = winreg.QueryInfoKey(key)[1]
            for index in range(value_count):
                names.append(winreg.EnumValue(key, index)[0])
    except OSError as e:
        logger.debug("Registry key %s unavailable: %s", key_path, e)
    return names
