"""Utility module for app-picker."""

from .registry import HKEY_CURRENT_USER, HKEY_LOCAL_MACHINE, read_string, subkey_names, value_names

__all__ = ["HKEY_CURRENT_USER", "HKEY_LOCAL_MACHINE", "read_string", "subkey_names", "value_names"]
