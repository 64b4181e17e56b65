"""Discover installed application executables and pick one."""

__version__ = "0.1.0"
