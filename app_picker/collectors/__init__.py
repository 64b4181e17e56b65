"""Collectors extracting per-executable metadata."""

from .resources import read_pe_resources
from .timestamps import last_access

__all__ = ["read_pe_resources", "last_access"]
