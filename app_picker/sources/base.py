"""Provenance probe interface and the source locator."""

import logging
from abc import ABC, abstractmethod
from typing import Iterable

logger = logging.getLogger(__name__)


class SourceProbe(ABC):
    """
    A best-effort source of application install roots.

    Implementations may raise freely; the locator treats any failure as the
    probe contributing nothing.
    """

    name: str = "probe"

    @abstractmethod
    def discover_roots(self) -> set[str]:
        """Return directories that plausibly contain installed applications."""


def locate_sources(probes: Iterable[SourceProbe]) -> set[str]:
    """
    Run every probe independently and union their results.

    Returns:
        Set of root directories; empty if every probe failed or found nothing
    """
    roots: set[str] = set()

    for probe in probes:
        try:
            found = probe.discover_roots()
        except Exception as e:
            logger.debug("Probe %s failed: %s", probe.name, e)
            continue

        logger.debug("Probe %s contributed %d roots", probe.name, len(found))
        roots.update(found)

    return roots
