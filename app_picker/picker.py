"""Application picker session tying discovery to a selection."""

import logging
import os

from app_picker.catalog import ProgramCatalog
from app_picker.config import Config
from app_picker.engine import DiscoveryWorker
from app_picker.metadata import build_item
from app_picker.models import DiscoveredItem, SortOrder
from app_picker.rules import DEFAULT_RULES, TARGET_EXTENSION, has_target_extension
from app_picker.sources import (
    ConfiguredPathsProbe,
    collect_recent_executables,
    default_probes,
    locate_sources,
)

logger = logging.getLogger(__name__)


def manual_item(path: str, extract_icons: bool = True) -> DiscoveredItem:
    """
    Build an item for a path the user chose explicitly.

    Manual choices bypass the exclusion heuristics but must still be an
    existing executable.

    Raises:
        ValueError: If the file does not exist or has the wrong extension
    """
    resolved = os.path.abspath(os.path.expanduser(path))
    if not has_target_extension(resolved, TARGET_EXTENSION):
        raise ValueError(f"Not an application ({TARGET_EXTENSION}): {resolved}")
    if not os.path.isfile(resolved):
        raise ValueError(f"File not found: {resolved}")
    return build_item(resolved, extract_icons=extract_icons)


class AppPicker:
    """
    One pick session: background discovery plus the user's selection.

    Browsing for a file suspends discovery; choosing a file cancels it for
    good, dismissing the browse dialog resumes it.
    """

    def __init__(self, config: Config | None = None, extra_roots: list[str] | None = None):
        self.config = config or Config()
        self.catalog = ProgramCatalog()
        self.extra_roots = list(extra_roots or [])
        self.selection: DiscoveredItem | None = None
        self._worker: DiscoveryWorker | None = None

    @property
    def worker(self) -> DiscoveryWorker | None:
        return self._worker

    def start(self) -> DiscoveryWorker:
        """Locate install roots and start the discovery worker."""
        if self._worker is not None:
            raise RuntimeError("Discovery already started for this session")

        config = self.config
        probes = default_probes(config)
        if self.extra_roots:
            probes.append(ConfiguredPathsProbe(self.extra_roots))

        roots = locate_sources(probes)
        seed_files = collect_recent_executables() if config.use_recent_executables else []
        logger.info("Searching %d install roots", len(roots))

        self._worker = DiscoveryWorker(
            roots,
            self.catalog,
            seed_files=seed_files,
            rules=DEFAULT_RULES.extended(config.extra_exclude_keywords),
            extract_icons=config.extract_icons,
        )
        self._worker.start()
        return self._worker

    def begin_browse(self) -> None:
        """The user opened a file dialog: pause discovery."""
        if self._worker is not None:
            self._worker.suspend()

    def finish_browse(self, path: str | None) -> DiscoveredItem | None:
        """
        The file dialog closed.

        Args:
            path: Chosen file, or None if the dialog was dismissed

        Returns:
            The selected item when a file was chosen

        Raises:
            ValueError: If the chosen file is not a valid executable
        """
        if path is None:
            if self._worker is not None:
                self._worker.resume()
            return None

        item = manual_item(path, extract_icons=self.config.extract_icons)
        self._stop_worker()
        self.selection = item
        return item

    def select(self, item: DiscoveredItem) -> None:
        self.selection = item

    def visible(self, query: str | None = None, sort: SortOrder | None = None) -> list[DiscoveredItem]:
        return self.catalog.view(query, sort or self.config.sort_order)

    def close(self, timeout: float | None = None) -> bool:
        """Cancel discovery and wait for the worker to stop."""
        return self._stop_worker(timeout)

    def _stop_worker(self, timeout: float | None = None) -> bool:
        if self._worker is None:
            return True
        self._worker.cancel()
        return self._worker.join(timeout)
