"""Thread-safe collection of discovered applications with search and sort."""

import ntpath
import threading
from typing import Sequence

from app_picker.models import DiscoveredItem, SortOrder

# Text shown in an empty search box; never treated as a query
SEARCH_PLACEHOLDER = "Search"


def is_search_query(text: str | None) -> bool:
    """
    Decide whether the search box text should filter the list.

    Rooted paths are manual selections rather than searches.
    """
    if not text or text == SEARCH_PLACEHOLDER:
        return False
    rooted = text.startswith(("/", "\\")) or bool(ntpath.splitdrive(text)[0])
    return not rooted


class ProgramCatalog:
    """
    Result sink receiving batches from a DiscoveryWorker.

    Items are deduplicated by path against everything received so far.
    Batches arrive on the worker thread; reads may happen on any thread.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._items: dict[str, DiscoveredItem] = {}
        self.completed = threading.Event()

    def on_batch_ready(self, items: Sequence[DiscoveredItem]) -> None:
        with self._lock:
            for item in items:
                if item.path not in self._items:
                    self._items[item.path] = item

    def on_completed(self) -> None:
        self.completed.set()

    def wait_completed(self, timeout: float | None = None) -> bool:
        return self.completed.wait(timeout)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __contains__(self, path: str) -> bool:
        with self._lock:
            return path in self._items

    def items(self) -> list[DiscoveredItem]:
        """Snapshot of all items in discovery order."""
        with self._lock:
            return list(self._items.values())

    def view(self, query: str | None = None, sort: SortOrder = SortOrder.LAST_ACCESS) -> list[DiscoveredItem]:
        """
        Filter and sort a snapshot of the catalog.

        Args:
            query: Case-insensitive text matched against path and display name
            sort: Listing order

        Returns:
            New list; the catalog itself is not reordered
        """
        items = self.items()

        if is_search_query(query):
            needle = query.lower()
            items = [
                item for item in items
                if needle in item.path.lower() or needle in item.display_name.lower()
            ]

        if sort == SortOrder.LAST_ACCESS:
            return sorted(items, key=lambda item: item.last_access, reverse=True)
        if sort == SortOrder.NAME_DESC:
            return sorted(items, key=lambda item: item.display_name.lower(), reverse=True)
        return sorted(items, key=lambda item: item.display_name.lower())
