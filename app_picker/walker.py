"""Directory expansion and the search frontier."""

import logging
import os
from dataclasses import dataclass, field
from typing import Iterable

from app_picker.rules import TARGET_EXTENSION, has_target_extension

logger = logging.getLogger(__name__)


def canonical_path(path: str) -> str:
    """Resolve symlinks and normalize case so aliases compare equal."""
    return os.path.normcase(os.path.realpath(path))


class SearchFrontier:
    """
    Directories waiting to be expanded during one scan.

    Membership is tracked by canonical path for the whole session, so a
    directory reachable through several links (or through a link cycle) is
    only ever enqueued once.
    """

    def __init__(self, directories: Iterable[str] = ()):
        self._pending: set[str] = set()
        self._seen: set[str] = set()
        for directory in directories:
            self.add(directory)

    def add(self, directory: str) -> bool:
        """Enqueue ``directory``; returns False if it was already seen."""
        key = canonical_path(directory)
        if key in self._seen:
            return False
        self._seen.add(key)
        self._pending.add(directory)
        return True

    def pop(self) -> str:
        """Remove and return an arbitrary pending directory."""
        return self._pending.pop()

    def __len__(self) -> int:
        return len(self._pending)

    def __bool__(self) -> bool:
        return bool(self._pending)

    def __contains__(self, directory: str) -> bool:
        return directory in self._pending


@dataclass
class DirectoryListing:
    """Immediate contents of one directory."""

    directory: str
    files: list[str] = field(default_factory=list)
    subdirs: list[str] = field(default_factory=list)
    accessible: bool = True


def list_directory(directory: str, extension: str = TARGET_EXTENSION) -> DirectoryListing:
    """
    List the files matching ``extension`` and the subdirectories of ``directory``.

    Unreadable or vanished directories yield an empty listing marked as
    inaccessible instead of raising. Order follows the platform's listing.
    """
    listing = DirectoryListing(directory=directory)
    try:
        with os.scandir(directory) as entries:
            for entry in entries:
                try:
                    if entry.is_dir():
                        listing.subdirs.append(entry.path)
                    elif has_target_extension(entry.name, extension) and entry.is_file():
                        listing.files.append(entry.path)
                except OSError:
                    # Entry vanished or cannot be stat'ed
                    continue
    except OSError as e:
        logger.debug("Skipping directory %s: %s", directory, e)
        return DirectoryListing(directory=directory, accessible=False)

    return listing
