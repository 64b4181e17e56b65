"""User-configured search roots."""

import os
from typing import Iterable

from app_picker.sources.base import SourceProbe


class ConfiguredPathsProbe(SourceProbe):
    """Extra directories from the config file or the command line."""

    name = "configured"

    def __init__(self, paths: Iterable[str]):
        self.paths = list(paths)

    def discover_roots(self) -> set[str]:
        roots = set()
        for path in self.paths:
            expanded = os.path.abspath(os.path.expandvars(os.path.expanduser(path)))
            if os.path.isdir(expanded):
                roots.add(expanded)
        return roots
