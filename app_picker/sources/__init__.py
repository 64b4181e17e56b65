"""Provenance probes locating application install roots."""

from app_picker.config import Config
from app_picker.sources.base import SourceProbe, locate_sources
from app_picker.sources.configured import ConfiguredPathsProbe
from app_picker.sources.launchers import EpicGamesProbe, GogGalaxyProbe, OriginProbe, SteamProbe
from app_picker.sources.recent import collect_recent_executables


def default_probes(config: Config | None = None) -> list[SourceProbe]:
    """Build the standard probe list, plus configured extra roots."""
    probes: list[SourceProbe] = [
        SteamProbe(),
        OriginProbe(),
        EpicGamesProbe(),
        GogGalaxyProbe(),
    ]
    if config and config.extra_search_paths:
        probes.append(ConfiguredPathsProbe(config.extra_search_paths))
    return probes


__all__ = [
    "SourceProbe",
    "locate_sources",
    "default_probes",
    "collect_recent_executables",
    "ConfiguredPathsProbe",
    "EpicGamesProbe",
    "GogGalaxyProbe",
    "OriginProbe",
    "SteamProbe",
]
