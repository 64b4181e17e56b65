"""Install roots declared by game launchers and digital distribution clients."""

import logging
import os
import re
import xml.etree.ElementTree as ET

from app_picker.sources.base import SourceProbe
from app_picker.util import registry

logger = logging.getLogger(__name__)

STEAM_KEY = r"Software\Wow6432Node\Valve\Steam"
GOG_GAMES_KEY = r"Software\Wow6432Node\GOG.com\Games"

_LIBRARY_PATH = re.compile(r'"path"\s+"(.+)"')

# Shorter download folders are likely drive roots; scanning those takes forever
MIN_ORIGIN_PATH_LENGTH = 25


def parse_library_folders(text: str) -> list[str]:
    """Extract library locations from the contents of Steam's libraryfolders.vdf."""
    return [match.group(1).replace("\\\\", "\\") for match in _LIBRARY_PATH.finditer(text)]


def parse_origin_download_dirs(xml_text: str) -> list[str]:
    """
    Extract DownloadInPlaceDir values from Origin's local.xml settings.

    Raises:
        xml.etree.ElementTree.ParseError: If the document is malformed
    """
    root = ET.fromstring(xml_text)
    settings = root if root.tag == "Settings" else root.find("Settings")
    if settings is None:
        return []

    return [
        node.get("value", "")
        for node in settings
        if node.get("key") == "DownloadInPlaceDir" and len(node.get("value", "")) > MIN_ORIGIN_PATH_LENGTH
    ]


class SteamProbe(SourceProbe):
    """Steam's default library plus every additional library folder."""

    name = "steam"

    def discover_roots(self) -> set[str]:
        install_path = registry.read_string(registry.HKEY_LOCAL_MACHINE, STEAM_KEY, "InstallPath")
        if not install_path or not os.path.isdir(install_path):
            return set()

        roots = {os.path.join(install_path, "steamapps", "common")}

        vdf_path = os.path.join(install_path, "config", "libraryfolders.vdf")
        try:
            with open(vdf_path, "r", encoding="utf-8", errors="replace") as f:
                libraries = parse_library_folders(f.read())
        except OSError as e:
            logger.debug("Cannot read %s: %s", vdf_path, e)
            return roots

        roots.update(os.path.join(library, "steamapps", "common") for library in libraries)
        return roots


class OriginProbe(SourceProbe):
    """Download folders configured in the Origin client."""

    name = "origin"

    def __init__(self, config_path: str | None = None):
        if config_path is None and os.environ.get("APPDATA"):
            config_path = os.path.join(os.environ["APPDATA"], "Origin", "local.xml")
        self.config_path = config_path

    def discover_roots(self) -> set[str]:
        if not self.config_path or not os.path.isfile(self.config_path):
            return set()

        with open(self.config_path, "r", encoding="utf-8", errors="replace") as f:
            return set(parse_origin_download_dirs(f.read()))


class EpicGamesProbe(SourceProbe):
    """Default Epic Games Launcher install location."""

    name = "epic"

    def __init__(self, program_files: str | None = None):
        self.program_files = program_files if program_files is not None else os.environ.get("ProgramFiles", "")

    def discover_roots(self) -> set[str]:
        if not self.program_files:
            return set()

        install_path = os.path.join(self.program_files, "Epic Games")
        return {install_path} if os.path.isdir(install_path) else set()


class GogGalaxyProbe(SourceProbe):
    """Per-title install directories registered by GOG Galaxy."""

    name = "gog"

    def discover_roots(self) -> set[str]:
        roots = set()
        for game in registry.subkey_names(registry.HKEY_LOCAL_MACHINE, GOG_GAMES_KEY):
            game_dir = registry.read_string(registry.HKEY_LOCAL_MACHINE, f"{GOG_GAMES_KEY}\\{game}", "path")
            if game_dir and os.path.isdir(game_dir):
                roots.add(game_dir)
        return roots
