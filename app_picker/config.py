"""Configuration file management for app-picker."""

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from app_picker.models import SortOrder


@dataclass
class Config:
    """Configuration for application discovery."""

    # Additional directories searched besides the detected install roots
    extra_search_paths: list[str] = field(default_factory=list)

    # Additional case-insensitive keywords that exclude an executable
    extra_exclude_keywords: list[str] = field(default_factory=list)

    # Default listing order (last_access, name, name_desc)
    sort_by: str = "last_access"

    # Seed the scan with executables the shell recently recorded
    use_recent_executables: bool = False

    # Icon extraction is the most expensive per-file step
    extract_icons: bool = True

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not isinstance(self.sort_by, str):
            raise ValueError(f"sort_by must be a string, got {self.sort_by!r}")
        self.sort_by = SortOrder.parse(self.sort_by).value

        # A bare string would otherwise be iterated character by character
        for name in ("extra_search_paths", "extra_exclude_keywords"):
            value = getattr(self, name)
            if not isinstance(value, list):
                raise ValueError(f"{name} must be a list, got {value!r}")

        for path in self.extra_search_paths:
            if not isinstance(path, str) or not path.strip():
                raise ValueError(f"Invalid search path: {path!r}")

        for keyword in self.extra_exclude_keywords:
            if not isinstance(keyword, str) or not keyword.strip():
                raise ValueError(f"Invalid exclude keyword: {keyword!r}")

    @property
    def sort_order(self) -> SortOrder:
        return SortOrder(self.sort_by)


DEFAULT_CONFIG_PATHS = [
    Path.home() / ".app-picker.yaml",
    Path.home() / ".app-picker.yml",
    Path.home() / ".config" / "app-picker" / "config.yaml",
    Path.home() / ".config" / "app-picker" / "config.yml",
]


def load_config(config_path: Path | str | None = None) -> Config:
    """
    Load configuration from file.

    Args:
        config_path: Path to config file. If None, checks default locations:
            1. ~/.app-picker.yaml
            2. ~/.app-picker.yml
            3. ~/.config/app-picker/config.yaml
            4. ~/.config/app-picker/config.yml

    Returns:
        Config object with loaded settings (or defaults if no config found)

    Raises:
        FileNotFoundError: If an explicit config path does not exist
        ValueError: If the file cannot be parsed or holds invalid settings
    """
    if config_path:
        config_file = Path(config_path).expanduser()
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_file}")
    else:
        config_file = next((path for path in DEFAULT_CONFIG_PATHS if path.exists()), None)
        if config_file is None:
            return Config()

    try:
        with open(config_file, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
        return Config(**data)
    except Exception as e:
        raise ValueError(f"Failed to load config from {config_file}: {e}")


def save_example_config(output_path: Path | str) -> None:
    """
    Save an example configuration file with all options documented.

    Args:
        output_path: Where to save the example config
    """
    example = """# app-picker configuration file
# Place at ~/.app-picker.yaml or ~/.config/app-picker/config.yaml

# Directories searched in addition to detected launcher libraries
extra_search_paths:
  - D:\\Games
  # - E:\\SteamLibrary\\steamapps\\common

# Executables whose path contains any of these (case-insensitive) are skipped
extra_exclude_keywords:
  - server
  # - editor

# Listing order: last_access, name, name_desc
sort_by: last_access

# Also offer executables the Windows shell recently recorded (MuiCache)
use_recent_executables: false

# Extract icons from executables (slower on large libraries)
extract_icons: true
"""

    path = Path(output_path).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(example, encoding='utf-8')
