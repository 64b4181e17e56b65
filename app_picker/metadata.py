"""Build DiscoveredItem records for accepted executables."""

import os
import re

from app_picker.collectors import last_access, read_pe_resources
from app_picker.models import DiscoveredItem

_WHITESPACE = re.compile(r"(\s+)")


def title_case(text: str) -> str:
    """
    Capitalize each whitespace-separated word, leaving all-caps words alone.

    Unlike ``str.title`` letters after apostrophes or digits stay lowercase:
    "don't starve" becomes "Don't Starve", "hl2 GOTY" becomes "Hl2 GOTY".
    """
    words = _WHITESPACE.split(text)
    return "".join(
        word if word.isspace() or word.isupper() else word[:1].upper() + word[1:].lower()
        for word in words
    )


def make_display_name(path: str, description: str | None = None) -> str:
    """
    Derive the name shown for an executable.

    The embedded description wins when present and non-blank; otherwise the
    file name without extension is used, title-cased if it starts with a
    lowercase letter. The file name is always appended in parentheses.

    Example:
        >>> make_display_name("C:/Games/Foo/bar.exe")
        'Bar (bar.exe)'
        >>> make_display_name("C:/Games/HL2/hl2.exe", "Half-Life 2")
        'Half-Life 2 (hl2.exe)'
    """
    filename = os.path.basename(path.replace("\\", "/"))

    name = description.strip() if description else ""
    if not name:
        name = os.path.splitext(filename)[0]
        if name[:1].islower():
            name = title_case(name)

    return f"{name} ({filename})"


def build_item(path: str, extract_icons: bool = True) -> DiscoveredItem:
    """
    Collect metadata for an accepted executable.

    Icon and timestamp failures degrade to placeholders; this never rejects
    the candidate.
    """
    description, icon = read_pe_resources(path, with_icon=extract_icons)

    return DiscoveredItem(
        path=path,
        display_name=make_display_name(path, description),
        icon=icon,
        last_access=last_access(path),
    )
