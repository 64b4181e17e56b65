"""Version resource strings embedded in PE executables."""

import pefile


def version_string(pe: pefile.PE, key: str) -> str | None:
    """
    Look up a StringFileInfo value (e.g. "FileDescription") in a parsed PE.

    The first non-blank value across all language tables wins.

    Args:
        pe: PE object whose resource directory has been parsed
        key: String table key to look up

    Returns:
        Decoded, stripped value, or None if absent or blank
    """
    wanted = key.encode("utf-8")

    for file_info in getattr(pe, "FileInfo", None) or []:
        # pefile exposes a list of lists (one per VS_VERSIONINFO block)
        entries = file_info if isinstance(file_info, list) else [file_info]
        for entry in entries:
            if getattr(entry, "Key", b"") != b"StringFileInfo":
                continue
            for table in getattr(entry, "StringTable", []):
                raw = table.entries.get(wanted)
                if raw is None:
                    continue
                value = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else str(raw)
                value = value.strip().strip("\x00").strip()
                if value:
                    return value

    return None


def file_description(pe: pefile.PE) -> str | None:
    """Return the executable's FileDescription, falling back to ProductName."""
    return version_string(pe, "FileDescription") or version_string(pe, "ProductName")
