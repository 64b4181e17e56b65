"""Icon extraction from PE executable resources."""

import io
import struct

import pefile
from PIL import Image

ICON_SIZE = 32

RT_ICON = pefile.RESOURCE_TYPE["RT_ICON"]
RT_GROUP_ICON = pefile.RESOURCE_TYPE["RT_GROUP_ICON"]

# GRPICONDIR header is shared with the .ico file header
_DIR_HEADER = struct.Struct("<HHH")
# GRPICONDIRENTRY ends with a resource id, ICONDIRENTRY with a file offset
_GROUP_ENTRY = struct.Struct("<BBBBHHIH")
_FILE_ENTRY = struct.Struct("<BBBBHHII")


def _resources_of_type(pe: pefile.PE, type_id: int) -> dict:
    """Map resource name/id -> raw bytes (first language only)."""
    root = getattr(pe, "DIRECTORY_ENTRY_RESOURCE", None)
    if root is None:
        return {}

    for type_entry in root.entries:
        if type_entry.id != type_id or not hasattr(type_entry, "directory"):
            continue

        resources = {}
        for name_entry in type_entry.directory.entries:
            if not hasattr(name_entry, "directory"):
                continue
            key = name_entry.id if name_entry.id is not None else str(name_entry.name)
            for lang_entry in name_entry.directory.entries:
                data = lang_entry.data.struct
                resources[key] = pe.get_data(data.OffsetToData, data.Size)
                break
        return resources

    return {}


def build_ico(group: bytes, icons: dict) -> bytes | None:
    """
    Reassemble an .ico file from a group icon directory and its images.

    Args:
        group: Raw RT_GROUP_ICON resource
        icons: RT_ICON resources keyed by id

    Returns:
        Bytes of a complete .ico file, or None if no referenced image exists
    """
    _, _, count = _DIR_HEADER.unpack_from(group, 0)

    images = []
    for index in range(count):
        *fields, _, icon_id = _GROUP_ENTRY.unpack_from(group, _DIR_HEADER.size + index * _GROUP_ENTRY.size)
        data = icons.get(icon_id)
        if data:
            images.append((fields, data))

    if not images:
        return None

    offset = _DIR_HEADER.size + _FILE_ENTRY.size * len(images)
    directory = bytearray(_DIR_HEADER.pack(0, 1, len(images)))
    for fields, data in images:
        directory += _FILE_ENTRY.pack(*fields, len(data), offset)
        offset += len(data)

    return bytes(directory) + b"".join(data for _, data in images)


def encode_png(ico: bytes, size: int = ICON_SIZE) -> bytes:
    """Decode an .ico (largest frame), scale it down and encode as PNG."""
    with Image.open(io.BytesIO(ico)) as image:
        image.load()
        frame = image.convert("RGBA")

    frame.thumbnail((size, size))
    with io.BytesIO() as buffer:
        frame.save(buffer, format="PNG")
        return buffer.getvalue()


def icon_png(pe: pefile.PE, size: int = ICON_SIZE) -> bytes | None:
    """
    Extract the first group icon of a parsed PE as PNG bytes.

    Returns:
        PNG bytes, or None if the executable carries no usable icon
    """
    groups = _resources_of_type(pe, RT_GROUP_ICON)
    if not groups:
        return None

    icons = _resources_of_type(pe, RT_ICON)
    for group in groups.values():
        ico = build_ico(group, icons)
        if ico:
            return encode_png(ico, size)

    return None
