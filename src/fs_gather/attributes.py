"""
Filesystem attribute flags and the adapter from host ``stat`` metadata.

The flag values mirror the Windows ``FILE_ATTRIBUTE_*`` bits so that
``st_file_attributes`` can be translated without a lookup table. POSIX hosts
synthesize the subset that has a local meaning (dot-files are hidden, files
without write bits are read-only).
"""

from __future__ import annotations

import collections.abc
import enum
import os
import stat
from typing import Iterable, Optional, Union


class FileAttributes(enum.IntFlag):
    NONE = 0
    READONLY = stat.FILE_ATTRIBUTE_READONLY
    HIDDEN = stat.FILE_ATTRIBUTE_HIDDEN
    SYSTEM = stat.FILE_ATTRIBUTE_SYSTEM
    DIRECTORY = stat.FILE_ATTRIBUTE_DIRECTORY
    ARCHIVE = stat.FILE_ATTRIBUTE_ARCHIVE
    TEMPORARY = stat.FILE_ATTRIBUTE_TEMPORARY
    SPARSE = stat.FILE_ATTRIBUTE_SPARSE_FILE
    REPARSE_POINT = stat.FILE_ATTRIBUTE_REPARSE_POINT
    COMPRESSED = stat.FILE_ATTRIBUTE_COMPRESSED
    OFFLINE = stat.FILE_ATTRIBUTE_OFFLINE
    NOT_CONTENT_INDEXED = stat.FILE_ATTRIBUTE_NOT_CONTENT_INDEXED
    ENCRYPTED = stat.FILE_ATTRIBUTE_ENCRYPTED

    def contains_any(self, other: "FileAttributes") -> bool:
        """True when ``self`` and ``other`` share at least one flag."""
        return bool(self & other)

    def names(self) -> list[str]:
        return [member.name.lower() for member in FileAttributes if member and member in self]


DEFAULT_PROHIBITED = FileAttributes.HIDDEN | FileAttributes.OFFLINE | FileAttributes.SYSTEM

AttributeSpec = Union[int, str, FileAttributes, Iterable[Union[str, int, FileAttributes]], None]

# Windows bits that carry over unchanged.
_WINDOWS_MASK = sum(member.value for member in FileAttributes.__members__.values())


def parse_attributes(value: AttributeSpec) -> FileAttributes:
    """
    Coerce ``value`` into a ``FileAttributes`` set.

    Accepts an int or flag, a single name (``"hidden"``; ``"none"`` for the
    empty set), a ``|`` or ``,`` separated string of names, or an iterable of
    any of those. ``None`` is the empty set.
    """
    if value is None:
        return FileAttributes.NONE
    if isinstance(value, FileAttributes):
        return value
    if isinstance(value, int):
        return FileAttributes(value)
    if isinstance(value, str):
        parts = [p.strip() for p in value.replace("|", ",").split(",")]
        return parse_attributes([p for p in parts if p])
    if not isinstance(value, collections.abc.Iterable):
        raise ValueError(f"Cannot interpret {value!r} as file attributes")

    result = FileAttributes.NONE
    for item in value:
        if isinstance(item, str):
            key = item.strip().upper().replace("-", "_")
            try:
                result |= FileAttributes[key]
            except KeyError:
                raise ValueError(f"Unknown file attribute: {item!r}") from None
        else:
            result |= parse_attributes(item)
    return result


def attributes_from_stat(
    name: str,
    st: os.stat_result,
    is_symlink: bool = False,
) -> FileAttributes:
    """
    Translate host metadata for one filesystem item into ``FileAttributes``.

    Parameters
    ----------
    name       : final path component, used for the dot-file convention.
    st         : ``stat`` result (following symlinks) for the item.
    is_symlink : whether the item itself is a symbolic link.
    """
    attrs = FileAttributes(getattr(st, "st_file_attributes", 0) & _WINDOWS_MASK)

    if stat.S_ISDIR(st.st_mode):
        attrs |= FileAttributes.DIRECTORY
    if is_symlink:
        attrs |= FileAttributes.REPARSE_POINT
    if getattr(st, "st_flags", 0) & stat.UF_HIDDEN:
        attrs |= FileAttributes.HIDDEN
    if name.startswith(".") and name not in (".", ".."):
        attrs |= FileAttributes.HIDDEN
    if not hasattr(st, "st_file_attributes") and not st.st_mode & 0o222:
        attrs |= FileAttributes.READONLY
    return attrs


def read_attributes(path: Union[str, "os.PathLike[str]"]) -> FileAttributes:
    """Stat ``path`` and return its attributes. Raises ``OSError`` if it is missing."""
    path = os.fspath(path)
    st = os.stat(path)
    return attributes_from_stat(os.path.basename(path), st, os.path.islink(path))


def is_allowed(attributes: FileAttributes, prohibited: Optional[FileAttributes]) -> bool:
    """An item is allowed iff it carries none of the ``prohibited`` flags."""
    if not prohibited:
        return True
    return not attributes.contains_any(prohibited)
