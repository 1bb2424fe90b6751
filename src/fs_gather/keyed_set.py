"""
Insertion-ordered storage of ``FileEntry`` objects, unique by path key.
"""

from __future__ import annotations

import os
from typing import Dict, Iterator, List, Optional, Union

from fs_gather.entries import FileEntry
from fs_gather.utils.paths import path_key


class KeyedFileSet:
    """
    A list of entries plus an index from case-insensitive path key to position.

    Lookups accept a ``FileEntry``, a path (``str`` / ``os.PathLike``) or an
    integer position. There is no removal API.
    """

    def __init__(self) -> None:
        self._items: List[FileEntry] = []
        self._index: Dict[str, int] = {}

    def add(self, entry: FileEntry) -> bool:
        """Append ``entry`` unless its key is already present. Returns True if added."""
        key = entry.key
        if key in self._index:
            return False
        self._index[key] = len(self._items)
        self._items.append(entry)
        return True

    def get(self, path: Union[str, "os.PathLike[str]"]) -> Optional[FileEntry]:
        pos = self._index.get(path_key(path))
        return None if pos is None else self._items[pos]

    def keys(self) -> List[str]:
        return list(self._index)

    def to_list(self) -> List[FileEntry]:
        """Snapshot of all entries in insertion order."""
        return list(self._items)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, FileEntry):
            return item.key in self._index
        if isinstance(item, (str, os.PathLike)):
            return path_key(item) in self._index
        return False

    def __getitem__(self, item: Union[int, str, "os.PathLike[str]"]) -> FileEntry:
        if isinstance(item, int):
            return self._items[item]
        found = self.get(item)
        if found is None:
            raise KeyError(item)
        return found

    def __iter__(self) -> Iterator[FileEntry]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self._items)} entries)"
