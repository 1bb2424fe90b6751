from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from fs_gather.attributes import FileAttributes, attributes_from_stat
from fs_gather.utils.paths import PathSpec, canonical_path, path_key


@dataclass(frozen=True)
class FileEntry:
    """
    One collected file: canonical absolute path plus metadata observed at
    discovery time. The metadata is not refreshed afterwards.
    """

    path: Path
    attributes: FileAttributes = FileAttributes.NONE
    size: Optional[int] = None
    mtime_ns: Optional[int] = None

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def key(self) -> str:
        return path_key(self.path)

    @classmethod
    def from_path(cls, path: PathSpec) -> "FileEntry":
        full = canonical_path(path)
        st = os.stat(full)
        return cls._from_stat(full, st, os.path.islink(full))

    @classmethod
    def from_dir_entry(cls, entry: os.DirEntry) -> "FileEntry":
        full = canonical_path(entry.path)
        return cls._from_stat(full, entry.stat(), entry.is_symlink())

    @classmethod
    def _from_stat(cls, full: Path, st: os.stat_result, is_symlink: bool) -> "FileEntry":
        return cls(
            path=full,
            attributes=attributes_from_stat(full.name, st, is_symlink),
            size=int(st.st_size),
            mtime_ns=int(st.st_mtime_ns),
        )

    def __str__(self) -> str:
        return str(self.path)
