"""
Path helpers shared by the collector and the CLI.
"""

from __future__ import annotations

import fnmatch
import os
from pathlib import Path
from typing import Tuple, Union

PathSpec = Union[str, "os.PathLike[str]"]

WILDCARD_CHARS = ("?", "*")


def canonical_path(path: PathSpec) -> Path:
    """
    Return the normalized absolute form of ``path``.

    Symlinks are not resolved: two different links to the same file are two
    different entries, the same way the host shell lists them.
    """
    return Path(os.path.normpath(os.path.abspath(os.fspath(path))))


def path_key(path: PathSpec) -> str:
    """Case-insensitive uniqueness key for ``path``."""
    return str(canonical_path(path)).casefold()


def has_wildcard(name: str) -> bool:
    return any(ch in name for ch in WILDCARD_CHARS)


def split_pattern(spec: PathSpec) -> Tuple[Path, str]:
    """
    Split a path specification into ``(parent_directory, filename_part)``.

    A spec without a directory part (``*.txt``) is anchored at the current
    working directory.
    """
    text = os.fspath(spec)
    head, tail = os.path.split(text)
    return canonical_path(head or os.curdir), tail


def matches_pattern(name: str, pattern: str) -> bool:
    """
    Match a file name against a ``*`` / ``?`` pattern, ignoring case.

    ``*`` on its own matches everything, including names without a dot.
    """
    if pattern in ("*", "*.*"):
        return True
    # "[" is literal in path specs, not a character class
    pattern = pattern.replace("[", "[[]")
    return fnmatch.fnmatchcase(name.casefold(), pattern.casefold())
