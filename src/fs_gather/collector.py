"""
File gathering: resolve file, directory and wildcard specs into an ordered,
de-duplicated list of ``FileEntry`` objects.

Quick-start::

    from fs_gather import FileCollector

    files = FileCollector("docs", "src/*.py")
    for entry in files:
        print(entry.path)
"""

from __future__ import annotations

import errno
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional, Union

from fs_gather.attributes import AttributeSpec, FileAttributes, is_allowed, parse_attributes, read_attributes
from fs_gather.config import GatherConfig
from fs_gather.entries import FileEntry
from fs_gather.keyed_set import KeyedFileSet
from fs_gather.utils.paths import PathSpec, canonical_path, has_wildcard, matches_pattern, split_pattern

logger = logging.getLogger(__name__)


@dataclass
class FileFoundEvent:
    """
    Passed to file-found handlers just before ``file`` is added.

    Set ``ignore`` to True to keep the file out of the collection. Handlers run
    in registration order and each one sees the flag left by the previous one.
    """

    file: FileEntry
    ignore: bool = False


FileFoundHandler = Callable[["FileCollector", FileFoundEvent], None]


def _raise_walk_error(exc: OSError) -> None:
    raise exc


class FileCollector:
    """
    Gathers files from a mix of file paths, directories and wildcard patterns.

    Every spec passed to the constructor is added immediately, after the
    configuration has been applied. See ``add`` for how a spec is resolved.
    """

    def __init__(
        self,
        *path_specs: PathSpec,
        prohibited_attributes: AttributeSpec = None,
        config: Optional[GatherConfig] = None,
        on_file_found: Optional[FileFoundHandler] = None,
    ) -> None:
        cfg = config or GatherConfig()
        self.recurse: bool = cfg.recurse
        self.ignore_directory_attributes: bool = cfg.ignore_directory_attributes
        self._prohibited = cfg.prohibited_attributes
        if prohibited_attributes is not None:
            self.prohibited_attributes = prohibited_attributes

        self._files = KeyedFileSet()
        self._handlers: List[FileFoundHandler] = []
        if on_file_found is not None:
            self.add_file_found_handler(on_file_found)

        self.add_many(path_specs)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    @property
    def prohibited_attributes(self) -> FileAttributes:
        return self._prohibited

    @prohibited_attributes.setter
    def prohibited_attributes(self, value: AttributeSpec) -> None:
        self._prohibited = parse_attributes(value)

    def add_file_found_handler(self, handler: FileFoundHandler) -> None:
        self._handlers.append(handler)

    def remove_file_found_handler(self, handler: FileFoundHandler) -> None:
        self._handlers.remove(handler)

    # ------------------------------------------------------------------
    # Adding
    # ------------------------------------------------------------------
    def add_many(self, path_specs: Optional[Iterable[PathSpec]]) -> None:
        """
        Add each spec in order. Specs added before a failing one stay in the
        collection.
        """
        if path_specs is None:
            raise ValueError("path_specs must not be None")
        if isinstance(path_specs, (str, os.PathLike)):
            path_specs = [path_specs]
        for spec in path_specs:
            self.add(spec)

    def add(self, path_spec: PathSpec) -> None:
        """
        Add a file, every file in a directory, or every file matching a pattern.

        - An existing file is added on its own.
        - An existing directory is crawled, and when ``recurse`` is set so are
          its subdirectories.
        - Otherwise the last path component may contain ``*`` / ``?``; it is
          then matched against file names in the parent directory, and when
          ``recurse`` is set throughout the tree below it. ``C:/Temp/*.tmp``
          yields every ``.tmp`` file anywhere under ``C:/Temp``.

        Raises ``ValueError`` for a missing spec and ``FileNotFoundError`` when
        none of the cases apply.
        """
        if path_spec is None:
            raise ValueError("path_spec must not be None")
        if not isinstance(path_spec, (str, os.PathLike)):
            raise TypeError(f"path_spec must be a str or path-like, not {type(path_spec).__name__}")
        text = os.fspath(path_spec)
        if not text:
            raise ValueError("path_spec must not be empty")

        if os.path.isfile(text):
            self._add_file(FileEntry.from_path(text))
        elif os.path.isdir(text):
            self._add_directory(canonical_path(text), "*")
        else:
            directory, pattern = split_pattern(text)
            if os.path.isdir(directory) and has_wildcard(pattern):
                self._add_directory(directory, pattern)
            else:
                raise FileNotFoundError(errno.ENOENT, "File not found.", text)

    # ------------------------------------------------------------------
    # Query surface
    # ------------------------------------------------------------------
    def to_list(self) -> List[FileEntry]:
        """Snapshot of the collected entries, in discovery order."""
        return self._files.to_list()

    def paths(self) -> List[Path]:
        return [entry.path for entry in self._files]

    def get(self, path: PathSpec) -> Optional[FileEntry]:
        return self._files.get(path)

    def __contains__(self, item: object) -> bool:
        return item in self._files

    def __getitem__(self, item: Union[int, PathSpec]) -> FileEntry:
        return self._files[item]

    def __iter__(self) -> Iterator[FileEntry]:
        return iter(self._files)

    def __len__(self) -> int:
        return len(self._files)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(files={len(self._files)}, recurse={self.recurse}, "
            f"ignore_directory_attributes={self.ignore_directory_attributes}, "
            f"prohibited_attributes={self._prohibited!r})"
        )

    # ------------------------------------------------------------------
    # Walking
    # ------------------------------------------------------------------
    def allowed(self, attributes: FileAttributes) -> bool:
        return is_allowed(attributes, self._prohibited)

    def _add_file(self, entry: FileEntry) -> bool:
        if not self.allowed(entry.attributes):
            logger.debug("Skipping %s: attributes %s", entry.path, entry.attributes.names())
            return False
        if entry in self._files:
            return False

        if self._handlers:
            event = FileFoundEvent(file=entry)
            for handler in list(self._handlers):
                handler(self, event)
            if event.ignore:
                logger.debug("Skipping %s: ignored by file-found handler", entry.path)
                return False

        return self._files.add(entry)

    def _add_directory(self, directory: Path, pattern: str) -> None:
        if not self.ignore_directory_attributes and not self.allowed(read_attributes(directory)):
            logger.debug("Pruning directory %s: prohibited attributes", directory)
            return

        # Without directory-level filtering there is nothing to prune, so the
        # whole tree can be listed in one pass.
        if self.recurse and (self.ignore_directory_attributes or not self._prohibited):
            self._add_tree(directory, pattern)
            return

        with os.scandir(directory) as it:
            children = sorted(it, key=lambda e: e.name)

        subdirs: List[Path] = []
        for child in children:
            if child.is_dir(follow_symlinks=False):
                subdirs.append(canonical_path(child.path))
            elif child.is_file() and matches_pattern(child.name, pattern):
                self._add_file(FileEntry.from_dir_entry(child))

        if self.recurse:
            for sub in subdirs:
                self._add_directory(sub, pattern)

    def _add_tree(self, directory: Path, pattern: str) -> None:
        for dirpath, dirnames, filenames in os.walk(directory, onerror=_raise_walk_error):
            dirnames.sort()
            for name in sorted(filenames):
                if not matches_pattern(name, pattern):
                    continue
                full = os.path.join(dirpath, name)
                if os.path.isfile(full):
                    self._add_file(FileEntry.from_path(full))


def gather_files(
    *path_specs: PathSpec,
    config: Optional[GatherConfig] = None,
    prohibited_attributes: AttributeSpec = None,
    on_file_found: Optional[FileFoundHandler] = None,
) -> List[FileEntry]:
    """Collect ``path_specs`` with a throwaway ``FileCollector`` and return the entries."""
    collector = FileCollector(
        *path_specs,
        config=config,
        prohibited_attributes=prohibited_attributes,
        on_file_found=on_file_found,
    )
    files = collector.to_list()
    logger.info("Gathered %d files from %d path specs", len(files), len(path_specs))
    return files
