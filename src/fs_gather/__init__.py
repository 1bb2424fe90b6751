"""
fs_gather — gather files from paths, directories and wildcard patterns.

Quick-start (programmatic)::

    from fs_gather import FileCollector, gather_files

    entries = gather_files("logs/*.log", "notes.txt")

    collector = FileCollector(prohibited_attributes="hidden")
    collector.recurse = False
    collector.add("build")
"""

from __future__ import annotations

from fs_gather.attributes import DEFAULT_PROHIBITED as DEFAULT_PROHIBITED
from fs_gather.attributes import FileAttributes as FileAttributes
from fs_gather.collector import FileCollector as FileCollector
from fs_gather.collector import FileFoundEvent as FileFoundEvent
from fs_gather.collector import gather_files as gather_files
from fs_gather.config import GatherConfig as GatherConfig
from fs_gather.config import load_config as load_config
from fs_gather.entries import FileEntry as FileEntry
from fs_gather.keyed_set import KeyedFileSet as KeyedFileSet

__all__ = [
    "DEFAULT_PROHIBITED",
    "FileAttributes",
    "FileCollector",
    "FileEntry",
    "FileFoundEvent",
    "GatherConfig",
    "KeyedFileSet",
    "gather_files",
    "load_config",
]
