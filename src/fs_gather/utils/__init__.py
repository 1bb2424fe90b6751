"""Shared utility modules."""

from fs_gather.utils.paths import (  # noqa: F401
    canonical_path,
    has_wildcard,
    matches_pattern,
    path_key,
    split_pattern,
)

__all__ = [
    "canonical_path",
    "has_wildcard",
    "matches_pattern",
    "path_key",
    "split_pattern",
]
