from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from fs_gather.attributes import DEFAULT_PROHIBITED, FileAttributes, parse_attributes

logger = logging.getLogger(__name__)


class GatherConfig(BaseModel):
    """
    Options controlling how a ``FileCollector`` walks and filters.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    recurse: bool = Field(
        default=True,
        description="Descend into subdirectories of every directory or wildcard spec added.",
    )
    ignore_directory_attributes: bool = Field(
        default=False,
        description="Skip attribute checks on directories. Faster, but hidden/system directories are walked.",
    )
    prohibited_attributes: FileAttributes = Field(
        default=DEFAULT_PROHIBITED,
        description="Files and directories carrying any of these attributes are skipped. Empty allows everything.",
    )

    @field_validator("prohibited_attributes", mode="plain")
    @classmethod
    def _coerce_attributes(cls, value: Any) -> FileAttributes:
        return parse_attributes(value)


def load_config(path: Union[str, Path]) -> GatherConfig:
    """Load a YAML (or JSON) file into a ``GatherConfig``. An empty file gives the defaults."""
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config file not found: {p}")
    data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    logger.debug("Loaded gather config from %s: %s", p, data)
    return GatherConfig.model_validate(data)
