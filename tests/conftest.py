from __future__ import annotations

from pathlib import Path

import pytest


def make_tree(root: Path, files: list[str]) -> Path:
    """Create empty files (and their parent directories) under ``root``."""
    for rel in files:
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(rel, encoding="utf-8")
    return root


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    """
    root/
      a.txt  b.tmp  .c.txt  _draft.txt  x.log
      sub/y.log  sub/z.txt
      sub/deeper/w.log
      .hidden/h.log
    """
    return make_tree(
        tmp_path / "root",
        [
            "a.txt",
            "b.tmp",
            ".c.txt",
            "_draft.txt",
            "x.log",
            "sub/y.log",
            "sub/z.txt",
            "sub/deeper/w.log",
            ".hidden/h.log",
        ],
    )
