"""
Tests for FileCollector: spec resolution, directory walks, filtering and hooks.
"""
import os

import pytest

from fs_gather import FileAttributes, FileCollector, FileEntry, GatherConfig, gather_files
from fs_gather.collector import FileFoundEvent

from conftest import make_tree


def names(collector):
    return [e.name for e in collector]


def test_directory_skips_hidden_files(tmp_path):
    root = make_tree(tmp_path / "d", ["a.txt", "b.tmp", ".c.txt"])
    collector = FileCollector(str(root))
    assert set(names(collector)) == {"a.txt", "b.tmp"}


def test_default_walk_order_and_pruning(tree):
    collector = FileCollector(str(tree))
    # files of a directory come before its subdirectories; .hidden is pruned
    assert names(collector) == ["_draft.txt", "a.txt", "b.tmp", "x.log", "y.log", "z.txt", "w.log"]


def test_recursion_toggle(tmp_path):
    root = make_tree(tmp_path / "root", ["x.log", "sub/y.log"])

    deep = FileCollector(str(root))
    assert names(deep) == ["x.log", "y.log"]

    flat = FileCollector(str(root), config=GatherConfig(recurse=False))
    assert names(flat) == ["x.log"]


def test_wildcard_spec_recursive(tree):
    collector = FileCollector(str(tree / "*.log"))
    assert names(collector) == ["x.log", "y.log", "w.log"]


def test_wildcard_spec_not_recursive(tree):
    collector = FileCollector(config=GatherConfig(recurse=False))
    collector.add(str(tree / "*.log"))
    assert names(collector) == ["x.log"]


def test_wildcard_is_case_insensitive(tree):
    collector = FileCollector(config=GatherConfig(recurse=False))
    collector.add(str(tree / "*.LOG"))
    collector.add(str(tree / "?.TX?"))
    assert names(collector) == ["x.log", "a.txt"]


def test_bare_wildcard_uses_working_directory(tree, monkeypatch):
    monkeypatch.chdir(tree)
    collector = FileCollector(config=GatherConfig(recurse=False))
    collector.add("*.txt")
    assert names(collector) == ["_draft.txt", "a.txt"]


def test_same_file_added_once(tree):
    collector = FileCollector()
    collector.add(str(tree / "a.txt"))
    collector.add(str(tree / "a.txt"))
    collector.add(str(tree / "sub" / ".." / "a.txt"))
    collector.add(str(tree))
    assert names(collector).count("a.txt") == 1
    assert collector[0].name == "a.txt"


def test_lookup_is_case_insensitive(tree):
    collector = FileCollector(str(tree / "a.txt"))
    assert str(tree / "a.txt").upper() in collector
    assert collector[str(tree / "A.TXT")].name == "a.txt"
    assert collector.get(str(tree / "missing.txt")) is None


def test_file_found_handler_can_veto(tree):
    def skip_underscore(_collector, event):
        if event.file.name.startswith("_"):
            event.ignore = True

    collector = FileCollector(str(tree), on_file_found=skip_underscore)
    assert "_draft.txt" not in names(collector)
    assert "a.txt" in names(collector)


def test_handlers_run_in_order_and_share_ignore_flag(tree):
    seen = []

    def first(_collector, event):
        seen.append(("first", event.file.name, event.ignore))
        event.ignore = event.file.name == "a.txt"

    def second(collector, event):
        assert isinstance(collector, FileCollector)
        seen.append(("second", event.file.name, event.ignore))

    collector = FileCollector(config=GatherConfig(recurse=False))
    collector.add_file_found_handler(first)
    collector.add_file_found_handler(second)
    collector.add(str(tree / "?.txt"))

    assert seen == [("first", "a.txt", False), ("second", "a.txt", True)]
    assert len(collector) == 0

    collector.remove_file_found_handler(first)
    collector.add(str(tree / "a.txt"))
    assert names(collector) == ["a.txt"]


def test_handler_not_called_for_rejected_or_duplicate_files(tree):
    events = []
    collector = FileCollector(on_file_found=lambda _c, e: events.append(e))
    collector.add(str(tree / ".c.txt"))
    collector.add(str(tree / "a.txt"))
    collector.add(str(tree / "a.txt"))
    assert [e.file.name for e in events] == ["a.txt"]
    assert isinstance(events[0], FileFoundEvent)


def test_missing_path_raises_and_adds_nothing(tree):
    collector = FileCollector()
    with pytest.raises(FileNotFoundError):
        collector.add(str(tree / "nope.txt"))
    with pytest.raises(FileNotFoundError):
        collector.add(str(tree / "missing_dir" / "*.txt"))
    assert len(collector) == 0


def test_batch_keeps_specs_added_before_failure(tree):
    collector = FileCollector()
    with pytest.raises(FileNotFoundError):
        collector.add_many([str(tree / "a.txt"), str(tree / "nope"), str(tree / "b.tmp")])
    assert names(collector) == ["a.txt"]


def test_invalid_arguments():
    collector = FileCollector()
    with pytest.raises(ValueError):
        collector.add(None)
    with pytest.raises(ValueError):
        collector.add("")
    with pytest.raises(ValueError):
        collector.add_many(None)
    with pytest.raises(TypeError):
        collector.add(42)


def test_explicit_hidden_file_is_filtered(tree):
    collector = FileCollector(str(tree / ".c.txt"))
    assert len(collector) == 0


def test_hidden_directory_spec_is_pruned(tree):
    collector = FileCollector(str(tree / ".hidden"))
    assert len(collector) == 0


def test_ignore_directory_attributes_walks_hidden_directories(tree):
    collector = FileCollector(config=GatherConfig(ignore_directory_attributes=True))
    collector.add(str(tree))
    assert "h.log" in names(collector)
    # file-level filtering still applies
    assert ".c.txt" not in names(collector)


def test_empty_prohibited_mask_allows_everything(tree):
    collector = FileCollector(str(tree), prohibited_attributes=FileAttributes.NONE)
    assert {".c.txt", "h.log"} <= set(names(collector))
    assert len(collector) == 9


def test_both_walk_strategies_agree_without_pruning(tmp_path):
    root = make_tree(tmp_path / "r", ["b.txt", "a/1.txt", "a/b/2.txt", "c/3.txt", "c/4.log"])
    manual = FileCollector(str(root / "*.txt"))
    flat = FileCollector(config=GatherConfig(ignore_directory_attributes=True))
    flat.add(str(root / "*.txt"))
    assert manual.paths() == flat.paths()
    assert names(manual) == ["b.txt", "1.txt", "2.txt", "3.txt"]


def test_readonly_files_can_be_prohibited(tmp_path):
    root = make_tree(tmp_path / "ro", ["locked.txt", "open.txt"])
    os.chmod(root / "locked.txt", 0o444)
    try:
        collector = FileCollector(str(root), prohibited_attributes=["readonly"])
        assert names(collector) == ["open.txt"]
    finally:
        os.chmod(root / "locked.txt", 0o644)


@pytest.mark.parametrize("ignore_dir_attrs", [False, True])
def test_symlinked_directories_are_not_followed(tmp_path, ignore_dir_attrs):
    root = make_tree(tmp_path / "s", ["real/f.txt"])
    try:
        os.symlink(root / "real", root / "link", target_is_directory=True)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported")
    collector = FileCollector(config=GatherConfig(ignore_directory_attributes=ignore_dir_attrs))
    collector.add(str(root))
    assert collector.paths() == [root / "real" / "f.txt"]


def test_prohibited_attributes_property_accepts_names(tree):
    collector = FileCollector()
    collector.prohibited_attributes = "hidden, system"
    assert collector.prohibited_attributes == FileAttributes.HIDDEN | FileAttributes.SYSTEM
    collector.prohibited_attributes = None
    assert collector.prohibited_attributes == FileAttributes.NONE


def test_to_list_is_a_snapshot(tree):
    collector = FileCollector(str(tree / "a.txt"))
    snapshot = collector.to_list()
    collector.add(str(tree / "b.tmp"))
    assert [e.name for e in snapshot] == ["a.txt"]
    assert all(isinstance(e, FileEntry) for e in collector.to_list())
    assert collector[1].path == tree / "b.tmp"


def test_entries_carry_metadata(tree):
    (entry,) = FileCollector(str(tree / "a.txt")).to_list()
    assert entry.path.is_absolute()
    assert entry.size == len("a.txt")
    assert entry.mtime_ns > 0
    assert not entry.attributes.contains_any(FileAttributes.DIRECTORY | FileAttributes.HIDDEN)


def test_gather_files_convenience(tree):
    files = gather_files(str(tree / "*.log"), config=GatherConfig(recurse=False))
    assert [f.name for f in files] == ["x.log"]
