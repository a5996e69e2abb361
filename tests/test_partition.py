"""Tests for core.partition."""
from conftest import scene
from core.classify import ChangeKind
from core.diff_scene import diff_snapshots
from core.partition import partition_changes


def _pair():
    prev = scene({"element_id": 1}, {"element_id": 2}, {"element_id": 3}, {"element_id": 4},
                 source="prev")
    curr = scene({"element_id": 4}, {"element_id": 1, "center": (5, 0, 0)},
                 {"element_id": 2, "family": "Other"}, {"element_id": 6},
                 source="curr")
    return prev, curr


def test_groups_partition_records() -> None:
    prev, curr = _pair()
    records = diff_snapshots(prev, curr)
    groups = partition_changes(records, curr, prev)

    assert list(groups) == [ChangeKind.UNCHANGED, ChangeKind.ADDITION, ChangeKind.DELETION,
                            ChangeKind.MOVED, ChangeKind.CHANGED]
    flat = [r for g in groups.values() for r in g.records]
    assert sorted(flat, key=lambda r: r.element_id) == sorted(records, key=lambda r: r.element_id)
    for kind, g in groups.items():
        assert all(r.change_kind is kind for r in g.records)


def test_empty_kinds_have_no_group() -> None:
    prev, curr = _pair()
    groups = partition_changes(diff_snapshots(prev, curr), curr, prev)
    assert ChangeKind.RESIZED not in groups
    assert partition_changes([], curr, prev) == {}


def test_deletions_resolve_against_previous() -> None:
    prev, curr = _pair()
    groups = partition_changes(diff_snapshots(prev, curr), curr, prev)

    deleted = groups[ChangeKind.DELETION]
    assert deleted.snapshot is prev
    assert deleted.node_indices == [2]
    assert deleted.meshes() == [prev.meshes[2]]

    moved = groups[ChangeKind.MOVED]
    assert moved.snapshot is curr
    assert moved.meshes() == [curr.meshes[1]]
