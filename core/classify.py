# core/classify.py
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from core.errors import ClassificationAnomaly
from core.snapshot import ElementSnapshot, Vec3
from core.tolerance import TolerancePolicy, distance


class ChangeKind(str, Enum):
    # values are written to delta files and matched on when partitioning
    UNCHANGED = "Unchanged"
    ADDITION = "Addition"
    DELETION = "Deletion"
    RESIZED = "Resized"
    MOVED = "Moved"
    CHANGED = "Changed"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class ChangeRecord:
    change_kind: ChangeKind
    category: str
    family_name: str
    family_type_name: str
    previous_family_type_name: str
    element_id: int
    volume: float
    volume_change: float
    center: Vec3
    distance_moved: float
    node_index: int


def _check_box(node: ElementSnapshot):
    box = node.bounding_box
    if not math.isfinite(box.volume):
        raise ClassificationAnomaly(f"non-finite volume {box.volume!r}", node.element_id)
    if not all(math.isfinite(c) for c in box.center):
        raise ClassificationAnomaly(f"non-finite center {box.center!r}", node.element_id)


def is_changed(a: ElementSnapshot, b: ElementSnapshot) -> bool:
    # identity only; parameters are not compared
    return a.family_name != b.family_name or a.family_type_name != b.family_type_name


def _record(kind: ChangeKind, node: ElementSnapshot, prev: Optional[ElementSnapshot]) -> ChangeRecord:
    box = node.bounding_box
    if prev is None:
        return ChangeRecord(kind, node.category, node.family_name, node.family_type_name, "",
                            node.element_id, box.volume, 0.0, box.center, 0.0, node.node_index)
    prev_box = prev.bounding_box
    return ChangeRecord(kind, node.category, node.family_name, node.family_type_name,
                        prev.family_type_name, node.element_id, box.volume,
                        box.volume - prev_box.volume, box.center,
                        distance(prev_box.center, box.center), node.node_index)


def classify_node(current: ElementSnapshot, previous: Optional[ElementSnapshot] = None,
                  policy: Optional[TolerancePolicy] = None) -> ChangeRecord:
    policy = policy or TolerancePolicy()
    _check_box(current)
    if previous is None:
        return _record(ChangeKind.ADDITION, current, None)
    _check_box(previous)

    box, prev_box = current.bounding_box, previous.bounding_box
    if is_changed(previous, current):
        kind = ChangeKind.CHANGED
    elif not policy.almost_equal_volume(prev_box.volume, box.volume):
        kind = ChangeKind.RESIZED
    elif not policy.almost_equal_position(prev_box.center, box.center):
        kind = ChangeKind.MOVED
    else:
        kind = ChangeKind.UNCHANGED
    return _record(kind, current, previous)


def deletion_record(previous: ElementSnapshot) -> ChangeRecord:
    """Record for an element that only exists in the previous snapshot.

    Center, volume and node index all come from the previous snapshot.
    """
    _check_box(previous)
    return _record(ChangeKind.DELETION, previous, None)
