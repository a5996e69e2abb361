# core/diff_scene.py
from typing import Dict, Iterable, List, Optional

from core.classify import ChangeRecord, classify_node, deletion_record
from core.snapshot import ElementSnapshot, SceneSnapshot
from core.tolerance import TolerancePolicy


def index_by_element_id(elements: Iterable[ElementSnapshot]) -> Dict[int, ElementSnapshot]:
    """Map element id -> element.

    When a snapshot repeats an element id the first element seen is kept and
    the later ones are ignored. This is lossy on purpose and is a known
    limitation of keying identity on the element id alone.
    """
    rows: Dict[int, ElementSnapshot] = {}
    for e in elements:
        rows.setdefault(e.element_id, e)
    return rows


def initial_records(snapshot: SceneSnapshot) -> List[ChangeRecord]:
    # first snapshot of a sequence: nothing to compare against
    return [classify_node(node, None) for node in snapshot.nodes_with_geometry()]


def diff_snapshots(previous: SceneSnapshot, current: SceneSnapshot,
                   policy: Optional[TolerancePolicy] = None) -> List[ChangeRecord]:
    policy = policy or TolerancePolicy()
    prev_nodes = index_by_element_id(previous.nodes_with_geometry())
    curr_nodes = index_by_element_id(current.nodes_with_geometry())

    changes = [classify_node(node, prev_nodes.get(node.element_id), policy)
               for node in current.nodes_with_geometry()]

    # deletions only show up when walking the previous snapshot
    for node in previous.nodes_with_geometry():
        if node.element_id not in curr_nodes:
            changes.append(deletion_record(node))
    return changes
