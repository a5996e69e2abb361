# core/partition.py
from dataclasses import dataclass
from typing import Dict, Iterable, List

from core.classify import ChangeKind, ChangeRecord
from core.snapshot import Mesh, SceneSnapshot


@dataclass
class ChangeGroup:
    kind: ChangeKind
    records: List[ChangeRecord]
    snapshot: SceneSnapshot    # where node_index points to

    @property
    def node_indices(self) -> List[int]:
        return [r.node_index for r in self.records]

    def meshes(self) -> List[Mesh]:
        out = []
        for i in self.node_indices:
            mesh = self.snapshot.mesh(i)
            if mesh is None:
                raise KeyError(f"{self.kind}: no geometry for node {i} in {self.snapshot.source}")
            out.append(mesh)
        return out


def partition_changes(records: Iterable[ChangeRecord], current: SceneSnapshot,
                      previous: SceneSnapshot) -> Dict[ChangeKind, ChangeGroup]:
    by_kind: Dict[ChangeKind, List[ChangeRecord]] = {}
    for r in records:
        by_kind.setdefault(ChangeKind(r.change_kind), []).append(r)

    groups = {}
    for kind in ChangeKind:
        if kind not in by_kind:
            continue
        # deleted elements only have geometry in the snapshot they were removed from
        snap = previous if kind is ChangeKind.DELETION else current
        groups[kind] = ChangeGroup(kind, by_kind[kind], snap)
    return groups
