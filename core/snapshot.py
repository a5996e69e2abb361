# core/snapshot.py
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

import numpy as np

Vec3 = Tuple[float, float, float]


@dataclass(frozen=True)
class BoundingBox:
    min: Vec3
    max: Vec3

    @classmethod
    def from_points(cls, points) -> "BoundingBox":
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 3)
        return cls(tuple(pts.min(axis=0).tolist()), tuple(pts.max(axis=0).tolist()))

    @property
    def center(self) -> Vec3:
        c = (np.asarray(self.min) + np.asarray(self.max)) / 2.0
        return tuple(c.tolist())

    @property
    def size(self) -> Vec3:
        return tuple((np.asarray(self.max) - np.asarray(self.min)).tolist())

    @property
    def volume(self) -> float:
        return float(np.prod(self.size))


@dataclass(frozen=True)
class ElementSnapshot:
    """One element as it appears in one scene snapshot.

    ``node_index`` is only meaningful inside the snapshot the element was
    read from; it is the key used to fetch the element's mesh.
    """
    element_id: int
    node_index: int
    category: str
    family_name: str
    family_type_name: str
    bounding_box: BoundingBox


@dataclass(frozen=True, eq=False)
class Mesh:
    points: np.ndarray                  # (N, 3) world space
    face_vertex_counts: np.ndarray      # (F,)
    face_vertex_indices: np.ndarray     # (sum(counts),)

    @classmethod
    def create(cls, points, counts, indices) -> "Mesh":
        return cls(np.asarray(points, dtype=np.float64).reshape(-1, 3),
                   np.asarray(counts, dtype=np.int64).reshape(-1),
                   np.asarray(indices, dtype=np.int64).reshape(-1))


@dataclass
class SceneSnapshot:
    source: Any
    elements: List[ElementSnapshot] = field(default_factory=list)
    meshes: Dict[int, Mesh] = field(default_factory=dict)

    def nodes_with_geometry(self) -> Iterator[ElementSnapshot]:
        for e in self.elements:
            if e.node_index in self.meshes:
                yield e

    def mesh(self, node_index: int) -> Optional[Mesh]:
        return self.meshes.get(node_index)
