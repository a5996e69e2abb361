# core/mesh_export.py
import io
from pathlib import Path
from typing import List, Sequence

import numpy as np

from core.classify import ChangeKind
from core.snapshot import Mesh


def obj_name(kind: ChangeKind, step: int) -> str:
    return f"{ChangeKind(kind).value}_{step}.obj"


def triangulate(mesh: Mesh) -> np.ndarray:
    """Fan-triangulate every face; returns (T, 3) point indices."""
    tris: List[np.ndarray] = []
    start = 0
    for n in mesh.face_vertex_counts.tolist():
        face = mesh.face_vertex_indices[start:start + n]
        start += n
        if n < 3:
            continue
        k = np.arange(1, n - 1)
        tris.append(np.column_stack([np.full(n - 2, face[0]), face[k], face[k + 1]]))
    if not tris:
        return np.zeros((0, 3), dtype=np.int64)
    return np.vstack(tris).astype(np.int64)


def merge_meshes(meshes: Sequence[Mesh]) -> Mesh:
    points, counts, indices = [], [], []
    offset = 0
    for m in meshes:
        tri = triangulate(m)
        points.append(m.points)
        counts.append(np.full(len(tri), 3))
        indices.append(tri.reshape(-1) + offset)
        offset += len(m.points)
    if not points:
        return Mesh.create(np.zeros((0, 3)), [], [])
    return Mesh.create(np.vstack(points), np.concatenate(counts), np.concatenate(indices))


def write_obj(mesh: Mesh, out_path) -> str:
    buf = io.StringIO()
    np.savetxt(buf, mesh.points, fmt="v %.6f %.6f %.6f")
    start = 0
    for n in mesh.face_vertex_counts.tolist():
        face = mesh.face_vertex_indices[start:start + n] + 1  # OBJ is 1-based
        start += n
        buf.write("f " + " ".join(str(i) for i in face.tolist()) + "\n")
    Path(out_path).write_text(buf.getvalue(), encoding="utf-8")
    return str(out_path)


def export_group(group, out_path) -> str:
    return write_obj(merge_meshes(group.meshes()), out_path)
