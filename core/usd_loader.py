# core/usd_loader.py
from pathlib import Path

import numpy as np
from pxr import Tf, Usd, UsdGeom

from core.errors import LoadError
from core.snapshot import BoundingBox, ElementSnapshot, Mesh, SceneSnapshot

# customData keys authored on element prims
ELEMENT_ID_KEY = "elementId"
CATEGORY_KEY = "category"
FAMILY_KEY = "familyName"
FAMILY_TYPE_KEY = "familyTypeName"


def _matrix(xf) -> np.ndarray:
    return np.array([list(xf.GetRow(r)) for r in range(4)], dtype=np.float64)


def _world_points(prim, points) -> np.ndarray:
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 3)
    m = _matrix(UsdGeom.Xformable(prim).ComputeLocalToWorldTransform(Usd.TimeCode.Default()))
    # Gf matrices act on row vectors
    homo = np.hstack([pts, np.ones((len(pts), 1))])
    return (homo @ m)[:, :3]


def _mesh(prim):
    if not prim.IsA(UsdGeom.Mesh):
        return None
    geom = UsdGeom.Mesh(prim)
    points = geom.GetPointsAttr().Get()
    if points is None or len(points) == 0:
        return None
    counts = geom.GetFaceVertexCountsAttr().Get() or []
    indices = geom.GetFaceVertexIndicesAttr().Get() or []
    return Mesh.create(_world_points(prim, points), list(counts), list(indices))


def _text(prim, key: str) -> str:
    v = prim.GetCustomDataByKey(key)
    return "" if v is None else str(v)


def load_snapshot(stage_path) -> SceneSnapshot:
    """Read the elements of a USD stage.

    Every imageable prim gets a node index in traversal order. Only meshes
    with points and an ``elementId`` in their customData become elements.
    """
    path = Path(stage_path)
    if not path.is_file():
        raise LoadError("no such stage", source=str(stage_path))
    try:
        stage = Usd.Stage.Open(str(path))
    except Tf.ErrorException as exc:
        raise LoadError(f"cannot open stage: {exc}", source=str(stage_path)) from exc
    if stage is None:
        raise LoadError("cannot open stage", source=str(stage_path))

    snap = SceneSnapshot(source=str(stage_path))
    node_index = 0
    for prim in stage.Traverse():
        if not prim.IsA(UsdGeom.Imageable):
            continue
        idx, node_index = node_index, node_index + 1
        element_id = prim.GetCustomDataByKey(ELEMENT_ID_KEY)
        if element_id is None:
            continue
        mesh = _mesh(prim)
        if mesh is None:
            continue
        snap.meshes[idx] = mesh
        snap.elements.append(ElementSnapshot(
            element_id=int(element_id),
            node_index=idx,
            category=_text(prim, CATEGORY_KEY),
            family_name=_text(prim, FAMILY_KEY),
            family_type_name=_text(prim, FAMILY_TYPE_KEY),
            bounding_box=BoundingBox.from_points(mesh.points),
        ))
    return snap
