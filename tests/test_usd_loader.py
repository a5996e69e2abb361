"""Tests for core.usd_loader against stages authored on the fly."""
from pathlib import Path

import pytest

pxr = pytest.importorskip("pxr")
from pxr import Gf, Usd, UsdGeom

from core.errors import LoadError
from core.usd_loader import load_snapshot

CUBE_POINTS = [(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0), (0, 0, 1), (1, 0, 1), (1, 1, 1), (0, 1, 1)]
CUBE_FACES = [0, 3, 2, 1, 4, 5, 6, 7, 0, 1, 5, 4, 1, 2, 6, 5, 2, 3, 7, 6, 3, 0, 4, 7]


def author_stage(path: Path, elements) -> str:
    """elements: (prim name, element id or None, translate, scale, family type)."""
    stage = Usd.Stage.CreateNew(str(path))
    UsdGeom.Xform.Define(stage, "/World")
    for name, element_id, translate, scale, family_type in elements:
        mesh = UsdGeom.Mesh.Define(stage, f"/World/{name}")
        mesh.CreatePointsAttr([Gf.Vec3f(*p) for p in CUBE_POINTS])
        mesh.CreateFaceVertexCountsAttr([4] * 6)
        mesh.CreateFaceVertexIndicesAttr(CUBE_FACES)
        xf = UsdGeom.XformCommonAPI(mesh)
        xf.SetTranslate(Gf.Vec3d(*translate))
        xf.SetScale(Gf.Vec3f(*scale))
        prim = mesh.GetPrim()
        if element_id is not None:
            prim.SetCustomDataByKey("elementId", element_id)
        prim.SetCustomDataByKey("category", "Walls")
        prim.SetCustomDataByKey("familyName", "Basic Wall")
        prim.SetCustomDataByKey("familyTypeName", family_type)
    stage.GetRootLayer().Save()
    return str(path)


def test_load_reads_elements_in_world_space(tmp_path: Path) -> None:
    path = author_stage(tmp_path / "a.usda", [
        ("WallA", 101, (0, 0, 0), (1, 1, 1), "Generic 200mm"),
        ("WallB", 102, (10, 0, 0), (2, 1, 1), "Generic 300mm"),
    ])
    snap = load_snapshot(path)
    assert [e.element_id for e in snap.elements] == [101, 102]

    b = snap.elements[1]
    assert b.family_name == "Basic Wall"
    assert b.family_type_name == "Generic 300mm"
    assert b.category == "Walls"
    assert b.bounding_box.volume == pytest.approx(2.0)
    assert b.bounding_box.center == pytest.approx((11.0, 0.5, 0.5))
    assert snap.mesh(b.node_index).points[:, 0].min() == pytest.approx(10.0)


def test_node_index_counts_all_imageable_prims(tmp_path: Path) -> None:
    path = author_stage(tmp_path / "a.usda", [
        ("Untagged", None, (0, 0, 0), (1, 1, 1), "T"),
        ("Wall", 7, (0, 0, 0), (1, 1, 1), "T"),
    ])
    snap = load_snapshot(path)
    # /World is node 0, /World/Untagged node 1
    assert [(e.element_id, e.node_index) for e in snap.elements] == [(7, 2)]
    assert list(snap.meshes) == [2]


def test_missing_stage_is_load_error(tmp_path: Path) -> None:
    with pytest.raises(LoadError) as info:
        load_snapshot(tmp_path / "nope.usda")
    assert "nope.usda" in str(info.value)


def test_garbage_stage_is_load_error(tmp_path: Path) -> None:
    bad = tmp_path / "bad.usda"
    bad.write_text("#usda 1.0\n(\n  this is not usd\n", encoding="utf-8")
    with pytest.raises(LoadError):
        load_snapshot(bad)
