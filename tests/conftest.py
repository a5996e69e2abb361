"""Pytest configuration. Puts the project root on sys.path and builds in-memory snapshots."""
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.snapshot import BoundingBox, ElementSnapshot, Mesh, SceneSnapshot


def cube_box(volume: float, center=(0.0, 0.0, 0.0)) -> BoundingBox:
    half = volume ** (1.0 / 3.0) / 2.0
    return BoundingBox(tuple(c - half for c in center), tuple(c + half for c in center))


def cube_mesh(box: BoundingBox) -> Mesh:
    (x0, y0, z0), (x1, y1, z1) = box.min, box.max
    points = [(x0, y0, z0), (x1, y0, z0), (x1, y1, z0), (x0, y1, z0),
              (x0, y0, z1), (x1, y0, z1), (x1, y1, z1), (x0, y1, z1)]
    faces = [(0, 3, 2, 1), (4, 5, 6, 7), (0, 1, 5, 4), (1, 2, 6, 5), (2, 3, 7, 6), (3, 0, 4, 7)]
    return Mesh.create(points, [4] * 6, [i for f in faces for i in f])


def element(element_id, volume=1.0, center=(0.0, 0.0, 0.0), node_index=0,
            family="Basic Wall", family_type="Generic 200mm", category="Walls") -> ElementSnapshot:
    return ElementSnapshot(element_id, node_index, category, family, family_type, cube_box(volume, center))


def scene(*specs, source="scene") -> SceneSnapshot:
    """specs are dicts of element() kwargs; node_index follows position."""
    snap = SceneSnapshot(source=source)
    for i, spec in enumerate(specs):
        e = element(node_index=i, **spec)
        snap.elements.append(e)
        snap.meshes[i] = cube_mesh(e.bounding_box)
    return snap


@pytest.fixture
def make_scene():
    return scene
