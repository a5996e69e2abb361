# report/plan_view.py
from typing import Dict, Iterable, Tuple

import numpy as np
from PIL import Image, ImageDraw

from core.classify import ChangeKind, ChangeRecord
from core.partition import partition_changes

KIND_COLORS: Dict[ChangeKind, Tuple[int, int, int]] = {
    ChangeKind.UNCHANGED: (200, 200, 200),
    ChangeKind.ADDITION:  (10, 125, 0),
    ChangeKind.DELETION:  (176, 0, 32),
    ChangeKind.RESIZED:   (230, 140, 0),
    ChangeKind.MOVED:     (30, 90, 220),
    ChangeKind.CHANGED:   (150, 40, 170),
}

# unchanged first so changes are painted on top
_DRAW_ORDER = [ChangeKind.UNCHANGED, ChangeKind.ADDITION, ChangeKind.RESIZED,
               ChangeKind.MOVED, ChangeKind.CHANGED, ChangeKind.DELETION]


def render_plan(records: Iterable[ChangeRecord], current, previous, out_png: str,
                width: int = 640, margin: int = 16) -> str:
    """Top-down footprint of every record's bounding box, colored by kind."""
    groups = partition_changes(records, current, previous)
    boxes = []
    for kind in _DRAW_ORDER:
        if kind not in groups:
            continue
        g = groups[kind]
        by_index = {e.node_index: e for e in g.snapshot.elements}
        for i in g.node_indices:
            bb = by_index[i].bounding_box
            boxes.append((kind, bb.min[:2], bb.max[:2]))

    h = int(width * 9 / 16)
    img = Image.new("RGB", (width, h), (255, 255, 255))
    if boxes:
        lo = np.min([b[1] for b in boxes], axis=0)
        hi = np.max([b[2] for b in boxes], axis=0)
        span = np.maximum(hi - lo, 1e-9)
        scale = float(min((width - 2 * margin) / span[0], (h - 2 * margin) / span[1]))
        draw = ImageDraw.Draw(img)
        for kind, bmin, bmax in boxes:
            x0, y0 = (np.asarray(bmin) - lo) * scale + margin
            x1, y1 = (np.asarray(bmax) - lo) * scale + margin
            # image y grows downwards
            draw.rectangle([float(x0), float(h - y1), float(x1), float(h - y0)],
                           outline=KIND_COLORS[kind], width=2)
    img.save(out_png)
    return out_png
