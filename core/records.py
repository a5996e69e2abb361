# core/records.py
import json
from pathlib import Path
from typing import Any, Dict, Iterable, List

from core.classify import ChangeKind, ChangeRecord


def delta_name(step: int) -> str:
    return f"delta_{step}.json"


def record_to_dict(r: ChangeRecord) -> Dict[str, Any]:
    return {
        "change_kind": ChangeKind(r.change_kind).value,
        "category": r.category,
        "family_name": r.family_name,
        "family_type_name": r.family_type_name,
        "previous_family_type_name": r.previous_family_type_name,
        "element_id": r.element_id,
        "volume": r.volume,
        "volume_change": r.volume_change,
        "center": list(r.center),
        "distance_moved": r.distance_moved,
        "node_index": r.node_index,
    }


def write_delta(records: Iterable[ChangeRecord], out_path) -> str:
    rows = [record_to_dict(r) for r in records]
    Path(out_path).write_text(json.dumps(rows, indent=2), encoding="utf-8")
    return str(out_path)


def summarize(records: Iterable[ChangeRecord]) -> Dict[str, int]:
    counts = {k.value: 0 for k in ChangeKind}
    for r in records:
        counts[ChangeKind(r.change_kind).value] += 1
    return counts


def count_line(counts: Dict[str, int]) -> str:
    parts: List[str] = [f"{k}={v}" for k, v in counts.items() if v]
    return "  ".join(parts) or "no elements"
