# core/pipeline.py
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, List, Optional

from core.classify import ChangeRecord
from core.diff_scene import diff_snapshots, initial_records
from core.errors import ConfigurationError, LoadError
from core.snapshot import SceneSnapshot
from core.tolerance import TolerancePolicy

Loader = Callable[[Any], SceneSnapshot]


@dataclass
class DiffStep:
    index: int
    source: Any
    records: List[ChangeRecord]
    previous: SceneSnapshot    # baseline; snapshot 0 itself on step 0
    current: SceneSnapshot


def _load(loader: Loader, source, step: int) -> SceneSnapshot:
    try:
        return loader(source)
    except LoadError as exc:
        if exc.step is None:
            exc.step = step
        if exc.source is None:
            exc.source = source
        raise
    except Exception as exc:
        raise LoadError(f"could not load snapshot: {exc}", source=source, step=step) from exc


def iter_steps(sources: Iterable, loader: Loader,
               policy: Optional[TolerancePolicy] = None) -> Iterator[DiffStep]:
    """Walk an ordered list of snapshot sources, one comparison per source.

    Step 0 reports every element of the first snapshot as an addition. Step i
    compares snapshot i against snapshot i-1, which is the only snapshot kept
    around between steps. A snapshot that fails to load stops the walk.
    """
    sources = list(sources)
    if not sources:
        raise ConfigurationError("no snapshots to compare")
    policy = policy or TolerancePolicy()

    previous = _load(loader, sources[0], 0)
    for i, source in enumerate(sources):
        if i == 0:
            current = previous
            records = initial_records(current)
        else:
            current = _load(loader, source, i)
            records = diff_snapshots(previous, current, policy)
        yield DiffStep(i, source, records, previous, current)
        previous = current


def run_sequence(sources: Iterable, loader: Loader,
                 policy: Optional[TolerancePolicy] = None) -> List[List[ChangeRecord]]:
    return [step.records for step in iter_steps(sources, loader, policy)]
