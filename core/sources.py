# core/sources.py
import shutil
from pathlib import Path
from typing import Iterable, List

from core.errors import ConfigurationError

DEFAULT_PATTERN = "*.usd*"


def find_snapshot_sources(folder, pattern: str = DEFAULT_PATTERN) -> List[Path]:
    folder = Path(folder)
    if not folder.is_dir():
        raise ConfigurationError(f"input folder not found: {folder}")
    # file names define the sequence order
    return sorted((p for p in folder.glob(pattern) if p.is_file()), key=lambda p: p.name)


def check_output_folder(folder, sources: Iterable = ()) -> Path:
    """The output folder gets wiped: it must be a folder and hold none of the sources."""
    folder = Path(folder)
    if folder.exists() and not folder.is_dir():
        raise ConfigurationError(f"output path {folder} is not a folder")
    out = folder.resolve()
    for s in sources:
        if out in Path(s).resolve().parents:
            raise ConfigurationError(f"output folder {folder} contains the input stage {s}")
    return folder


def prepare_output_folder(folder, sources: Iterable = ()) -> Path:
    folder = check_output_folder(folder, sources)
    if folder.exists():
        shutil.rmtree(folder)
    folder.mkdir(parents=True)
    return folder
