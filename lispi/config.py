from __future__ import annotations
import os
from pathlib import Path
from typing import Iterable, List


def _sep() -> str:
    return ';' if os.name == 'nt' else ':'


# Defaults: resolve relative to the process working directory at call time
def _default_source_dirs() -> List[Path]:
    return [Path.cwd()]


def paths_from_env(var: str, defaults: Iterable[Path]) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    sep = _sep()
    return [Path(p.strip()) for p in raw.split(sep) if p.strip()]


def get_source_roots() -> List[Path]:
    """Directories searched for relative `load` / `require` filenames."""
    return paths_from_env('LISPI_PATH', _default_source_dirs())
