from __future__ import annotations

import shutil
from pathlib import Path
from typing import Iterable, Mapping

from .guard import Probe


def has_command(name: str, *, path: str | None = None) -> bool:
    return shutil.which(name, path=path) is not None


def command_probe(name: str, *, extra_dirs: Iterable[str] = ()) -> Probe:
    """Probe for an executable on PATH or in one of extra_dirs."""

    def probe() -> bool:
        if has_command(name):
            return True
        return any((Path(d) / name).is_file() for d in extra_dirs)

    return probe


def path_probe(path: Path) -> Probe:
    return path.exists


def env_value(environ: Mapping[str, str], key: str) -> str | None:
    value = environ.get(key)
    return value.strip() if value and value.strip() else None
