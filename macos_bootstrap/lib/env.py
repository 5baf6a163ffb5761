from __future__ import annotations

import getpass
import os
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class Paths:
    home: Path = field(default_factory=Path.home)
    cwd: Path = field(default_factory=Path.cwd)
    user: str = field(default_factory=lambda: os.environ.get("USER") or getpass.getuser())

    def expand(self, raw: str) -> Path:
        """Resolve a manifest path; a leading ~ means the configured home."""
        if raw == "~":
            return self.home
        if raw.startswith("~/"):
            return self.home / raw[2:]
        return Path(raw)
