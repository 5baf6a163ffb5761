from __future__ import annotations

import logging
from pathlib import Path

from .command import Runner, run_cmd

logger = logging.getLogger(__name__)


def clone(url: str, dest: Path, *, run: Runner = run_cmd) -> None:
    dest.parent.mkdir(parents=True, exist_ok=True)
    run(["git", "clone", url, str(dest)])


def fetch(repo: Path, *refs: str, tags: bool = False, run: Runner = run_cmd) -> None:
    argv = ["git", "-C", str(repo), "fetch"]
    if tags:
        argv += ["--tags", "--force"]
    argv += ["origin", *refs]
    run(argv)


def checkout(repo: Path, ref: str, *, run: Runner = run_cmd) -> None:
    """Check out ref; an unknown ref raises CommandError from git."""

    run(["git", "-C", str(repo), "checkout", ref])
