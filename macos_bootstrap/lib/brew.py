from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, MutableMapping

from .command import Runner, run_cmd

logger = logging.getLogger(__name__)


def brew_bin(prefix: str) -> str:
    return str(Path(prefix) / "bin" / "brew")


def prefix_dirs(prefix: str) -> List[str]:
    return [str(Path(prefix) / "bin"), str(Path(prefix) / "sbin")]


def brew_command(prefix: str) -> str:
    """Absolute brew under prefix once it exists; bare name before that."""
    b = Path(brew_bin(prefix))
    return str(b) if b.is_file() else "brew"


def activate_prefix(prefix: str, environ: MutableMapping[str, str] | None = None) -> bool:
    """Put <prefix>/bin and <prefix>/sbin at the front of PATH for this process.

    A fresh install only edits ~/.zprofile, so without this nothing brew
    installs later in the same run would be found. Returns True if PATH changed.
    """

    env = os.environ if environ is None else environ
    if not Path(brew_bin(prefix)).is_file():
        return False

    current = [p for p in env.get("PATH", "").split(os.pathsep) if p]
    wanted = [d for d in prefix_dirs(prefix) if d not in current]
    if not wanted:
        return False
    env["PATH"] = os.pathsep.join([*wanted, *current])
    logger.info("PATH now starts with %s", os.pathsep.join(wanted))
    return True


def shellenv_line(prefix: str) -> str:
    return f'eval "$({brew_bin(prefix)} shellenv)"'


def run_install_script(script: Path, *, run: Runner = run_cmd) -> None:
    # NONINTERACTIVE skips the "Press RETURN" prompt; sudo may still ask for a password.
    run(["/bin/bash", str(script)], env={"NONINTERACTIVE": "1"})


def brew_install(package: str, *, brew: str = "brew", run: Runner = run_cmd) -> None:
    run([brew, "install", package])


def cask_install(cask: str, *, brew: str = "brew", run: Runner = run_cmd) -> None:
    run([brew, "install", "--cask", cask])
