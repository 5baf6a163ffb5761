from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping

from .command import Runner, privileged, run_cmd

logger = logging.getLogger(__name__)

SHELLS_FILE = "/etc/shells"


def has_line(path: Path, line: str) -> bool:
    if not path.exists():
        return False
    wanted = line.rstrip("\n")
    return any(existing == wanted for existing in path.read_text(encoding="utf-8").splitlines())


def append_line_if_absent(path: Path, line: str) -> bool:
    """Append line to path unless an identical line is already there.

    Returns True when the file was written.
    """

    line = line.rstrip("\n")
    if has_line(path, line):
        return False

    path.parent.mkdir(parents=True, exist_ok=True)
    existing = path.read_text(encoding="utf-8") if path.exists() else ""
    prefix = "" if not existing or existing.endswith("\n") else "\n"
    with path.open("a", encoding="utf-8") as f:
        f.write(f"{prefix}{line}\n")
    logger.info("Appended to %s: %s", path, line)
    return True


def register_shell(shell_path: str, *, shells_file: str = SHELLS_FILE, run: Runner = run_cmd) -> None:
    """Add shell_path to the system shell list; needs root."""

    run(privileged(["tee", "-a", shells_file]), input_text=f"{shell_path}\n")


def login_shell(user: str, environ: Mapping[str, str], *, run: Runner = run_cmd) -> str | None:
    """Return the user's login shell from Directory Services, else $SHELL."""

    r = run(["dscl", ".", "-read", f"/Users/{user}", "UserShell"], check=False)
    if r.returncode == 0:
        for line in r.stdout.splitlines():
            if line.startswith("UserShell:"):
                return line.split(":", 1)[1].strip() or None
    return environ.get("SHELL") or None


def change_login_shell(shell_path: str, *, run: Runner = run_cmd) -> None:
    run(["chsh", "-s", shell_path])
