from __future__ import annotations

from typing import Sequence


class BootstrapError(RuntimeError):
    """Base class for failures that abort the bootstrap run."""

    exit_code = 2


class PreconditionError(BootstrapError):
    """The host is not one this tool supports."""

    exit_code = 1


class ConfigError(BootstrapError):
    pass


class IntegrityError(BootstrapError):
    pass


class CommandError(BootstrapError):
    """A delegated command exited non-zero.

    The process exit code mirrors the failing command's own status.
    """

    def __init__(self, argv: Sequence[str], returncode: int, stderr: str = "") -> None:
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"Command failed ({returncode}): {' '.join(self.argv)}\n{stderr}".rstrip())

    @property
    def exit_code(self) -> int:  # type: ignore[override]
        # Killed by signal N: subprocess reports -N, shells report 128+N.
        if self.returncode < 0:
            return 128 - self.returncode
        return self.returncode or 1
