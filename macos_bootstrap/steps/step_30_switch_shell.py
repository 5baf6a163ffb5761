from __future__ import annotations

import logging
from pathlib import Path

from ..lib.guard import ensure
from ..lib.shell import SHELLS_FILE, change_login_shell, has_line, login_shell, register_shell
from ..pipeline import BootstrapCtx

logger = logging.getLogger(__name__)


class SwitchShellStep:
    step_id = "30_switch_shell"

    def __init__(self, shells_file: str = SHELLS_FILE) -> None:
        self.shells_file = shells_file

    def run(self, ctx: BootstrapCtx) -> None:
        target = ctx.cfg.shell_path
        name = ctx.cfg.shell_name

        # chsh refuses shells missing from the system list.
        ensure(
            f"{target} in {self.shells_file}",
            lambda: has_line(Path(self.shells_file), target),
            lambda: register_shell(target, shells_file=self.shells_file, run=ctx.run),
            report=ctx.report,
            what="registered",
            verb="Registering",
        )

        current = login_shell(ctx.paths.user, ctx.environ, run=ctx.run)
        logger.info("Current login shell: %s", current or "unknown")
        ensure(
            f"{name} as login shell",
            lambda: current == target,
            lambda: change_login_shell(target, run=ctx.run),
            report=ctx.report,
            what="set",
            verb="Setting",
        )
