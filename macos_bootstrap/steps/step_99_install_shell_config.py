from __future__ import annotations

import logging

from ..lib.assets import copy_file_if_changed
from ..pipeline import BootstrapCtx

logger = logging.getLogger(__name__)


class InstallShellConfigStep:
    step_id = "99_install_shell_config"

    def run(self, ctx: BootstrapCtx) -> None:
        src = ctx.paths.cwd / ctx.cfg.shell_config_source
        dst = ctx.path(ctx.cfg.shell_config_dest)

        if not src.is_file():
            logger.info("No %s in %s; leaving %s alone", src.name, ctx.paths.cwd, dst)
            return

        if copy_file_if_changed(src, dst):
            logger.info("Installed %s -> %s", src, dst)
            ctx.report.performed.append(str(dst))
        else:
            logger.info("%s is already up to date.", dst)
            ctx.report.satisfied.append(str(dst))
