from __future__ import annotations

import logging

from ..lib.assets import fetch_file
from ..lib.guard import ensure
from ..lib.probe import path_probe
from ..pipeline import BootstrapCtx

logger = logging.getLogger(__name__)


class InstallShellFrameworkStep:
    step_id = "40_install_shell_framework"

    def run(self, ctx: BootstrapCtx) -> None:
        cfg = ctx.cfg
        target_dir = ctx.path(cfg.framework_dir)

        def install() -> None:
            script = fetch_file(
                cfg.framework_install_script,
                ctx.cache_dir / f"{cfg.framework_name}-install.sh",
                require_checksum=cfg.require_checksums,
                run=ctx.run,
            )
            # The installer would otherwise chsh and exec a new shell itself.
            ctx.run(
                ["sh", str(script), "--unattended", "--keep-zshrc"],
                env={"RUNZSH": "no", "CHSH": "no", "ZSH": str(target_dir)},
            )

        ensure(cfg.framework_name, path_probe(target_dir), install, report=ctx.report)
