from __future__ import annotations

import logging

from ..lib.assets import fetch_file
from ..lib.brew import activate_prefix, brew_bin, prefix_dirs, run_install_script, shellenv_line
from ..lib.guard import ensure
from ..lib.probe import command_probe
from ..lib.shell import append_line_if_absent
from ..pipeline import BootstrapCtx

logger = logging.getLogger(__name__)


class InstallHomebrewStep:
    step_id = "20_install_homebrew"

    def run(self, ctx: BootstrapCtx) -> None:
        cfg = ctx.cfg
        prefix = cfg.homebrew_prefix

        def install() -> None:
            script = fetch_file(
                cfg.homebrew_install_script,
                ctx.cache_dir / "homebrew-install.sh",
                require_checksum=cfg.require_checksums,
                run=ctx.run,
            )
            run_install_script(script, run=ctx.run)

        ensure(
            "Homebrew",
            command_probe("brew", extra_dirs=prefix_dirs(prefix)),
            install,
            report=ctx.report,
        )

        # Later steps in this run call brew and the tools it installs.
        activate_prefix(prefix)

        # The brew binary is not on PATH for new login shells until this line exists.
        profile = ctx.path(cfg.shell_profile)
        if append_line_if_absent(profile, shellenv_line(prefix)):
            ctx.report.performed.append(f"{profile}: brew shellenv")
        else:
            logger.info("%s already sets up %s.", profile, brew_bin(prefix))
