from __future__ import annotations

import logging
from pathlib import Path

from ..lib.brew import brew_command, cask_install
from ..lib.guard import ensure
from ..lib.probe import path_probe
from ..pipeline import BootstrapCtx

logger = logging.getLogger(__name__)


class InstallAppsStep:
    step_id = "60_install_apps"

    def run(self, ctx: BootstrapCtx) -> None:
        apps_dir = Path(ctx.cfg.applications_dir)
        brew = brew_command(ctx.cfg.homebrew_prefix)
        for entry in ctx.cfg.apps:
            ensure(
                entry.app.removesuffix(".app"),
                path_probe(apps_dir / entry.app),
                lambda cask=entry.cask: cask_install(cask, brew=brew, run=ctx.run),
                report=ctx.report,
            )
