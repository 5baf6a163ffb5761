from __future__ import annotations

import logging
import os
from pathlib import Path

from ..lib.assets import ensure_asset
from ..lib.command import privileged
from ..lib.guard import ensure
from ..pipeline import BootstrapCtx

logger = logging.getLogger(__name__)


def user_writable(path: Path) -> bool:
    return path.is_dir() and os.access(path, os.W_OK | os.X_OK)


class FetchPluginsStep:
    step_id = "70_fetch_plugins"

    def run(self, ctx: BootstrapCtx) -> None:
        cfg = ctx.cfg

        for raw in cfg.plugin_dirs:
            d = ctx.path(raw)

            def claim(d=d) -> None:
                # Shared dirs live under /usr/local; hand them to the user so
                # plugin downloads below do not need sudo. A root-owned dir
                # left by an earlier run gets the same treatment.
                ctx.run(privileged(["mkdir", "-p", str(d)]))
                ctx.run(privileged(["chown", ctx.paths.user, str(d)]))

            ensure(
                str(d),
                lambda d=d: user_writable(d),
                claim,
                report=ctx.report,
                what="present and writable",
                verb="Preparing",
            )

        assets = list(cfg.plugin_assets)
        loader = cfg.editor_plugin_loader
        if loader is not None:
            assets.append(loader)

        for asset in assets:
            ensure_asset(
                asset,
                ctx.path(asset.dest),
                report=ctx.report,
                require_checksum=cfg.require_checksums,
                run=ctx.run,
            )
