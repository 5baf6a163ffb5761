from __future__ import annotations

import logging
from pathlib import Path

from ..config import BuildToolConfig
from ..lib.assets import fetch_file
from ..lib.command import privileged
from ..lib.guard import ensure
from ..lib.probe import command_probe
from ..pipeline import BootstrapCtx

logger = logging.getLogger(__name__)


def _source_dir(cache_dir: Path, url: str) -> Path:
    # luarocks-3.11.1.tar.gz unpacks into luarocks-3.11.1/
    name = url.rsplit("/", 1)[-1]
    for suffix in (".tar.gz", ".tgz"):
        if name.endswith(suffix):
            name = name[: -len(suffix)]
    return cache_dir / name


class BootstrapBuildToolStep:
    step_id = "95_bootstrap_build_tool"

    def _build(self, ctx: BootstrapCtx, tool: BuildToolConfig) -> None:
        tarball = fetch_file(
            tool.url,
            ctx.cache_dir / tool.url.rsplit("/", 1)[-1],
            sha256=tool.sha256,
            require_checksum=ctx.cfg.require_checksums,
            run=ctx.run,
        )
        ctx.run(["tar", "-xzf", str(tarball), "-C", str(ctx.cache_dir)])
        src = str(_source_dir(ctx.cache_dir, tool.url))
        ctx.run(["./configure"], cwd=src)
        ctx.run(["make"], cwd=src)
        ctx.run(privileged(["make", "install"]), cwd=src)

    def run(self, ctx: BootstrapCtx) -> None:
        tool = ctx.cfg.build_tool
        if tool is None:
            logger.info("No build tool configured")
            return

        ensure(tool.name, command_probe(tool.probe), lambda: self._build(ctx, tool), report=ctx.report)

        for pkg in tool.packages:
            ensure(
                pkg,
                lambda pkg=pkg: ctx.run([tool.probe, "show", pkg], check=False).returncode == 0,
                lambda pkg=pkg: ctx.run(privileged([tool.probe, "install", pkg])),
                report=ctx.report,
            )
