from __future__ import annotations

import logging
from typing import Iterable, Sequence

from ..config import ToolEntry, pair_tools
from ..lib.brew import brew_command, brew_install, prefix_dirs
from ..lib.command import Runner
from ..lib.guard import RunReport, ensure
from ..lib.probe import command_probe
from ..pipeline import BootstrapCtx

logger = logging.getLogger(__name__)


def install_tools(
    entries: Sequence[ToolEntry],
    *,
    report: RunReport,
    run: Runner,
    brew: str = "brew",
    extra_dirs: Iterable[str] = (),
) -> None:
    """Install each package whose probe command is missing, in table order."""

    dirs = list(extra_dirs)
    for entry in entries:
        ensure(
            entry.package,
            command_probe(entry.probe, extra_dirs=dirs),
            lambda pkg=entry.package: brew_install(pkg, brew=brew, run=run),
            report=report,
        )


def install_tool_table(
    packages: Sequence[str],
    probes: Sequence[str],
    *,
    report: RunReport,
    run: Runner,
) -> None:
    # Raises ConfigError before anything is installed if the lists are mis-sized.
    install_tools(pair_tools(list(packages), list(probes)), report=report, run=run)


class InstallToolsStep:
    step_id = "50_install_tools"

    def run(self, ctx: BootstrapCtx) -> None:
        entries = ctx.cfg.tools
        prefix = ctx.cfg.homebrew_prefix
        logger.info("Checking %d command-line tools", len(entries))
        install_tools(
            entries,
            report=ctx.report,
            run=ctx.run,
            brew=brew_command(prefix),
            extra_dirs=prefix_dirs(prefix),
        )
