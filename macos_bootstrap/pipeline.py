from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Protocol, Sequence

from .config import BootstrapConfig
from .lib.command import Runner, run_cmd
from .lib.env import Paths
from .lib.guard import RunReport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BootstrapCtx:
    cfg: BootstrapConfig
    paths: Paths = field(default_factory=Paths)
    run: Runner = run_cmd
    environ: Mapping[str, str] = field(default_factory=lambda: dict(os.environ))
    report: RunReport = field(default_factory=RunReport)

    def path(self, raw: str) -> Path:
        return self.paths.expand(raw)

    @property
    def cache_dir(self) -> Path:
        return self.path(self.cfg.cache_dir)


class Step(Protocol):
    """A single idempotent step."""

    step_id: str

    def run(self, ctx: BootstrapCtx) -> None:
        ...


@dataclass(frozen=True)
class PipelineResult:
    ran_steps: List[str]
    report: RunReport


def run_pipeline(*, ctx: BootstrapCtx, steps: Sequence[Step]) -> PipelineResult:
    """Run steps strictly in order; the first exception ends the run."""

    ran: List[str] = []
    for step in steps:
        logger.info("Running step %s", step.step_id)
        step.run(ctx)
        ran.append(step.step_id)

    return PipelineResult(ran_steps=ran, report=ctx.report)
