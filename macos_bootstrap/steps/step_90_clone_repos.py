from __future__ import annotations

import logging

from ..config import RepoEntry
from ..lib import git
from ..lib.guard import ensure
from ..lib.probe import path_probe
from ..pipeline import BootstrapCtx

logger = logging.getLogger(__name__)


def clone_repo(ctx: BootstrapCtx, repo: RepoEntry) -> None:
    dest = ctx.path(repo.dest)
    git.clone(repo.url, dest, run=ctx.run)
    # One-time setup: an existing clone is never moved to this branch later.
    if repo.branch:
        git.fetch(dest, repo.branch, run=ctx.run)
        git.checkout(dest, repo.branch, run=ctx.run)


class CloneReposStep:
    step_id = "90_clone_repos"

    def run(self, ctx: BootstrapCtx) -> None:
        for repo in ctx.cfg.repos:
            ensure(
                repo.name,
                path_probe(ctx.path(repo.dest)),
                lambda repo=repo: clone_repo(ctx, repo),
                report=ctx.report,
                what="cloned",
                verb="Cloning",
            )
