from __future__ import annotations

import logging
from typing import Mapping

from ..config import EditorConfig
from ..lib import git
from ..lib.command import privileged
from ..lib.guard import ensure
from ..lib.probe import env_value, has_command, path_probe
from ..pipeline import BootstrapCtx

logger = logging.getLogger(__name__)


def requested_version(editor: EditorConfig, environ: Mapping[str, str]) -> str:
    """The env override when set, else the pinned tag."""
    return env_value(environ, editor.version_env) or editor.version


def installed_version(ctx: BootstrapCtx, binary: str) -> str | None:
    if not has_command(binary):
        return None
    r = ctx.run([binary, "--version"], check=False)
    if r.returncode != 0 or not r.stdout:
        return None
    return r.stdout.splitlines()[0].strip()


class BuildEditorStep:
    step_id = "80_build_editor"

    def run(self, ctx: BootstrapCtx) -> None:
        editor = ctx.cfg.editor
        version = requested_version(editor, ctx.environ)
        src = ctx.path(editor.src_dir)
        logger.info("%s version requested: %s", editor.name, version)

        ensure(
            f"{editor.name} source",
            path_probe(src),
            lambda: git.clone(editor.repo, src, run=ctx.run),
            report=ctx.report,
            what="cloned",
            verb="Cloning",
        )

        def build() -> None:
            git.fetch(src, tags=True, run=ctx.run)
            git.checkout(src, version, run=ctx.run)
            ctx.run(["make", "distclean"], cwd=str(src))
            ctx.run(["make", "CMAKE_BUILD_TYPE=Release"], cwd=str(src))
            ctx.run(privileged(["make", "install"]), cwd=str(src))

        def at_version() -> bool:
            current = installed_version(ctx, editor.binary)
            if current is None:
                return False
            # "NVIM v0.10.2" for a tag of v0.10.2
            return version in current.split()

        ensure(f"{editor.name} {version}", at_version, build, report=ctx.report, verb="Building")
