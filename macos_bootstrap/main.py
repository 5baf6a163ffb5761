from __future__ import annotations

import argparse
import logging
import os
from typing import List, Mapping, Optional, Sequence

from .config import load_config
from .errors import BootstrapError, PreconditionError
from .lib.command import Runner, run_cmd
from .lib.env import Paths
from .lib.shell import SHELLS_FILE
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .pipeline import BootstrapCtx, PipelineResult, Step, run_pipeline
from .steps import (
    BootstrapBuildToolStep,
    BuildEditorStep,
    CheckPlatformStep,
    CloneReposStep,
    FetchPluginsStep,
    InstallAppsStep,
    InstallHomebrewStep,
    InstallShellConfigStep,
    InstallShellFrameworkStep,
    InstallToolsStep,
    SwitchShellStep,
)
from .steps.step_10_check_platform import check_platform

logger = logging.getLogger(__name__)


def build_steps(*, shells_file: str = SHELLS_FILE) -> List[Step]:
    return [
        CheckPlatformStep(),
        InstallHomebrewStep(),
        SwitchShellStep(shells_file=shells_file),
        InstallShellFrameworkStep(),
        InstallToolsStep(),
        InstallAppsStep(),
        FetchPluginsStep(),
        BuildEditorStep(),
        CloneReposStep(),
        BootstrapBuildToolStep(),
        InstallShellConfigStep(),
    ]


def run(
    *,
    config_path: Optional[str] = None,
    log_path: str = DEFAULT_LOG_PATH,
    paths: Optional[Paths] = None,
    runner: Runner = run_cmd,
    environ: Optional[Mapping[str, str]] = None,
    steps: Optional[Sequence[Step]] = None,
) -> PipelineResult:
    """Load the manifest and run every step once, in order."""

    # Nothing is written, not even the log, on a host we do not support.
    check_platform()

    actual_log_path = configure_logging(log_path=log_path)
    logger.info("Log file: %s", actual_log_path)

    cfg = load_config(config_path)
    ctx = BootstrapCtx(
        cfg=cfg,
        paths=paths or Paths(),
        run=runner,
        environ=dict(os.environ if environ is None else environ),
    )

    try:
        result = run_pipeline(ctx=ctx, steps=build_steps() if steps is None else steps)
    except PreconditionError:
        raise
    except Exception:
        logger.exception("Bootstrap failed")
        raise

    logger.info(
        "Bootstrap finished (performed=%d satisfied=%d)",
        len(result.report.performed),
        len(result.report.satisfied),
    )
    return result


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="macos-bootstrap")
    p.add_argument("--config", default=None, help="Bootstrap manifest (YAML); defaults to the bundled one")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to bootstrap log")

    args = p.parse_args(argv)

    try:
        run(config_path=args.config, log_path=args.log)
    except BootstrapError as e:
        logger.error("Aborting: %s", e)
        return e.exit_code
    except KeyboardInterrupt:
        return 130
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
