from __future__ import annotations

import logging
import platform

from ..errors import PreconditionError
from ..pipeline import BootstrapCtx

logger = logging.getLogger(__name__)

SUPPORTED_SYSTEM = "Darwin"


def check_platform(system: str | None = None) -> None:
    system = system or platform.system()
    if system != SUPPORTED_SYSTEM:
        raise PreconditionError(f"This script only supports macOS (detected {system or 'unknown'})")


class CheckPlatformStep:
    step_id = "10_check_platform"

    def __init__(self, system: str | None = None) -> None:
        # Tests pass a fake platform name; normal runs ask the host.
        self._system = system

    def run(self, ctx: BootstrapCtx) -> None:
        check_platform(self._system)
        logger.info("Host platform: macOS %s", platform.mac_ver()[0] or "")
