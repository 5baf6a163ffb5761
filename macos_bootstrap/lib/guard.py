from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List

logger = logging.getLogger(__name__)

Probe = Callable[[], bool]


@dataclass
class RunReport:
    """What one run changed (performed) versus found already in place (satisfied)."""

    performed: List[str] = field(default_factory=list)
    satisfied: List[str] = field(default_factory=list)


def ensure(
    name: str,
    probe: Probe,
    action: Callable[[], object],
    *,
    report: RunReport,
    what: str = "installed",
    verb: str = "Installing",
) -> bool:
    """Run action only when probe says the capability is missing.

    Returns True when the action ran. Exceptions raised by the action are not
    caught: a failed install aborts the whole run.
    """

    if probe():
        logger.info("%s is already %s.", name, what)
        report.satisfied.append(name)
        return False

    logger.info("%s %s...", verb, name)
    action()
    report.performed.append(name)
    return True
