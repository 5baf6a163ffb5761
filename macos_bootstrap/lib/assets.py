from __future__ import annotations

import filecmp
import hashlib
import logging
import shutil
from pathlib import Path

from ..config import Asset
from ..errors import IntegrityError
from .command import Runner, run_cmd
from .guard import RunReport, ensure

logger = logging.getLogger(__name__)


def sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(1 << 16), b""):
            h.update(chunk)
    return h.hexdigest()


def fetch_file(
    url: str,
    dest: Path,
    *,
    sha256: str | None = None,
    require_checksum: bool = False,
    run: Runner = run_cmd,
) -> Path:
    """Download url to dest, unconditionally.

    The body lands in a temporary sibling first and is renamed into place
    only after any checksum matches.
    """

    if sha256 is None:
        if require_checksum:
            raise IntegrityError(f"Refusing to fetch {url}: no sha256 declared and checksums are required")
        logger.warning("Fetching %s without integrity verification", url)

    dest.parent.mkdir(parents=True, exist_ok=True)
    tmp = dest.with_name(dest.name + ".part")
    run(["curl", "-fsSL", "-o", str(tmp), url])

    if sha256 is not None:
        actual = sha256_file(tmp)
        if actual.lower() != sha256.lower():
            tmp.unlink(missing_ok=True)
            raise IntegrityError(f"Checksum mismatch for {url}: expected {sha256}, got {actual}")

    tmp.replace(dest)
    return dest


def ensure_asset(
    asset: Asset,
    dest: Path,
    *,
    report: RunReport,
    require_checksum: bool = False,
    run: Runner = run_cmd,
) -> bool:
    """Fetch asset to dest unless dest already exists."""

    return ensure(
        asset.name,
        dest.exists,
        lambda: fetch_file(asset.url, dest, sha256=asset.sha256, require_checksum=require_checksum, run=run),
        report=report,
        what="present",
        verb="Fetching",
    )


def copy_file_if_changed(src: Path, dst: Path) -> bool:
    if dst.exists() and filecmp.cmp(src, dst, shallow=False):
        return False
    dst.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(src, dst)
    return True
