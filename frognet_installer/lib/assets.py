from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import Iterable

from .command import run_cmd

logger = logging.getLogger(__name__)


def copy_tree(src: str, dst: str, *, exclude: Iterable[str] = (), dry_run: bool = False) -> int:
    """Copy src into dst (merging), preserving modes; returns files copied.

    Top-level names in `exclude` are skipped. Everything lands owned by root
    when running as root.
    """

    s = Path(src)
    d = Path(dst)
    if not s.exists():
        raise FileNotFoundError(src)

    skip = set(exclude)
    if dry_run:
        logger.info("Would copy tree %s -> %s", s, d)
        return 0

    copied = 0
    d.mkdir(parents=True, exist_ok=True)
    for item in sorted(s.rglob("*")):
        rel = item.relative_to(s)
        if rel.parts[0] in skip:
            continue
        out = d / rel
        if item.is_symlink():
            out.parent.mkdir(parents=True, exist_ok=True)
            if out.is_symlink() or out.exists():
                out.unlink()
            out.symlink_to(os.readlink(item))
            copied += 1
        elif item.is_dir():
            out.mkdir(parents=True, exist_ok=True)
        else:
            out.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(item, out)
            if os.geteuid() == 0:
                os.chown(out, 0, 0)
            copied += 1
    logger.info("Copied %d files %s -> %s", copied, s, d)
    return copied


def extract_tarball(tarball: str, dest: str = "/", *, dry_run: bool = False) -> None:
    """Extract the payload archive with the system tar, preserving ownership."""

    if not Path(tarball).is_file():
        raise FileNotFoundError(tarball)
    run_cmd(["tar", "-xf", tarball, "-C", dest], dry_run=dry_run)
    logger.info("Extracted %s into %s", tarball, dest)
