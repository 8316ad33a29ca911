from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import Optional, Sequence

from .command import fmt_argv

logger = logging.getLogger(__name__)


def find_start_script(start_dir: str, names: Sequence[str]) -> Optional[str]:
    """First executable script among names, in order."""

    for name in names:
        p = Path(start_dir) / name
        if p.is_file() and os.access(p, os.X_OK):
            return str(p)
    return None


def launch_detached(
    argv: Sequence[str],
    *,
    log_path: str,
    cwd: Optional[str] = None,
    dry_run: bool = False,
) -> Optional[int]:
    """Start argv in its own session, output appended to log_path.

    The child survives the installer exiting (nohup-style) and is not
    supervised. Returns the child pid (None in dry-run).
    """

    argv_list = list(argv)
    logger.info("SPAWN %s > %s", fmt_argv(argv_list), log_path)
    if dry_run:
        return None

    Path(log_path).parent.mkdir(parents=True, exist_ok=True)
    with open(log_path, "ab") as log, open(os.devnull, "rb") as devnull:
        proc = subprocess.Popen(
            argv_list,
            stdin=devnull,
            stdout=log,
            stderr=subprocess.STDOUT,
            cwd=cwd,
            start_new_session=True,
            close_fds=True,
        )
    logger.info("Started %s (pid %d)", argv_list[0], proc.pid)
    return proc.pid
