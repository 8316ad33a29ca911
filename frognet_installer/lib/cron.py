from __future__ import annotations

import logging
from typing import List

from .command import run_cmd

logger = logging.getLogger(__name__)


def read_crontab(*, dry_run: bool = False) -> str:
    """Current user's crontab; `crontab -l` fails when none exists yet."""

    if dry_run:
        return ""
    r = run_cmd(["crontab", "-l"], check=False)
    return r.stdout if r.ok else ""


def write_crontab(text: str, *, dry_run: bool = False) -> None:
    if text and not text.endswith("\n"):
        text += "\n"
    run_cmd(["crontab", "-"], input_text=text, dry_run=dry_run)


def _lines(text: str) -> List[str]:
    return [ln for ln in text.splitlines() if ln.strip()]


def add_reboot_entry(command: str, *, dry_run: bool = False) -> bool:
    """Ensure `@reboot <command>` is scheduled. Returns False if already present."""

    entry = f"@reboot {command}"
    lines = _lines(read_crontab(dry_run=dry_run))
    if entry in (ln.strip() for ln in lines):
        logger.info("Post-reboot entry already scheduled")
        return False
    lines.append(entry)
    write_crontab("\n".join(lines), dry_run=dry_run)
    logger.info("Scheduled post-reboot continuation via cron")
    return True


def remove_entries(*markers: str, dry_run: bool = False) -> int:
    """Drop every crontab line containing all markers. Returns the number removed."""

    lines = _lines(read_crontab(dry_run=dry_run))
    kept = [ln for ln in lines if not all(m in ln for m in markers)]
    removed = len(lines) - len(kept)
    if removed:
        write_crontab("\n".join(kept), dry_run=dry_run)
    logger.info("Removed %d cron entr%s matching %r", removed, "y" if removed == 1 else "ies", markers)
    return removed
