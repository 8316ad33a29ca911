from __future__ import annotations

import logging
import re
from pathlib import Path

from .command import run_cmd

logger = logging.getLogger(__name__)

IP_FORWARD_KEY = "net.ipv4.ip_forward"


def set_conf_value(text: str, key: str, value: str) -> str:
    """Set key=value in sysctl.conf text, uncommenting or appending as needed."""

    pattern = re.compile(rf"^\s*#?\s*{re.escape(key)}\s*=.*$")
    lines = text.splitlines()
    out = []
    done = False
    for ln in lines:
        if pattern.match(ln):
            if not done:
                out.append(f"{key}={value}")
                done = True
            # later duplicates are dropped
            continue
        out.append(ln)
    if not done:
        out.append(f"{key}={value}")
    return "\n".join(out) + "\n"


def enable_ip_forwarding(conf_path: str = "/etc/sysctl.conf", *, dry_run: bool = False) -> None:
    p = Path(conf_path)
    before = p.read_text(encoding="utf-8") if p.exists() else ""
    after = set_conf_value(before, IP_FORWARD_KEY, "1")

    if dry_run:
        logger.info("Would set %s=1 in %s", IP_FORWARD_KEY, p)
    elif after != before:
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(after, encoding="utf-8")

    run_cmd(["sysctl", "-w", f"{IP_FORWARD_KEY}=1"], dry_run=dry_run)
    run_cmd(["sysctl", "-p", str(p)], dry_run=dry_run)
    logger.info("IPv4 forwarding enabled")
