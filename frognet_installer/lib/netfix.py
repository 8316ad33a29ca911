from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import List

from .command import run_cmd
from .net import ping

logger = logging.getLogger(__name__)

FALLBACK_NAMESERVER = "1.1.1.1"
CHECK_HOST = "8.8.8.8"


def network_problems(
    *,
    resolv_conf: str = "/etc/resolv.conf",
    hosts_file: str = "/etc/hosts",
    sentinels_dir: str = "/etc/sentinels",
) -> List[str]:
    """Reasons the resolver/hosts setup looks broken (empty list if healthy)."""

    problems: List[str] = []
    resolv = Path(resolv_conf)
    try:
        if "nameserver" not in resolv.read_text(encoding="utf-8", errors="ignore"):
            problems.append(f"{resolv} has no nameserver")
    except OSError:
        problems.append(f"{resolv} is unreadable")

    hosts = Path(hosts_file)
    if not hosts.exists() or hosts.stat().st_size == 0:
        problems.append(f"{hosts} is empty")

    sentinels = Path(sentinels_dir)
    if sentinels.is_dir() and any(sentinels.iterdir()):
        problems.append(f"{sentinels} holds stale sentinel files")
    return problems


def repair_network(
    *,
    resolv_conf: str = "/etc/resolv.conf",
    hosts_file: str = "/etc/hosts",
    sentinels_dir: str = "/etc/sentinels",
    settle_seconds: float = 2.0,
    dry_run: bool = False,
) -> bool:
    """Remove generated network files, restart the services that rebuild them.

    Returns True when the host can reach the internet afterwards.
    """

    if dry_run:
        logger.info("Would remove %s, %s and %s/*", hosts_file, resolv_conf, sentinels_dir)
    else:
        for f in (hosts_file, resolv_conf):
            Path(f).unlink(missing_ok=True)
        sentinels = Path(sentinels_dir)
        if sentinels.is_dir():
            for child in sentinels.iterdir():
                if child.is_file() or child.is_symlink():
                    child.unlink()

    logger.info("Restarting NetworkManager and dnsmasq...")
    run_cmd(["systemctl", "restart", "NetworkManager"], dry_run=dry_run)
    run_cmd(["systemctl", "restart", "dnsmasq"], dry_run=dry_run)

    if not dry_run and settle_seconds:
        time.sleep(settle_seconds)
    return ping(CHECK_HOST, dry_run=dry_run)


def resolved_holds_dns_port(*, dry_run: bool = False) -> bool:
    """True if systemd-resolved is listening on port 53."""

    r = run_cmd(["lsof", "-i", ":53"], check=False, dry_run=dry_run)
    return "systemd-resolve" in r.stdout


def free_dns_port(resolv_conf: str = "/etc/resolv.conf", *, dry_run: bool = False) -> None:
    """Stop systemd-resolved so dnsmasq can bind port 53; pin a static resolver."""

    run_cmd(["systemctl", "stop", "systemd-resolved"], dry_run=dry_run)
    run_cmd(["systemctl", "disable", "systemd-resolved"], dry_run=dry_run)

    p = Path(resolv_conf)
    if dry_run:
        logger.info("Would write nameserver %s to %s", FALLBACK_NAMESERVER, p)
        return
    # Usually a symlink into /run/systemd/resolve; replace it with a real file.
    p.unlink(missing_ok=True)
    p.write_text(f"nameserver {FALLBACK_NAMESERVER}\n", encoding="utf-8")
    logger.info("systemd-resolved disabled; %s now points at %s", p, FALLBACK_NAMESERVER)
