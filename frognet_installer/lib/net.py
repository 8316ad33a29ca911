from __future__ import annotations

import ipaddress
import logging
import random
import re
from pathlib import Path
from typing import List, Optional

from .command import run_cmd

logger = logging.getLogger(__name__)

DEFAULT_NODE_IP = "10.101.0.1"
DEFAULT_DOMAIN = "frognet.local"
MAX_IP_ATTEMPTS = 20

_DOMAIN_LABEL = re.compile(r"^(?!-)[A-Za-z0-9-]{1,63}(?<!-)$")
_ROUTE_NET = re.compile(r"^(\d{1,3}(?:\.\d{1,3}){3})(?:/(\d{1,2}))?$")


def route_table(*, dry_run: bool = False) -> str:
    r = run_cmd(["ip", "route"], check=False, dry_run=dry_run)
    return r.stdout if r.ok else ""


def default_interface(route_output: str) -> Optional[str]:
    """Interface of the first default route in `ip route` output."""

    for line in route_output.splitlines():
        fields = line.split()
        if not fields or fields[0] != "default":
            continue
        if "dev" in fields:
            i = fields.index("dev")
            if i + 1 < len(fields):
                return fields[i + 1]
        if len(fields) >= 5:
            return fields[4]
    return None


def list_interfaces(sys_class_net: str = "/sys/class/net") -> List[str]:
    base = Path(sys_class_net)
    if not base.exists():
        return []
    return sorted(p.name for p in base.iterdir() if p.name != "lo")


def is_wireless(name: str, sys_class_net: str = "/sys/class/net") -> bool:
    return (Path(sys_class_net) / name / "wireless").exists()


def wireless_interfaces(sys_class_net: str = "/sys/class/net") -> List[str]:
    return [n for n in list_interfaces(sys_class_net) if is_wireless(n, sys_class_net)]


def is_valid_ipv4(value: str) -> bool:
    parts = value.split(".")
    if len(parts) != 4 or not all(p.isdigit() for p in parts):
        return False
    try:
        ipaddress.IPv4Address(value)
    except ValueError:
        return False
    return True


def is_valid_domain(value: str) -> bool:
    value = value.rstrip(".")
    if len(value) > 253 or "." not in value:
        return False
    return all(_DOMAIN_LABEL.match(label) for label in value.split("."))


def routed_networks(route_output: str) -> List[ipaddress.IPv4Network]:
    """Destination networks named in `ip route` output (default route excluded)."""

    nets: List[ipaddress.IPv4Network] = []
    for line in route_output.splitlines():
        fields = line.split()
        if not fields:
            continue
        m = _ROUTE_NET.match(fields[0])
        if not m:
            continue
        prefix = m.group(2) or "32"
        try:
            nets.append(ipaddress.IPv4Network(f"{m.group(1)}/{prefix}", strict=False))
        except ValueError:
            continue
    return nets


def suggest_node_ip(
    route_output: str,
    *,
    rng: Optional[random.Random] = None,
    attempts: int = MAX_IP_ATTEMPTS,
    fallback: str = DEFAULT_NODE_IP,
) -> str:
    """Pick 10.<a>.<b>.1 whose /24 does not collide with any routed network.

    Bounded: after `attempts` collisions the hard-coded fallback is returned.
    """

    rng = rng or random.Random()
    used = routed_networks(route_output)
    for _ in range(attempts):
        candidate = ipaddress.IPv4Network(f"10.{rng.randint(1, 254)}.{rng.randint(0, 254)}.0/24")
        if any(candidate.overlaps(n) for n in used):
            logger.debug("Subnet %s collides with an existing route", candidate)
            continue
        return str(candidate.network_address + 1)
    logger.warning("No free 10.x.y.0/24 subnet found after %d attempts; using %s", attempts, fallback)
    return fallback


def ping(host: str, *, dry_run: bool = False) -> bool:
    r = run_cmd(["ping", "-c", "1", "-W", "2", host], check=False, dry_run=dry_run)
    return r.ok
