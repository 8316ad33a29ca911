from __future__ import annotations

import getpass
import logging
import os
import shlex
from pathlib import Path
from typing import Dict

logger = logging.getLogger(__name__)

SUPPORTED_IDS = ("debian", "ubuntu", "raspbian")


def parse_os_release(text: str) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        try:
            parts = shlex.split(value)
        except ValueError:
            parts = [value.strip("\"'")]
        out[key.strip()] = parts[0] if parts else ""
    return out


def load_os_release(path: str = "/etc/os-release") -> Dict[str, str]:
    p = Path(path)
    if not p.exists():
        return {}
    return parse_os_release(p.read_text(encoding="utf-8", errors="ignore"))


def is_supported_os(info: Dict[str, str]) -> bool:
    """Debian family: Debian, Ubuntu, Raspberry Pi OS and their derivatives."""

    if info.get("ID", "").lower() in SUPPORTED_IDS:
        return True
    like = info.get("ID_LIKE", "").lower().split()
    return any(i in like for i in SUPPORTED_IDS)


def is_root() -> bool:
    return os.geteuid() == 0


def invoking_user() -> str:
    """The human behind sudo, falling back to the current login."""

    for var in ("SUDO_USER", "LOGNAME", "USER"):
        value = os.environ.get(var)
        if value:
            return value
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "unknown"
