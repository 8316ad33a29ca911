from __future__ import annotations

import logging
import os
import re
import shlex
from pathlib import Path
from typing import Dict, Mapping, Optional

logger = logging.getLogger(__name__)

_KEY = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def render_env(values: Mapping[str, str], *, header: Optional[str] = None) -> str:
    """Render KEY=value lines that a POSIX shell can `source` verbatim."""

    lines = []
    if header:
        lines.extend(f"# {h}" if h else "#" for h in header.splitlines())
    for key, value in values.items():
        if not _KEY.match(key):
            raise ValueError(f"Invalid environment variable name: {key!r}")
        if any(c in str(value) for c in "\n\r\0"):
            raise ValueError(f"{key} must be a single line")
        lines.append(f"{key}={shlex.quote(str(value))}")
    return "\n".join(lines) + "\n"


def parse_env(text: str) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not _KEY.match(key):
            raise ValueError(f"line {lineno}: expected KEY=value, got {raw!r}")
        parts = shlex.split(value, comments=True)
        out[key] = " ".join(parts)
    return out


def write_env_file(path: str, values: Mapping[str, str], *, header: Optional[str] = None) -> None:
    """Write the env file atomically with mode 0600."""

    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    tmp = p.with_name(f".{p.name}.tmp")
    fd = os.open(str(tmp), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        f.write(render_env(values, header=header))
    os.chmod(tmp, 0o600)
    os.replace(tmp, p)
    logger.info("Saved configuration to %s", p)


def read_env_file(path: str) -> Dict[str, str]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)
    return parse_env(p.read_text(encoding="utf-8"))
