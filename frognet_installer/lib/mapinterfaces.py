from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Dict, Mapping, Optional, Sequence

logger = logging.getLogger(__name__)

# Upstream interface name baked into the shipped mapInterfaces template.
PLACEHOLDER_IFACE = "ens33"


def plan_roles(upstream: str, wireless: Sequence[str]) -> Dict[str, str]:
    """Decide which wireless interfaces serve the FrogNet access points.

    The upstream interface is never reused for an AP role; a missing role
    is recorded as an empty string.
    """

    aps = [w for w in wireless if w != upstream]
    return {
        "wlan0Name": aps[0] if len(aps) > 0 else "",
        "wlan1Name": aps[1] if len(aps) > 1 else "",
    }


def patch_text(text: str, exports: Mapping[str, str], *, upstream: Optional[str] = None) -> str:
    """Rewrite `export NAME=...` lines and the upstream placeholder."""

    if upstream and upstream != PLACEHOLDER_IFACE:
        text = re.sub(rf"\b{PLACEHOLDER_IFACE}\b", upstream, text)

    lines = text.splitlines()
    for name, value in exports.items():
        pattern = re.compile(rf"^\s*export\s+{re.escape(name)}=")
        new_line = f'export {name}="{value}"'
        hits = [i for i, ln in enumerate(lines) if pattern.match(ln)]
        if hits:
            for i in hits:
                lines[i] = new_line
        else:
            lines.append(new_line)
    return "\n".join(lines) + "\n"


def patch_map_file(
    path: str,
    exports: Mapping[str, str],
    *,
    upstream: Optional[str] = None,
    dry_run: bool = False,
) -> bool:
    """Patch mapInterfaces in place. Returns False if the file does not exist."""

    p = Path(path)
    if not p.exists():
        logger.warning("mapInterfaces file not found at %s; skipping patch", p)
        return False

    before = p.read_text(encoding="utf-8")
    after = patch_text(before, exports, upstream=upstream)
    if dry_run:
        logger.info("Would patch %s: %s", p, dict(exports))
        return True
    if after != before:
        p.write_text(after, encoding="utf-8")
    for name, value in exports.items():
        logger.info("mapInterfaces: %s=%r", name, value)
    return True
