from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List

import yaml

logger = logging.getLogger(__name__)


def _package_root() -> Path:
    # frognet_installer/lib/manifests.py -> frognet_installer
    return Path(__file__).resolve().parents[1]


def load_yaml_rel(rel_path: str) -> Dict[str, Any]:
    """Load a YAML manifest shipped inside the package (manifests/...)."""

    p = _package_root() / rel_path.lstrip("/")
    data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Manifest must be a mapping/dict: {p}")
    return data


def default_packages() -> List[str]:
    return [str(p) for p in (load_yaml_rel("manifests/packages.yaml").get("packages") or [])]


def parse_requirements(text: str) -> List[str]:
    """Parse a requirements.txt style package list.

    One package per line; everything after '#' is a comment; blank lines are
    skipped; duplicates keep their first position.
    """

    out: List[str] = []
    for raw in text.splitlines():
        line = raw.split("#", 1)[0].strip()
        if not line:
            continue
        for name in line.split():
            if name not in out:
                out.append(name)
    return out


def load_requirements_file(path: str) -> List[str]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)
    pkgs = parse_requirements(p.read_text(encoding="utf-8"))
    logger.debug("Read %d packages from %s", len(pkgs), path)
    return pkgs
