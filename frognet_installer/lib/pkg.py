from __future__ import annotations

import logging
from typing import List, Sequence

from .command import run_cmd

logger = logging.getLogger(__name__)

_APT_ENV = {"DEBIAN_FRONTEND": "noninteractive"}


def dpkg_is_installed(package: str) -> bool:
    r = run_cmd(["dpkg", "-s", package], check=False)
    return r.ok and "Status: install ok installed" in r.stdout


def missing_packages(packages: Sequence[str]) -> List[str]:
    return [p for p in packages if not dpkg_is_installed(p)]


def apt_update(*, dry_run: bool = False) -> None:
    run_cmd(["apt-get", "update", "-qq"], env=_APT_ENV, dry_run=dry_run)


def apt_install(packages: Sequence[str], *, dry_run: bool = False) -> None:
    if not packages:
        return
    run_cmd(["apt-get", "install", "-y", *packages], env=_APT_ENV, dry_run=dry_run)
