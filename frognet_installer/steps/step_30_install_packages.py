from __future__ import annotations

import logging
from typing import Any, Dict

from ..config import InstallerConfig
from ..lib.pkg import apt_install, apt_update, missing_packages
from ..state_store import record_decision

logger = logging.getLogger(__name__)


class InstallPackagesStep:
    step_id = "30_install_packages"
    title = "Installing required packages"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = InstallerConfig(state.get("config") or {})

        wanted = cfg.packages
        missing = missing_packages(wanted)
        if missing:
            logger.info("Installing missing packages: %s", " ".join(missing))
            apt_update(dry_run=cfg.dry_run)
            apt_install(missing, dry_run=cfg.dry_run)
        else:
            logger.info("All required packages are already installed.")

        record_decision(state, "packages_installed", missing)
        return state
