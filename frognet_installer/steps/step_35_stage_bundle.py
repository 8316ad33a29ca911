from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

from ..config import InstallerConfig
from ..lib.assets import copy_tree
from ..state_store import record_decision

logger = logging.getLogger(__name__)


class StageBundleStep:
    """Copy the unpacked installer bundle (scripts, README, tarball) into the install dir."""

    step_id = "35_stage_bundle"
    title = "Staging installer bundle"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = InstallerConfig(state.get("config") or {})

        bundle = cfg.bundle_dir
        if not bundle:
            logger.debug("No bundle_dir configured; nothing to stage")
            return state

        src = Path(bundle).resolve()
        dst = Path(cfg.install_dir).resolve()
        if src == dst:
            logger.info("Bundle already lives in %s", dst)
            return state

        logger.info("Copying all files from %s -> %s", src, dst)
        # frognet.env was just written by the configure step; never clobber it.
        copied = copy_tree(str(src), str(dst), exclude=[Path(cfg.env_file).name], dry_run=cfg.dry_run)
        record_decision(state, "bundle_files", copied)
        return state
