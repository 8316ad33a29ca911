from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

from ..config import InstallerConfig
from ..errors import InstallerError
from ..lib.assets import extract_tarball

logger = logging.getLogger(__name__)


class ExtractPayloadStep:
    step_id = "40_extract_payload"
    title = "Extracting FrogNet payload"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = InstallerConfig(state.get("config") or {})

        if not Path(cfg.payload).is_file():
            raise InstallerError(f"Tarball payload not found: {cfg.payload}")

        logger.info("Extracting %s to %s ...", cfg.payload, cfg.extract_root)
        extract_tarball(cfg.payload, cfg.extract_root, dry_run=cfg.dry_run)
        return state
