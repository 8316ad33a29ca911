from __future__ import annotations

import logging
from typing import Any, Dict

from ..config import InstallerConfig
from ..errors import InstallerError
from ..lib.netfix import CHECK_HOST, network_problems, repair_network
from ..state_store import record_decision

logger = logging.getLogger(__name__)


class NetworkSanityStep:
    step_id = "65_network_sanity"
    title = "Checking network configuration"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = InstallerConfig(state.get("config") or {})
        if not cfg.network_repair:
            logger.info("Network repair disabled")
            return state

        problems = network_problems(
            resolv_conf=cfg.resolv_conf,
            hosts_file=cfg.hosts_file,
            sentinels_dir=cfg.sentinels_dir,
        )
        record_decision(state, "network_problems", problems)
        if not problems:
            logger.info("Network appears to be functioning. No repair needed.")
            return state

        for p in problems:
            logger.warning("Network check: %s", p)
        logger.warning("Network configs appear broken. Attempting repair...")

        ok = repair_network(
            resolv_conf=cfg.resolv_conf,
            hosts_file=cfg.hosts_file,
            sentinels_dir=cfg.sentinels_dir,
            dry_run=cfg.dry_run,
        )
        if not ok:
            raise InstallerError(f"Network repair attempted, but ping to {CHECK_HOST} still failed.")
        logger.info("Network repair successful: ping working.")
        return state
