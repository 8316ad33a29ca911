from __future__ import annotations

import logging
from typing import Any, Dict

from ..config import InstallerConfig
from ..lib.launcher import find_start_script, launch_detached
from ..state_store import record_decision

logger = logging.getLogger(__name__)


class LaunchStartScriptStep:
    step_id = "r30_launch_start_script"
    title = "Starting FrogNet services"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = InstallerConfig(state.get("config") or {})
        node = state.get("frognet") or {}

        script = find_start_script(cfg.start_dir, cfg.start_scripts)
        if script is None:
            logger.warning(
                "No executable start script (%s) in %s; FrogNet services not started",
                ", ".join(cfg.start_scripts),
                cfg.start_dir,
            )
            record_decision(state, "start_script", None)
            return state

        logger.info("Invoking %s...", script)
        pid = launch_detached(
            [script, str(node.get("domain", "")), str(node.get("node_ip", ""))],
            log_path=cfg.start_log,
            cwd=cfg.start_dir,
            dry_run=cfg.dry_run,
        )
        record_decision(state, "start_script", {"path": script, "pid": pid})
        return state
