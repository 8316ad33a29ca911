from __future__ import annotations

import logging
import sys
import time
from typing import Any, Callable, Dict

from ..config import InstallerConfig
from ..lib.command import run_cmd

logger = logging.getLogger(__name__)


def reboot_host(*, dry_run: bool = False) -> None:
    logger.info("Rebooting now!")
    run_cmd(["sync"], dry_run=dry_run)
    run_cmd(["systemctl", "reboot"], dry_run=dry_run)


class RebootStep:
    """Count down and request the reboot.

    The reboot itself happens in main.run() after the state file is saved,
    so the completed-step record survives the restart.
    """

    step_id = "90_reboot"
    title = "Rebooting"

    def __init__(self, *, sleep: Callable[[float], None] = time.sleep) -> None:
        self.sleep = sleep

    def _countdown(self, seconds: int) -> None:
        for i in range(seconds, 0, -1):
            sys.stdout.write(f"\rRebooting in {i:2d} seconds... Press Ctrl+C to cancel.")
            sys.stdout.flush()
            self.sleep(1)
        sys.stdout.write("\n")

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = InstallerConfig(state.get("config") or {})
        exe = state.setdefault("execution", {})

        logger.info("Initial setup complete. Summary: %s", exe.get("decisions") or {})

        if not cfg.reboot_enabled:
            logger.warning("Reboot disabled; reboot manually to finish the FrogNet install.")
            exe["reboot_pending"] = False
            return state

        logger.info("IMPORTANT: Please make sure the Ethernet cable is plugged in.")
        if cfg.reboot_delay > 0 and not cfg.dry_run:
            self._countdown(cfg.reboot_delay)

        exe["reboot_pending"] = True
        return state
