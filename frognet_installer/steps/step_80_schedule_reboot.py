from __future__ import annotations

import logging
import shlex
import shutil
import sys
from typing import Any, Dict, List

from ..config import InstallerConfig
from ..lib.cron import add_reboot_entry
from ..state_store import record_decision

logger = logging.getLogger(__name__)

ON_REBOOT_FLAG = "--on-reboot"
# Every scheduled command names the installer (binary or module).
CRON_MARKER = "frognet"


def installer_command(cfg: InstallerConfig, execution: Dict[str, Any]) -> str:
    """The command line cron runs after reboot to continue the install."""

    if cfg.cron_command:
        base = cfg.cron_command
    else:
        exe = shutil.which("frognet-installer")
        base = shlex.quote(exe) if exe else f"{shlex.quote(sys.executable)} -m frognet_installer"

    paths = execution.get("paths") or {}
    args: List[str] = [ON_REBOOT_FLAG]
    if paths.get("state_path"):
        args += ["--state", str(paths["state_path"])]
    if paths.get("config_path"):
        args += ["--config", str(paths["config_path"])]
    return " ".join([base, *(shlex.quote(a) for a in args)])


class ScheduleRebootStep:
    step_id = "80_schedule_reboot"
    title = "Scheduling post-reboot startup"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = InstallerConfig(state.get("config") or {})
        command = installer_command(cfg, state.get("execution") or {})
        add_reboot_entry(command, dry_run=cfg.dry_run)
        record_decision(state, "cron_command", command)
        return state
