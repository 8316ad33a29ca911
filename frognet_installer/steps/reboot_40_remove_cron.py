from __future__ import annotations

from typing import Any, Dict

from ..config import InstallerConfig
from ..lib.cron import remove_entries
from ..state_store import record_decision
from .step_80_schedule_reboot import CRON_MARKER, ON_REBOOT_FLAG


class RemoveCronStep:
    step_id = "r40_remove_cron"
    title = "Removing post-reboot cron entry"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = InstallerConfig(state.get("config") or {})
        removed = remove_entries(CRON_MARKER, ON_REBOOT_FLAG, dry_run=cfg.dry_run)
        record_decision(state, "cron_entries_removed", removed)
        return state
