from __future__ import annotations

from typing import Any, Dict

from ..config import InstallerConfig
from ..lib.sysctl import enable_ip_forwarding


class IpForwardingStep:
    step_id = "60_ip_forwarding"
    title = "Enabling IP forwarding"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = InstallerConfig(state.get("config") or {})
        enable_ip_forwarding(cfg.sysctl_conf, dry_run=cfg.dry_run)
        return state
