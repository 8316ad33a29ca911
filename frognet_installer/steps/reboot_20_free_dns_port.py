from __future__ import annotations

import logging
from typing import Any, Dict

from ..config import InstallerConfig
from ..lib.netfix import free_dns_port, resolved_holds_dns_port
from ..state_store import record_decision

logger = logging.getLogger(__name__)


class FreeDnsPortStep:
    """dnsmasq needs port 53; systemd-resolved on Ubuntu holds it by default."""

    step_id = "r20_free_dns_port"
    title = "Freeing DNS port 53"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = InstallerConfig(state.get("config") or {})
        conflict = resolved_holds_dns_port(dry_run=cfg.dry_run)
        if conflict:
            logger.warning("Port 53 in use by systemd-resolved. Disabling it...")
            free_dns_port(cfg.resolv_conf, dry_run=cfg.dry_run)
        record_decision(state, "resolved_disabled", conflict)
        return state
