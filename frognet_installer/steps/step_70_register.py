from __future__ import annotations

import logging
from typing import Any, Dict

from ..config import InstallerConfig
from ..lib.registration import register_node
from ..state_store import record_decision

logger = logging.getLogger(__name__)


class RegisterStep:
    """Opt-in: only runs when both a registration URL and an e-mail are configured."""

    step_id = "70_register"
    title = "Registering this node"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = InstallerConfig(state.get("config") or {})
        url = cfg.registration_url
        decisions = (state.get("execution") or {}).get("decisions") or {}
        email = cfg.registration_email or decisions.get("registration_email")
        if not (url and email):
            logger.debug("Registration not requested")
            record_decision(state, "registered", False)
            return state

        node_id = str((state.get("frognet") or {}).get("node_id") or "")
        if not node_id:
            raise RuntimeError("frognet.node_id missing; run 20_configure first")

        ok = register_node(url, node_id=node_id, email=email, dry_run=cfg.dry_run)
        record_decision(state, "registered", ok)
        return state
