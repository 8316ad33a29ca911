from __future__ import annotations

import logging
from typing import Any, Dict

from ..config import InstallerConfig
from ..lib.mapinterfaces import patch_map_file, plan_roles
from ..lib.net import wireless_interfaces
from ..state_store import record_decision

logger = logging.getLogger(__name__)


class MapInterfacesStep:
    step_id = "50_map_interfaces"
    title = "Mapping network interfaces"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = InstallerConfig(state.get("config") or {})
        upstream = str((state.get("frognet") or {}).get("interface") or "")
        if not upstream:
            raise RuntimeError("frognet.interface missing; run 20_configure first")

        roles = plan_roles(upstream, wireless_interfaces(cfg.sys_class_net))
        logger.info("Patching mapInterfaces for interface names (upstream=%s)", upstream)
        patched = patch_map_file(cfg.map_file, roles, upstream=upstream, dry_run=cfg.dry_run)

        record_decision(state, "interface_roles", {"upstream": upstream, **roles, "patched": patched})
        return state
