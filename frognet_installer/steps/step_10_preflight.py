from __future__ import annotations

import logging
from typing import Any, Dict

from ..config import InstallerConfig
from ..errors import PreflightError
from ..lib.net import list_interfaces
from ..lib.osinfo import is_root, is_supported_os, load_os_release
from ..state_store import record_decision

logger = logging.getLogger(__name__)


class PreflightStep:
    step_id = "10_preflight"
    title = "Checking this host can run FrogNet"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = InstallerConfig(state.get("config") or {})

        info = load_os_release(cfg.os_release)
        if not info:
            raise PreflightError("This installer only supports Debian/Ubuntu (no /etc/os-release).")
        if not is_supported_os(info):
            raise PreflightError(f"Unsupported OS: {info.get('ID', 'unknown')}")
        logger.info("Detected OS: %s", info.get("PRETTY_NAME") or info.get("ID"))

        if not is_root() and not cfg.dry_run:
            raise PreflightError("Must be run as root. Please re-run with: sudo frognet-installer")

        interfaces = list_interfaces(cfg.sys_class_net)
        if not interfaces:
            raise PreflightError(f"No network interfaces found under {cfg.sys_class_net}")

        wanted = cfg.answers.get("interface")
        if wanted and wanted not in interfaces:
            raise PreflightError(
                f"Configured interface {wanted!r} not present (available: {', '.join(interfaces)})"
            )

        record_decision(state, "os", {"id": info.get("ID"), "version": info.get("VERSION_ID")})
        record_decision(state, "interfaces", interfaces)
        return state
