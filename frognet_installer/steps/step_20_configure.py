from __future__ import annotations

import getpass
import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict

from ..config import InstallerConfig
from ..errors import ConfigError, InstallAborted
from ..lib.envfile import read_env_file, write_env_file
from ..lib.net import (
    DEFAULT_DOMAIN,
    default_interface,
    is_valid_domain,
    is_valid_ipv4,
    list_interfaces,
    route_table,
    suggest_node_ip,
)
from ..lib.osinfo import invoking_user
from ..lib.prompt import ask, ask_password, confirm
from ..lib.registration import new_node_id
from ..settings import USERNAME_RE, FrogNetSettings
from ..state_store import record_decision

logger = logging.getLogger(__name__)

DEFAULT_ADMIN = "admin"
PASSWORD_ENV = "FROGNET_ADMIN_PASSWORD"


class ConfigureStep:
    """Collect node settings and write frognet.env.

    The admin password is only held in memory and in the env file, never in
    the installer state, so this step prompts and writes in one go.
    """

    step_id = "20_configure"
    title = "Configuring FrogNet settings"

    def __init__(
        self,
        *,
        input_fn: Callable[[str], str] = input,
        getpass_fn: Callable[[str], str] = getpass.getpass,
    ) -> None:
        self.input_fn = input_fn
        self.getpass_fn = getpass_fn

    def _defaults(self, cfg: InstallerConfig) -> Dict[str, str]:
        answers = cfg.answers
        routes = route_table(dry_run=cfg.dry_run)
        interfaces = list_interfaces(cfg.sys_class_net)
        iface = (
            answers.get("interface")
            or default_interface(routes)
            or (interfaces[0] if interfaces else "")
        )
        return {
            "interface": str(iface),
            "domain": str(answers.get("domain") or os.environ.get("FROGNET_DOMAIN") or DEFAULT_DOMAIN),
            "node_ip": str(answers.get("node_ip") or os.environ.get("FROGNET_NODE_IP") or suggest_node_ip(routes)),
            "admin_username": str(answers.get("admin_username") or DEFAULT_ADMIN),
            "admin_password": str(answers.get("admin_password") or os.environ.get(PASSWORD_ENV) or ""),
        }

    def _collect_interactive(self, cfg: InstallerConfig, d: Dict[str, str]) -> Dict[str, str]:
        interfaces = list_interfaces(cfg.sys_class_net)
        print("Now configuring FrogNet. Press ENTER to accept each default.")

        print("This is the network interface that FrogNet will use for its own private subnet.")
        iface = ask(
            "FrogNet interface",
            d["interface"],
            validate=lambda v: not interfaces or v in interfaces,
            error=f"Unknown interface. Available: {', '.join(interfaces)}",
            input_fn=self.input_fn,
        )

        print("This is the local domain (FQDN) that this node will answer for.")
        domain = ask(
            "FrogNet domain",
            d["domain"],
            validate=is_valid_domain,
            error="Enter a domain name such as frognet.local.",
            input_fn=self.input_fn,
        )

        print("This is the static IP for this node on the FrogNet subnet.")
        print("It should not conflict with your existing LAN.")
        node_ip = ask(
            "FrogNet node IP",
            d["node_ip"],
            validate=is_valid_ipv4,
            error="Enter an IPv4 address such as 10.101.0.1.",
            input_fn=self.input_fn,
        )

        username = ask(
            "FrogNet admin username",
            d["admin_username"],
            validate=lambda v: bool(USERNAME_RE.match(v)),
            error="Use lowercase letters, digits, '-' or '_'.",
            input_fn=self.input_fn,
        )
        password = d["admin_password"] or ask_password("FrogNet admin password", getpass_fn=self.getpass_fn)

        if cfg.registration_url and not cfg.registration_email:
            email = self.input_fn("E-mail for node registration (ENTER to skip): ").strip()
            if email:
                cfg.raw.setdefault("registration", {})["email"] = email

        return {
            "interface": iface,
            "domain": domain,
            "node_ip": node_ip,
            "admin_username": username,
            "admin_password": password,
        }

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = InstallerConfig(state.setdefault("config", {}))

        previous: Dict[str, str] = {}
        if Path(cfg.env_file).exists():
            logger.warning("Existing FrogNet configuration detected at %s.", cfg.env_file)
            if cfg.interactive and not confirm("Overwrite it?", input_fn=self.input_fn):
                raise InstallAborted("Aborting; no changes made.")
            try:
                previous = read_env_file(cfg.env_file)
            except ValueError as e:
                logger.warning("Ignoring unreadable %s: %s", cfg.env_file, e)

        defaults = self._defaults(cfg)
        if cfg.interactive:
            values = self._collect_interactive(cfg, defaults)
        else:
            values = defaults
            if not values["admin_password"]:
                raise ConfigError(
                    f"Non-interactive install needs answers.admin_password or ${PASSWORD_ENV}"
                )

        settings = FrogNetSettings(
            **values,
            installed_by=invoking_user(),
            node_id=previous.get("FROGNET_NODE_ID") or new_node_id(),
        )
        settings.validate()

        if cfg.dry_run:
            logger.info("Would write %s", cfg.env_file)
        else:
            write_env_file(
                cfg.env_file,
                settings.to_env(),
                header=f"FrogNet configuration\nGenerated on {settings.installed_at}",
            )

        state["frognet"] = settings.public()
        record_decision(state, "env_file", cfg.env_file)
        if cfg.registration_email:
            # state["config"] is rebuilt each run
            record_decision(state, "registration_email", cfg.registration_email)
        logger.info(
            "FrogNet domain=%s node_ip=%s interface=%s admin=%s",
            settings.domain,
            settings.node_ip,
            settings.interface,
            settings.admin_username,
        )
        return state
