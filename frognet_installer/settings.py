"""The node settings persisted in frognet.env."""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Mapping

from . import __version__
from .errors import ConfigError
from .lib.net import is_valid_domain, is_valid_ipv4

USERNAME_RE = re.compile(r"^[a-z_][a-z0-9_-]{0,31}$")

# attribute -> env key, in file order
ENV_KEYS = {
    "domain": "FROGNET_DOMAIN",
    "node_ip": "FROGNET_NODE_IP",
    "interface": "FROGNET_INTERFACE",
    "admin_username": "FROGNET_USERNAME",
    "admin_password": "FROGNET_PASSWORD",
    "installed_at": "FROGNET_INSTALL_DATE",
    "installer_version": "FROGNET_VERSION",
    "installed_by": "FROGNET_INSTALLED_BY",
    "node_id": "FROGNET_NODE_ID",
}

SECRET_FIELDS = ("admin_password",)
_REQUIRED = ("domain", "node_ip", "interface", "admin_username")
# frognet.env is read back one line at a time
_FORBIDDEN_CHARS = ("\n", "\r", "\0")


def _now() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat()


@dataclass
class FrogNetSettings:
    domain: str
    node_ip: str
    interface: str
    admin_username: str
    admin_password: str = field(repr=False)
    installed_at: str = field(default_factory=_now)
    installer_version: str = __version__
    installed_by: str = "unknown"
    node_id: str = ""

    def validate(self) -> None:
        for attr in ENV_KEYS:
            value = str(getattr(self, attr))
            if any(c in value for c in _FORBIDDEN_CHARS):
                raise ConfigError(f"FrogNet {attr.replace('_', ' ')} must be a single line")
        if not is_valid_domain(self.domain):
            raise ConfigError(f"Invalid FrogNet domain: {self.domain!r}")
        if not is_valid_ipv4(self.node_ip):
            raise ConfigError(f"Invalid FrogNet node IP: {self.node_ip!r}")
        if not self.interface:
            raise ConfigError("FrogNet interface must not be empty")
        if not USERNAME_RE.match(self.admin_username):
            raise ConfigError(f"Invalid admin username: {self.admin_username!r}")

    def to_env(self) -> Dict[str, str]:
        values = asdict(self)
        return {key: str(values[attr]) for attr, key in ENV_KEYS.items()}

    def public(self) -> Dict[str, Any]:
        """Everything except secrets, for the state file and logs."""

        return {k: v for k, v in asdict(self).items() if k not in SECRET_FIELDS}

    @classmethod
    def from_env(cls, env: Mapping[str, str]) -> "FrogNetSettings":
        missing = [key for attr, key in ENV_KEYS.items() if attr in _REQUIRED and not env.get(key)]
        if missing:
            raise ConfigError(f"frognet.env is missing: {', '.join(missing)}")
        kwargs = {attr: env[key] for attr, key in ENV_KEYS.items() if key in env}
        kwargs.setdefault("admin_password", "")
        settings = cls(**kwargs)
        settings.validate()
        return settings

