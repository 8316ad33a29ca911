from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .errors import ConfigError
from .lib.env import PATHS
from .lib.manifests import default_packages, load_requirements_file

DEFAULT_START_SCRIPTS = ["setup_lillypad.bash", "setupLily.sh"]
DEFAULT_REBOOT_DELAY = 30


@dataclass(frozen=True)
class InstallerConfig:
    """Typed view over state['config'] (CLI flags merged over the YAML file)."""

    raw: Dict[str, Any]

    def _section(self, name: str) -> Dict[str, Any]:
        value = self.raw.get(name) or {}
        if not isinstance(value, dict):
            raise ConfigError(f"config.{name} must be a mapping")
        return value

    def _path(self, key: str) -> str:
        return str(self._section("paths").get(key) or getattr(PATHS, key))

    @property
    def dry_run(self) -> bool:
        return bool(self.raw.get("dry_run", False))

    @property
    def interactive(self) -> bool:
        return bool(self.raw.get("interactive", True))

    @property
    def packages(self) -> List[str]:
        if self.raw.get("packages_file"):
            return load_requirements_file(str(self.raw["packages_file"]))
        if self.raw.get("packages") is not None:
            return [str(p) for p in self.raw["packages"]]
        return default_packages()

    @property
    def install_dir(self) -> str:
        return self._path("install_dir")

    @property
    def env_file(self) -> str:
        paths = self._section("paths")
        if paths.get("env_file"):
            return str(paths["env_file"])
        if paths.get("install_dir"):
            return str(Path(str(paths["install_dir"])) / "frognet.env")
        return PATHS.env_file

    @property
    def payload(self) -> str:
        return self._path("payload")

    @property
    def extract_root(self) -> str:
        return self._path("extract_root")

    @property
    def map_file(self) -> str:
        return self._path("map_file")

    @property
    def sysctl_conf(self) -> str:
        return self._path("sysctl_conf")

    @property
    def start_dir(self) -> str:
        return self._path("start_dir")

    @property
    def start_log(self) -> str:
        return self._path("start_log")

    @property
    def os_release(self) -> str:
        return self._path("os_release")

    @property
    def resolv_conf(self) -> str:
        return self._path("resolv_conf")

    @property
    def hosts_file(self) -> str:
        return self._path("hosts_file")

    @property
    def sentinels_dir(self) -> str:
        return self._path("sentinels_dir")

    @property
    def sys_class_net(self) -> str:
        return self._path("sys_class_net")

    @property
    def bundle_dir(self) -> Optional[str]:
        value = self._section("paths").get("bundle_dir")
        return str(value) if value else None

    @property
    def answers(self) -> Dict[str, Any]:
        return self._section("answers")

    @property
    def start_scripts(self) -> List[str]:
        return [str(s) for s in (self.raw.get("start_scripts") or DEFAULT_START_SCRIPTS)]

    @property
    def registration_url(self) -> Optional[str]:
        value = self._section("registration").get("url")
        return str(value) if value else None

    @property
    def registration_email(self) -> Optional[str]:
        value = self._section("registration").get("email")
        return str(value).strip() if value else None

    @property
    def reboot_enabled(self) -> bool:
        return bool(self._section("reboot").get("enabled", True))

    @property
    def reboot_delay(self) -> int:
        return int(self._section("reboot").get("delay_seconds", DEFAULT_REBOOT_DELAY))

    @property
    def network_repair(self) -> bool:
        return bool(self.raw.get("network_repair", True))

    @property
    def cron_command(self) -> Optional[str]:
        value = self.raw.get("cron_command")
        return str(value) if value else None


def load_installer_config(path: str) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ConfigError("installer config must be YAML")

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"{path} must contain a mapping/object")
    return raw


def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into a copy of base; None values are ignored."""

    out = dict(base)
    for k, v in override.items():
        if v is None:
            continue
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = merge_config(out[k], v)
        else:
            out[k] = v
    return out
