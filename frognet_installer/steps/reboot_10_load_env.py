from __future__ import annotations

import logging
from typing import Any, Dict

from ..config import InstallerConfig
from ..errors import ConfigError
from ..lib.envfile import read_env_file
from ..settings import FrogNetSettings

logger = logging.getLogger(__name__)


class LoadEnvStep:
    step_id = "r10_load_env"
    title = "Loading FrogNet configuration"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = InstallerConfig(state.get("config") or {})
        try:
            env = read_env_file(cfg.env_file)
        except FileNotFoundError as e:
            raise ConfigError(f"frognet.env not found at {cfg.env_file}. Aborting.") from e
        except ValueError as e:
            raise ConfigError(f"Unreadable {cfg.env_file}: {e}") from e

        settings = FrogNetSettings.from_env(env)
        state["frognet"] = settings.public()
        logger.info("=== Post-Reboot Initialization (installed by %s) ===", settings.installed_by)
        return state
