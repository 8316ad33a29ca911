from __future__ import annotations

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict

import yaml

from . import __version__
from .errors import ConfigError

logger = logging.getLogger(__name__)

# Never persisted: the admin password only ever lands in frognet.env.
SECRET_KEYS = ("secrets",)
SECRET_ANSWERS = ("admin_password",)


def _detect_format(path: Path) -> str:
    ext = path.suffix.lower().lstrip(".")
    if ext in {"json", "yaml", "yml"}:
        return ext
    # Default to JSON for unknown extensions.
    return "json"


def load_state(path: str) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        return {}

    text = p.read_text(encoding="utf-8")
    try:
        if _detect_format(p) in {"yaml", "yml"}:
            data = yaml.safe_load(text) or {}
        else:
            data = json.loads(text) if text.strip() else {}
    except (ValueError, yaml.YAMLError) as e:
        raise ConfigError(f"Corrupt state file {path}: {e}; fix it or remove it to start over") from e

    if not isinstance(data, dict):
        raise ConfigError(f"State file {path} must be an object/dict, got {type(data).__name__}")

    return data


def save_state(path: str, state: Dict[str, Any]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    public = redact(state)
    if _detect_format(p) in {"yaml", "yml"}:
        text = yaml.safe_dump(public, sort_keys=False)
    else:
        text = json.dumps(public, indent=2, sort_keys=True) + "\n"

    # State holds the admin user name and install history; keep it root-only.
    fd = os.open(str(p), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        f.write(text)
    os.chmod(p, 0o600)


def redact(state: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of state safe to write to disk."""

    public = copy.deepcopy({k: v for k, v in state.items() if k not in SECRET_KEYS})
    answers = (public.get("config") or {}).get("answers")
    if isinstance(answers, dict):
        for key in SECRET_ANSWERS:
            answers.pop(key, None)
    return public


def ensure_defaults(state: Dict[str, Any]) -> Dict[str, Any]:
    """Fill required keys with sane defaults (without overriding user values)."""

    state.setdefault("version", __version__)
    state.setdefault("config", {})
    state.setdefault("frognet", {})
    state.setdefault("execution", {})

    cfg = state["config"]
    cfg.setdefault("dry_run", False)
    cfg.setdefault("interactive", True)
    cfg.setdefault("network_repair", True)

    exe = state["execution"]
    exe.setdefault("current_step", None)
    exe.setdefault("completed_steps", [])
    exe.setdefault("errors", [])
    exe.setdefault("decisions", {})

    return state


def record_decision(state: Dict[str, Any], key: str, value: Any) -> None:
    state.setdefault("execution", {}).setdefault("decisions", {})[key] = value


def mark_step_completed(state: Dict[str, Any], step_id: str) -> None:
    exe = state.setdefault("execution", {})
    completed = exe.setdefault("completed_steps", [])
    if step_id not in completed:
        completed.append(step_id)


def is_step_completed(state: Dict[str, Any], step_id: str) -> bool:
    exe = state.get("execution") or {}
    completed = exe.get("completed_steps") or []
    return step_id in completed


def reset_progress(state: Dict[str, Any]) -> None:
    """Forget completed steps so the next run starts from the first step."""

    exe = state.setdefault("execution", {})
    exe["completed_steps"] = []
    exe["current_step"] = None
    exe["errors"] = []
    exe["decisions"] = {}
