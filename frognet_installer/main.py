from __future__ import annotations

import argparse
import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from . import __version__
from .config import load_installer_config, merge_config
from .errors import InstallAborted, InstallerError
from .lib.env import PATHS
from .logging_utils import configure_logging
from .pipeline import Step, run_pipeline
from .state_store import ensure_defaults, is_step_completed, load_state, reset_progress, save_state
from .steps import (
    ConfigureStep,
    ExtractPayloadStep,
    FreeDnsPortStep,
    InstallPackagesStep,
    IpForwardingStep,
    LaunchStartScriptStep,
    LoadEnvStep,
    MapInterfacesStep,
    NetworkSanityStep,
    PreflightStep,
    RebootStep,
    RegisterStep,
    RemoveCronStep,
    ScheduleRebootStep,
    StageBundleStep,
)
from .steps.step_90_reboot import reboot_host

logger = logging.getLogger(__name__)


DEFAULT_STATE_PATH = PATHS.state_default


def build_install_steps() -> List[Step]:
    return [
        PreflightStep(),
        ConfigureStep(),
        InstallPackagesStep(),
        StageBundleStep(),
        ExtractPayloadStep(),
        MapInterfacesStep(),
        IpForwardingStep(),
        NetworkSanityStep(),
        RegisterStep(),
        ScheduleRebootStep(),
        RebootStep(),
    ]


def build_reboot_steps() -> List[Step]:
    return [
        LoadEnvStep(),
        FreeDnsPortStep(),
        LaunchStartScriptStep(),
        RemoveCronStep(),
    ]


def _finish_install(state: Dict[str, Any], steps: List[Step]) -> None:
    """After the post-reboot phase, archive the run so the next install starts fresh."""

    if not all(is_step_completed(state, s.step_id) for s in steps):
        return
    exe = state.get("execution") or {}
    state["last_install"] = {
        "finished_at": datetime.now(timezone.utc).replace(microsecond=0).isoformat(),
        "frognet": dict(state.get("frognet") or {}),
        "decisions": dict(exe.get("decisions") or {}),
    }
    reset_progress(state)
    logger.info("Post-reboot startup complete.")


def run(
    *,
    state_path: str = DEFAULT_STATE_PATH,
    log_path: Optional[str] = None,
    config_path: Optional[str] = None,
    on_reboot: bool = False,
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
    force: bool = False,
    fresh: bool = False,
    overrides: Optional[Dict[str, Any]] = None,
    steps: Optional[List[Step]] = None,
) -> Dict[str, Any]:
    """Run the install (or post-reboot) pipeline, persisting state for resume."""

    requested_log = log_path or (PATHS.reboot_log_default if on_reboot else PATHS.log_default)
    actual_log_path = configure_logging(log_path=requested_log)

    file_cfg = load_installer_config(config_path) if config_path else {}

    state = ensure_defaults(load_state(state_path))
    if fresh:
        reset_progress(state)
    # Config is rebuilt each run: the file plus CLI flags, never stale flags from a previous run.
    state["config"] = merge_config(file_cfg, overrides or {})
    if on_reboot:
        state["config"]["interactive"] = False
    state = ensure_defaults(state)

    paths = state.setdefault("execution", {}).setdefault("paths", {})
    paths["state_path"] = os.path.abspath(state_path)
    paths["config_path"] = os.path.abspath(config_path) if config_path else None
    paths["log_path_requested"] = requested_log
    paths["log_path_actual"] = actual_log_path

    if steps is None:
        steps = build_reboot_steps() if on_reboot else build_install_steps()

    logger.debug("frognet-installer %s (%s)", __version__, "post-reboot" if on_reboot else "install")

    try:
        result = run_pipeline(
            state=state,
            steps=steps,
            start_at=start_at,
            stop_after=stop_after,
            force=force,
        )
        state = result.state
        state.setdefault("execution", {}).setdefault("summary", {})["ran_steps"] = result.ran_steps
        state.setdefault("execution", {}).setdefault("summary", {})["skipped_steps"] = result.skipped_steps
        if not result.ran_steps:
            logger.info("All steps already completed; use --fresh to install again.")
        if on_reboot:
            _finish_install(state, steps)
        return state
    except InstallAborted:
        raise
    except Exception as e:
        if not isinstance(e, InstallerError):
            logger.exception("Installer failed")
        state.setdefault("execution", {}).setdefault("errors", []).append(
            {
                "step": (state.get("execution") or {}).get("current_step"),
                "error": str(e),
            }
        )
        raise
    finally:
        reboot = bool(state.setdefault("execution", {}).pop("reboot_pending", False))
        save_state(state_path, state)
        if reboot:
            reboot_host(dry_run=bool(state["config"].get("dry_run", False)))


def _overrides_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {
        "dry_run": True if args.dry_run else None,
        "interactive": False if args.non_interactive else None,
        "packages_file": args.packages_file,
    }
    if args.no_reboot:
        overrides["reboot"] = {"enabled": False}
    if args.register_email:
        overrides["registration"] = {"email": args.register_email}
    return overrides


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="frognet-installer", description="Provision this host as a FrogNet node.")
    p.add_argument("--on-reboot", action="store_true", help="Continue the install after the reboot (run from cron)")
    p.add_argument("--config", default=None, help="Installer config / answer file (yaml)")
    p.add_argument("--state", default=DEFAULT_STATE_PATH, help="Path to installer state (json|yaml)")
    p.add_argument("--log", default=None, help="Path to installer log")
    p.add_argument("--start-at", default=None, help="Start at step_id (e.g. 40_extract_payload)")
    p.add_argument("--stop-after", default=None, help="Stop after step_id")
    p.add_argument("--force", action="store_true", help="Re-run steps even if marked completed")
    p.add_argument("--fresh", action="store_true", help="Forget completed steps and install from scratch")
    p.add_argument("--dry-run", action="store_true", help="Log commands without changing the system")
    p.add_argument("--non-interactive", action="store_true", help="Never prompt; use config answers and defaults")
    p.add_argument("--no-reboot", action="store_true", help="Do not reboot at the end of the install")
    p.add_argument("--register-email", default=None, help="Register this node with the given e-mail")
    p.add_argument("--packages-file", default=None, help="requirements.txt style package list")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    args = p.parse_args(argv)

    try:
        run(
            state_path=args.state,
            log_path=args.log,
            config_path=args.config,
            on_reboot=args.on_reboot,
            start_at=args.start_at,
            stop_after=args.stop_after,
            force=args.force,
            fresh=args.fresh,
            overrides=_overrides_from_args(args),
        )
    except InstallAborted as e:
        logger.info("%s", e)
        return 0
    except InstallerError as e:
        logger.error("%s", e)
        return 1
    except FileNotFoundError as e:
        logger.error("File not found: %s", e.filename or e)
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted; re-run to resume where the install stopped.")
        return 130
    return 0
