"""FrogNet node installer (Python-first, state-driven).

Core design goals:
- State-driven and resumable across the install reboot
- Idempotent steps
- Thin wrappers around apt, tar, cron and sysctl
- Centralized logging
"""

__version__ = "2.0.0"

__all__ = ["__version__"]
