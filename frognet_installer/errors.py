from __future__ import annotations


class InstallerError(RuntimeError):
    """Base class for failures reported to the user without a traceback."""


class PreflightError(InstallerError):
    pass


class ConfigError(InstallerError):
    pass


class CommandError(InstallerError):
    def __init__(self, message: str, *, returncode: int, stderr: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class InstallAborted(InstallerError):
    """The user declined to continue; nothing more was changed."""
