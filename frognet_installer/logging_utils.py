from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional, TextIO

from .lib.env import PATHS

DEFAULT_LOG_PATH = PATHS.log_default

_RED = "\033[1;31m"
_GREEN = "\033[1;32m"
_YELLOW = "\033[1;33m"
_RESET = "\033[0m"


class ConsoleFormatter(logging.Formatter):
    """Terminal output with the familiar FrogNet prefixes.

    INFO -> "[*] msg", WARNING -> "[!] msg", ERROR and above -> "ERROR: msg".
    DEBUG records keep the logger name so they stay traceable.
    """

    def __init__(self, *, color: bool) -> None:
        super().__init__()
        self.color = color

    def _paint(self, code: str, text: str) -> str:
        if not self.color:
            return text
        return f"{code}{text}{_RESET}"

    def format(self, record: logging.LogRecord) -> str:
        msg = record.getMessage()
        if record.levelno >= logging.ERROR:
            line = f"{self._paint(_RED, 'ERROR:')} {msg}"
        elif record.levelno >= logging.WARNING:
            line = f"{self._paint(_YELLOW, '[!]')} {msg}"
        elif record.levelno >= logging.INFO:
            line = f"{self._paint(_GREEN, '[*]')} {msg}"
        else:
            line = f"[debug] {record.name}: {msg}"
        if record.exc_info and record.levelno < logging.ERROR:
            line += "\n" + self.formatException(record.exc_info)
        return line


def _stream_is_tty(stream: TextIO) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = True,
    stream: Optional[TextIO] = None,
) -> str:
    """Configure logging.

    Every command and decision is recorded to the log file (default
    /var/log/frognet-install.log). If /var/log is not writable the log falls
    back to ./frognet-installer.log and the intended path is still reported.

    Returns the actual file path being used.
    """

    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG)

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if getattr(logger, "_frognet_configured", False):
        return getattr(logger, "_frognet_log_path", log_path)

    chosen_path = log_path
    handlers: list[logging.Handler] = []

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    try:
        Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
        file_handler: logging.Handler = logging.FileHandler(log_path)
    except OSError:
        chosen_path = str(Path.cwd() / "frognet-installer.log")
        file_handler = logging.FileHandler(chosen_path)
    file_handler.setFormatter(fmt)
    file_handler.setLevel(logging.DEBUG)
    handlers.append(file_handler)

    if also_console:
        out = stream if stream is not None else sys.stderr
        console = logging.StreamHandler(out)
        console.setFormatter(ConsoleFormatter(color=_stream_is_tty(out)))
        console.setLevel(level)
        handlers.append(console)

    for h in handlers:
        logger.addHandler(h)

    setattr(logger, "_frognet_configured", True)
    setattr(logger, "_frognet_log_path", chosen_path)
    setattr(logger, "_frognet_handlers", handlers)

    logging.getLogger(__name__).debug(
        "Logging initialized (requested=%s, actual=%s)", log_path, chosen_path
    )
    return chosen_path


def reset_logging() -> None:
    """Drop handlers installed by configure_logging()."""

    logger = logging.getLogger()
    if not getattr(logger, "_frognet_configured", False):
        return
    for h in getattr(logger, "_frognet_handlers", []):
        logger.removeHandler(h)
        h.close()
    setattr(logger, "_frognet_configured", False)
    setattr(logger, "_frognet_handlers", [])
