from __future__ import annotations

import getpass
from typing import Callable, Optional

from ..errors import ConfigError

MAX_TRIES = 3


def ask(
    question: str,
    default: Optional[str] = None,
    *,
    validate: Optional[Callable[[str], bool]] = None,
    error: str = "Invalid value.",
    input_fn: Callable[[str], str] = input,
) -> str:
    """Prompt with a default; ENTER accepts it. Re-asks on invalid input."""

    suffix = f" [default: {default}]" if default else ""
    for _ in range(MAX_TRIES):
        answer = input_fn(f"{question}{suffix}: ").strip() or (default or "")
        if answer and (validate is None or validate(answer)):
            return answer
        print(error if answer else "A value is required.")
    raise ConfigError(f"No valid answer for: {question}")


def confirm(question: str, *, default: bool = False, input_fn: Callable[[str], str] = input) -> bool:
    hint = "[Y/n]" if default else "[y/N]"
    answer = input_fn(f"{question} {hint}: ").strip().lower()
    if not answer:
        return default
    return answer in ("y", "yes")


def ask_password(
    question: str,
    *,
    min_length: int = 8,
    getpass_fn: Callable[[str], str] = getpass.getpass,
) -> str:
    for _ in range(MAX_TRIES):
        first = getpass_fn(f"{question}: ")
        if len(first) < min_length:
            print(f"Password must be at least {min_length} characters.")
            continue
        if getpass_fn("Repeat password: ") != first:
            print("Passwords do not match.")
            continue
        return first
    raise ConfigError("No valid admin password entered")
