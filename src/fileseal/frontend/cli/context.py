"""Small helper to build the runtime settings shared by the CLI and the TUI."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional
import os

from fileseal.security.policy import DEFAULT_MIN_PASSWORD_LENGTH, PasswordPolicy


@dataclass
class CliContext:
    """Container for settings the front ends need."""

    policy: PasswordPolicy = field(default_factory=PasswordPolicy)
    output_dir: Path = field(default_factory=Path.cwd)
    password: Optional[str] = None
    log_level: str = "INFO"


def build_context(env: Optional[Mapping[str, str]] = None) -> CliContext:
    """
    Build a CliContext from environment variables.

    - ``FILESEAL_PASSWORD``: use this password instead of prompting. Handy
      for scripts; anything else on the machine that can read the
      environment can read it too.
    - ``FILESEAL_MIN_PASSWORD_LENGTH``: minimum password length when sealing
      (default 8). Has no effect on opening.
    - ``FILESEAL_OUTPUT_DIR``: where containers and restored files are written
      (default: the current directory).
    - ``FILESEAL_LOG_LEVEL``: root log level (default ``INFO``).
    """
    env = os.environ if env is None else env

    raw_min = env.get("FILESEAL_MIN_PASSWORD_LENGTH")
    try:
        min_length = int(raw_min) if raw_min else DEFAULT_MIN_PASSWORD_LENGTH
    except ValueError:
        raise ValueError(f"FILESEAL_MIN_PASSWORD_LENGTH must be an integer, got {raw_min!r}") from None
    if min_length < 1:
        raise ValueError("FILESEAL_MIN_PASSWORD_LENGTH must be at least 1")

    output_dir = env.get("FILESEAL_OUTPUT_DIR")

    return CliContext(
        policy=PasswordPolicy(min_length=min_length),
        output_dir=Path(output_dir).expanduser() if output_dir else Path.cwd(),
        password=env.get("FILESEAL_PASSWORD") or None,
        log_level=env.get("FILESEAL_LOG_LEVEL", "INFO"),
    )
