"""Caller-facing password policy for sealing.

This is a usability rule, not part of the container format: opening never
consults it.
"""
from dataclasses import dataclass

from fileseal.core.exceptions import PolicyError, PolicyReason

DEFAULT_MIN_PASSWORD_LENGTH = 8


@dataclass(frozen=True)
class PasswordPolicy:
    min_length: int = DEFAULT_MIN_PASSWORD_LENGTH

    def check(self, password: str) -> None:
        if password is None or len(password) < self.min_length:
            raise PolicyError(
                PolicyReason.PASSWORD_TOO_SHORT,
                f"Password must be at least {self.min_length} characters",
            )


DEFAULT_POLICY = PasswordPolicy()
