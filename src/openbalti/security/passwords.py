from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

import bcrypt

COMMON_PASSWORDS = {"password", "12345678", "123456789", "qwertyui", "letmein1"}

BCRYPT_ROUNDS = 12


@dataclass
class PasswordPolicy:
    # Signup has always accepted any 8+ character password; stricter rules are opt-in.
    min_length: int = 8
    max_length: int = 72  # bcrypt ignores bytes past 72
    require_upper: bool = False
    require_lower: bool = False
    require_digit: bool = False
    require_symbol: bool = False
    forbid_common: bool = True


class PasswordValidationError(Exception):
    def __init__(self, reasons: Iterable[str]):
        super().__init__("Password validation failed")
        self.reasons = list(reasons)


UPPER = re.compile(r"[A-Z]")
LOWER = re.compile(r"[a-z]")
DIGIT = re.compile(r"[0-9]")
SYMBOL = re.compile(r"[!@#$%^&*()_+=\-{}\[\]:;,.?/]")


def validate_password(pw: str, policy: PasswordPolicy | None = None) -> None:
    policy = policy or PasswordPolicy()
    reasons: list[str] = []
    if len(pw) < policy.min_length:
        reasons.append(f"Password must be at least {policy.min_length} characters")
    if len(pw.encode("utf-8")) > policy.max_length:
        reasons.append(f"Password must be at most {policy.max_length} bytes")
    if policy.require_upper and not UPPER.search(pw):
        reasons.append("Password must contain an uppercase letter")
    if policy.require_lower and not LOWER.search(pw):
        reasons.append("Password must contain a lowercase letter")
    if policy.require_digit and not DIGIT.search(pw):
        reasons.append("Password must contain a digit")
    if policy.require_symbol and not SYMBOL.search(pw):
        reasons.append("Password must contain a symbol")
    if policy.forbid_common and pw.lower() in COMMON_PASSWORDS:
        reasons.append("Password is too common")
    if reasons:
        raise PasswordValidationError(reasons)


def hash_password(pw: str) -> str:
    return bcrypt.hashpw(pw.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(pw: str, hashed: str | None) -> bool:
    if not hashed:
        return False
    try:
        return bcrypt.checkpw(pw.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # not a bcrypt hash (e.g. an account created through an OAuth provider)
        return False


__all__ = [
    "PasswordPolicy",
    "PasswordValidationError",
    "validate_password",
    "hash_password",
    "verify_password",
]
