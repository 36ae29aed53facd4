from __future__ import annotations

import pytest

from openbalti.security.passwords import (
    PasswordPolicy,
    PasswordValidationError,
    hash_password,
    validate_password,
    verify_password,
)


def test_default_policy_accepts_plain_long_password():
    validate_password("skardu valley")


def test_short_and_common_passwords_are_rejected():
    with pytest.raises(PasswordValidationError) as exc:
        validate_password("short")
    assert exc.value.reasons == ["Password must be at least 8 characters"]

    with pytest.raises(PasswordValidationError) as exc:
        validate_password("Password")
    assert "Password is too common" in exc.value.reasons


def test_strict_policy_collects_every_reason():
    policy = PasswordPolicy(require_upper=True, require_digit=True, require_symbol=True)
    with pytest.raises(PasswordValidationError) as exc:
        validate_password("lowercaseonly", policy)
    assert exc.value.reasons == [
        "Password must contain an uppercase letter",
        "Password must contain a digit",
        "Password must contain a symbol",
    ]


def test_password_over_bcrypt_limit():
    with pytest.raises(PasswordValidationError) as exc:
        validate_password("ཆ" * 30)  # 3 bytes each
    assert exc.value.reasons == ["Password must be at most 72 bytes"]


def test_hash_and_verify():
    hashed = hash_password("balti-dictionary")
    assert hashed.startswith("$2")
    assert verify_password("balti-dictionary", hashed)
    assert not verify_password("wrong", hashed)


def test_verify_without_usable_hash():
    assert verify_password("anything", None) is False
    assert verify_password("anything", "not-a-bcrypt-hash") is False
