from __future__ import annotations

from typing import Optional

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from openbalti.app.core.env import pick


class AuthSettings(BaseSettings):
    jwt_secret: SecretStr = SecretStr("dev-insecure-change-me")
    jwt_algorithm: str = "HS256"
    jwt_lifetime_seconds: int = 60 * 60 * 24 * 7

    cookie_name: str = "openbalti_session"
    cookie_secure: bool = pick(prod=True, nonprod=False)
    cookie_samesite: str = "lax"

    # Bootstrap secret for /api/admin/direct-set-owner; unset disables the route.
    owner_secret_key: Optional[SecretStr] = None

    model_config = SettingsConfigDict(env_prefix="AUTH_", env_file=".env", extra="ignore")


_settings: AuthSettings | None = None


def get_auth_settings() -> AuthSettings:
    global _settings
    if _settings is None:
        _settings = AuthSettings()
    return _settings
