from __future__ import annotations

import os
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from openbalti.exceptions import ConfigurationError


class MongoSettings(BaseSettings):
    """
    MongoDB settings.

    Env support:
      - MONGO_URL, MONGO_DB, MONGO_MAX_POOL_SIZE, ...
      - Also accepts MONGODB_URI as a fallback (the name older deployments used).
    """

    url: Optional[str] = Field(default=None)
    db: str = Field(default="openbalti")
    max_pool_size: int = Field(default=10)
    server_selection_timeout_ms: int = Field(default=5000)
    socket_timeout_ms: int = Field(default=45000)
    app_name: str = Field(default="openbalti")

    model_config = SettingsConfigDict(
        env_prefix="MONGO_",
        env_file=".env",
        extra="ignore",
    )

    @property
    def resolved_url(self) -> str:
        url = self.url or os.getenv("MONGODB_URI")
        if not url:
            raise ConfigurationError("MONGO_URL or MONGODB_URI must be set for database connectivity")
        return url


@lru_cache
def get_mongo_settings(**kwargs) -> MongoSettings:
    filtered = {k: v for k, v in kwargs.items() if v is not None}
    return MongoSettings(**filtered)
