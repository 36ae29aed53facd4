from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    # flat = easy env overrides
    name: str = "OpenBalti Dictionary"
    version: str = "0.4.0"
    public_base_url: str = "https://openbalti.vercel.app"
    cors_origins: str = "http://localhost:3000"
    media_root: str = "media"
    media_url: str = "/media"
    max_upload_bytes: int = Field(default=5 * 1024 * 1024)

    model_config = SettingsConfigDict(
        env_prefix="APP_",  # APP_NAME, APP_PUBLIC_BASE_URL, ...
        env_file=".env",
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache
def get_app_settings(**kwargs) -> AppSettings:
    # Only include kwargs that are not None, so defaults in AppSettings are used
    filtered_kwargs = {k: v for k, v in kwargs.items() if v is not None}
    return AppSettings(**filtered_kwargs)
