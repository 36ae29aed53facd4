from .core.env import ENV, IS_DEV, IS_LOCAL, IS_PROD, IS_TEST, Env, get_env, pick
from .core.logging import setup_logging
from .settings import AppSettings, get_app_settings

__all__ = [
    "ENV",
    "Env",
    "IS_DEV",
    "IS_LOCAL",
    "IS_PROD",
    "IS_TEST",
    "get_env",
    "pick",
    "setup_logging",
    "AppSettings",
    "get_app_settings",
]
