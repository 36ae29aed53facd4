"""Deployment environment for the dictionary API.

Read from ``APP_ENV``, falling back to ``NODE_ENV`` so existing deployments
of the web app keep their setting. Anything unset resolves to ``local``.
"""

from __future__ import annotations

import os
import warnings
from enum import StrEnum
from functools import cache


class Env(StrEnum):
    LOCAL = "local"
    DEV = "dev"
    TEST = "test"
    PROD = "prod"


_ALIASES: dict[str, Env] = {
    "development": Env.DEV,
    "testing": Env.TEST,
    "preview": Env.TEST,
    "production": Env.PROD,
}


def _normalize(raw: str | None) -> Env | None:
    if not raw:
        return None
    value = raw.strip().lower()
    if value in Env.__members__.values():
        return Env(value)
    return _ALIASES.get(value)


@cache
def get_env() -> Env:
    raw = os.getenv("APP_ENV") or os.getenv("NODE_ENV")
    env = _normalize(raw)
    if env is not None:
        return env
    if raw:
        warnings.warn(f"Unrecognized environment '{raw}', using 'local'.", RuntimeWarning, stacklevel=2)
    return Env.LOCAL


ENV: Env = get_env()
IS_LOCAL = ENV is Env.LOCAL
IS_DEV = ENV is Env.DEV
IS_TEST = ENV is Env.TEST
IS_PROD = ENV is Env.PROD


def pick(*, prod, nonprod, **per_env):
    """
    ``prod`` in production, otherwise the value given for the current env
    name (``dev=``, ``test=``, ``local=``) or ``nonprod``.

        cookie_secure = pick(prod=True, nonprod=False)
    """
    env = get_env()
    if env is Env.PROD:
        return prod
    return per_env.get(env.value, nonprod)
