from __future__ import annotations

import importlib
import logging
import pkgutil
from types import ModuleType

from fastapi import FastAPI

logger = logging.getLogger(__name__)


def _is_private(module_name: str) -> bool:
    return module_name.rsplit(".", 1)[-1].startswith("_")


def register_all_routers(
    app: FastAPI,
    *,
    base_package: str,
    prefix: str = "",
) -> list[str]:
    """
    Recursively discover and register all FastAPI routers under a routers package.

    Any module with a top-level ``router`` is included. A module may set
    ``ROUTER_PREFIX`` (appended to ``prefix``), ``ROUTER_TAG`` and
    ``INCLUDE_ROUTER_IN_SCHEMA``. Modules are visited in name order, so inside a
    package a module with static paths must sort before one that declares
    ``/{id}`` on the same prefix.

    Unlike a plugin loader, an import failure here is a bug in the app and is
    re-raised.

    Returns the names of the modules whose router was included.
    """
    try:
        package_module: ModuleType = importlib.import_module(base_package)
    except ImportError as exc:
        raise RuntimeError(f"Could not import base_package '{base_package}': {exc}") from exc

    if not hasattr(package_module, "__path__"):
        raise RuntimeError(f"Provided base_package '{base_package}' is not a package (no __path__).")

    included: list[str] = []
    for _, module_name, _ in pkgutil.walk_packages(package_module.__path__, prefix=f"{base_package}."):
        if _is_private(module_name):
            continue
        module = importlib.import_module(module_name)
        router = getattr(module, "router", None)
        if router is None:
            continue
        router_prefix = getattr(module, "ROUTER_PREFIX", None)
        router_tag = getattr(module, "ROUTER_TAG", None)
        include_kwargs: dict = {
            "prefix": prefix.rstrip("/") + (router_prefix or ""),
            "include_in_schema": getattr(module, "INCLUDE_ROUTER_IN_SCHEMA", True),
        }
        if router_tag:
            include_kwargs["tags"] = [router_tag]
        app.include_router(router, **include_kwargs)
        included.append(module_name)
        logger.debug(
            "Included router from module: %s (prefix=%s, tag=%s)",
            module_name,
            include_kwargs["prefix"],
            router_tag,
        )
    return included
