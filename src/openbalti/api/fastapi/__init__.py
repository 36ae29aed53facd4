import logging
from collections import defaultdict
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute
from fastapi.staticfiles import StaticFiles

from openbalti.api.fastapi.db.nosql.mongo.add import add_mongo
from openbalti.api.fastapi.middleware.errors.catchall import CatchAllExceptionMiddleware
from openbalti.api.fastapi.middleware.errors.handlers import register_error_handlers
from openbalti.api.fastapi.middleware.request_size_limit import RequestSizeLimitMiddleware
from openbalti.api.fastapi.routers import register_all_routers
from openbalti.api.fastapi.settings import ApiConfig
from openbalti.app.core.env import ENV
from openbalti.app.settings import AppSettings, get_app_settings

logger = logging.getLogger(__name__)


def _gen_operation_id_factory():
    used: dict[str, int] = defaultdict(int)

    def _normalize(s: str) -> str:
        return "_".join(x for x in s.strip().replace(" ", "_").replace("-", "_").split("_") if x)

    def _gen(route: APIRoute) -> str:
        base = _normalize(route.name or getattr(route.endpoint, "__name__", "op"))
        tag = _normalize(route.tags[0]) if route.tags else ""
        method = next(iter(route.methods or ["GET"])).lower()

        candidate = base
        if used[candidate]:
            if tag and not base.startswith(tag):
                candidate = f"{tag}_{base}"
            if used[candidate]:
                if not candidate.endswith(f"_{method}"):
                    candidate = f"{candidate}_{method}"
                if used[candidate]:
                    candidate = f"{candidate}_{used[candidate] + 1}"

        used[candidate] += 1
        return candidate

    return _gen


def create_app(
    app_config: AppSettings | None = None,
    api_config: ApiConfig | None = None,
    *,
    with_mongo: bool = True,
) -> FastAPI:
    """
    Build the OpenBalti API.

    ``with_mongo=False`` skips the motor lifespan; tests pass it and override
    ``get_db`` with an in-memory database instead.
    """
    app_settings = app_config or get_app_settings()
    api_config = api_config or ApiConfig()

    app = FastAPI(
        title=app_settings.name,
        version=app_settings.version,
        generate_unique_id_function=_gen_operation_id_factory(),
    )

    origins = api_config.cors_origins or app_settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(
        RequestSizeLimitMiddleware,
        max_bytes=api_config.max_request_bytes or app_settings.max_upload_bytes,
    )

    # Error handling
    app.add_middleware(CatchAllExceptionMiddleware)
    register_error_handlers(app)

    register_all_routers(app, base_package=api_config.routers_path, prefix=api_config.base_prefix)

    media_root = Path(app_settings.media_root)
    media_root.mkdir(parents=True, exist_ok=True)
    app.mount(app_settings.media_url, StaticFiles(directory=str(media_root)), name="media")

    if with_mongo:
        add_mongo(app, create_indexes=api_config.create_indexes)

    logger.info(f"{app_settings.version} version of {app_settings.name} initialized [env: {ENV}]")
    return app


__all__ = ["create_app"]
