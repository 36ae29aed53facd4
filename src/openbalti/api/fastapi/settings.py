from pydantic import BaseModel


class ApiConfig(BaseModel):
    base_prefix: str = "/api"
    routers_path: str = "openbalti.api.routers"
    cors_origins: list[str] | None = None
    max_request_bytes: int | None = None
    create_indexes: bool = True
