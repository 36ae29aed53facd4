from __future__ import annotations


class OpenBaltiError(Exception):
    """Base exception for failures that are not HTTP responses."""


class DatabaseNotInitializedError(OpenBaltiError):
    def __init__(self) -> None:
        super().__init__("Mongo client is not initialized; call initialize_mongo() first")


class ConfigurationError(OpenBaltiError):
    pass


__all__ = ["OpenBaltiError", "DatabaseNotInitializedError", "ConfigurationError"]
