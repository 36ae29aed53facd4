from .exceptions import ConfigurationError, DatabaseNotInitializedError, OpenBaltiError

__version__ = "0.4.0"

__all__ = [
    "OpenBaltiError",
    "DatabaseNotInitializedError",
    "ConfigurationError",
    "__version__",
]
