from .add import add_mongo
from .deps import get_db

__all__ = ["add_mongo", "get_db"]
