from .mongo.client import dispose_mongo, get_mongo_client, get_mongo_db, initialize_mongo
from .repository import NoSqlRepository

__all__ = [
    "NoSqlRepository",
    "initialize_mongo",
    "dispose_mongo",
    "get_mongo_client",
    "get_mongo_db",
]
