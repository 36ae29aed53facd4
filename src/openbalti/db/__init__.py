from .settings import MongoSettings, get_mongo_settings

__all__ = ["MongoSettings", "get_mongo_settings"]
