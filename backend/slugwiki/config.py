import os
from dotenv import load_dotenv

load_dotenv()


def _int_env(name: str, default: int) -> int:
    return int(os.getenv(name, default))


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_size": _int_env("DB_POOL_SIZE", 5),
        "pool_timeout": _int_env("DB_POOL_TIMEOUT", 30),
    }

    # Blocking database work runs on this many worker threads
    DB_WORKER_THREADS = _int_env("DB_WORKER_THREADS", 4)

    # JSON manifest written by the asset build step
    ASSET_MANIFEST = os.getenv("ASSET_MANIFEST")

    CHANGES_PAGE_SIZE = _int_env("CHANGES_PAGE_SIZE", 30)
    SEARCH_PAGE_SIZE = _int_env("SEARCH_PAGE_SIZE", 10)
    SEARCH_SNIPPET_SIZE = _int_env("SEARCH_SNIPPET_SIZE", 8)

    # Header set by a trusted reverse proxy naming the editing user
    IDENTITY_HEADER = os.getenv("IDENTITY_HEADER")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", "sqlite:///wiki.db")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")


class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")


class TestingConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URI", "sqlite:///test-wiki.db")
    DB_WORKER_THREADS = 4
    ASSET_MANIFEST = None


config_by_name = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}
