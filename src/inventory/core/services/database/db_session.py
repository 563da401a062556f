"""Engine construction and session handling for the book store."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from loguru import logger
from sqlalchemy import Engine, StaticPool, text
from sqlmodel import Session, create_engine

from src.inventory.runtime.config.config_data import ConfigData
from src.inventory.runtime.context import get_config

_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


def _sqlite_options(config: ConfigData) -> dict[str, Any]:
    options: dict[str, Any] = {
        # Sessions are opened from FastAPI's threadpool; timeout is the lock wait
        "connect_args": {"check_same_thread": False, "timeout": 20},
    }
    if config.database.url in _MEMORY_URLS:
        # Every connection to :memory: is a new empty database
        options["poolclass"] = StaticPool
    if config.app.environment == "production":
        logger.warning("SQLite is not recommended for production; use a server database")
    return options


def _server_options(config: ConfigData) -> dict[str, Any]:
    db = config.database
    return {
        "pool_size": db.pool_size,
        "max_overflow": db.max_overflow,
        "pool_timeout": db.pool_timeout,
        "pool_recycle": db.pool_recycle,
        "pool_pre_ping": True,
    }


def build_engine(config: ConfigData) -> Engine:
    """Create the engine described by ``config.database``."""
    options = _sqlite_options(config) if config.database.is_sqlite else _server_options(config)
    logger.info("Creating database engine for environment: {}", config.app.environment)
    return create_engine(config.database.connection_string, echo=False, **options)


class DbSessionService:
    """Owns the engine and hands out sessions bound to it.

    ``engine`` may be passed in, in which case ``config`` is only used for
    reference and no engine is built.
    """

    def __init__(self, config: ConfigData | None = None, engine: Engine | None = None):
        self._config = config or get_config()
        self._engine = engine if engine is not None else build_engine(self._config)

    @property
    def engine(self) -> Engine:
        return self._engine

    def get_session(self) -> Session:
        # Entities are built from rows after commit
        return Session(self._engine, expire_on_commit=False)

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Session that commits on success and rolls back on error."""
        session = self.get_session()
        try:
            yield session
            session.commit()
        except Exception as e:
            session.rollback()
            logger.bind(error_type=type(e).__name__).warning("Transaction rolled back: {}", e)
            raise
        finally:
            session.close()

    def health_check(self) -> bool:
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except Exception as e:
            logger.bind(error_type=type(e).__name__).error("Database health check failed: {}", e)
            return False
        return True

    def get_pool_status(self) -> dict[str, int]:
        """Connection pool counters; pools without a counter report 0."""
        pool = self._engine.pool
        counters = {
            "size": "size",
            "checked_in": "checkedin",
            "checked_out": "checkedout",
            "overflow": "overflow",
        }
        return {
            key: getattr(pool, method)() if hasattr(pool, method) else 0
            for key, method in counters.items()
        }

    def dispose(self) -> None:
        self._engine.dispose()
