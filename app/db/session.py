"""
Connection management for the job and resource stores.

A single StoreConnection is built at process start, handed to every
access-module call, and closed at shutdown.
"""
import logging
import threading
from typing import Dict, Optional, Type

from fastapi import Request
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.errors import ConfigurationError
from app.db.base import Base

logger = logging.getLogger(__name__)


class Collection:
    """Ready-to-use handle on one entity type's table."""

    def __init__(self, model: Type[Base], session_factory: sessionmaker):
        self.model = model
        self._session_factory = session_factory

    @property
    def name(self) -> str:
        return self.model.__tablename__

    def session(self) -> Session:
        return self._session_factory()


class StoreConnection:
    """
    Owns the engine and the per-entity collection handles.

    The engine's connection pool is shared by all concurrent requests.
    """

    def __init__(self, database_url: Optional[str], echo: bool = False):
        if not database_url:
            raise ConfigurationError("DATABASE_URL is not set")
        self.database_url = database_url
        self.echo = echo
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None
        self._collections: Dict[str, Collection] = {}
        self._lock = threading.Lock()

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise ConfigurationError("Store is not connected; call connect() first")
        return self._engine

    def _engine_kwargs(self) -> dict:
        kwargs = {"echo": self.echo, "pool_pre_ping": True}
        if self.database_url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            if ":memory:" in self.database_url or self.database_url in ("sqlite://", "sqlite+pysqlite://"):
                kwargs["poolclass"] = StaticPool
        return kwargs

    def connect(self) -> "StoreConnection":
        """
        Create the engine and verify the database is reachable.

        Raises:
            ConfigurationError: If the database cannot be reached
        """
        if self._engine is not None:
            return self

        try:
            engine = create_engine(self.database_url, **self._engine_kwargs())
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.error(f"Store unreachable: {e}")
            raise ConfigurationError(f"Could not connect to the database: {e}") from e

        self._engine = engine
        self._session_factory = sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)
        logger.info(f"Store connected: dialect={engine.dialect.name}")
        return self

    def collection(self, model: Type[Base]) -> Collection:
        """
        Return the memoized handle for an entity type.

        The first call per model creates its table and unique indexes if
        they are missing. Repeating this is harmless.
        """
        name = model.__tablename__
        handle = self._collections.get(name)
        if handle is not None:
            return handle

        with self._lock:
            handle = self._collections.get(name)
            if handle is None:
                self._ensure_schema(model)
                handle = Collection(model, self._session_factory)
                self._collections[name] = handle
        return handle

    def _ensure_schema(self, model: Type[Base]) -> None:
        engine = self.engine
        table = model.__table__
        Base.metadata.create_all(bind=engine, tables=[table])

        # Tables created before the slug index existed still need it
        existing = {ix["name"] for ix in inspect(engine).get_indexes(table.name)}
        for index in table.indexes:
            if index.name not in existing:
                logger.info(f"Creating index {index.name} on {table.name}")
                index.create(bind=engine)

    def ping(self) -> bool:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except (SQLAlchemyError, ConfigurationError) as e:
            logger.warning(f"Store ping failed: {e}")
            return False

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            logger.info("Store connection closed")
        self._engine = None
        self._session_factory = None
        self._collections.clear()


def get_store(request: Request) -> StoreConnection:
    """FastAPI dependency returning the process-wide store handle."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise ConfigurationError("Store has not been initialised")
    return store
