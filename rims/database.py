import asyncio
import base64
import logging
import sqlite3
from collections.abc import Iterable, Sequence
from typing import Any

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from rims.config import settings
from rims.schema import (
    ID_WATERMARK_PREFIX,
    ID_WATERMARK_UPSERT,
    create_schema,
    read_schema_version,
    upgrade_schema,
    write_schema_version,
)
from rims.storage import KeyValueStore

logger = logging.getLogger(__name__)

Statement = tuple[str, Sequence[Any]]


class Base(DeclarativeBase):
    pass


def _create_engine(snapshot: bytes | None = None) -> Engine:
    """A single in-memory SQLite connection, optionally restored from a snapshot."""

    def connect() -> sqlite3.Connection:
        conn = sqlite3.connect(":memory:", check_same_thread=False)
        if snapshot is not None:
            conn.deserialize(snapshot)
        return conn

    return create_engine("sqlite://", creator=connect, poolclass=StaticPool)


class Database:
    """Owns the embedded SQLite engine and its durable snapshot.

    Every committed write serializes the whole database and stores it,
    base64-encoded, under ``storage_key``. Until :meth:`initialize` has
    finished, reads return nothing and writes are skipped.
    """

    def __init__(self, store: KeyValueStore, storage_key: str | None = None):
        self.store = store
        self.storage_key = storage_key or settings.DB_STORAGE_KEY
        self._engine: Engine | None = None
        self._init_task: asyncio.Future | None = None

    @property
    def is_initialized(self) -> bool:
        return self._engine is not None

    async def initialize(self) -> "Database":
        if self._engine is not None:
            return self
        # Concurrent callers share one in-flight open
        if self._init_task is None:
            self._init_task = asyncio.ensure_future(asyncio.to_thread(self._open))
        try:
            await asyncio.shield(self._init_task)
        finally:
            if self._init_task is not None and self._init_task.done():
                self._init_task = None
        return self

    def _open(self) -> None:
        if self._engine is not None:
            return
        saved = self.store.get(self.storage_key)
        if saved:
            engine = None
            try:
                engine = _create_engine(base64.b64decode(saved, validate=True))
                with engine.begin() as conn:
                    upgraded = upgrade_schema(conn, read_schema_version(conn))
                self._engine = engine
                logger.info("Loaded existing SQLite database from storage")
                if upgraded:
                    self.persist()
                return
            except Exception:
                logger.exception("Failed to load database from storage, creating a new one (stored data is lost)")
                if engine is not None:
                    engine.dispose()
        engine = _create_engine()
        with engine.begin() as conn:
            create_schema(conn)
            write_schema_version(conn)
        self._engine = engine
        self.persist()
        logger.info("Created new SQLite database")

    def close(self) -> None:
        if self._engine is None:
            return
        self.persist()
        self._engine.dispose()
        self._engine = None

    def persist(self) -> bool:
        """Write the full snapshot to storage. Failures are logged, not raised."""
        if self._engine is None:
            return False
        try:
            raw = self._engine.raw_connection()
            try:
                data = raw.driver_connection.serialize()
            finally:
                raw.close()
            self.store.set(self.storage_key, base64.b64encode(data).decode("ascii"))
        except Exception:
            logger.exception("Failed to persist database to storage")
            return False
        return True

    def query(self, sql: str, params: Sequence[Any] = ()) -> list[dict[str, Any]]:
        if self._engine is None:
            return []
        with self._engine.connect() as conn:
            result = conn.exec_driver_sql(sql, tuple(params))
            return [dict(row) for row in result.mappings()]

    def scalar(self, sql: str, params: Sequence[Any] = (), default: Any = None) -> Any:
        rows = self.query(sql, params)
        if not rows:
            return default
        value = next(iter(rows[0].values()))
        return default if value is None else value

    def execute(self, sql: str, params: Sequence[Any] = (), persist: bool = True) -> int:
        """Run one write statement and return the number of rows it changed."""
        if self._engine is None:
            logger.warning("Database not initialized, skipping statement: %s", sql)
            return 0
        with self._engine.begin() as conn:
            changes = conn.exec_driver_sql(sql, tuple(params)).rowcount
        if persist:
            self.persist()
        return changes

    def transaction(self, statements: Iterable[Statement], persist: bool = True) -> list[int]:
        """Run statements atomically; any failure rolls all of them back and re-raises."""
        if self._engine is None:
            logger.warning("Database not initialized, skipping transaction")
            return []
        with self._engine.begin() as conn:
            changes = [conn.exec_driver_sql(sql, tuple(params)).rowcount for sql, params in statements]
        if persist:
            self.persist()
        return changes

    def next_id(self, table: str) -> int:
        if self._engine is None:
            return 1
        current_max = self.scalar(f"SELECT COALESCE(MAX(id), 0) FROM {table}", default=0)
        watermark = self.scalar(
            "SELECT value FROM app_metadata WHERE key = ?", (ID_WATERMARK_PREFIX + table,), default=0
        )
        return max(int(current_max), int(watermark)) + 1

    @staticmethod
    def id_watermark_statement(table: str, used_id: int) -> Statement:
        """Statement recording that ``used_id`` was handed out for ``table``.

        Run it in the same transaction as the insert so ids are never reused
        after a delete.
        """
        return ID_WATERMARK_UPSERT, (ID_WATERMARK_PREFIX + table, str(used_id))
