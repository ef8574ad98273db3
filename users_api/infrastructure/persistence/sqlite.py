"""
SQLite-backed user persistence.
"""

import asyncio
import sqlite3
import threading
import uuid
from contextlib import contextmanager
from typing import Iterator, List, Optional

from users_api.domain.exceptions import DataAccessError
from users_api.domain.interfaces.base import ILogger
from users_api.domain.interfaces.user_repository import IUserRepository
from users_api.domain.models.configuration import UsersApiConfiguration
from users_api.domain.models.entities import User


IN_MEMORY_DATABASE = ":memory:"


class SqliteConnectionFactory:
    """Opens connections to the configured SQLite database.

    File databases get a fresh connection per unit of work. An in-memory
    database only lives as long as its connection, so that case keeps a
    single shared connection until close().
    """

    def __init__(self, config: UsersApiConfiguration):
        self.database_path = config.database_path
        self.timeout = config.connection_timeout
        self._shared: Optional[sqlite3.Connection] = None
        self._lock = threading.RLock()

    @property
    def is_in_memory(self) -> bool:
        return self.database_path == IN_MEMORY_DATABASE

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(
            self.database_path,
            timeout=self.timeout,
            check_same_thread=False
        )

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection inside a transaction."""
        if self.is_in_memory:
            with self._lock:
                if self._shared is None:
                    self._shared = self._connect()
                with self._shared:
                    yield self._shared
            return

        conn = self._connect()
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    def close(self) -> None:
        with self._lock:
            if self._shared is not None:
                self._shared.close()
                self._shared = None


class DatabaseInitializer:
    """Creates the users schema when it is missing."""

    def __init__(self, connection_factory: SqliteConnectionFactory, logger: ILogger):
        self.connection_factory = connection_factory
        self.logger = logger

    def initialize(self) -> None:
        try:
            with self.connection_factory.connection() as conn:
                conn.execute(
                    "CREATE TABLE IF NOT EXISTS Users ("
                    "Id TEXT PRIMARY KEY, "
                    "FullName TEXT NOT NULL)"
                )
        except sqlite3.Error as e:
            self.logger.error(f"Database initialization failed: {e}",
                              database=self.connection_factory.database_path)
            raise DataAccessError(
                "Unable to initialize database",
                operation="initialize",
                context={'database': self.connection_factory.database_path}
            ) from e

        self.logger.info("Database initialized",
                         database=self.connection_factory.database_path)


class SqliteUserRepository(IUserRepository):
    """User repository over a SQLite table.

    Blocking sqlite3 calls run in a worker thread so every method can be
    awaited from the event loop.
    """

    def __init__(self, connection_factory: SqliteConnectionFactory):
        self.connection_factory = connection_factory

    async def get_all(self) -> List[User]:
        return await asyncio.to_thread(self._get_all)

    async def get_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        return await asyncio.to_thread(self._get_by_id, user_id)

    async def create(self, user: User) -> bool:
        return await asyncio.to_thread(self._create, user)

    async def delete_by_id(self, user_id: uuid.UUID) -> bool:
        return await asyncio.to_thread(self._delete_by_id, user_id)

    def _get_all(self) -> List[User]:
        with self._unit_of_work("get_all") as conn:
            rows = conn.execute(
                "SELECT Id, FullName FROM Users ORDER BY rowid"
            ).fetchall()
        return [self._to_user(row) for row in rows]

    def _get_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        with self._unit_of_work("get_by_id", user_id=str(user_id)) as conn:
            row = conn.execute(
                "SELECT Id, FullName FROM Users WHERE Id = ?",
                (str(user_id),)
            ).fetchone()
        return self._to_user(row) if row else None

    def _create(self, user: User) -> bool:
        with self._unit_of_work("create", user_id=str(user.id)) as conn:
            cursor = conn.execute(
                "INSERT INTO Users (Id, FullName) VALUES (?, ?)",
                (str(user.id), user.full_name)
            )
        return cursor.rowcount > 0

    def _delete_by_id(self, user_id: uuid.UUID) -> bool:
        with self._unit_of_work("delete_by_id", user_id=str(user_id)) as conn:
            cursor = conn.execute(
                "DELETE FROM Users WHERE Id = ?",
                (str(user_id),)
            )
        return cursor.rowcount > 0

    @contextmanager
    def _unit_of_work(self, operation: str, **context) -> Iterator[sqlite3.Connection]:
        try:
            with self.connection_factory.connection() as conn:
                yield conn
        except sqlite3.Error as e:
            raise DataAccessError(str(e), operation=operation, context=context) from e

    @staticmethod
    def _to_user(row) -> User:
        return User(id=uuid.UUID(row[0]), full_name=row[1])
