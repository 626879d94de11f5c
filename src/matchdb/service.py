"""Database service interface and the pooled base shared by both backends."""

import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from queue import Empty, Queue
from typing import Any, Iterator

from matchdb.types import Params, ParamsList, Row


class DatabaseService(ABC):
    """Database-agnostic interface used by the repositories.

    Callers never touch a driver connection directly: statements run inside
    ``with service.transaction():`` and DDL goes through ``execute_ddl``.
    """

    @abstractmethod
    def connect(self) -> None:
        """Open the connection pool."""

    @abstractmethod
    def close(self) -> None:
        """Close every pooled connection."""

    @abstractmethod
    def execute(self, sql: str, params: Params | None = None) -> list[Row]:
        """Execute one statement and return any result rows as dicts."""

    @abstractmethod
    def execute_many(self, sql: str, params_list: ParamsList) -> None:
        """Execute one statement once per parameter set."""

    @abstractmethod
    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Commit on success, roll back and re-raise on error."""

    @abstractmethod
    def execute_ddl(self, sql: str) -> None:
        """Run a script of ``;``-separated DDL statements in its own transaction."""

    @abstractmethod
    def upsert(
        self,
        table: str,
        columns: list[str],
        rows: list[tuple],
        conflict_columns: list[str],
    ) -> None:
        """Insert rows, overwriting the non-key columns of rows that already exist."""


class PooledDatabaseService(DatabaseService):
    """Connection pool and SQL generation common to the SQLite and Postgres backends.

    Each transaction() checks a connection out of the pool and binds it to the
    calling thread until the block exits.
    """

    placeholder = "?"

    def __init__(self, target: str, pool_size: int = 4):
        self._target = target
        self._pool_size = pool_size
        self._pool: Queue = Queue(maxsize=pool_size)
        self._local = threading.local()

    @abstractmethod
    def _open_connection(self) -> Any:
        """Return a new driver connection with autocommit disabled."""

    @abstractmethod
    def _run_script(self, conn: Any, sql: str) -> None:
        """Run a multi-statement DDL script on ``conn``."""

    def connect(self) -> None:
        for _ in range(self._pool_size):
            self._pool.put(self._open_connection())

    def close(self) -> None:
        while not self._pool.empty():
            try:
                self._pool.get_nowait().close()
            except Empty:
                break

    def _acquire(self) -> Any:
        return self._pool.get(timeout=30)

    def _release(self, conn: Any) -> None:
        self._pool.put(conn)

    def _get_conn(self) -> Any:
        conn = getattr(self._local, "conn", None)
        if conn is None:
            raise RuntimeError(
                "No active transaction. Wrap calls in a `with service.transaction():` block."
            )
        return conn

    @contextmanager
    def transaction(self) -> Iterator[None]:
        conn = self._acquire()
        self._local.conn = conn
        try:
            yield
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            self._local.conn = None
            self._release(conn)

    def execute_ddl(self, sql: str) -> None:
        conn = self._acquire()
        try:
            self._run_script(conn, sql)
            conn.commit()
        finally:
            self._release(conn)

    def upsert(
        self,
        table: str,
        columns: list[str],
        rows: list[tuple],
        conflict_columns: list[str],
    ) -> None:
        if not rows:
            return
        placeholders = ", ".join(self.placeholder for _ in columns)
        sql = f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders}) "
        update_cols = [c for c in columns if c not in conflict_columns]
        if update_cols:
            assignments = ", ".join(f"{c} = excluded.{c}" for c in update_cols)
            sql += f"ON CONFLICT ({', '.join(conflict_columns)}) DO UPDATE SET {assignments}"
        else:
            sql += f"ON CONFLICT ({', '.join(conflict_columns)}) DO NOTHING"
        self.execute_many(sql, rows)
