"""SQLite backend."""

import sqlite3

from matchdb.service import PooledDatabaseService
from matchdb.types import Params, ParamsList, Row


class SQLiteDatabaseService(PooledDatabaseService):
    """SQLite backend using stdlib sqlite3, with foreign keys enforced."""

    placeholder = "?"

    def _open_connection(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._target, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        if self._target != ":memory:":
            conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA foreign_keys=ON")
        return conn

    def _run_script(self, conn: sqlite3.Connection, sql: str) -> None:
        conn.executescript(sql)

    def execute(self, sql: str, params: Params | None = None) -> list[Row]:
        cursor = self._get_conn().execute(sql, params or ())
        if cursor.description is None:
            return []
        return [dict(row) for row in cursor.fetchall()]

    def execute_many(self, sql: str, params_list: ParamsList) -> None:
        self._get_conn().executemany(sql, params_list)
