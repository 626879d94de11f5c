"""PostgreSQL backend."""

import psycopg2
import psycopg2.extras

from matchdb.service import PooledDatabaseService
from matchdb.types import Params, ParamsList, Row


class PostgresDatabaseService(PooledDatabaseService):
    """PostgreSQL backend using psycopg2."""

    placeholder = "%s"

    def _open_connection(self):
        conn = psycopg2.connect(self._target)
        conn.autocommit = False
        return conn

    def _run_script(self, conn, sql: str) -> None:
        with conn.cursor() as cur:
            for statement in sql.split(";"):
                statement = statement.strip()
                if statement:
                    cur.execute(statement)

    def execute(self, sql: str, params: Params | None = None) -> list[Row]:
        with self._get_conn().cursor(cursor_factory=psycopg2.extras.RealDictCursor) as cur:
            cur.execute(sql, params or ())
            if cur.description is None:
                return []
            return [dict(row) for row in cur.fetchall()]

    def execute_many(self, sql: str, params_list: ParamsList) -> None:
        with self._get_conn().cursor() as cur:
            cur.executemany(sql, params_list)
