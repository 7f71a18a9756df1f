"""
SQLite connector.

sqlite3 executes one statement per call, so a batch is split into statements
that run in order. Each statement that returns rows is exposed as its own
result set.
"""
import logging
import sqlite3
from typing import Any, Iterator, List

from rsqlcmd.config import DEFAULT_FETCH_SIZE
from rsqlcmd.connectors.generic import ColumnDescriber, DBAPIResultCursor, GenericAdapter

logger = logging.getLogger(__name__)


def split_statements(sql: str) -> List[str]:
    """
    Split a batch into complete SQLite statements.

    Semicolons inside string literals and trigger bodies do not end a
    statement. Trailing text without a semicolon is kept as a last statement.
    """
    statements = []
    buffer = ""
    parts = sql.split(";")
    for index, part in enumerate(parts):
        buffer += part
        if index == len(parts) - 1:
            break
        buffer += ";"
        if sqlite3.complete_statement(buffer):
            if buffer.strip(" \t\r\n;"):
                statements.append(buffer.strip())
            buffer = ""

    if buffer.strip(" \t\r\n;"):
        statements.append(buffer.strip())
    return statements


class StatementListCursor(DBAPIResultCursor):
    """
    Result cursor that runs a list of statements one at a time.

    Statements that return no rows are executed while advancing and do not
    produce a result set. A batch with no row-returning statement shows a
    single result set without columns.
    """

    def __init__(
        self,
        cursor: Any,
        statements: List[str],
        describe: ColumnDescriber,
        fetch_size: int = DEFAULT_FETCH_SIZE
    ):
        self._pending: Iterator[str] = iter(statements)
        self._run_until_result(cursor)
        super().__init__(cursor, describe, fetch_size)

    def _run_until_result(self, cursor: Any) -> bool:
        for statement in self._pending:
            logger.debug(f"Executing statement: {statement[:100]}")
            cursor.execute(statement)
            if cursor.description is not None:
                return True
        return False

    def next_result_set(self) -> bool:
        if not self._run_until_result(self._cursor):
            return False
        self._columns = self._read_columns()
        return True


class SQLiteAdapter(GenericAdapter):
    """
    Adapter for SQLite databases.

    The connection runs in autocommit mode so that changes made by a script
    persist once it ends.

    Example:
        >>> with SQLiteAdapter.connect(":memory:") as adapter:
        ...     cursor = adapter.execute("SELECT 1; SELECT 2")
    """

    @classmethod
    def connect(cls, database: str, fetch_size: int = DEFAULT_FETCH_SIZE) -> "SQLiteAdapter":
        """
        Open a SQLite database.

        Args:
            database: Path to the database file, or ``:memory:``
            fetch_size: Number of rows fetched per round trip
        """
        connection = sqlite3.connect(database, isolation_level=None)
        logger.info(f"Connected to SQLite database: {database}")
        return cls(connection, fetch_size=fetch_size)

    def execute(self, sql: str) -> StatementListCursor:
        cursor = self.create_cursor_fn(self.connection)
        try:
            return StatementListCursor(cursor, split_statements(sql), self.describe_column, self.fetch_size)
        except Exception:
            cursor.close()
            raise
