"""
Generic connector for any Python DB-API 2.0 connection.

This module provides the cursor wrapper shared by all DB-API based adapters
and a generic adapter that works with drivers such as pyodbc or sqlite3.
"""
import datetime
import logging
from decimal import Decimal
from typing import Any, Callable, Iterator, List, Optional, Sequence, Tuple, Type

from rsqlcmd.config import DECIMAL_TYPE_NAMES, DEFAULT_FETCH_SIZE
from rsqlcmd.connectors.base import ResultCursor, SQLAdapter
from rsqlcmd.core.models import Column

logger = logging.getLogger(__name__)

# Python types reported as type_code by drivers such as pyodbc.
# Order matters: bool before int, datetime before date.
PYTHON_TYPE_NAMES: Tuple[Tuple[type, str], ...] = (
    (bool, "bit"),
    (int, "int"),
    (Decimal, "decimal"),
    (float, "float"),
    (str, "nvarchar"),
    (bytes, "varbinary"),
    (bytearray, "varbinary"),
    (datetime.datetime, "datetime"),
    (datetime.date, "date"),
    (datetime.time, "time"),
)

UNKNOWN_TYPE_NAME = "sql_variant"

ColumnDescriber = Callable[[int, Sequence[Any]], Column]


class DBAPIResultCursor(ResultCursor):
    """
    Result cursor over a DB-API cursor.

    Rows are fetched ``fetch_size`` at a time and yielded one by one. Column
    metadata comes from ``cursor.description``, one entry per column in
    column order.

    Attributes:
        fetch_size: Number of rows requested from the driver per fetch
    """

    def __init__(
        self,
        cursor: Any,
        describe: ColumnDescriber,
        fetch_size: int = DEFAULT_FETCH_SIZE,
        not_supported_error: Optional[Type[Exception]] = None
    ):
        self._cursor = cursor
        self._describe = describe
        self.fetch_size = fetch_size
        self._not_supported_error = not_supported_error
        self._skip_row_counts()
        self._columns = self._read_columns()

    def _read_columns(self) -> List[Column]:
        description = self._cursor.description or []
        return [self._describe(position, entry) for position, entry in enumerate(description, 1)]

    def _advance(self) -> bool:
        nextset = getattr(self._cursor, "nextset", None)
        if nextset is None:
            return False

        not_supported = self._not_supported_error or ()
        try:
            return bool(nextset())
        except not_supported:
            return False

    def _skip_row_counts(self) -> bool:
        """
        Move past results of statements that return no rows.

        Returns False when the batch has no row-returning result left.
        """
        while self._cursor.description is None:
            if not self._advance():
                return False
        return True

    @property
    def columns(self) -> List[Column]:
        return self._columns

    def __iter__(self) -> Iterator[Sequence[Any]]:
        # Statements without a result set have nothing to fetch
        if self._cursor.description is None:
            return
        while True:
            rows = self._cursor.fetchmany(self.fetch_size)
            if not rows:
                break
            yield from rows

    def next_result_set(self) -> bool:
        if not self._advance() or not self._skip_row_counts():
            return False
        self._columns = self._read_columns()
        return True

    def close(self) -> None:
        self._cursor.close()


class GenericAdapter(SQLAdapter):
    """
    Generic adapter for any DB-API compatible database.

    Example:
        >>> import pyodbc
        >>> from rsqlcmd.connectors.generic import GenericAdapter
        >>>
        >>> conn = pyodbc.connect("DSN=reporting", autocommit=True)
        >>> with GenericAdapter(conn) as adapter:
        ...     cursor = adapter.execute("SELECT 1 AS id; SELECT 'a'")
        ...     rows = list(cursor)
        ...     cursor.next_result_set()
    """

    def __init__(
        self,
        connection: Any,
        fetch_size: int = DEFAULT_FETCH_SIZE,
        create_cursor_fn: Optional[Callable[[Any], Any]] = None
    ):
        """
        Initialize a generic DB-API adapter.

        Args:
            connection: A DB-API compatible connection object
            fetch_size: Number of rows fetched per driver round trip
            create_cursor_fn: Optional function to create a cursor (defaults to connection.cursor())
        """
        self.connection = connection
        self.fetch_size = fetch_size
        self.create_cursor_fn = create_cursor_fn or (lambda conn: conn.cursor())

        logger.debug(f"Initialized {type(self).__name__} with fetch_size={fetch_size}")

    @property
    def not_supported_error(self) -> Optional[Type[Exception]]:
        """Driver exception raised for unsupported operations, if exposed."""
        error = getattr(self.connection, "NotSupportedError", None)
        if isinstance(error, type) and issubclass(error, Exception):
            return error
        return None

    def execute(self, sql: str) -> ResultCursor:
        cursor = self.create_cursor_fn(self.connection)
        logger.debug(f"Executing batch: {sql[:100]}")
        try:
            cursor.execute(sql)
        except Exception:
            cursor.close()
            raise
        return DBAPIResultCursor(cursor, self.describe_column, self.fetch_size, self.not_supported_error)

    def describe_column(self, position: int, entry: Sequence[Any]) -> Column:
        """
        Build column metadata from a ``cursor.description`` entry.

        Args:
            position: 1-based column position
            entry: DB-API description entry (name, type_code, display_size,
                internal_size, precision, scale, null_ok)
        """
        name, type_code, display_size, internal_size, precision, scale = tuple(entry[:6])
        type_name = self.type_name(type_code)
        size = internal_size if internal_size is not None else display_size

        if type_name not in DECIMAL_TYPE_NAMES:
            precision = scale = None
        return Column(position, name, type_name, size, precision, scale)

    def type_name(self, type_code: Any) -> str:
        """Map a DB-API type_code to a type name."""
        if type_code is None:
            return UNKNOWN_TYPE_NAME
        if isinstance(type_code, str):
            return type_code.lower()
        if isinstance(type_code, type):
            for python_type, name in PYTHON_TYPE_NAMES:
                if issubclass(type_code, python_type):
                    return name
        return str(type_code)

    def close(self) -> None:
        """Close the connection."""
        self.connection.close()
        logger.debug("Closed DB connection")
