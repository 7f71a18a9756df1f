"""
Result set renderers for rsqlcmd.

This module contains the two output formats: a row-by-row text listing and
replayable INSERT statements. Both consume a result cursor to completion
and write plain text to an output stream.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, List, Sequence, TextIO

from rsqlcmd.config import (
    DECIMAL_TYPE_NAMES,
    DEFAULT_INSERT_CHUNK_SIZE,
    MAX_COLUMN_SIZE,
    TABLE_NAME_TEMPLATE,
    TEXT_TYPE_NAMES,
)
from rsqlcmd.connectors.base import ResultCursor
from rsqlcmd.core.formatting import (
    NULL_LITERAL,
    NULL_TEXT,
    format_value,
    is_null,
    resolve_column_names,
)
from rsqlcmd.core.models import Column

logger = logging.getLogger(__name__)


class ResultRenderer(ABC):
    """
    Base class for result set renderers.

    Attributes:
        out: Stream the rendered text is written to
        no_new_lines: Keep only the first line of multi-line values
    """

    def __init__(self, out: TextIO, no_new_lines: bool = False):
        self.out = out
        self.no_new_lines = no_new_lines

    def write_line(self, text: str = "") -> None:
        self.out.write(text + "\n")

    @abstractmethod
    def render(self, cursor: ResultCursor, table_index: int) -> int:
        """
        Render the current result set of a cursor.

        Args:
            cursor: Cursor positioned on the result set to render
            table_index: 1-based index of the result set within the run

        Returns:
            Number of rows rendered
        """
        pass


def drain(cursor: ResultCursor) -> int:
    """Consume the rows of a result set without rendering them."""
    return sum(1 for _ in cursor)


class TabularRenderer(ResultRenderer):
    """
    Renders each row as a numbered block with one line per column.

    Example output::

        Table cols: 1) id 2) name

        Row index #1
        1. 1
        2. <NULL>

    Rows are written as they are fetched, nothing is buffered.
    """

    def render(self, cursor: ResultCursor, table_index: int) -> int:
        columns = cursor.columns
        if not columns:
            logger.debug(f"Result set {table_index} has no columns")
            drain(cursor)
            return 0

        self.write_header(resolve_column_names(columns))

        row_index = 0
        for row in cursor:
            row_index += 1
            self.write_row(row_index, row)
            self.out.flush()
        return row_index

    def write_header(self, names: Sequence[str]) -> None:
        header = "".join(f"{position}) {name} " for position, name in enumerate(names, 1))
        self.write_line(f"Table cols: {header}")
        self.write_line()

    def write_row(self, row_index: int, row: Sequence[Any]) -> None:
        self.write_line(f"Row index #{row_index}")
        for position, value in enumerate(row, 1):
            text = NULL_TEXT if is_null(value) else format_value(value, self.no_new_lines)
            self.write_line(f"{position}. {text}")
        self.write_line()


class InsertRenderer(ResultRenderer):
    """
    Renders a result set as a temporary table definition followed by INSERT
    statements that reproduce its rows.

    Rows are grouped into statements of at most ``chunk_size`` rows. Only one
    chunk is held in memory at a time.

    Values are quoted without escaping, so text containing a single quote
    produces invalid SQL.
    """

    def __init__(
        self,
        out: TextIO,
        no_new_lines: bool = False,
        chunk_size: int = DEFAULT_INSERT_CHUNK_SIZE
    ):
        super().__init__(out, no_new_lines)
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be at least 1, got {chunk_size}")
        self.chunk_size = chunk_size
        self._chunk: List[str] = []

    def render(self, cursor: ResultCursor, table_index: int) -> int:
        columns = cursor.columns
        table_name = TABLE_NAME_TEMPLATE.format(table_index)

        if not columns:
            logger.debug(f"Result set {table_index} has no columns")
            self.write_line(f"-- table{table_index} empty")
            self.write_line()
            drain(cursor)
            return 0

        names = resolve_column_names(columns)
        self.write_definition(table_name, columns, names)
        prefix = self.insert_prefix(table_name, names)

        total = 0
        self._chunk.clear()
        for row in cursor:
            self._chunk.append(self.format_row(row))
            total += 1
            if len(self._chunk) == self.chunk_size:
                self.flush_chunk(prefix)
        if self._chunk:
            self.flush_chunk(prefix)

        logger.debug(f"Rendered {total} rows as inserts into {table_name}")
        return total

    def write_definition(self, table_name: str, columns: Sequence[Column], names: Sequence[str]) -> None:
        self.write_line(f"CREATE TABLE {table_name} (")
        for column, name in zip(columns, names):
            self.write_line(f"    [{name}] {column_type(column)},")
        self.write_line(")")
        self.write_line()

    @staticmethod
    def insert_prefix(table_name: str, names: Sequence[str]) -> str:
        column_list = ", ".join(f"[{name}]" for name in names)
        return f"INSERT INTO {table_name} ({column_list}) VALUES"

    def format_row(self, row: Sequence[Any]) -> str:
        values = [
            NULL_LITERAL if is_null(value) else f"'{format_value(value, self.no_new_lines)}'"
            for value in row
        ]
        return "(" + ",".join(values) + ")"

    def flush_chunk(self, prefix: str) -> None:
        """Write the buffered rows as one statement and clear the buffer."""
        self.write_line(prefix)
        self.write_line(",\n".join(self._chunk))
        self.write_line()
        self.out.flush()
        self._chunk.clear()


def column_type(column: Column) -> str:
    """
    Build the type declaration of a column for a table definition.

    Text types get their length, or ``max`` when the length is unknown or
    unbounded. Decimal types get their precision and scale.
    """
    type_name = column.type_name
    if type_name in TEXT_TYPE_NAMES:
        size = column.size
        if size is None or size < 0 or size >= MAX_COLUMN_SIZE:
            return f"{type_name}(max)"
        return f"{type_name}({size})"
    if type_name in DECIMAL_TYPE_NAMES and column.precision is not None:
        return f"{type_name}({column.precision}, {column.scale or 0})"
    return type_name
