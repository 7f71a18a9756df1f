"""
Column naming and cell value formatting.

Values are turned into text the same way in every locale: integers and
decimals never pick up grouping separators or a decimal comma.
"""
import itertools
from decimal import Decimal
from typing import Any, Iterable, Iterator, List, Optional

from rsqlcmd.config import NO_NAME_COLUMN
from rsqlcmd.core.models import Column

NULL_TEXT = "<NULL>"
NULL_LITERAL = "NULL"

CRLF = "\r\n"
TERMINATOR = "\0"


def new_name_counter() -> Iterator[int]:
    """Create the placeholder counter for one result set."""
    return itertools.count(1)


def column_name(raw_name: Optional[str], counter: Iterator[int]) -> str:
    """
    Resolve the display name of a column.

    Args:
        raw_name: Name reported by the driver
        counter: Placeholder counter of the current result set, advanced
            only when a placeholder is produced

    Returns:
        The raw name, or ``NoName<N>`` if it is empty
    """
    if not raw_name:
        return NO_NAME_COLUMN.format(next(counter))
    return raw_name


def resolve_column_names(columns: Iterable[Column]) -> List[str]:
    """Resolve display names for all columns of one result set."""
    counter = new_name_counter()
    return [column_name(column.name, counter) for column in columns]


def is_null(value: Any) -> bool:
    """Check whether a cell holds NULL."""
    return value is None


def to_text(value: Any) -> str:
    """Convert a non-NULL value to its canonical text."""
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, Decimal):
        return format(value, "f")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return "0x" + bytes(value).hex().upper()
    return str(value)


def format_value(value: Any, no_new_lines: bool = False) -> str:
    """
    Format a non-NULL cell value for output.

    Callers check ``is_null`` first and print ``NULL_TEXT`` or
    ``NULL_LITERAL`` themselves.

    Text is cut before the first CR-LF when ``no_new_lines`` is set, and
    always cut before the first NUL character. Both cuts drop the rest of
    the value silently.

    Args:
        value: Cell value returned by the driver
        no_new_lines: Keep only the first line of multi-line values

    Returns:
        Formatted value
    """
    text = to_text(value)

    if no_new_lines:
        index = text.find(CRLF)
        if index >= 0:
            text = text[:index]

    index = text.find(TERMINATOR)
    if index >= 0:
        text = text[:index]

    return text
