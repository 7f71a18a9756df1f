"""
Script batching for rsqlcmd.

A script is split into batches on lines holding only the ``GO`` separator,
the way SQL Server tools do it. Separator lines are dropped and each batch is
executed on its own.
"""
import logging
from typing import Iterator, List

logger = logging.getLogger(__name__)

SEPARATOR_TOKEN = "go"
LINE_COMMENT = "--"
BLOCK_COMMENT_OPENER = "/*"


def is_batch_separator(line: str) -> bool:
    """
    Check whether a line is a batch separator.

    The whole line must read ``GO`` (any case), optionally surrounded by
    whitespace and followed by semicolons, and may end with a ``--`` line
    comment or a ``/*`` block comment opener.

    Args:
        line: A single physical line without its terminator

    Returns:
        True if the line separates two batches
    """
    rest = line.lstrip()
    if rest[:2].lower() != SEPARATOR_TOKEN:
        return False

    rest = rest[2:].lstrip().lstrip(";").lstrip()
    if not rest:
        return True
    return rest.startswith(LINE_COMMENT) or rest.startswith(BLOCK_COMMENT_OPENER)


def split_lines(text: str) -> List[str]:
    """Split text on CR and LF, dropping empty lines."""
    return [line for line in text.replace("\r", "\n").split("\n") if line]


def split_batches(text: str) -> Iterator[str]:
    """
    Split a script into executable batches.

    Each emitted batch holds the lines between two separators, every line
    terminated by ``\\n``. Separators with nothing before them are skipped,
    so an empty or separator-only script yields nothing.

    Args:
        text: Full script text

    Yields:
        Batch text, in script order
    """
    buffer: List[str] = []
    count = 0

    for line in split_lines(text):
        if is_batch_separator(line):
            if buffer:
                count += 1
                logger.debug(f"Batch {count} ready ({len(buffer)} lines)")
                yield "".join(buffer)
                buffer.clear()
            continue
        buffer.append(line + "\n")

    if buffer:
        count += 1
        logger.debug(f"Batch {count} ready ({len(buffer)} lines)")
        yield "".join(buffer)
