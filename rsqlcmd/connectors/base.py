"""
Base interfaces for database connectors.

This module defines the contract between the script runner and a database:
an adapter executes one batch at a time and hands back a forward-only
cursor over the result sets the batch produced.
"""
from abc import ABC, abstractmethod
from typing import Any, Iterator, List, Sequence

from rsqlcmd.core.models import Column


class ResultCursor(ABC):
    """
    Forward-only cursor over the result sets of one executed batch.

    Iterating the cursor yields the rows of the current result set exactly
    once. Column metadata is available before the first row is fetched and
    is index-aligned with the values of every row.
    """

    @property
    @abstractmethod
    def columns(self) -> List[Column]:
        """Columns of the current result set, empty when it has none."""
        pass

    @abstractmethod
    def __iter__(self) -> Iterator[Sequence[Any]]:
        pass

    @abstractmethod
    def next_result_set(self) -> bool:
        """
        Advance to the next result set of the batch.

        The rows of the current result set must have been consumed.

        Returns:
            True if another result set is available, False when exhausted
        """
        pass

    def close(self) -> None:
        """
        Release the cursor.

        Default implementation does nothing, override as needed.
        """
        pass


class SQLAdapter(ABC):
    """
    Base class for database-specific adapters.

    This abstract class defines the interface that all database adapters
    must implement. Errors raised by the underlying driver are not caught
    and reach the caller unchanged.
    """

    @abstractmethod
    def execute(self, sql: str) -> ResultCursor:
        """
        Execute one batch.

        Args:
            sql: Batch text, possibly holding several statements

        Returns:
            Cursor positioned on the first result set of the batch
        """
        pass

    def drain_messages(self) -> List[str]:
        """
        Return server informational messages received since the last call.

        Default implementation returns nothing, override as needed.
        """
        return []

    def close(self) -> None:
        """
        Close any open database connections.

        Default implementation does nothing, override as needed.
        """
        pass

    def __enter__(self) -> "SQLAdapter":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
