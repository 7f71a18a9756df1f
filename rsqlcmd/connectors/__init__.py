"""
Database connectors for rsqlcmd.

Server drivers are imported when an adapter is created, so only the driver
actually used has to be installed.
"""
from rsqlcmd.config import DEFAULT_FETCH_SIZE
from rsqlcmd.connectors.base import ResultCursor, SQLAdapter
from rsqlcmd.connectors.generic import DBAPIResultCursor, GenericAdapter
from rsqlcmd.connectors.sqlite import SQLiteAdapter

__all__ = [
    "ResultCursor",
    "SQLAdapter",
    "DBAPIResultCursor",
    "GenericAdapter",
    "SQLiteAdapter",
    "create_adapter",
]


def create_adapter(driver: str, connection_string: str, fetch_size: int = DEFAULT_FETCH_SIZE) -> SQLAdapter:
    """
    Create and connect the adapter for a driver.

    Args:
        driver: One of "sqlite", "postgresql" or "trino"
        connection_string: Database path for sqlite, libpq DSN for postgresql,
            ``http[s]://user@host:port/catalog/schema`` URL for trino
        fetch_size: Number of rows fetched per round trip

    Raises:
        ValueError: If the driver is unknown
    """
    if driver == "sqlite":
        return SQLiteAdapter.connect(connection_string, fetch_size=fetch_size)
    if driver == "postgresql":
        from rsqlcmd.connectors.postgresql import PostgreSQLAdapter
        return PostgreSQLAdapter(dsn=connection_string, fetch_size=fetch_size)
    if driver == "trino":
        from rsqlcmd.connectors.trino import TrinoAdapter
        return TrinoAdapter.from_url(connection_string, fetch_size=fetch_size)
    raise ValueError(f"Unknown driver: {driver}")
