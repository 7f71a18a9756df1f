"""
PostgreSQL connector.

This module provides an adapter for PostgreSQL databases over psycopg2.
Server notices (RAISE NOTICE, warnings) are relayed as informational
messages.
"""
import logging
from typing import Any, Dict, List, Optional

from rsqlcmd.config import DEFAULT_FETCH_SIZE
from rsqlcmd.connectors.generic import GenericAdapter

logger = logging.getLogger(__name__)

# Built-in type OIDs from pg_type
POSTGRES_TYPE_NAMES: Dict[int, str] = {
    16: "bool",
    17: "bytea",
    18: "char",
    19: "name",
    20: "int8",
    21: "int2",
    23: "int4",
    25: "text",
    26: "oid",
    114: "json",
    142: "xml",
    700: "float4",
    701: "float8",
    790: "money",
    1042: "bpchar",
    1043: "varchar",
    1082: "date",
    1083: "time",
    1114: "timestamp",
    1184: "timestamptz",
    1186: "interval",
    1266: "timetz",
    1700: "numeric",
    2950: "uuid",
    3802: "jsonb",
}


class PostgreSQLAdapter(GenericAdapter):
    """
    Adapter for PostgreSQL databases.

    The connection runs in autocommit mode. psycopg2 only exposes the last
    result set of a multi-statement batch, so each batch yields at most one
    result set.

    Attributes:
        connection: psycopg2 connection
    """

    def __init__(
        self,
        dsn: Optional[str] = None,
        connection: Optional[Any] = None,
        fetch_size: int = DEFAULT_FETCH_SIZE,
        application_name: Optional[str] = "rsqlcmd"
    ):
        """
        Initialize the PostgreSQL adapter.

        Args:
            dsn: libpq connection string or URI
            connection: Existing psycopg2 connection to use instead of ``dsn``
            fetch_size: Number of rows fetched per round trip
            application_name: Application name reported to the server

        Raises:
            ImportError: If psycopg2 is not installed
            ValueError: If both dsn and connection are None
        """
        if connection is None:
            if dsn is None:
                raise ValueError("Either dsn or connection must be provided")
            connection = self._connect(dsn, application_name)
        connection.autocommit = True
        super().__init__(connection, fetch_size=fetch_size)

    @staticmethod
    def _connect(dsn: str, application_name: Optional[str]) -> Any:
        try:
            import psycopg2
        except ImportError:
            raise ImportError(
                "PostgreSQL adapter requires the psycopg2 module. "
                "Install it with `pip install psycopg2-binary`."
            )

        params = {"application_name": application_name} if application_name else {}
        connection = psycopg2.connect(dsn, **params)
        logger.info(f"Connected to PostgreSQL: {connection.dsn}")
        return connection

    def type_name(self, type_code: Any) -> str:
        if isinstance(type_code, int):
            return POSTGRES_TYPE_NAMES.get(type_code, str(type_code))
        return super().type_name(type_code)

    def drain_messages(self) -> List[str]:
        notices = self.connection.notices
        messages = [notice.rstrip("\n") for notice in notices]
        del notices[:]
        return messages
