"""
Trino connector.

This module provides an adapter for Trino (formerly PrestoSQL) databases.
Trino runs a single statement per request, so every batch produces one
result set.
"""
import logging
from typing import Any, Optional, Sequence, Tuple, Type
from urllib.parse import unquote, urlsplit

from rsqlcmd.config import DEFAULT_FETCH_SIZE
from rsqlcmd.connectors.generic import GenericAdapter
from rsqlcmd.core.models import Column

logger = logging.getLogger(__name__)

DEFAULT_PORTS = {"http": 8080, "https": 443}


def parse_type_signature(signature: str) -> Tuple[str, Tuple[str, ...]]:
    """
    Split a Trino type signature into its base name and parameters.

    ``decimal(10,2)`` gives ``("decimal", ("10", "2"))``; nested types such
    as ``array(varchar)`` keep their parameters as written. Signatures with
    text after the parameters, like ``timestamp(3) with time zone``, are kept
    whole as the type name.
    """
    signature = signature.strip()
    base, _, rest = signature.partition("(")
    if not rest or not signature.endswith(")"):
        return signature.lower(), ()
    params = rest[:-1]
    if "(" in params:
        return base.strip().lower(), (params,)
    return base.strip().lower(), tuple(param.strip() for param in params.split(","))


def parse_trino_url(url: str) -> dict:
    """
    Parse a connection URL into trino.dbapi.connect() arguments.

    The URL has the form ``http[s]://user[:password]@host[:port]/catalog[/schema]``.

    Raises:
        ValueError: If the URL is malformed
    """
    parts = urlsplit(url)
    if parts.scheme not in DEFAULT_PORTS:
        raise ValueError(f"Trino URL must start with http:// or https://, got: {url}")
    if not parts.hostname:
        raise ValueError(f"Trino URL has no host: {url}")
    if not parts.username:
        raise ValueError(f"Trino URL has no user: {url}")

    path = [unquote(segment) for segment in parts.path.split("/") if segment]
    if len(path) > 2:
        raise ValueError(f"Trino URL path must be /catalog[/schema], got: {parts.path}")

    return {
        "host": parts.hostname,
        "port": parts.port or DEFAULT_PORTS[parts.scheme],
        "user": unquote(parts.username),
        "password": unquote(parts.password) if parts.password else None,
        "http_scheme": parts.scheme,
        "catalog": path[0] if path else None,
        "schema": path[1] if len(path) > 1 else None,
    }


class TrinoAdapter(GenericAdapter):
    """
    Adapter for Trino database connections.

    Examples:
        >>> adapter = TrinoAdapter.from_url("https://admin@trino.example.com/hive/default")
        >>> cursor = adapter.execute("SELECT * FROM nation")
    """

    @classmethod
    def from_url(cls, url: str, fetch_size: int = DEFAULT_FETCH_SIZE) -> "TrinoAdapter":
        """
        Connect to Trino using a connection URL.

        Raises:
            ImportError: If the trino module is not installed
            ValueError: If the URL is malformed
        """
        params = parse_trino_url(url)
        try:
            import trino
        except ImportError:
            raise ImportError(
                "Trino adapter requires the trino module. "
                "Install it with `pip install trino`."
            )

        password = params.pop("password")
        auth = trino.auth.BasicAuthentication(params["user"], password) if password else None
        connection = trino.dbapi.connect(auth=auth, **params)
        logger.info(f"Connected to Trino at {params['host']}:{params['port']}")
        return cls(connection, fetch_size=fetch_size)

    @property
    def not_supported_error(self) -> Optional[Type[Exception]]:
        import trino.exceptions
        return trino.exceptions.NotSupportedError

    def describe_column(self, position: int, entry: Sequence[Any]) -> Column:
        name, type_code = entry[0], entry[1]
        if not isinstance(type_code, str):
            return super().describe_column(position, entry)

        base, params = parse_type_signature(type_code)
        size: Optional[int] = None
        precision: Optional[int] = None
        scale: Optional[int] = None

        if base in ("varchar", "char") and params and params[0].isdigit():
            size = int(params[0])
        elif base == "decimal" and len(params) == 2:
            precision, scale = int(params[0]), int(params[1])
        return Column(position, name, base, size, precision, scale)
