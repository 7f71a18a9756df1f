"""
Pytest configuration and fixtures for rsqlcmd tests.
"""
import pytest
from unittest.mock import MagicMock


# Define test markers
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "core: tests that don't require database connections"
    )
    config.addinivalue_line(
        "markers", "db: tests that run against a real (SQLite) database"
    )


# Generic database connection fixture
@pytest.fixture
def mock_db_connection():
    """Mock DB-API connection returning one result set for SELECT statements."""
    conn = MagicMock()
    cursor = MagicMock()
    conn.cursor.return_value = cursor
    cursor.description = None

    # Mock cursor.execute to describe a result set for SELECT statements
    def side_effect(sql, *args, **kwargs):
        if sql.strip().upper().startswith("SELECT"):
            cursor.description = [("id", int, None, 10, None, None, None),
                                  ("name", str, None, 50, None, None, None)]
            cursor.fetchmany.side_effect = [[(1, "Test")], []]
        return cursor

    cursor.execute.side_effect = side_effect
    cursor.nextset.return_value = None

    return conn
