"""
Configuration settings for rsqlcmd.

This module contains default settings and configuration variables used
throughout the application.
"""

# Environment variables read by the CLI
ENV_CONNECTION = "RSQLCMD_CONNECTION"
ENV_DRIVER = "RSQLCMD_DRIVER"
ENV_LOG_FILE = "RSQLCMD_LOG_FILE"

# Default driver connection settings
DEFAULT_DRIVER = "sqlite"
SUPPORTED_DRIVERS = ("sqlite", "postgresql", "trino")
DEFAULT_FETCH_SIZE = 500

# Insert output settings
DEFAULT_INSERT_CHUNK_SIZE = 100
TABLE_NAME_TEMPLATE = "#table{0}"

# Placeholder for columns without a name, numbered per result set
NO_NAME_COLUMN = "NoName{0}"

# Column sizes at or above this value are rendered as (max)
MAX_COLUMN_SIZE = 2147483647

# Type names that take a length or a precision/scale in table definitions
TEXT_TYPE_NAMES = ("varchar", "nvarchar")
DECIMAL_TYPE_NAMES = ("decimal", "numeric")

# Logging
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CONSOLE_LOG_FORMAT = "%(levelname)s: %(message)s"
