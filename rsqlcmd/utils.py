"""
Utility functions for rsqlcmd
"""
import logging
import sys
from typing import Optional

from rsqlcmd.config import CONSOLE_LOG_FORMAT, LOG_FORMAT


def setup_logging(verbose: bool = False, log_file: Optional[str] = None) -> logging.Logger:
    """
    Set up logging configuration.

    Console output goes to stderr, stdout only carries rendered results.

    Args:
        verbose: Log debug messages to the console
        log_file: Optional file that receives all messages

    Returns:
        Logger instance
    """
    logger = logging.getLogger("rsqlcmd")
    logger.setLevel(logging.DEBUG)

    # Remove existing handlers to avoid duplicates
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console_handler.setFormatter(logging.Formatter(CONSOLE_LOG_FORMAT))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger


def read_script(file_path: Optional[str] = None, script: Optional[str] = None) -> str:
    """
    Read the script to run.

    Args:
        file_path: Path to a script file, takes precedence over ``script``
        script: Inline script text

    Returns:
        Script text

    Raises:
        ValueError: If neither a file nor a script is given
    """
    if file_path is not None:
        with open(file_path, "r", encoding="utf-8-sig") as f:
            return f.read()
    if script is not None:
        return script
    raise ValueError("Either a script file or an inline script is required")
