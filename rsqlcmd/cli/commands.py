#!/usr/bin/env python3
"""
rsqlcmd - CLI tool for running SQL scripts and printing their results.
"""
import sys
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape

from rsqlcmd import __version__
from rsqlcmd.config import (
    DEFAULT_DRIVER,
    DEFAULT_FETCH_SIZE,
    DEFAULT_INSERT_CHUNK_SIZE,
    ENV_CONNECTION,
    ENV_DRIVER,
    ENV_LOG_FILE,
    SUPPORTED_DRIVERS,
)
from rsqlcmd.connectors import create_adapter
from rsqlcmd.core.renderers import InsertRenderer, TabularRenderer
from rsqlcmd.core.runner import ScriptRunner
from rsqlcmd.utils import read_script, setup_logging

# Console for status and errors, results go to stdout
console = Console(stderr=True)

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(version=__version__)
@click.option('--connection', '-c', envvar=ENV_CONNECTION,
              help='Connection string: database path (sqlite), DSN (postgresql) '
                   'or http[s]://user@host:port/catalog/schema (trino)')
@click.option('--driver', '-d', type=click.Choice(SUPPORTED_DRIVERS), default=DEFAULT_DRIVER,
              envvar=ENV_DRIVER, show_default=True, help='Database driver')
@click.option('--file', '-f', 'file_path', type=click.Path(exists=True, dir_okay=False),
              help='Path to the script file')
@click.option('--script', '-s', help='Raw script text (ignored when --file is given)')
@click.option('--no-new-lines', '-n', is_flag=True,
              help='Print only the first line of multi-line values (drops the rest of the value)')
@click.option('--inserts', '-i', is_flag=True, help='Generate INSERT statements instead of text output')
@click.option('--chunk-size', default=DEFAULT_INSERT_CHUNK_SIZE, type=click.IntRange(min=1), show_default=True,
              help='Maximum rows per INSERT statement')
@click.option('--fetch-size', default=DEFAULT_FETCH_SIZE, type=click.IntRange(min=1), show_default=True,
              help='Rows fetched from the driver per round trip')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--log-file', envvar=ENV_LOG_FILE, type=click.Path(dir_okay=False), help='Write a debug log to this file')
def cli(connection: Optional[str], driver: str, file_path: Optional[str], script: Optional[str],
        no_new_lines: bool, inserts: bool, chunk_size: int, fetch_size: int,
        verbose: bool, log_file: Optional[str]):
    """
    Run a SQL script and print every result set it produces.

    The script is split into batches on GO lines. Each result set is printed
    as a row listing, or with --inserts as a CREATE TABLE definition and
    INSERT statements that replay its rows.
    """
    logger = setup_logging(verbose, log_file)

    if file_path is None and script is None:
        raise click.UsageError("Either --file or --script is required")
    if not connection:
        if driver != "sqlite":
            raise click.UsageError(f"--connection is required for the {driver} driver")
        connection = ":memory:"

    try:
        text = read_script(file_path, script)
        out = sys.stdout
        if inserts:
            renderer = InsertRenderer(out, no_new_lines=no_new_lines, chunk_size=chunk_size)
        else:
            renderer = TabularRenderer(out, no_new_lines=no_new_lines)

        logger.debug(f"Connecting with the {driver} driver")
        with create_adapter(driver, connection, fetch_size=fetch_size) as adapter:
            ScriptRunner(adapter, renderer, out).run(text)
        out.flush()

    except Exception as e:
        logger.debug(f"Error running script: {str(e)}", exc_info=True)
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        sys.exit(1)


# Export the CLI function as main for easy importing
main = cli

if __name__ == '__main__':
    cli()
