"""
Core service for running scripts.

This module drives a database adapter over the batches of a script and
renders every result set it produces, in statement order.
"""
import logging
from typing import TextIO

from rsqlcmd.connectors.base import ResultCursor, SQLAdapter
from rsqlcmd.core.batch_splitter import split_batches
from rsqlcmd.core.renderers import ResultRenderer

logger = logging.getLogger(__name__)


class RunSummary:
    """Counters collected while running a script."""

    def __init__(self):
        self.batches = 0
        self.result_sets = 0
        self.rows = 0

    def __repr__(self) -> str:
        return f"RunSummary(batches={self.batches}, result_sets={self.result_sets}, rows={self.rows})"


class ScriptRunner:
    """
    Executes the batches of a script one after another.

    Result sets are numbered from 1 across the whole run, so every table
    rendered in insert mode gets its own name. Driver errors are not caught:
    the first failing batch stops the run.

    Attributes:
        adapter: Connected database adapter
        renderer: Renderer used for every result set
        out: Stream for server messages, normally the renderer's stream
    """

    def __init__(self, adapter: SQLAdapter, renderer: ResultRenderer, out: TextIO):
        self.adapter = adapter
        self.renderer = renderer
        self.out = out

    def run(self, script: str) -> RunSummary:
        """
        Run a script.

        Args:
            script: Full script text

        Returns:
            Summary of what was executed
        """
        summary = RunSummary()

        for batch in split_batches(script):
            summary.batches += 1
            logger.debug(f"Executing batch {summary.batches}")
            cursor = self.adapter.execute(batch)
            try:
                self.write_messages()
                self.render_all(cursor, summary)
            finally:
                cursor.close()

        if summary.batches == 0:
            logger.info("Script contains no batches, nothing to execute")
        logger.info(
            f"Executed {summary.batches} batches, rendered {summary.result_sets} "
            f"result sets with {summary.rows} rows"
        )
        return summary

    def render_all(self, cursor: ResultCursor, summary: RunSummary) -> None:
        """Render every result set of a cursor, draining each one."""
        while True:
            summary.result_sets += 1
            rows = self.renderer.render(cursor, summary.result_sets)
            summary.rows += rows
            logger.debug(f"Result set {summary.result_sets}: {len(cursor.columns)} columns, {rows} rows")
            self.write_messages()
            if not cursor.next_result_set():
                break

    def write_messages(self) -> None:
        for message in self.adapter.drain_messages():
            self.out.write(message + "\n")
