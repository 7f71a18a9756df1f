"""
rsqlcmd - run SQL scripts and print their results as text or INSERT statements.

Scripts are split into batches on GO lines, each batch is executed in turn,
and every result set is rendered either as a readable listing or as INSERT
statements that replay the rows into a temporary table.
"""

__version__ = "0.1.0"
