"""
Unit tests for the tabular and insert renderers.
"""
import io
import unittest
from decimal import Decimal

import pytest

from rsqlcmd.core.models import Column
from rsqlcmd.core.renderers import InsertRenderer, TabularRenderer, column_type
from fakes import FakeResultCursor, make_columns


@pytest.mark.core
class TestTabularRenderer(unittest.TestCase):
    """Test cases for TabularRenderer."""

    def setUp(self):
        """Set up test fixtures."""
        self.out = io.StringIO()
        self.renderer = TabularRenderer(self.out)

    def test_header_and_rows(self):
        """Test the exact text of a small result set."""
        cursor = FakeResultCursor([
            (make_columns("id", ""), [(1, "a"), (2, None)]),
        ])

        count = self.renderer.render(cursor, 1)

        self.assertEqual(count, 2)
        self.assertEqual(self.out.getvalue(), (
            "Table cols: 1) id 2) NoName1 \n"
            "\n"
            "Row index #1\n"
            "1. 1\n"
            "2. a\n"
            "\n"
            "Row index #2\n"
            "1. 2\n"
            "2. <NULL>\n"
            "\n"
        ))

    def test_zero_rows(self):
        """Test that a result set without rows prints only the header."""
        cursor = FakeResultCursor([(make_columns("id"), [])])
        self.assertEqual(self.renderer.render(cursor, 1), 0)
        self.assertEqual(self.out.getvalue(), "Table cols: 1) id \n\n")

    def test_zero_columns(self):
        """Test that a result set without columns prints nothing."""
        cursor = FakeResultCursor([([], [])])
        self.assertEqual(self.renderer.render(cursor, 1), 0)
        self.assertEqual(self.out.getvalue(), "")

    def test_rows_are_streamed(self):
        """Test that each row is written before the next one is fetched."""
        out = self.out
        seen = []

        class Streaming(FakeResultCursor):
            def __iter__(cursor_self):
                for row in super().__iter__():
                    yield row
                    seen.append(out.getvalue().count("Row index #"))

        cursor = Streaming([(make_columns("n"), [(1,), (2,), (3,)])])
        self.renderer.render(cursor, 1)

        self.assertEqual(seen, [1, 2, 3])
        self.assertTrue(out.getvalue().endswith("Row index #3\n1. 3\n\n"))

    def test_row_index_restarts(self):
        """Test that row numbering restarts for every result set."""
        cursor = FakeResultCursor([
            (make_columns("a"), [(1,), (2,)]),
            (make_columns("b"), [(3,)]),
        ])
        self.renderer.render(cursor, 1)
        cursor.next_result_set()
        self.out.seek(0)
        self.out.truncate()

        self.renderer.render(cursor, 2)

        self.assertIn("Row index #1\n1. 3\n", self.out.getvalue())
        self.assertNotIn("Row index #2", self.out.getvalue())

    def test_no_new_lines(self):
        """Test that the no-new-lines flag reaches the formatter."""
        renderer = TabularRenderer(self.out, no_new_lines=True)
        cursor = FakeResultCursor([(make_columns("t"), [("first\r\nsecond",)])])
        renderer.render(cursor, 1)
        self.assertIn("1. first\n", self.out.getvalue())
        self.assertNotIn("second", self.out.getvalue())

    def test_decimal_values(self):
        """Test that decimals keep their scale and use a decimal point."""
        cursor = FakeResultCursor([(make_columns("price"), [(Decimal("3.50"),)])])
        self.renderer.render(cursor, 1)
        self.assertIn("1. 3.50\n", self.out.getvalue())


@pytest.mark.core
class TestInsertRenderer(unittest.TestCase):
    """Test cases for InsertRenderer."""

    def setUp(self):
        """Set up test fixtures."""
        self.out = io.StringIO()
        self.renderer = InsertRenderer(self.out)

    def test_definition_and_insert(self):
        """Test the exact text of a small result set."""
        columns = [
            Column(1, "id", "int", 4),
            Column(2, "", "nvarchar", 50),
            Column(3, "price", "decimal", 17, 10, 2),
        ]
        cursor = FakeResultCursor([(columns, [(1, "a", Decimal("3.50")), (2, None, None)])])

        count = self.renderer.render(cursor, 3)

        self.assertEqual(count, 2)
        self.assertEqual(self.out.getvalue(), (
            "CREATE TABLE #table3 (\n"
            "    [id] int,\n"
            "    [NoName1] nvarchar(50),\n"
            "    [price] decimal(10, 2),\n"
            ")\n"
            "\n"
            "INSERT INTO #table3 ([id], [NoName1], [price]) VALUES\n"
            "('1','a','3.50'),\n"
            "('2',NULL,NULL)\n"
            "\n"
        ))

    def test_empty_table(self):
        """Test the marker for a result set without columns."""
        cursor = FakeResultCursor([([], [])])
        self.assertEqual(self.renderer.render(cursor, 2), 0)
        self.assertEqual(self.out.getvalue(), "-- table2 empty\n\n")

    def test_zero_rows(self):
        """Test that no INSERT statement is printed without rows."""
        cursor = FakeResultCursor([(make_columns("id"), [])])
        self.renderer.render(cursor, 1)
        self.assertEqual(self.out.getvalue(), "CREATE TABLE #table1 (\n    [id] int,\n)\n\n")
        self.assertNotIn("INSERT", self.out.getvalue())

    def test_chunking(self):
        """Test that 250 rows become statements of 100, 100 and 50 rows."""
        rows = [(i,) for i in range(250)]
        cursor = FakeResultCursor([(make_columns("n"), rows)])

        self.assertEqual(self.renderer.render(cursor, 1), 250)

        statements = self.out.getvalue().split("INSERT INTO")[1:]
        self.assertEqual(len(statements), 3)
        for statement, expected in zip(statements, (100, 100, 50)):
            lines = [line for line in statement.split("\n")[1:] if line]
            self.assertEqual(len(lines), expected)
            self.assertTrue(all(line.endswith("),") for line in lines[:-1]))
            self.assertTrue(lines[-1].endswith(")"))
            self.assertFalse(lines[-1].endswith(","))

    def test_exact_chunk_multiple(self):
        """Test that a full last chunk is not followed by an empty statement."""
        renderer = InsertRenderer(self.out, chunk_size=2)
        cursor = FakeResultCursor([(make_columns("n"), [(1,), (2,), (3,), (4,)])])
        renderer.render(cursor, 1)
        self.assertEqual(self.out.getvalue().count("INSERT INTO"), 2)
        self.assertTrue(self.out.getvalue().endswith("('3'),\n('4')\n\n"))

    def test_quotes_are_not_escaped(self):
        """Test that values are quoted as they are."""
        cursor = FakeResultCursor([(make_columns("t"), [("it's",)])])
        self.renderer.render(cursor, 1)
        self.assertIn("('it's')", self.out.getvalue())

    def test_rows_are_streamed(self):
        """Test that full chunks are written before the cursor is exhausted."""
        out = io.StringIO()
        renderer = InsertRenderer(out, chunk_size=1)
        cursor = FakeResultCursor([(make_columns("n"), [(1,), (2,)])])
        rows = iter(cursor)
        seen = []

        class Probe(FakeResultCursor):
            def __iter__(probe_self):
                for row in rows:
                    yield row
                    seen.append(out.getvalue().count("INSERT INTO"))

        probe = Probe(cursor.result_sets)
        renderer.render(probe, 1)
        self.assertEqual(seen, [1, 2])

    def test_invalid_chunk_size(self):
        """Test that chunk_size must be positive."""
        with self.assertRaises(ValueError):
            InsertRenderer(self.out, chunk_size=0)


@pytest.mark.core
class TestColumnType(unittest.TestCase):
    """Test cases for column type declarations."""

    def test_text_types(self):
        """Test lengths and the max marker for text types."""
        self.assertEqual(column_type(Column(1, "a", "varchar", 10)), "varchar(10)")
        self.assertEqual(column_type(Column(1, "a", "nvarchar", 2147483647)), "nvarchar(max)")
        self.assertEqual(column_type(Column(1, "a", "nvarchar", None)), "nvarchar(max)")
        self.assertEqual(column_type(Column(1, "a", "varchar", -1)), "varchar(max)")

    def test_decimal_types(self):
        """Test precision and scale for decimal types."""
        self.assertEqual(column_type(Column(1, "a", "decimal", 9, 18, 4)), "decimal(18, 4)")
        self.assertEqual(column_type(Column(1, "a", "numeric", None, 5, 0)), "numeric(5, 0)")
        self.assertEqual(column_type(Column(1, "a", "numeric")), "numeric")

    def test_other_types(self):
        """Test that other types are printed bare."""
        self.assertEqual(column_type(Column(1, "a", "int", 4)), "int")
        self.assertEqual(column_type(Column(1, "a", "datetime", 8)), "datetime")


if __name__ == "__main__":
    unittest.main()
