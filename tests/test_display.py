"""
Unit tests for columnar list rendering.
"""

import unittest

from number_scrambler.core.display import format_list, format_rows
from number_scrambler.core.errors import InvalidArgumentError


class TestFormatRows(unittest.TestCase):

    def test_full_row_layout(self):
        """Test ten cells per row, each padded to five characters plus a space."""
        rows = format_rows(list(range(1, 21)))

        self.assertEqual(len(rows), 2)
        self.assertEqual(len(rows[0]), 60)
        self.assertTrue(rows[0].startswith("    1     2 "))
        self.assertTrue(rows[1].endswith("   20 "))

    def test_partial_last_row(self):
        rows = format_rows(list(range(1, 13)))

        self.assertEqual(len(rows), 2)
        self.assertEqual(rows[1], "   11    12 ")

    def test_wide_values(self):
        rows = format_rows([10000, 5])
        self.assertEqual(rows, ["10000     5 "])

    def test_empty(self):
        self.assertEqual(format_rows([]), [])
        self.assertEqual(format_list([]), "")

    def test_custom_layout(self):
        self.assertEqual(format_list([1, 2, 3], per_row=2, width=2), " 1  2 \n 3 ")

    def test_invalid_layout(self):
        with self.assertRaises(InvalidArgumentError):
            format_rows([1], per_row=0)
        with self.assertRaises(InvalidArgumentError):
            format_rows([1], width=-1)


if __name__ == '__main__':
    unittest.main()
