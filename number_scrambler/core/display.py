"""
Columnar rendering of a number list for the console.
"""

from typing import List, Sequence

from .errors import InvalidArgumentError

DEFAULT_PER_ROW = 10
DEFAULT_WIDTH = 5


def format_rows(values: Sequence[int], per_row: int = DEFAULT_PER_ROW,
                width: int = DEFAULT_WIDTH) -> List[str]:
    """
    Lay out values in rows of per_row cells.

    Each cell is the value right-aligned to width characters followed by a
    single space. A trailing partial row is kept.
    """
    if per_row <= 0:
        raise InvalidArgumentError(f"per_row must be positive, got {per_row}")
    if width <= 0:
        raise InvalidArgumentError(f"width must be positive, got {width}")

    rows = []
    for start in range(0, len(values), per_row):
        chunk = values[start:start + per_row]
        rows.append("".join(f"{value:>{width}} " for value in chunk))
    return rows


def format_list(values: Sequence[int], per_row: int = DEFAULT_PER_ROW,
                width: int = DEFAULT_WIDTH) -> str:
    return "\n".join(format_rows(values, per_row=per_row, width=width))
