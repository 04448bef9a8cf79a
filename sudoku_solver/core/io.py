"""Reading and writing puzzles as delimited text.

A puzzle is 9 lines of 9 fields. Each field is a digit 1-9 (a hint), or
``0``, ``.`` or blank for an empty cell. Fields are separated by commas by
default; any single-character delimiter can be used.
"""

from __future__ import annotations
import csv
import io
import logging
from pathlib import Path
from typing import List, Optional, Union

import numpy as np

from .board import SudokuBoard, SIZE

log = logging.getLogger(__name__)

EMPTY_MARKERS = ("", "0", ".")
DIGITS = "123456789"


class PuzzleFormatError(ValueError):
    """Raised when puzzle text does not describe a 9x9 grid of digits."""

    def __init__(self, message: str, row: Optional[int] = None, col: Optional[int] = None):
        self.row = row
        self.col = col
        if row is not None and col is not None:
            message = f"row {row + 1}, column {col + 1}: {message}"
        elif row is not None:
            message = f"row {row + 1}: {message}"
        super().__init__(message)


def parse_puzzle(text: str, delimiter: str = ",") -> SudokuBoard:
    """
    Parse delimited puzzle text into a board.

    Blank lines are ignored. Hints that clash with each other are accepted
    here; the solver reports such puzzles as invalid.

    Raises:
        PuzzleFormatError: On wrong row/column counts or bad fields.
    """
    rows = [
        [field.strip() for field in record]
        for record in csv.reader(io.StringIO(text), delimiter=delimiter)
        if any(field.strip() for field in record) or len(record) > 1
    ]

    if len(rows) != SIZE:
        raise PuzzleFormatError(f"expected {SIZE} rows, got {len(rows)}")

    grid = np.zeros((SIZE, SIZE), dtype=np.int32)
    for r, record in enumerate(rows):
        if len(record) != SIZE:
            raise PuzzleFormatError(f"expected {SIZE} columns, got {len(record)}", row=r)
        for c, field in enumerate(record):
            grid[r, c] = _parse_field(field, r, c)

    board = SudokuBoard(grid)
    log.debug("Parsed puzzle with %d hints", board.count_filled())
    return board


def _parse_field(field: str, row: int, col: int) -> int:
    if field in EMPTY_MARKERS:
        return 0
    if len(field) != 1 or field not in DIGITS:
        raise PuzzleFormatError(f"invalid cell value {field!r}", row=row, col=col)
    return int(field)


def read_puzzle(path: Union[str, Path], delimiter: str = ",") -> SudokuBoard:
    """Read a puzzle file. See ``parse_puzzle`` for the accepted format."""
    with open(path, "r", encoding="utf-8", newline="") as f:
        try:
            text = f.read()
        except UnicodeDecodeError as e:
            raise PuzzleFormatError(f"file is not UTF-8 text ({e.reason} at byte {e.start})") from e
    return parse_puzzle(text, delimiter=delimiter)


def format_puzzle(board: SudokuBoard, delimiter: str = ",") -> str:
    """Render a board as delimited text, 0 for empty cells."""
    out = io.StringIO()
    writer = csv.writer(out, delimiter=delimiter, lineterminator="\n")
    rows: List[List[int]] = board.to_2d_list()
    writer.writerows(rows)
    return out.getvalue()


def write_puzzle(board: SudokuBoard, path: Union[str, Path], delimiter: str = ",") -> None:
    """Write a board to a delimited text file."""
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(format_puzzle(board, delimiter=delimiter))
    log.info("Wrote puzzle to %s", path)
