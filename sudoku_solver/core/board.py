"""9x9 Sudoku board representation."""

from __future__ import annotations
import numpy as np
from typing import List, Tuple, Optional, Set


SIZE = 9
BOX_SIZE = 3
ALL_VALUES = frozenset(range(1, SIZE + 1))


class SudokuBoard:
    """
    Represents a standard 9x9 Sudoku board with 3x3 boxes.

    Cells hold 1-9, or 0 when empty. Candidates are never stored; they are
    derived from the current grid on every query.
    """

    size = SIZE
    box_size = BOX_SIZE

    def __init__(self, grid: Optional[np.ndarray] = None):
        """
        Initialize a Sudoku board.

        Args:
            grid: Optional initial 9x9 grid (0 for empty). If None, creates
                  an empty board.
        """
        if grid is not None:
            grid = np.asarray(grid)
            if grid.shape != (SIZE, SIZE):
                raise ValueError(f"Grid shape must be ({SIZE}, {SIZE}), got {grid.shape}")
            if np.any(grid < 0) or np.any(grid > SIZE):
                raise ValueError(f"Grid values must be 0-{SIZE}")
            self.grid = grid.copy().astype(np.int32)
        else:
            self.grid = np.zeros((SIZE, SIZE), dtype=np.int32)

    def copy(self) -> SudokuBoard:
        """Create a deep copy of the board."""
        new_board = SudokuBoard()
        new_board.grid = self.grid.copy()
        return new_board

    def get(self, row: int, col: int) -> int:
        """Get value at position (row, col). 0 means empty."""
        return int(self.grid[row, col])

    def set(self, row: int, col: int, value: int) -> None:
        """
        Set value at position (row, col) without checking constraints.

        Use 0 to clear. See ``place`` for the constraint-checked variant.
        """
        if value < 0 or value > SIZE:
            raise ValueError(f"Value must be 0-{SIZE}, got {value}")
        self.grid[row, col] = value

    def place(self, row: int, col: int, value: int) -> bool:
        """
        Place a value only if the board stays valid.

        A filled cell may be overwritten as long as the new value does not
        clash with any peer.

        Returns:
            True if the value was placed, False on conflict (board unchanged).
        """
        if value < 1 or value > SIZE:
            raise ValueError(f"Value must be 1-{SIZE}, got {value}")
        if self.conflicts(row, col, value):
            return False
        self.grid[row, col] = value
        return True

    def clear(self, row: int, col: int) -> None:
        """Clear the cell at position (row, col)."""
        self.grid[row, col] = 0

    def is_empty(self, row: int, col: int) -> bool:
        """Check if cell is empty (value is 0)."""
        return self.grid[row, col] == 0

    def get_row(self, row: int) -> np.ndarray:
        """Get all values in a row."""
        return self.grid[row, :]

    def get_col(self, col: int) -> np.ndarray:
        """Get all values in a column."""
        return self.grid[:, col]

    def get_box(self, row: int, col: int) -> np.ndarray:
        """Get all values in the box containing (row, col)."""
        box_row = (row // BOX_SIZE) * BOX_SIZE
        box_col = (col // BOX_SIZE) * BOX_SIZE
        return self.grid[box_row:box_row + BOX_SIZE,
                         box_col:box_col + BOX_SIZE].flatten()

    def get_box_index(self, row: int, col: int) -> int:
        """Get the box index (0 to 8) for a cell."""
        return (row // BOX_SIZE) * BOX_SIZE + (col // BOX_SIZE)

    def get_candidates(self, row: int, col: int) -> Set[int]:
        """
        Get all valid candidate values for an empty cell.

        Returns:
            Set of values (1 to 9) that can be placed at (row, col).
            Returns an empty set if the cell is already filled.
        """
        if not self.is_empty(row, col):
            return set()

        used = set(self.get_row(row).tolist())
        used |= set(self.get_col(col).tolist())
        used |= set(self.get_box(row, col).tolist())

        return set(ALL_VALUES - used)

    def get_peers(self, row: int, col: int) -> Set[Tuple[int, int]]:
        """
        Get all peer cell positions (those in same row, column, or box).

        Returns:
            Set of (r, c) tuples, excluding (row, col) itself.
        """
        peers = set()
        for i in range(SIZE):
            peers.add((row, i))
            peers.add((i, col))

        box_row = (row // BOX_SIZE) * BOX_SIZE
        box_col = (col // BOX_SIZE) * BOX_SIZE
        for i in range(BOX_SIZE):
            for j in range(BOX_SIZE):
                peers.add((box_row + i, box_col + j))

        peers.remove((row, col))
        return peers

    def conflicts(self, row: int, col: int, value: int) -> bool:
        """Check if any peer of (row, col) already holds value."""
        return any(self.grid[r, c] == value for r, c in self.get_peers(row, col))

    def get_empty_cells(self) -> List[Tuple[int, int]]:
        """Get list of all empty cell positions in row-major order."""
        return [(int(r), int(c)) for r, c in np.argwhere(self.grid == 0)]

    def count_empty(self) -> int:
        """Count the number of empty cells."""
        return int(np.sum(self.grid == 0))

    def count_filled(self) -> int:
        """Count the number of filled cells (hints, for a puzzle)."""
        return int(np.sum(self.grid != 0))

    def is_filled(self) -> bool:
        """Check if all cells hold a value, without checking constraints."""
        return self.count_empty() == 0

    def is_valid(self) -> bool:
        """
        Check if the current board state is valid.
        Does not check if the board is filled, only that no conflicts exist.
        """
        for i in range(SIZE):
            if _has_duplicates(self.get_row(i)) or _has_duplicates(self.get_col(i)):
                return False

        for box_row in range(0, SIZE, BOX_SIZE):
            for box_col in range(0, SIZE, BOX_SIZE):
                if _has_duplicates(self.get_box(box_row, box_col)):
                    return False

        return True

    def is_complete(self) -> bool:
        """Check if every cell is filled and no constraint is violated."""
        return self.is_filled() and self.is_valid()

    def to_string(self) -> str:
        """Convert board to an 81-character string, 0 for empty cells."""
        return ''.join(str(v) for v in self.grid.flatten().tolist())

    @classmethod
    def from_string(cls, s: str) -> SudokuBoard:
        """
        Create a board from an 81-character string.

        '0' or '.' mark empty cells, '1'-'9' are values.
        """
        if len(s) != SIZE * SIZE:
            raise ValueError(f"String length must be {SIZE * SIZE}, got {len(s)}")

        values = []
        for c in s:
            if c in '0.':
                values.append(0)
            elif c in '123456789':
                values.append(int(c))
            else:
                raise ValueError(f"Invalid character {c!r} in puzzle string")

        return cls(np.array(values, dtype=np.int32).reshape(SIZE, SIZE))

    @classmethod
    def from_2d_list(cls, data: List[List[int]]) -> SudokuBoard:
        """Create a board from a 2D list."""
        return cls(np.array(data, dtype=np.int32))

    def to_2d_list(self) -> List[List[int]]:
        """Return the board as a list of rows."""
        return self.grid.tolist()

    def __str__(self) -> str:
        """Pretty-print the board."""
        lines = []
        horizontal_sep = '+' + (('-' * (BOX_SIZE * 2 + 1)) + '+') * BOX_SIZE

        for i in range(SIZE):
            if i % BOX_SIZE == 0:
                lines.append(horizontal_sep)

            row_str = '|'
            for j in range(SIZE):
                val = self.grid[i, j]
                row_str += ' .' if val == 0 else f' {val}'
                if (j + 1) % BOX_SIZE == 0:
                    row_str += ' |'

            lines.append(row_str)

        lines.append(horizontal_sep)
        return '\n'.join(lines)

    def __repr__(self) -> str:
        return f"SudokuBoard(filled={self.count_filled()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SudokuBoard):
            return False
        return np.array_equal(self.grid, other.grid)

    def __hash__(self) -> int:
        return hash(self.to_string())


def _has_duplicates(values: np.ndarray) -> bool:
    non_zero = values[values != 0]
    return len(non_zero) != len(set(non_zero.tolist()))
