"""Constraint checks for Sudoku boards."""

from __future__ import annotations
from typing import TYPE_CHECKING, Set

if TYPE_CHECKING:
    from .board import SudokuBoard


def is_valid_placement(board: SudokuBoard, row: int, col: int, value: int) -> bool:
    """
    Check if placing a value at (row, col) is valid.

    The cell's own current value is ignored, so this also answers whether
    a filled cell could be overwritten with value.

    Args:
        board: The Sudoku board.
        row: Row index.
        col: Column index.
        value: Value to check (1 to 9).

    Returns:
        True if the placement is valid.
    """
    if value < 1 or value > board.size:
        return False

    return not board.conflicts(row, col, value)


def candidates(board: SudokuBoard, row: int, col: int) -> Set[int]:
    """Values still legal for an empty cell; empty set for a filled one."""
    return board.get_candidates(row, col)


def is_valid_board(board: SudokuBoard) -> bool:
    """
    Check if the entire board state is valid (no conflicts).

    Args:
        board: The Sudoku board to validate.

    Returns:
        True if no constraints are violated.
    """
    return board.is_valid()


def is_complete(board: SudokuBoard) -> bool:
    """True if the board is fully and correctly filled."""
    return board.is_complete()


def validate_solution(puzzle: SudokuBoard, solution: SudokuBoard) -> bool:
    """
    Validate that a solution correctly solves the puzzle.

    Args:
        puzzle: The original puzzle.
        solution: The proposed solution.

    Returns:
        True if solution is complete and matches every puzzle hint.
    """
    for i in range(puzzle.size):
        for j in range(puzzle.size):
            if not puzzle.is_empty(i, j):
                if puzzle.get(i, j) != solution.get(i, j):
                    return False

    return solution.is_complete()
