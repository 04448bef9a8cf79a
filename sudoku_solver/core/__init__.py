"""Core module for Sudoku board representation, validation and text I/O."""

from .board import SudokuBoard
from .validator import is_valid_placement, is_valid_board, is_complete, validate_solution
from .io import PuzzleFormatError, parse_puzzle, read_puzzle, format_puzzle, write_puzzle

__all__ = [
    "SudokuBoard",
    "is_valid_placement",
    "is_valid_board",
    "is_complete",
    "validate_solution",
    "PuzzleFormatError",
    "parse_puzzle",
    "read_puzzle",
    "format_puzzle",
    "write_puzzle",
]
