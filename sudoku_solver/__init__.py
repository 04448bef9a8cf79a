"""Sudoku solver and puzzle generator."""

from .core import SudokuBoard, PuzzleFormatError, parse_puzzle, read_puzzle, write_puzzle
from .solvers import BacktrackingSolver, SolutionCount, SolveStatus, SolverConfig
from .generator import SudokuGenerator, GenerationResult, GenerateStatus

__version__ = "1.0.0"

__all__ = [
    "SudokuBoard",
    "PuzzleFormatError",
    "parse_puzzle",
    "read_puzzle",
    "write_puzzle",
    "BacktrackingSolver",
    "SolutionCount",
    "SolveStatus",
    "SolverConfig",
    "SudokuGenerator",
    "GenerationResult",
    "GenerateStatus",
]
