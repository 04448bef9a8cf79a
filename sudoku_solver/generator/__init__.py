"""Generator module for creating Sudoku puzzles."""

from .generator import SudokuGenerator, GenerationResult, GenerateStatus, GenerationError

__all__ = ["SudokuGenerator", "GenerationResult", "GenerateStatus", "GenerationError"]
