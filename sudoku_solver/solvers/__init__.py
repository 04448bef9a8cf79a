"""Solvers module for Sudoku puzzles."""

from .base_solver import BaseSolver, SolverStats, SolverConfig, SolveStatus, SolutionCount
from .backtracking_solver import BacktrackingSolver, count_solutions, has_unique_solution

__all__ = [
    "BaseSolver",
    "SolverStats",
    "SolverConfig",
    "SolveStatus",
    "SolutionCount",
    "BacktrackingSolver",
    "count_solutions",
    "has_unique_solution",
]
