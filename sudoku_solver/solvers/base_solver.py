"""Base solver interface, configuration and result types."""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Any
import logging
import time
import tracemalloc

from ..core.board import SudokuBoard

log = logging.getLogger(__name__)


class SolveStatus(Enum):
    """Outcome of a solve call."""
    SOLVED = "solved"
    NO_SOLUTION = "no_solution"
    INVALID_PUZZLE = "invalid_puzzle"


class SolutionCount(Enum):
    """Number of completions of a puzzle, capped at two."""
    NONE = "none"
    UNIQUE = "unique"
    MULTIPLE = "multiple"

    @classmethod
    def from_count(cls, count: int) -> SolutionCount:
        if count <= 0:
            return cls.NONE
        if count == 1:
            return cls.UNIQUE
        return cls.MULTIPLE


@dataclass(frozen=True)
class SolverConfig:
    """
    Switches for the solving engine.

    Attributes:
        hidden_singles: Also propagate hidden singles, not just naked singles.
        possibility_groups: Clear the digits of a possibility group (k cells
                            of a unit sharing exactly k candidates) from
                            the rest of the unit.
        useful_constraints: Clear digits confined to one box-line crossing
                            from the rest of the crossing line or box.
        check_uniqueness: Keep searching after the first solution to report
                          whether it is unique (stored in ``stats.extra``).
        track_memory: Record peak memory with tracemalloc.
    """
    hidden_singles: bool = True
    possibility_groups: bool = True
    useful_constraints: bool = True
    check_uniqueness: bool = False
    track_memory: bool = False


@dataclass
class SolverStats:
    """Statistics from a solver run."""
    # Core metrics
    solved: bool = False
    status: SolveStatus = SolveStatus.NO_SOLUTION
    reason: str = ""
    time_seconds: float = 0.0
    memory_bytes: int = 0
    iterations: int = 0

    # Search metrics
    backtracks: int = 0
    nodes_explored: int = 0

    # Technique usage
    singles: int = 0
    hidden_singles: int = 0
    possibility_groups: int = 0
    useful_constraints: int = 0
    guesses: int = 0

    # Additional metadata
    algorithm: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "solved": self.solved,
            "status": self.status.value,
            "reason": self.reason,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "iterations": self.iterations,
            "backtracks": self.backtracks,
            "nodes_explored": self.nodes_explored,
            "singles": self.singles,
            "hidden_singles": self.hidden_singles,
            "possibility_groups": self.possibility_groups,
            "useful_constraints": self.useful_constraints,
            "guesses": self.guesses,
            "algorithm": self.algorithm,
            **self.extra
        }


class BaseSolver(ABC):
    """Abstract base class for Sudoku solvers."""

    name: str = "BaseSolver"

    def __init__(self, config: Optional[SolverConfig] = None):
        self.config = config or SolverConfig()
        self.stats = SolverStats(algorithm=self.name)

    def solve(self, board: SudokuBoard) -> tuple[Optional[SudokuBoard], SolverStats]:
        """
        Solve a Sudoku puzzle with timing (and optionally memory) tracking.

        The input board is never modified. A board that already breaks a
        row, column or box constraint is rejected before any search.

        Args:
            board: The puzzle to solve.

        Returns:
            Tuple of (solution or None, stats). ``stats.status`` tells why
            no solution was returned.
        """
        self.stats = SolverStats(algorithm=self.name)

        if not board.is_valid():
            self.stats.status = SolveStatus.INVALID_PUZZLE
            self.stats.reason = "puzzle has repeated values in a row, column or box"
            log.debug("Rejected invalid puzzle before search")
            return None, self.stats

        # A trace the caller already started is left running
        owns_trace = self.config.track_memory and not tracemalloc.is_tracing()
        if owns_trace:
            tracemalloc.start()
        elif self.config.track_memory:
            tracemalloc.reset_peak()

        start_time = time.perf_counter()
        try:
            solution = self._solve(board.copy())
        finally:
            self.stats.time_seconds = time.perf_counter() - start_time
            if self.config.track_memory:
                _, peak = tracemalloc.get_traced_memory()
                self.stats.memory_bytes = peak
            if owns_trace:
                tracemalloc.stop()

        self.stats.solved = solution is not None and solution.is_complete()
        if self.stats.solved:
            self.stats.status = SolveStatus.SOLVED
        else:
            solution = None
            self.stats.status = SolveStatus.NO_SOLUTION
            self.stats.reason = "puzzle has no completion"

        log.debug("%s finished: %s in %.4fs", self.name, self.stats.status.value,
                  self.stats.time_seconds)
        return solution, self.stats

    @abstractmethod
    def _solve(self, board: SudokuBoard) -> Optional[SudokuBoard]:
        """
        Internal solve method to be implemented by subclasses.

        Args:
            board: A valid copy of the puzzle to solve (can be modified).

        Returns:
            The solved board, or None if no solution exists.
        """
        pass

    def reset_stats(self) -> None:
        """Reset solver statistics."""
        self.stats = SolverStats(algorithm=self.name)
