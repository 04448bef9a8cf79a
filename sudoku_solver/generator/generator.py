"""Sudoku puzzle generator with a caller-supplied hint budget."""

from __future__ import annotations
import logging
import operator
import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple, Optional

from tqdm import tqdm

from ..core.board import SudokuBoard, SIZE
from ..solvers import BacktrackingSolver, SolutionCount

log = logging.getLogger(__name__)

# No uniquely solvable 9x9 puzzle has fewer hints than this.
MIN_UNIQUE_HINTS = 17
DEFAULT_MAX_ATTEMPTS = 10


class GenerateStatus(Enum):
    """Outcome of a generation request."""
    SUCCESS = "success"
    HINT_TARGET_MISSED = "hint_target_missed"


class GenerationError(Exception):
    """Raised by ``generate_with_solution`` when the hint target is missed."""


@dataclass
class GenerationResult:
    """
    Result of one generation request.

    ``puzzle`` is the fewest-hint puzzle reached, which is uniquely solvable
    even when the target was missed; ``solution`` is its completion.
    """
    status: GenerateStatus
    puzzle: Optional[SudokuBoard]
    solution: Optional[SudokuBoard]
    hints: int
    attempts: int
    max_hints: int
    reason: str = ""

    @property
    def success(self) -> bool:
        return self.status is GenerateStatus.SUCCESS


class SudokuGenerator:
    """
    Generator for uniquely solvable Sudoku puzzles.

    Algorithm:
    1. Fill an empty board with a randomized solver to get a complete grid
    2. Visit all 81 cells in random order; clear each one and keep it
       cleared only if the puzzle still has exactly one solution
    3. If more hints than requested remain, start over with a new grid,
       up to ``max_attempts`` times
    """

    def __init__(self, seed: Optional[int] = None, max_attempts: int = DEFAULT_MAX_ATTEMPTS):
        """
        Initialize the generator.

        Args:
            seed: Random seed for reproducibility.
            max_attempts: Complete grids to try before giving up on a target.
        """
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
        self.seed = seed
        self.max_attempts = max_attempts
        self.rng = random.Random(seed)
        self._filler = BacktrackingSolver(rng=self.rng)
        self._checker = BacktrackingSolver()

    def generate(self, max_hints: int) -> GenerationResult:
        """
        Generate a puzzle with at most max_hints hints.

        Args:
            max_hints: Largest acceptable number of hints (1-81).

        Returns:
            A GenerationResult; check ``success`` before using the puzzle.
        """
        if isinstance(max_hints, bool):
            raise ValueError(f"max_hints must be a positive integer, got {max_hints!r}")
        try:
            max_hints = operator.index(max_hints)
        except TypeError:
            raise ValueError(f"max_hints must be a positive integer, got {max_hints!r}") from None
        if max_hints < 1:
            raise ValueError(f"max_hints must be a positive integer, got {max_hints!r}")

        if max_hints < MIN_UNIQUE_HINTS:
            reason = (f"no uniquely solvable puzzle has fewer than {MIN_UNIQUE_HINTS} hints "
                      f"(requested at most {max_hints})")
            log.warning(reason)
            return GenerationResult(GenerateStatus.HINT_TARGET_MISSED, None, None,
                                    hints=0, attempts=0, max_hints=max_hints, reason=reason)

        best: Optional[Tuple[SudokuBoard, SudokuBoard]] = None
        for attempt in range(1, self.max_attempts + 1):
            solution = self._generate_complete_board()
            puzzle = self._remove_cells(solution)
            hints = puzzle.count_filled()
            log.info("Attempt %d/%d reached %d hints (target %d)",
                     attempt, self.max_attempts, hints, max_hints)

            if best is None or hints < best[0].count_filled():
                best = (puzzle, solution)
            if hints <= max_hints:
                return GenerationResult(GenerateStatus.SUCCESS, puzzle, solution,
                                        hints=hints, attempts=attempt, max_hints=max_hints)

        puzzle, solution = best
        reason = (f"fewest hints reached in {self.max_attempts} attempts was "
                  f"{puzzle.count_filled()}, above the maximum of {max_hints}")
        log.warning(reason)
        return GenerationResult(GenerateStatus.HINT_TARGET_MISSED, puzzle, solution,
                                hints=puzzle.count_filled(), attempts=self.max_attempts,
                                max_hints=max_hints, reason=reason)

    def generate_batch(self, count: int, max_hints: int,
                       show_progress: bool = False) -> List[GenerationResult]:
        """
        Generate several puzzles with the same hint budget.

        Args:
            count: Number of puzzles to generate.
            max_hints: Largest acceptable number of hints per puzzle.
            show_progress: Display a progress bar.

        Returns:
            List of GenerationResults, one per request.
        """
        return [
            self.generate(max_hints)
            for _ in tqdm(range(count), desc="Generating", disable=not show_progress)
        ]

    def generate_with_solution(self, max_hints: int) -> Tuple[SudokuBoard, SudokuBoard]:
        """
        Generate a puzzle along with its solution.

        Raises:
            GenerationError: If the hint target could not be met.
        """
        result = self.generate(max_hints)
        if not result.success:
            raise GenerationError(result.reason)
        return result.puzzle, result.solution

    def _generate_complete_board(self) -> SudokuBoard:
        """Generate a random complete board with the randomized solver."""
        solution, stats = self._filler.solve(SudokuBoard())
        if solution is None:
            raise RuntimeError(f"Failed to fill an empty board: {stats.reason}")
        return solution

    def _remove_cells(self, solution: SudokuBoard) -> SudokuBoard:
        """
        Remove cells from a complete solution while the solution stays unique.

        A cell whose removal allows a second solution is restored and stays
        a hint for the rest of this pass.
        """
        puzzle = solution.copy()
        positions = [(i, j) for i in range(SIZE) for j in range(SIZE)]
        self.rng.shuffle(positions)

        for row, col in positions:
            original_value = puzzle.get(row, col)
            puzzle.clear(row, col)

            result = self._checker.check_uniqueness(puzzle)
            if result is SolutionCount.UNIQUE:
                log.debug("Removed (%d, %d)", row, col)
            elif result is SolutionCount.MULTIPLE:
                puzzle.set(row, col, original_value)
                log.debug("Kept (%d, %d) as a hint", row, col)
            else:
                raise RuntimeError(f"Clearing ({row}, {col}) left a puzzle with no solution")

        return puzzle
