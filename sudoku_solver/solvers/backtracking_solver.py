"""Constraint propagation + backtracking solver, with a solution-counting mode."""

from __future__ import annotations
import logging
import random
from typing import Optional, List, Tuple, Union

import numpy as np

from .base_solver import BaseSolver, SolverConfig, SolutionCount
from ..core.board import SudokuBoard, SIZE, BOX_SIZE

log = logging.getLogger(__name__)

NUM_CELLS = SIZE * SIZE

# Digit d is bit (1 << d); bit 0 is unused.
ALL_DIGITS = sum(1 << d for d in range(1, SIZE + 1))

ROW_OF = [i // SIZE for i in range(NUM_CELLS)]
COL_OF = [i % SIZE for i in range(NUM_CELLS)]
BOX_OF = [(r // BOX_SIZE) * BOX_SIZE + c // BOX_SIZE for r, c in zip(ROW_OF, COL_OF)]

UNITS = (
    [[r * SIZE + c for c in range(SIZE)] for r in range(SIZE)]
    + [[r * SIZE + c for r in range(SIZE)] for c in range(SIZE)]
    + [[i for i in range(NUM_CELLS) if BOX_OF[i] == b] for b in range(SIZE)]
)

POPCOUNT = [bin(m).count("1") for m in range(1 << (SIZE + 1))]
DIGITS_OF = [[d for d in range(1, SIZE + 1) if m & (1 << d)] for m in range(1 << (SIZE + 1))]

# A trail records a placement as its cell index and an elimination as
# (cell index, removed digit bits).
TrailEntry = Union[int, Tuple[int, int]]


class SearchState:
    """
    Exclusively owned working copy of a grid used during search.

    Cells are a flat row-major list; row, column and box occupancy are kept
    as digit bitmasks that are updated on every place/remove, so candidates
    are always consistent with the cells. Digits ruled out by deduction
    rather than by a peer are kept per cell in ``eliminated``.
    """

    def __init__(self, cells: List[int]):
        self.cells = [0] * NUM_CELLS
        self.rows = [0] * SIZE
        self.cols = [0] * SIZE
        self.boxes = [0] * SIZE
        self.eliminated = [0] * NUM_CELLS
        for idx, value in enumerate(cells):
            if value:
                self.place(idx, value)

    @classmethod
    def from_board(cls, board: SudokuBoard) -> SearchState:
        return cls(board.grid.flatten().tolist())

    def to_board(self) -> SudokuBoard:
        return SudokuBoard(np.array(self.cells, dtype=np.int32).reshape(SIZE, SIZE))

    def candidates(self, idx: int) -> int:
        """Bitmask of digits legal at idx (meaningful for empty cells only)."""
        used = self.rows[ROW_OF[idx]] | self.cols[COL_OF[idx]] | self.boxes[BOX_OF[idx]]
        return ALL_DIGITS & ~(used | self.eliminated[idx])

    def place(self, idx: int, digit: int) -> None:
        bit = 1 << digit
        self.cells[idx] = digit
        self.rows[ROW_OF[idx]] |= bit
        self.cols[COL_OF[idx]] |= bit
        self.boxes[BOX_OF[idx]] |= bit

    def remove(self, idx: int) -> None:
        mask = ~(1 << self.cells[idx])
        self.cells[idx] = 0
        self.rows[ROW_OF[idx]] &= mask
        self.cols[COL_OF[idx]] &= mask
        self.boxes[BOX_OF[idx]] &= mask

    def eliminate(self, idx: int, bits: int) -> None:
        """Rule out digits at idx; bits must all be current candidates."""
        self.eliminated[idx] |= bits

    def undo(self, trail: List[TrailEntry]) -> None:
        """Revert every placement and elimination recorded in trail, newest first."""
        while trail:
            entry = trail.pop()
            if isinstance(entry, tuple):
                idx, bits = entry
                self.eliminated[idx] &= ~bits
            else:
                self.remove(entry)


class BacktrackingSolver(BaseSolver):
    """
    Depth-first search with constraint propagation.

    Features:
    - Naked singles propagated to a fixpoint before every branch, with
      hidden singles, possibility groups (naked subsets) and useful
      constraints (pointing and box/line reduction) as switchable extras
    - Minimum Remaining Values (MRV) heuristic for cell selection
    - Counting mode that stops as soon as a second solution is found
    - Randomized tie-breaking and value order when given an ``rng``, used to
      build varied complete grids

    Every placement and elimination made below a branch is undone before the next value is
    tried, so a failed branch leaves the working state exactly as it found it.
    """

    name = "Propagation+Backtracking"

    def __init__(self, config: Optional[SolverConfig] = None,
                 rng: Optional[random.Random] = None):
        """
        Initialize the solver.

        Args:
            config: Engine switches; defaults to ``SolverConfig()``.
            rng: Random source for randomized fill mode. When None the search
                 is deterministic: ties go to the first cell in row-major
                 order and values are tried in ascending order.
        """
        super().__init__(config)
        self.rng = rng

    def _solve(self, board: SudokuBoard) -> Optional[SudokuBoard]:
        """Solve using propagation and backtracking."""
        limit = 2 if self.config.check_uniqueness else 1
        solutions = self._run(board, limit)
        if self.config.check_uniqueness:
            self.stats.extra["uniqueness"] = SolutionCount.from_count(len(solutions)).value
        if not solutions:
            return None
        return SearchState(solutions[0]).to_board()

    def count_solutions(self, board: SudokuBoard, limit: int = 2) -> int:
        """
        Count the solutions of a puzzle, stopping once limit is reached.

        An invalid board has no solutions and is not searched.

        Args:
            board: The puzzle board (not modified).
            limit: Maximum solutions to count before stopping.

        Returns:
            Number of solutions found (up to limit).
        """
        self.reset_stats()
        if not board.is_valid():
            return 0
        return len(self._run(board, limit))

    def check_uniqueness(self, board: SudokuBoard) -> SolutionCount:
        """Classify a puzzle as having none, one or several solutions."""
        return SolutionCount.from_count(self.count_solutions(board, limit=2))

    def _run(self, board: SudokuBoard, limit: int) -> List[List[int]]:
        state = SearchState.from_board(board)
        solutions: List[List[int]] = []
        self._search(state, limit, solutions)
        return solutions

    def _search(self, state: SearchState, limit: int, solutions: List[List[int]]) -> bool:
        """
        Recursive search step.

        Appends each completed grid to solutions and returns True once
        limit solutions have been collected. Leaves state unchanged.
        """
        self.stats.iterations += 1
        trail: List[TrailEntry] = []

        if not self._propagate(state, trail):
            self.stats.backtracks += 1
            state.undo(trail)
            return False

        cell = self._select_unassigned_variable(state)
        if cell is None:
            solutions.append(list(state.cells))
            log.debug("Found solution %d", len(solutions))
            state.undo(trail)
            return len(solutions) >= limit

        idx, mask = cell
        digits = list(DIGITS_OF[mask])
        if self.rng is not None:
            self.rng.shuffle(digits)
        self.stats.nodes_explored += 1

        done = False
        for digit in digits:
            self.stats.guesses += 1
            log.debug("Guessing %d at (%d, %d)", digit, ROW_OF[idx], COL_OF[idx])
            state.place(idx, digit)
            done = self._search(state, limit, solutions)
            state.remove(idx)
            if done:
                break

        state.undo(trail)
        return done

    def _select_unassigned_variable(self, state: SearchState) -> Optional[Tuple[int, int]]:
        """
        Select the empty cell with the fewest candidates (MRV).

        Returns:
            (cell index, candidate mask), or None when the grid is full.
        """
        best: List[Tuple[int, int]] = []
        min_candidates = SIZE + 1

        for idx in range(NUM_CELLS):
            if state.cells[idx]:
                continue
            mask = state.candidates(idx)
            count = POPCOUNT[mask]
            if count < min_candidates:
                min_candidates = count
                best = [(idx, mask)]
                if self.rng is None and count <= 2:
                    # Propagation leaves no cell with fewer than two candidates
                    break
            elif count == min_candidates and self.rng is not None:
                best.append((idx, mask))

        if not best:
            return None
        if self.rng is not None:
            return self.rng.choice(best)
        return best[0]

    def _propagate(self, state: SearchState, trail: List[TrailEntry]) -> bool:
        """
        Apply constraint propagation until nothing changes.

        Placements and eliminations are appended to trail so the caller
        can undo them.

        Returns:
            False if a contradiction was found, True otherwise.
        """
        changed = True
        while changed:
            changed = False
            for idx in range(NUM_CELLS):
                if state.cells[idx]:
                    continue
                mask = state.candidates(idx)
                count = POPCOUNT[mask]
                if count == 0:
                    return False
                if count == 1:
                    state.place(idx, DIGITS_OF[mask][0])
                    trail.append(idx)
                    self.stats.singles += 1
                    changed = True

            if not changed and self.config.hidden_singles:
                found = self._place_hidden_singles(state, trail)
                if found is None:
                    return False
                changed = found

            if not changed and self.config.possibility_groups:
                for unit in UNITS:
                    found = self._process_possibility_groups(state, trail, unit)
                    if found is None:
                        return False
                    changed = changed or found

            if not changed and self.config.useful_constraints:
                for unit_index in range(len(UNITS)):
                    if self._apply_useful_constraint(state, trail, unit_index):
                        changed = True

        return True

    def _place_hidden_singles(self, state: SearchState, trail: List[TrailEntry]) -> Optional[bool]:
        """
        Place digits that fit in exactly one cell of a row, column or box.

        Returns:
            None on contradiction (a missing digit with no legal cell, or a
            cell that would need two digits), else whether anything was placed.
        """
        changed = False

        for unit in UNITS:
            placed = 0
            once = 0
            twice = 0
            empty = []
            for idx in unit:
                value = state.cells[idx]
                if value:
                    placed |= 1 << value
                else:
                    mask = state.candidates(idx)
                    twice |= once & mask
                    once |= mask
                    empty.append((idx, mask))

            if (once | placed) != ALL_DIGITS:
                return None

            singles = once & ~twice & ~placed
            if not singles:
                continue

            for idx, mask in empty:
                hit = mask & singles
                if not hit:
                    continue
                if POPCOUNT[hit] > 1:
                    return None
                digit = DIGITS_OF[hit][0]
                # Earlier placements in this pass may have taken the digit away
                if state.cells[idx] or not state.candidates(idx) & hit:
                    continue
                state.place(idx, digit)
                trail.append(idx)
                self.stats.hidden_singles += 1
                changed = True

        return changed

    def _process_possibility_groups(self, state: SearchState, trail: List[TrailEntry],
                                    unit: List[int]) -> Optional[bool]:
        """
        Find possibility groups in one unit and clear their digits elsewhere.

        A possibility group is k empty cells whose candidates together hold
        exactly k digits; no other cell of the unit can take those digits.

        Returns:
            None on contradiction (k cells sharing fewer than k digits),
            else whether any candidate was eliminated.
        """
        empty = [idx for idx in unit if not state.cells[idx]]
        found = self._bisect_possibility_groups(state, trail, empty)
        if found:
            self.stats.possibility_groups += 1
        return found

    def _bisect_possibility_groups(self, state: SearchState, trail: List[TrailEntry],
                                   cells: List[int]) -> Optional[bool]:
        """
        Split cells into a possibility group and the rest, then recurse on both.

        The group grows from the cell adding the fewest new digits until its
        size matches its digit count.
        """
        if len(cells) <= 2:
            return False

        outside = list(cells)
        inside: List[int] = []
        digits = 0
        while outside:
            idx = min(outside, key=lambda i: POPCOUNT[state.candidates(i) & ~digits])
            outside.remove(idx)
            inside.append(idx)
            digits |= state.candidates(idx)
            if POPCOUNT[digits] < len(inside):
                return None
            if POPCOUNT[digits] == len(inside):
                break

        if not outside:
            return False

        changed = False
        for idx in outside:
            hit = state.candidates(idx) & digits
            if hit:
                self._eliminate(state, trail, idx, hit)
                changed = True
        log.debug("Possibility group %s holds %s", inside, DIGITS_OF[digits])

        for part in (inside, outside):
            found = self._bisect_possibility_groups(state, trail, part)
            if found is None:
                return None
            changed = changed or found
        return changed

    def _apply_useful_constraint(self, state: SearchState, trail: List[TrailEntry],
                                 unit_index: int) -> bool:
        """
        Clear digits confined to where this unit crosses another unit.

        If every cell of a box that can take a digit lies in one row (or
        column), that line's cells outside the box cannot take it. If every
        cell of a row or column that can take a digit lies in one box, the
        rest of that box cannot take it.

        Returns:
            Whether any candidate was eliminated.
        """
        unit = UNITS[unit_index]
        is_box = unit_index >= 2 * SIZE
        changed = False

        for digit in range(1, SIZE + 1):
            bit = 1 << digit
            holders = [idx for idx in unit
                       if not state.cells[idx] and state.candidates(idx) & bit]
            if not holders:
                continue

            targets = []
            if is_box:
                rows = {ROW_OF[idx] for idx in holders}
                cols = {COL_OF[idx] for idx in holders}
                if len(rows) == 1:
                    targets.append(UNITS[rows.pop()])
                if len(cols) == 1:
                    targets.append(UNITS[SIZE + cols.pop()])
            else:
                boxes = {BOX_OF[idx] for idx in holders}
                if len(boxes) == 1:
                    targets.append(UNITS[2 * SIZE + boxes.pop()])

            for target in targets:
                for idx in target:
                    if idx in unit or state.cells[idx]:
                        continue
                    if state.candidates(idx) & bit:
                        self._eliminate(state, trail, idx, bit)
                        changed = True

        if changed:
            self.stats.useful_constraints += 1
        return changed

    def _eliminate(self, state: SearchState, trail: List[TrailEntry], idx: int, bits: int) -> None:
        state.eliminate(idx, bits)
        trail.append((idx, bits))


def count_solutions(board: SudokuBoard, limit: int = 2) -> int:
    """Count solutions of board up to limit with a deterministic solver."""
    return BacktrackingSolver().count_solutions(board, limit=limit)


def has_unique_solution(board: SudokuBoard) -> bool:
    """
    Check if a puzzle has exactly one solution.

    Args:
        board: The puzzle board.

    Returns:
        True if the puzzle has exactly one solution.
    """
    return count_solutions(board, limit=2) == 1
