"""Unit tests for puzzle generator."""

import numpy as np
import pytest
from sudoku_solver.generator import SudokuGenerator, GenerateStatus, GenerationError
from sudoku_solver.generator.generator import MIN_UNIQUE_HINTS
from sudoku_solver.core.validator import validate_solution
from sudoku_solver.solvers import BacktrackingSolver, SolutionCount


class TestSudokuGenerator:
    """Tests for SudokuGenerator class."""

    def test_generate_creates_unique_puzzle(self):
        """Generated puzzles are valid, within budget and uniquely solvable."""
        generator = SudokuGenerator(seed=42)
        result = generator.generate(81)

        assert result.success
        assert result.status is GenerateStatus.SUCCESS
        assert result.attempts == 1
        puzzle = result.puzzle
        assert puzzle.is_valid()
        assert puzzle.count_filled() == result.hints
        assert result.hints <= 81
        assert BacktrackingSolver().check_uniqueness(puzzle) is SolutionCount.UNIQUE

    def test_removal_goes_well_below_full_grid(self):
        """Greedy removal leaves far fewer hints than a full grid."""
        result = SudokuGenerator(seed=7).generate(81)
        assert result.hints < 40
        assert result.hints >= MIN_UNIQUE_HINTS

    def test_puzzle_matches_solution(self):
        """The returned solution completes the puzzle and is what the solver finds."""
        result = SudokuGenerator(seed=1).generate(81)

        assert result.solution.is_complete()
        assert validate_solution(result.puzzle, result.solution)

        solved, stats = BacktrackingSolver().solve(result.puzzle)
        assert stats.solved
        assert solved == result.solution

    def test_same_seed_same_puzzle(self):
        """Generation is reproducible from the seed."""
        first = SudokuGenerator(seed=123).generate(81)
        second = SudokuGenerator(seed=123).generate(81)
        assert first.puzzle == second.puzzle

    def test_generate_realistic_target(self):
        """A 30-hint budget is met with a uniquely solvable puzzle."""
        result = SudokuGenerator(seed=42).generate(30)

        assert result.success
        assert result.hints <= 30
        assert result.puzzle.count_filled() == result.hints
        assert BacktrackingSolver().check_uniqueness(result.puzzle) is SolutionCount.UNIQUE
        assert validate_solution(result.puzzle, result.solution)

    def test_generate_with_solution(self):
        """Test generating puzzle with solution."""
        generator = SudokuGenerator(seed=42)
        puzzle, solution = generator.generate_with_solution(81)

        assert puzzle.is_valid()
        assert solution.is_complete()

        # Verify puzzle is subset of solution
        for i in range(puzzle.size):
            for j in range(puzzle.size):
                if not puzzle.is_empty(i, j):
                    assert puzzle.get(i, j) == solution.get(i, j)

    def test_generate_batch(self):
        """Test batch generation."""
        generator = SudokuGenerator(seed=42)
        results = generator.generate_batch(2, 81)

        assert len(results) == 2
        for result in results:
            assert result.success
            assert result.puzzle.is_valid()
        assert results[0].puzzle != results[1].puzzle


class TestHintTarget:
    """Tests for hint budgets that cannot be met."""

    def test_below_minimum_fails_without_search(self):
        """Fewer than 17 hints is impossible and reported immediately."""
        result = SudokuGenerator(seed=42).generate(10)

        assert not result.success
        assert result.status is GenerateStatus.HINT_TARGET_MISSED
        assert result.attempts == 0
        assert result.puzzle is None
        assert "17" in result.reason

    def test_retries_then_reports_failure(self, monkeypatch):
        """When every attempt stays above the target, all attempts are used."""
        generator = SudokuGenerator(seed=42, max_attempts=3)
        calls = []

        def keep_everything(solution):
            calls.append(solution)
            return solution.copy()

        monkeypatch.setattr(generator, "_remove_cells", keep_everything)
        result = generator.generate(30)

        assert not result.success
        assert result.status is GenerateStatus.HINT_TARGET_MISSED
        assert result.attempts == 3
        assert len(calls) == 3
        assert result.hints == 81
        assert result.puzzle.is_complete()
        assert "30" in result.reason

    def test_generate_with_solution_raises_on_failure(self):
        """The tuple API raises when no puzzle meets the target."""
        with pytest.raises(GenerationError):
            SudokuGenerator(seed=42).generate_with_solution(5)

    @pytest.mark.parametrize("max_hints", [0, -3])
    def test_non_positive_target_rejected(self, max_hints):
        """The hint budget must be a positive integer."""
        with pytest.raises(ValueError):
            SudokuGenerator(seed=42).generate(max_hints)

    @pytest.mark.parametrize("max_hints", [True, 30.0, "30", None])
    def test_non_integer_target_rejected(self, max_hints):
        """Booleans, floats and strings are not hint counts."""
        with pytest.raises(ValueError):
            SudokuGenerator(seed=42).generate(max_hints)

    def test_numpy_integer_target_accepted(self):
        """Integer-like values such as numpy scalars are accepted."""
        result = SudokuGenerator(seed=42).generate(np.int64(81))

        assert result.success
        assert result.max_hints == 81
        assert type(result.max_hints) is int

    def test_max_attempts_must_be_positive(self):
        """At least one attempt is required."""
        with pytest.raises(ValueError):
            SudokuGenerator(max_attempts=0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
