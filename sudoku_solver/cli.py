"""Command-line interface for the Sudoku solver and generator."""

import argparse
import logging
import os
import sys
from typing import List, Optional

from .core import PuzzleFormatError, read_puzzle, write_puzzle
from .generator import SudokuGenerator
from .generator.generator import DEFAULT_MAX_ATTEMPTS
from .solvers import BacktrackingSolver, SolverConfig, SolveStatus


def _debug_parent(default) -> argparse.ArgumentParser:
    """Parent parser holding --debug, shared by the top level and each command."""
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        "--debug", action="store_true", default=default,
        help="Enable debug logging"
    )
    return parent


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all commands."""
    # Commands must not reset a --debug given before the command name
    command_parent = _debug_parent(argparse.SUPPRESS)

    parser = argparse.ArgumentParser(
        prog="sudoku",
        parents=[_debug_parent(False)],
        description="Sudoku Puzzle Solver & Generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Solve a puzzle stored as 9 comma-separated lines (0 or blank for empty)
  sudoku solve puzzle.csv

  # Generate a puzzle with at most 30 hints and save it
  sudoku generate 30 --output puzzle.csv --seed 42
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Solve command
    solve_parser = subparsers.add_parser(
        "solve", parents=[command_parent], help="Solve a Sudoku puzzle file"
    )
    solve_parser.add_argument(
        "filename", type=str,
        help="Path to puzzle file (9 delimited rows of 9 fields)"
    )
    solve_parser.add_argument(
        "--delimiter", type=str, default=",",
        help="Field delimiter (default: ',')"
    )
    solve_parser.add_argument(
        "--no-hidden-singles", action="store_true",
        help="Do not propagate hidden singles"
    )
    solve_parser.add_argument(
        "--no-possibility-groups", action="store_true",
        help="Do not eliminate candidates using possibility groups"
    )
    solve_parser.add_argument(
        "--no-useful-constraints", action="store_true",
        help="Do not eliminate candidates using box/line constraints"
    )
    solve_parser.add_argument(
        "--unique", action="store_true",
        help="Also report whether the solution is unique"
    )
    solve_parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Show detailed solving statistics"
    )
    solve_parser.add_argument(
        "--pdf", type=str, default=None,
        help="Also draw the solved grid to this file"
    )

    # Generate command
    gen_parser = subparsers.add_parser(
        "generate", parents=[command_parent], help="Generate Sudoku puzzles"
    )
    gen_parser.add_argument(
        "max_hints", type=int,
        help="Maximum number of hints in the puzzle"
    )
    gen_parser.add_argument(
        "--output", "-o", type=str, default=None,
        help="Output file for the puzzle (comma-separated)"
    )
    gen_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for reproducibility"
    )
    gen_parser.add_argument(
        "--attempts", type=int, default=DEFAULT_MAX_ATTEMPTS,
        help=f"Complete grids to try before giving up (default: {DEFAULT_MAX_ATTEMPTS})"
    )
    gen_parser.add_argument(
        "--count", "-n", type=int, default=1,
        help="Number of puzzles to generate (default: 1)"
    )
    gen_parser.add_argument(
        "--pdf", type=str, default=None,
        help="Also draw the puzzle to this file"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "solve":
        return cmd_solve(args)
    return cmd_generate(args)


def solve_main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the standalone solve program."""
    return main(["solve", *(sys.argv[1:] if argv is None else argv)])


def generate_main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the standalone generate program."""
    return main(["generate", *(sys.argv[1:] if argv is None else argv)])


def cmd_solve(args) -> int:
    """Handle the solve command."""
    try:
        board = read_puzzle(args.filename, delimiter=args.delimiter)
    except (OSError, PuzzleFormatError) as e:
        print(f"Error while reading grid: {e}", file=sys.stderr)
        return 1

    print("Grid to be solved:")
    print(board)
    print()

    config = SolverConfig(
        hidden_singles=not args.no_hidden_singles,
        possibility_groups=not args.no_possibility_groups,
        useful_constraints=not args.no_useful_constraints,
        check_uniqueness=args.unique,
    )
    solver = BacktrackingSolver(config)
    solution, stats = solver.solve(board)

    if stats.status is not SolveStatus.SOLVED:
        label = "Invalid puzzle" if stats.status is SolveStatus.INVALID_PUZZLE else "No solution"
        print(f"✗ {label}: {stats.reason}")
        return 1

    print(f"✓ Solved in {stats.time_seconds:.4f}s")
    if args.verbose:
        print(f"  Iterations: {stats.iterations:,}")
        print(f"  Backtracks: {stats.backtracks:,}")
        print(f"  Naked singles: {stats.singles:,}")
        print(f"  Hidden singles: {stats.hidden_singles:,}")
        print(f"  Possibility groups: {stats.possibility_groups:,}")
        print(f"  Useful constraints: {stats.useful_constraints:,}")
        print(f"  Guesses: {stats.guesses:,}")
    if args.unique:
        print(f"  Uniqueness: {stats.extra['uniqueness']}")
    print("Solved grid:")
    print(solution)

    if args.pdf:
        from .render import draw_grid
        draw_grid(solution, args.pdf, title="Solution")
        print(f"Grid drawn to {args.pdf}")
    return 0


def cmd_generate(args) -> int:
    """Handle the generate command."""
    if args.max_hints < 1:
        print("Error: max_hints must be a positive integer", file=sys.stderr)
        return 1
    if args.attempts < 1:
        print("Error: --attempts must be at least 1", file=sys.stderr)
        return 1

    generator = SudokuGenerator(seed=args.seed, max_attempts=args.attempts)
    results = generator.generate_batch(args.count, args.max_hints, show_progress=args.count > 1)

    exit_code = 0
    for i, result in enumerate(results, 1):
        if not result.success:
            print(f"✗ Puzzle {i}: {result.reason}")
            exit_code = 1
            continue

        print(f"\n--- Puzzle {i} ({result.hints} hints) ---")
        print(result.puzzle)
        print(f"Puzzle has {result.hints} hints")

        if args.output:
            path = _numbered(args.output, i, len(results))
            write_puzzle(result.puzzle, path)
            print(f"Puzzle saved to {path}")
        if args.pdf:
            from .render import draw_grid
            path = _numbered(args.pdf, i, len(results))
            draw_grid(result.puzzle, path, title=f"Sudoku ({result.hints} hints)")
            print(f"Puzzle drawn to {path}")

    return exit_code


def _numbered(path: str, index: int, total: int) -> str:
    """Insert the puzzle number before the extension when writing several files."""
    if total == 1:
        return path
    stem, ext = os.path.splitext(path)
    return f"{stem}_{index}{ext}"


if __name__ == "__main__":
    sys.exit(main())
