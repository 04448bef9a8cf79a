"""Tests for reading and writing delimited puzzle text."""

import pytest
from sudoku_solver.core.board import SudokuBoard
from sudoku_solver.core.io import (
    PuzzleFormatError,
    parse_puzzle,
    read_puzzle,
    write_puzzle,
    format_puzzle,
)


PUZZLE_CSV = """\
5,3,0,0,7,0,0,0,0
6,0,0,1,9,5,0,0,0
0,9,8,0,0,0,0,6,0
8,0,0,0,6,0,0,0,3
4,0,0,8,0,3,0,0,1
7,0,0,0,2,0,0,0,6
0,6,0,0,0,0,2,8,0
0,0,0,4,1,9,0,0,5
0,0,0,0,8,0,0,7,9
"""

PUZZLE_STRING = (
    "530070000"
    "600195000"
    "098000060"
    "800060003"
    "400803001"
    "700020006"
    "060000280"
    "000419005"
    "000080079"
)


class TestParsePuzzle:
    """Tests for the text parsing boundary."""

    def test_parse_csv(self):
        """A 9x9 comma-separated grid is read row by row."""
        board = parse_puzzle(PUZZLE_CSV)
        assert board.to_string() == PUZZLE_STRING
        assert board.count_filled() == 30

    def test_blank_fields_are_empty(self):
        """Blank fields and dots mark empty cells, like zeros."""
        text = PUZZLE_CSV.replace(",0", ",").replace("0,", ".,")
        board = parse_puzzle(text)
        assert board.to_string() == PUZZLE_STRING

    def test_blank_lines_are_ignored(self):
        """Blank lines around the grid do not count as rows."""
        board = parse_puzzle("\n" + PUZZLE_CSV + "\n\n")
        assert board.to_string() == PUZZLE_STRING

    def test_other_delimiter(self):
        """A different delimiter can be chosen."""
        board = parse_puzzle(PUZZLE_CSV.replace(",", ";"), delimiter=";")
        assert board.to_string() == PUZZLE_STRING

    def test_too_few_rows(self):
        """Eight rows is reported, not crashed on."""
        text = "\n".join(PUZZLE_CSV.splitlines()[:8])
        with pytest.raises(PuzzleFormatError, match="expected 9 rows, got 8"):
            parse_puzzle(text)

    def test_too_many_rows(self):
        """Ten rows is rejected."""
        with pytest.raises(PuzzleFormatError, match="got 10"):
            parse_puzzle(PUZZLE_CSV + "0,0,0,0,0,0,0,0,0\n")

    def test_wrong_column_count(self):
        """A short row is reported with its row number."""
        lines = PUZZLE_CSV.splitlines()
        lines[3] = "8,0,0,0,6,0,0,0"
        with pytest.raises(PuzzleFormatError) as excinfo:
            parse_puzzle("\n".join(lines))
        assert excinfo.value.row == 3
        assert "row 4" in str(excinfo.value)

    @pytest.mark.parametrize("field", ["10", "x", "-1", "5.0", "\u00b2", "\u0663"])
    def test_invalid_field(self, field):
        """Anything other than a single digit or an empty marker is rejected."""
        lines = PUZZLE_CSV.splitlines()
        lines[0] = f"5,3,0,0,{field},0,0,0,0"
        with pytest.raises(PuzzleFormatError) as excinfo:
            parse_puzzle("\n".join(lines))
        assert (excinfo.value.row, excinfo.value.col) == (0, 4)

    def test_format_error_is_value_error(self):
        """Callers can catch format problems as ValueError."""
        with pytest.raises(ValueError):
            parse_puzzle("")

    def test_conflicting_hints_parse(self):
        """Clashing hints are well-formed text; the solver judges them."""
        lines = PUZZLE_CSV.splitlines()
        lines[0] = "5,5,0,0,7,0,0,0,0"
        board = parse_puzzle("\n".join(lines))
        assert not board.is_valid()


class TestFiles:
    """Tests for reading and writing puzzle files."""

    def test_write_then_read(self, tmp_path):
        """A written puzzle reads back unchanged."""
        board = SudokuBoard.from_string(PUZZLE_STRING)
        path = tmp_path / "puzzle.csv"
        write_puzzle(board, path)

        assert path.read_text() == PUZZLE_CSV
        assert read_puzzle(path) == board

    def test_format_puzzle(self):
        """Formatting writes nine lines of nine fields."""
        text = format_puzzle(SudokuBoard())
        lines = text.splitlines()
        assert len(lines) == 9
        assert all(line == "0,0,0,0,0,0,0,0,0" for line in lines)

    def test_non_digit_numerals_in_file(self, tmp_path):
        """Superscripts and other Unicode numerals are format errors, not crashes."""
        path = tmp_path / "superscript.csv"
        path.write_text(PUZZLE_CSV.replace("5,3", "\u00b2,3", 1), encoding="utf-8")
        with pytest.raises(PuzzleFormatError) as excinfo:
            read_puzzle(path)
        assert (excinfo.value.row, excinfo.value.col) == (0, 0)

    def test_undecodable_file(self, tmp_path):
        """Bytes that are not UTF-8 are reported as a format error."""
        path = tmp_path / "binary.csv"
        path.write_bytes(b"\xff\xfe" + PUZZLE_CSV.encode("utf-8"))
        with pytest.raises(PuzzleFormatError, match="not UTF-8"):
            read_puzzle(path)

    def test_missing_file(self, tmp_path):
        """A missing file raises OSError."""
        with pytest.raises(OSError):
            read_puzzle(tmp_path / "missing.csv")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
