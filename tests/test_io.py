import pytest

from sudoku_encoder import encode
from sudoku_errors import GridFormatError, PuzzleFormatError, PuzzleReadError
from sudoku_grid import Grid
from sudoku_io import (
    format_grid,
    format_grid_pretty,
    parse_puzzle,
    read_puzzle,
    write_dimacs,
)

from conftest import PUZZLE_4, SOLUTION_4, pattern_solution

PUZZLE_4_TEXT = """c example 4x4
p sudoku 4
1 0 0 4
0 0 1 0
0 1 0 0
4 0 0 1
"""


class TestParse:
    def test_comment_and_problem_lines_are_skipped(self):
        assert parse_puzzle(PUZZLE_4_TEXT.splitlines()) == Grid(PUZZLE_4)

    def test_size_inferred_from_row_count(self):
        lines = ["1 0 0 4", "", "0 0 1 0", "0 1 0 0", "4 0 0 1"]
        assert parse_puzzle(lines).size == 4

    def test_compact_rows(self):
        lines = ["530070000", "600195000", "098000060", "800060003", "400803001",
                 "700020006", "060000280", "000419005", "000080079"]
        grid = parse_puzzle(lines)
        assert grid[0, 0] == 5 and grid[8, 8] == 9
        assert len(list(grid.givens())) == 30

    def test_dots_are_blanks(self):
        grid = parse_puzzle(["1 . . 4", ". . 1 .", ". 1 . .", "4 . . 1"])
        assert grid == Grid(PUZZLE_4)

    def test_other_problem_lines_are_ignored(self):
        lines = ["p cnf 64 100", "1 0 0 4", "0 0 1 0", "0 1 0 0", "4 0 0 1"]
        assert parse_puzzle(lines) == Grid(PUZZLE_4)
        assert parse_puzzle(["p"] + lines[1:]) == Grid(PUZZLE_4)

    def test_lowercase_compact_rows_starting_with_markers(self):
        symbols = ".123456789abcdefg"
        lines = ["c 16x16, lowercase"]
        lines += ["".join(symbols[v] for v in row) for row in pattern_solution(16)]
        assert any(l.startswith("c") for l in lines[1:])
        assert parse_puzzle(lines) == Grid(pattern_solution(16))

    def test_compact_row_starting_with_p(self):
        rows = [[(r + c) % 16 + 1 for c in range(16)] for r in range(16)]
        rows[3] = [25 if c == 0 else 0 for c in range(16)]
        lines = ["".join(".123456789abcdefghijklmnopqrstuvwxyz"[v] for v in row) for row in rows]
        assert lines[3].startswith("p")
        # the row is read, so the bad value is reported instead of a short grid
        with pytest.raises(GridFormatError, match="value 25"):
            parse_puzzle(lines)

    def test_explicit_size_must_match(self):
        with pytest.raises(PuzzleFormatError):
            parse_puzzle(PUZZLE_4_TEXT.splitlines(), size=9)

    def test_header_size_must_match_rows(self):
        text = PUZZLE_4_TEXT.replace("p sudoku 4", "p sudoku 9")
        with pytest.raises(PuzzleFormatError, match="Expected 9 rows"):
            parse_puzzle(text.splitlines())

    @pytest.mark.parametrize(
        "lines",
        [
            [],
            ["c only a comment"],
            ["1 0 0", "0 0 1", "0 1 0"],
            ["1 0 0 4", "0 0 1 0", "0 1 0 0"],
            ["1 0 0 4", "0 0 1", "0 1 0 0", "4 0 0 1"],
            ["1 0 x 4", "0 0 1 0", "0 1 0 0", "4 0 0 1"],
        ],
    )
    def test_malformed(self, lines):
        with pytest.raises(PuzzleFormatError):
            parse_puzzle(lines)

    def test_value_out_of_range(self):
        with pytest.raises(GridFormatError):
            parse_puzzle(["5 0 0 4", "0 0 1 0", "0 1 0 0", "4 0 0 1"])


class TestRead:
    def test_reads_file(self, puzzle_file):
        assert read_puzzle(puzzle_file(PUZZLE_4_TEXT)) == Grid(PUZZLE_4)

    def test_missing_file(self, tmp_path):
        with pytest.raises(PuzzleReadError) as exc:
            read_puzzle(str(tmp_path / "nope.txt"))
        assert isinstance(exc.value.original_exception, OSError)


class TestFormat:
    def test_plain(self):
        assert format_grid(Grid(SOLUTION_4)) == "1 2 3 4\n3 4 1 2\n2 1 4 3\n4 3 2 1"

    def test_pretty_4x4(self):
        assert format_grid_pretty(Grid(PUZZLE_4)).splitlines() == [
            " 1  . |  .  4",
            " .  . |  1  .",
            "-" * 14,
            " .  1 |  .  .",
            " 4  . |  .  1",
        ]

    def test_pretty_uses_letters_past_nine(self):
        out = format_grid_pretty(Grid(pattern_solution(16)))
        assert "  G" in out
        assert len(out.splitlines()) == 16 + 3


def test_write_dimacs(tmp_path):
    cs = encode(Grid(PUZZLE_4))
    path = tmp_path / "p4.cnf"
    write_dimacs(cs, str(path))
    lines = path.read_text().splitlines()
    header = [l for l in lines if l.startswith("p ")]
    assert header == [f"p cnf 64 {len(cs)}"]
    assert lines[0].startswith("c sudoku 4x4")
    body = [l for l in lines if not l.startswith(("c", "p"))]
    assert body[0] == "1 0"
    assert len(body) == len(cs)
