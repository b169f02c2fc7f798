# Puzzle file reading and grid printing.
#
# Input: one row per line, whitespace-separated ints, 0 (or .) = blank.
# A "c" or "p" followed by whitespace marks a comment or problem line and
# is skipped; only the "p sudoku N" shape declares N. Compact rows such as
# "530070000" are accepted too, with A..Z (or a..z) for 10..35.

from math import isqrt
from typing import Iterable, List, Optional

from sudoku_config import COMMENT_MARKER, PROBLEM_MARKER
from sudoku_encoder import ClauseSet
from sudoku_errors import PuzzleFormatError, PuzzleReadError
from sudoku_grid import Grid
from sudoku_literals import cell_of
from sudoku_logging import get_logger

logger = get_logger(__name__)


def _is_marker(s: str, marker: str) -> bool:
    # "c ..." or a bare "c"; "cg4..." is a compact row starting with 12
    return s == marker or (s.startswith(marker) and s[len(marker)].isspace())


def _header_size(line: str) -> Optional[int]:
    """Size from a "p sudoku N" line; any other problem line carries none."""
    tokens = line.split()
    if len(tokens) == 3 and tokens[1].lower() == "sudoku" and tokens[2].isdigit():
        return int(tokens[2])
    return None


def _symbol_value(ch: str) -> int:
    if ch in "0.":
        return 0
    if ch.isdigit():
        return int(ch)
    if "A" <= ch <= "Z":
        return 10 + ord(ch) - ord("A")
    if "a" <= ch <= "z":
        return 10 + ord(ch) - ord("a")
    raise ValueError(ch)


def _parse_row(s: str, lineno: int) -> List[int]:
    try:
        if len(s.split()) > 1 or len(s) == 1:
            return [0 if t == "." else int(t) for t in s.split()]
        return [_symbol_value(ch) for ch in s]
    except ValueError as e:
        raise PuzzleFormatError(
            "Not a row of integers", context={"line": lineno, "text": s}, original_exception=e
        ) from e


def parse_puzzle(lines: Iterable[str], size: Optional[int] = None) -> Grid:
    """
    Build a Grid from puzzle lines. ``size`` (or a size in the "p" header)
    is checked against the data; without either, N is the number of rows.
    """
    rows: List[List[int]] = []
    declared = size
    for lineno, raw in enumerate(lines, start=1):
        s = raw.strip()
        if not s or _is_marker(s, COMMENT_MARKER):
            continue
        if _is_marker(s, PROBLEM_MARKER):
            header = _header_size(s)
            if header is not None:
                if declared is not None and declared != header:
                    raise PuzzleFormatError(
                        "Problem line size differs from requested size",
                        context={"line": lineno, "header": header, "requested": declared},
                    )
                declared = header
            continue
        rows.append(_parse_row(s, lineno))

    if not rows:
        raise PuzzleFormatError("No rows parsed.")
    N = declared if declared is not None else len(rows)
    n = isqrt(N)
    if N <= 0 or n * n != N:
        raise PuzzleFormatError(f"N must be a perfect square (got N={N}).")
    if len(rows) != N:
        raise PuzzleFormatError(
            f"Expected {N} rows, got {len(rows)}", context={"N": N}
        )
    for r, row in enumerate(rows):
        if len(row) != N:
            raise PuzzleFormatError(
                f"Row {r} has {len(row)} values, expected {N}", context={"N": N}
            )
    return Grid(rows)


def read_puzzle(path: str, size: Optional[int] = None) -> Grid:
    try:
        with open(path, "r", encoding="utf-8") as f:
            lines = f.readlines()
    except (OSError, UnicodeDecodeError) as e:
        raise PuzzleReadError(
            "Cannot read puzzle file", context={"path": path}, original_exception=e
        ) from e
    grid = parse_puzzle(lines, size)
    logger.info("Read %dx%d puzzle from %s", grid.size, grid.size, path)
    return grid


# ---------- printing ----------

def _symbol(v: int) -> str:
    # pretty printing up to base-36: 1..9, A..Z
    if v == 0:
        return "."
    if 1 <= v <= 9:
        return str(v)
    return chr(ord("A") + (v - 10))


def format_grid(grid: Grid) -> str:
    """One row per line, values space-separated."""
    return "\n".join(" ".join(str(v) for v in row) for row in grid.rows)


def format_grid_pretty(grid: Grid) -> str:
    N, n = grid.size, grid.box_size
    cellw = 2 if N <= 9 else 3  # wider for 16x16 etc.
    hsep = "-" * ((cellw + 1) * N + (n - 1) * 2)

    lines = []
    for r, row in enumerate(grid.rows):
        if r % n == 0 and r != 0:
            lines.append(hsep)
        parts = []
        for c, v in enumerate(row):
            if c % n == 0 and c != 0:
                parts.append("|")
            parts.append(_symbol(v).rjust(cellw))
        lines.append(" ".join(parts))
    return "\n".join(lines)


def write_dimacs(clause_set: ClauseSet, path: str) -> None:
    """Dump the clause set as DIMACS CNF."""
    N = clause_set.size
    first, last = cell_of(1, N), cell_of(clause_set.literal_count, N)
    comments = [
        f"c sudoku {N}x{N}, box {clause_set.box_size}",
        f"c var = (row*{N} + col)*{N} + value; 1 -> {first}, "
        f"{clause_set.literal_count} -> {last}",
    ]
    comments += [f"c {family}: {count}" for family, count in clause_set.counts.items()]
    clause_set.to_cnf().to_file(path, comments=comments)
    logger.info("Wrote %d clauses to %s", len(clause_set), path)
