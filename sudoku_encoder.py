"""
Sudoku -> CNF.

Literal x_{r,c,v} (see sudoku_literals) means "cell (r,c) holds v".
Clause families, in emission order:

    given          [x_{r,c,v}] for every clue
    at_least_one   [x_{r,c,1} .. x_{r,c,N}] for every blank cell
    box            not-both for the same value, blank cell vs. each box mate
    row            same, vs. each cell of its row
    column         same, vs. each cell of its column
    at_most_one    [-x_{r,c,v1}, -x_{r,c,v2}] for every v1 < v2 of every cell
    given_conflict [-x_{a,v}, -x_{b,v}] for every pair of clues that see each other

Clauses are kept in order, duplicates included.
"""

from collections import Counter
from typing import Iterator, List, Sequence, Tuple

from pysat.formula import CNF

from sudoku_grid import Cell, Grid
from sudoku_literals import box_cell_of, literal_count, literal_of
from sudoku_logging import get_logger

logger = get_logger(__name__)

Clause = Tuple[int, ...]

FAMILIES = (
    "given",
    "at_least_one",
    "box",
    "row",
    "column",
    "at_most_one",
    "given_conflict",
)


class ClauseSet:
    """Flat, ordered clause list for one N×N grid, with per-family counts."""

    def __init__(self, size: int, box_size: int):
        self.size = size
        self.box_size = box_size
        self.literal_count = literal_count(size)
        self.clauses: List[Clause] = []
        self.counts: Counter = Counter()

    def add(self, lits: Sequence[int], family: str) -> None:
        self.clauses.append(tuple(lits))
        self.counts[family] += 1

    def __len__(self) -> int:
        return len(self.clauses)

    def __iter__(self) -> Iterator[Clause]:
        return iter(self.clauses)

    def family_count(self, family: str) -> int:
        return self.counts[family]

    def to_cnf(self) -> CNF:
        """pysat CNF declaring all N^3 propositions."""
        cnf = CNF(from_clauses=[list(cl) for cl in self.clauses])
        cnf.nv = max(cnf.nv, self.literal_count)
        return cnf


# ---------- peer enumerations ----------

def box_peers(grid: Grid, row: int, col: int) -> Iterator[Cell]:
    """The other cells of (row, col)'s box, walked through its N slots."""
    for slot in range(1, grid.size + 1):
        other = box_cell_of(row, col, slot, grid.box_size)
        if other != (row, col):
            yield other


def row_peers(grid: Grid, row: int, col: int) -> Iterator[Cell]:
    for other_col in range(grid.size):
        if other_col != col:
            yield row, other_col


def column_peers(grid: Grid, row: int, col: int) -> Iterator[Cell]:
    for other_row in range(grid.size):
        if other_row != row:
            yield other_row, col


# ---------- clause emission ----------

def forbid_same_value(clause_set: ClauseSet, a: Cell, b: Cell, family: str) -> None:
    """For every value v: cells a and b do not both hold v."""
    N = clause_set.size
    for value in range(1, N + 1):
        clause_set.add(
            [-literal_of(a[0], a[1], value, N), -literal_of(b[0], b[1], value, N)],
            family,
        )


def _add_given(clause_set: ClauseSet, row: int, col: int, value: int) -> None:
    clause_set.add([literal_of(row, col, value, clause_set.size)], "given")


def _add_cell_clauses(clause_set: ClauseSet, grid: Grid, row: int, col: int) -> None:
    N = clause_set.size
    lits = [literal_of(row, col, value, N) for value in range(1, N + 1)]
    clause_set.add(lits, "at_least_one")

    for other in box_peers(grid, row, col):
        forbid_same_value(clause_set, (row, col), other, "box")
    for other in row_peers(grid, row, col):
        forbid_same_value(clause_set, (row, col), other, "row")
    for other in column_peers(grid, row, col):
        forbid_same_value(clause_set, (row, col), other, "column")


def _add_at_most_one(clause_set: ClauseSet, row: int, col: int) -> None:
    N = clause_set.size
    lits = [literal_of(row, col, value, N) for value in range(1, N + 1)]
    for i in range(len(lits)):
        for j in range(i + 1, len(lits)):
            clause_set.add([-lits[i], -lits[j]], "at_most_one")


def _add_given_conflicts(clause_set: ClauseSet, grid: Grid) -> None:
    N = clause_set.size
    for row, col, value in grid.givens():
        for other in sorted(grid.peers(row, col)):
            if other > (row, col) and grid[other]:
                clause_set.add(
                    [-literal_of(row, col, value, N),
                     -literal_of(other[0], other[1], value, N)],
                    "given_conflict",
                )


def encode(grid: Grid) -> ClauseSet:
    """Build the clause set that is satisfiable iff ``grid`` has a valid completion."""
    clause_set = ClauseSet(grid.size, grid.box_size)

    for row, col, value in grid.givens():
        _add_given(clause_set, row, col, value)

    for row, col in grid.empty_cells():
        _add_cell_clauses(clause_set, grid, row, col)

    # clue cells too, otherwise a model may mark extra digits true there
    for row, col in grid.cells():
        _add_at_most_one(clause_set, row, col)

    _add_given_conflicts(clause_set, grid)

    for family in FAMILIES:
        logger.debug("%-14s %d clauses", family, clause_set.family_count(family))
    logger.info(
        "Encoded %dx%d grid: %d propositions, %d clauses",
        grid.size, grid.size, clause_set.literal_count, len(clause_set),
    )
    return clause_set
