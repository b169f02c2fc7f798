from math import isqrt
from typing import Iterator, List, Sequence, Set, Tuple

from sudoku_errors import GridFormatError

Cell = Tuple[int, int]


class Grid:
    """
    N×N Sudoku grid, N = n^2 (box size is n×n).
    rows: N×N ints, 0=blank, 1..N=clue
    """

    def __init__(self, rows: Sequence[Sequence[int]]):
        rows = [list(row) for row in rows]
        N = len(rows)
        if N == 0:
            raise GridFormatError("Grid has no rows.")
        for r, row in enumerate(rows):
            if len(row) != N:
                raise GridFormatError(
                    "Grid must be square (N×N).",
                    context={"row": r, "length": len(row), "N": N},
                )
        n = isqrt(N)
        if n * n != N:
            raise GridFormatError(f"N must be a perfect square (got N={N}).")
        for r in range(N):
            for c in range(N):
                v = rows[r][c]
                if isinstance(v, bool) or not isinstance(v, int) or not (0 <= v <= N):
                    raise GridFormatError(
                        f"Cell ({r},{c}) value {v!r} out of range 0..{N}",
                        context={"row": r, "col": c},
                    )
        self._rows = rows
        self.size = N
        self.box_size = n

    @classmethod
    def empty(cls, size: int) -> "Grid":
        return cls([[0] * size for _ in range(size)])

    @property
    def rows(self) -> List[List[int]]:
        return [row[:] for row in self._rows]

    def __getitem__(self, cell: Cell) -> int:
        r, c = cell
        return self._rows[r][c]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self._rows == other._rows

    def __repr__(self) -> str:
        return f"Grid({self._rows!r})"

    def cells(self) -> Iterator[Cell]:
        for r in range(self.size):
            for c in range(self.size):
                yield r, c

    def givens(self) -> Iterator[Tuple[int, int, int]]:
        for r, c in self.cells():
            if self._rows[r][c]:
                yield r, c, self._rows[r][c]

    def empty_cells(self) -> Iterator[Cell]:
        for r, c in self.cells():
            if not self._rows[r][c]:
                yield r, c

    def peers(self, row: int, col: int) -> Set[Cell]:
        """Cells sharing a row, column or box with (row, col), excluding itself."""
        n = self.box_size
        out = {(row, c) for c in range(self.size)}
        out |= {(r, col) for r in range(self.size)}
        br, bc = n * (row // n), n * (col // n)
        out |= {(r, c) for r in range(br, br + n) for c in range(bc, bc + n)}
        out.discard((row, col))
        return out

    def units(self) -> Iterator[List[int]]:
        """Every row, column and box as a list of values."""
        N, n = self.size, self.box_size
        for r in range(N):
            yield self._rows[r][:]
        for c in range(N):
            yield [self._rows[r][c] for r in range(N)]
        for br in range(n):
            for bc in range(n):
                yield [self._rows[r][c]
                       for r in range(br * n, br * n + n)
                       for c in range(bc * n, bc * n + n)]

    def is_complete(self) -> bool:
        return all(v for row in self._rows for v in row)

    def is_valid(self) -> bool:
        """No row, column or box repeats a known digit."""
        for unit in self.units():
            known = [v for v in unit if v]
            if len(known) != len(set(known)):
                return False
        return True

    def is_solved(self) -> bool:
        return self.is_complete() and self.is_valid()

    def agrees_with(self, other: "Grid") -> bool:
        """True when every given of this grid appears unchanged in ``other``."""
        if other.size != self.size:
            return False
        return all(other[r, c] == v for r, c, v in self.givens())

    def with_values(self, rows: Sequence[Sequence[int]]) -> "Grid":
        out = Grid(rows)
        if out.size != self.size:
            raise GridFormatError(
                "Replacement rows change the grid size.",
                context={"expected": self.size, "got": out.size},
            )
        return out
