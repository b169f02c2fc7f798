from typing import Optional

from sudoku_config import SolverConfig
from sudoku_encoder import ClauseSet, encode
from sudoku_errors import DecodingError, SolverFailure
from sudoku_grid import Grid
from sudoku_literals import literal_of
from sudoku_logging import get_logger
from sudoku_sat import Model, Satisfiable, SolverError, solve

logger = get_logger(__name__)


def decode(model: Model, size: int, strict: bool = False) -> Grid:
    """
    Turn a model into an N×N grid: per cell, the first value 1..N whose
    literal is true. A cell with no true value is a broken invariant.
    With ``strict`` a cell with several true values is rejected as well.
    """
    out = [[0] * size for _ in range(size)]
    for r in range(size):
        for c in range(size):
            for v in range(1, size + 1):
                if model.is_true(literal_of(r, c, v, size)):
                    out[r][c] = v
                    break
            if not out[r][c]:
                raise DecodingError("Cell holds no digit", context={"row": r, "col": c})
            if strict:
                extra = [v for v in range(out[r][c] + 1, size + 1)
                         if model.is_true(literal_of(r, c, v, size))]
                if extra:
                    raise DecodingError(
                        "Cell holds more than one digit",
                        context={"row": r, "col": c, "values": [out[r][c]] + extra},
                    )
    return Grid(out)


def solve_grid(
    grid: Grid,
    config: Optional[SolverConfig] = None,
    clause_set: Optional[ClauseSet] = None,
) -> Optional[Grid]:
    """
    encode -> solve -> decode.
    Returns the completed grid, or None when the puzzle has no solution.
    ``clause_set`` skips the encoding step when the caller already has it.
    """
    outcome = solve(clause_set if clause_set is not None else encode(grid), config)
    if isinstance(outcome, SolverError):
        raise SolverFailure(outcome.reason)
    if not isinstance(outcome, Satisfiable):
        return None
    solution = decode(outcome.model, grid.size)
    logger.debug("Decoded %dx%d solution", grid.size, grid.size)
    return solution
