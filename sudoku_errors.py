"""
sudoku_errors.py

Exception hierarchy for the SAT Sudoku solver.

    SudokuSatError
    ├── InputError
    │   ├── PuzzleReadError
    │   └── PuzzleFormatError
    │       └── GridFormatError
    ├── ConfigurationError
    ├── EncodingError
    │   └── ContradictionError
    ├── SolverFailure
    └── DecodingError

Unsatisfiable puzzles are not errors; they come back as an Unsatisfiable outcome.
"""

from typing import Any, Dict, Optional


class SudokuSatError(Exception):
    """Base class; carries an optional context dict and the chained cause."""

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.original_exception = original_exception

    def __str__(self) -> str:
        base_msg = self.message

        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base_msg += f" | Context: {context_str}"

        if self.original_exception:
            base_msg += (
                f" | Caused by: {type(self.original_exception).__name__}: "
                f"{self.original_exception}"
            )

        return base_msg

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, context={self.context!r})"


# ----- input


class InputError(SudokuSatError):
    """Puzzle could not be turned into a grid; raised before any clause exists."""


class PuzzleReadError(InputError):
    """Puzzle file missing or unreadable."""


class PuzzleFormatError(InputError):
    """Puzzle text is malformed (bad token, ragged rows, wrong row count)."""


class GridFormatError(PuzzleFormatError):
    """Rows do not form an N×N grid with N = k*k and digits in 0..N."""


class ConfigurationError(SudokuSatError):
    """Unknown backend, solver name or a bad timeout value."""


# ----- encoding / solving


class EncodingError(SudokuSatError):
    """Base for problems found while loading clauses into an engine."""


class ContradictionError(EncodingError):
    """The engine reported a conflict while the clauses were being loaded."""


class SolverFailure(SudokuSatError):
    """The engine failed or timed out. Fatal, no retry."""


class DecodingError(SudokuSatError):
    """A model broke the one-digit-per-cell invariant."""
