"""
Defaults for the SAT Sudoku solver. Environment variables override them,
command-line flags override the environment.

    SUDOKU_SAT_BACKEND   pysat | z3
    SUDOKU_SAT_SOLVER    pysat solver name (g4, g3, m22, cd19, ...)
    SUDOKU_SAT_TIMEOUT   seconds, empty for no limit
    SUDOKU_SAT_LOG_LEVEL DEBUG | INFO | WARNING | ...
"""

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from sudoku_errors import ConfigurationError

# ==== solving ================================================================

BACKENDS = ("pysat", "z3")
DEFAULT_BACKEND: str = "pysat"

# Glucose 4; any name accepted by pysat.solvers.SolverNames works
DEFAULT_SOLVER: str = "g4"

# seconds; None = no limit
DEFAULT_TIMEOUT: Optional[float] = None

# ==== input ==================================================================

# lines starting with these are skipped (comment / problem header)
COMMENT_MARKER: str = "c"
PROBLEM_MARKER: str = "p"

# ==== logging ================================================================

LOG_LEVEL: str = "WARNING"


@dataclass(frozen=True)
class SolverConfig:
    backend: str = DEFAULT_BACKEND
    solver_name: str = DEFAULT_SOLVER
    timeout: Optional[float] = DEFAULT_TIMEOUT

    def __post_init__(self):
        if self.backend not in BACKENDS:
            raise ConfigurationError(
                f"Unknown backend {self.backend!r}",
                context={"choices": ", ".join(BACKENDS)},
            )
        if self.timeout is not None and self.timeout <= 0:
            raise ConfigurationError(
                "Timeout must be positive", context={"timeout": self.timeout}
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SolverConfig":
        env = os.environ if environ is None else environ
        timeout = env.get("SUDOKU_SAT_TIMEOUT", "").strip()
        return cls(
            backend=env.get("SUDOKU_SAT_BACKEND", DEFAULT_BACKEND).strip() or DEFAULT_BACKEND,
            solver_name=env.get("SUDOKU_SAT_SOLVER", DEFAULT_SOLVER).strip() or DEFAULT_SOLVER,
            timeout=_parse_timeout(timeout) if timeout else DEFAULT_TIMEOUT,
        )

    def override(self, **changes) -> "SolverConfig":
        """Copy with the non-None keyword values applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def _parse_timeout(raw: str) -> float:
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(
            "SUDOKU_SAT_TIMEOUT is not a number",
            context={"value": raw},
            original_exception=e,
        ) from e


def log_level_from_env(environ: Optional[Mapping[str, str]] = None) -> str:
    env = os.environ if environ is None else environ
    return env.get("SUDOKU_SAT_LOG_LEVEL", LOG_LEVEL).strip().upper() or LOG_LEVEL
