#!/usr/bin/env python3
"""
Solve a Sudoku puzzle file via SAT.

Usage:
  sudoku-sat puzzle.txt
  sudoku-sat puzzle.txt --backend z3 --timeout 10 --pretty
  sudoku-sat puzzle.txt --count 5          # how many solutions (up to 5)
  sudoku-sat puzzle.txt --dimacs out.cnf   # also dump the CNF

Exit codes: 0 solved (or no puzzle given), 1 unsatisfiable, 2 error.
"""

import argparse
import sys
from typing import List, Optional

from sudoku_config import BACKENDS, SolverConfig, log_level_from_env
from sudoku_decoder import solve_grid
from sudoku_encoder import encode
from sudoku_errors import ContradictionError, SolverFailure, SudokuSatError
from sudoku_io import format_grid, format_grid_pretty, read_puzzle, write_dimacs
from sudoku_logging import configure_logging, get_logger
from sudoku_sat import enumerate_solutions

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_UNSAT = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="sudoku-sat", description="Solve an N×N Sudoku with a SAT solver.")
    ap.add_argument("puzzle", nargs="?", help="Path to puzzle .txt")
    ap.add_argument("--size", type=int, help="Grid size N (default: number of rows)")
    ap.add_argument("--backend", choices=BACKENDS, help="SAT engine (default: pysat)")
    ap.add_argument("--solver", dest="solver_name", help="pysat solver name, e.g. g4, m22, cd19")
    ap.add_argument("--timeout", type=float, help="Seconds before giving up")
    ap.add_argument("--count", type=int, metavar="LIMIT", help="Count solutions, up to LIMIT")
    ap.add_argument("--pretty", action="store_true", help="Print the grid with box separators")
    ap.add_argument("--dimacs", metavar="OUT", help="Write the CNF to OUT")
    ap.add_argument("-v", "--verbose", action="count", default=0)
    ap.add_argument("-q", "--quiet", action="store_true")
    return ap


def _log_level(args) -> str:
    if args.quiet:
        return "ERROR"
    if args.verbose >= 2:
        return "DEBUG"
    if args.verbose == 1:
        return "INFO"
    return log_level_from_env()


def run(args) -> int:
    config = SolverConfig.from_env().override(
        backend=args.backend, solver_name=args.solver_name, timeout=args.timeout
    )
    grid = read_puzzle(args.puzzle, args.size)
    clause_set = encode(grid)
    if args.dimacs:
        write_dimacs(clause_set, args.dimacs)

    if args.count is not None:
        models = enumerate_solutions(clause_set, limit=args.count, config=config)
        print(f"Solutions found: {len(models)}" + (" (limit reached)" if len(models) >= args.count else ""))
        return EXIT_OK if models else EXIT_UNSAT

    try:
        solution = solve_grid(grid, config, clause_set)
    except SolverFailure as e:
        print(f"Solver error: {e}", file=sys.stderr)
        return EXIT_ERROR
    if solution is None:
        print("Unsatisfiable")
        return EXIT_UNSAT

    print(format_grid_pretty(solution) if args.pretty else format_grid(solution))
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)
    if args.puzzle is None:
        ap.print_usage()
        return EXIT_OK
    if args.count is not None and args.count < 1:
        ap.error("--count LIMIT must be at least 1")

    configure_logging(_log_level(args))
    try:
        return run(args)
    except ContradictionError as e:
        print(f"Contradiction: {e}", file=sys.stderr)
        return EXIT_ERROR
    except SudokuSatError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
