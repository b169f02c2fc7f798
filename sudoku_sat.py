"""
Hand a ClauseSet to a SAT engine and get back one of

    Satisfiable(model) | Unsatisfiable() | SolverError(reason)

Backends:
    pysat  pysat.solvers.Solver (Glucose 4 unless configured otherwise)
    z3     z3.Solver over one Bool per proposition

Every clause is a hard constraint. Engine instances live only for the call.
A conflict found while loading the clauses raises ContradictionError.
"""

import time
from dataclasses import dataclass
from threading import Timer
from typing import Callable, Dict, Iterable, List, Optional, Union

from pysat.solvers import Solver, SolverNames
import z3

from sudoku_config import SolverConfig
from sudoku_encoder import ClauseSet
from sudoku_errors import ConfigurationError, ContradictionError, SolverFailure
from sudoku_logging import get_logger

logger = get_logger(__name__)


class Model:
    """Truth value per proposition, indexed by literal - 1 (positive = true)."""

    def __init__(self, values: List[int]):
        self.values = values

    @classmethod
    def from_assignment(cls, lits: Iterable[int], literal_count: int) -> "Model":
        """Pad an engine model so every literal 1..literal_count has a value."""
        values = [-(i + 1) for i in range(literal_count)]
        for lit in lits:
            if 0 < abs(lit) <= literal_count:
                values[abs(lit) - 1] = lit
        return cls(values)

    def __len__(self) -> int:
        return len(self.values)

    def is_true(self, literal: int) -> bool:
        return self.values[literal - 1] > 0

    def true_literals(self) -> List[int]:
        return [v for v in self.values if v > 0]


@dataclass(frozen=True)
class Satisfiable:
    model: Model


@dataclass(frozen=True)
class Unsatisfiable:
    pass


@dataclass(frozen=True)
class SolverError:
    reason: str


Outcome = Union[Satisfiable, Unsatisfiable, SolverError]


# ---------- pysat ----------

def _known_pysat_names() -> List[str]:
    names: List[str] = []
    for attr, value in vars(SolverNames).items():
        if not attr.startswith("_") and isinstance(value, tuple):
            names.extend(value)
    return names


def _check_pysat_name(name: str) -> None:
    if name not in _known_pysat_names():
        raise ConfigurationError(f"Unknown pysat solver {name!r}")


def _pysat_models(clause_set: ClauseSet, config: SolverConfig, limit: Optional[int]) -> List[Model]:
    _check_pysat_name(config.solver_name)
    count = clause_set.literal_count
    models: List[Model] = []

    with Solver(name=config.solver_name, bootstrap_with=clause_set.clauses) as s:
        try:
            ok, _ = s.propagate(assumptions=[])
        except NotImplementedError:
            logger.debug("%s cannot propagate; skipping contradiction check", config.solver_name)
        else:
            if not ok:
                raise ContradictionError(
                    "Clauses contradict each other at load time",
                    context={"solver": config.solver_name, "clauses": len(clause_set)},
                )

        timer = None
        if config.timeout is not None:
            timer = Timer(config.timeout, lambda slv: slv.interrupt(), [s])
            timer.daemon = True
            timer.start()
        try:
            while limit is None or len(models) < limit:
                try:
                    st = s.solve_limited(expect_interrupt=timer is not None)
                except NotImplementedError as e:
                    raise SolverFailure(
                        f"{config.solver_name} does not support interruption",
                        original_exception=e,
                    ) from e
                if st is None:
                    raise SolverFailure(
                        "Solver timed out", context={"timeout": config.timeout}
                    )
                if not st:
                    break
                model = Model.from_assignment(s.get_model(), count)
                models.append(model)
                # block only the primary true literals
                s.add_clause([-l for l in model.true_literals()])
        finally:
            if timer is not None:
                timer.cancel()

    return models


# ---------- z3 ----------

def _z3_models(clause_set: ClauseSet, config: SolverConfig, limit: Optional[int]) -> List[Model]:
    count = clause_set.literal_count
    X = [z3.Bool(f"x_{i}") for i in range(1, count + 1)]

    def lit(l: int):
        return X[l - 1] if l > 0 else z3.Not(X[-l - 1])

    s = z3.Solver()
    if config.timeout is not None:
        s.set("timeout", int(config.timeout * 1000))
    for clause in clause_set:
        s.add(z3.Or([lit(l) for l in clause]) if len(clause) > 1 else lit(clause[0]))

    models: List[Model] = []
    while limit is None or len(models) < limit:
        res = s.check()
        if res == z3.unsat:
            break
        if res != z3.sat:
            raise SolverFailure(
                "z3 gave up", context={"reason": s.reason_unknown(), "timeout": config.timeout}
            )
        m = s.model()
        values = [
            i if z3.is_true(m.eval(X[i - 1], model_completion=True)) else -i
            for i in range(1, count + 1)
        ]
        model = Model(values)
        models.append(model)
        s.add(z3.Or([z3.Not(X[l - 1]) for l in model.true_literals()]))

    return models


_BACKENDS: Dict[str, Callable[[ClauseSet, SolverConfig, Optional[int]], List[Model]]] = {
    "pysat": _pysat_models,
    "z3": _z3_models,
}


def enumerate_solutions(
    clause_set: ClauseSet,
    limit: Optional[int] = None,
    config: Optional[SolverConfig] = None,
) -> List[Model]:
    """
    Collect up to ``limit`` distinct models (None = all).
    Raises SolverFailure on engine failure/timeout, ContradictionError on a load-time conflict.
    """
    config = config or SolverConfig()
    backend = _BACKENDS[config.backend]
    logger.info(
        "Solving with %s/%s: %d propositions, %d clauses",
        config.backend, config.solver_name, clause_set.literal_count, len(clause_set),
    )
    started = time.perf_counter()
    try:
        models = backend(clause_set, config, limit)
    except (z3.Z3Exception, RuntimeError) as e:
        raise SolverFailure(
            f"{config.backend} engine failed",
            context={"solver": config.solver_name},
            original_exception=e,
        ) from e
    logger.info("%d model(s) in %.3fs", len(models), time.perf_counter() - started)
    return models


def solve(clause_set: ClauseSet, config: Optional[SolverConfig] = None) -> Outcome:
    try:
        models = enumerate_solutions(clause_set, limit=1, config=config)
    except SolverFailure as e:
        logger.error("Solver failed: %s", e)
        return SolverError(str(e))
    if not models:
        logger.info("Unsatisfiable")
        return Unsatisfiable()
    return Satisfiable(models[0])
