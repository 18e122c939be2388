"""
Random search solver.

Samples every parameter independently from its range and distribution.
Parameters whose constraint does not hold for the values sampled so far are
left unbound. Useful as a baseline and as a smoke test of a harness setup:

    kurobako-runner solver kurobako.solvers.random_search:RandomSolverFactory
"""

from __future__ import annotations

import logging
import math
import random
from typing import List, Optional

from kurobako.core.distribution import Distribution
from kurobako.core.errors import ConstraintError
from kurobako.core.problem import ProblemSpec
from kurobako.core.solver import Solver, SolverFactory, SolverSpec
from kurobako.core.trial import EvaluatedTrial, NextTrial, TrialIDGenerator
from kurobako.core.variable import Var

logger = logging.getLogger(__name__)


class RandomSolverFactory(SolverFactory):
    def __init__(self, name: str = "Random Search"):
        self.name = name

    def specification(self) -> SolverSpec:
        return SolverSpec(name=self.name)

    def create_solver(self, seed: int, problem: ProblemSpec) -> "RandomSolver":
        return RandomSolver(random.Random(seed), problem)


class RandomSolver(Solver):
    def __init__(self, rng: random.Random, problem: ProblemSpec):
        self.rng = rng
        self.problem = problem

    def ask(self, idg: TrialIDGenerator) -> NextTrial:
        params: List[Optional[float]] = []
        for var in self.problem.params:
            if self._is_active(var, params):
                params.append(self._sample(var))
            else:
                params.append(None)

        return NextTrial(trial_id=idg.generate(), params=params, next_step=self.problem.steps.last)

    def tell(self, trial: EvaluatedTrial) -> None:
        logger.debug("Trial %d finished at step %d: %s", trial.trial_id, trial.current_step, trial.values)

    def _is_active(self, var: Var, params: List[Optional[float]]) -> bool:
        try:
            return var.is_constraint_satisfied(self.problem.params, params)
        except ConstraintError as exc:
            # Only a constraint over a sibling that was itself left unbound is tolerated.
            if all(value is not None for value in params):
                raise
            logger.debug("Leaving %r unbound: %s", var.name, exc)
            return False

    def _sample(self, var: Var) -> float:
        categorical = var.range.as_categorical()
        if categorical is not None:
            if not categorical.choices:
                raise ValueError(f"categorical parameter {var.name!r} has no choices")
            return float(self.rng.randrange(len(categorical.choices)))

        low, high = var.range.low, var.range.high
        if not (math.isfinite(low) and math.isfinite(high)):
            raise ValueError(f"cannot sample parameter {var.name!r} from an unbounded range")

        log_uniform = var.distribution == Distribution.LOG_UNIFORM
        if log_uniform and low <= 0:
            raise ValueError(f"log-uniform parameter {var.name!r} must have a positive lower bound")

        discrete = var.range.as_discrete()
        if discrete is not None:
            if discrete.low >= discrete.high:
                raise ValueError(f"discrete parameter {var.name!r} has an empty range")
            if not log_uniform:
                return float(self.rng.randrange(discrete.low, discrete.high))
            value = math.floor(math.exp(self.rng.uniform(math.log(low), math.log(high))))
            return float(min(max(value, discrete.low), discrete.high - 1))

        if log_uniform:
            return math.exp(self.rng.uniform(math.log(low), math.log(high)))
        return self.rng.uniform(low, high)
