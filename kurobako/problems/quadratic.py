"""
``x**2 + y`` over a continuous ``x`` and a discrete ``y``.

A minimal single-step problem, handy for checking a solver end to end:

    kurobako-runner problem kurobako.problems.quadratic:QuadraticProblemFactory
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from kurobako.core.errors import UnevalableParamsError
from kurobako.core.problem import Evaluator, Problem, ProblemFactory, ProblemSpec
from kurobako.core.range import ContinuousRange, DiscreteRange
from kurobako.core.variable import Var


class QuadraticProblemFactory(ProblemFactory):
    def specification(self) -> ProblemSpec:
        x = Var(name="x", range=ContinuousRange(low=-10.0, high=10.0).to_range())
        y = Var(name="y", range=DiscreteRange(low=-3, high=3).to_range())
        return ProblemSpec(name="Quadratic Function", params=[x, y], values=[Var(name="x**2 + y")])

    def create_problem(self, seed: int) -> "QuadraticProblem":
        return QuadraticProblem()


class QuadraticProblem(Problem):
    def create_evaluator(self, params: Sequence[Optional[float]]) -> "QuadraticEvaluator":
        if len(params) != 2 or any(p is None for p in params):
            raise UnevalableParamsError(f"expected values for x and y, got {list(params)!r}")
        x, y = params
        return QuadraticEvaluator(float(x), int(y))


class QuadraticEvaluator(Evaluator):
    def __init__(self, x: float, y: int):
        self.x = x
        self.y = y

    def evaluate(self, next_step: int) -> Tuple[int, Sequence[float]]:
        return 1, [self.x ** 2 + self.y]
