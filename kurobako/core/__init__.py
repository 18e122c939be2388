from kurobako.core.capabilities import Capabilities, Capability
from kurobako.core.constraint import evaluate_constraint
from kurobako.core.distribution import Distribution
from kurobako.core.errors import (
    ConstraintError,
    KurobakoError,
    ProtocolError,
    RunnerConfigError,
    UnevalableParamsError,
)
from kurobako.core.problem import Evaluator, Problem, ProblemFactory, ProblemSpec
from kurobako.core.range import CategoricalRange, ContinuousRange, DiscreteRange, Range
from kurobako.core.solver import Solver, SolverFactory, SolverSpec
from kurobako.core.steps import Steps
from kurobako.core.trial import EvaluatedTrial, NextTrial, TrialIDGenerator
from kurobako.core.variable import Var

__all__ = [
    "Capabilities",
    "Capability",
    "CategoricalRange",
    "ConstraintError",
    "ContinuousRange",
    "DiscreteRange",
    "Distribution",
    "EvaluatedTrial",
    "Evaluator",
    "KurobakoError",
    "NextTrial",
    "Problem",
    "ProblemFactory",
    "ProblemSpec",
    "ProtocolError",
    "Range",
    "RunnerConfigError",
    "Solver",
    "SolverFactory",
    "SolverSpec",
    "Steps",
    "TrialIDGenerator",
    "UnevalableParamsError",
    "Var",
    "evaluate_constraint",
]
