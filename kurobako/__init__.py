__version__ = "0.2.0"

from typing import Any

from kurobako.core import (
    Capabilities,
    Capability,
    CategoricalRange,
    ConstraintError,
    ContinuousRange,
    DiscreteRange,
    Distribution,
    EvaluatedTrial,
    Evaluator,
    KurobakoError,
    NextTrial,
    Problem,
    ProblemFactory,
    ProblemSpec,
    ProtocolError,
    Range,
    RunnerConfigError,
    Solver,
    SolverFactory,
    SolverSpec,
    Steps,
    TrialIDGenerator,
    UnevalableParamsError,
    Var,
)
from kurobako.runtime import ProblemRunner, SolverRunner


def run_problem(factory: ProblemFactory, **kwargs: Any) -> None:
    """Serve ``factory`` on stdin/stdout until the harness closes the pipe."""
    ProblemRunner(factory, **kwargs).run()


def run_solver(factory: SolverFactory, **kwargs: Any) -> None:
    """Serve ``factory`` on stdin/stdout until the harness closes the pipe."""
    SolverRunner(factory, **kwargs).run()


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
    "ProblemRunner",
    "ProblemSpec",
    "ProtocolError",
    "Range",
    "RunnerConfigError",
    "Solver",
    "SolverFactory",
    "SolverRunner",
    "SolverSpec",
    "Steps",
    "TrialIDGenerator",
    "UnevalableParamsError",
    "Var",
    "run_problem",
    "run_solver",
]
