from kurobako.runtime.channel import DEFAULT_MAX_LINE_LENGTH, LineChannel
from kurobako.runtime.problem_runner import ProblemRunner
from kurobako.runtime.solver_runner import SolverRunner

__all__ = [
    "DEFAULT_MAX_LINE_LENGTH",
    "LineChannel",
    "ProblemRunner",
    "SolverRunner",
]
