from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict

from pydantic import BaseModel, Field

from kurobako.core.capabilities import Capabilities, Capability
from kurobako.core.problem import ProblemSpec
from kurobako.core.trial import EvaluatedTrial, NextTrial, TrialIDGenerator


class SolverSpec(BaseModel):
    """
    Specification of a solver.

    Attributes:
        name: Name of the solver.
        attrs: Free-form attributes.
        capabilities: What kinds of problems the solver can handle. Defaults to all.
    """

    name: str
    attrs: Dict[str, str] = Field(default_factory=dict)
    capabilities: Capabilities = Capability.ALL


class Solver(ABC):
    """
    An optimization algorithm bound to one problem.
    """

    @abstractmethod
    def ask(self, idg: TrialIDGenerator) -> NextTrial:
        """
        Return the next trial to evaluate.

        New trials take their id from ``idg.generate()``; resumed or pruned
        trials reuse the id they were asked with before.
        """
        pass

    @abstractmethod
    def tell(self, trial: EvaluatedTrial) -> None:
        """
        Consume an evaluation result and update the solver state.
        """
        pass


class SolverFactory(ABC):
    """
    Entry point of a solver implementation, handed to ``SolverRunner``.
    """

    @abstractmethod
    def specification(self) -> SolverSpec:
        pass

    @abstractmethod
    def create_solver(self, seed: int, problem: ProblemSpec) -> Solver:
        pass
