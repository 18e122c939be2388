from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field

from kurobako.core.steps import Steps
from kurobako.core.variable import Var


class ProblemSpec(BaseModel):
    """
    Specification of a black-box optimization problem.

    Attributes:
        name: Name of the problem.
        attrs: Free-form attributes (e.g. a paper or repository URL).
        params: Parameter domain (``params_domain`` on the wire).
        values: Value domain, one variable per objective (``values_domain`` on the wire).
        steps: Evaluable steps of the problem. Defaults to a single step.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str
    attrs: Dict[str, str] = Field(default_factory=dict)
    params: List[Var] = Field(default_factory=list, alias="params_domain")
    values: List[Var] = Field(default_factory=list, alias="values_domain")
    steps: Steps = Field(default_factory=lambda: Steps(1))


class Evaluator(ABC):
    """
    Evaluation process of one parameter set.
    """

    @abstractmethod
    def evaluate(self, next_step: int) -> Tuple[int, Sequence[float]]:
        """
        Run the evaluation, at least until ``next_step``.

        The evaluator may stop past ``next_step`` (or report early when it
        cannot go further) and returns the step it actually reached.

        Returns:
            Tuple of (current_step, values).
        """
        pass


class Problem(ABC):
    """
    A problem instance created from a seed.
    """

    @abstractmethod
    def create_evaluator(self, params: Sequence[Optional[float]]) -> Evaluator:
        """
        Create an evaluator for the given parameter set.

        Raises:
            UnevalableParamsError: if the parameter set cannot be evaluated.
        """
        pass


class ProblemFactory(ABC):
    """
    Entry point of a problem implementation, handed to ``ProblemRunner``.
    """

    @abstractmethod
    def specification(self) -> ProblemSpec:
        pass

    @abstractmethod
    def create_problem(self, seed: int) -> Problem:
        """
        Create a problem instance. Instances created with the same seed must
        behave identically.
        """
        pass
