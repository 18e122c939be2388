from __future__ import annotations

from typing import Optional, Sequence

from pydantic import BaseModel, Field

from kurobako.core.constraint import evaluate_constraint
from kurobako.core.distribution import Distribution
from kurobako.core.range import ContinuousRange, Range


class Var(BaseModel):
    """
    A variable of a problem's parameter or value domain.

    Attributes:
        name: Variable name. Constraints of other variables refer to it by this name.
        range: Value domain. Defaults to the unbounded continuous range.
        distribution: How values are distributed within the range.
        constraint: Optional Lua expression over sibling variables. When it is
            not satisfied the variable is left unbound for that trial.
    """

    name: str
    range: Range = Field(default_factory=lambda: ContinuousRange().to_range())
    distribution: Distribution = Distribution.UNIFORM
    constraint: Optional[str] = None

    def is_constraint_satisfied(self, variables: Sequence["Var"], values: Sequence[Optional[float]]) -> bool:
        return evaluate_constraint(self.constraint, variables, values)
