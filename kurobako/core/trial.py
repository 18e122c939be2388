from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_serializer


class NextTrial(BaseModel):
    """
    A trial the solver wants evaluated next.

    Attributes:
        trial_id: Identifier of the trial (``id`` on the wire).
        params: Parameter values; None for conditional parameters left unbound.
        next_step: Step the evaluation must reach. 0 means the solver pruned
            the trial; it is omitted from the encoded message.
    """

    model_config = ConfigDict(populate_by_name=True)

    trial_id: int = Field(alias="id", ge=0)
    params: List[Optional[float]] = Field(default_factory=list)
    next_step: int = Field(default=0, ge=0)

    @property
    def is_pruned(self) -> bool:
        return self.next_step == 0

    @model_serializer
    def _serialize(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"id": self.trial_id, "params": list(self.params)}
        if self.next_step != 0:
            data["next_step"] = self.next_step
        return data


class EvaluatedTrial(BaseModel):
    """
    Evaluation result of a trial, as reported back to the solver.

    An empty ``values`` list means the trial's parameters were unevalable.
    """

    model_config = ConfigDict(populate_by_name=True)

    trial_id: int = Field(alias="id", ge=0)
    values: List[float] = Field(default_factory=list)
    current_step: int = Field(default=0, ge=0)


@dataclass
class TrialIDGenerator:
    """
    Call-scoped trial id counter.

    The runner seeds a new generator from the harness' ``next_trial_id`` for
    every ask and reports ``next_id`` back afterwards; the harness owns the
    global counter.
    """

    next_id: int = 0

    def generate(self) -> int:
        trial_id = self.next_id
        self.next_id += 1
        return trial_id
