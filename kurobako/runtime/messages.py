"""
Protocol messages.

Inbound messages are validated into the models below; outbound messages are
plain dicts built by the ``*_reply``/``*_cast`` helpers so that the exact wire
shape is visible in one place.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Sequence

from pydantic import BaseModel, Field

from kurobako.core.problem import ProblemSpec
from kurobako.core.solver import SolverSpec
from kurobako.core.trial import EvaluatedTrial, NextTrial

UNEVALABLE_PARAMS = "UNEVALABLE_PARAMS"


# Problem side

class CreateProblemCast(BaseModel):
    type: Literal["CREATE_PROBLEM_CAST"]
    problem_id: int = Field(ge=0)
    random_seed: int = Field(ge=0)


class DropProblemCast(BaseModel):
    type: Literal["DROP_PROBLEM_CAST"]
    problem_id: int = Field(ge=0)


class CreateEvaluatorCall(BaseModel):
    type: Literal["CREATE_EVALUATOR_CALL"]
    problem_id: int = Field(ge=0)
    evaluator_id: int = Field(ge=0)
    params: List[Optional[float]]


class DropEvaluatorCast(BaseModel):
    type: Literal["DROP_EVALUATOR_CAST"]
    evaluator_id: int = Field(ge=0)


class EvaluateCall(BaseModel):
    type: Literal["EVALUATE_CALL"]
    evaluator_id: int = Field(ge=0)
    next_step: int = Field(ge=0)


# Solver side

class CreateSolverCast(BaseModel):
    type: Literal["CREATE_SOLVER_CAST"]
    solver_id: int = Field(ge=0)
    random_seed: int = Field(ge=0)
    problem: ProblemSpec


class DropSolverCast(BaseModel):
    type: Literal["DROP_SOLVER_CAST"]
    solver_id: int = Field(ge=0)


class AskCall(BaseModel):
    type: Literal["ASK_CALL"]
    solver_id: int = Field(ge=0)
    next_trial_id: int = Field(ge=0)


class TellCall(BaseModel):
    type: Literal["TELL_CALL"]
    solver_id: int = Field(ge=0)
    trial: EvaluatedTrial


def _dump(model: BaseModel) -> Any:
    return model.model_dump(mode="json", by_alias=True)


def problem_spec_cast(spec: ProblemSpec) -> Dict[str, Any]:
    return {"type": "PROBLEM_SPEC_CAST", "spec": _dump(spec)}


def solver_spec_cast(spec: SolverSpec) -> Dict[str, Any]:
    return {"type": "SOLVER_SPEC_CAST", "spec": _dump(spec)}


def create_evaluator_reply() -> Dict[str, Any]:
    return {"type": "CREATE_EVALUATOR_REPLY"}


def unevalable_params_reply() -> Dict[str, Any]:
    return {"type": "ERROR_REPLY", "kind": UNEVALABLE_PARAMS}


def evaluate_reply(current_step: int, values: Sequence[float]) -> Dict[str, Any]:
    return {
        "type": "EVALUATE_REPLY",
        "current_step": int(current_step),
        "values": [float(v) for v in values],
    }


def ask_reply(trial: NextTrial, next_trial_id: int) -> Dict[str, Any]:
    return {"type": "ASK_REPLY", "trial": _dump(trial), "next_trial_id": next_trial_id}


def tell_reply() -> Dict[str, Any]:
    return {"type": "TELL_REPLY"}
