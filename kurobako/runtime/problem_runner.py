from __future__ import annotations

import logging
from typing import Dict, Optional, TextIO

from kurobako.core.errors import UnevalableParamsError
from kurobako.core.problem import Evaluator, Problem, ProblemFactory
from kurobako.runtime._runner import BaseRunner
from kurobako.runtime.channel import DEFAULT_MAX_LINE_LENGTH, LineChannel
from kurobako.runtime.messages import (
    CreateEvaluatorCall,
    CreateProblemCast,
    DropEvaluatorCast,
    DropProblemCast,
    EvaluateCall,
    create_evaluator_reply,
    evaluate_reply,
    problem_spec_cast,
    unevalable_params_reply,
)

logger = logging.getLogger(__name__)


class ProblemRunner(BaseRunner):
    """
    Serves the problem side of the protocol for one ``ProblemFactory``.

    Problems and evaluators are kept in registries keyed by the ids the
    harness assigns; nothing else touches them.

    Example:
        ProblemRunner(MyProblemFactory()).run()
    """

    handlers = {
        "CREATE_PROBLEM_CAST": (CreateProblemCast, "_handle_create_problem_cast"),
        "DROP_PROBLEM_CAST": (DropProblemCast, "_handle_drop_problem_cast"),
        "CREATE_EVALUATOR_CALL": (CreateEvaluatorCall, "_handle_create_evaluator_call"),
        "DROP_EVALUATOR_CAST": (DropEvaluatorCast, "_handle_drop_evaluator_cast"),
        "EVALUATE_CALL": (EvaluateCall, "_handle_evaluate_call"),
    }

    def __init__(
        self,
        factory: ProblemFactory,
        *,
        input_stream: Optional[TextIO] = None,
        output_stream: Optional[TextIO] = None,
        max_line_length: int = DEFAULT_MAX_LINE_LENGTH,
        channel: Optional[LineChannel] = None,
    ):
        super().__init__(
            input_stream=input_stream,
            output_stream=output_stream,
            max_line_length=max_line_length,
            channel=channel,
        )
        self.factory = factory
        self.problems: Dict[int, Problem] = {}
        self.evaluators: Dict[int, Evaluator] = {}

    def _reset(self) -> None:
        self.problems = {}
        self.evaluators = {}

    def _cast_spec(self) -> None:
        spec = self.factory.specification()
        logger.info("Serving problem %r", spec.name)
        self._send(problem_spec_cast(spec))

    def _handle_create_problem_cast(self, message: CreateProblemCast) -> None:
        problem = self.factory.create_problem(message.random_seed)
        self.problems[message.problem_id] = problem
        logger.debug("Created problem %d (seed=%d)", message.problem_id, message.random_seed)

    def _handle_drop_problem_cast(self, message: DropProblemCast) -> None:
        if self.problems.pop(message.problem_id, None) is None:
            logger.debug("Ignoring drop of unknown problem %d", message.problem_id)

    def _handle_create_evaluator_call(self, message: CreateEvaluatorCall) -> None:
        problem = self._lookup(self.problems, message.problem_id, "problem_id")
        try:
            evaluator = problem.create_evaluator(message.params)
        except UnevalableParamsError as exc:
            logger.info("Unevalable params for evaluator %d: %s", message.evaluator_id, exc)
            self._send(unevalable_params_reply())
            return

        self.evaluators[message.evaluator_id] = evaluator
        self._send(create_evaluator_reply())

    def _handle_drop_evaluator_cast(self, message: DropEvaluatorCast) -> None:
        if self.evaluators.pop(message.evaluator_id, None) is None:
            logger.debug("Ignoring drop of unknown evaluator %d", message.evaluator_id)

    def _handle_evaluate_call(self, message: EvaluateCall) -> None:
        evaluator = self._lookup(self.evaluators, message.evaluator_id, "evaluator_id")
        current_step, values = evaluator.evaluate(message.next_step)
        self._send(evaluate_reply(current_step, values))
