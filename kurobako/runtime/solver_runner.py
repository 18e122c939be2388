from __future__ import annotations

import logging
from typing import Dict, Optional, TextIO

from kurobako.core.solver import Solver, SolverFactory
from kurobako.core.trial import TrialIDGenerator
from kurobako.runtime._runner import BaseRunner
from kurobako.runtime.channel import DEFAULT_MAX_LINE_LENGTH, LineChannel
from kurobako.runtime.messages import (
    AskCall,
    CreateSolverCast,
    DropSolverCast,
    TellCall,
    ask_reply,
    solver_spec_cast,
    tell_reply,
)

logger = logging.getLogger(__name__)


class SolverRunner(BaseRunner):
    """
    Serves the solver side of the protocol for one ``SolverFactory``.

    Example:
        SolverRunner(MySolverFactory()).run()
    """

    handlers = {
        "CREATE_SOLVER_CAST": (CreateSolverCast, "_handle_create_solver_cast"),
        "DROP_SOLVER_CAST": (DropSolverCast, "_handle_drop_solver_cast"),
        "ASK_CALL": (AskCall, "_handle_ask_call"),
        "TELL_CALL": (TellCall, "_handle_tell_call"),
    }

    def __init__(
        self,
        factory: SolverFactory,
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
        self.solvers: Dict[int, Solver] = {}

    def _reset(self) -> None:
        self.solvers = {}

    def _cast_spec(self) -> None:
        spec = self.factory.specification()
        logger.info("Serving solver %r", spec.name)
        self._send(solver_spec_cast(spec))

    def _handle_create_solver_cast(self, message: CreateSolverCast) -> None:
        solver = self.factory.create_solver(message.random_seed, message.problem)
        self.solvers[message.solver_id] = solver
        logger.debug(
            "Created solver %d for problem %r (seed=%d)",
            message.solver_id,
            message.problem.name,
            message.random_seed,
        )

    def _handle_drop_solver_cast(self, message: DropSolverCast) -> None:
        if self.solvers.pop(message.solver_id, None) is None:
            logger.debug("Ignoring drop of unknown solver %d", message.solver_id)

    def _handle_ask_call(self, message: AskCall) -> None:
        solver = self._lookup(self.solvers, message.solver_id, "solver_id")
        idg = TrialIDGenerator(message.next_trial_id)
        trial = solver.ask(idg)
        self._send(ask_reply(trial, idg.next_id))

    def _handle_tell_call(self, message: TellCall) -> None:
        solver = self._lookup(self.solvers, message.solver_id, "solver_id")
        solver.tell(message.trial)
        self._send(tell_reply())
