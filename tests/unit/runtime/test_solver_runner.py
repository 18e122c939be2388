"""
Unit tests for SolverRunner message dispatch.
"""

import io

import pytest

from kurobako.core.capabilities import Capability
from kurobako.core.errors import ProtocolError
from kurobako.core.solver import SolverSpec
from kurobako.core.trial import NextTrial
from kurobako.runtime import SolverRunner
from tests.stubs import StubProblemFactory, StubSolverFactory, feed, replies

PROBLEM_SPEC = StubProblemFactory().specification().model_dump(mode="json", by_alias=True)
CREATE_SOLVER = {"type": "CREATE_SOLVER_CAST", "solver_id": 0, "random_seed": 7, "problem": PROBLEM_SPEC}


def run(factory, messages):
    output = io.StringIO()
    runner = SolverRunner(factory, input_stream=feed(messages), output_stream=output)
    runner.run()
    return runner, replies(output)


class TestSpecCast:

    def test_default_capabilities(self, solver_factory):
        _, out = run(solver_factory, [])
        assert len(out) == 1
        assert out[0]["type"] == "SOLVER_SPEC_CAST"
        assert out[0]["spec"]["name"] == "stub-solver"
        assert len(out[0]["spec"]["capabilities"]) == 8

    def test_restricted_capabilities(self, solver_factory):
        solver_factory.specification = lambda: SolverSpec(
            name="narrow", capabilities=Capability.UNIFORM_CONTINUOUS | Capability.CATEGORICAL
        )
        _, out = run(solver_factory, [])
        assert sorted(out[0]["spec"]["capabilities"]) == ["CATEGORICAL", "UNIFORM_CONTINUOUS"]


class TestAskTell:

    def test_create_solver_decodes_problem(self, solver_factory):
        runner, out = run(solver_factory, [CREATE_SOLVER])
        assert len(out) == 1
        seed, problem = solver_factory.created[0]
        assert seed == 7
        assert problem.name == "stub"
        assert problem.params[0].range.high == 1.0
        assert set(runner.solvers) == {0}

    def test_ask(self, solver_factory):
        _, out = run(solver_factory, [CREATE_SOLVER, {"type": "ASK_CALL", "solver_id": 0, "next_trial_id": 10}])
        assert out[1] == {
            "type": "ASK_REPLY",
            "trial": {"id": 10, "params": [0.5], "next_step": 1},
            "next_trial_id": 11,
        }

    def test_ask_reports_every_minted_id(self):
        """The reply carries the counter after all ids the solver generated."""
        factory = StubSolverFactory(ids_per_ask=2)
        _, out = run(factory, [CREATE_SOLVER, {"type": "ASK_CALL", "solver_id": 0, "next_trial_id": 10}])
        assert out[1]["trial"]["id"] == 10
        assert out[1]["next_trial_id"] == 12

    def test_ask_without_minting_keeps_counter(self, solver_factory):
        """A solver re-asking an old trial leaves next_trial_id unchanged."""
        output = io.StringIO()
        runner = SolverRunner(
            solver_factory,
            input_stream=feed([CREATE_SOLVER, {"type": "ASK_CALL", "solver_id": 0, "next_trial_id": 4}]),
            output_stream=output,
        )
        assert runner.run_once() is True
        runner.solvers[0].ask = lambda idg: NextTrial(trial_id=1, params=[0.5], next_step=1)
        assert runner.run_once() is True

        (reply,) = replies(output)
        assert reply["trial"]["id"] == 1
        assert reply["next_trial_id"] == 4

    def test_pruned_trial_omits_next_step(self):
        factory = StubSolverFactory(next_step=0)
        _, out = run(factory, [CREATE_SOLVER, {"type": "ASK_CALL", "solver_id": 0, "next_trial_id": 0}])
        assert out[1]["trial"] == {"id": 0, "params": [0.5]}

    def test_tell(self, solver_factory):
        _, out = run(
            solver_factory,
            [
                CREATE_SOLVER,
                {"type": "TELL_CALL", "solver_id": 0, "trial": {"id": 3, "values": [1.5], "current_step": 1}},
                {"type": "TELL_CALL", "solver_id": 0, "trial": {"id": 4, "values": [], "current_step": 0}},
            ],
        )
        assert out[1:] == [{"type": "TELL_REPLY"}, {"type": "TELL_REPLY"}]
        told = solver_factory.solvers[0].told
        assert [t.trial_id for t in told] == [3, 4]
        assert told[0].values == [1.5]
        assert told[1].values == []

    def test_drop_solver(self, solver_factory):
        runner, out = run(solver_factory, [CREATE_SOLVER, {"type": "DROP_SOLVER_CAST", "solver_id": 0}])
        assert len(out) == 1
        assert runner.solvers == {}

    def test_drop_unknown_solver_is_ignored(self, solver_factory):
        runner, out = run(solver_factory, [{"type": "DROP_SOLVER_CAST", "solver_id": 5}])
        assert len(out) == 1
        assert runner.solvers == {}


class TestProtocolErrors:

    def test_ask_unknown_solver(self, solver_factory):
        runner = SolverRunner(
            solver_factory,
            input_stream=feed([{"type": "ASK_CALL", "solver_id": 1, "next_trial_id": 0}]),
            output_stream=io.StringIO(),
        )
        with pytest.raises(ProtocolError, match="unknown solver_id: 1"):
            runner.run()

    def test_tell_unknown_solver(self, solver_factory):
        runner = SolverRunner(
            solver_factory,
            input_stream=feed([{"type": "TELL_CALL", "solver_id": 1, "trial": {"id": 0, "values": [], "current_step": 0}}]),
            output_stream=io.StringIO(),
        )
        with pytest.raises(ProtocolError, match="unknown solver_id: 1"):
            runner.run()

    def test_problem_message_on_solver_side(self, solver_factory):
        runner = SolverRunner(
            solver_factory,
            input_stream=feed([{"type": "CREATE_PROBLEM_CAST", "problem_id": 0, "random_seed": 0}]),
            output_stream=io.StringIO(),
        )
        with pytest.raises(ProtocolError, match="unknown message type"):
            runner.run()

    def test_invalid_problem_spec(self, solver_factory):
        message = dict(CREATE_SOLVER, problem={"name": "p", "steps": [3, 1]})
        runner = SolverRunner(solver_factory, input_stream=feed([message]), output_stream=io.StringIO())
        with pytest.raises(ProtocolError, match="invalid CREATE_SOLVER_CAST message"):
            runner.run()
        assert solver_factory.created == []
