import pytest

from tests.stubs import StubProblemFactory, StubSolverFactory


@pytest.fixture
def problem_factory():
    return StubProblemFactory()


@pytest.fixture
def solver_factory():
    return StubSolverFactory()
