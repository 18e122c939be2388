from __future__ import annotations


class KurobakoError(Exception):
    """Base class for errors raised by this package."""


class ProtocolError(KurobakoError):
    """
    Raised when the two sides of the pipe disagree about the protocol.

    Malformed lines, unknown message types and invalid payloads all end up
    here. The runner never recovers from it; the harness restarts the process.
    """


class UnevalableParamsError(KurobakoError):
    """
    Raised by ``Problem.create_evaluator`` when a parameter set cannot be evaluated.

    This is a recognized domain signal, not a bug: the runner answers with
    ``ERROR_REPLY{kind: UNEVALABLE_PARAMS}`` and keeps serving.
    """

    def __init__(self, message: str = "unevalable params"):
        super().__init__(message)


class ConstraintError(KurobakoError, ValueError):
    """Raised when a variable constraint cannot be evaluated to a boolean."""


class RunnerConfigError(KurobakoError, ValueError):
    """
    Raised when kurobako.yaml cannot be parsed or validated.

    Prefer raising this over raw ValidationError/KeyError so callers can surface
    a clean, user-friendly message.
    """
