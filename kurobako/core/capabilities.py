"""
Solver capability flags.

On the wire a set of capabilities is a JSON array of tokens:

    ["UNIFORM_CONTINUOUS", "CONCURRENT"]

Order does not matter and duplicates collapse. Unknown tokens are rejected so
that a harness speaking a newer protocol version fails fast instead of being
silently misread.
"""

from __future__ import annotations

from enum import Flag, auto
from typing import Annotated, Any, Dict, List, Tuple

from pydantic import PlainSerializer, PlainValidator


class Capability(Flag):
    UNIFORM_CONTINUOUS = auto()
    UNIFORM_DISCRETE = auto()
    LOG_UNIFORM_CONTINUOUS = auto()
    LOG_UNIFORM_DISCRETE = auto()
    CATEGORICAL = auto()
    CONDITIONAL = auto()
    MULTI_OBJECTIVE = auto()
    CONCURRENT = auto()

    ALL = (
        UNIFORM_CONTINUOUS
        | UNIFORM_DISCRETE
        | LOG_UNIFORM_CONTINUOUS
        | LOG_UNIFORM_DISCRETE
        | CATEGORICAL
        | CONDITIONAL
        | MULTI_OBJECTIVE
        | CONCURRENT
    )


# Single flags in wire order. ALL is not a wire token.
_FLAGS: Tuple[Capability, ...] = (
    Capability.UNIFORM_CONTINUOUS,
    Capability.UNIFORM_DISCRETE,
    Capability.LOG_UNIFORM_CONTINUOUS,
    Capability.LOG_UNIFORM_DISCRETE,
    Capability.CATEGORICAL,
    Capability.CONDITIONAL,
    Capability.MULTI_OBJECTIVE,
    Capability.CONCURRENT,
)

_FLAG_BY_TOKEN: Dict[str, Capability] = {flag.name: flag for flag in _FLAGS}


def encode_capabilities(value: Capability) -> List[str]:
    return [flag.name for flag in _FLAGS if flag in value]


def decode_capabilities(value: Any) -> Capability:
    """
    Decode a capability set from its wire form.

    Already-decoded ``Capability`` values pass through unchanged.

    Raises:
        ValueError: if the value is not a sequence of strings or contains an
            unknown token.
    """
    if isinstance(value, Capability):
        return value
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple, set, frozenset)):
        raise ValueError(f"capabilities must be an array of strings, got {value!r}")

    result = Capability(0)
    for token in value:
        flag = _FLAG_BY_TOKEN.get(token) if isinstance(token, str) else None
        if flag is None:
            raise ValueError(f"unknown capability: {token!r}")
        result |= flag
    return result


Capabilities = Annotated[
    Capability,
    PlainValidator(decode_capabilities),
    PlainSerializer(encode_capabilities, return_type=List[str]),
]
