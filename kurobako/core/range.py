"""
Value domains of problem variables.

A range is exactly one of three shapes, discriminated on the wire by the
``"type"`` field:

    {"type": "CONTINUOUS", "low": -1.0, "high": 1.0}
    {"type": "DISCRETE", "low": 0, "high": 10}
    {"type": "CATEGORICAL", "choices": ["foo", "bar"]}

Infinite continuous bounds are omitted from the encoded object and restored
as infinities when decoding.
"""

from __future__ import annotations

import math
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, RootModel, field_validator, model_serializer


class ContinuousRange(BaseModel):
    """Numerical continuous range: ``low`` inclusive, ``high`` exclusive."""

    type: Literal["CONTINUOUS"] = "CONTINUOUS"
    low: float = -math.inf
    high: float = math.inf

    @field_validator("low", mode="before")
    @classmethod
    def _missing_low(cls, value: Any) -> Any:
        return -math.inf if value is None else value

    @field_validator("high", mode="before")
    @classmethod
    def _missing_high(cls, value: Any) -> Any:
        return math.inf if value is None else value

    @model_serializer
    def _serialize(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.type}
        if math.isfinite(self.low):
            data["low"] = self.low
        if math.isfinite(self.high):
            data["high"] = self.high
        return data

    def to_range(self) -> "Range":
        return Range(self)


class DiscreteRange(BaseModel):
    """Numerical discrete range: ``low`` inclusive, ``high`` exclusive."""

    type: Literal["DISCRETE"] = "DISCRETE"
    low: int
    high: int

    def to_range(self) -> "Range":
        return Range(self)


class CategoricalRange(BaseModel):
    """Categorical range; values are zero-based indices into ``choices``."""

    type: Literal["CATEGORICAL"] = "CATEGORICAL"
    choices: List[str] = Field(default_factory=list)

    def to_range(self) -> "Range":
        return Range(self)


RangeVariant = Annotated[
    Union[ContinuousRange, DiscreteRange, CategoricalRange],
    Field(discriminator="type"),
]


class Range(RootModel[RangeVariant]):
    """
    The range of a variable.

    Wraps exactly one variant. Use ``low``/``high`` for generic numeric
    handling and the ``as_*`` projections when the shape matters.
    """

    @property
    def low(self) -> float:
        """Lower bound (inclusive). Categorical ranges start at 0."""
        inner = self.root
        if isinstance(inner, CategoricalRange):
            return 0.0
        return float(inner.low)

    @property
    def high(self) -> float:
        """Upper bound (exclusive). Categorical ranges end at the number of choices."""
        inner = self.root
        if isinstance(inner, CategoricalRange):
            return float(len(inner.choices))
        return float(inner.high)

    def as_continuous(self) -> Optional[ContinuousRange]:
        return self.root if isinstance(self.root, ContinuousRange) else None

    def as_discrete(self) -> Optional[DiscreteRange]:
        return self.root if isinstance(self.root, DiscreteRange) else None

    def as_categorical(self) -> Optional[CategoricalRange]:
        return self.root if isinstance(self.root, CategoricalRange) else None
