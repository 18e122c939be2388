"""
Evaluable steps of a problem.

At each step the evaluator may suspend and report intermediate values. Steps
are positive, strictly increasing and never empty.

The common case ``1, 2, ..., n`` is stored and encoded as the bare integer
``n``; any other sequence is stored and encoded as an explicit array:

    Steps([1, 2, 3, 4]).model_dump()  -> 4
    Steps([1, 3, 5]).model_dump()     -> [1, 3, 5]
"""

from __future__ import annotations

from typing import Annotated, List, Union

from pydantic import Field, RootModel, field_validator


class Steps(RootModel[Annotated[Union[int, List[int]], Field(union_mode="left_to_right")]]):

    @field_validator("root")
    @classmethod
    def _compact(cls, value: Union[int, List[int]]) -> Union[int, List[int]]:
        if isinstance(value, int):
            if value < 1:
                raise ValueError(f"steps must be positive, got {value}")
            return value

        steps = list(value)
        if not steps:
            raise ValueError("empty steps isn't allowed")
        if steps[0] < 1:
            raise ValueError(f"steps must be positive, got {steps[0]}")
        for prev, curr in zip(steps, steps[1:]):
            if prev >= curr:
                raise ValueError("steps should be monotonically increasing")

        # Strictly increasing positive integers ending at len(steps) are exactly 1..n.
        if steps[-1] == len(steps):
            return steps[-1]
        return steps

    @classmethod
    def sequential(cls, last: int) -> "Steps":
        return cls(last)

    @property
    def is_sequential(self) -> bool:
        return isinstance(self.root, int)

    @property
    def last(self) -> int:
        if isinstance(self.root, int):
            return self.root
        return self.root[-1]

    def as_list(self) -> List[int]:
        if isinstance(self.root, int):
            return list(range(1, self.root + 1))
        return list(self.root)

    def __len__(self) -> int:
        if isinstance(self.root, int):
            return self.root
        return len(self.root)

    def __contains__(self, step: object) -> bool:
        if not isinstance(step, int):
            return False
        if isinstance(self.root, int):
            return 1 <= step <= self.root
        return step in self.root
