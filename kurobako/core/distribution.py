from __future__ import annotations

from enum import Enum


class Distribution(str, Enum):
    """Distribution of the values of a variable. Ignored for categorical ranges."""

    UNIFORM = "UNIFORM"
    LOG_UNIFORM = "LOG_UNIFORM"
