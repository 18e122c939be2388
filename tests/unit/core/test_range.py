"""
Unit tests for range and distribution encoding.
"""

import json
import math

import pytest
from pydantic import ValidationError

from kurobako.core.distribution import Distribution
from kurobako.core.range import CategoricalRange, ContinuousRange, DiscreteRange, Range
from kurobako.core.variable import Var


class TestRangeEncoding:
    """Wire form of each range variant."""

    @pytest.mark.parametrize(
        "value,wire",
        [
            (ContinuousRange(low=0.1, high=3.5).to_range(), {"type": "CONTINUOUS", "low": 0.1, "high": 3.5}),
            (DiscreteRange(low=-5, high=5).to_range(), {"type": "DISCRETE", "low": -5, "high": 5}),
            (
                CategoricalRange(choices=["foo", "bar", "baz"]).to_range(),
                {"type": "CATEGORICAL", "choices": ["foo", "bar", "baz"]},
            ),
        ],
    )
    def test_encode_and_decode(self, value, wire):
        assert value.model_dump(mode="json") == wire
        assert Range.model_validate(wire) == value
        assert Range.model_validate_json(json.dumps(wire)) == value

    def test_key_order_is_not_significant(self):
        text = '{"high":3.5,"low":0.1,"type":"CONTINUOUS"}'
        assert Range.model_validate_json(text) == ContinuousRange(low=0.1, high=3.5).to_range()

    def test_infinite_bounds_are_omitted(self):
        """Unbounded continuous ranges encode without low/high."""
        assert ContinuousRange().to_range().model_dump(mode="json") == {"type": "CONTINUOUS"}

        half_open = ContinuousRange(low=0.0).to_range().model_dump(mode="json")
        assert half_open == {"type": "CONTINUOUS", "low": 0.0}
        # Must be representable as strict JSON.
        json.dumps(half_open, allow_nan=False)

    def test_missing_bounds_decode_as_infinity(self):
        decoded = Range.model_validate({"type": "CONTINUOUS"}).as_continuous()
        assert decoded is not None
        assert decoded.low == -math.inf
        assert decoded.high == math.inf

    def test_null_bounds_decode_as_infinity(self):
        decoded = Range.model_validate({"type": "CONTINUOUS", "low": None, "high": 2.0}).as_continuous()
        assert decoded.low == -math.inf
        assert decoded.high == 2.0

    @pytest.mark.parametrize(
        "wire",
        [
            {"type": "UNKNOWN", "low": 0, "high": 1},
            {"low": 0, "high": 1},
            {"type": "DISCRETE", "low": 0},
        ],
    )
    def test_rejects_invalid_ranges(self, wire):
        with pytest.raises(ValidationError):
            Range.model_validate(wire)


class TestRangeProjections:
    """Tests for Range.low/high and the as_* projections."""

    def test_continuous(self):
        r = ContinuousRange(low=-1.5, high=2.5).to_range()
        assert (r.low, r.high) == (-1.5, 2.5)
        assert r.as_continuous() == ContinuousRange(low=-1.5, high=2.5)
        assert r.as_discrete() is None
        assert r.as_categorical() is None

    def test_discrete(self):
        r = DiscreteRange(low=-3, high=3).to_range()
        assert (r.low, r.high) == (-3.0, 3.0)
        assert r.as_discrete() == DiscreteRange(low=-3, high=3)
        assert r.as_continuous() is None

    def test_categorical(self):
        r = CategoricalRange(choices=["a", "b", "c"]).to_range()
        assert (r.low, r.high) == (0.0, 3.0)
        assert r.as_categorical().choices == ["a", "b", "c"]
        assert r.as_continuous() is None
        assert r.as_discrete() is None


class TestDistribution:

    @pytest.mark.parametrize(
        "value,wire",
        [(Distribution.UNIFORM, "UNIFORM"), (Distribution.LOG_UNIFORM, "LOG_UNIFORM")],
    )
    def test_encode_and_decode(self, value, wire):
        var = Var(name="x", distribution=value)
        assert var.model_dump(mode="json")["distribution"] == wire
        assert Var.model_validate({"name": "x", "distribution": wire}).distribution is value

    def test_rejects_unknown_distribution(self):
        with pytest.raises(ValidationError):
            Var.model_validate({"name": "x", "distribution": "NORMAL"})


class TestVar:

    def test_defaults(self):
        var = Var(name="x")
        assert var.model_dump(mode="json") == {
            "name": "x",
            "range": {"type": "CONTINUOUS"},
            "distribution": "UNIFORM",
            "constraint": None,
        }

    def test_roundtrip_with_constraint(self):
        var = Var(
            name="gamma",
            range=ContinuousRange(low=1e-3, high=10.0).to_range(),
            distribution=Distribution.LOG_UNIFORM,
            constraint='kernel == "rbf"',
        )
        assert Var.model_validate(var.model_dump(mode="json")) == var
