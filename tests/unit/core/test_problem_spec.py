import json

from kurobako.core.problem import ProblemSpec
from kurobako.core.range import CategoricalRange, ContinuousRange, DiscreteRange
from kurobako.core.steps import Steps
from kurobako.core.variable import Var

REFERENCE_TEXT = (
    '{"name":"Quadratic Function","attrs":{},'
    '"params_domain":['
    '{"name":"x","range":{"type":"CONTINUOUS","low":-10.0,"high":10.0},"distribution":"UNIFORM","constraint":null},'
    '{"name":"y","range":{"type":"DISCRETE","low":-3,"high":3},"distribution":"UNIFORM","constraint":null}],'
    '"values_domain":[{"name":"x**2 + y","range":{"type":"CONTINUOUS"},"distribution":"UNIFORM","constraint":null}],'
    '"steps":1}'
)


def quadratic_spec() -> ProblemSpec:
    x = Var(name="x", range=ContinuousRange(low=-10.0, high=10.0).to_range())
    y = Var(name="y", range=DiscreteRange(low=-3, high=3).to_range())
    return ProblemSpec(name="Quadratic Function", params=[x, y], values=[Var(name="x**2 + y")])


def test_problem_spec_defaults() -> None:
    spec = ProblemSpec(name="empty")
    assert spec.attrs == {}
    assert spec.params == []
    assert spec.values == []
    assert spec.steps == Steps(1)


def test_problem_spec_roundtrip() -> None:
    spec = quadratic_spec()
    wire = spec.model_dump(mode="json", by_alias=True)

    assert set(wire) == {"name", "attrs", "params_domain", "values_domain", "steps"}
    assert wire["steps"] == 1
    # Unbounded objective range encodes without infinities.
    text = json.dumps(wire, allow_nan=False)

    assert ProblemSpec.model_validate_json(text) == spec


def test_problem_spec_decodes_reference_text() -> None:
    assert ProblemSpec.model_validate_json(REFERENCE_TEXT) == quadratic_spec()


def test_problem_spec_with_conditional_params_and_explicit_steps() -> None:
    spec = ProblemSpec(
        name="svm",
        attrs={"github": "https://example.com/svm"},
        params=[
            Var(name="kernel", range=CategoricalRange(choices=["linear", "rbf"]).to_range()),
            Var(
                name="gamma",
                range=ContinuousRange(low=1e-5, high=1.0).to_range(),
                constraint='kernel == "rbf"',
            ),
        ],
        values=[Var(name="error")],
        steps=Steps([10, 50, 100]),
    )

    wire = spec.model_dump(mode="json", by_alias=True)
    assert wire["steps"] == [10, 50, 100]
    assert wire["params_domain"][1]["constraint"] == 'kernel == "rbf"'
    assert ProblemSpec.model_validate(wire) == spec
