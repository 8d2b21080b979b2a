import pytest
import hypothesis.strategies as st
import pyomo.environ as pe


@pytest.fixture
def model():
    m = pe.ConcreteModel()
    m.x = pe.Var(bounds=(0, 2))
    m.y = pe.Var(bounds=(0, 3))
    m.z = pe.Var()
    return m


@st.composite
def reals(draw, min_value=-100.0, max_value=100.0):
    return draw(st.floats(
        min_value=min_value, max_value=max_value,
        allow_nan=False, allow_infinity=False,
    ))


@st.composite
def boxes(draw, min_value=-100.0, max_value=100.0, min_width=0.1, max_width=100.0):
    """Draw `(lower, upper)` bounds with `upper - lower >= min_width`."""
    lower = draw(reals(min_value, max_value))
    width = draw(reals(min_width, max_width))
    return lower, lower + width


@st.composite
def fractions(draw):
    return draw(st.floats(min_value=0.0, max_value=1.0, allow_nan=False))
