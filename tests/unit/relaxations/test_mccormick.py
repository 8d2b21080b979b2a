# pylint: skip-file
import pytest
import pyomo.environ as pe
from hypothesis import given, settings

from bilinrelax.error import ConfigurationError
from bilinrelax.relaxations import McCormickBuilder
from tests.unit.conftest import boxes, fractions
from tests.unit.fixtures import (
    bilinear_model,
    is_feasible,
    set_point,
    violated_constraints,
)


class TestMcCormickBuilder:
    def test_creates_four_constraints_and_no_variables(self, model):
        info = McCormickBuilder().build(model, model.x, model.y, model.z)
        assert list(info.constraints.keys()) == ['lb_1', 'lb_2', 'ub_1', 'ub_2']
        assert len(info.variables) == 0
        assert info.block.parent_block() is model
        assert len(list(info.block.component_data_objects(pe.Var))) == 0

    def test_example_box(self, model):
        info = McCormickBuilder().build(model, model.x, model.y, model.z)

        set_point(model, 1.0, 1.0, 1.0)
        assert is_feasible(info.block)

        # z >= 2y + 3x - 6
        set_point(model, 2.0, 3.0, 0.0)
        assert violated_constraints(info.block) == [info.constraints['lb_2'].name]

        # z <= 3x and z <= 2y
        set_point(model, 0.0, 0.0, 1.0)
        violated = violated_constraints(info.block)
        assert info.constraints['ub_1'].name in violated
        assert info.constraints['ub_2'].name in violated

        # z <= 2y only
        set_point(model, 1.0, 1.0, 2.5)
        assert violated_constraints(info.block) == [info.constraints['ub_2'].name]

    def test_example_box_coefficients(self, model):
        info = McCormickBuilder().build(model, model.x, model.y, model.z)
        # evaluate each constraint at points that make it tight
        cases = [
            ('lb_1', (1.5, 2.5, 0.0)),
            ('lb_2', (1.0, 2.0, 2.0*2.0 + 3.0*1.0 - 6.0)),
            ('ub_1', (0.5, 2.0, 3.0*0.5)),
            ('ub_2', (1.0, 0.5, 2.0*0.5)),
        ]
        for name, point in cases:
            set_point(model, *point)
            constraint = info.constraints[name]
            bound = constraint.lb if constraint.has_lb() else constraint.ub
            assert pe.value(constraint.body) == pytest.approx(bound, abs=1e-9)

    def test_raises_on_unbounded_variable(self):
        m = pe.ConcreteModel()
        m.x = pe.Var(bounds=(0, None))
        m.y = pe.Var(bounds=(0, 1))
        m.z = pe.Var()
        with pytest.raises(ConfigurationError):
            McCormickBuilder().build(m, m.x, m.y, m.z)
        assert len(list(m.component_objects(pe.Block))) == 0

    def test_uses_bounds_accessor(self, model):
        builder = McCormickBuilder(bounds=lambda var: (0.0, 1.0))
        info = builder.build(model, model.x, model.y, model.z)
        # with x, y in [0, 1] the envelope gives z <= x
        set_point(model, 0.5, 2.0, 0.75)
        assert info.constraints['ub_1'].name in violated_constraints(info.block)

    def test_relaxations_of_same_term_use_different_blocks(self, model):
        builder = McCormickBuilder()
        first = builder.build(model, model.x, model.y, model.z)
        second = builder.build(model, model.x, model.y, model.z)
        assert first.block.name != second.block.name
        assert len(list(model.component_objects(pe.Block))) == 2

    def test_indexed_variables(self):
        m = pe.ConcreteModel()
        m.x = pe.Var([0, 1], bounds=(-1, 1))
        m.z = pe.Var()
        info = McCormickBuilder().build(m, m.x[0], m.x[1], m.z)
        set_point_indexed = [(m.x[0], 0.5), (m.x[1], -0.5), (m.z, -0.25)]
        for var, value in set_point_indexed:
            var.set_value(value)
        assert is_feasible(info.block)


@settings(deadline=None)
@given(x_bounds=boxes(), y_bounds=boxes(), tx=fractions(), ty=fractions())
def test_mccormick_contains_bilinear_surface(x_bounds, y_bounds, tx, ty):
    m = bilinear_model(x_bounds, y_bounds)
    info = McCormickBuilder().build(m, m.x, m.y, m.z)
    x = x_bounds[0] + tx * (x_bounds[1] - x_bounds[0])
    y = y_bounds[0] + ty * (y_bounds[1] - y_bounds[0])
    set_point(m, x, y, x * y)
    assert is_feasible(info.block)


@settings(deadline=None)
@given(x_bounds=boxes(), y_bounds=boxes())
def test_mccormick_is_exact_at_corners(x_bounds, y_bounds):
    m = bilinear_model(x_bounds, y_bounds)
    info = McCormickBuilder().build(m, m.x, m.y, m.z)
    for x in x_bounds:
        for y in y_bounds:
            set_point(m, x, y, x * y)
            assert is_feasible(info.block)
            set_point(m, x, y, x * y + 1.0)
            assert not is_feasible(info.block)
            set_point(m, x, y, x * y - 1.0)
            assert not is_feasible(info.block)
