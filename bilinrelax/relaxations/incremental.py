# Copyright 2020 Francesco Ceccon
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Incremental MILP formulation of piecewise bilinear relaxations."""
import pyomo.environ as pe

from bilinrelax.logging import get_logger
from bilinrelax.math import MathContext
from bilinrelax.relaxations.bounds import variable_bounds, validate_partition
from bilinrelax.relaxations.formulation import (
    FormulationInfo,
    add_relaxation_block,
    relaxation_block_name,
)
from bilinrelax.relaxations.vertices import (
    DefaultVertexEnumerator,
    check_vertex_path,
    num_segments,
)


class IncrementalBilinearBuilder(object):
    """Relax `z = xy` over a partitioned domain.

    Any point of the relaxation is the first origin vertex plus a sum of
    weighted edges of the vertex path. The weights of segment `i` are
    `delta_1[i]`, `delta_2[i]` and `delta_3[i]`; the binary `z_bin[i - 1]`
    lets segment `i` move away from its origin only once segment `i - 1`
    is fully used (`delta_3[i - 1] = 1`), so the point always lies in the
    simplex of a single segment.

    Parameters
    ----------
    vertex_enumerator : VertexEnumerator
        strategy returning the vertex path of the partitions
    bounds : callable
        return the `(lower, upper)` bounds of a variable
    mc : MathContext
        the math context
    logger : Logger
        the logger
    check_vertices : bool
        check enumerated vertices lie on `z = xy`
    """
    def __init__(self, vertex_enumerator=None, bounds=None, mc=None,
                 logger=None, check_vertices=True):
        if vertex_enumerator is None:
            vertex_enumerator = DefaultVertexEnumerator()
        if mc is None:
            mc = MathContext()
        if logger is None:
            logger = get_logger('incremental')
        self.vertex_enumerator = vertex_enumerator
        self.mc = mc
        self.logger = logger
        self.check_vertices = check_vertices
        self._bounds = bounds

    def bounds(self, var):
        if self._bounds is None:
            return variable_bounds(var, self.mc)
        return self._bounds(var)

    def build(self, model, x, y, z, x_partition, y_partition):
        """Add the incremental relaxation of `z = xy` to `model`.

        Parameters
        ----------
        model : Block
            the model the relaxation is added to
        x : Var
            first variable of the bilinear term, must be bounded
        y : Var
            second variable of the bilinear term, must be bounded
        z : Var
            the variable representing `xy`
        x_partition : list of float
            breakpoints of x, from its lower to its upper bound
        y_partition : list of float
            breakpoints of y, from its lower to its upper bound

        Returns
        -------
        FormulationInfo
        """
        x_lb, x_ub = self.bounds(x)
        y_lb, y_ub = self.bounds(y)
        x_partition = validate_partition(x_partition, x_lb, x_ub, self.mc, x.name)
        y_partition = validate_partition(y_partition, y_lb, y_ub, self.mc, y.name)

        segments = num_segments(x_partition, y_partition)
        vertex_path = self.vertex_enumerator.enumerate_vertices(x_partition, y_partition)
        origin_vs, non_origin_vs = check_vertex_path(
            vertex_path, x_partition, y_partition, self.mc,
            check_values=self.check_vertices,
        )

        block = add_relaxation_block(model, relaxation_block_name('incremental', x, y))
        try:
            formulation_info = self._build_formulation(
                block, x, y, z, segments, origin_vs, non_origin_vs
            )
        except Exception:
            model.del_component(block)
            raise

        self.logger.debug(
            'Incremental relaxation of {} * {} with {} segments: {} variables, {} constraints',
            x.name, y.name, segments,
            formulation_info.num_variables(), formulation_info.num_constraints(),
        )
        return formulation_info

    def _build_formulation(self, block, x, y, z, segments, origin_vs, non_origin_vs):
        formulation_info = FormulationInfo(block)

        # vertex paths are 1-indexed like the segments
        origin_vs = [None] + list(origin_vs)
        non_origin_vs = [None] + list(non_origin_vs)

        block.segments = pe.Set(initialize=list(range(1, segments + 1)), ordered=True)
        block.linked_segments = pe.Set(initialize=list(range(2, segments + 1)), ordered=True)

        # add variables
        block.delta_1 = pe.Var(block.segments, bounds=(0.0, 1.0))
        block.delta_2 = pe.Var(block.segments, bounds=(0.0, 1.0))
        block.delta_3 = pe.Var(block.segments, bounds=(0.0, 1.0))
        block.z_bin = pe.Var(block.segments, domain=pe.Binary)

        formulation_info.add_variable('delta_1', block.delta_1)
        formulation_info.add_variable('delta_2', block.delta_2)
        formulation_info.add_variable('delta_3', block.delta_3)
        formulation_info.add_variable('z_bin', block.z_bin)

        def _reconstruction(coord):
            return origin_vs[1][coord] + pe.quicksum(
                block.delta_1[i] * (non_origin_vs[i][coord] - origin_vs[i][coord]) +
                block.delta_2[i] * (non_origin_vs[i+1][coord] - origin_vs[i][coord]) +
                block.delta_3[i] * (origin_vs[i+1][coord] - origin_vs[i][coord])
                for i in block.segments
            )

        # add x, y and z constraints
        block.x = pe.Constraint(expr=x == _reconstruction(0))
        block.y = pe.Constraint(expr=y == _reconstruction(1))
        block.z = pe.Constraint(expr=z == _reconstruction(2))

        formulation_info.add_constraint('x', block.x)
        formulation_info.add_constraint('y', block.y)
        formulation_info.add_constraint('z', block.z)

        # add first delta constraint
        block.first_delta = pe.Constraint(
            expr=block.delta_1[1] + block.delta_2[1] + block.delta_3[1] <= 1
        )
        formulation_info.add_constraint('first_delta', block.first_delta)

        # add linking constraints between deltas and z_bin
        def _below_z(b, i):
            return b.delta_1[i] + b.delta_2[i] + b.delta_3[i] <= b.z_bin[i-1]

        def _above_z(b, i):
            return b.z_bin[i-1] <= b.delta_3[i-1]

        block.below_z = pe.Constraint(block.linked_segments, rule=_below_z)
        block.above_z = pe.Constraint(block.linked_segments, rule=_above_z)

        formulation_info.add_constraint('below_z', block.below_z)
        formulation_info.add_constraint('above_z', block.above_z)

        return formulation_info
