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

"""McCormick envelope of bilinear terms."""
import pyomo.environ as pe

from bilinrelax.logging import get_logger
from bilinrelax.math import MathContext
from bilinrelax.relaxations.bounds import variable_bounds
from bilinrelax.relaxations.formulation import (
    FormulationInfo,
    add_relaxation_block,
    relaxation_block_name,
)


class McCormickBuilder(object):
    """Relax `z = xy` with the McCormick envelope.

    The envelope is the convex hull of the bilinear surface over the box
    of x and y, it needs no auxiliary variable.

    Parameters
    ----------
    bounds : callable
        return the `(lower, upper)` bounds of a variable
    mc : MathContext
        the math context
    logger : Logger
        the logger
    """
    def __init__(self, bounds=None, mc=None, logger=None):
        if mc is None:
            mc = MathContext()
        if logger is None:
            logger = get_logger('mccormick')
        self.mc = mc
        self.logger = logger
        self._bounds = bounds

    def bounds(self, var):
        if self._bounds is None:
            return variable_bounds(var, self.mc)
        return self._bounds(var)

    def build(self, model, x, y, z):
        """Add the envelope of `z = xy` to `model`.

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

        Returns
        -------
        FormulationInfo
        """
        x_lb, x_ub = self.bounds(x)
        y_lb, y_ub = self.bounds(y)

        block = add_relaxation_block(model, relaxation_block_name('mccormick', x, y))
        formulation_info = FormulationInfo(block)

        #  z >= x^L y + y^L x - x^L y^L
        #  z >= x^U y + y^U x - x^U y^U
        #  z <= x^L y + y^U x - x^L y^U
        #  z <= x^U y + y^L x - x^U y^L
        block.lb_1 = pe.Constraint(expr=z >= x_lb*y + y_lb*x - x_lb*y_lb)
        block.lb_2 = pe.Constraint(expr=z >= x_ub*y + y_ub*x - x_ub*y_ub)
        block.ub_1 = pe.Constraint(expr=z <= x_lb*y + y_ub*x - x_lb*y_ub)
        block.ub_2 = pe.Constraint(expr=z <= x_ub*y + y_lb*x - x_ub*y_lb)

        formulation_info.add_constraint('lb_1', block.lb_1)
        formulation_info.add_constraint('lb_2', block.lb_2)
        formulation_info.add_constraint('ub_1', block.ub_1)
        formulation_info.add_constraint('ub_2', block.ub_2)

        self.logger.debug(
            'McCormick envelope of {} * {} over [{}, {}] x [{}, {}] in block {}',
            x.name, y.name, x_lb, x_ub, y_lb, y_ub, block.name,
        )
        return formulation_info
