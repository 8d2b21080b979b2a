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

"""Auxiliary variables and constraints added by a relaxation."""
from collections import OrderedDict

import pyomo.environ as pe
from pyomo.common.modeling import unique_component_name


class FormulationInfo(object):
    """Record the variables and constraints a builder added to a model.

    Both mappings preserve insertion order and never overwrite an existing
    name. All components live inside `block`, a sub block of the model
    the relaxation was built on.

    Parameters
    ----------
    block : Block or None
        the block owning the relaxation components
    """
    def __init__(self, block=None):
        self.block = block
        self.variables = OrderedDict()
        self.constraints = OrderedDict()

    def add_variable(self, name, var):
        """Record the (possibly indexed) variable `var` as `name`."""
        if name in self.variables:
            raise ValueError('Variable {} already present.'.format(name))
        self.variables[name] = var
        return var

    def add_constraint(self, name, constraint):
        """Record the (possibly indexed) constraint `constraint` as `name`."""
        if name in self.constraints:
            raise ValueError('Constraint {} already present.'.format(name))
        self.constraints[name] = constraint
        return constraint

    def num_variables(self):
        return sum(len(var) for var in self.variables.values())

    def num_constraints(self):
        return sum(len(cons) for cons in self.constraints.values())

    def __repr__(self):
        return '<FormulationInfo variables={} constraints={} at {}>'.format(
            list(self.variables.keys()),
            list(self.constraints.keys()),
            hex(id(self)),
        )


def remove_formulation(info):
    """Delete the relaxation block of `info` from its parent model.

    Removing a formulation that was already removed does nothing.
    """
    block = info.block
    if block is None:
        return
    parent = block.parent_block()
    if parent is not None:
        parent.del_component(block)
    info.block = None


def add_relaxation_block(model, name):
    """Add a new empty block to `model`, named after `name` but unique."""
    block_name = unique_component_name(model, name)
    block = pe.Block()
    model.add_component(block_name, block)
    return block


def relaxation_block_name(prefix, x, y):
    return '_{}_{}_{}'.format(prefix, _local_name(x), _local_name(y))


def _local_name(var):
    return ''.join(c if c.isalnum() else '_' for c in var.name).strip('_')
