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

"""bilinrelax root object. Contains configuration and logging state."""
from bilinrelax.config import ConfigurationManager
from bilinrelax.error import ConfigurationError
from bilinrelax.logging import LogManager
from bilinrelax.math import MathContext
from bilinrelax.relaxations import (
    IncrementalBilinearBuilder,
    McCormickBuilder,
    VertexEnumeratorsRegistry,
    remove_formulation,
    validate_partition,
    variable_bounds,
)


class BilinearRelaxer:
    """Build relaxations of bilinear terms using the current configuration."""

    def __init__(self, vertex_enumerators_registry=None):
        if vertex_enumerators_registry is None:
            vertex_enumerators_registry = VertexEnumeratorsRegistry()
        self._enumerators_reg = vertex_enumerators_registry
        self._log_manager = LogManager()
        self._config_manager = ConfigurationManager(self._enumerators_reg)
        self._config = self._config_manager.configuration
        self.mc = MathContext()
        _update_math_context(self.mc, self.config)
        self.logger = self._log_manager.get_logger('bilinrelax')

    @property
    def config(self):
        return self._config.bilinear

    def update_configuration(self, user_config):
        """Update configuration with `user_config`, a dict or a TOML file path."""
        self._config_manager.update_configuration(user_config)
        self._config = self._config_manager.configuration
        self._log_manager.apply_config(self._config.logging)
        _update_math_context(self.mc, self.config)

    def get_logger(self, name):
        return self._log_manager.get_logger(name)

    def bounds(self, var):
        return variable_bounds(var, self.mc)

    def get_vertex_enumerator(self, name):
        """Get vertex enumerator from the registry."""
        enumerator_cls = self._enumerators_reg.get(name, None)
        if enumerator_cls is None:
            raise ConfigurationError('No vertex enumerator "{}"'.format(name))
        return enumerator_cls

    def available_vertex_enumerators(self):
        """Get available vertex enumerators."""
        return self._enumerators_reg.keys()

    def mccormick_builder(self):
        return McCormickBuilder(
            bounds=self.bounds,
            mc=self.mc,
            logger=self.get_logger('mccormick'),
        )

    def incremental_builder(self):
        enumerator_cls = self.get_vertex_enumerator(self.config['vertex_enumerator'])
        return IncrementalBilinearBuilder(
            vertex_enumerator=enumerator_cls(),
            bounds=self.bounds,
            mc=self.mc,
            logger=self.get_logger('incremental'),
            check_vertices=self.config['check_vertices'],
        )

    def relax(self, model, x, y, z, x_partition=None, y_partition=None):
        """Relax `z = xy` and add the relaxation to `model`.

        Without partitions, or if both partitions contain only the variables
        bounds, add the McCormick envelope. Otherwise add the incremental
        formulation; a missing partition defaults to the variable bounds.

        Returns
        -------
        FormulationInfo
        """
        if x_partition is None and y_partition is None:
            self.logger.info('Relax {} * {} with McCormick envelope', x.name, y.name)
            return self.mccormick_builder().build(model, x, y, z)

        if x_partition is None:
            x_partition = list(self.bounds(x))
        if y_partition is None:
            y_partition = list(self.bounds(y))

        if len(x_partition) == 2 and len(y_partition) == 2:
            # partitions must still match the bounds
            x_lb, x_ub = self.bounds(x)
            y_lb, y_ub = self.bounds(y)
            validate_partition(x_partition, x_lb, x_ub, self.mc, x.name)
            validate_partition(y_partition, y_lb, y_ub, self.mc, y.name)
            self.logger.info('Relax {} * {} with McCormick envelope', x.name, y.name)
            return self.mccormick_builder().build(model, x, y, z)

        self.logger.info(
            'Relax {} * {} with incremental formulation, partitions of size {} and {}',
            x.name, y.name, len(x_partition), len(y_partition),
        )
        return self.incremental_builder().build(model, x, y, z, x_partition, y_partition)

    def remove(self, formulation_info):
        """Remove a relaxation previously added by `relax`."""
        remove_formulation(formulation_info)


def _update_math_context(mc, config):
    mc.epsilon = config.epsilon
    mc.infinity = config.infinity
