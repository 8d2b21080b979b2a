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

"""Configuration Manager."""

import toml

from bilinrelax.config.configuration import RelaxationConfig
from bilinrelax.config.options import (
    OptionsGroup,
    EnumOption,
    NumericOption,
    StringOption,
    BoolOption,
)


class ConfigurationManager(object):
    def __init__(self, enumerators_reg=None):
        self._configuration = None
        self._groups = set()
        self._options = {}
        self._initialize(enumerators_reg)

    def _initialize(self, enumerators_reg):
        config = RelaxationConfig()

        # add default sections
        logging_group = config.add_group('logging')
        self._assign_options_to_group(_logging_group(), logging_group)

        enumerators = None
        if enumerators_reg is not None:
            enumerators = list(enumerators_reg.keys())
        bilinear_group = config.add_group('bilinear')
        self._assign_options_to_group(_bilinear_group(enumerators), bilinear_group)

        self._configuration = config

    def update_configuration(self, user_config):
        if not isinstance(user_config, dict):
            user_config = toml.load(user_config)
        self._validate(user_config)
        self._configuration.update(user_config)

    @property
    def configuration(self):
        return self._configuration

    def _assign_options_to_group(self, options, group):
        self._groups.add(options.name)
        for option in options.iter():
            group.set(option.name, option.default)
            self._options[options.name + '.' + option.name] = option

    def _validate(self, user_config, path=None):
        # checks the whole user config before any value is written
        for key, value in user_config.items():
            sub_path = key if path is None else path + '.' + key
            if sub_path in self._groups:
                if not isinstance(value, dict):
                    raise ValueError('Configuration group "{}" must be a table'.format(sub_path))
                self._validate(value, sub_path)
                continue
            option = self._options.get(sub_path, None)
            if option is None:
                raise ValueError('Invalid configuration key/group "{}"'.format(sub_path))
            option.value = value
            if not option.is_valid():
                raise ValueError(
                    'Invalid value {} for configuration option "{}"'.format(value, sub_path)
                )


def _logging_group():
    return OptionsGroup('logging', [
        EnumOption('level', ['NOTSET', 'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'], 'INFO'),
        BoolOption('stdout', default=False),
        StringOption('file', default=None),
    ])


def _bilinear_group(enumerators=None):
    return OptionsGroup('bilinear', [
        NumericOption('epsilon', min_value=0, default=1e-9),
        NumericOption('infinity', min_value=0, default=1e20),
        EnumOption('vertex_enumerator', enumerators, default='default'),
        BoolOption('check_vertices', default=True),
    ])
