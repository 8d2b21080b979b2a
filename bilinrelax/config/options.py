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
"""Relaxation options."""
import abc


class OptionsGroup(object):
    def __init__(self, name, options):
        self._options = options
        self.name = name

    def iter(self):
        return iter(self._options)


class Option(metaclass=abc.ABCMeta):
    """A configuration option and its default value.

    `value` holds the candidate user value checked by `is_valid`.
    """
    def __init__(self, name, default=None):
        self.name = name
        self.default = default
        self.value = None

    @abc.abstractmethod
    def is_valid(self):
        pass


class NumericOption(Option):
    def __init__(self, name, min_value=None, max_value=None, default=None):
        super().__init__(name, default)
        self.min_value = min_value
        self.max_value = max_value

    def is_valid(self):
        # bool is a subclass of int
        if not isinstance(self.value, (int, float)) or isinstance(self.value, bool):
            return False
        if self.min_value is not None and self.value < self.min_value:
            return False
        if self.max_value is not None and self.value > self.max_value:
            return False
        return True


class BoolOption(Option):
    def is_valid(self):
        return isinstance(self.value, bool)


class StringOption(Option):
    """String option, `None` disables it."""
    def is_valid(self):
        return self.value is None or isinstance(self.value, str)


class EnumOption(Option):
    def __init__(self, name, values=None, default=None):
        super().__init__(name, default)
        self.values = values

    def is_valid(self):
        if self.values is not None and self.value not in self.values:
            return False
        return isinstance(self.value, str)
