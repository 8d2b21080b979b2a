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
"""bilinrelax Configuration module."""


class _ConfigGroup(object):
    """A named table of configuration values and nested groups.

    Keys are validated by `ConfigurationManager` before the group is
    updated.
    """
    def __init__(self, name):
        self.name = name
        self._items = {}

    def get(self, key, default=None):
        """Get value for key."""
        return self._items.get(key, default)

    def set(self, key, value):
        """Set value for key."""
        self._items[key] = value

    def __getitem__(self, key):
        return self._items[key]

    def __getattr__(self, attr):
        if attr.startswith('_'):
            raise AttributeError(attr)
        try:
            return self._items[attr]
        except KeyError:
            raise AttributeError(attr)

    def add_group(self, name):
        """Add a new configuration group."""
        if name in self._items:
            raise ValueError('Group {} already present.'.format(name))
        group = _ConfigGroup(name)
        self._items[name] = group
        return group

    def update(self, other):
        """Recursively update self with the values of the dict `other`."""
        for key, value in other.items():
            own_value = self._items.get(key, None)
            if isinstance(own_value, _ConfigGroup):
                own_value.update(value)
            else:
                self._items[key] = value


class RelaxationConfig(object):
    """bilinrelax Configuration object."""
    def __init__(self):
        self._config = _ConfigGroup('root')

    def add_group(self, name):
        """Add a new configuration group."""
        return self._config.add_group(name)

    def get(self, key, default=None):
        """Get configuration value or group for key. Returns None if not present."""
        return self._config.get(key, default=default)

    def __getitem__(self, key):
        """Get configuration value or group for key. Raise KeyError if not present."""
        return self._config[key]

    def __getattr__(self, attr):
        """Get configuration value or group for key. Raise AttributeError if not present."""
        if attr.startswith('_'):
            raise AttributeError(attr)
        return getattr(self._config, attr)

    def update(self, other):
        """Update config with other."""
        self._config.update(other)
