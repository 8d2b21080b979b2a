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

# pylint: skip-file

from pathlib import Path

from setuptools import setup, find_packages

project_root = Path(__file__).resolve().parent

about = {}
version_path = project_root / 'bilinrelax' / '__version__.py'
with version_path.open() as f:
    exec(f.read(), about)

with (project_root / 'README.rst').open() as f:
    readme = f.read()

with (project_root / 'CHANGELOG.rst').open() as f:
    changelog = f.read()


setup(
    name='bilinrelax',
    description=about['__description__'],
    author=about['__author__'],
    license=about['__license__'],
    version=about['__version__'],
    long_description=readme + '\n\n' + changelog,
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.10',
    include_package_data=True,
    install_requires=[
        'pyomo>=6.0',
        'numpy>=1.15',
        'toml',
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-cov',
            'hypothesis',
            'scipy>=1.5.2',
        ],
    },
)
