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

"""Math context used when checking bounds and partitions."""
import numpy as np


class MathContext:
    def __init__(self):
        self.epsilon = 1e-9
        self.infinity = 1e20


def is_close(a, b, atol=None, rtol=None):
    if atol is None and rtol is None:
        raise ValueError('One of atol and rtol must be specified')
    if atol is None:
        atol = 0.0
    if rtol is None:
        rtol = 0.0

    return np.isclose(a, b, atol=atol, rtol=rtol)


def is_inf(n, mc):
    """Test element-wise for positive and negative infinity.

    This version of is_inf also tests for values greater than
    `mc.infinity` or less than `-mc.infinity`.
    """
    return np.logical_or.reduce([
        np.isinf(n),
        n >= mc.infinity,
        n <= -mc.infinity,
    ])
