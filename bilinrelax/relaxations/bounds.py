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

"""Variable bounds and partition checks shared by the builders."""
import numpy as np

from bilinrelax.error import ConfigurationError
from bilinrelax.math import MathContext, is_close, is_inf


def variable_bounds(var, mc=None):
    """Return the finite `(lower, upper)` bounds of `var`.

    Parameters
    ----------
    var : Var
        a Pyomo variable
    mc : MathContext
        the math context, values beyond `mc.infinity` are infinite

    Returns
    -------
    tuple
        lower and upper bound as floats
    """
    if mc is None:
        mc = MathContext()
    lower = var.lb
    upper = var.ub
    if lower is None or upper is None:
        raise ConfigurationError(
            'Variable {} must have finite bounds, has [{}, {}]'.format(var.name, lower, upper)
        )
    lower = float(lower)
    upper = float(upper)
    if np.isnan(lower) or np.isnan(upper) or is_inf(lower, mc) or is_inf(upper, mc):
        raise ConfigurationError(
            'Variable {} must have finite bounds, has [{}, {}]'.format(var.name, lower, upper)
        )
    if lower > upper:
        raise ConfigurationError(
            'Variable {} has lower bound {} greater than upper bound {}'.format(
                var.name, lower, upper)
        )
    return lower, upper


def validate_partition(partition, lower, upper, mc=None, name='x'):
    """Check `partition` is a valid set of breakpoints for `[lower, upper]`.

    Parameters
    ----------
    partition : iterable of float
        the breakpoints, in ascending order
    lower : float
        the variable lower bound, must match the first breakpoint
    upper : float
        the variable upper bound, must match the last breakpoint
    mc : MathContext
        the math context used for the endpoints tolerance
    name : str
        the partitioned variable name, used in error messages

    Returns
    -------
    list of float
    """
    if mc is None:
        mc = MathContext()
    try:
        points = [float(p) for p in partition]
    except (TypeError, ValueError):
        raise ConfigurationError(
            'Partition of {} must contain numbers, got {}'.format(name, partition)
        )

    if len(points) < 2:
        raise ConfigurationError(
            'Partition of {} must have at least 2 breakpoints, has {}'.format(name, len(points))
        )

    for point in points:
        if np.isnan(point) or is_inf(point, mc):
            raise ConfigurationError(
                'Partition of {} contains non finite breakpoint {}'.format(name, point)
            )

    for prev_point, point in zip(points[:-1], points[1:]):
        if not point > prev_point:
            raise ConfigurationError(
                'Partition of {} must be strictly increasing, found {} after {}'.format(
                    name, point, prev_point)
            )

    if not is_close(points[0], lower, atol=mc.epsilon):
        raise ConfigurationError(
            'Partition of {} starts at {}, expected lower bound {}'.format(name, points[0], lower)
        )

    if not is_close(points[-1], upper, atol=mc.epsilon):
        raise ConfigurationError(
            'Partition of {} ends at {}, expected upper bound {}'.format(name, points[-1], upper)
        )

    return points
