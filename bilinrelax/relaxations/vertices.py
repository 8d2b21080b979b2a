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

"""Vertices of the triangulated bilinear surface."""
from abc import ABCMeta, abstractmethod
from collections import namedtuple

import numpy as np

from bilinrelax.error import ConfigurationError, ContractViolation
from bilinrelax.math import MathContext, is_close
from bilinrelax.registry import Registry


Vertex = namedtuple('Vertex', ['x', 'y', 'z'])


def bilinear_vertex(x, y):
    """Return the vertex of the surface `z = xy` at `(x, y)`."""
    return Vertex(x, y, x * y)


def num_segments(x_partition, y_partition):
    return max(len(x_partition), len(y_partition)) - 1


class VertexEnumerator(metaclass=ABCMeta):
    @abstractmethod
    def enumerate_vertices(self, x_partition, y_partition): # pragma: no cover
        """Return the vertex path used by the incremental formulation.

        Parameters
        ----------
        x_partition : list of float
            breakpoints of x, from its lower to its upper bound
        y_partition : list of float
            breakpoints of y, from its lower to its upper bound

        Returns
        -------
        tuple
            `(origin, non_origin)`, two lists of `Vertex` of length
            `num_segments(x_partition, y_partition) + 1`
        """
        pass


class DefaultVertexEnumerator(VertexEnumerator):
    """Enumerate the vertices of a domain partitioned along one axis.

    The partitioned axis breakpoints `p_0, ..., p_K` split the domain in
    `K` cells spanning the whole range of the other axis. Origin vertices
    lie on the lower bound of the other axis, non origin vertices on its
    upper bound, so the four vertices of segment `k` are the corners of
    cell `k`.
    """
    def enumerate_vertices(self, x_partition, y_partition):
        if len(x_partition) < 2 or len(y_partition) < 2:
            raise ConfigurationError('Partitions must have at least 2 breakpoints')

        if len(x_partition) > 2 and len(y_partition) > 2:
            raise ConfigurationError(
                'Only one of x and y can be partitioned, got {} and {} breakpoints'.format(
                    len(x_partition), len(y_partition))
            )

        if len(y_partition) == 2:
            y_lb, y_ub = y_partition
            origin = [bilinear_vertex(x, y_lb) for x in x_partition]
            non_origin = [bilinear_vertex(x, y_ub) for x in x_partition]
        else:
            x_lb, x_ub = x_partition
            origin = [bilinear_vertex(x_lb, y) for y in y_partition]
            non_origin = [bilinear_vertex(x_ub, y) for y in y_partition]
        return origin, non_origin


def check_vertex_path(vertex_path, x_partition, y_partition, mc=None, check_values=True):
    """Check the vertex path returned by a `VertexEnumerator`.

    Parameters
    ----------
    vertex_path : tuple
        the `(origin, non_origin)` pair returned by `enumerate_vertices`
    x_partition : list of float
        breakpoints of x
    y_partition : list of float
        breakpoints of y
    mc : MathContext
        tolerances used to compare coordinates
    check_values : bool
        if False, only check the shape of the path

    Returns
    -------
    tuple
        `(origin, non_origin)` as two lists of vertices

    Raises
    ------
    ContractViolation
        if the path is not a pair of sequences of `num_segments + 1`
        3-tuples. When `check_values` is True, also if a vertex is not
        on `z = xy`, if its x or y coordinate is not a breakpoint, or if
        the path does not start at a corner of the domain.
    """
    if mc is None:
        mc = MathContext()
    segments = num_segments(x_partition, y_partition)
    try:
        origin, non_origin = vertex_path
        origin = list(origin)
        non_origin = list(non_origin)
    except (TypeError, ValueError):
        raise ContractViolation(
            'Expected a pair of vertex sequences, got {}'.format(vertex_path)
        )

    for name, vertices in [('origin', origin), ('non origin', non_origin)]:
        if len(vertices) != segments + 1:
            raise ContractViolation(
                'Expected {} {} vertices, got {}'.format(segments + 1, name, len(vertices))
            )
        for vertex in vertices:
            if not isinstance(vertex, tuple) or len(vertex) != 3:
                raise ContractViolation(
                    'Vertex {} must be a tuple of 3 coordinates'.format(vertex)
                )
            if check_values:
                _check_vertex_values(vertex, x_partition, y_partition, mc)

    if check_values:
        x, y, _ = origin[0]
        x_corners = [x_partition[0], x_partition[-1]]
        y_corners = [y_partition[0], y_partition[-1]]
        if not (_is_breakpoint(x, x_corners, mc) and _is_breakpoint(y, y_corners, mc)):
            raise ContractViolation(
                'First origin vertex {} is not a corner of the domain'.format(origin[0])
            )
    return origin, non_origin


def _check_vertex_values(vertex, x_partition, y_partition, mc):
    x, y, z = vertex
    try:
        on_surface = is_close(x * y, z, atol=mc.epsilon, rtol=mc.epsilon)
    except TypeError:
        raise ContractViolation('Vertex {} has non numeric coordinates'.format(vertex))
    if not on_surface:
        raise ContractViolation(
            'Vertex {} is not on the bilinear surface, expected z = {}'.format(vertex, x * y)
        )
    if not _is_breakpoint(x, x_partition, mc):
        raise ContractViolation('Vertex {} x is not a breakpoint of x'.format(vertex))
    if not _is_breakpoint(y, y_partition, mc):
        raise ContractViolation('Vertex {} y is not a breakpoint of y'.format(vertex))


def _is_breakpoint(value, partition, mc):
    return bool(np.any(is_close(value, partition, atol=mc.epsilon)))


class VertexEnumeratorsRegistry(Registry):
    def group_name(self):
        return 'bilinrelax.vertex_enumerators'

    def builtin_items(self):
        return [('default', DefaultVertexEnumerator)]
