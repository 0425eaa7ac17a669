# Copyright (C) 2018 DataStorm
#
# This file is part of NDRTree.
#
# NDRTree is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# NDRTree is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# A copy of the GNU General Public License is available in the LICENSE
# file or at <http://www.gnu.org/licenses/>.
'''
Axis-aligned bounding boxes in any number of dimensions.

A bounding box is a flat vector of length ``2 * ndims``: the first ``ndims``
entries are the minima along each axis, the last ``ndims`` entries are the
maxima. Boxes owned by the tree are float numpy arrays and may be mutated in
place; boxes read from items can be any sequence, and only their first
``2 * ndims`` entries are looked at.

The empty box has minima at ``+inf`` and maxima at ``-inf``, so that it is
absorbed by any union and never intersects anything.
'''
import numpy


def empty(ndims):
    """Returns a fresh empty box."""
    return numpy.concatenate([
        numpy.full(ndims, numpy.inf),
        numpy.full(ndims, -numpy.inf),
    ])


def extend(a, b, ndims):
    """
    Extends `a` in place so that it also covers `b`.

    Args:
        a (array): float box, mutated.
        b (sequence): box to absorb.
        ndims (int): number of axes.

    Returns:
        array: `a` itself.
    """
    for i in range(ndims):
        j = ndims + i
        if b[i] < a[i]:
            a[i] = b[i]
        if b[j] > a[j]:
            a[j] = b[j]
    return a


def area(a, ndims):
    """Product of the box extents (the volume, in more than 2 dimensions)."""
    result = 1.
    for i in range(ndims):
        result *= a[ndims + i] - a[i]
    return float(result)


def margin(a, ndims):
    """Sum of the box extents, a cheap proxy of its perimeter."""
    result = 0.
    for i in range(ndims):
        result += a[ndims + i] - a[i]
    return float(result)


def enlarged_area(a, b, ndims):
    """Area of the union of `a` and `b`, without building the union."""
    result = 1.
    for i in range(ndims):
        j = ndims + i
        result *= max(a[j], b[j]) - min(a[i], b[i])
    return float(result)


def enlargement(a, b, ndims):
    """Area increase needed for `a` to also cover `b`."""
    return enlarged_area(a, b, ndims) - area(a, ndims)


def intersection_area(a, b, ndims):
    """
    Area of the intersection of `a` and `b`.

    Zero as soon as one axis has no overlap, including when the boxes only
    touch.
    """
    result = 1.
    for i in range(ndims):
        j = ndims + i
        overlap = min(a[j], b[j]) - max(a[i], b[i])
        if overlap <= 0:
            return 0.
        result *= overlap
    return float(result)


def contains(a, b, ndims):
    """True if `b` lies entirely within `a` (boundaries included)."""
    for i in range(ndims):
        j = ndims + i
        if not (a[i] <= b[i] and b[j] <= a[j]):
            return False
    return True


def intersects(a, b, ndims):
    """True unless `a` and `b` are disjoint along some axis."""
    for i in range(ndims):
        j = ndims + i
        if not (b[i] <= a[j] and a[i] <= b[j]):
            return False
    return True
