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
Geometry accessors.

The tree never looks inside the items it stores. An accessor tells it how to
get an item's bounding box and how to compare two items along an axis, which
is all the insertion, splitting and bulk loading algorithms need.

The default accessor treats items as flat bounding boxes themselves.
Alternatively, a format of field names lets items be mappings, sequences or
objects with attributes, e.g. ``('.minx', '.miny', '.maxx', '.maxy')``.
'''
import abc
import collections.abc
import operator


class GeometryAccessor(abc.ABC):
    """
    Abstract interface for bounding box extraction.

    Attributes:
        ndims (int or None): number of axes the accessor is meant for, or None
            if it works for any number of axes.
    """
    __slots__ = ('ndims',)

    def __init__(self, ndims=None):
        self.ndims = ndims

    @abc.abstractmethod
    def to_bbox(self, item):
        """
        Returns the bounding box of `item` as a flat sequence of minima then
        maxima.
        """
        pass

    def compare_min(self, axis, a, b):
        """
        Compares items `a` and `b` by their minimum along `axis`.

        Returns a negative number if `a` comes first, a positive number if
        `b` comes first and zero on ties.
        """
        return self.to_bbox(a)[axis] - self.to_bbox(b)[axis]

    def __repr__(self):
        return "{}(ndims={})".format(self.__class__.__name__, self.ndims)


class BoxAccessor(GeometryAccessor):
    """Items are their own bounding boxes."""
    __slots__ = ()

    def to_bbox(self, item):
        return item

    def compare_min(self, axis, a, b):
        return a[axis] - b[axis]


class FormatAccessor(GeometryAccessor):
    """
    Items expose their bounds through fields.

    A field starting with a dot is read as an attribute, any other field is
    used as a key or an index. Fields list the minima of every axis followed
    by the maxima, so there must be an even number of them.

    Args:
        fields (sequence): field specifications.
    """
    __slots__ = ('fields', '_getters')

    def __init__(self, fields):
        fields = tuple(fields)
        if not fields or len(fields) % 2:
            raise ValueError(
                "Format must list the minima then the maxima of each axis, "
                "got {} fields: {}".format(len(fields), fields)
            )
        super().__init__(ndims=len(fields) // 2)
        self.fields = fields
        self._getters = tuple(_getter(f) for f in fields)

    def to_bbox(self, item):
        return [get(item) for get in self._getters]

    def compare_min(self, axis, a, b):
        get = self._getters[axis]
        return get(a) - get(b)

    def __repr__(self):
        return "FormatAccessor({})".format(self.fields)


class CallableAccessor(GeometryAccessor):
    """
    Wraps plain functions.

    Args:
        to_bbox (callable): item -> bounding box.
        compare_min (callable, optional): (axis, a, b) -> signed number.
            Defaults to comparing the minima of `to_bbox`.
    """
    __slots__ = ('_to_bbox', '_compare_min')

    def __init__(self, to_bbox, compare_min=None, ndims=None):
        if not callable(to_bbox):
            raise TypeError(
                "to_bbox must be callable, got {!r}".format(to_bbox))
        if compare_min is not None and not callable(compare_min):
            raise TypeError(
                "compare_min must be callable, got {!r}".format(compare_min))
        super().__init__(ndims=ndims)
        self._to_bbox = to_bbox
        self._compare_min = compare_min

    def to_bbox(self, item):
        return self._to_bbox(item)

    def compare_min(self, axis, a, b):
        if self._compare_min is None:
            return self._to_bbox(a)[axis] - self._to_bbox(b)[axis]
        return self._compare_min(axis, a, b)


def _getter(field):
    if isinstance(field, str) and field.startswith('.'):
        if len(field) == 1:
            raise ValueError("Empty attribute name in format")
        return operator.attrgetter(field[1:])
    return operator.itemgetter(field)


def make_accessor(accessor, ndims):
    """
    Resolves the accessor configuration of a tree.

    Args:
        accessor: None, a GeometryAccessor, a sequence of field
            specifications, a `to_bbox` callable or any object with callable
            `to_bbox` and `compare_min` attributes.
        ndims (int): number of axes of the tree.

    Returns:
        GeometryAccessor

    Raises:
        TypeError: for unsupported accessor values.
        ValueError: for formats or accessors not matching `ndims`.
    """
    if accessor is None:
        resolved = BoxAccessor()
    elif isinstance(accessor, GeometryAccessor):
        resolved = accessor
    elif callable(accessor):
        resolved = CallableAccessor(accessor)
    elif hasattr(accessor, 'to_bbox'):
        resolved = CallableAccessor(
            accessor.to_bbox, getattr(accessor, 'compare_min', None),
            ndims=getattr(accessor, 'ndims', None),
        )
    elif (isinstance(accessor, collections.abc.Sequence)
          and not isinstance(accessor, (str, bytes))):
        resolved = FormatAccessor(accessor)
    else:
        raise TypeError(
            "Invalid accessor {!r}: expected a format, a to_bbox callable or "
            "an object with to_bbox and compare_min".format(accessor)
        )
    if resolved.ndims is not None and resolved.ndims != ndims:
        raise ValueError(
            "Accessor is for {} dimensions but the tree has {}"
            .format(resolved.ndims, ndims)
        )
    return resolved
