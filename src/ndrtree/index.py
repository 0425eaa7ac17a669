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
The R-tree facade.

:class:`RTree` holds the root node and the configuration, and drives the
insertion, bulk loading, query and removal algorithms implemented in the
sibling modules.
'''
import collections.abc
import logging
import math

import toolz

from . import accessors
from . import build
from . import insert
from . import query
from . import remove
from . import tree

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 9
DEFAULT_NDIMS = 2


def is_absent(item):
    """None and empty containers are not indexed."""
    if item is None:
        return True
    return isinstance(item, collections.abc.Sized) and len(item) == 0


class RTree():
    """
    Balanced spatial index of axis-aligned bounding boxes.

    Args:
        max_entries (int, optional): maximum number of children per node,
            at least 4. Defaults to 9.
        ndims (int, optional): number of axes, at least 2. Defaults to 2.
        accessor (optional): how to get the bounding box of an item, see
            :func:`ndrtree.accessors.make_accessor`. By default items are
            flat sequences of minima then maxima.

    Attributes:
        data (Node): root of the tree.

    Example:
        >>> rtree = RTree().load([[0, 0, 1, 1], [2, 2, 3, 3]])
        >>> rtree.search([0.5, 0.5, 1.5, 1.5])
        [[0, 0, 1, 1]]
    """

    def __init__(self, max_entries=DEFAULT_MAX_ENTRIES, ndims=DEFAULT_NDIMS,
                 accessor=None):
        ndims = int(ndims) if ndims else DEFAULT_NDIMS
        max_entries = int(max_entries) if max_entries else DEFAULT_MAX_ENTRIES
        self._ndims = max(2, ndims)
        # min node fill is 40% for best performance
        self._max_entries = max(4, max_entries)
        self._min_entries = max(2, int(math.ceil(self._max_entries * 0.4)))
        self._accessor = accessors.make_accessor(accessor, self._ndims)
        self.clear()

    @property
    def ndims(self):
        """Number of axes."""
        return self._ndims

    @property
    def max_entries(self):
        return self._max_entries

    @property
    def min_entries(self):
        return self._min_entries

    @property
    def accessor(self):
        return self._accessor

    @property
    def height(self):
        """Height of the tree, 1 when the root is a leaf."""
        return self.data.height

    @property
    def is_empty(self):
        """Boolean: Is the tree empty?"""
        return not self.data.children

    def to_bbox(self, item):
        return self._accessor.to_bbox(item)

    def compare_min(self, axis, a, b):
        return self._accessor.compare_min(axis, a, b)

    def __len__(self):
        """Returns the number of items."""
        return toolz.count(tree.iter_items(self.data))

    def __iter__(self):
        return tree.iter_items(self.data)

    def __repr__(self):
        return "<{}(ndims={}, max_entries={}, height={}) at 0x{:x}>".format(
            self.__class__.__name__, self._ndims, self._max_entries,
            self.height, id(self))

    def clear(self):
        """Removes all items."""
        self.data = tree.empty_node(self._ndims)
        logger.debug("Tree cleared")
        return self

    def insert(self, item):
        """Inserts one item."""
        if not is_absent(item):
            insert.insert(self, item, self.data.height - 1)
        return self

    def load(self, items):
        """
        Inserts a batch of items.

        Much faster than inserting items one by one, and the resulting tree
        gives faster queries.
        """
        if items is None:
            return self
        build.load(self, toolz.remove(is_absent, items))
        return self

    def remove(self, item):
        """Removes `item`, compared by identity. Absent items are ignored."""
        if not is_absent(item):
            remove.remove(self, item)
        return self

    def search(self, bbox):
        """Returns the items whose bounding box intersects `bbox`."""
        return query.search(self.data, bbox, self._accessor.to_bbox,
                            self._ndims)

    def collides(self, bbox):
        """Whether some item's bounding box intersects `bbox`."""
        return query.collides(self.data, bbox, self._accessor.to_bbox,
                              self._ndims)

    def all(self):
        """Returns all items."""
        return query.all_items(self.data)

    def export_state(self):
        """Plain-data copy of the tree, see :func:`tree.export_node`."""
        return tree.export_node(self.data)

    def import_state(self, data):
        """
        Replaces the tree by a previously exported one.

        The data is not validated: a malformed tree leads to undefined query
        and update results.
        """
        self.data = tree.import_node(data)
        logger.debug("Imported tree of height %s", self.data.height)
        return self

    to_json = export_state
    from_json = import_state
