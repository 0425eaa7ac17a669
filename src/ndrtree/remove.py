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
Item removal.

Removal looks for the item by identity with an iterative depth-first walk,
only entering subtrees whose bounding box contains the item's bounding box.
Once found, the item is dropped from its leaf and the path is condensed:
emptied nodes are pruned and the remaining boxes are recomputed.

Entries of underfull nodes are not reinserted, so nodes may hold fewer than
the minimum number of children after removals.
'''
import logging

from . import envelope
from . import tree

logger = logging.getLogger(__name__)


def _index_of(children, child):
    for idx, other in enumerate(children):
        if other is child:
            return idx
    return None


def remove(rtree, item):
    """
    Removes `item` from `rtree`.

    Returns:
        bool: whether the item was found.
    """
    ndims = rtree.ndims
    bbox = rtree.accessor.to_bbox(item)
    node = rtree.data
    path = []
    indexes = []
    parent = None
    i = 0
    going_up = False

    while node is not None or path:
        if node is None:  # go up
            node = path.pop()
            parent = path[-1] if path else None
            i = indexes.pop()
            going_up = True

        if node.leaf:
            index = _index_of(node.children, item)
            if index is not None:
                del node.children[index]
                path.append(node)
                condense(rtree, path)
                return True

        if (not going_up and not node.leaf and node.children
                and envelope.contains(node.bbox, bbox, ndims)):  # go down
            path.append(node)
            indexes.append(i)
            i = 0
            parent = node
            node = node.children[0]
        elif parent is not None:  # go right
            i += 1
            node = parent.children[i] if i < len(parent.children) else None
            going_up = False
        else:
            node = None
    return False


def condense(rtree, path):
    """
    Prunes emptied nodes along `path`, from the leaf up, and recomputes the
    boxes of the others. An emptied root resets `rtree`.
    """
    to_bbox = rtree.accessor.to_bbox
    for depth in range(len(path) - 1, -1, -1):
        node = path[depth]
        if node.children:
            tree.calc_bbox(node, to_bbox, rtree.ndims)
        elif depth > 0:
            siblings = path[depth - 1].children
            del siblings[_index_of(siblings, node)]
        else:
            logger.debug("Last item removed, resetting tree")
            rtree.data = tree.empty_node(rtree.ndims)
