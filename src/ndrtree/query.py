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
Window queries.

Both queries walk the tree depth-first with an explicit stack of nodes left to
expand, pruning subtrees whose bounding box misses the query window. Subtrees
whose box lies entirely within the window need no further test: all their
items match.
'''
from . import envelope
from . import tree


def search(root, bbox, to_bbox, ndims):
    """
    Items whose bounding box intersects `bbox`.

    Args:
        root (Node): root of the tree.
        bbox (sequence): query window.
        to_bbox (callable): item -> bounding box.
        ndims (int): number of axes.

    Returns:
        list: matching items, in no particular order.
    """
    result = []
    if not envelope.intersects(bbox, root.bbox, ndims):
        return result

    to_search = []
    node = root
    while node is not None:
        for child in node.children:
            cbox = tree.child_bbox(node, child, to_bbox)
            if not envelope.intersects(bbox, cbox, ndims):
                continue
            if node.leaf:
                result.append(child)
            elif envelope.contains(bbox, cbox, ndims):
                result.extend(tree.iter_items(child))
            else:
                to_search.append(child)
        node = to_search.pop() if to_search else None
    return result


def collides(root, bbox, to_bbox, ndims):
    """
    Whether any item's bounding box intersects `bbox`.

    Same walk as :func:`search`, stopping at the first match.
    """
    if not envelope.intersects(bbox, root.bbox, ndims):
        return False

    to_search = []
    node = root
    while node is not None:
        for child in node.children:
            cbox = tree.child_bbox(node, child, to_bbox)
            if not envelope.intersects(bbox, cbox, ndims):
                continue
            if node.leaf or envelope.contains(bbox, cbox, ndims):
                return True
            to_search.append(child)
        node = to_search.pop() if to_search else None
    return False


def all_items(root):
    """All items of the tree."""
    return list(tree.iter_items(root))
