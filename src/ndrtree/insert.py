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
Insertion and node splitting.

Items are inserted R-tree style: descend to the child needing the least area
enlargement, append, and split overflowing nodes on the way back up. Splits
follow the R*-tree heuristics: the split axis minimizes the total margin of
all valid distributions, and the split index minimizes the overlap of the two
halves.

The same code inserts whole subtrees when merging trees of different heights;
`level` is then the depth of the node receiving the subtree instead of the
depth of the leaves.
'''
import functools
import logging
import math

from . import envelope
from . import tree

logger = logging.getLogger(__name__)


def choose_subtree(bbox, root, level, ndims):
    """
    Finds the node at depth `level` best suited to receive `bbox`.

    Descends from `root` to the child requiring the least area enlargement,
    the smallest child on ties, stopping at a leaf or at depth `level`.

    Returns:
        2-tuple: the chosen node and the list of nodes from `root` to it.
    """
    path = []
    node = root
    while True:
        path.append(node)
        if node.leaf or len(path) - 1 == level:
            break

        min_area = min_enlargement = math.inf
        target = node.children[0]
        for child in node.children:
            area = envelope.area(child.bbox, ndims)
            enlargement = envelope.enlarged_area(bbox, child.bbox, ndims) - area
            if enlargement < min_enlargement:
                min_enlargement = enlargement
                min_area = area
                target = child
            elif enlargement == min_enlargement and area < min_area:
                min_area = area
                target = child
        node = target
    return node, path


def insert(rtree, item, level, is_node=False):
    """
    Inserts an item, or a subtree if `is_node`, at depth `level` of `rtree`.

    Args:
        rtree (RTree): tree to update.
        item: item or Node.
        level (int): depth of the receiving node; ``height - 1`` for items.
        is_node (bool, optional): whether `item` is a subtree.
    """
    ndims = rtree.ndims
    bbox = item.bbox if is_node else rtree.accessor.to_bbox(item)
    node, path = choose_subtree(bbox, rtree.data, level, ndims)

    node.children.append(item)
    envelope.extend(node.bbox, bbox, ndims)

    # split on node overflow; propagate upwards if necessary
    while level >= 0:
        if len(path[level].children) <= rtree.max_entries:
            break
        split(rtree, path, level)
        level -= 1

    adjust_parent_bboxes(bbox, path, level, ndims)


def split(rtree, path, level):
    """Splits the overflowing node ``path[level]`` in two."""
    node = path[level]
    accessor = rtree.accessor
    ndims = rtree.ndims
    total = len(node.children)
    m = rtree.min_entries

    choose_split_axis(node, m, total, accessor, ndims)
    index = choose_split_index(node, m, total, accessor.to_bbox, ndims)

    new_node = tree.Node(
        children=node.children[index:],
        height=node.height,
        leaf=node.leaf,
    )
    del node.children[index:]
    tree.calc_bbox(node, accessor.to_bbox, ndims)
    tree.calc_bbox(new_node, accessor.to_bbox, ndims)

    if level:
        path[level - 1].children.append(new_node)
    else:
        split_root(rtree, node, new_node)


def split_root(rtree, node, new_node):
    """Grows `rtree` by one level above two sibling nodes."""
    root = tree.Node(
        children=[node, new_node],
        height=node.height + 1,
        leaf=False,
    )
    rtree.data = tree.calc_bbox(root, rtree.accessor.to_bbox, rtree.ndims)
    logger.debug("Root split, tree height is now %d", root.height)


def sort_children(node, axis, accessor):
    """Sorts `node`'s children by their minimum along `axis`."""
    if node.leaf:
        key = functools.cmp_to_key(
            functools.partial(accessor.compare_min, axis))
    else:
        def key(child):
            return child.bbox[axis]
    node.children.sort(key=key)


def choose_split_axis(node, m, total, accessor, ndims):
    """Sorts `node`'s children along the axis with the lowest split margin."""
    best_axis = 0
    best_margin = math.inf
    for axis in range(ndims):
        margin = all_dist_margin(node, m, total, axis, accessor, ndims)
        if margin < best_margin:
            best_margin = margin
            best_axis = axis
    # children are left sorted along the last axis tried
    if best_axis != ndims - 1:
        sort_children(node, best_axis, accessor)


def all_dist_margin(node, m, total, axis, accessor, ndims):
    """
    Total margin of all distributions along `axis` where each side has at
    least `m` children.

    Leaves `node`'s children sorted along `axis`.
    """
    sort_children(node, axis, accessor)
    to_bbox = accessor.to_bbox

    left = tree.dist_bbox(node, 0, m, to_bbox, ndims)
    right = tree.dist_bbox(node, total - m, total, to_bbox, ndims)
    margin = envelope.margin(left, ndims) + envelope.margin(right, ndims)

    for i in range(m, total - m):
        child = node.children[i]
        envelope.extend(left, tree.child_bbox(node, child, to_bbox), ndims)
        margin += envelope.margin(left, ndims)

    for i in range(total - m - 1, m - 1, -1):
        child = node.children[i]
        envelope.extend(right, tree.child_bbox(node, child, to_bbox), ndims)
        margin += envelope.margin(right, ndims)

    return margin


def choose_split_index(node, m, total, to_bbox, ndims):
    """
    Index splitting the sorted children with the least overlap between the
    two halves, the least total area on ties.
    """
    index = m
    min_overlap = min_area = math.inf
    for i in range(m, total - m + 1):
        bbox1 = tree.dist_bbox(node, 0, i, to_bbox, ndims)
        bbox2 = tree.dist_bbox(node, i, total, to_bbox, ndims)

        overlap = envelope.intersection_area(bbox1, bbox2, ndims)
        area = envelope.area(bbox1, ndims) + envelope.area(bbox2, ndims)

        if overlap < min_overlap:
            min_overlap = overlap
            min_area = area
            index = i
        elif overlap == min_overlap and area < min_area:
            min_area = area
            index = i
    return index


def adjust_parent_bboxes(bbox, path, level, ndims):
    """Extends the boxes of ``path[:level + 1]`` to cover `bbox`."""
    for node in reversed(path[:level + 1]):
        envelope.extend(node.bbox, bbox, ndims)
