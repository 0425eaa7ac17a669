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
Bulk loading.

Trees are packed with the Overlap Minimizing Top-down (OMT) variant of
Sort-Tile-Recurse: the target height is fixed up front, the root fan-out is
chosen to fill the top level as much as possible, and each node tiles its
items along each axis in turn into roughly square (cubic, ...) slabs of
children. Tiling relies on partial sorting (:mod:`ndrtree.select`) rather
than on full sorts.

Child sizes are decided before tiling: a node of height ``h`` splits its
items into as few children as possible, each holding between
``min_entries ** (h - 1)`` and ``max_entries ** (h - 1)`` items, with sizes
differing by at most one. Every node but the root of a packed tree thus ends
up with between ``min_entries`` and ``max_entries`` children.

A freshly built tree is then merged into the existing one.
'''
import logging

import toolz

from . import insert
from . import select
from . import tree

logger = logging.getLogger(__name__)


def build(rtree, items, left, right, height=0):
    """
    Packs ``items[left:right + 1]`` into a tree.

    Args:
        rtree (RTree): tree giving the configuration.
        items (list): items, reordered in place.
        left (int): first index of the range.
        right (int): last index of the range.
        height (int, optional): height of the node to build, 0 for the root
            of a new tree.

    Returns:
        Node: root of the packed tree.
    """
    ndims = rtree.ndims
    to_bbox = rtree.accessor.to_bbox
    n = right - left + 1
    max_entries = rtree.max_entries
    is_root = not height
    if is_root:
        height = target_height(n, max_entries)

    if height == 1:
        node = tree.Node(children=items[left:right + 1], height=1, leaf=True)
        return tree.calc_bbox(node, to_bbox, ndims)

    # fewest children not exceeding the capacity of a subtree
    fanout = _ceil_div(n, max_entries ** (height - 1))
    if is_root:
        logger.debug("Packing %d items, height %d, root fan-out %d",
                     n, height, fanout)
    else:
        fanout = max(rtree.min_entries, fanout)

    node = tree.Node(children=[], height=height, leaf=False)
    _build_axis(rtree, items, node, 0, left, spread(n, fanout))

    return tree.calc_bbox(node, to_bbox, ndims)


def _build_axis(rtree, items, node, axis, left, sizes):
    # Tiles the children of given sizes into slabs along axis, then each
    # slab along the next axis. On the last axis every slab is one child.
    remaining = rtree.ndims - axis
    if remaining == 1:
        slabs = [[size] for size in sizes]
    else:
        slabs = chunks(sizes, slab_count(len(sizes), remaining))

    starts = list(toolz.accumulate(
        lambda start, slab: start + sum(slab), slabs, left))
    compare = toolz.partial(rtree.accessor.compare_min, axis)
    select.partition(items, left, starts[-1] - 1, starts[1:-1], compare)

    for first, slab in zip(starts, slabs):
        if remaining == 1:
            node.children.append(
                build(rtree, items, first, first + slab[0] - 1,
                      node.height - 1))
        else:
            _build_axis(rtree, items, node, axis + 1, first, slab)


def target_height(n, max_entries):
    """Smallest height at which a tree of `max_entries` fan-out holds `n`."""
    height = 1
    while max_entries ** height < n:
        height += 1
    return height


def slab_count(count, ndims):
    """Number of slabs per axis to tile `count` children over `ndims` axes."""
    slabs = 1
    while slabs ** ndims < count:
        slabs += 1
    return slabs


def spread(total, count):
    """Splits `total` into `count` sizes differing by at most one."""
    return [(j + 1) * total // count - j * total // count
            for j in range(count)]


def chunks(seq, count):
    """Splits `seq` into `count` consecutive runs of near equal lengths."""
    bounds = list(toolz.accumulate(lambda a, b: a + b,
                                   spread(len(seq), count), 0))
    return [seq[a:b] for a, b in zip(bounds, bounds[1:])]


def _ceil_div(a, b):
    return -(-a // b)


def load(rtree, items):
    """
    Bulk inserts `items` into `rtree`.

    Small batches are inserted one by one; larger ones are packed into a new
    tree, then merged.
    """
    items = list(items)
    if not items:
        return
    if len(items) < rtree.min_entries:
        for item in items:
            insert.insert(rtree, item, rtree.data.height - 1)
        return

    merge(rtree, build(rtree, items, 0, len(items) - 1))


def merge(rtree, node):
    """
    Merges the tree rooted at `node` into `rtree`.

    An empty `rtree` adopts `node` as its root. Otherwise the root with
    fewer entries (the shorter tree first) is attached to the other tree:
    trees of the same height become the two children of a new root, and a
    shorter tree is inserted as a subtree of the taller one, at the level
    where the leaves of both line up. A root too small to become an inner
    node is scattered instead: its entries are inserted one by one.
    """
    if not rtree.data.children:
        logger.debug("Adopting packed tree of height %d", node.height)
        rtree.data = node
        return

    if (rtree.data.height, len(rtree.data.children)) < \
            (node.height, len(node.children)):
        rtree.data, node = node, rtree.data

    if len(node.children) < rtree.min_entries:
        logger.debug("Scattering %d entries of height %d root",
                     len(node.children), node.height)
        _scatter(rtree, node)
    elif rtree.data.height == node.height:
        logger.debug("Merging trees of equal height %d", node.height)
        insert.split_root(rtree, rtree.data, node)
    else:
        logger.debug("Inserting subtree of height %d into tree of height %d",
                     node.height, rtree.data.height)
        insert.insert(rtree, node, rtree.data.height - node.height - 1,
                      is_node=True)


def _scatter(rtree, node):
    for child in node.children:
        if node.leaf:
            insert.insert(rtree, child, rtree.data.height - 1)
        else:
            insert.insert(rtree, child, rtree.data.height - child.height - 1,
                          is_node=True)
