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
Tree data structure.

A tree is made of :class:`Node` objects. Leaves (height 1) hold the indexed
items directly; internal nodes hold child nodes of height one less. Every node
stores the exact bounding box of its children. The tree is strictly
hierarchical: nodes own their children list and hold no reference to their
parent, so paths are kept explicitly by the algorithms walking the tree.

Traversals use an explicit stack rather than recursion, so that their call
depth does not depend on the tree.
'''
import numpy
import toolz

from . import envelope


class Node():
    """
    Node of the tree.

    Args:
        children (list, optional): value of the children attribute.
        height (int, optional): value of the height attribute. Defaults to 1.
        leaf (bool, optional): value of the leaf attribute. Defaults to True.
        bbox (array, optional): value of the bbox attribute.

    Attributes:
        children (list): items for leaves, child nodes otherwise. Order is
            only meaningful transiently, while splitting.
        height (int): 1 for leaves, 1 + height of the children otherwise.
        bbox (array): union of the children's bounding boxes.
        leaf (bool): whether the children are items.
    """
    __slots__ = ('children', 'height', 'bbox', 'leaf')

    def __init__(self, children=None, height=1, leaf=True, bbox=None):
        self.children = [] if children is None else children
        self.height = height
        self.leaf = leaf
        self.bbox = bbox

    def __repr__(self):
        return "Node(height={}, leaf={}, children={}, bbox={})".format(
            self.height, self.leaf, len(self.children),
            None if self.bbox is None else list(self.bbox),
        )


def empty_node(ndims):
    """A fresh empty leaf, the root of an empty tree."""
    return Node(children=[], height=1, leaf=True, bbox=envelope.empty(ndims))


def child_bbox(node, child, to_bbox):
    """Bounding box of one of `node`'s children."""
    return to_bbox(child) if node.leaf else child.bbox


def dist_bbox(node, start, stop, to_bbox, ndims):
    """Bounding box of ``node.children[start:stop]``."""
    bbox = envelope.empty(ndims)
    for child in node.children[start:stop]:
        envelope.extend(bbox, child_bbox(node, child, to_bbox), ndims)
    return bbox


def calc_bbox(node, to_bbox, ndims):
    """Recomputes `node`'s bounding box from its children."""
    node.bbox = dist_bbox(node, 0, len(node.children), to_bbox, ndims)
    return node


def iter_nodes(root):
    '''Depth-first iterator of the nodes under `root`, `root` included.'''
    filo = [root]
    while filo:
        node = filo.pop()
        yield node
        if not node.leaf:
            filo.extend(node.children)


def iter_leaves(root):
    '''Leaves under `root`.'''
    return (node for node in iter_nodes(root) if node.leaf)


def iter_items(root):
    '''Items stored under `root`.'''
    return toolz.concat(leaf.children for leaf in iter_leaves(root))


def export_node(node):
    """
    Plain-data copy of the tree structure under `node`.

    Nodes become dicts with keys children, height, bbox and leaf; bounding
    boxes become lists of floats. Items are not copied.
    """
    if node.leaf:
        children = list(node.children)
    else:
        children = [export_node(child) for child in node.children]
    return {
        'children': children,
        'height': node.height,
        'bbox': numpy.asarray(node.bbox, dtype=float).tolist(),
        'leaf': node.leaf,
    }


def import_node(data):
    """
    Rebuilds nodes from the output of :func:`export_node`.

    The structure is taken as is: heights, bounding boxes and fill are not
    checked against the children.
    """
    if isinstance(data, Node):
        return data
    leaf = bool(data['leaf'])
    children = list(data['children'])
    if not leaf:
        children = [import_node(child) for child in children]
    return Node(
        children=children,
        height=data['height'],
        leaf=leaf,
        bbox=numpy.array(data['bbox'], dtype=float),
    )
