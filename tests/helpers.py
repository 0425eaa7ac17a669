import numpy

from ndrtree import tree


def random_boxes(n, ndims=2, seed=0, max_extent=0.05):
    """Random boxes in the unit cube, as lists of minima then maxima."""
    rng = numpy.random.RandomState(seed)
    mins = rng.uniform(0, 1, size=(n, ndims))
    extents = rng.uniform(0, max_extent, size=(n, ndims))
    return numpy.concatenate([mins, mins + extents], axis=1).tolist()


def random_points(n, ndims=2, seed=0):
    return random_boxes(n, ndims=ndims, seed=seed, max_extent=0)


def brute_force_search(items, bbox, ndims=2):
    return [
        item for item in items
        if all(item[i] <= bbox[ndims + i] and bbox[i] <= item[ndims + i]
               for i in range(ndims))
    ]


def identities(items):
    return sorted(id(item) for item in items)


def assert_valid(rtree, fill=True):
    """
    Checks the structural invariants of `rtree`: exact bounding boxes,
    consistent heights and leaf flags, balance and, optionally, node fill.
    """
    root = rtree.data
    to_bbox = rtree.accessor.to_bbox
    leaf_depths = set()
    stack = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        expected = tree.dist_bbox(node, 0, len(node.children), to_bbox,
                                  rtree.ndims)
        assert numpy.array_equal(node.bbox, expected)
        assert node.leaf == (node.height == 1)
        assert len(node.children) <= rtree.max_entries
        if fill and node is not root:
            assert len(node.children) >= rtree.min_entries
        if node.leaf:
            leaf_depths.add(depth)
        else:
            for child in node.children:
                assert child.height == node.height - 1
                stack.append((child, depth + 1))
    assert leaf_depths == {root.height - 1}
