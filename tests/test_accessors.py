import collections

import pytest

import ndrtree
from ndrtree import accessors


Feature = collections.namedtuple('Feature', 'name minx miny maxx maxy')


def test_default_accessor():
    acc = accessors.make_accessor(None, 2)
    assert isinstance(acc, accessors.BoxAccessor)
    item = [0, 1, 2, 3]
    assert acc.to_bbox(item) is item
    assert acc.compare_min(1, [0, 5, 1, 6], [0, 2, 1, 3]) == 3


def test_format_attributes():
    acc = accessors.make_accessor(('.minx', '.miny', '.maxx', '.maxy'), 2)
    feat = Feature('a', 1, 2, 3, 4)
    assert acc.to_bbox(feat) == [1, 2, 3, 4]
    assert acc.compare_min(0, feat, Feature('b', 3, 0, 4, 1)) == -2


def test_format_keys():
    acc = accessors.make_accessor(['x0', 'y0', 'x1', 'y1'], 2)
    assert acc.to_bbox({'x0': 0, 'y0': 1, 'x1': 2, 'y1': 3}) == [0, 1, 2, 3]


def test_format_indexes():
    acc = accessors.FormatAccessor([1, 2, 3, 4])
    assert acc.ndims == 2
    assert acc.to_bbox(["name", 0, 1, 2, 3]) == [0, 1, 2, 3]


@pytest.mark.parametrize("fields", [(), ('.minx',), ('a', 'b', 'c')])
def test_format_needs_even_fields(fields):
    with pytest.raises(ValueError):
        accessors.FormatAccessor(fields)


def test_format_empty_attribute():
    with pytest.raises(ValueError):
        accessors.FormatAccessor(('.', '.miny', '.maxx', '.maxy'))


def test_format_dimension_mismatch():
    with pytest.raises(ValueError):
        accessors.make_accessor(('.minx', '.miny', '.maxx', '.maxy'), 3)


def test_callable():
    acc = accessors.make_accessor(lambda f: f[1:], 2)
    assert isinstance(acc, accessors.CallableAccessor)
    assert acc.to_bbox(['a', 0, 1, 2, 3]) == [0, 1, 2, 3]
    assert acc.compare_min(1, ['a', 0, 5, 1, 6], ['b', 0, 2, 1, 3]) == 3


def test_duck_typed_accessor():
    class Bounds:
        def to_bbox(self, item):
            return item.bounds

        def compare_min(self, axis, a, b):
            return a.bounds[axis] - b.bounds[axis]

    acc = accessors.make_accessor(Bounds(), 2)
    assert acc.compare_min(0, _Shape([2, 0, 3, 1]), _Shape([0, 0, 1, 1])) == 2


def test_subclass_accessor_is_kept():
    class Shapes(accessors.GeometryAccessor):
        def to_bbox(self, item):
            return item.bounds

    acc = Shapes()
    assert accessors.make_accessor(acc, 4) is acc
    assert acc.compare_min(1, _Shape([0, 1, 0, 1]), _Shape([0, 3, 0, 3])) == -2


@pytest.mark.parametrize("accessor", [42, "minx", object()])
def test_invalid_accessor(accessor):
    with pytest.raises(TypeError):
        accessors.make_accessor(accessor, 2)


def test_non_callable_members():
    with pytest.raises(TypeError):
        accessors.CallableAccessor("bounds")
    with pytest.raises(TypeError):
        accessors.CallableAccessor(lambda x: x, compare_min=3)


def test_tree_construction_fails_on_bad_accessor():
    with pytest.raises(ValueError):
        ndrtree.RTree(accessor=('.minx', '.maxx'), ndims=2)
    with pytest.raises(TypeError):
        ndrtree.RTree(accessor=12)


def test_tree_with_format():
    rtree = ndrtree.RTree(
        max_entries=4, accessor=('.minx', '.miny', '.maxx', '.maxy'))
    feats = [Feature(str(i), i, i, i + 0.5, i + 0.5) for i in range(30)]
    rtree.load(feats[:20])
    for feat in feats[20:]:
        rtree.insert(feat)
    found = rtree.search([9.9, 9.9, 12.1, 12.1])
    assert sorted(f.name for f in found) == ['10', '11', '12']
    rtree.remove(feats[11])
    found = rtree.search([9.9, 9.9, 12.1, 12.1])
    assert sorted(f.name for f in found) == ['10', '12']


class _Shape:
    def __init__(self, bounds):
        self.bounds = bounds
