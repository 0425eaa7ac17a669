import pytest

from helpers import brute_force_search, identities, random_boxes
from ndrtree import RTree, envelope, query


WINDOWS = [
    [0.1, 0.1, 0.3, 0.3],
    [0.5, 0, 0.51, 1],
    [-1, -1, 2, 2],
    [0.9, 0.9, 5, 5],
    [2, 2, 3, 3],
    [0.25, 0.25, 0.25, 0.25],
]


@pytest.fixture(scope="module")
def boxes():
    return random_boxes(1000)


@pytest.fixture(scope="module")
def loaded(boxes):
    return RTree(max_entries=6).load(boxes)


@pytest.fixture(scope="module")
def inserted(boxes):
    rtree = RTree(max_entries=6)
    for item in boxes:
        rtree.insert(item)
    return rtree


@pytest.mark.parametrize("window", WINDOWS)
def test_search_matches_brute_force(window, boxes, loaded, inserted):
    expected = identities(brute_force_search(boxes, window))
    assert identities(loaded.search(window)) == expected
    assert identities(inserted.search(window)) == expected


@pytest.mark.parametrize("window", WINDOWS)
def test_collides_matches_brute_force(window, boxes, loaded, inserted):
    expected = bool(brute_force_search(boxes, window))
    assert loaded.collides(window) is expected
    assert inserted.collides(window) is expected


def test_touching_boxes_match():
    rtree = RTree().load([[0, 0, 1, 1], [1, 1, 2, 2], [3, 3, 4, 4],
                          [5, 5, 6, 6], [7, 7, 8, 8]])
    assert sorted(rtree.search([2, 2, 3, 3])) == [[1, 1, 2, 2], [3, 3, 4, 4]]
    assert rtree.collides([8, 8, 9, 9])
    assert not rtree.collides([8.1, 8.1, 9, 9])


def test_search_third_axis():
    rtree = RTree(max_entries=4, ndims=3)
    points = [[0, 0, z, 0, 0, z] for z in range(50)]
    for point in points:
        rtree.insert(point)
    found = rtree.search([-1e9, -1e9, 10, 1e9, 1e9, 19.5])
    assert sorted(p[2] for p in found) == list(range(10, 20))
    assert not rtree.collides([-1e9, -1e9, 50.5, 1e9, 1e9, 60])


def test_empty_tree():
    rtree = RTree()
    assert rtree.search([-1e9, -1e9, 1e9, 1e9]) == []
    assert not rtree.collides([-1e9, -1e9, 1e9, 1e9])
    assert rtree.all() == []


def test_all(boxes, loaded, inserted):
    assert identities(loaded.all()) == identities(boxes)
    assert identities(inserted.all()) == identities(boxes)
    assert identities(query.all_items(loaded.data)) == identities(boxes)


def counting(monkeypatch):
    calls = []
    intersects = envelope.intersects

    def counted(a, b, ndims):
        calls.append((a, b))
        return intersects(a, b, ndims)

    monkeypatch.setattr(envelope, 'intersects', counted)
    return calls


def test_disjoint_window_stops_at_root(monkeypatch, loaded):
    calls = counting(monkeypatch)
    assert not loaded.collides([5, 5, 6, 6])
    assert len(calls) == 1
    assert loaded.search([5, 5, 6, 6]) == []
    assert len(calls) == 2


def test_contained_subtree_is_not_tested(monkeypatch, loaded, boxes):
    calls = counting(monkeypatch)
    assert len(loaded.search([-1, -1, 2, 2])) == len(boxes)
    # the root and its direct children only
    assert len(calls) == 1 + len(loaded.data.children)
    del calls[:]
    assert loaded.collides([-1, -1, 2, 2])
    assert len(calls) == 2
