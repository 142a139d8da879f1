import pytest
from pypowergrid.GridClosure import GridClosureTracker


def test_initial_grids():
    gct = GridClosureTracker(5)
    assert len(gct) == 5
    for i in range(1, 6):
        assert gct.find(i) == i
        assert gct.is_connected(i, i)


def test_union_merges_grids():
    gct = GridClosureTracker(4)
    gct.union(1, 2)
    assert gct.is_connected(1, 2)
    assert not gct.is_connected(1, 3)
    assert len(gct) == 3


def test_union_of_connected_stations_is_noop():
    gct = GridClosureTracker(3)
    gct.add_connection(1, 2)
    gct.add_connection(2, 1)
    assert len(gct) == 2
    assert sorted(len(grid) for grid in gct) == [1, 2]


def test_add_connections_tracks_members():
    gct = GridClosureTracker(6)
    gct.add_connections([(1, 2), (2, 3), (4, 5)])
    grids = sorted(sorted(grid) for grid in gct)
    assert grids == [[1, 2, 3], [4, 5], [6]]
    gct.add_connection(3, 4)
    assert len(gct) == 2
    assert gct.is_connected(1, 5)


def test_find_compresses_paths():
    gct = GridClosureTracker(8)
    for i in range(1, 8):
        gct.union(i, i + 1)
    root = gct.find(8)
    assert all(gct.find(i) == root for i in range(1, 9))
    assert gct.parent[8] == root
