import logging
import numpy as np
import pytest
from pypowergrid.Interconnection import (
    Interconnection,
    QueryOp,
    process_queries,
)


def reference_queries(station_count, connections, queries):
    """Brute force: recompute the grid of a station on every check."""
    neighbours = {i: set() for i in range(1, station_count + 1)}
    for u, v in connections:
        neighbours[u].add(v)
        neighbours[v].add(u)
    online = set(range(1, station_count + 1))
    results = []
    for op, station in queries:
        if op == 2:
            online.discard(station)
        elif op == 1:
            if station in online:
                results.append(station)
                continue
            seen, frontier = {station}, [station]
            while frontier:
                node = frontier.pop()
                for nxt in neighbours[node] - seen:
                    seen.add(nxt)
                    frontier.append(nxt)
            results.append(min(seen & online, default=-1))
    return results


def test_linear_grid_resolves_to_next_online_station():
    grid = Interconnection(5, [(1, 2), (2, 3), (3, 4), (4, 5)])
    grid.move_station_offline(1)
    assert grid.resolve_maintenance_check(1) == 2
    grid.move_station_offline(2)
    assert grid.resolve_maintenance_check(1) == 3


def test_isolated_station():
    grid = Interconnection(1)
    assert grid.resolve_maintenance_check(1) == 1
    grid.move_station_offline(1)
    assert grid.resolve_maintenance_check(1) == -1


def test_fully_offline_pair():
    grid = Interconnection(2, [(1, 2)])
    grid.move_station_offline(1)
    grid.move_station_offline(2)
    assert grid.resolve_maintenance_check(1) == -1
    assert grid.resolve_maintenance_check(2) == -1


def test_online_station_resolves_to_itself():
    grid = Interconnection(4, [(1, 2), (2, 3), (3, 4)])
    grid.move_station_offline(1)
    for station in (2, 3, 4):
        assert grid.resolve_maintenance_check(station) == station


def test_offline_station_never_resolved_again():
    grid = Interconnection(3, [(1, 2), (2, 3)])
    grid.move_station_offline(2)
    grid.move_station_offline(2)
    assert not grid.is_online(2)
    assert grid.resolve_maintenance_check(2) == 1
    grid.move_station_offline(1)
    assert grid.resolve_maintenance_check(2) == 3
    assert grid.resolve_maintenance_check(1) == 3
    assert np.array_equal(grid.online_stations(), [3])


def test_grids_are_independent():
    grid = Interconnection(6, [(1, 2), (2, 3), (4, 5)])
    assert grid.num_grids == 3
    assert grid.grid_of(1) == grid.grid_of(3)
    assert grid.grid_of(1) != grid.grid_of(4)
    grid.move_station_offline(1)
    grid.move_station_offline(4)
    assert grid.resolve_maintenance_check(4) == 5
    assert grid.resolve_maintenance_check(1) == 2
    assert grid.resolve_maintenance_check(6) == 6


def test_grid_membership_covers_every_station():
    grid = Interconnection(7, [(1, 5), (5, 7), (2, 3)])
    labels = grid.grid_labels()
    assert labels[0] == -1
    assert (labels[1:] >= 0).all()
    members = np.concatenate([grid.grid_members(i) for i in range(grid.num_grids)])
    assert np.array_equal(np.sort(members), np.arange(1, 8))
    assert np.array_equal(grid.grid_members(grid.grid_of(5)), [1, 5, 7])
    assert len(grid) == 7


def test_invalid_construction():
    with pytest.raises(ValueError):
        Interconnection(0)
    with pytest.raises(ValueError):
        Interconnection(3, [(1, 2)], traversal="unknown")
    with pytest.raises(IndexError):
        Interconnection(3, [(1, 4)])


def test_unvalidated_interconnection_behaves_for_valid_ids():
    grid = Interconnection(4, [(1, 2), (3, 4)], validate_ids=False)
    assert not grid.validate_ids
    assert grid.num_grids == 2
    grid.move_station_offline(1)
    grid.move_station_offline(1)
    assert grid.resolve_maintenance_check(1) == 2
    assert grid.resolve_maintenance_check(3) == 3
    grid.move_station_offline(2)
    assert grid.resolve_maintenance_check(2) == -1
    assert np.array_equal(grid.online_stations(), [3, 4])


def test_out_of_range_requests_fail_fast():
    grid = Interconnection(3, [(1, 2)])
    with pytest.raises(IndexError):
        grid.resolve_maintenance_check(4)
    with pytest.raises(IndexError):
        grid.move_station_offline(0)


@pytest.mark.parametrize(
    "station_count, connections, queries, expected",
    [
        (5, [[1, 2], [2, 3], [3, 4], [4, 5]],
         [[1, 3], [2, 1], [1, 1], [2, 2], [1, 2]], [3, 2, 3]),
        (3, [], [[1, 1], [2, 1], [1, 1]], [1, -1]),
        (1, [], [[1, 1], [2, 1], [2, 1], [2, 1], [2, 1]], [1]),
        (2, [[1, 2]],
         [[1, 1], [1, 2], [1, 2], [2, 2], [2, 2], [1, 1], [1, 2], [1, 1]],
         [1, 2, 2, 1, 1, 1]),
        (2, [[2, 1]],
         [[2, 1], [1, 2], [2, 1], [1, 1], [1, 2], [1, 1], [1, 1], [2, 1], [2, 2]],
         [2, 2, 2, 2, 2]),
        (6, [[2, 4], [1, 2], [5, 4], [4, 6], [2, 6], [3, 6], [4, 1]],
         [[1, 1], [1, 1], [2, 1], [2, 6], [1, 6], [1, 6], [1, 3], [1, 4],
          [1, 4], [2, 2], [1, 2], [2, 1], [1, 4], [2, 1], [1, 6], [1, 5],
          [1, 2], [2, 5], [1, 2], [2, 4]],
         [1, 1, 2, 2, 3, 4, 4, 3, 4, 3, 5, 3, 3]),
        (17, [[17, 9], [9, 14], [1, 3], [10, 12], [6, 2], [3, 12], [3, 15],
              [8, 11], [9, 4], [13, 1], [1, 8], [12, 8], [17, 7], [17, 16],
              [9, 12], [13, 3], [1, 16], [15, 12], [7, 14]],
         [[2, 10], [1, 12], [1, 13], [2, 1], [2, 7], [2, 3], [2, 11], [1, 9],
          [2, 11], [2, 4], [2, 5], [2, 7], [1, 14], [2, 1], [1, 1], [1, 7],
          [2, 4], [2, 3], [2, 14], [1, 1], [2, 15], [1, 15], [1, 6], [2, 15],
          [2, 10], [1, 1], [1, 17], [2, 9], [1, 12], [1, 17], [1, 4], [1, 5],
          [2, 7], [2, 8], [1, 14], [1, 16], [1, 3], [2, 17]],
         [12, 13, 9, 14, 8, 8, 8, 8, 6, 8, 17, 12, 17, 8, -1, 12, 16, 12]),
    ],
)
def test_process_queries(station_count, connections, queries, expected):
    assert process_queries(station_count, connections, queries) == expected


def test_process_queries_ignores_unknown_ops(caplog):
    with caplog.at_level(logging.WARNING):
        results = process_queries(2, [(1, 2)], [(3, 1), (2, 1), (0, 2), (1, 1)])
    assert results == [2]
    assert "unknown op" in caplog.text


def test_process_queries_can_reject_unknown_ops():
    with pytest.raises(ValueError):
        process_queries(2, [(1, 2)], [(3, 1)], unknown_ops="raise")
    with pytest.raises(ValueError):
        process_queries(2, [(1, 2)], [], unknown_ops="warn")


def test_query_op_codes():
    assert QueryOp.RESOLVE_CHECK == 1
    assert QueryOp.MOVE_OFFLINE == 2
    assert process_queries(1, [], [(QueryOp.RESOLVE_CHECK, 1)]) == [1]


@pytest.mark.parametrize("traversal", ["dfs", "bfs", "union_find"])
def test_matches_brute_force_on_random_queries(traversal):
    rng = np.random.default_rng(2024)
    station_count = 40
    connections = rng.integers(1, station_count + 1, size=(30, 2)).tolist()
    ops = rng.integers(1, 3, size=400)
    stations = rng.integers(1, station_count + 1, size=400)
    queries = list(zip(ops.tolist(), stations.tolist()))
    expected = reference_queries(station_count, connections, queries)
    assert process_queries(
        station_count, connections, queries, traversal=traversal
    ) == expected
