"""
Grid discovery
==============

Splits a power grid interconnection into its grids: the connected components
of the undirected graph formed by the stations ``1..n`` and the connections
between them.

Three discovery strategies are available and all of them produce the same
partition, differing only in the order stations are listed within a grid:

* ``"dfs"`` walks the adjacency with an explicit stack;
* ``"bfs"`` walks it with a queue;
* ``"union_find"`` merges connections one at a time with a
  :class:`~pypowergrid.GridClosure.GridClosureTracker`.

The traversal strategies read neighbours from a ``scipy.sparse`` CSR matrix so
that large interconnections are stored compactly.
"""

import logging
from collections import deque
from typing import List, Literal, Sequence
import numpy as np
from scipy.sparse import csr_matrix
from pypowergrid.GridClosure import GridClosureTracker
from pypowergrid.PowerGrid import PowerGrid
from pypowergrid.StationPool import StationPool

logger = logging.getLogger(__name__)

Traversal = Literal["dfs", "bfs", "union_find"]
TRAVERSALS = ("dfs", "bfs", "union_find")


def as_connection_array(
    connections, station_count: int, validate_ids: bool = True
) -> np.ndarray:
    """
    Normalise a connection list into an ``(m, 2)`` integer array.

    Parameters
    ----------
    connections : array_like
        Pairs ``(u, v)`` of connected station ids.
    station_count : int
        Number of stations in the interconnection.
    validate_ids : bool, default True
        If True, every id must be a whole number in ``[1, station_count]``;
        non-integral ids raise ``ValueError``, out-of-range ids
        ``IndexError``.

    Returns
    -------
    np.ndarray
        An ``(m, 2)`` array of station ids.
    """

    raw = np.asarray(connections)
    if raw.size == 0:
        return np.empty((0, 2), dtype=np.int64)
    if raw.ndim != 2 or raw.shape[1] != 2:
        raise ValueError("connections must be a sequence of (u, v) pairs")
    if validate_ids:
        # floats are accepted only when they hold whole numbers
        integral = raw.dtype.kind in "iu" or (
            raw.dtype.kind == "f" and np.array_equal(raw, np.floor(raw))
        )
        if not integral:
            raise ValueError("station ids must be integers")
        bad = (raw < 1) | (raw > station_count)
        if bad.any():
            station_id = raw[bad][0]
            raise IndexError(
                f"station id {station_id} out of range [1, {station_count}]"
            )
    return raw.astype(np.int64)


def build_adjacency(station_count: int, connections) -> csr_matrix:
    """
    Build the symmetric adjacency matrix of the interconnection.

    Parameters
    ----------
    station_count : int
        Number of stations ``n``.
    connections : array_like
        An ``(m, 2)`` array of undirected connections.

    Returns
    -------
    scipy.sparse.csr_matrix
        An ``(n + 1, n + 1)`` matrix; row 0 is empty so ids index rows directly.
    """

    edges = np.asarray(connections, dtype=np.int64).reshape(-1, 2)
    rows = np.concatenate([edges[:, 0], edges[:, 1]])
    cols = np.concatenate([edges[:, 1], edges[:, 0]])
    data = np.ones(len(rows), dtype=np.int8)
    size = station_count + 1
    return csr_matrix((data, (rows, cols)), shape=(size, size))


def _traverse(adjacency: csr_matrix, station_count: int, breadth_first: bool):
    indptr, indices = adjacency.indptr, adjacency.indices
    visited = np.zeros(station_count + 1, dtype=bool)
    grids = []
    for start in range(1, station_count + 1):
        if visited[start]:
            continue
        grid = []
        if breadth_first:
            visited[start] = True
            queue = deque([start])
            while queue:
                station = queue.popleft()
                grid.append(station)
                for neighbour in indices[indptr[station]:indptr[station + 1]]:
                    if not visited[neighbour]:
                        visited[neighbour] = True
                        queue.append(int(neighbour))
        else:
            stack = [start]
            while stack:
                station = stack.pop()
                if visited[station]:
                    continue
                visited[station] = True
                grid.append(station)
                for neighbour in indices[indptr[station]:indptr[station + 1]]:
                    if not visited[neighbour]:
                        stack.append(int(neighbour))
        grids.append(grid)
    return grids


def discover_grids(
    station_count: int,
    connections,
    traversal: Traversal = "dfs",
) -> List[List[int]]:
    """
    Partition the stations ``1..station_count`` into grids.

    Parameters
    ----------
    station_count : int
        Number of stations.
    connections : array_like
        An ``(m, 2)`` array of undirected connections.
    traversal : {"dfs", "bfs", "union_find"}, optional
        Discovery strategy. Default is "dfs".

    Returns
    -------
    List[List[int]]
        One list of station ids per grid, in discovery order. Every station
        appears in exactly one list; stations without connections form
        singleton grids.
    """

    if traversal not in TRAVERSALS:
        raise ValueError("traversal must be 'dfs', 'bfs' or 'union_find'")

    if traversal == "union_find":
        tracker = GridClosureTracker(station_count)
        tracker.add_connections(np.asarray(connections).reshape(-1, 2))
        grids = list(tracker)
    else:
        adjacency = build_adjacency(station_count, connections)
        grids = _traverse(adjacency, station_count, traversal == "bfs")

    logger.debug(
        "discovered %d grids over %d stations (largest has %d)",
        len(grids),
        station_count,
        max((len(g) for g in grids), default=0),
    )
    return grids


def build_grids(pool: StationPool, grid_stations: Sequence[Sequence[int]]):
    """
    Create one heapified :class:`PowerGrid` per station group.

    Parameters
    ----------
    pool : StationPool
        The pool the stations live in; each station's grid index is set here.
    grid_stations : Sequence[Sequence[int]]
        Station groups as returned by :func:`discover_grids`.

    Returns
    -------
    List[PowerGrid]
        Grids in the same order as ``grid_stations``.
    """

    grids = []
    for index, stations in enumerate(grid_stations):
        grid = PowerGrid(pool, index)
        grid.extend(stations)
        grids.append(grid)
    for grid in grids:
        grid.heapify()
    return grids
