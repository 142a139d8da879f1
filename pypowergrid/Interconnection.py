"""
Power grid interconnection
==========================

A power grid interconnection is a fixed set of power stations ``1..n`` wired
together by undirected connections. The stations split into *power grids*
(connected components) once, at construction time, and the wiring never
changes afterwards. What does change is station state: a station can be moved
offline, permanently.

A *maintenance check* sent to a station is resolved by the station itself
while it is online. Once it is offline the check goes to the online station
with the smallest id in the same grid, or resolves to ``-1`` when the whole
grid is offline.

This module provides:

* the :class:`Interconnection` class, which routes checks and offline moves to
  the right station and grid; and
* :func:`process_queries`, which runs a batch of ``(op, station_id)`` queries
  against a freshly built interconnection.
"""

import logging
from enum import IntEnum
from typing import Iterable, List, Literal, Sequence, Tuple
import numpy as np
from pypowergrid.GridBuilder import (
    Traversal,
    as_connection_array,
    build_grids,
    discover_grids,
)
from pypowergrid.PowerGrid import PowerGrid
from pypowergrid.StationPool import PowerStation, StationPool

logger = logging.getLogger(__name__)


class QueryOp(IntEnum):
    RESOLVE_CHECK = 1
    MOVE_OFFLINE = 2


RESOLVE_CHECK = QueryOp.RESOLVE_CHECK
MOVE_OFFLINE = QueryOp.MOVE_OFFLINE


class Interconnection:
    """Route maintenance checks and offline moves across a set of power grids."""

    def __init__(
        self,
        station_count: int,
        connections: Sequence[Tuple[int, int]] = (),
        traversal: Traversal = "dfs",
        validate_ids: bool = True,
    ):
        """Build the interconnection and discover its grids.

        Parameters
        ----------
        station_count : int
            Number of stations, identified as ``1..station_count``.
        connections : Sequence[Tuple[int, int]], optional
            Undirected connections between stations. Default is none.
        traversal : {"dfs", "bfs", "union_find"}, optional
            Strategy used to discover grids. Default is "dfs".
        validate_ids : bool, default True
            If True, station ids in connections and in later requests are
            checked against ``[1, station_count]`` and an ``IndexError`` is
            raised on violation. If False the checks are skipped.

        """
        self.validate_ids = validate_ids
        self.pool = StationPool(station_count)

        edges = as_connection_array(connections, station_count, validate_ids)
        self.connections = edges
        self.grids: List[PowerGrid] = build_grids(
            self.pool, discover_grids(station_count, edges, traversal)
        )
        logger.debug(
            "built interconnection of %d stations, %d connections, %d grids",
            station_count,
            len(edges),
            len(self.grids),
        )

    def _station(self, station_id: int) -> PowerStation:
        if self.validate_ids:
            self.pool.check_id(station_id)
        return self.pool.get(station_id)

    def resolve_maintenance_check(self, station_id: int) -> int:
        """
        Resolve a maintenance check sent to a station.

        Parameters
        ----------
        station_id : int
            The station the check is sent to.

        Returns
        -------
        int
            ``station_id`` itself while it is online, otherwise the smallest
            online id in its grid, or ``NO_STATION`` (-1) if the grid has no
            online station.
        """

        station = self._station(station_id)
        if station.online:
            return int(station_id)
        return self.grids[station.grid].query_minimum_active_id()

    def move_station_offline(self, station_id: int) -> None:
        """
        Move a station offline. Moving an offline station again has no effect.

        Parameters
        ----------
        station_id : int
            The station to move offline.
        """

        self._station(station_id).move_offline()

    def is_online(self, station_id: int) -> bool:
        """
        Check whether a station is online.

        Parameters
        ----------
        station_id : int
            The station to check.

        Returns
        -------
        bool
            True until the station has been moved offline.
        """

        return self._station(station_id).online

    def grid_of(self, station_id: int) -> int:
        """Index of the grid the station belongs to."""
        return self._station(station_id).grid

    def grid_members(self, grid_index: int) -> np.ndarray:
        """
        Stations of one grid.

        Parameters
        ----------
        grid_index : int
            Index of the grid, as returned by :meth:`grid_of`.

        Returns
        -------
        np.ndarray
            Member ids, online or not, ascending.
        """

        return self.grids[grid_index].members

    def grid_labels(self) -> np.ndarray:
        """
        Grid index of every station.

        Returns
        -------
        np.ndarray
            Array of length ``station_count + 1``; entry 0 is -1.
        """

        return self.pool.grid_index.copy()

    def online_stations(self) -> np.ndarray:
        """
        Stations that are still online.

        Returns
        -------
        np.ndarray
            Online station ids, ascending.
        """

        return self.pool.online_ids()

    @property
    def num_grids(self) -> int:
        """
        Number of grids in the interconnection.

        Returns
        -------
        int
            The number of connected components found at construction.
        """

        return len(self.grids)

    def __len__(self) -> int:
        """Number of stations in the interconnection."""
        return self.pool.size

    def __repr__(self) -> str:
        return (
            f"Interconnection(stations={self.pool.size}, grids={len(self.grids)})"
        )


def process_queries(
    station_count: int,
    connections: Sequence[Tuple[int, int]],
    queries: Iterable[Tuple[int, int]],
    traversal: Traversal = "dfs",
    unknown_ops: Literal["ignore", "raise"] = "ignore",
) -> List[int]:
    """
    Build an interconnection and run a batch of queries against it.

    Parameters
    ----------
    station_count : int
        Number of stations.
    connections : Sequence[Tuple[int, int]]
        Undirected connections between stations.
    queries : Iterable[Tuple[int, int]]
        ``(op, station_id)`` pairs. ``op`` 1 resolves a maintenance check,
        ``op`` 2 moves the station offline.
    traversal : {"dfs", "bfs", "union_find"}, optional
        Grid discovery strategy. Default is "dfs".
    unknown_ops : {"ignore", "raise"}, optional
        What to do with any other ``op``: skip it with a warning, or raise
        ``ValueError``. Default is "ignore".

    Returns
    -------
    List[int]
        One result per maintenance check, in query order.
    """

    if unknown_ops not in {"ignore", "raise"}:
        raise ValueError("unknown_ops must be 'ignore' or 'raise'")

    interconnection = Interconnection(station_count, connections, traversal)
    results = []
    for op, station_id in queries:
        if op == RESOLVE_CHECK:
            results.append(interconnection.resolve_maintenance_check(station_id))
        elif op == MOVE_OFFLINE:
            interconnection.move_station_offline(station_id)
        elif unknown_ops == "raise":
            raise ValueError(f"unknown query op {op!r}")
        else:
            logger.warning("skipping query with unknown op %r", op)
    return results
