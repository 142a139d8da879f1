from typing import Iterable, List
import numpy as np
from pypowergrid.StationPool import StationPool

NO_STATION = -1


class PowerGrid:
    """
    A single power grid: the stations of one connected component, organised
    into a binary min-heap keyed by station id.

    Stations that go offline are not removed when they go offline. They are
    discarded lazily, the first time one of them reaches the root while the
    grid is queried for its smallest online id.
    """

    def __init__(self, pool: StationPool, index: int = 0):
        """
        Create an empty grid.

        Parameters
        ----------
        pool : StationPool
            The pool holding the online flags of the grid's stations.
        index : int, optional
            Position of this grid in its interconnection. Default is 0.
        """

        self.pool = pool
        self.index = index
        self.min_heap: List[int] = []
        self._members: List[int] = []

    def add_station(self, station_id: int) -> None:
        """
        Append a station to the grid and record the grid as its owner.

        The heap property is not maintained here; call :meth:`heapify` once
        all stations have been added.

        Parameters
        ----------
        station_id : int
            Id of the station to add.
        """

        self.pool.grid_index[station_id] = self.index
        self.min_heap.append(station_id)
        self._members.append(station_id)

    def extend(self, station_ids: Iterable[int]) -> None:
        """
        Add several stations at once, see :meth:`add_station`.

        Parameters
        ----------
        station_ids : Iterable[int]
            Ids of the stations to add.
        """

        for station_id in station_ids:
            self.add_station(int(station_id))

    def sift_down(self, index: int) -> None:
        """
        Move the station at ``index`` down the heap, swapping it with its
        smaller child until neither child has a smaller id.

        Parameters
        ----------
        index : int
            Slot to restore the heap property from.
        """

        heap = self.min_heap
        length = len(heap)
        while index >= 0:
            left = 2 * index + 1
            if left >= length:
                break
            right = left + 1
            smaller = left
            if right < length and heap[right] < heap[left]:
                smaller = right
            if heap[smaller] >= heap[index]:
                break
            heap[smaller], heap[index] = heap[index], heap[smaller]
            index = smaller

    def heapify(self) -> None:
        """Restore the heap property over the whole grid in linear time."""
        for i in range(len(self.min_heap) // 2 - 1, -1, -1):
            self.sift_down(i)

    def peek_minimum(self) -> int:
        """
        Return the id at the root of the heap without removing it.

        Returns
        -------
        int
            The smallest id still held by the heap, online or not.
        """

        if not self.min_heap:
            raise IndexError("peek from an empty grid")
        return self.min_heap[0]

    def pop_minimum(self) -> int:
        """
        Permanently discard the root of the heap.

        Returns
        -------
        int
            The discarded station id.
        """

        if not self.min_heap:
            raise IndexError("pop from an empty grid")
        root = self.min_heap[0]
        last = self.min_heap.pop()
        if self.min_heap:
            self.min_heap[0] = last
            self.sift_down(0)
        return root

    def query_minimum_active_id(self) -> int:
        """
        Find the online station with the smallest id in the grid.

        Offline stations found at the root are popped for good, so every
        station costs at most one removal over the lifetime of the grid.

        Returns
        -------
        int
            The smallest online id, or ``NO_STATION`` (-1) when every station
            is offline.
        """

        online = self.pool.online
        while self.min_heap:
            station_id = self.min_heap[0]
            if online[station_id]:
                return station_id
            self.pop_minimum()
        return NO_STATION

    @property
    def members(self) -> np.ndarray:
        """All stations of the grid, online or not, ascending."""
        return np.sort(np.asarray(self._members, dtype=np.int64))

    def __contains__(self, station_id) -> bool:
        return 1 <= station_id <= self.pool.size and (
            self.pool.grid_index[station_id] == self.index
        )

    def __len__(self) -> int:
        """Number of entries still held by the heap, stale ones included."""
        return len(self.min_heap)

    def __repr__(self) -> str:
        return (
            f"PowerGrid(index={self.index}, stations={len(self._members)}, "
            f"heap={len(self.min_heap)})"
        )
