import numpy as np


class PowerStation:
    """A view onto one slot of a :class:`StationPool`."""

    __slots__ = ("_pool", "id")

    def __init__(self, pool: "StationPool", station_id: int):
        self._pool = pool
        self.id = station_id

    @property
    def grid(self) -> int:
        return int(self._pool.grid_index[self.id])

    @grid.setter
    def grid(self, grid_index: int) -> None:
        self._pool.grid_index[self.id] = grid_index

    @property
    def online(self) -> bool:
        return bool(self._pool.online[self.id])

    def move_offline(self) -> None:
        # offline is permanent, there is no way back
        self._pool.online[self.id] = False

    def __eq__(self, other) -> bool:
        if not isinstance(other, PowerStation):
            return NotImplemented
        return self._pool is other._pool and self.id == other.id

    def __hash__(self) -> int:
        return hash((id(self._pool), self.id))

    def __repr__(self) -> str:
        state = "online" if self.online else "offline"
        return f"PowerStation(id={self.id}, grid={self.grid}, {state})"


class StationPool:
    """
    Contiguous pool of power stations addressed by their 1-based ids.

    Station state is held column-wise in numpy arrays sized ``size + 1`` so
    that ``station_id`` indexes directly; slot 0 is reserved and never online.
    """

    def __init__(self, size: int):
        """
        Allocate ``size`` station slots.

        Parameters
        ----------
        size : int
            Number of stations, addressable as ``1..size``.
        """

        if size < 1:
            raise ValueError("station_count must be ≥ 1")
        self.size = int(size)
        self.grid_index = np.full(self.size + 1, -1, dtype=np.int64)
        self.online = np.ones(self.size + 1, dtype=bool)
        self.online[0] = False

    def __len__(self) -> int:
        return self.size

    def __contains__(self, station_id) -> bool:
        return 1 <= station_id <= self.size

    def check_id(self, station_id: int) -> None:
        """Raise ``IndexError`` when ``station_id`` is outside ``[1, size]``."""
        if not 1 <= station_id <= self.size:
            raise IndexError(
                f"station id {station_id} out of range [1, {self.size}]"
            )

    def get(self, station_id: int) -> PowerStation:
        """
        Fetch the station with the given id.

        Parameters
        ----------
        station_id : int
            Id in ``[1, size]``. Ids outside that range are not checked here.

        Returns
        -------
        PowerStation
            A view bound to this pool.
        """

        return PowerStation(self, station_id)

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

        return bool(self.online[station_id])

    def move_offline(self, station_id: int) -> None:
        """
        Move a station offline for good.

        Parameters
        ----------
        station_id : int
            The station to move offline.
        """

        self.online[station_id] = False

    def online_ids(self) -> np.ndarray:
        """Ids of all stations that are still online, ascending."""
        return np.flatnonzero(self.online)
