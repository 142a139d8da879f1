from typing import Dict, Iterable, List, Tuple


class GridClosureTracker:
    """
    A Union-Find (Disjoint Set) over the stations ``1..num_stations`` with
    explicit tracking of the grids they close into.

    Slot 0 is allocated but never joined to anything, so station ids index
    the internal arrays directly.
    """

    def __init__(self, num_stations: int):
        """
        Initialise every station as its own grid.

        Parameters
        ----------
        num_stations : int
            Number of stations tracked.
        """

        self.num_stations = num_stations
        self.parent = list(range(num_stations + 1))
        self.rank = [0] * (num_stations + 1)  # Rank array to keep trees shallow
        self.grids: Dict[int, List[int]] = {
            i: [i] for i in range(1, num_stations + 1)
        }

    def find(self, station: int) -> int:
        """
        Find the root station of the grid containing ``station``.

        Parameters
        ----------
        station : int
            The station whose root is looked up.

        Returns
        -------
        int
            The root station of its grid.
        """

        root = station
        while self.parent[root] != root:
            root = self.parent[root]
        # compress the path walked
        while self.parent[station] != root:
            self.parent[station], station = root, self.parent[station]
        return root

    def union(self, station1: int, station2: int) -> None:
        """
        Merge the grids containing ``station1`` and ``station2``.

        Parameters
        ----------
        station1 : int
            First station.
        station2 : int
            Second station.
        """

        root1 = self.find(station1)
        root2 = self.find(station2)
        if root1 == root2:
            return

        # Attach the lower ranked tree under the higher ranked one
        if self.rank[root1] < self.rank[root2]:
            root1, root2 = root2, root1
        self.parent[root2] = root1
        if self.rank[root1] == self.rank[root2]:
            self.rank[root1] += 1
        self.grids[root1].extend(self.grids.pop(root2))

    def add_connection(self, station1: int, station2: int) -> None:
        """Connect two stations, merging their grids."""
        self.union(station1, station2)

    def add_connections(self, connections: Iterable[Tuple[int, int]]) -> None:
        """
        Connect every pair of stations in ``connections``.

        Parameters
        ----------
        connections : Iterable[Tuple[int, int]]
            Undirected connections between stations.
        """

        for station1, station2 in connections:
            self.union(int(station1), int(station2))

    def is_connected(self, station1: int, station2: int) -> bool:
        """
        Check whether two stations belong to the same grid.

        Parameters
        ----------
        station1 : int
            First station.
        station2 : int
            Second station.

        Returns
        -------
        bool
            True if both stations share a grid, False otherwise.
        """

        return self.find(station1) == self.find(station2)

    def __iter__(self):
        """
        Iterate over the current grids.

        Returns
        -------
        Iterator[List[int]]
            An iterator over lists of station ids.
        """

        return iter(self.grids.values())

    def __len__(self) -> int:
        """Number of grids currently tracked."""
        return len(self.grids)
