from pypowergrid.StationPool import StationPool, PowerStation
from pypowergrid.PowerGrid import NO_STATION, PowerGrid
from pypowergrid.GridClosure import GridClosureTracker
from pypowergrid.GridBuilder import build_adjacency, build_grids, discover_grids
from pypowergrid.Interconnection import (
    Interconnection,
    QueryOp,
    process_queries,
)
from pypowergrid.plotting import grid_layout, plot_interconnection

__all__ = [
    "StationPool",
    "PowerStation",
    "NO_STATION",
    "PowerGrid",
    "GridClosureTracker",
    "build_adjacency",
    "build_grids",
    "discover_grids",
    "Interconnection",
    "QueryOp",
    "process_queries",
    "grid_layout",
    "plot_interconnection",
]
