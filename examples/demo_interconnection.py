import logging
import matplotlib.pyplot as plt
import numpy as np
from pypowergrid import Interconnection, plot_interconnection

logging.basicConfig(level=logging.DEBUG)

rng = np.random.default_rng(0)
connections = rng.integers(1, 31, size=(24, 2))

grid = Interconnection(30, connections)

for station in rng.choice(np.arange(1, 31), size=12, replace=False):
    grid.move_station_offline(int(station))

for station in range(1, 31):
    print(station, "->", grid.resolve_maintenance_check(station))

fig, ax = plt.subplots(figsize=(8, 8))
plot_interconnection(grid, ax=ax)

plt.show()
