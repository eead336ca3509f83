"""A* search over the walkable cells of the voxel grid."""

import heapq
import itertools
from typing import Optional

from worldsim.grid import GridLayer
from worldsim.spatial import GridCoord

_STEP_COST = 10


def _neighbors(coord: GridCoord) -> tuple[GridCoord, ...]:
    x, y, z = coord.x, coord.y, coord.z
    return (
        GridCoord(x + 1, y, z),
        GridCoord(x - 1, y, z),
        GridCoord(x, y + 1, z),
        GridCoord(x, y - 1, z),
        GridCoord(x, y, z + 1),
        GridCoord(x, y, z - 1),
    )


def find_path(
    grid: GridLayer, start: GridCoord, goal: GridCoord, max_iterations: int
) -> Optional[list[GridCoord]]:
    """Path from ``start`` to ``goal`` inclusive, moving in six directions.

    Returns None when no path exists or the search pops more than
    ``max_iterations`` nodes.
    """
    counter = itertools.count()
    open_set: list[tuple[int, int, int, GridCoord, Optional[GridCoord]]] = [
        (start.manhattan_distance(goal), next(counter), 0, start, None)
    ]
    came_from: dict[GridCoord, Optional[GridCoord]] = {}
    iterations = 0

    while open_set:
        _, _, g_cost, coord, parent = heapq.heappop(open_set)
        iterations += 1
        if iterations > max_iterations:
            return None
        if coord in came_from:
            continue
        came_from[coord] = parent

        if coord == goal:
            path = [coord]
            step = parent
            while step is not None:
                path.append(step)
                step = came_from[step]
            path.reverse()
            return path

        for neighbor in _neighbors(coord):
            if neighbor in came_from or not grid.is_walkable(neighbor):
                continue
            new_g = g_cost + _STEP_COST
            heapq.heappush(
                open_set,
                (new_g + neighbor.manhattan_distance(goal), next(counter), new_g, neighbor, coord),
            )

    return None


class HierarchicalPathfinding:
    """Pathfinding entry point over a grid, searching up to 1000 nodes."""

    def __init__(self, grid: GridLayer) -> None:
        self._grid = grid

    def find_hierarchical_path(
        self, start: GridCoord, goal: GridCoord
    ) -> Optional[list[GridCoord]]:
        """Path from ``start`` to ``goal``, or None."""
        return find_path(self._grid, start, goal, 1000)