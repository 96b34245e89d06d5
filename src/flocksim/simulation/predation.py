"""
Predation rule: predators kill prey within strike distance.
"""

from typing import Callable, List, Sequence, Tuple

from ..core.agents import Agent, Species
from ..core.boundary import BoundaryPolicy
from ..core.config import STRIKE_DISTANCE
from ..core.spatial_grid import SpatialGrid


class PredationRule:
    """
    Deterministic kill detection.

    Predators are visited in grid-cell order. Each predator scans its force
    window and kills the first living prey closer than the strike distance,
    at most one kill per predator per tick.
    """

    def __init__(self, strike_distance: float = STRIKE_DISTANCE):
        """
        Initialize the rule.

        Args:
            strike_distance: Maximum predator-prey distance for a kill
        """
        self.strike_distance = strike_distance

    def apply(self, agents: Sequence[Agent], grid: SpatialGrid, boundary: BoundaryPolicy,
              ring_radius: Callable[[Agent], int], tick: int) -> List[Tuple[int, int]]:
        """
        Scan every living predator and apply kills.

        Killed prey are marked dead at `tick` and removed from their grid cell.

        Args:
            agents: All agents, indexed as in the grid
            grid: Spatial grid, already reindexed for this tick
            boundary: Policy supplying the distance convention
            ring_radius: Scan window ring radius for an agent
            tick: Index of the tick the kills belong to

        Returns:
            List of (predator index, prey index) kills in scan order
        """
        kills = []
        for (ci, cj), cell in grid.iter_cells():
            for idx in list(cell.members):
                predator = agents[idx]
                if predator.species is not Species.PREDATOR:
                    continue
                for other_idx in grid.neighbors_window(ci, cj, ring_radius(predator)):
                    prey = agents[other_idx]
                    if prey.species is not Species.PREY or not prey.alive:
                        continue
                    if boundary.distance(predator.position, prey.position) < self.strike_distance:
                        grid.remove(prey.position, other_idx)
                        prey.kill(tick)
                        predator.reset_cooldown()
                        kills.append((idx, other_idx))
                        break
        return kills
