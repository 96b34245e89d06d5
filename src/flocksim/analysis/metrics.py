"""
Run metrics computed from a simulation's read-only query surface.
"""

from typing import Iterable, List, Optional, Tuple

import pygame

from ..core.config import ZERO_LENGTH


def order_parameter(velocities: Iterable[pygame.Vector2]) -> float:
    """
    Polarisation of a group: length of the mean heading.

    1.0 means every agent moves the same way, values near 0 mean headings
    cancel out. Stationary agents count in the population but add no heading.

    Args:
        velocities: Velocities of the agents

    Returns:
        Order parameter in [0, 1] (0 for an empty group)
    """
    total = pygame.Vector2(0, 0)
    count = 0
    for v in velocities:
        length = v.length()
        if length > ZERO_LENGTH:
            total += v / length
        count += 1
    if count == 0:
        return 0.0
    return total.length() / count


def average_speed(velocities: Iterable[pygame.Vector2]) -> float:
    """Mean speed of a group (0 for an empty group)."""
    speeds = [v.length() for v in velocities]
    if not speeds:
        return 0.0
    return sum(speeds) / len(speeds)


def prey_velocities(sim, tick: Optional[int] = None) -> List[pygame.Vector2]:
    """
    Velocities of the living prey.

    Args:
        sim: Simulation instance
        tick: Tick to read (defaults to the latest)

    Returns:
        Velocities of prey that are alive at that tick and still in history
    """
    if tick is None:
        return [a.velocity for a in sim.prey_agents() if a.alive]
    velocities = []
    for agent in sim.prey_agents():
        v = agent.velocity_at(tick)
        if v is not None and (agent.alive or agent.death_tick > tick):
            velocities.append(v)
    return velocities


def proportion_dead(sim) -> float:
    """Fraction of the initial prey population that has been killed."""
    if sim.prey_count == 0:
        return 0.0
    return (sim.prey_count - sim.prey_alive) / sim.prey_count


def death_positions(sim) -> List[Tuple[float, float]]:
    """Positions at which prey were killed, in agent index order."""
    positions = []
    for index in range(len(sim.agents)):
        status = sim.status(index)
        if not status.alive:
            positions.append(status.death_position)
    return positions


def prey_alive_series(sim) -> List[int]:
    """
    Number of living prey at every tick of the run.

    Args:
        sim: Simulation instance

    Returns:
        One count per clock tick, starting with tick 0
    """
    num_ticks = sim.clock.index + 1
    deaths_at = [0] * num_ticks
    for agent in sim.prey_agents():
        if not agent.alive:
            deaths_at[agent.death_tick] += 1
    series = []
    alive = sim.prey_count
    for tick in range(num_ticks):
        alive -= deaths_at[tick]
        series.append(alive)
    return series
