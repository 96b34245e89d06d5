"""
Base Agent class for prey and predators.
"""

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Tuple

import numpy as np
import pygame

from ..boundary import BoundaryPolicy
from ..config import MIN_NEIGHBOR_DISTANCE, SENSOR_NOISE_STD, SpeciesParams
from ..rng import random_heading, random_position, sensor_noise
from ..vector import clamp_length


class Species(str, Enum):
    PREY = "prey"
    PREDATOR = "predator"


@dataclass(frozen=True)
class AgentStatus:
    """Read-only view of an agent's lifecycle state."""

    alive: bool
    death_tick: Optional[int] = None
    death_position: Optional[Tuple[float, float]] = None


class Agent:
    """
    Base class for all agents in the simulation.

    Keeps the kinematic history (one position and one velocity per tick while
    alive), the species parameters and the alive/dead status. Subclasses
    provide the species steering force through compute_force().
    """

    species: Species

    def __init__(self, params: SpeciesParams, position: pygame.Vector2, velocity: pygame.Vector2,
                 history_limit: Optional[int] = None):
        """
        Initialize an agent.

        Args:
            params: Species parameters
            position: Initial position
            velocity: Initial velocity
            history_limit: Number of ticks of history to retain (None keeps all)
        """
        self.params = params
        self.positions = deque([pygame.Vector2(position)], maxlen=history_limit)
        self.velocities = deque([pygame.Vector2(velocity)], maxlen=history_limit)
        self.alive = True
        self.death_tick: Optional[int] = None
        self.death_position: Optional[pygame.Vector2] = None
        self.cooldown = 0.0

        # Running summaries, kept even when the history is truncated
        self.samples = 1
        self.distance_travelled = 0.0
        self.speed_total = self.velocities[-1].length()

    @classmethod
    def spawn(cls, params: SpeciesParams, domain_length: float, rng: np.random.Generator,
              history_limit: Optional[int] = None) -> "Agent":
        """
        Create an agent at a random position with a random unit heading.

        Args:
            params: Species parameters
            domain_length: Side of the square domain
            rng: Random generator
            history_limit: Number of ticks of history to retain

        Returns:
            New agent
        """
        position = random_position(rng, domain_length)
        velocity = random_heading(rng)
        return cls(params, position, velocity, history_limit)

    @property
    def position(self) -> pygame.Vector2:
        """Latest position."""
        return self.positions[-1]

    @property
    def velocity(self) -> pygame.Vector2:
        """Latest velocity."""
        return self.velocities[-1]

    @property
    def first_tick(self) -> int:
        """Tick index of the oldest retained history entry."""
        return self.samples - len(self.positions)

    @property
    def mean_speed(self) -> float:
        return self.speed_total / self.samples

    def position_at(self, tick: int) -> Optional[pygame.Vector2]:
        """Position at a tick, or None if outside the retained history."""
        offset = tick - self.first_tick
        if 0 <= offset < len(self.positions):
            return self.positions[offset]
        return None

    def velocity_at(self, tick: int) -> Optional[pygame.Vector2]:
        """Velocity at a tick, or None if outside the retained history."""
        offset = tick - self.first_tick
        if 0 <= offset < len(self.velocities):
            return self.velocities[offset]
        return None

    def status(self) -> AgentStatus:
        if self.alive:
            return AgentStatus(alive=True)
        return AgentStatus(
            alive=False,
            death_tick=self.death_tick,
            death_position=(self.death_position.x, self.death_position.y),
        )

    def update(self, force: pygame.Vector2, dt: float) -> None:
        """
        Integrate one tick and append the new state to the history.

        Args:
            force: Steering force (acceleration) for this tick
            dt: Time step
        """
        velocity = clamp_length(self.velocity + force * dt, self.params.max_velocity)
        position = self.position + velocity * dt
        self.positions.append(position)
        self.velocities.append(velocity)
        self.samples += 1
        self.distance_travelled += velocity.length() * dt
        self.speed_total += velocity.length()

    def apply_boundary(self, boundary: BoundaryPolicy) -> None:
        """Replace the newest state with the boundary policy's correction."""
        position, velocity = boundary.correct(self.position, self.velocity)
        self.speed_total += velocity.length() - self.velocity.length()
        self.positions[-1] = position
        self.velocities[-1] = velocity

    def kill(self, tick: int) -> None:
        """
        Mark the agent dead at a tick, freezing its history.

        Args:
            tick: Index of the tick the kill happened on
        """
        if not self.alive:
            return
        self.alive = False
        self.death_tick = tick
        self.death_position = pygame.Vector2(self.position)

    def reset_cooldown(self) -> None:
        pass

    def decrease_cooldown(self, dt: float) -> None:
        pass

    def visible(self, candidates: Iterable["Agent"],
                boundary: BoundaryPolicy) -> Iterator[Tuple["Agent", pygame.Vector2, float]]:
        """
        Filter candidates down to the agents inside the vision radius.

        Coincident agents (including the agent itself) are skipped.

        Args:
            candidates: Agents from the grid scan window
            boundary: Policy supplying the offset convention

        Yields:
            Tuples of (other agent, offset to it, distance to it)
        """
        origin = self.position
        radius = self.params.vision_radius
        for other in candidates:
            delta = boundary.offset(origin, other.position)
            dist = delta.length()
            if MIN_NEIGHBOR_DISTANCE < dist < radius:
                yield other, delta, dist

    def compute_force(self, candidates: List["Agent"], boundary: BoundaryPolicy,
                      rng: np.random.Generator) -> pygame.Vector2:
        """
        Calculate this tick's steering force.

        Args:
            candidates: Agents from the grid scan window
            boundary: Boundary policy
            rng: Random generator for sensor noise

        Returns:
            Clamped steering force
        """
        raise NotImplementedError

    def finish_force(self, force: pygame.Vector2, boundary: BoundaryPolicy,
                     rng: np.random.Generator) -> pygame.Vector2:
        """
        Add boundary bias and sensor noise, then clamp to max acceleration.

        The bias is scaled by the force magnitude so that it dominates inside
        the boundary band.

        Args:
            force: Combined flocking force
            boundary: Boundary policy supplying the bias
            rng: Random generator for sensor noise

        Returns:
            Final steering force
        """
        bias = boundary.bias(self.position)
        force = force + bias * (force.length() + self.params.boundary_weight)
        force = force + sensor_noise(rng, SENSOR_NOISE_STD)
        return clamp_length(force, self.params.max_acceleration)

    def __repr__(self) -> str:
        state = "alive" if self.alive else f"dead@{self.death_tick}"
        return f"{type(self).__name__}(pos=({self.position.x:.3f}, {self.position.y:.3f}), {state})"
