"""
Headless prey/predator simulation driven by the spatial grid.
"""

import math
from typing import Dict, List, Optional, Tuple

import numpy as np
import pygame

from ..core.agents import Agent, AgentStatus, Predator, Prey, Species
from ..core.boundary import make_boundary
from ..core.clock import SimulationClock
from ..core.config import SimulationConfig
from ..core.rng import create_rng
from ..core.spatial_grid import SpatialGrid
from .predation import PredationRule


class Simulation:
    """
    One self-contained simulation instance.

    Each tick runs in two phases. Phase 1 computes every living agent's force
    from the current state, then integrates all agents and applies the
    boundary correction. Phase 2 reindexes the grid and applies predation.
    The clock advances last.

    All randomness comes from the instance's own generator, so instances share
    no mutable state and the same seed reproduces the same trajectories.
    """

    def __init__(self, config: SimulationConfig, rng: Optional[np.random.Generator] = None):
        """
        Initialize the simulation.

        Args:
            config: Simulation configuration
            rng: Random generator (defaults to one seeded from config.seed)

        Raises:
            InvalidConfiguration: If the configuration is not runnable
        """
        config.validate()
        self.config = config
        self.rng = rng if rng is not None else create_rng(config.seed)

        self.domain_length = config.domain_length

        self.clock = SimulationClock(config.dt, config.end_time, config.history_limit)
        self.boundary = make_boundary(config.boundary, config.domain_length, config.soft_range)
        self.grid = SpatialGrid(config.prey.vision_radius, config.domain_length)
        self.vision_ratio = math.ceil(config.predator.vision_radius / config.prey.vision_radius)
        self.predation = PredationRule()

        self.agents: List[Agent] = []
        # At most one entry per prey
        self.kill_log: List[Tuple[int, int, int]] = []
        self._spawn_agents()

    @classmethod
    def build(cls, config: SimulationConfig, rng: Optional[np.random.Generator] = None) -> "Simulation":
        """Build a ready-to-run simulation from a configuration."""
        return cls(config, rng)

    def _spawn_agents(self) -> None:
        """Spawn prey then predators and index them in the grid."""
        config = self.config
        for _ in range(config.prey_count):
            self.add_agent(Prey.spawn(config.prey, self.domain_length, self.rng, config.history_limit))
        for _ in range(config.predator_count):
            self.add_agent(Predator.spawn(config.predator, self.domain_length, self.rng, config.history_limit))

    def add_agent(self, agent: Agent) -> int:
        """
        Register an agent and insert it into the grid.

        Args:
            agent: Agent to add

        Returns:
            Stable index of the agent

        Raises:
            RuntimeError: If the simulation has already been stepped
        """
        if self.clock.index > 0:
            raise RuntimeError("agents can only be added before the first step")
        index = len(self.agents)
        self.agents.append(agent)
        self.grid.insert(agent.position, index)
        return index

    def ring_radius(self, agent: Agent) -> int:
        """Scan window ring radius for an agent's species."""
        if agent.species is Species.PREDATOR:
            return self.vision_ratio
        return 1

    def _position_of(self, index: int) -> pygame.Vector2:
        return self.agents[index].position

    def step(self) -> List[Tuple[int, int]]:
        """
        Advance the simulation by exactly one tick.

        Returns:
            List of (predator index, prey index) kills made this tick
        """
        agents = self.agents
        grid = self.grid

        forces: Dict[int, pygame.Vector2] = {}
        for (ci, cj), cell in grid.iter_cells():
            for idx in cell.members:
                agent = agents[idx]
                window = grid.neighbors_window(ci, cj, self.ring_radius(agent))
                forces[idx] = agent.compute_force([agents[j] for j in window], self.boundary, self.rng)

        dt = self.clock.dt
        for idx, force in forces.items():
            agent = agents[idx]
            agent.update(force, dt)
            agent.apply_boundary(self.boundary)
            agent.decrease_cooldown(dt)

        grid.reindex(self._position_of)

        tick = self.clock.index + 1
        kills = self.predation.apply(agents, grid, self.boundary, self.ring_radius, tick)
        for predator_idx, prey_idx in kills:
            self.kill_log.append((tick, predator_idx, prey_idx))

        self.clock.advance()
        return kills

    def run(self) -> None:
        """Step until the clock reaches its end time."""
        while self.clock.current_time < self.clock.end_time:
            self.step()

    # Read-only queries

    def agent(self, index: int) -> Agent:
        return self.agents[index]

    def position_history(self, index: int) -> List[Tuple[float, float]]:
        """Retained positions of an agent as (x, y) tuples."""
        return [(p.x, p.y) for p in self.agents[index].positions]

    def velocity_history(self, index: int) -> List[Tuple[float, float]]:
        """Retained velocities of an agent as (x, y) tuples."""
        return [(v.x, v.y) for v in self.agents[index].velocities]

    def status(self, index: int) -> AgentStatus:
        return self.agents[index].status()

    def prey_agents(self) -> List[Agent]:
        return [a for a in self.agents if a.species is Species.PREY]

    def predator_agents(self) -> List[Agent]:
        return [a for a in self.agents if a.species is Species.PREDATOR]

    @property
    def prey_count(self) -> int:
        """Initial prey population, dead or alive."""
        return sum(1 for a in self.agents if a.species is Species.PREY)

    @property
    def predator_count(self) -> int:
        return sum(1 for a in self.agents if a.species is Species.PREDATOR)

    @property
    def prey_alive(self) -> int:
        return sum(1 for a in self.agents if a.species is Species.PREY and a.alive)

    @property
    def predators_alive(self) -> int:
        return sum(1 for a in self.agents if a.species is Species.PREDATOR and a.alive)

    def alive_counts(self) -> Tuple[int, int]:
        """
        Count living agents per species.

        Returns:
            Tuple of (prey alive, predators alive)
        """
        return self.prey_alive, self.predators_alive
