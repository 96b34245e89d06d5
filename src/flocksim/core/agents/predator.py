"""
Predator agent class implementing pursuit of prey.
"""

from typing import List

import numpy as np
import pygame

from ..boundary import BoundaryPolicy
from ..config import PredatorParams
from .base import Agent, Species


class Predator(Agent):
    """
    A predator agent that chases the nearest prey.

    Prey are pulled in with an inverse-cube weight, so the closest prey
    dominates the pursuit. Other predators contribute alignment and an
    inverse-square separation.
    """

    species = Species.PREDATOR
    params: PredatorParams

    def __init__(self, params: PredatorParams, position: pygame.Vector2, velocity: pygame.Vector2,
                 history_limit=None):
        """
        Initialize a predator.

        Args:
            params: Predator parameters
            position: Initial position
            velocity: Initial velocity
            history_limit: Number of ticks of history to retain
        """
        super().__init__(params, position, velocity, history_limit)
        self.cooldown = params.kill_cooldown
        self.kills = 0

    def reset_cooldown(self) -> None:
        """Restart the kill cooldown after a strike."""
        self.cooldown = self.params.kill_cooldown
        self.kills += 1

    def decrease_cooldown(self, dt: float) -> None:
        self.cooldown = max(0.0, self.cooldown - dt)

    def compute_force(self, candidates: List[Agent], boundary: BoundaryPolicy,
                      rng: np.random.Generator) -> pygame.Vector2:
        """
        Calculate the predator steering force.

        Args:
            candidates: Agents from the predator scan window
            boundary: Boundary policy
            rng: Random generator for sensor noise

        Returns:
            Clamped steering force
        """
        velocity = self.velocity

        prey_attraction = pygame.Vector2(0, 0)
        prey_seen = 0

        alignment = pygame.Vector2(0, 0)
        repulsion = pygame.Vector2(0, 0)
        predators_seen = 0

        for other, delta, dist in self.visible(candidates, boundary):
            if other.species is Species.PREY:
                prey_attraction += delta / (dist * dist * dist)
                prey_seen += 1
            else:
                alignment += other.velocity - velocity
                repulsion += delta / (dist * dist)
                predators_seen += 1

        if prey_seen:
            prey_attraction /= prey_seen
        if predators_seen:
            alignment /= predators_seen
            repulsion /= predators_seen

        p = self.params
        force = (
            prey_attraction * p.prey_attraction
            + alignment * p.predator_alignment
            - repulsion * p.predator_repulsion
        )
        return self.finish_force(force, boundary, rng)
