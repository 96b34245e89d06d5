"""
Prey agent class implementing flocking and predator evasion.
"""

from typing import List

import numpy as np
import pygame

from ..boundary import BoundaryPolicy
from ..config import PreyParams
from ..vector import perpendicular
from .base import Agent, Species


def evasion_heading(predator_alignment: pygame.Vector2, predator_centering: pygame.Vector2) -> pygame.Vector2:
    """
    Sideways escape direction relative to the visible predators.

    Takes the perpendicular of the reversed mean predator velocity and picks
    the sign that points away from the predators' centroid.

    Args:
        predator_alignment: Mean velocity of visible predators
        predator_centering: Mean offset from the prey to visible predators

    Returns:
        Evasion heading (zero when no predator is visible)
    """
    sideways = perpendicular(-predator_alignment)
    away = -predator_centering
    if sideways.dot(away) <= 0:
        sideways = -sideways
    return sideways


class Prey(Agent):
    """
    A prey agent that flocks with other prey and evades predators.

    Same-species rules:
    - Alignment: match neighbours' velocity
    - Attraction: move toward neighbours
    - Repulsion: inverse-square push away from close neighbours

    Predators seen within the vision radius add an inverse-square repulsion
    and a sideways evasion heading.
    """

    species = Species.PREY
    params: PreyParams

    def compute_force(self, candidates: List[Agent], boundary: BoundaryPolicy,
                      rng: np.random.Generator) -> pygame.Vector2:
        """
        Calculate the prey steering force.

        Args:
            candidates: Agents from the 3x3 cell window
            boundary: Boundary policy
            rng: Random generator for sensor noise

        Returns:
            Clamped steering force
        """
        velocity = self.velocity

        alignment = pygame.Vector2(0, 0)
        attraction = pygame.Vector2(0, 0)
        repulsion = pygame.Vector2(0, 0)
        prey_seen = 0

        predator_alignment = pygame.Vector2(0, 0)
        predator_repulsion = pygame.Vector2(0, 0)
        predator_centering = pygame.Vector2(0, 0)
        predators_seen = 0

        for other, delta, dist in self.visible(candidates, boundary):
            if other.species is Species.PREY:
                alignment += other.velocity - velocity
                repulsion += delta / (dist * dist)
                attraction += delta
                prey_seen += 1
            else:
                predator_alignment += other.velocity
                predator_repulsion += delta / (dist * dist)
                predator_centering += delta
                predators_seen += 1

        if prey_seen:
            alignment /= prey_seen
            repulsion /= prey_seen
            attraction /= prey_seen
        if predators_seen:
            predator_alignment /= predators_seen
            predator_repulsion /= predators_seen
            predator_centering /= predators_seen

        evasion = evasion_heading(predator_alignment, predator_centering)

        p = self.params
        force = (
            alignment * p.prey_alignment
            - predator_repulsion * p.predator_repulsion
            - repulsion * p.prey_repulsion
            + attraction * p.prey_attraction
            + evasion * p.predator_alignment
        )
        return self.finish_force(force, boundary, rng)
