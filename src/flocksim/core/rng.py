"""
Seedable random draws for agent placement and sensor noise.

Every stochastic call takes the generator explicitly; nothing here touches
global random state.
"""

import math
from typing import Optional

import numpy as np
import pygame

from .vector import heading


def create_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create an independent generator for one simulation instance."""
    return np.random.default_rng(seed)


def random_position(rng: np.random.Generator, domain_length: float) -> pygame.Vector2:
    """
    Draw a uniform position in the square domain.

    Args:
        rng: Random generator
        domain_length: Side of the domain

    Returns:
        Position in [0, domain_length)^2
    """
    x, y = rng.random(2) * domain_length
    return pygame.Vector2(float(x), float(y))


def random_heading(rng: np.random.Generator) -> pygame.Vector2:
    """Draw a unit vector with uniformly distributed direction."""
    return heading(float(rng.uniform(0.0, 2 * math.pi)))


def sensor_noise(rng: np.random.Generator, std: float) -> pygame.Vector2:
    """
    Draw isotropic Gaussian noise.

    Args:
        rng: Random generator
        std: Standard deviation per axis

    Returns:
        Noise vector
    """
    x, y = rng.normal(0.0, std, 2)
    return pygame.Vector2(float(x), float(y))
