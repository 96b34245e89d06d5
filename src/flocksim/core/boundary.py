"""
Boundary policies: periodic, hard and soft walls.

A policy supplies the offset/distance convention used by every neighbor
computation, a steering bias injected into the force, and the correction
applied to a freshly integrated position and velocity.
"""

import math
from typing import Tuple

import pygame

from .config import InvalidConfiguration
from .vector import minimum_image, wrap_coordinate

DEFAULT_SOFT_RANGE = 2.0


class BoundaryPolicy:
    """
    Base for the concrete policies: plain Euclidean offsets, no bias, no
    correction. Subclasses set `name` and implement swap().

    Every policy remembers a soft range so that cycling through the policies
    with swap() comes back to the same soft wall.
    """

    name: str

    def __init__(self, domain_length: float, soft_range: float = DEFAULT_SOFT_RANGE):
        """
        Initialize the policy.

        Args:
            domain_length: Side of the square domain
            soft_range: Width of the soft influence band (kept for swap())
        """
        self.domain_length = domain_length
        self.soft_range = soft_range

    def offset(self, origin: pygame.Vector2, target: pygame.Vector2) -> pygame.Vector2:
        """
        Offset from origin to target.

        Args:
            origin: Start position
            target: End position

        Returns:
            Vector pointing from origin to target
        """
        return target - origin

    def distance(self, a: pygame.Vector2, b: pygame.Vector2) -> float:
        return self.offset(a, b).length()

    def bias(self, position: pygame.Vector2) -> pygame.Vector2:
        """Steering bias away from the walls at a position."""
        return pygame.Vector2(0, 0)

    def correct(self, position: pygame.Vector2,
                velocity: pygame.Vector2) -> Tuple[pygame.Vector2, pygame.Vector2]:
        """
        Correct a freshly integrated position and velocity.

        Args:
            position: Position after integration
            velocity: Velocity after integration

        Returns:
            Tuple of (position, velocity) to store
        """
        return position, velocity

    def swap(self) -> "BoundaryPolicy":
        """Next policy in the Soft -> Periodic -> Hard -> Soft cycle."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(domain_length={self.domain_length}, soft_range={self.soft_range})"


class PeriodicBoundary(BoundaryPolicy):
    """Toroidal domain with minimum-image offsets."""

    name = "periodic"

    def offset(self, origin: pygame.Vector2, target: pygame.Vector2) -> pygame.Vector2:
        length = self.domain_length
        return pygame.Vector2(
            minimum_image(target.x - origin.x, length),
            minimum_image(target.y - origin.y, length),
        )

    def wrap(self, position: pygame.Vector2) -> pygame.Vector2:
        """Wrap a position into [0, L) on both axes."""
        length = self.domain_length
        return pygame.Vector2(wrap_coordinate(position.x, length), wrap_coordinate(position.y, length))

    def correct(self, position, velocity):
        return self.wrap(position), velocity

    def swap(self) -> BoundaryPolicy:
        return HardBoundary(self.domain_length, self.soft_range)


class HardBoundary(BoundaryPolicy):
    """Walls that stop an agent dead on contact."""

    name = "hard"

    def clamp(self, position: pygame.Vector2) -> Tuple[pygame.Vector2, bool]:
        """
        Clamp a position into [0, L] on both axes.

        Args:
            position: Position to clamp

        Returns:
            Tuple of (clamped position, whether any axis was clamped)
        """
        length = self.domain_length
        x = min(max(position.x, 0.0), length)
        y = min(max(position.y, 0.0), length)
        return pygame.Vector2(x, y), (x != position.x or y != position.y)

    def correct(self, position, velocity):
        clamped, hit = self.clamp(position)
        if hit:
            return clamped, pygame.Vector2(0, 0)
        return clamped, velocity

    def swap(self) -> BoundaryPolicy:
        return SoftBoundary(self.domain_length, self.soft_range)


class SoftBoundary(HardBoundary):
    """
    Smooth repulsive band along each wall.

    Inside `soft_range` of a wall the bias rises from 0 at the band edge to 2
    at the wall. The hard clamp is kept as a safety net after integration.
    """

    name = "soft"

    def bias(self, position: pygame.Vector2) -> pygame.Vector2:
        return pygame.Vector2(self._axis_bias(position.x), self._axis_bias(position.y))

    def _axis_bias(self, value: float) -> float:
        band = self.soft_range
        length = self.domain_length
        push = 0.0
        if value < band:
            push += 1 + math.cos(value * math.pi / band)
        if value > length - band:
            push -= 1 + math.cos((length - value) * math.pi / band)
        return push

    def swap(self) -> BoundaryPolicy:
        return PeriodicBoundary(self.domain_length, self.soft_range)


_POLICIES = {
    PeriodicBoundary.name: PeriodicBoundary,
    HardBoundary.name: HardBoundary,
    SoftBoundary.name: SoftBoundary,
}


def make_boundary(name: str, domain_length: float, soft_range: float = DEFAULT_SOFT_RANGE) -> BoundaryPolicy:
    """
    Build a boundary policy from its config name.

    Args:
        name: One of "periodic", "hard", "soft"
        domain_length: Side of the square domain
        soft_range: Width of the soft band

    Returns:
        Boundary policy instance

    Raises:
        InvalidConfiguration: If the name is unknown or the range not positive
    """
    if name not in _POLICIES:
        raise InvalidConfiguration(f"unknown boundary policy {name!r}")
    if soft_range <= 0:
        raise InvalidConfiguration(f"soft_range must be positive, got {soft_range}")
    return _POLICIES[name](domain_length, soft_range)
