"""
Vector helpers on top of pygame.Vector2.

Vectors stored in agent histories are treated as values: every helper here
returns a new vector and leaves its arguments untouched.
"""

import math

import pygame

from .config import ZERO_LENGTH


def perpendicular(v: pygame.Vector2) -> pygame.Vector2:
    """
    Rotate a vector by +90 degrees.

    Args:
        v: Vector to rotate

    Returns:
        New vector (-v.y, v.x)
    """
    return pygame.Vector2(-v.y, v.x)


def clamp_length(v: pygame.Vector2, max_length: float) -> pygame.Vector2:
    """
    Limit the length of a vector, collapsing negligible vectors to zero.

    Args:
        v: Vector to clamp
        max_length: Maximum allowed length

    Returns:
        New vector with length <= max_length
    """
    if max_length <= 0:
        return pygame.Vector2(0, 0)
    length = v.length()
    if length < ZERO_LENGTH:
        return pygame.Vector2(0, 0)
    if length > max_length:
        return v * (max_length / length)
    return pygame.Vector2(v)


def safe_normalize(v: pygame.Vector2) -> pygame.Vector2:
    """Unit vector in the direction of v, or zero if v is negligible."""
    length = v.length()
    if length < ZERO_LENGTH:
        return pygame.Vector2(0, 0)
    return v / length


def wrap_coordinate(value: float, length: float) -> float:
    """
    Wrap a coordinate into [0, length).

    Float modulo can return exactly `length` for tiny negative inputs, which
    is folded back to 0 so wrapping stays idempotent.
    """
    wrapped = value % length
    if wrapped >= length:
        return 0.0
    return wrapped


def minimum_image(delta: float, length: float) -> float:
    """
    Shortest signed offset along one periodic axis.

    Args:
        delta: Raw offset b - a
        length: Period of the axis

    Returns:
        Offset in [-length/2, length/2)
    """
    half = length / 2
    return ((delta + half + length) % length) - half


def heading(angle: float) -> pygame.Vector2:
    """Unit vector pointing at `angle` radians."""
    return pygame.Vector2(math.cos(angle), math.sin(angle))
