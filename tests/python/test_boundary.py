from __future__ import annotations

import math

import numpy as np
import pytest
from pygame.math import Vector2
from pytest import approx

from flocksim.core.boundary import HardBoundary, PeriodicBoundary, SoftBoundary, make_boundary
from flocksim.core.config import BOUNDARY_NAMES, InvalidConfiguration


def test_periodic_wrap_is_idempotent():
    boundary = PeriodicBoundary(10.0)
    rng = np.random.default_rng(3)
    for x, y in rng.uniform(-30.0, 30.0, size=(200, 2)):
        once = boundary.wrap(Vector2(float(x), float(y)))
        twice = boundary.wrap(once)
        assert (twice.x, twice.y) == (once.x, once.y)
        assert 0.0 <= once.x < 10.0 and 0.0 <= once.y < 10.0


def test_minimum_image_distance_is_symmetric_and_bounded():
    length = 10.0
    boundary = PeriodicBoundary(length)
    rng = np.random.default_rng(11)
    points = [Vector2(float(x), float(y)) for x, y in rng.uniform(0.0, length, size=(60, 2))]
    bound = length * math.sqrt(2) / 2
    for a in points:
        for b in points:
            d_ab = boundary.distance(a, b)
            assert d_ab == approx(boundary.distance(b, a))
            assert d_ab <= bound + 1e-9


def test_periodic_offset_crosses_the_edge():
    boundary = PeriodicBoundary(10.0)
    offset = boundary.offset(Vector2(9.9, 5.0), Vector2(0.1, 5.0))
    assert offset.x == approx(0.2)
    assert offset.y == approx(0.0)


def test_hard_clamp_zeroes_velocity():
    boundary = HardBoundary(10.0)
    position, velocity = boundary.correct(Vector2(10.5, 3.0), Vector2(0.8, 0.1))
    assert position.x == 10.0
    assert position.y == 3.0
    assert velocity == Vector2(0.0, 0.0)


def test_hard_leaves_interior_untouched():
    boundary = HardBoundary(10.0)
    position, velocity = boundary.correct(Vector2(4.0, 3.0), Vector2(0.8, 0.1))
    assert position == Vector2(4.0, 3.0)
    assert velocity == Vector2(0.8, 0.1)


def test_non_periodic_offsets_do_not_wrap():
    for boundary in (HardBoundary(10.0), SoftBoundary(10.0, 2.0)):
        offset = boundary.offset(Vector2(9.9, 5.0), Vector2(0.1, 5.0))
        assert offset.x == approx(-9.8)


def test_soft_bias_shape():
    boundary = SoftBoundary(10.0, 2.0)
    assert boundary.bias(Vector2(0.0, 5.0)).x == approx(2.0)
    assert boundary.bias(Vector2(1.0, 5.0)).x == approx(1.0)
    assert boundary.bias(Vector2(5.0, 5.0)) == Vector2(0.0, 0.0)
    assert boundary.bias(Vector2(10.0, 5.0)).x == approx(-2.0)
    assert boundary.bias(Vector2(9.0, 5.0)).x == approx(-1.0)
    corner = boundary.bias(Vector2(0.0, 10.0))
    assert corner.x == approx(2.0)
    assert corner.y == approx(-2.0)


def test_soft_reapplies_hard_clamp():
    boundary = SoftBoundary(10.0, 1.0)
    position, velocity = boundary.correct(Vector2(-0.2, 4.0), Vector2(-0.5, 0.0))
    assert position.x == 0.0
    assert velocity == Vector2(0.0, 0.0)


def test_periodic_and_hard_have_no_bias():
    for boundary in (PeriodicBoundary(10.0), HardBoundary(10.0)):
        assert boundary.bias(Vector2(0.01, 9.99)) == Vector2(0.0, 0.0)


def test_swap_cycles_and_keeps_soft_range():
    soft = SoftBoundary(10.0, 1.5)
    periodic = soft.swap()
    hard = periodic.swap()
    back = hard.swap()
    assert isinstance(periodic, PeriodicBoundary)
    assert isinstance(hard, HardBoundary) and not isinstance(hard, SoftBoundary)
    assert isinstance(back, SoftBoundary)
    assert back.soft_range == 1.5
    assert back.domain_length == 10.0


def test_make_boundary_rejects_unknown_names():
    assert isinstance(make_boundary("periodic", 10.0), PeriodicBoundary)
    with pytest.raises(InvalidConfiguration):
        make_boundary("bouncy", 10.0)
    with pytest.raises(InvalidConfiguration):
        make_boundary("soft", 10.0, 0.0)


def test_policy_names_match_config_names():
    names = {policy.name for policy in (PeriodicBoundary(10.0), HardBoundary(10.0), SoftBoundary(10.0))}
    assert names == set(BOUNDARY_NAMES)
    for name in BOUNDARY_NAMES:
        assert make_boundary(name, 10.0).name == name
