from __future__ import annotations

import math

import numpy as np
import pytest
from pygame.math import Vector2

from flocksim.core.boundary import HardBoundary, PeriodicBoundary
from flocksim.core.config import InvalidConfiguration
from flocksim.core.spatial_grid import SpatialGrid


@pytest.mark.parametrize("radius", [0.0, -1.0, 10.5])
def test_rejects_radius_outside_domain(radius):
    with pytest.raises(InvalidConfiguration):
        SpatialGrid(radius, 10.0)


def test_cell_size_is_at_least_the_radius():
    grid = SpatialGrid(3.0, 10.0)
    assert grid.num_cells == 3
    assert grid.cell_size >= 3.0
    assert grid.cell_size * grid.num_cells == pytest.approx(10.0)


def test_cell_of_wraps_indices():
    grid = SpatialGrid(1.0, 10.0)
    assert grid.cell_of(Vector2(0.5, 9.5)) == (0, 9)
    assert grid.cell_of(Vector2(-0.3, 10.0)) == (9, 0)
    assert grid.cell_of(Vector2(10.4, -10.2)) == (0, 9)


def test_cell_bounds_contain_their_points():
    grid = SpatialGrid(1.0, 10.0)
    point = Vector2(3.2, 7.9)
    cell = grid.cell(*grid.cell_of(point))
    assert cell.contains(point.x, point.y)
    assert (cell.i, cell.j) == (3, 7)


def test_reindex_restores_membership():
    grid = SpatialGrid(1.0, 10.0)
    rng = np.random.default_rng(5)
    positions = {i: Vector2(*map(float, rng.uniform(0.0, 10.0, 2))) for i in range(100)}
    for i, p in positions.items():
        grid.insert(p, i)

    for i in positions:
        positions[i] = Vector2(*map(float, rng.uniform(0.0, 10.0, 2)))
    moved = grid.reindex(positions.__getitem__)

    assert 0 < moved <= 100
    assert len(grid) == 100
    for (i, j), cell in grid.iter_cells():
        for idx in cell.members:
            assert grid.cell_of(positions[idx]) == (i, j)


def test_reindex_without_movement_is_a_no_op():
    grid = SpatialGrid(2.0, 10.0)
    positions = {0: Vector2(1.0, 1.0), 1: Vector2(1.5, 1.2), 2: Vector2(9.0, 3.0)}
    for i, p in positions.items():
        grid.insert(p, i)
    assert grid.reindex(positions.__getitem__) == 0
    assert grid.cell(0, 0).members == [0, 1]


def test_remove_drops_index():
    grid = SpatialGrid(1.0, 10.0)
    p = Vector2(4.5, 4.5)
    grid.insert(p, 7)
    grid.remove(p, 7)
    assert len(grid) == 0


def test_window_finds_every_neighbor_within_radius():
    length, radius = 10.0, 1.0
    grid = SpatialGrid(radius, length)
    boundary = PeriodicBoundary(length)
    rng = np.random.default_rng(17)
    points = [Vector2(*map(float, xy)) for xy in rng.uniform(0.0, length, size=(300, 2))]
    for i, p in enumerate(points):
        grid.insert(p, i)

    for i, p in enumerate(points):
        window = set(grid.neighbors_window(*grid.cell_of(p), 1))
        for j, q in enumerate(points):
            if boundary.distance(p, q) < radius:
                assert j in window


def test_window_lists_wrapped_cells_once():
    grid = SpatialGrid(5.0, 10.0)
    assert grid.num_cells == 2
    cells = grid.window_cells(0, 0, 1)
    assert sorted(cells) == [(0, 0), (0, 1), (1, 0), (1, 1)]

    grid.insert(Vector2(1.0, 1.0), 0)
    assert grid.neighbors_window(0, 0, 3) == [0]


def test_window_order_is_row_major_from_the_corner():
    grid = SpatialGrid(1.0, 10.0)
    assert grid.window_cells(5, 5, 1) == [
        (4, 4), (4, 5), (4, 6),
        (5, 4), (5, 5), (5, 6),
        (6, 4), (6, 5), (6, 6),
    ]


@pytest.mark.parametrize("boundary_cls", [PeriodicBoundary, HardBoundary])
@pytest.mark.parametrize("prey_radius,predator_radius,length", [
    (1.0, 2.0, 10.0),
    (1.0, 2.5, 10.0),
    (0.7, 2.9, 7.3),
    (1.3, 1.0, 9.1),
])
def test_predator_window_covers_its_vision(boundary_cls, prey_radius, predator_radius, length):
    grid = SpatialGrid(prey_radius, length)
    boundary = boundary_cls(length)
    ring = math.ceil(predator_radius / prey_radius)
    rng = np.random.default_rng(23)
    points = [Vector2(*map(float, xy)) for xy in rng.uniform(0.0, length, size=(250, 2))]
    for i, p in enumerate(points):
        grid.insert(p, i)

    for p in points:
        window = set(grid.neighbors_window(*grid.cell_of(p), ring))
        for j, q in enumerate(points):
            if boundary.distance(p, q) < predator_radius:
                assert j in window
