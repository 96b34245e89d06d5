"""
Core module containing configuration, vectors, clock, spatial grid,
boundary policies and agent classes.
"""

from .boundary import BoundaryPolicy, HardBoundary, PeriodicBoundary, SoftBoundary, make_boundary
from .clock import SimulationClock
from .config import (
    DEFAULT_CONFIG, InvalidConfiguration, PredatorParams, PreyParams, SimulationConfig, SpeciesParams,
)
from .spatial_grid import GridCell, SpatialGrid

__all__ = [
    'BoundaryPolicy', 'HardBoundary', 'PeriodicBoundary', 'SoftBoundary', 'make_boundary',
    'SimulationClock',
    'DEFAULT_CONFIG', 'InvalidConfiguration', 'PredatorParams', 'PreyParams', 'SimulationConfig',
    'SpeciesParams',
    'GridCell', 'SpatialGrid',
]
