"""
Two-species flocking simulation on a spatial grid.

Prey flock and evade, predators pursue, and a predator that gets within
strike distance of a prey kills it.
"""

from .core.config import InvalidConfiguration, PredatorParams, PreyParams, SimulationConfig
from .simulation.model import Simulation

__all__ = ['InvalidConfiguration', 'PredatorParams', 'PreyParams', 'SimulationConfig', 'Simulation']
