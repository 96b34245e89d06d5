"""
Simulation module containing the engine, predation rule, trial runner
and parameter search.
"""

from .benchmark import BenchmarkSimulation, run_trials
from .model import Simulation
from .predation import PredationRule
from .search import abc_rejection, optimise_prey, prey_objective

__all__ = [
    'Simulation', 'PredationRule', 'BenchmarkSimulation', 'run_trials',
    'abc_rejection', 'optimise_prey', 'prey_objective',
]
