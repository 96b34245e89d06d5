"""
Agent classes for the prey/predator simulation.
"""

from .base import Agent, AgentStatus, Species
from .predator import Predator
from .prey import Prey, evasion_heading

__all__ = ['Agent', 'AgentStatus', 'Species', 'Prey', 'Predator', 'evasion_heading']
