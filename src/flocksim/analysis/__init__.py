"""
Analysis module containing run metrics and export functions.
"""

from .export import (
    calculate_aggregate_stats, export_death_positions_to_csv, export_positions_to_csv, export_report,
    export_results_to_csv,
)
from .metrics import average_speed, death_positions, order_parameter, prey_alive_series, proportion_dead

__all__ = [
    'calculate_aggregate_stats', 'export_death_positions_to_csv', 'export_positions_to_csv',
    'export_report', 'export_results_to_csv',
    'average_speed', 'death_positions', 'order_parameter', 'prey_alive_series', 'proportion_dead',
]
