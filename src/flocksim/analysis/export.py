"""
Export functions for saving trajectories and trial results to CSV and JSON.
"""

import csv
import json
import math
from typing import Any, Dict, List

from .metrics import death_positions


def export_positions_to_csv(sim, filename: str = "positions.csv") -> str:
    """
    Export every agent's trajectory to CSV.

    One row per tick: the time followed by x and y for each agent. Cells are
    left empty where a tick is outside an agent's retained history or after
    its death.

    Args:
        sim: Simulation instance
        filename: Output filename

    Returns:
        Path to saved CSV file
    """
    fieldnames = ['time']
    for index in range(len(sim.agents)):
        fieldnames += [f'x{index}', f'y{index}']

    with open(filename, 'w', newline='') as csvfile:
        writer = csv.writer(csvfile)
        writer.writerow(fieldnames)
        for tick, time in enumerate(sim.clock.times, start=sim.clock.first_tick):
            row = [time]
            for agent in sim.agents:
                position = agent.position_at(tick)
                if position is None:
                    row += ['', '']
                else:
                    row += [position.x, position.y]
            writer.writerow(row)

    print(f"Positions saved to: {filename}")
    return filename


def export_death_positions_to_csv(sim, filename: str = "death_positions.csv") -> str:
    """
    Export the positions where prey were killed.

    Args:
        sim: Simulation instance
        filename: Output filename

    Returns:
        Path to saved CSV file
    """
    with open(filename, 'w', newline='') as csvfile:
        writer = csv.writer(csvfile)
        writer.writerow(['x', 'y'])
        for x, y in death_positions(sim):
            writer.writerow([x, y])

    print(f"Death positions saved to: {filename}")
    return filename


def export_results_to_csv(results: List[Dict], filename: str = "trial_results.csv") -> str:
    """
    Export trial results to CSV format.

    Args:
        results: Results from run_trials()
        filename: Output filename

    Returns:
        Path to saved CSV file
    """
    with open(filename, 'w', newline='') as csvfile:
        fieldnames = ['trial', 'seed', 'total_kills', 'proportion_dead', 'first_kill_tick',
                      'final_order', 'avg_predator_speed', 'final_prey_count']
        writer = csv.DictWriter(csvfile, fieldnames=fieldnames)

        writer.writeheader()

        for result in results:
            writer.writerow({
                'trial': result['trial'],
                'seed': result['seed'],
                'total_kills': result['total_kills'],
                'proportion_dead': result['proportion_dead'],
                'first_kill_tick': '' if result['first_kill_tick'] is None else result['first_kill_tick'],
                'final_order': result['final_order'],
                'avg_predator_speed': result['avg_predator_speed'],
                'final_prey_count': result['final_prey_count'],
            })

    print(f"\nCSV results saved to: {filename}")
    return filename


def export_report(report: Dict[str, Any], filename: str = "simulation_report.json") -> str:
    """
    Export a full report to JSON.

    Args:
        report: Report dictionary
        filename: Output filename

    Returns:
        Path to saved JSON file
    """
    with open(filename, 'w') as f:
        json.dump(report, f, indent=2)

    print(f"\nReport saved to: {filename}")
    return filename


def calculate_aggregate_stats(trial_results: List[Dict]) -> Dict[str, float]:
    """
    Calculate mean and standard deviation across trials.

    Args:
        trial_results: List of result dictionaries from multiple trials

    Returns:
        Dictionary with mean and std for each metric
    """
    if not trial_results:
        return {}

    metrics = [
        "total_kills", "proportion_dead", "first_kill_tick", "avg_ticks_between_kills",
        "final_order", "avg_predator_speed", "elapsed_time_seconds",
    ]

    aggregates = {}

    for metric in metrics:
        values = [r[metric] for r in trial_results if r.get(metric) is not None]
        if values:
            mean = sum(values) / len(values)
            aggregates[f"{metric}_mean"] = mean
            if len(values) > 1:
                variance = sum((x - mean) ** 2 for x in values) / (len(values) - 1)
                aggregates[f"{metric}_std"] = math.sqrt(variance)
            else:
                aggregates[f"{metric}_std"] = 0

    return aggregates
