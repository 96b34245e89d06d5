"""
Headless trial runner collecting statistics over whole runs.
"""

import time
from dataclasses import replace
from typing import Any, Dict, List, Optional

from ..analysis.metrics import average_speed, order_parameter, proportion_dead, prey_velocities
from ..core.config import SimulationConfig
from .model import Simulation

# Sample the order parameter and prey count every N ticks
TRACKING_INTERVAL = 10
PROGRESS_INTERVAL = 1000


class BenchmarkSimulation:
    """
    Runs one simulation to completion and records kill and flocking statistics.
    """

    def __init__(self, config: SimulationConfig, seed: Optional[int] = None, verbose: bool = True):
        """
        Initialize the trial.

        Args:
            config: Simulation configuration
            seed: Seed overriding config.seed
            verbose: Whether to print progress
        """
        if seed is not None:
            config = replace(config, seed=seed)
        self.config = config
        self.sim = Simulation(config)
        self.verbose = verbose
        self.start_time = time.time()

        self.stats = {
            "total_kills": 0,
            "first_kill_tick": None,
            "last_kill_tick": None,
            "ticks_between_kills": [],
            "predator_speed_total": 0.0,
            "predator_speed_samples": 0,
            "prey_alive_over_time": [],
            "order_over_time": [],
        }
        self._track()

    def update(self) -> None:
        """Advance one tick and update statistics."""
        kills = self.sim.step()
        tick = self.sim.clock.index

        if kills:
            if self.stats["first_kill_tick"] is None:
                self.stats["first_kill_tick"] = tick
            if self.stats["last_kill_tick"] is not None:
                self.stats["ticks_between_kills"].append(tick - self.stats["last_kill_tick"])
            self.stats["last_kill_tick"] = tick
            self.stats["total_kills"] += len(kills)

        predators = self.sim.predator_agents()
        if predators:
            self.stats["predator_speed_total"] += average_speed(p.velocity for p in predators)
            self.stats["predator_speed_samples"] += 1

        if tick % TRACKING_INTERVAL == 0:
            self._track()

    def _track(self) -> None:
        tick = self.sim.clock.index
        self.stats["prey_alive_over_time"].append({"tick": tick, "prey_alive": self.sim.prey_alive})
        self.stats["order_over_time"].append({"tick": tick, "order": order_parameter(prey_velocities(self.sim))})

    def run_benchmark(self) -> Dict[str, Any]:
        """
        Run until the clock reaches its end time.

        Returns:
            Results dictionary with all statistics
        """
        clock = self.sim.clock
        if self.verbose:
            print(f"Running simulation to t={clock.end_time} (dt={clock.dt})...")

        while clock.current_time < clock.end_time:
            self.update()

            if self.verbose and clock.index % PROGRESS_INTERVAL == 0:
                elapsed = time.time() - self.start_time
                progress = min(100.0, clock.current_time / clock.end_time * 100)
                print(f"  Progress: {progress:.1f}% ({clock.index} ticks, "
                      f"{elapsed:.1f}s elapsed, {self.stats['total_kills']} kills)")

        return self.get_results()

    def get_results(self) -> Dict[str, Any]:
        """
        Get trial results.

        Returns:
            Dictionary containing all statistics and derived metrics
        """
        elapsed = time.time() - self.start_time

        avg_between = None
        if self.stats["ticks_between_kills"]:
            avg_between = sum(self.stats["ticks_between_kills"]) / len(self.stats["ticks_between_kills"])

        avg_speed = 0.0
        if self.stats["predator_speed_samples"] > 0:
            avg_speed = self.stats["predator_speed_total"] / self.stats["predator_speed_samples"]

        return {
            "seed": self.config.seed,
            "ticks": self.sim.clock.index,
            "final_time": self.sim.clock.current_time,
            "elapsed_time_seconds": elapsed,
            "total_kills": self.stats["total_kills"],
            "proportion_dead": proportion_dead(self.sim),
            "first_kill_tick": self.stats["first_kill_tick"],
            "avg_ticks_between_kills": avg_between,
            "avg_predator_speed": avg_speed,
            "final_order": order_parameter(prey_velocities(self.sim)),
            "final_prey_count": self.sim.prey_alive,
            "prey_alive_over_time": self.stats["prey_alive_over_time"],
            "order_over_time": self.stats["order_over_time"],
        }


def run_trials(config: SimulationConfig, num_trials: int, base_seed: int = 42,
               verbose: bool = True) -> List[Dict[str, Any]]:
    """
    Run independent trials with consecutive seeds.

    Args:
        config: Base configuration
        num_trials: Number of trials
        base_seed: Seed of the first trial; trial k uses base_seed + k
        verbose: Whether to print progress

    Returns:
        List of result dictionaries, one per trial
    """
    results = []
    for trial in range(num_trials):
        if verbose:
            print(f"\nTrial {trial + 1}/{num_trials}")
        result = BenchmarkSimulation(config, seed=base_seed + trial, verbose=verbose).run_benchmark()
        result["trial"] = trial + 1
        results.append(result)
    return results
