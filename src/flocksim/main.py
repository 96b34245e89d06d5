"""
Main entry point for the prey/predator simulation.

Run with:
    python -m flocksim.main                      # Single run
    python -m flocksim.main --trials 10          # Multi-trial run
    python -m flocksim.main --search abc         # ABC rejection search
    python -m flocksim.main --search nelder-mead # Nelder-Mead search
"""

import argparse
from dataclasses import replace
from typing import List, Optional

from .core.config import BOUNDARY_NAMES, SimulationConfig


def build_config(args: argparse.Namespace) -> SimulationConfig:
    """
    Build the run configuration from a JSON file and command-line overrides.

    Args:
        args: Parsed command-line arguments

    Returns:
        Simulation configuration
    """
    config = SimulationConfig.from_json(args.config) if args.config else SimulationConfig()
    overrides = {
        "seed": args.seed,
        "boundary": args.boundary,
        "prey_count": args.prey,
        "predator_count": args.predators,
        "end_time": args.end_time,
    }
    return replace(config, **{k: v for k, v in overrides.items() if v is not None})


def run_single(config: SimulationConfig, positions_csv: Optional[str] = None,
               deaths_csv: Optional[str] = None, report: Optional[str] = None) -> dict:
    """
    Run one simulation and print its summary.

    Args:
        config: Simulation configuration
        positions_csv: Optional trajectory CSV output
        deaths_csv: Optional death positions CSV output
        report: Optional JSON report output

    Returns:
        Results dictionary
    """
    from .analysis.export import export_death_positions_to_csv, export_positions_to_csv, export_report
    from .simulation.benchmark import BenchmarkSimulation

    print("=" * 60)
    print("PREY/PREDATOR FLOCKING SIMULATION")
    print("=" * 60)
    print(f"Prey: {config.prey_count}  Predators: {config.predator_count}")
    print(f"Domain: {config.domain_length}  Boundary: {config.boundary}  Seed: {config.seed}")
    print()

    trial = BenchmarkSimulation(config)
    results = trial.run_benchmark()

    print("\n" + "=" * 60)
    print("RESULTS")
    print("=" * 60)
    print(f"Prey killed: {results['total_kills']} ({results['proportion_dead'] * 100:.1f}%)")
    print(f"First kill tick: {results['first_kill_tick']}")
    print(f"Final order parameter: {results['final_order']:.3f}")

    if positions_csv:
        export_positions_to_csv(trial.sim, positions_csv)
    if deaths_csv:
        export_death_positions_to_csv(trial.sim, deaths_csv)
    if report:
        export_report({"config": config.to_dict(), "results": results}, report)
    return results


def run_many(config: SimulationConfig, num_trials: int, results_csv: Optional[str] = None,
             report: Optional[str] = None) -> List[dict]:
    """
    Run independent trials with consecutive seeds and summarise them.

    Args:
        config: Base configuration (its seed is the first trial's seed)
        num_trials: Number of trials
        results_csv: Optional per-trial CSV output
        report: Optional JSON report output

    Returns:
        List of per-trial results
    """
    from .analysis.export import calculate_aggregate_stats, export_report, export_results_to_csv
    from .simulation.benchmark import run_trials

    print("=" * 60)
    print("MULTI-TRIAL RUN")
    print("=" * 60)
    print(f"Trials: {num_trials}  End time: {config.end_time}")

    base_seed = config.seed if config.seed is not None else 42
    results = run_trials(config, num_trials, base_seed=base_seed)
    aggregates = calculate_aggregate_stats(results)

    print("\n" + "=" * 60)
    print("SUMMARY")
    print("=" * 60)
    print(f"   Kills: {aggregates.get('total_kills_mean', 0):.2f} +/- {aggregates.get('total_kills_std', 0):.2f}")
    print(f"   Proportion dead: {aggregates.get('proportion_dead_mean', 0):.3f}")
    print(f"   Final order: {aggregates.get('final_order_mean', 0):.3f}")

    if results_csv:
        export_results_to_csv(results, results_csv)
    if report:
        export_report({"config": config.to_dict(), "trial_results": results, "aggregates": aggregates}, report)
    return results


def run_search(config: SimulationConfig, method: str, samples: int, epsilon: float,
               max_iterations: int, report: Optional[str] = None) -> dict:
    """
    Search prey coefficients that keep the proportion killed low.

    Args:
        config: Base configuration
        method: "abc" or "nelder-mead"
        samples: Number of ABC samples
        epsilon: ABC acceptance threshold
        max_iterations: Nelder-Mead iteration cap
        report: Optional JSON report output

    Returns:
        Search result dictionary
    """
    from .analysis.export import export_report
    from .simulation.search import abc_rejection, optimise_prey

    print("=" * 60)
    print(f"PARAMETER SEARCH ({method})")
    print("=" * 60)

    if method == "abc":
        result = abc_rejection(config, samples, epsilon)
    else:
        result = optimise_prey(config, max_iterations=max_iterations)

    if report:
        export_report({"config": config.to_dict(), "method": method, "result": result}, report)
    return result


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Prey/predator flocking simulation")
    parser.add_argument("--config", help="JSON configuration file")
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument("--boundary", choices=BOUNDARY_NAMES, help="Boundary policy")
    parser.add_argument("--prey", type=int, help="Number of prey")
    parser.add_argument("--predators", type=int, help="Number of predators")
    parser.add_argument("--end-time", type=float, help="Simulated time to run for")
    parser.add_argument("--trials", type=int, default=1, help="Number of independent trials")
    parser.add_argument("--search", choices=("abc", "nelder-mead"), help="Run a parameter search")
    parser.add_argument("--samples", type=int, default=100, help="ABC samples")
    parser.add_argument("--epsilon", type=float, default=0.1, help="ABC acceptance threshold")
    parser.add_argument("--max-iterations", type=int, default=10, help="Nelder-Mead iterations")
    parser.add_argument("--positions-csv", help="Write trajectories to CSV (single run)")
    parser.add_argument("--deaths-csv", help="Write death positions to CSV (single run)")
    parser.add_argument("--results-csv", help="Write per-trial results to CSV")
    parser.add_argument("--report", help="Write a JSON report")

    args = parser.parse_args(argv)
    config = build_config(args)
    config.validate()

    if args.search:
        run_search(config, args.search, args.samples, args.epsilon, args.max_iterations, args.report)
    elif args.trials > 1:
        run_many(config, args.trials, args.results_csv, args.report)
    else:
        run_single(config, args.positions_csv, args.deaths_csv, args.report)


if __name__ == "__main__":
    main()
