"""
Parameter search over prey behaviour coefficients.

Every evaluation builds and runs a fresh Simulation, so evaluations share no
state and can be distributed by the caller.
"""

from dataclasses import replace
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
from scipy.optimize import minimize

from ..analysis.metrics import proportion_dead
from ..core.config import PreyParams, SimulationConfig
from .model import Simulation

# Order of the coefficient vector used by the optimiser
PREY_COEFFICIENTS = (
    "prey_alignment",
    "prey_attraction",
    "prey_repulsion",
    "predator_alignment",
    "predator_repulsion",
)


def with_prey_coefficients(config: SimulationConfig, x: Sequence[float]) -> SimulationConfig:
    """
    Copy a configuration with new prey coefficients.

    Args:
        config: Base configuration
        x: Values in PREY_COEFFICIENTS order

    Returns:
        New configuration
    """
    values = {name: float(value) for name, value in zip(PREY_COEFFICIENTS, x)}
    return replace(config, prey=replace(config.prey, **values))


def random_prey_params(rng: np.random.Generator, base: PreyParams,
                       prey_max: float = 1.0, predator_max: float = 5.0) -> PreyParams:
    """
    Draw prey coefficients uniformly.

    Args:
        rng: Random generator
        base: Params supplying the non-behavioural fields
        prey_max: Upper bound for same-species coefficients
        predator_max: Upper bound for predator-response coefficients

    Returns:
        New prey params
    """
    return replace(
        base,
        prey_alignment=float(rng.uniform(0.0, prey_max)),
        prey_attraction=float(rng.uniform(0.0, prey_max)),
        prey_repulsion=float(rng.uniform(0.0, prey_max)),
        predator_alignment=float(rng.uniform(0.0, predator_max)),
        predator_repulsion=float(rng.uniform(0.0, predator_max)),
    )


def prey_objective(x: Sequence[float], config: SimulationConfig) -> float:
    """
    Proportion of prey killed in one full run with the given coefficients.

    Args:
        x: Prey coefficients in PREY_COEFFICIENTS order
        config: Base configuration (its seed makes the objective deterministic)

    Returns:
        Fraction of prey dead at the end of the run
    """
    sim = Simulation(with_prey_coefficients(config, x))
    sim.run()
    return proportion_dead(sim)


def abc_rejection(config: SimulationConfig, num_samples: int, epsilon: float,
                  rng: Optional[np.random.Generator] = None, prey_max: float = 1.0,
                  predator_max: float = 5.0, verbose: bool = True) -> Dict[str, Any]:
    """
    Approximate Bayesian computation by rejection.

    Samples prey coefficients, runs a simulation for each and keeps the
    samples whose proportion of dead prey is at most epsilon.

    Args:
        config: Base configuration
        num_samples: Number of parameter sets to try
        epsilon: Acceptance threshold on the proportion dead
        rng: Generator for the parameter draws (seeded from config.seed if None)
        prey_max: Upper bound for same-species coefficients
        predator_max: Upper bound for predator-response coefficients
        verbose: Whether to print a summary

    Returns:
        Dictionary with accepted samples, acceptance rate and the best sample
    """
    if rng is None:
        rng = np.random.default_rng(config.seed)

    accepted: List[Dict[str, float]] = []
    for _ in range(num_samples):
        params = random_prey_params(rng, config.prey, prey_max, predator_max)
        sim = Simulation(replace(config, prey=params))
        sim.run()
        dead = proportion_dead(sim)
        if dead <= epsilon:
            sample = {name: getattr(params, name) for name in PREY_COEFFICIENTS}
            sample["proportion_dead"] = dead
            accepted.append(sample)

    rate = len(accepted) / num_samples if num_samples else 0.0
    best = min(accepted, key=lambda s: s["proportion_dead"]) if accepted else None

    if verbose:
        print(f"Acceptance rate: {rate:.3f} ({len(accepted)}/{num_samples})")
        if best is not None:
            print(f"Best parameter set: {best['proportion_dead']:.3f} of the population killed")
            for name in PREY_COEFFICIENTS:
                print(f"  {name}: {best[name]:.4f}")

    return {"accepted": accepted, "acceptance_rate": rate, "best": best}


def optimise_prey(config: SimulationConfig, x0: Sequence[float] = (1.0, 1.0, 0.4, 1.0, 1.0),
                  max_iterations: int = 10, verbose: bool = True) -> Dict[str, Any]:
    """
    Minimise the proportion of prey killed with Nelder-Mead.

    Args:
        config: Base configuration
        x0: Starting coefficients in PREY_COEFFICIENTS order
        max_iterations: Iteration cap for the optimiser
        verbose: Whether to print the result

    Returns:
        Dictionary with the optimised coefficients and objective value
    """
    result = minimize(
        prey_objective,
        np.asarray(x0, dtype=float),
        args=(config,),
        method="Nelder-Mead",
        options={"xatol": 1e-6, "fatol": 1e-6, "maxiter": max_iterations},
    )
    best = {name: float(value) for name, value in zip(PREY_COEFFICIENTS, result.x)}

    if verbose:
        print(f"Final optimised arguments: {best}")
        print(f"Proportion dead: {float(result.fun):.4f} after {result.nit} iterations")

    return {
        "coefficients": best,
        "proportion_dead": float(result.fun),
        "iterations": int(result.nit),
        "evaluations": int(result.nfev),
    }
