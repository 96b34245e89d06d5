from __future__ import annotations

import numpy as np
import pytest

from flocksim.core.config import PreyParams, SimulationConfig
from flocksim.simulation.search import (
    PREY_COEFFICIENTS, abc_rejection, optimise_prey, prey_objective, random_prey_params, with_prey_coefficients,
)


@pytest.fixture
def tiny_config():
    return SimulationConfig(prey_count=8, predator_count=2, domain_length=3.0, end_time=0.1, seed=5)


def test_with_prey_coefficients_maps_vector_to_params(tiny_config):
    config = with_prey_coefficients(tiny_config, [0.1, 0.2, 0.3, 0.4, 0.5])
    assert [getattr(config.prey, name) for name in PREY_COEFFICIENTS] == [0.1, 0.2, 0.3, 0.4, 0.5]
    assert config.prey.vision_radius == tiny_config.prey.vision_radius
    assert tiny_config.prey == PreyParams()


def test_random_prey_params_stay_in_range():
    rng = np.random.default_rng(8)
    for _ in range(20):
        params = random_prey_params(rng, PreyParams(), prey_max=1.0, predator_max=5.0)
        assert 0.0 <= params.prey_alignment <= 1.0
        assert 0.0 <= params.prey_repulsion <= 1.0
        assert 0.0 <= params.predator_repulsion <= 5.0


def test_objective_is_deterministic(tiny_config):
    x = [1.0, 0.3, 0.1, 5.0, 5.0]
    first = prey_objective(x, tiny_config)
    assert first == prey_objective(x, tiny_config)
    assert 0.0 <= first <= 1.0


def test_abc_accepts_everything_with_loose_threshold(tiny_config):
    result = abc_rejection(tiny_config, num_samples=3, epsilon=1.0, verbose=False)
    assert result["acceptance_rate"] == 1.0
    assert len(result["accepted"]) == 3
    best = result["best"]
    assert best["proportion_dead"] == min(s["proportion_dead"] for s in result["accepted"])
    assert set(PREY_COEFFICIENTS) <= set(best)


def test_abc_rejects_everything_with_negative_threshold(tiny_config):
    result = abc_rejection(tiny_config, num_samples=2, epsilon=-1.0, verbose=False)
    assert result == {"accepted": [], "acceptance_rate": 0.0, "best": None}


def test_abc_draws_are_reproducible(tiny_config):
    a = abc_rejection(tiny_config, num_samples=2, epsilon=1.0, rng=np.random.default_rng(3), verbose=False)
    b = abc_rejection(tiny_config, num_samples=2, epsilon=1.0, rng=np.random.default_rng(3), verbose=False)
    assert a == b


def test_optimise_prey_reports_result(tiny_config):
    result = optimise_prey(tiny_config, max_iterations=1, verbose=False)
    assert set(result["coefficients"]) == set(PREY_COEFFICIENTS)
    assert 0.0 <= result["proportion_dead"] <= 1.0
    assert result["evaluations"] >= 1
