from __future__ import annotations

import pytest
from pygame.math import Vector2

from flocksim import InvalidConfiguration, PredatorParams, PreyParams, Simulation, SimulationConfig
from flocksim.core.agents import Prey
from flocksim.core.boundary import SoftBoundary


def small_config(**overrides) -> SimulationConfig:
    values = {"prey_count": 30, "predator_count": 3, "end_time": 0.5, "seed": 123}
    values.update(overrides)
    return SimulationConfig(**values)


def test_same_seed_reproduces_trajectories():
    a = Simulation(small_config())
    b = Simulation(small_config())
    a.run()
    b.run()

    assert a.clock.times == b.clock.times
    for index in range(len(a.agents)):
        assert a.position_history(index) == b.position_history(index)
        assert a.velocity_history(index) == b.velocity_history(index)
        assert a.status(index) == b.status(index)


def test_different_seeds_diverge():
    a = Simulation(small_config(seed=1))
    b = Simulation(small_config(seed=2))
    assert a.position_history(0) != b.position_history(0)


def test_histories_track_the_clock():
    sim = Simulation(small_config(prey_count=80, predator_count=5, domain_length=4.0, end_time=1.0))
    sim.run()

    for agent in sim.agents:
        assert len(agent.positions) == len(agent.velocities)
        if agent.alive:
            assert len(agent.positions) == sim.clock.index + 1
        else:
            assert len(agent.positions) == agent.death_tick + 1


def test_run_stops_at_end_time():
    sim = Simulation(small_config(end_time=0.25))
    sim.run()
    times = sim.clock.times
    assert times[0] == 0.0
    assert times[-1] >= 0.25
    assert times[-2] < 0.25
    assert sim.clock.finished


def test_zero_end_time_runs_no_ticks():
    sim = Simulation(small_config(end_time=0.0))
    sim.run()
    assert sim.clock.index == 0


def test_agents_are_spawned_prey_first():
    sim = Simulation(small_config(prey_count=4, predator_count=2))
    assert len(sim.prey_agents()) == 4
    assert len(sim.predator_agents()) == 2
    assert sim.agent(3) in sim.prey_agents()
    assert sim.agent(4) in sim.predator_agents()
    assert sim.alive_counts() == (4, 2)
    assert len(sim.grid) == 6


def test_vision_ratio_sizes_predator_window():
    sim = Simulation(small_config())
    assert sim.vision_ratio == 2
    assert sim.ring_radius(sim.predator_agents()[0]) == 2
    assert sim.ring_radius(sim.prey_agents()[0]) == 1


def test_agents_stay_inside_walled_domain():
    sim = Simulation(small_config(boundary="hard", end_time=1.0))
    sim.run()
    for agent in sim.agents:
        for p in agent.positions:
            assert 0.0 <= p.x <= 10.0 and 0.0 <= p.y <= 10.0


def test_boundary_swap_keeps_running():
    sim = Simulation(small_config())
    assert isinstance(sim.boundary, SoftBoundary)
    sim.step()
    sim.boundary = sim.boundary.swap()
    sim.step()
    assert sim.clock.index == 2


def test_history_limit_bounds_memory():
    sim = Simulation(small_config(history_limit=5, end_time=0.5))
    sim.run()
    alive = [a for a in sim.agents if a.alive]
    assert alive
    for agent in alive:
        assert len(agent.positions) == 5
        assert agent.first_tick == sim.clock.index - 4
        assert agent.position_at(sim.clock.index) == agent.position


@pytest.mark.parametrize("overrides", [
    {"domain_length": 0.0},
    {"domain_length": -1.0},
    {"prey": PreyParams(vision_radius=0.0)},
    {"prey": PreyParams(vision_radius=11.0)},
    {"predator": PredatorParams(vision_radius=0.0)},
    {"predator": PredatorParams(vision_radius=11.0)},
    {"dt": 0.0},
    {"end_time": -1.0},
    {"prey_count": -1},
    {"boundary": "bouncy"},
    {"soft_range": 0.0},
    {"history_limit": 0},
])
def test_invalid_configuration_is_rejected(overrides):
    with pytest.raises(InvalidConfiguration):
        Simulation(small_config(**overrides))


def test_invalid_configuration_is_a_value_error():
    with pytest.raises(ValueError):
        Simulation(small_config(dt=-0.1))


def test_agents_cannot_join_after_the_first_step():
    sim = Simulation(small_config())
    sim.add_agent(Prey(sim.config.prey, Vector2(1.0, 1.0), Vector2(0.0, 0.0)))
    sim.step()
    with pytest.raises(RuntimeError):
        sim.add_agent(Prey(sim.config.prey, Vector2(2.0, 2.0), Vector2(0.0, 0.0)))
    assert len(sim.agents) == 34


def test_history_limit_bounds_clock_times():
    sim = Simulation(small_config(history_limit=5, end_time=0.5))
    sim.run()
    assert len(sim.clock.times) == 5
    assert sim.clock.first_tick == sim.clock.index - 4
    assert sim.clock.times[-1] == sim.clock.current_time
