from __future__ import annotations

import pytest

from urbanplan_app.gamification import (
    STARTING_BUDGET,
    InsufficientBudget,
    InterventionNotFound,
    apply_intervention,
    new_game,
)


def test_new_game_starting_state():
    state = new_game()

    assert (state.city.aqi, state.city.temperature, state.city.vegetation, state.city.health) == (198, 42, 18, 65)
    assert state.city.budget == STARTING_BUDGET
    assert state.applied == ()
    assert state.completed_missions == ()


def test_applying_an_intervention_spends_budget_and_moves_metrics():
    state = apply_intervention(new_game(), "tree-planting")

    assert state.city.budget == STARTING_BUDGET - 50_000
    assert (state.city.aqi, state.city.temperature, state.city.vegetation, state.city.health) == (183, 40, 23, 73)
    assert state.applied == ("tree-planting",)


def test_mission_reward_is_paid_once():
    state = new_game()
    state = apply_intervention(state, "urban-park")
    assert "increase-greenery" in state.completed_missions
    assert "cool-city" in state.completed_missions
    assert state.city.budget == STARTING_BUDGET - 200_000 + 75_000 + 100_000

    state = apply_intervention(state, "tree-planting")
    assert state.completed_missions.count("increase-greenery") == 1
    assert state.city.budget == STARTING_BUDGET - 250_000 + 75_000 + 100_000


def test_lower_is_better_missions_need_the_target_reached():
    state = apply_intervention(new_game(), "electric-transport")

    assert state.city.aqi == 168
    assert "reduce-pollution" not in state.completed_missions

    state = apply_intervention(state, "electric-transport")
    assert state.city.aqi == 138
    assert "reduce-pollution" in state.completed_missions


def test_cool_city_completes_at_38_degrees():
    state = apply_intervention(new_game(), "urban-park")

    assert state.city.temperature == 38
    assert "cool-city" in state.completed_missions


def test_clamps_hold_after_many_interventions():
    state = new_game()
    for _ in range(12):
        state = apply_intervention(state, "tree-planting")

    assert state.city.temperature >= 20
    assert state.city.aqi >= 0
    assert state.city.health <= 100
    assert state.city.vegetation <= 100


def test_insufficient_budget():
    state = new_game()
    for _ in range(2):
        state = apply_intervention(state, "solar-farm")

    with pytest.raises(InsufficientBudget):
        apply_intervention(state, "solar-farm")


def test_unknown_intervention():
    with pytest.raises(InterventionNotFound):
        apply_intervention(new_game(), "space-elevator")
