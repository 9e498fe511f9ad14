"""Unit tests for money arithmetic."""

import pytest

from tripsync.utils.money import (
    calculate_equal_split,
    calculate_per_person_budget,
    calculate_percentage,
    calculate_total_budget,
    round_money,
    validate_custom_splits,
)


@pytest.mark.parametrize(
    "amount, expected",
    [(0.125, 0.13), (33.333, 33.33), (-0.125, -0.12), (2.5, 2.5), (19.999, 20.0)],
)
def test_round_money_half_up(amount, expected):
    assert round_money(amount) == expected


def test_equal_split_rounds_each_share():
    assert calculate_equal_split(100, 3) == 33.33
    assert calculate_equal_split(50, 4) == 12.5


def test_equal_split_with_no_people_is_zero():
    assert calculate_equal_split(100, 0) == 0


def test_validate_custom_splits_tolerates_under_a_cent():
    assert validate_custom_splits([{"amount": 33.33}, {"amount": 33.33}, {"amount": 33.34}], 100)
    assert not validate_custom_splits([{"amount": 50}, {"amount": 49.5}], 100)


def test_per_person_budget_mixes_split_types():
    categories = [
        {"split_type": "equal", "estimated_cost": 400},
        {"split_type": "custom", "splits": [{"user_id": "alice", "amount": 120}, {"user_id": "bob", "amount": 80}]},
        {"split_type": "none", "estimated_cost": 999},
    ]
    assert calculate_per_person_budget(categories, 4, "alice") == 220
    assert calculate_per_person_budget(categories, 4, "carol") == 100
    assert calculate_per_person_budget(categories, 4) == 100


def test_per_person_budget_with_no_members():
    assert calculate_per_person_budget([{"split_type": "equal", "estimated_cost": 100}], 0, "alice") == 0


def test_total_budget():
    assert calculate_total_budget([{"estimated_cost": 100.1}, {"estimated_cost": 200.2}]) == 300.3


def test_percentage():
    assert calculate_percentage(1, 3) == 33
    assert calculate_percentage(2, 3) == 67
    assert calculate_percentage(5, 0) == 0
