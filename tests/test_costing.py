import math

import pytest

from app.services.costing_constants import MAX_MARKUP_FACTOR
from app.services.costing_service import (
    calculate_recipe_costing,
    ingredients_cost,
    markup_factor,
    profit,
    profit_margin,
    revenue,
    to_number,
    total_cost,
)

LINES = [{"cost": 100, "quantity": 2}, {"cost": 50, "quantity": 1}]


def test_total_cost_adds_overhead():
    assert ingredients_cost(LINES) == 250
    assert total_cost(LINES, 10) == pytest.approx(275.0)
    assert total_cost(LINES, 0) == 250


def test_full_costing():
    costing = calculate_recipe_costing(LINES, overhead=10, selling_price=1100, sales=30)

    assert costing["ingredients_cost"] == 250.0
    assert costing["total_cost"] == 275.0
    assert costing["markup_factor"] == 4.0
    assert costing["profit_margin"] == 75.0
    assert costing["monthly_revenue"] == 33000.0
    assert costing["monthly_profit"] == 24750.0
    assert costing["is_valid"] is True


def test_numeric_strings_are_coerced():
    lines = [{"cost": "10.5", "quantity": "2"}]
    costing = calculate_recipe_costing(lines, overhead="0", selling_price="42", sales="3")

    assert to_number("10.5") == 10.5
    assert costing["total_cost"] == 21.0
    assert costing["markup_factor"] == 2.0
    assert costing["monthly_revenue"] == 126.0


def test_blank_overhead_uses_default():
    assert total_cost(LINES, None) == pytest.approx(275.0)
    assert total_cost(LINES, "") == pytest.approx(275.0)


def test_zero_guards():
    assert profit_margin(0, 275) == 0
    assert profit_margin(None, 275) == 0
    assert profit_margin(100, 0) == 0
    assert markup_factor(100, 0) == 0
    assert markup_factor(0, 0) == 0

    costing = calculate_recipe_costing(LINES, overhead=10, selling_price=0, sales=0)
    for key in ("profit_margin", "markup_factor", "monthly_revenue"):
        assert math.isfinite(costing[key])
        assert costing[key] == 0
    assert costing["monthly_profit"] == 0


def test_no_ingredients_is_not_valid():
    costing = calculate_recipe_costing([], overhead=10, selling_price=500, sales=10)

    assert costing["is_valid"] is False
    assert costing["total_cost"] == 0
    assert costing["markup_factor"] == 0
    assert costing["profit_margin"] == 0
    assert costing["monthly_revenue"] == 5000.0


def test_markup_factor_is_capped():
    assert markup_factor(1e12, 0.01) == MAX_MARKUP_FACTOR


def test_loss_making_recipe():
    assert profit_margin(100, 150) == pytest.approx(-50.0)
    assert profit(100, 150, 10) == -500
    assert revenue(100, 10) == 1000
