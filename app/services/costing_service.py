"""
Recipe Costing Service

Pure functions deriving a recipe's financial figures from its ingredient
lines, overhead percentage, selling price and monthly sales volume. Nothing
here touches the database; callers pass plain numbers or mappings.
"""

from typing import Any, Dict, Iterable, Mapping

from app.services.costing_constants import DEFAULT_OVERHEAD, MAX_MARKUP_FACTOR


def to_number(value: Any, default: float = 0.0) -> float:
    """Coerce ints, Decimals and numeric strings to float; anything else gives ``default``."""
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def ingredients_cost(ingredients: Iterable[Mapping[str, Any]]) -> float:
    """Sum of unit cost x quantity over the ingredient lines."""
    return sum(
        to_number(line.get("cost")) * to_number(line.get("quantity"))
        for line in ingredients
    )


def total_cost(ingredients: Iterable[Mapping[str, Any]], overhead: Any = DEFAULT_OVERHEAD) -> float:
    return ingredients_cost(ingredients) * (1 + to_number(overhead, DEFAULT_OVERHEAD) / 100.0)


def profit_margin(selling_price: Any, cost: Any) -> float:
    """Margin as a percentage of selling price; 0 when either side is missing or zero."""
    price = to_number(selling_price)
    cost = to_number(cost)
    if price <= 0 or cost <= 0:
        return 0.0
    return (price - cost) / price * 100.0


def markup_factor(selling_price: Any, cost: Any) -> float:
    price = to_number(selling_price)
    cost = to_number(cost)
    if cost <= 0:
        return 0.0
    return min(price / cost, MAX_MARKUP_FACTOR)


def revenue(selling_price: Any, sales: Any) -> float:
    return to_number(selling_price) * to_number(sales)


def profit(selling_price: Any, cost: Any, sales: Any) -> float:
    return (to_number(selling_price) - to_number(cost)) * to_number(sales)


def calculate_recipe_costing(
    ingredients: Iterable[Mapping[str, Any]],
    overhead: Any = DEFAULT_OVERHEAD,
    selling_price: Any = 0,
    sales: Any = 0
) -> Dict[str, Any]:
    """
    Compute every derived field of a recipe.

    Args:
        ingredients: Lines carrying ``cost`` (per unit) and ``quantity``
        overhead: Overhead percentage added on top of ingredient cost
        selling_price: Price per portion
        sales: Monthly sales volume

    Returns:
        Dictionary with ingredients_cost, total_cost, profit_margin,
        monthly_revenue, monthly_profit, markup_factor (rounded to 2 places)
        and is_valid, which is False when there are no ingredient lines.
    """
    lines = list(ingredients)
    base_cost = ingredients_cost(lines)
    cost = base_cost * (1 + to_number(overhead, DEFAULT_OVERHEAD) / 100.0)

    return {
        "ingredients_cost": round(base_cost, 2),
        "total_cost": round(cost, 2),
        "profit_margin": round(profit_margin(selling_price, cost), 2),
        "monthly_revenue": round(revenue(selling_price, sales), 2),
        "monthly_profit": round(profit(selling_price, cost, sales), 2),
        "markup_factor": round(markup_factor(selling_price, cost), 2),
        "is_valid": len(lines) > 0,
    }


def apply_costing(recipe: Any, ingredients: Iterable[Mapping[str, Any]]) -> Dict[str, Any]:
    """Recompute and copy the derived fields onto a recipe model instance."""
    costing = calculate_recipe_costing(
        ingredients,
        overhead=recipe.overhead,
        selling_price=recipe.selling_price,
        sales=recipe.monthly_sales,
    )
    recipe.total_cost = costing["total_cost"]
    recipe.profit_margin = costing["profit_margin"]
    recipe.monthly_revenue = costing["monthly_revenue"]
    recipe.monthly_profit = costing["monthly_profit"]
    recipe.markup_factor = costing["markup_factor"]
    return costing
