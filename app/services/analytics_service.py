"""
Analytics Service

Rolls recipe cost figures up into per-recipe, per-category and portfolio
summaries for pricing review. Figures are recomputed from each recipe's
ingredients rather than read from its stored columns.

Input recipes use the API shape returned by the recipe service
(selling_price, monthly_sales, overhead, ingredients[{cost, quantity}]).
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from app.services.costing_constants import MARKUP_WARNING_FACTOR, TARGET_MARKUP_FACTOR
from app.services.costing_service import markup_factor, to_number, total_cost

logger = logging.getLogger(__name__)


def _share(part: float, whole: float) -> float:
    return part / whole * 100.0 if whole else 0.0


def _margin(gross_profit: float, revenue: float) -> float:
    return gross_profit / revenue * 100.0 if revenue > 0 else 0.0


def markup_status(mf: float, target: float = TARGET_MARKUP_FACTOR, warning: float = MARKUP_WARNING_FACTOR) -> str:
    """Traffic-light rating of a markup factor."""
    if mf <= 0:
        return "danger"
    if mf >= target:
        return "success"
    if mf >= warning:
        return "warning"
    return "danger"


def recipe_metrics(
    recipe: Mapping[str, Any],
    target_markup: float = TARGET_MARKUP_FACTOR,
    period_multiplier: float = 3
) -> Optional[Dict[str, Any]]:
    """
    Period figures for one recipe.

    Returns:
        Metrics dictionary, or None when the recipe has no cost or no
        selling price and cannot be rated
    """
    cost = total_cost(recipe.get("ingredients") or [], recipe.get("overhead"))
    price = to_number(recipe.get("selling_price"))
    if cost <= 0 or price <= 0:
        return None

    period_sales = to_number(recipe.get("monthly_sales")) * period_multiplier
    period_revenue = price * period_sales
    period_cost = cost * period_sales
    period_gross_profit = period_revenue - period_cost

    target_price = cost * target_markup
    target_gross_profit = (target_price - cost) * period_sales

    return {
        "id": recipe.get("id"),
        "name": recipe.get("name"),
        "category": recipe.get("category") or "Uncategorized",
        "total_cost": cost,
        "selling_price": price,
        "markup_factor": markup_factor(price, cost),
        "profit_margin": (price - cost) / price * 100.0,
        "period_sales": period_sales,
        "period_revenue": period_revenue,
        "period_cost": period_cost,
        "period_gross_profit": period_gross_profit,
        "gross_profit_margin": _margin(period_gross_profit, period_revenue),
        "target_price": target_price,
        "price_adjustment": target_price - price,
        "gross_profit_impact": target_gross_profit - period_gross_profit,
    }


def _round_values(row: Dict[str, Any]) -> Dict[str, Any]:
    return {
        key: round(value, 2) if isinstance(value, float) else value
        for key, value in row.items()
    }


def aggregate_recipes(
    recipes: List[Mapping[str, Any]],
    target_markup: float = TARGET_MARKUP_FACTOR,
    period_multiplier: float = 3,
    warning_markup: float = MARKUP_WARNING_FACTOR
) -> Dict[str, Any]:
    """
    Build the pricing analytics report.

    Args:
        recipes: Recipes with their ingredient lines
        target_markup: Markup factor a healthy recipe should reach
        period_multiplier: Months per reporting period (3 = quarterly)
        warning_markup: Markup factor below which a recipe is rated danger

    Returns:
        Dictionary with recipes (ranked by gross profit impact), categories,
        portfolio totals and the recipes excluded from the figures
    """
    rows: List[Dict[str, Any]] = []
    excluded: List[Dict[str, Any]] = []

    for recipe in recipes:
        metrics = recipe_metrics(recipe, target_markup, period_multiplier)
        if metrics is None:
            logger.warning(
                "Excluding recipe %s (%s) from analytics: no cost or selling price",
                recipe.get("id"), recipe.get("name")
            )
            excluded.append({
                "id": recipe.get("id"),
                "name": recipe.get("name"),
                "reason": "Recipe has no ingredient cost or no selling price",
            })
            continue
        metrics["status"] = markup_status(metrics["markup_factor"], target_markup, warning_markup)
        rows.append(metrics)

    total_revenue = sum(r["period_revenue"] for r in rows)
    total_cost_sum = sum(r["period_cost"] for r in rows)
    total_gross_profit = sum(r["period_gross_profit"] for r in rows)

    for row in rows:
        row["revenue_share"] = _share(row["period_revenue"], total_revenue)
        row["cost_share"] = _share(row["period_cost"], total_cost_sum)
        row["gross_profit_share"] = _share(row["period_gross_profit"], total_gross_profit)

    # Group by category
    grouped: Dict[str, List[Dict[str, Any]]] = {}
    for row in rows:
        grouped.setdefault(row["category"], []).append(row)

    categories = []
    for category in sorted(grouped):
        members = grouped[category]
        revenue = sum(r["period_revenue"] for r in members)
        cost = sum(r["period_cost"] for r in members)
        gross_profit = sum(r["period_gross_profit"] for r in members)
        avg_mf = sum(r["markup_factor"] for r in members) / len(members)
        categories.append(_round_values({
            "category": category,
            "recipe_count": len(members),
            "avg_markup_factor": avg_mf,
            "target_gap": target_markup - avg_mf,
            "recipes_below_target": sum(1 for r in members if r["markup_factor"] < target_markup),
            "total_revenue": revenue,
            "total_cost": cost,
            "total_gross_profit": gross_profit,
            "gross_profit_margin": _margin(gross_profit, revenue),
            "revenue_share": _share(revenue, total_revenue),
            "cost_share": _share(cost, total_cost_sum),
            "gross_profit_share": _share(gross_profit, total_gross_profit),
        }))

    ranked = sorted(rows, key=lambda r: r["gross_profit_impact"], reverse=True)
    overall_mf = sum(r["markup_factor"] for r in rows) / len(rows) if rows else 0.0

    return {
        "recipes": [_round_values(r) for r in ranked],
        "categories": categories,
        "portfolio": _round_values({
            "recipe_count": len(rows),
            "excluded_count": len(excluded),
            "overall_markup_factor": overall_mf,
            "target_markup_factor": float(target_markup),
            "total_revenue": total_revenue,
            "total_cost": total_cost_sum,
            "total_gross_profit": total_gross_profit,
            "overall_gross_profit_margin": _margin(total_gross_profit, total_revenue),
        }),
        "excluded": excluded,
    }
