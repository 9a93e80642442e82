from flask import current_app
from app.services.analytics_service import aggregate_recipes
from app.services.costing_constants import PERIOD_MONTHS
from app.services.recipe_service import list_recipes
from app.utils.http import ok, error, arg_str, arg_float

def analytics_handler():
    """
    Pricing analytics over every recipe.

    Query Parameters:
        - period: monthly / quarterly / yearly (default from ANALYTICS_PERIOD)
        - target_markup: Target markup factor (default from TARGET_MARKUP_FACTOR)
    """
    period = (arg_str("period") or current_app.config["ANALYTICS_PERIOD"]).strip().lower()
    if period not in PERIOD_MONTHS:
        return error("VALIDATION_ERROR", f"period must be one of: {', '.join(PERIOD_MONTHS)}", 400)

    target = arg_float("target_markup", current_app.config["TARGET_MARKUP_FACTOR"], min_value=0.01)

    report = aggregate_recipes(
        list_recipes(),
        target_markup=target,
        period_multiplier=PERIOD_MONTHS[period],
        warning_markup=current_app.config["MARKUP_WARNING_FACTOR"],
    )
    report["period"] = period
    return ok(report)
