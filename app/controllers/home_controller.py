from app.services.costing_constants import INGREDIENT_CATEGORIES, INGREDIENT_UNITS, RECIPE_CATEGORIES
from app.utils.http import ok

def health_check():
    return ok({"status": "healthy"})

def categories_index():
    return ok({
        "recipe_categories": RECIPE_CATEGORIES,
        "ingredient_categories": INGREDIENT_CATEGORIES,
        "units": INGREDIENT_UNITS,
    })
