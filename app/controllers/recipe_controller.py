"""
Recipe Controller Module

Handles recipe endpoints:
- Listing and detail with joined ingredients
- Transactional create / update / delete
- Bulk sales-volume import
"""

from flask import current_app
from app.extensions import db
from app.schemas.recipe_schema import RecipeSchema, SalesImportSchema
from app.services.costing_constants import MENU_FLAGS
from app.services.recipe_service import (
    LIST_ORDERS,
    list_recipes,
    get_recipe,
    create_recipe,
    update_recipe,
    delete_recipe
)
from app.services.sales_import_service import import_sales
from app.utils.errors import ServiceError
from app.utils.http import ok, error, json_body, arg_str, validate_schema, service_error


def list_recipes_handler():
    """
    List recipes with their ingredients.

    Query Parameters:
        - order: "name" (default) or "updated"
        - search: Substring of name or chef's notes
        - category: Exact recipe category
        - menu: print / qr / website / delivery
    """
    order = (arg_str("order") or "name").strip().lower()
    menu = (arg_str("menu") or "").strip().lower()
    search = (arg_str("search") or "").strip()
    category = (arg_str("category") or "").strip()

    if order not in LIST_ORDERS:
        return error("VALIDATION_ERROR", f"order must be one of: {', '.join(LIST_ORDERS)}", 400)
    if menu and menu not in MENU_FLAGS:
        return error("VALIDATION_ERROR", f"menu must be one of: {', '.join(MENU_FLAGS)}", 400)

    return ok(list_recipes(
        order=order,
        search=search or None,
        category=category or None,
        menu=menu or None
    ))


def get_recipe_handler(recipe_id: int):
    try:
        return ok(get_recipe(recipe_id))
    except ServiceError as e:
        return service_error(e)


def create_recipe_handler():
    """
    Create a recipe.

    Body Parameters:
        - name, category (required)
        - ingredients (required): List of {id, quantity}, at least one
        - selling_price, monthly_sales, overhead, menu flags, text fields (optional)

    Derived figures sent by the client are ignored and recomputed.
    """
    data, errors = validate_schema(RecipeSchema, json_body())
    if errors:
        return error("VALIDATION_ERROR", "Invalid recipe data", 400, details=errors)

    try:
        return ok(create_recipe(data), 201)
    except ServiceError as e:
        return service_error(e)
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception("Unexpected error creating recipe")
        return error("UNKNOWN_ERROR", str(e), 500)


def update_recipe_handler(recipe_id: int):
    """Replace a recipe and its whole ingredient list; same body as create."""
    data, errors = validate_schema(RecipeSchema, json_body())
    if errors:
        return error("VALIDATION_ERROR", "Invalid recipe data", 400, details=errors)

    try:
        return ok(update_recipe(recipe_id, data))
    except ServiceError as e:
        return service_error(e)
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception("Unexpected error updating recipe %s", recipe_id)
        return error("UNKNOWN_ERROR", str(e), 500)


def delete_recipe_handler(recipe_id: int):
    try:
        delete_recipe(recipe_id)
        return ok({"success": True})
    except ServiceError as e:
        return service_error(e)
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception("Unexpected error deleting recipe %s", recipe_id)
        return error("UNKNOWN_ERROR", str(e), 500)


def import_sales_handler():
    """
    Body Parameters:
        - recipes (required): List of {name, sales}
    """
    data, errors = validate_schema(SalesImportSchema, json_body())
    if errors:
        return error("VALIDATION_ERROR", "Invalid data format. Expected an array of recipes.", 400, details=errors)

    try:
        return ok({"success": True, "results": import_sales(data["recipes"])})
    except ServiceError as e:
        return service_error(e)
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception("Unexpected error importing sales")
        return error("UNKNOWN_ERROR", str(e), 500)
