from flask import current_app
from app.extensions import db
from app.schemas.ingredient_schema import IngredientSchema
from app.services.ingredient_service import (
    list_ingredients,
    create_ingredient,
    update_ingredient,
    delete_ingredient
)
from app.utils.errors import ServiceError
from app.utils.http import ok, error, json_body, arg_str, validate_schema, service_error

def get_all_ingredients():
    """
    List ingredients ordered by name.

    Query Parameters:
        - search: Substring of the ingredient name
        - category: Exact ingredient category
    """
    search = (arg_str("search") or "").strip()
    category = (arg_str("category") or "").strip()
    return ok(list_ingredients(search=search or None, category=category or None))

def create_ingredient_handler():
    data, errors = validate_schema(IngredientSchema, json_body())
    if errors:
        return error("VALIDATION_ERROR", "Invalid ingredient data", 400, details=errors)

    try:
        return ok(create_ingredient(data), 201)
    except ServiceError as e:
        return service_error(e)
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception("Unexpected error creating ingredient")
        return error("UNKNOWN_ERROR", str(e), 500)

def update_ingredient_handler(id):
    data, errors = validate_schema(IngredientSchema, json_body())
    if errors:
        return error("VALIDATION_ERROR", "Invalid ingredient data", 400, details=errors)

    try:
        return ok(update_ingredient(id, data))
    except ServiceError as e:
        return service_error(e)
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception("Unexpected error updating ingredient %s", id)
        return error("UNKNOWN_ERROR", str(e), 500)

def delete_ingredient_handler(id):
    try:
        delete_ingredient(id)
        return ok({"success": True})
    except ServiceError as e:
        return service_error(e)
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception("Unexpected error deleting ingredient %s", id)
        return error("UNKNOWN_ERROR", str(e), 500)
