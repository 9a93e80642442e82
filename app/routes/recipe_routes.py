from flask import Blueprint
from app.controllers.recipe_controller import (
    list_recipes_handler,
    get_recipe_handler,
    create_recipe_handler,
    update_recipe_handler,
    delete_recipe_handler,
    import_sales_handler
)

recipe_bp = Blueprint("recipes", __name__, url_prefix="/api/recipes")

@recipe_bp.get("")
def list_recipes():
    return list_recipes_handler()

@recipe_bp.post("")
def create_recipe():
    return create_recipe_handler()

@recipe_bp.post("/sales-import")
def sales_import():
    return import_sales_handler()

@recipe_bp.get("/<int:id>")
def get_recipe(id):
    return get_recipe_handler(id)

@recipe_bp.put("/<int:id>")
def update_recipe(id):
    return update_recipe_handler(id)

@recipe_bp.delete("/<int:id>")
def delete_recipe(id):
    return delete_recipe_handler(id)
