from flask import Blueprint
from app.controllers.ingredient_controller import (
    get_all_ingredients,
    create_ingredient_handler,
    update_ingredient_handler,
    delete_ingredient_handler
)

bp = Blueprint("ingredients", __name__, url_prefix="/api/ingredients")

@bp.route("", methods=["GET"])
def list_ingredients():
    return get_all_ingredients()

@bp.route("", methods=["POST"])
def create():
    return create_ingredient_handler()

@bp.route("/<int:id>", methods=["PUT"])
def update(id):
    return update_ingredient_handler(id)

@bp.route("/<int:id>", methods=["DELETE"])
def delete(id):
    return delete_ingredient_handler(id)
