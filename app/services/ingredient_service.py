"""
Ingredient Service

Handles ingredient CRUD operations. Changing an ingredient's cost refreshes
the stored figures of every recipe that uses it.
"""

import logging
from typing import Dict, Any, List, Optional
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from app.extensions import db
from app.models.ingredient import Ingredient
from app.models.recipe import Recipe
from app.models.recipe_ingredient import RecipeIngredient
from app.services.recipe_service import recost_recipes
from app.utils.errors import DuplicateEntry, IngredientInUse, NotFound, PersistenceError

logger = logging.getLogger(__name__)


def serialize_ingredient(ingredient: Ingredient) -> Dict[str, Any]:
    return {
        "id": ingredient.id,
        "name": ingredient.name,
        "cost": float(ingredient.cost),
        "unit": ingredient.unit,
        "category": ingredient.category,
        "supplier": ingredient.supplier,
        "created_at": ingredient.created_at.isoformat() if ingredient.created_at else None,
    }


def _ensure_unique_name(name: str, exclude_id: Optional[int] = None) -> None:
    query = Ingredient.query.filter(func.lower(Ingredient.name) == name.lower())
    if exclude_id is not None:
        query = query.filter(Ingredient.id != exclude_id)
    if query.first():
        raise DuplicateEntry("Ingredient with this name already exists", field="name")


def list_ingredients(search: Optional[str] = None, category: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    List ingredients ordered by name.

    Args:
        search: Case-insensitive substring of the name
        category: Exact category to filter on
    """
    query = Ingredient.query

    if search:
        query = query.filter(Ingredient.name.ilike(f"%{search}%"))
    if category:
        query = query.filter(Ingredient.category == category)

    return [serialize_ingredient(ing) for ing in query.order_by(Ingredient.name).all()]


def create_ingredient(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Create an ingredient from validated schema data.

    Raises:
        DuplicateEntry: If the name is already taken (case-insensitive)
        PersistenceError: For database errors
    """
    _ensure_unique_name(data["name"])

    try:
        ingredient = Ingredient(
            name=data["name"],
            cost=data["cost"],
            unit=data["unit"],
            category=data["category"],
            supplier=data.get("supplier"),
        )
        db.session.add(ingredient)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("Failed to create ingredient %r", data.get("name"))
        raise PersistenceError(str(getattr(e, "orig", e)))

    logger.info("Created ingredient %s (%s)", ingredient.id, ingredient.name)
    return serialize_ingredient(ingredient)


def _recipes_using(ingredient_id: int) -> List[Recipe]:
    recipe_ids = [
        row.recipe_id for row in
        RecipeIngredient.query.filter_by(ingredient_id=ingredient_id).all()
    ]
    if not recipe_ids:
        return []
    return Recipe.query.filter(Recipe.id.in_(recipe_ids)).all()


def update_ingredient(ingredient_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Replace an ingredient's fields and refresh dependent recipes.

    Raises:
        NotFound: If the ingredient does not exist
        DuplicateEntry: If the new name belongs to another ingredient
        PersistenceError: For database errors
    """
    ingredient = db.session.get(Ingredient, ingredient_id)
    if not ingredient:
        raise NotFound("Ingredient not found")

    _ensure_unique_name(data["name"], exclude_id=ingredient_id)

    try:
        ingredient.name = data["name"]
        ingredient.cost = data["cost"]
        ingredient.unit = data["unit"]
        ingredient.category = data["category"]
        ingredient.supplier = data.get("supplier")
        db.session.flush()

        recipes = _recipes_using(ingredient_id)
        recost_recipes(recipes)

        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("Failed to update ingredient %s", ingredient_id)
        raise PersistenceError(str(getattr(e, "orig", e)))

    logger.info("Updated ingredient %s, recosted %d recipe(s)", ingredient_id, len(recipes))
    return serialize_ingredient(ingredient)


def delete_ingredient(ingredient_id: int) -> None:
    """
    Delete an ingredient that no recipe references.

    Raises:
        NotFound: If the ingredient does not exist
        IngredientInUse: If a recipe still lists it
        PersistenceError: For database errors
    """
    ingredient = db.session.get(Ingredient, ingredient_id)
    if not ingredient:
        raise NotFound("Ingredient not found")

    in_use = RecipeIngredient.query.filter_by(ingredient_id=ingredient_id).count()
    if in_use:
        raise IngredientInUse(
            f"Ingredient is used by {in_use} recipe(s)",
            recipe_count=in_use,
        )

    try:
        db.session.delete(ingredient)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("Failed to delete ingredient %s", ingredient_id)
        raise PersistenceError(str(getattr(e, "orig", e)))

    logger.info("Deleted ingredient %s", ingredient_id)
