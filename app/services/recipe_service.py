"""
Recipe Service

Handles recipe CRUD operations. Every write runs in a single transaction:
the recipe row, its ingredient lines and its derived cost figures are
committed together or not at all.
"""

import logging
from datetime import datetime
from typing import Dict, Any, Iterable, List, Optional
from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError

from app.extensions import db
from app.models.ingredient import Ingredient
from app.models.recipe import Recipe
from app.models.recipe_ingredient import RecipeIngredient
from app.services.costing_constants import MENU_FLAGS
from app.services.costing_service import apply_costing, calculate_recipe_costing
from app.utils.errors import DuplicateEntry, NotFound, PersistenceError, ValidationFailed

logger = logging.getLogger(__name__)

# Columns copied straight from the validated payload
EDITABLE_FIELDS = (
    "name", "category", "description", "preparation_steps", "cooking_method",
    "plating_instructions", "chefs_notes", "selling_price", "monthly_sales",
    "overhead", "print_menu_ready", "qr_menu_ready", "website_menu_ready",
    "available_for_delivery", "image_url", "delivery_image_url",
)

LIST_ORDERS = ("name", "updated")


def load_ingredient_lines(recipe_ids: Iterable[int]) -> Dict[int, List[Dict[str, Any]]]:
    """
    Fetch the ingredient lines of several recipes in one joined query.

    Returns:
        Map of recipe ID to its lines ({id, name, cost, unit, category, quantity}),
        each list ordered by ingredient name
    """
    recipe_ids = list(recipe_ids)
    lines_by_recipe: Dict[int, List[Dict[str, Any]]] = {rid: [] for rid in recipe_ids}
    if not recipe_ids:
        return lines_by_recipe

    rows = (
        db.session.query(RecipeIngredient, Ingredient)
        .join(Ingredient, Ingredient.id == RecipeIngredient.ingredient_id)
        .filter(RecipeIngredient.recipe_id.in_(recipe_ids))
        .order_by(Ingredient.name)
        .all()
    )

    for line, ingredient in rows:
        lines_by_recipe[line.recipe_id].append({
            "id": ingredient.id,
            "name": ingredient.name,
            "cost": float(ingredient.cost),
            "unit": ingredient.unit,
            "category": ingredient.category,
            "quantity": float(line.quantity),
        })

    return lines_by_recipe


def serialize_recipe(recipe: Recipe, lines: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Build the API shape of a recipe with freshly computed cost figures."""
    costing = calculate_recipe_costing(
        lines,
        overhead=recipe.overhead,
        selling_price=recipe.selling_price,
        sales=recipe.monthly_sales,
    )
    return {
        "id": recipe.id,
        "name": recipe.name,
        "category": recipe.category,
        "description": recipe.description,
        "preparation_steps": recipe.preparation_steps,
        "cooking_method": recipe.cooking_method,
        "plating_instructions": recipe.plating_instructions,
        "chefs_notes": recipe.chefs_notes,
        "selling_price": float(recipe.selling_price or 0),
        "monthly_sales": int(recipe.monthly_sales or 0),
        "overhead": float(recipe.overhead if recipe.overhead is not None else 0),
        "print_menu_ready": bool(recipe.print_menu_ready),
        "qr_menu_ready": bool(recipe.qr_menu_ready),
        "website_menu_ready": bool(recipe.website_menu_ready),
        "available_for_delivery": bool(recipe.available_for_delivery),
        "image_url": recipe.image_url,
        "delivery_image_url": recipe.delivery_image_url,
        "ingredients_cost": costing["ingredients_cost"],
        "total_cost": costing["total_cost"],
        "profit_margin": costing["profit_margin"],
        "monthly_revenue": costing["monthly_revenue"],
        "monthly_profit": costing["monthly_profit"],
        "markup_factor": costing["markup_factor"],
        "is_complete": costing["is_valid"],
        "created_at": recipe.created_at.isoformat() if recipe.created_at else None,
        "updated_at": recipe.updated_at.isoformat() if recipe.updated_at else None,
        "ingredients": lines,
    }


def list_recipes(
    order: str = "name",
    search: Optional[str] = None,
    category: Optional[str] = None,
    menu: Optional[str] = None
) -> List[Dict[str, Any]]:
    """
    List recipes with their ingredients.

    Args:
        order: "name" (A-Z) or "updated" (most recently updated first)
        search: Substring of the name or chef's notes
        category: Exact recipe category
        menu: One of print/qr/website/delivery; keeps recipes with that flag set
    """
    query = Recipe.query

    if search:
        term = f"%{search}%"
        query = query.filter(or_(
            Recipe.name.ilike(term),
            Recipe.chefs_notes.ilike(term)
        ))
    if category:
        query = query.filter(Recipe.category == category)
    if menu:
        query = query.filter(getattr(Recipe, MENU_FLAGS[menu]).is_(True))

    if order == "updated":
        query = query.order_by(Recipe.updated_at.desc(), Recipe.id.desc())
    else:
        query = query.order_by(Recipe.name, Recipe.id)

    recipes = query.all()
    lines_by_recipe = load_ingredient_lines(r.id for r in recipes)
    return [serialize_recipe(r, lines_by_recipe.get(r.id, [])) for r in recipes]


def get_recipe(recipe_id: int) -> Dict[str, Any]:
    """
    Raises:
        NotFound: If the recipe does not exist
    """
    recipe = db.session.get(Recipe, recipe_id)
    if not recipe:
        raise NotFound("Recipe not found")
    return serialize_recipe(recipe, load_ingredient_lines([recipe_id])[recipe_id])


def _resolve_lines(lines: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Attach unit costs to submitted lines; every ingredient must exist."""
    if not lines:
        raise ValidationFailed(
            "At least one ingredient is required",
            details={"ingredients": ["At least one ingredient is required"]},
        )

    ids = [line["id"] for line in lines]
    found = {ing.id: ing for ing in Ingredient.query.filter(Ingredient.id.in_(ids)).all()}
    missing = [i for i in ids if i not in found]
    if missing:
        raise ValidationFailed(
            "Unknown ingredient id(s): " + ", ".join(str(i) for i in missing),
            details={"ingredients": [f"Ingredient {i} does not exist" for i in missing]},
        )

    return [
        {"id": line["id"], "quantity": line["quantity"], "cost": found[line["id"]].cost}
        for line in lines
    ]


def _ensure_unique_name(name: str, exclude_id: Optional[int] = None) -> None:
    query = Recipe.query.filter(func.lower(Recipe.name) == name.lower())
    if exclude_id is not None:
        query = query.filter(Recipe.id != exclude_id)
    if query.first():
        raise DuplicateEntry("Recipe with this name already exists", field="name")


def _insert_lines(recipe_id: int, lines: List[Dict[str, Any]]) -> None:
    for line in lines:
        db.session.add(RecipeIngredient(
            recipe_id=recipe_id,
            ingredient_id=line["id"],
            quantity=line["quantity"]
        ))
    db.session.flush()


def create_recipe(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Create a recipe with its ingredient lines.

    Args:
        data: Validated RecipeSchema payload; ingredients is [{id, quantity}]

    Returns:
        The stored recipe, joined with its ingredients

    Raises:
        ValidationFailed: No ingredients, or an unknown ingredient id
        DuplicateEntry: Name already used by another recipe
        PersistenceError: For database errors (nothing is kept)
    """
    lines = _resolve_lines(data.get("ingredients") or [])
    _ensure_unique_name(data["name"])

    try:
        recipe = Recipe(**{field: data.get(field) for field in EDITABLE_FIELDS if field in data})
        apply_costing(recipe, lines)
        recipe.updated_at = datetime.utcnow()
        db.session.add(recipe)
        db.session.flush()

        _insert_lines(recipe.id, lines)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("Failed to create recipe %r, rolled back", data.get("name"))
        raise PersistenceError(str(getattr(e, "orig", e)))

    logger.info("Created recipe %s (%s) with %d ingredient(s)", recipe.id, recipe.name, len(lines))
    return get_recipe(recipe.id)


def update_recipe(recipe_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Replace a recipe's fields and its full ingredient list.

    The existing lines are deleted and the submitted ones inserted, so the
    stored list always equals the payload.

    Raises:
        NotFound: If the recipe does not exist
        ValidationFailed: No ingredients, or an unknown ingredient id
        DuplicateEntry: Name already used by another recipe
        PersistenceError: For database errors (previous state is kept)
    """
    recipe = db.session.get(Recipe, recipe_id)
    if not recipe:
        raise NotFound("Recipe not found")

    lines = _resolve_lines(data.get("ingredients") or [])
    _ensure_unique_name(data["name"], exclude_id=recipe_id)

    try:
        for field in EDITABLE_FIELDS:
            if field in data:
                setattr(recipe, field, data[field])
        apply_costing(recipe, lines)
        recipe.updated_at = datetime.utcnow()

        RecipeIngredient.query.filter_by(recipe_id=recipe_id).delete()
        _insert_lines(recipe_id, lines)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("Failed to update recipe %s, rolled back", recipe_id)
        raise PersistenceError(str(getattr(e, "orig", e)))

    logger.info("Updated recipe %s with %d ingredient(s)", recipe_id, len(lines))
    return get_recipe(recipe_id)


def delete_recipe(recipe_id: int) -> None:
    """
    Delete a recipe's ingredient lines, then the recipe itself.

    Raises:
        NotFound: If no recipe row was deleted
        PersistenceError: For database errors
    """
    try:
        RecipeIngredient.query.filter_by(recipe_id=recipe_id).delete()
        deleted = Recipe.query.filter_by(id=recipe_id).delete()
        if deleted == 0:
            db.session.rollback()
            raise NotFound("Recipe not found")
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("Failed to delete recipe %s, rolled back", recipe_id)
        raise PersistenceError(str(getattr(e, "orig", e)))

    logger.info("Deleted recipe %s", recipe_id)


def recost_recipes(recipes: Iterable[Recipe]) -> None:
    """Recompute stored cost figures in the current transaction (caller commits)."""
    recipes = list(recipes)
    lines_by_recipe = load_ingredient_lines(r.id for r in recipes)
    for recipe in recipes:
        apply_costing(recipe, lines_by_recipe.get(recipe.id, []))
