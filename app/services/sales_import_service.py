"""
Sales Import Service

Bulk update of monthly sales volumes, matched to recipes by name.
"""

import logging
from datetime import datetime
from typing import Dict, Any, List
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from app.extensions import db
from app.models.recipe import Recipe
from app.services.recipe_service import recost_recipes
from app.utils.errors import PersistenceError

logger = logging.getLogger(__name__)


def import_sales(items: List[Dict[str, Any]]) -> Dict[str, List[Dict[str, Any]]]:
    """
    Set monthly_sales for each named recipe and recompute its figures.

    Args:
        items: List of {name, sales}; names match case-insensitively

    Returns:
        {"updated": [{id, name, sales}], "failed": [{name, error}]}

    Raises:
        PersistenceError: For database errors (no recipe is changed)
    """
    updated = []
    failed = []
    touched = []

    try:
        for item in items:
            name = item["name"].strip()
            recipe = Recipe.query.filter(func.lower(Recipe.name) == name.lower()).first()
            if not recipe:
                failed.append({"name": name, "error": "Recipe not found"})
                continue

            recipe.monthly_sales = item["sales"]
            recipe.updated_at = datetime.utcnow()
            touched.append(recipe)
            updated.append({"id": recipe.id, "name": recipe.name, "sales": item["sales"]})

        recost_recipes(touched)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("Sales import failed, rolled back")
        raise PersistenceError(str(getattr(e, "orig", e)))

    logger.info("Sales import: %d updated, %d failed", len(updated), len(failed))
    return {"updated": updated, "failed": failed}
