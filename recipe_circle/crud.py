import logging

from sqlalchemy.orm import Session

from . import models, schemas

logger = logging.getLogger(__name__)

UNCATEGORIZED = "Uncategorized"


def _apply(db_recipe: models.Recipe, data: schemas.RecipeBase, exclude=None):
    for field, value in data.model_dump(exclude=exclude).items():
        setattr(db_recipe, field, value)
    db_recipe.recompute_total_time()


def new_recipe(data: schemas.RecipeBase, image_data: bytes | None = None):
    """Build a transient recipe with a fresh id and creation stamps."""
    now = models.utcnow()
    db_recipe = models.Recipe(
        id=models.new_id(),
        image_data=image_data,
        date_created=now,
        date_modified=now,
    )
    _apply(db_recipe, data)
    return db_recipe


def get_recipe(db: Session, recipe_id: str):
    return db.query(models.Recipe).filter(models.Recipe.id == recipe_id).first()


def get_recipes(db: Session):
    return (
        db.query(models.Recipe)
        .order_by(models.Recipe.date_created.desc())
        .all()
    )


def insert_recipe(db: Session, db_recipe: models.Recipe):
    db.add(db_recipe)
    db.commit()
    db.refresh(db_recipe)
    logger.info("Created recipe %s", db_recipe.id)
    return db_recipe


def create_recipe(
    db: Session, recipe: schemas.RecipeBase, image_data: bytes | None = None
):
    return insert_recipe(db, new_recipe(recipe, image_data=image_data))


def update_recipe(
    db: Session,
    recipe_id: str,
    recipe: schemas.RecipeBase,
    image_data: bytes | None = None,
):
    db_recipe = get_recipe(db, recipe_id)
    if not db_recipe:
        return None
    # the favourite flag only changes through set_favorite/toggle_favorite
    _apply(db_recipe, recipe, exclude={"is_favorite"})
    if image_data is not None:
        db_recipe.image_data = image_data
    db_recipe.date_modified = models.utcnow()
    db.add(db_recipe)
    db.commit()
    db.refresh(db_recipe)
    logger.info("Updated recipe %s", recipe_id)
    return db_recipe


def set_favorite(db: Session, recipe_id: str, value: bool):
    db_recipe = get_recipe(db, recipe_id)
    if not db_recipe:
        return None
    db_recipe.is_favorite = value
    db_recipe.date_modified = models.utcnow()
    db.commit()
    db.refresh(db_recipe)
    return db_recipe


def toggle_favorite(db: Session, recipe_id: str):
    db_recipe = get_recipe(db, recipe_id)
    if not db_recipe:
        return None
    return set_favorite(db, recipe_id, not db_recipe.is_favorite)


def uncategorize(db: Session, category: str) -> int:
    """Move every recipe in `category` to "Uncategorized"."""
    db_recipes = (
        db.query(models.Recipe)
        .filter(models.Recipe.category == category)
        .all()
    )
    now = models.utcnow()
    for db_recipe in db_recipes:
        db_recipe.category = UNCATEGORIZED
        db_recipe.date_modified = now
    db.commit()
    logger.info("Moved %d recipe(s) out of %r", len(db_recipes), category)
    return len(db_recipes)


def delete_recipe(db: Session, recipe_id: str):
    db_recipe = get_recipe(db, recipe_id)
    if not db_recipe:
        return False
    db.delete(db_recipe)
    db.commit()
    logger.info("Deleted recipe %s", recipe_id)
    return True
