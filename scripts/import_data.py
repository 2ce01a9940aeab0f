import logging
from pathlib import Path

from recipe_circle import crud, models
from recipe_circle.db import init_db, SessionLocal
from recipe_circle.recipes import load_recipes

logger = logging.getLogger(__name__)


def seed(db, path):
    added = 0
    for recipe in load_recipes(path):
        if not recipe.title:
            continue
        exists = (
            db.query(models.Recipe)
            .filter(models.Recipe.title == recipe.title)
            .first()
        )
        if exists:
            continue
        crud.insert_recipe(db, recipe)
        added += 1
    return added


def main():
    logging.basicConfig(level=logging.INFO)
    init_db()
    p = Path(__file__).resolve().parents[1] / 'data' / 'recipes.json'
    if not p.exists():
        logger.warning('%s not found', p)
        return
    db = SessionLocal()
    try:
        added = seed(db, p)
    finally:
        db.close()
    logger.info('Imported %d recipes', added)


if __name__ == '__main__':
    main()
