"""Best-effort reconstruction of recipes from shared payloads.

Imported recipes are always new: they get a fresh id and fresh timestamps
whatever the payload carries. The result is not attached to a session; hand
it to :func:`recipe_circle.crud.insert_recipe` to persist it.
"""
import json
import logging
from enum import Enum
from typing import Any, Dict, Optional, Union

from . import schemas
from .crud import new_recipe

logger = logging.getLogger(__name__)

PLACEHOLDER_TITLE = "Imported Recipe"

TEXT_FIELDS = (
    "title", "ingredients", "instructions", "category", "difficulty",
    "notes", "tags",
)


class ImportFormat(str, Enum):
    json = "json"
    text = "text"


class ParseFailure(ValueError):
    """The payload could not be turned into a recipe."""


def _decode(payload: Union[str, bytes]) -> str:
    if isinstance(payload, bytes):
        try:
            return payload.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ParseFailure("Payload is not valid UTF-8") from e
    return payload


def _text(data: Dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    return value if isinstance(value, str) else None


def _int(data: Dict[str, Any], key: str, default: int) -> int:
    value = data.get(key)
    # bool is an int subclass but never a valid count
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    return value if 0 <= value <= schemas.MAX_COUNT else default


def from_json(payload: Union[str, bytes]):
    try:
        data = json.loads(_decode(payload))
    except json.JSONDecodeError as e:
        raise ParseFailure(f"Payload is not valid JSON: {e.msg}") from e
    return from_record(data)


def from_record(data: Dict[str, Any]):
    """Build a recipe from an already decoded structured record."""
    if not isinstance(data, dict):
        raise ParseFailure("Payload must be a JSON object")

    fields = {key: _text(data, key) for key in TEXT_FIELDS}
    recipe = schemas.RecipeBase(
        **fields,
        cooking_time=_int(data, "cookingTime", 0),
        prep_time=_int(data, "prepTime", 0),
        servings=_int(data, "servings", 1),
    )
    return new_recipe(recipe)


def from_text(payload: Union[str, bytes]):
    text = _decode(payload)
    # only the title survives; the rest of the text is not parsed
    title = text.splitlines()[0] if text else PLACEHOLDER_TITLE
    return new_recipe(schemas.RecipeBase(title=title))


def parse(payload: Union[str, bytes], fmt: ImportFormat):
    fmt = ImportFormat(fmt)
    try:
        if fmt == ImportFormat.json:
            return from_json(payload)
        return from_text(payload)
    except ParseFailure as e:
        logger.warning("Import failed (%s): %s", fmt.value, e)
        raise
