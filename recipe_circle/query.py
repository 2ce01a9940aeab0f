"""Filter, sort and summarise recipe collections.

Everything here works on a snapshot: a sequence of objects that expose the
recipe attributes (ORM rows from :mod:`recipe_circle.crud` or transient
records). Inputs are never mutated and a new list is always returned.
"""
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence, Tuple

from .models import as_utc
from .schemas import ALL, QueryParams, SortOption

DIFFICULTIES = ("Easy", "Medium", "Hard")

_EARLIEST = datetime.min.replace(tzinfo=timezone.utc)


def _date_key(value: Optional[datetime]) -> datetime:
    return as_utc(value) or _EARLIEST


def matches_search(recipe, search_text: str) -> bool:
    """Case-insensitive substring match on title, ingredients or instructions."""
    if not search_text:
        return True
    # casefold, not lower: "STRASSE" also finds "Straße"
    needle = search_text.casefold()
    for field in (recipe.title, recipe.ingredients, recipe.instructions):
        if field and needle in field.casefold():
            return True
    return False


def _sort(recipes: List, option: SortOption) -> List:
    # sorted() is stable, also with reverse=True, so ties keep input order
    if option == SortOption.date_created:
        return sorted(
            recipes, key=lambda r: _date_key(r.date_created), reverse=True
        )
    if option == SortOption.title:
        return sorted(recipes, key=lambda r: r.title or "")
    if option == SortOption.cooking_time:
        return sorted(recipes, key=lambda r: r.cooking_time or 0)
    if option == SortOption.difficulty:
        return sorted(recipes, key=lambda r: r.difficulty or "")
    raise ValueError(f"Unknown sort option: {option!r}")


def query(recipes: Iterable, params: Optional[QueryParams] = None) -> List:
    """Return the recipes that pass every filter in `params`, sorted.

    Filters are ANDed: search text, then category, then difficulty. The
    special value ``"All"`` disables the category/difficulty filters.
    """
    params = params or QueryParams()
    result = [r for r in recipes if matches_search(r, params.search_text)]
    if params.category != ALL:
        result = [r for r in result if r.category == params.category]
    if params.difficulty != ALL:
        result = [r for r in result if r.difficulty == params.difficulty]
    return _sort(result, params.sort_option)


def distinct_categories(recipes: Iterable) -> List[str]:
    return sorted({r.category for r in recipes if r.category})


def fixed_difficulties() -> List[str]:
    # Deliberately not derived from stored data, unlike categories.
    return list(DIFFICULTIES)


def recipe_count_for_category(recipes: Iterable, category: str) -> int:
    return sum(1 for r in recipes if r.category == category)


def category_summaries(recipes: Sequence) -> List[Tuple[str, int]]:
    return [
        (name, recipe_count_for_category(recipes, name))
        for name in distinct_categories(recipes)
    ]


def favorites(recipes: Iterable, search_text: str = "") -> List:
    """Favourite recipes, most recently modified first."""
    result = [
        r for r in recipes
        if r.is_favorite and matches_search(r, search_text)
    ]
    return sorted(
        result, key=lambda r: _date_key(r.date_modified), reverse=True
    )
