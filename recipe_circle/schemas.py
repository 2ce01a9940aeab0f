from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

ALL = "All"

# times and servings are stored as 16-bit counts
MAX_COUNT = 32767


class SortOption(str, Enum):
    date_created = "dateCreated"
    title = "title"
    cooking_time = "cookingTime"
    difficulty = "difficulty"


class RecipeBase(BaseModel):
    title: Optional[str] = Field(
        None, json_schema_extra={"example": "Chocolate Chip Cookies"}
    )
    ingredients: Optional[str] = Field(
        None,
        json_schema_extra={"example": "2 cups flour\n1 cup butter\n2 eggs"},
    )
    instructions: Optional[str] = Field(
        None,
        json_schema_extra={
            "example": "1. Mix dry ingredients\n2. Bake at 375°F"
        },
    )
    category: Optional[str] = Field(
        None, json_schema_extra={"example": "Dessert"}
    )
    difficulty: Optional[str] = Field(
        None, json_schema_extra={"example": "Easy"}
    )
    cooking_time: int = Field(0, ge=0, le=MAX_COUNT)
    prep_time: int = Field(0, ge=0, le=MAX_COUNT)
    servings: int = Field(1, ge=0, le=MAX_COUNT)
    notes: Optional[str] = None
    tags: Optional[str] = Field(
        None, json_schema_extra={"example": "baking, sweet"}
    )
    is_favorite: bool = False


class RecipeCreate(RecipeBase):
    # the data layer accepts a missing title; creation through the API doesn't
    title: str = Field(..., min_length=1)


class Recipe(RecipeBase):
    id: str
    total_time: int = 0
    date_created: Optional[datetime] = None
    date_modified: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class RecipePage(BaseModel):
    items: List[Recipe]
    total: int
    page: int
    page_size: int


class QueryParams(BaseModel):
    """Filter and sort options for :func:`recipe_circle.query.query`."""

    search_text: str = ""
    category: str = ALL
    difficulty: str = ALL
    sort_option: SortOption = SortOption.date_created


class CategorySummary(BaseModel):
    name: str
    count: int
