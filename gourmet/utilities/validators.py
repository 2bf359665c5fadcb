"""
Input validation schemas using Pydantic for better data integrity.
"""
from urllib.parse import urlparse
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional

from gourmet.utilities.constants import MAX_RATING


def _check_http_url(value: str) -> str:
    value = (value or "").strip()
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError('URL must be an absolute http(s) address')
    return value


class IngredientInput(BaseModel):
    """Schema for ingredient input validation."""
    id: Optional[str] = None
    name: str = Field(..., min_length=1, max_length=200)
    amount: str = Field(default="", max_length=50)
    unit: str = Field(default="", max_length=30)

    @field_validator('name', 'amount', 'unit')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v:
            raise ValueError('Ingredient name cannot be empty')
        return v


class DishInput(BaseModel):
    """Schema for dish create/update payloads (camelCase as sent by the client)."""
    name: str = Field(..., min_length=1, max_length=200)
    image: Optional[str] = None
    rating: int = Field(default=0, ge=0, le=MAX_RATING)
    recipeLink: Optional[str] = None
    notes: Optional[str] = None
    ingredients: List[IngredientInput] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        """Validate dish name."""
        if not v.strip():
            raise ValueError('Dish name cannot be empty')
        return v.strip()

    @field_validator('recipeLink')
    @classmethod
    def validate_link(cls, v):
        if v is None or not v.strip():
            return None
        return _check_http_url(v)

    @field_validator('tags')
    @classmethod
    def validate_tags(cls, v):
        """Ensure tags are non-empty strings, keeping first occurrence order."""
        seen = []
        for tag in v:
            tag = tag.strip() if tag else ""
            if tag and tag not in seen:
                seen.append(tag)
        return seen


class RatingInput(BaseModel):
    rating: int = Field(..., ge=0, le=MAX_RATING)


class PlanAssignmentInput(BaseModel):
    """Schema for assigning a dish to a week; year/week default to the quick-add target."""
    dishId: str = Field(..., min_length=1)
    year: Optional[int] = Field(default=None, ge=2000, le=2100)
    week: Optional[int] = Field(default=None, ge=1, le=53)


class CategoriesInput(BaseModel):
    categories: List[str]

    @field_validator('categories')
    @classmethod
    def validate_categories(cls, v):
        """Category names must be non-empty and unique."""
        names = [c.strip() for c in v]
        if any(not n for n in names):
            raise ValueError('Category names cannot be empty')
        if len(set(names)) != len(names):
            raise ValueError('Category names must be unique')
        return names


class ScrapeRequest(BaseModel):
    url: str

    @field_validator('url')
    @classmethod
    def validate_url(cls, v):
        return _check_http_url(v)


class ImportRequest(BaseModel):
    """Batch import: one URL per entry, blank entries ignored."""
    urls: List[str] = Field(..., min_length=1)

    @field_validator('urls')
    @classmethod
    def drop_blank(cls, v):
        return [u.strip() for u in v if u and u.strip()]


class CategoryNameInput(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('Category name cannot be empty')
        return v.strip()


class CategoryMoveInput(BaseModel):
    """Drag and drop: move ``source`` to the slot currently held by ``target``."""
    source: str
    target: str
