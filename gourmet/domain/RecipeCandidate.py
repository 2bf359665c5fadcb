"""RecipeCandidate: what the extraction pipeline found on a recipe page.

A candidate only pre-fills a dish form or a batch import; it has no ids and
no cooking stats.
"""
from typing import List, Optional

from gourmet.domain.Dish import Dish
from gourmet.domain.Ingredient import Ingredient


class RecipeCandidate:
    def __init__(self, name: str = "", ingredients: Optional[List[Ingredient]] = None,
                 instructions: str = "", description: str = "", image: str = "",
                 tags: Optional[List[str]] = None, recipe_link: str = ""):
        self.name = name
        self.ingredients = ingredients[:] if ingredients else []
        self.instructions = instructions
        self.description = description
        self.image = image
        self.tags = tags[:] if tags else []
        self.recipe_link = recipe_link

    def __str__(self) -> str:
        return f"{self.name or '?'} - {len(self.ingredients)} ingredients - from {self.recipe_link}"

    __repr__ = __str__

    @property
    def notes(self) -> str:
        parts = [p.strip() for p in (self.description, self.instructions) if p and p.strip()]
        return "\n\n".join(parts)

    def to_response(self):
        return {
            "success": True,
            "name": self.name,
            "ingredients": [i.to_dict() for i in self.ingredients],
            "notes": self.notes,
            "image": self.image,
            "tags": self.tags,
        }

    def merge_into(self, dish: Dish) -> Dish:
        """Fills empty fields of ``dish`` and unions the tags; manual input always wins."""
        if not dish.name and self.name:
            dish.name = self.name
        if not dish.ingredients and self.ingredients:
            dish.ingredients = [Ingredient(i.name, i.amount, i.unit) for i in self.ingredients]
        if not dish.notes and self.notes:
            dish.notes = self.notes
        if not dish.image and self.image:
            dish.image = self.image
        if not dish.recipe_link and self.recipe_link:
            dish.recipe_link = self.recipe_link
        for tag in self.tags:
            if tag not in dish.tags:
                dish.tags.append(tag)
        return dish

    def to_dish(self, default_name: str, default_tag: str) -> Dish:
        dish = Dish(name="")
        self.merge_into(dish)
        if not dish.name:
            dish.name = default_name
        if not dish.tags:
            dish.tags = [default_tag]
        return dish
