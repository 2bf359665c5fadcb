"""ShoppingList aggregate: consolidated entries to buy plus the assumed-in-stock pantry group."""
from typing import List, Optional

from gourmet.domain.Ingredient import Ingredient


class AggregatedEntry:
    def __init__(self, ingredient: Ingredient, sources: Optional[List[dict]] = None):
        self.ingredient = ingredient
        self.sources = sources[:] if sources else []

    def add_source(self, dish_id: str, dish_name: str):
        '''Records the contributing dish once per dish id.'''
        if any(s["dishId"] == dish_id for s in self.sources):
            return
        self.sources.append({"dishId": dish_id, "dishName": dish_name})

    def __str__(self) -> str:
        names = ", ".join(s["dishName"] for s in self.sources)
        return f"{self.ingredient} ({names})"

    __repr__ = __str__

    def to_dict(self):
        return {"ingredient": self.ingredient.to_dict(), "sources": self.sources}


class ShoppingList:
    def __init__(self, shopping_list: Optional[List[AggregatedEntry]] = None,
                 pantry_list: Optional[List[AggregatedEntry]] = None,
                 dishes_without_ingredients: Optional[List[str]] = None):
        self.shopping_list = shopping_list[:] if shopping_list else []
        self.pantry_list = pantry_list[:] if pantry_list else []
        # names of planned dishes that contribute nothing to either list
        self.dishes_without_ingredients = dishes_without_ingredients[:] if dishes_without_ingredients else []

    def is_empty(self) -> bool:
        return not self.shopping_list and not self.pantry_list

    def __len__(self):
        return len(self.shopping_list) + len(self.pantry_list)

    def __str__(self) -> str:
        return f"Shopping List ({len(self.shopping_list)} to buy, {len(self.pantry_list)} in pantry)"

    __repr__ = __str__

    def to_dict(self):
        return {
            "shoppingList": [e.to_dict() for e in self.shopping_list],
            "pantryList": [e.to_dict() for e in self.pantry_list],
            "dishesWithoutIngredients": self.dishes_without_ingredients,
        }
