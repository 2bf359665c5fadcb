"""Shopping list consolidation.

Provides aggregate(occurrences) which merges the ingredient lines of all
dishes planned for a week into one ShoppingList.
"""
import math
from typing import Dict, Iterable, Optional, Tuple

from gourmet.domain.Ingredient import Ingredient
from gourmet.domain.ShoppingList import AggregatedEntry, ShoppingList
from gourmet.logic.shopping.normalizer import normalize, display_sort_key
from gourmet.utilities.constants import PANTRY_STAPLES, SKIPPED_INGREDIENTS

Occurrence = Tuple[Ingredient, str, str]

_SKIPPED = {normalize(n) for n in SKIPPED_INGREDIENTS}
_STAPLES = {normalize(n) for n in PANTRY_STAPLES}


def _key(ing: Ingredient) -> str:
    return normalize(ing.name) + "-" + (ing.unit or "").strip().lower()


def _as_number(amount: str) -> Optional[float]:
    """Plain decimal with '.' separator, else None ("1 Bund", "1,5", "" are not numbers)."""
    text = (amount or "").strip()
    if not text or "," in text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def _format_number(value: float) -> str:
    if value == int(value):
        return str(int(value))
    return f"{value:.3f}".rstrip("0").rstrip(".")


def is_pantry_staple(name: str) -> bool:
    return normalize(name) in _STAPLES


def aggregate(occurrences: Iterable[Occurrence]) -> ShoppingList:
    """Merge ingredient occurrences into a shopping list and a pantry list.

    Args:
        occurrences: (ingredient, dish_id, dish_name) tuples in plan order.

    Returns:
        ShoppingList whose two groups are sorted by display name. Lines with
        the same normalized name and unit are merged: numeric amounts are
        summed, otherwise the first amount is kept. Water is dropped.
    """
    entries: Dict[str, AggregatedEntry] = {}

    for ing, dish_id, dish_name in occurrences:
        if normalize(ing.name) in _SKIPPED:
            continue
        k = _key(ing)
        entry = entries.get(k)
        if entry is None:
            entry = AggregatedEntry(Ingredient(name=ing.name.strip(), amount=ing.amount, unit=ing.unit))
            entries[k] = entry
        else:
            current = _as_number(entry.ingredient.amount)
            incoming = _as_number(ing.amount)
            if current is not None and incoming is not None and math.isfinite(current + incoming):
                entry.ingredient.amount = _format_number(current + incoming)
        entry.add_source(dish_id, dish_name)

    result = ShoppingList()
    for entry in entries.values():
        if is_pantry_staple(entry.ingredient.name):
            result.pantry_list.append(entry)
        else:
            result.shopping_list.append(entry)

    result.shopping_list.sort(key=lambda e: display_sort_key(e.ingredient.name))
    result.pantry_list.sort(key=lambda e: display_sort_key(e.ingredient.name))
    return result


__all__ = ["aggregate", "is_pantry_staple"]
