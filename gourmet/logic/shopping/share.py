"""Plain-text rendering of a shopping list for sharing or copying to the clipboard."""
from typing import List

from gourmet.domain.ShoppingList import AggregatedEntry, ShoppingList
from gourmet.utilities.constants import (
    MISSING_INGREDIENTS_TITLE, PANTRY_SECTION_TITLE, SHOPPING_LIST_TITLE,
)


def format_line(entry: AggregatedEntry) -> str:
    ing = entry.ingredient
    parts = [p.strip() for p in (ing.amount, ing.unit, ing.name) if p and p.strip()]
    return "- " + " ".join(parts)


def format_share_text(shopping: ShoppingList, title: str, include_pantry: bool = False) -> str:
    """Returns "Einkaufsliste für <title>:" followed by one "- amount unit name" line per entry.

    Planned dishes without ingredients are always listed at the end.
    """
    lines: List[str] = [f"{SHOPPING_LIST_TITLE} für {title}:", ""]
    lines.extend(format_line(e) for e in shopping.shopping_list)
    if include_pantry and shopping.pantry_list:
        lines.append("")
        lines.append(f"{PANTRY_SECTION_TITLE}:")
        lines.extend(format_line(e) for e in shopping.pantry_list)
    if shopping.dishes_without_ingredients:
        lines.append("")
        lines.append(f"{MISSING_INGREDIENTS_TITLE}:")
        lines.extend(f"- {name}" for name in shopping.dishes_without_ingredients)
    return "\n".join(lines)


__all__ = ["format_line", "format_share_text"]
