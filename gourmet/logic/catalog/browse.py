"""Dish catalog browsing: text search, category filter and sort orders."""
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from gourmet.domain.Dish import Dish
from gourmet.logic.shopping.normalizer import display_sort_key
from gourmet.utilities.constants import RARELY_COOKED_THRESHOLD

SORT_NAME = "name"
SORT_RATING = "rating"
SORT_LAST_COOKED = "lastCooked"
SORT_OPTIONS = (SORT_NAME, SORT_RATING, SORT_LAST_COOKED)

_NEVER = datetime.min.replace(tzinfo=timezone.utc)


def filter_dishes(dishes: Iterable[Dish], search: str = "", categories: Optional[List[str]] = None,
                  rarely_cooked: bool = False) -> List[Dish]:
    """Keep dishes matching every given criterion.

    search is a case-insensitive substring of the name; every selected
    category must be among the dish tags; rarely_cooked keeps dishes cooked
    at most three times.
    """
    needle = (search or "").strip().casefold()
    selected = [c for c in categories or [] if c]
    result = []
    for dish in dishes:
        if needle and needle not in dish.name.casefold():
            continue
        if selected and not all(c in dish.tags for c in selected):
            continue
        if rarely_cooked and dish.times_cooked > RARELY_COOKED_THRESHOLD:
            continue
        result.append(dish)
    return result


def sort_dishes(dishes: Iterable[Dish], sort_by: str = SORT_NAME) -> List[Dish]:
    """rating and lastCooked sort descending, name ascending; name breaks ties."""
    dishes = sorted(dishes, key=lambda d: display_sort_key(d.name))
    if sort_by == SORT_RATING:
        return sorted(dishes, key=lambda d: d.rating, reverse=True)
    if sort_by == SORT_LAST_COOKED:
        return sorted(dishes, key=lambda d: d.last_cooked or _NEVER, reverse=True)
    return dishes


def browse(dishes: Iterable[Dish], search: str = "", categories: Optional[List[str]] = None,
           rarely_cooked: bool = False, sort_by: str = SORT_NAME) -> List[Dish]:
    return sort_dishes(filter_dishes(dishes, search, categories, rarely_cooked), sort_by)


__all__ = ["browse", "filter_dishes", "sort_dishes", "SORT_OPTIONS"]
