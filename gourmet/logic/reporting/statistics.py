"""
Cooking statistics for the catalog.
Provides insights into which dishes get cooked, which are forgotten and how the weeks fill up.
"""
from collections import Counter
from typing import Dict, List, Tuple
import logging

from gourmet.domain.Dish import Dish
from gourmet.domain.Plan import WeeklyPlan
from gourmet.logic.shopping.normalizer import display_sort_key
from gourmet.utilities.constants import MAX_DISHES_PER_WEEK, RARELY_COOKED_THRESHOLD

logger = logging.getLogger(__name__)


class CookingStats:
    """Generate statistics from dishes and weekly plans."""

    def __init__(self, dishes: List[Dish], plans: List[WeeklyPlan]):
        self.dishes = list(dishes)
        self.plans = list(plans)

    def most_cooked(self, limit: int = 10) -> List[Tuple[str, int]]:
        """Dishes by times cooked, most first; ties by name."""
        cooked = [d for d in self.dishes if d.times_cooked > 0]
        cooked.sort(key=lambda d: (-d.times_cooked, display_sort_key(d.name)))
        return [(d.name, d.times_cooked) for d in cooked[:limit]]

    def never_cooked(self) -> List[str]:
        names = [d.name for d in self.dishes if d.times_cooked == 0]
        return sorted(names, key=display_sort_key)

    def rarely_cooked(self) -> List[str]:
        """Dishes cooked at least once but no more than the "rarely cooked" threshold."""
        names = [d.name for d in self.dishes if 0 < d.times_cooked <= RARELY_COOKED_THRESHOLD]
        return sorted(names, key=display_sort_key)

    def tag_distribution(self) -> Dict[str, int]:
        counter = Counter(tag for d in self.dishes for tag in d.tags)
        return dict(sorted(counter.items(), key=lambda kv: (-kv[1], display_sort_key(kv[0]))))

    def rating_distribution(self) -> Dict[int, int]:
        counter = Counter(d.rating for d in self.dishes)
        return {r: counter.get(r, 0) for r in range(0, 6)}

    def week_capacity(self) -> List[Dict]:
        """Planned dishes per week, newest week first."""
        rows = [{
            'id': p.id,
            'year': p.year,
            'week': p.week,
            'count': len(p.dish_ids),
            'capacity': MAX_DISHES_PER_WEEK,
            'isFull': len(p.dish_ids) >= MAX_DISHES_PER_WEEK,
        } for p in self.plans if p.dish_ids]
        rows.sort(key=lambda r: (r['year'], r['week']), reverse=True)
        return rows

    def summary(self) -> Dict:
        return {
            'totalDishes': len(self.dishes),
            'totalCooked': sum(d.times_cooked for d in self.dishes),
            'plannedWeeks': len([p for p in self.plans if p.dish_ids]),
            'mostCooked': [{'name': n, 'timesCooked': c} for n, c in self.most_cooked()],
            'neverCooked': self.never_cooked(),
            'rarelyCooked': self.rarely_cooked(),
            'tags': self.tag_distribution(),
            'ratings': self.rating_distribution(),
            'weeks': self.week_capacity(),
        }
