"""WeeklyPlan domain entity: the ordered dish ids assigned to one ISO calendar week."""
from typing import List, Optional


def plan_id(year: int, week: int) -> str:
    return f"{year}-{week}"


class WeeklyPlan:
    def __init__(self, year: int, week: int, dish_ids: Optional[List[str]] = None):
        self.year = int(year)
        self.week = int(week)
        self.dish_ids = dish_ids[:] if dish_ids else []

    @property
    def id(self) -> str:
        return plan_id(self.year, self.week)

    def __str__(self) -> str:
        return f"Plan {self.id}: {len(self.dish_ids)} dishes"

    __repr__ = __str__

    def contains(self, dish_id: str) -> bool:
        return dish_id in self.dish_ids

    def add(self, dish_id: str) -> bool:
        '''Appends the dish; returns False when it was already planned for this week.'''
        if dish_id in self.dish_ids:
            return False
        self.dish_ids.append(dish_id)
        return True

    def remove(self, dish_id: str) -> bool:
        if dish_id not in self.dish_ids:
            return False
        self.dish_ids = [d for d in self.dish_ids if d != dish_id]
        return True

    def is_empty(self) -> bool:
        return not self.dish_ids

    @staticmethod
    def from_dict(data):
        d = dict(data)
        return WeeklyPlan(year=d.get("year"), week=d.get("week"),
                          dish_ids=[str(x) for x in d.get("dishIds") or []])

    def to_dict(self):
        return {"id": self.id, "year": self.year, "week": self.week, "dishIds": self.dish_ids}
