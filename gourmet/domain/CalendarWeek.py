"""CalendarWeek: a labelled ISO week shown in the planner (derived, never stored)."""


class CalendarWeek:
    def __init__(self, year: int, week: int, label: str,
                 is_past: bool = False, is_current: bool = False, is_next: bool = False):
        self.year = year
        self.week = week
        self.label = label
        self.is_past = is_past
        self.is_current = is_current
        self.is_next = is_next

    def __str__(self) -> str:
        return f"{self.label} ({self.year}-W{self.week:02d})"

    __repr__ = __str__

    def __eq__(self, other):
        if not isinstance(other, CalendarWeek):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def to_dict(self):
        return {
            "year": self.year,
            "week": self.week,
            "label": self.label,
            "isPast": self.is_past,
            "isCurrent": self.is_current,
            "isNext": self.is_next,
        }
