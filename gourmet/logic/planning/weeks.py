"""Calendar week calculations for the weekly planner.

Weeks are ISO-8601 weeks (Monday start, week 1 contains the first Thursday),
taken from ``date.isocalendar()``.
"""
from datetime import date, timedelta
from typing import List, Optional, Tuple

from gourmet.domain.CalendarWeek import CalendarWeek
from gourmet.domain.Plan import WeeklyPlan
from gourmet.utilities.constants import (
    LABEL_LAST_WEEK, LABEL_NEXT_WEEK, LABEL_THIS_WEEK, LABEL_WEEK_PREFIX, MAX_DISHES_PER_WEEK,
)

# Friday, Saturday and Sunday already plan for the coming week
_NEXT_WEEK_FROM_WEEKDAY = 4


def iso_week(d: date) -> Tuple[int, int]:
    iso = d.isocalendar()
    return iso[0], iso[1]


def week_monday(year: int, week: int) -> date:
    return date.fromisocalendar(year, week, 1)


def shows_next_week(today: date) -> bool:
    return today.weekday() >= _NEXT_WEEK_FROM_WEEKDAY


def get_relevant_weeks(today: Optional[date] = None) -> List[CalendarWeek]:
    """Weeks shown in the planner, newest first.

    Next week (Fri-Sun only), this week, last week and the week before last,
    which is labelled with its number ("KW 7").
    """
    today = today or date.today()
    weeks: List[CalendarWeek] = []
    if shows_next_week(today):
        y, w = iso_week(today + timedelta(days=7))
        weeks.append(CalendarWeek(y, w, LABEL_NEXT_WEEK, is_next=True))
    y, w = iso_week(today)
    weeks.append(CalendarWeek(y, w, LABEL_THIS_WEEK, is_current=True))
    y, w = iso_week(today - timedelta(days=7))
    weeks.append(CalendarWeek(y, w, LABEL_LAST_WEEK, is_past=True))
    y, w = iso_week(today - timedelta(days=14))
    weeks.append(CalendarWeek(y, w, f"{LABEL_WEEK_PREFIX} {w}", is_past=True))
    return weeks


def is_week_full(plan: Optional[WeeklyPlan]) -> bool:
    if plan is None:
        return False
    return len(plan.dish_ids) >= MAX_DISHES_PER_WEEK


def target_week_for_new_assignment(today: Optional[date] = None) -> Tuple[int, int]:
    """(year, week) that a quick "add to plan" lands in."""
    today = today or date.today()
    if shows_next_week(today):
        return iso_week(today + timedelta(days=7))
    return iso_week(today)


__all__ = ["get_relevant_weeks", "is_week_full", "target_week_for_new_assignment",
           "iso_week", "week_monday"]
