import unittest
from datetime import date

from gourmet.domain.Plan import WeeklyPlan
from gourmet.logic.planning.weeks import (
    get_relevant_weeks, is_week_full, target_week_for_new_assignment,
)


class TestRelevantWeeks(unittest.TestCase):

    def test_tuesday_shows_three_weeks(self):
        weeks = get_relevant_weeks(date(2024, 1, 9))
        self.assertEqual([(w.year, w.week) for w in weeks], [(2024, 2), (2024, 1), (2023, 52)])
        self.assertEqual([w.label for w in weeks], ["Diese Woche", "Letzte Woche", "KW 52"])
        self.assertTrue(weeks[0].is_current)
        self.assertTrue(weeks[1].is_past and weeks[2].is_past)

    def test_saturday_shows_next_week_first(self):
        weeks = get_relevant_weeks(date(2024, 1, 13))
        self.assertEqual(len(weeks), 4)
        self.assertEqual(weeks[0].label, "Nächste Woche")
        self.assertTrue(weeks[0].is_next)
        self.assertEqual((weeks[0].year, weeks[0].week), (2024, 3))

    def test_friday_and_sunday_show_next_week(self):
        self.assertEqual(len(get_relevant_weeks(date(2024, 1, 12))), 4)
        self.assertEqual(len(get_relevant_weeks(date(2024, 1, 14))), 4)
        self.assertEqual(len(get_relevant_weeks(date(2024, 1, 11))), 3)

    def test_iso_year_boundary(self):
        # 2021-01-01 is a Friday in ISO week 53 of 2020
        weeks = get_relevant_weeks(date(2021, 1, 1))
        self.assertEqual([(w.year, w.week) for w in weeks], [(2021, 1), (2020, 53), (2020, 52), (2020, 51)])
        self.assertEqual(weeks[3].label, "KW 51")


class TestWeekCapacity(unittest.TestCase):

    def test_full_at_five(self):
        plan = WeeklyPlan(2024, 10, ["a", "b", "c", "d"])
        self.assertFalse(is_week_full(plan))
        plan.add("e")
        self.assertTrue(is_week_full(plan))
        plan.add("f")
        self.assertTrue(is_week_full(plan))

    def test_missing_plan_is_not_full(self):
        self.assertFalse(is_week_full(None))


class TestTargetWeek(unittest.TestCase):

    def test_weekday_targets_current_week(self):
        self.assertEqual(target_week_for_new_assignment(date(2024, 1, 9)), (2024, 2))

    def test_weekend_targets_next_week(self):
        self.assertEqual(target_week_for_new_assignment(date(2024, 1, 14)), (2024, 3))
