from datetime import date, datetime

from django.test import SimpleTestCase

from domain.dashboard.calendar import (
    build_calendar,
    build_month_matrix,
    month_average_progress,
    month_projects,
    overlaps_month,
    year_projects,
    year_timeline,
)
from domain.shared.value_objects import MonthCursor, UrgencyBand

from .factories import make_project


class MonthMatrixTests(SimpleTestCase):

    def test_six_monday_first_weeks(self):
        weeks = build_month_matrix(MonthCursor(2025, 8))

        self.assertEqual(len(weeks), 6)
        self.assertTrue(all(len(week) == 7 for week in weeks))
        # 1 Aug 2025 is a Friday.
        self.assertEqual(weeks[0][0].day, date(2025, 7, 28))
        self.assertFalse(weeks[0][0].in_month)
        self.assertEqual(weeks[0][4].day, date(2025, 8, 1))
        self.assertTrue(weeks[0][4].in_month)
        self.assertEqual(weeks[-1][-1].day, date(2025, 9, 7))
        self.assertTrue(all(week[0].day.weekday() == 0 for week in weeks))

    def test_month_starting_on_monday(self):
        weeks = build_month_matrix(MonthCursor(2025, 9))
        self.assertEqual(weeks[0][0].day, date(2025, 9, 1))
        self.assertEqual(sum(cell.in_month for week in weeks for cell in week), 30)


class BuildCalendarTests(SimpleTestCase):
    now = datetime(2025, 8, 5, 12, 0)

    def test_deadline_counts_and_urgency(self):
        projects = [
            make_project('a', deadline=date(2025, 8, 10)),
            make_project('b', deadline=date(2025, 8, 10)),
            make_project('c', deadline=date(2025, 8, 1)),
            make_project('d', deadline=date(2025, 8, 30)),
        ]
        days = {cell.day: cell for week in build_calendar(projects, MonthCursor(2025, 8), self.now) for cell in week}

        self.assertEqual(days[date(2025, 8, 10)].deadline_count, 2)
        self.assertEqual(days[date(2025, 8, 10)].urgency, UrgencyBand.DUE_SOON)
        self.assertEqual(days[date(2025, 8, 1)].urgency, UrgencyBand.OVERDUE)
        self.assertEqual(days[date(2025, 8, 30)].urgency, UrgencyBand.ON_TRACK)
        self.assertEqual(days[date(2025, 8, 11)].deadline_count, 0)
        self.assertIsNone(days[date(2025, 8, 11)].urgency)
        self.assertTrue(days[date(2025, 8, 5)].is_today)
        self.assertFalse(days[date(2025, 8, 6)].is_today)


class MonthProgressTests(SimpleTestCase):

    def test_projects_due_in_month_sorted_by_deadline(self):
        late = make_project('late', deadline=date(2025, 8, 28), statuses=['done'])
        early = make_project('early', deadline=date(2025, 8, 3), statuses=['todo'])
        other = make_project('other', deadline=date(2025, 9, 2), statuses=['done'])
        cursor = MonthCursor(2025, 8)

        self.assertEqual([p.name for p in month_projects([late, other, early], cursor)], ['early', 'late'])
        self.assertEqual(month_average_progress([late, other, early], cursor), 50)
        self.assertEqual(month_average_progress([other], cursor), 0)


class TimelineTests(SimpleTestCase):

    def test_span_crossing_years(self):
        project = make_project(start_date=date(2025, 11, 15), deadline=date(2026, 1, 20))

        self.assertTrue(overlaps_month(project, 2025, 11))
        self.assertFalse(overlaps_month(project, 2025, 10))

        row_2025 = year_timeline([project], 2025)[0]
        self.assertEqual([m for m, on in enumerate(row_2025.months, start=1) if on], [11, 12])
        row_2026 = year_timeline([project], 2026)[0]
        self.assertEqual([m for m, on in enumerate(row_2026.months, start=1) if on], [1])

    def test_year_projects(self):
        project = make_project(start_date=date(2025, 11, 15), deadline=date(2026, 1, 20))
        self.assertEqual(year_projects([project], 2024), [])
        self.assertEqual(year_projects([project], 2027), [])
        self.assertEqual(year_projects([project], 2026), [project])

    def test_default_start_is_used(self):
        project = make_project(deadline=date(2025, 3, 10))
        row = year_timeline([project], 2025)[0]
        self.assertEqual([m for m, on in enumerate(row.months, start=1) if on], [2, 3])
