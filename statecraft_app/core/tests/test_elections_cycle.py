import datetime

from django.test import SimpleTestCase, override_settings

from core.elections_cycle import (
    ElectionCycle,
    current_cycle,
    rollover_day,
    upcoming_cycle,
    voting_window_open,
)


class ElectionCycleTests(SimpleTestCase):
    def test_next_wraps_december_into_next_year(self) -> None:
        self.assertEqual(ElectionCycle(year=2026, month=12).next(), ElectionCycle(year=2027, month=1))
        self.assertEqual(ElectionCycle(year=2026, month=3).next(), ElectionCycle(year=2026, month=4))

    def test_month_out_of_range_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            ElectionCycle(year=2026, month=13)
        with self.assertRaises(ValueError):
            ElectionCycle(year=2026, month=0)

    def test_cycles_order_chronologically(self) -> None:
        self.assertLess(ElectionCycle(year=2026, month=12), ElectionCycle(year=2027, month=1))

    def test_congress_rolls_over_after_day_25(self) -> None:
        self.assertEqual(
            upcoming_cycle(election_type="congress", today=datetime.date(2026, 6, 25)),
            ElectionCycle(year=2026, month=6),
        )
        self.assertEqual(
            upcoming_cycle(election_type="congress", today=datetime.date(2026, 6, 26)),
            ElectionCycle(year=2026, month=7),
        )

    def test_country_president_rolls_over_after_day_5(self) -> None:
        self.assertEqual(
            upcoming_cycle(election_type="country_president", today=datetime.date(2026, 6, 5)),
            ElectionCycle(year=2026, month=6),
        )
        self.assertEqual(
            upcoming_cycle(election_type="country_president", today=datetime.date(2026, 6, 6)),
            ElectionCycle(year=2026, month=7),
        )

    def test_rollover_in_december_moves_to_january_of_next_year(self) -> None:
        self.assertEqual(
            upcoming_cycle(election_type="congress", today=datetime.date(2026, 12, 26)),
            ElectionCycle(year=2027, month=1),
        )
        self.assertEqual(
            upcoming_cycle(election_type="country_president", today=datetime.date(2026, 12, 6)),
            ElectionCycle(year=2027, month=1),
        )

    def test_party_president_follows_calendar_month(self) -> None:
        self.assertIsNone(rollover_day("party_president"))
        self.assertEqual(
            upcoming_cycle(election_type="party_president", today=datetime.date(2026, 12, 31)),
            ElectionCycle(year=2026, month=12),
        )

    def test_current_cycle_is_calendar_month(self) -> None:
        self.assertEqual(current_cycle(today=datetime.date(2027, 1, 26)), ElectionCycle(year=2027, month=1))

    def test_voting_window_opens_on_rollover_day(self) -> None:
        self.assertFalse(voting_window_open(election_type="congress", today=datetime.date(2027, 1, 24)))
        self.assertTrue(voting_window_open(election_type="congress", today=datetime.date(2027, 1, 25)))
        self.assertFalse(voting_window_open(election_type="country_president", today=datetime.date(2027, 1, 4)))
        self.assertTrue(voting_window_open(election_type="country_president", today=datetime.date(2027, 1, 5)))
        self.assertTrue(voting_window_open(election_type="party_president", today=datetime.date(2027, 1, 1)))

    def test_unknown_election_type_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            upcoming_cycle(election_type="senate", today=datetime.date(2026, 1, 1))

    @override_settings(ELECTION_ROLLOVER_DAYS={"congress": 10, "country_president": 5, "party_president": None})
    def test_rollover_days_come_from_settings(self) -> None:
        self.assertEqual(
            upcoming_cycle(election_type="congress", today=datetime.date(2026, 6, 11)),
            ElectionCycle(year=2026, month=7),
        )
