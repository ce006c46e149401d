import datetime

from django.test import TestCase

from core.elections_services import ElectionError, activate_elections, elections_to_activate
from core.models import Country, Election, Party, Region


class ElectionActivationTests(TestCase):
    def setUp(self) -> None:
        country = Country.objects.create(name="Freedonia")
        self.north = Region.objects.create(name="North", owner=country)
        self.south = Region.objects.create(name="South", owner=country)
        self.party = Party.objects.create(name="Unity", country=country)

    def _congress(self, region: Region, *, month: int, year: int, status: str = Election.Status.created) -> Election:
        return Election.objects.create(
            election_type=Election.Type.congress,
            region=region,
            month=month,
            year=year,
            status=status,
        )

    def test_nothing_is_activated_before_the_voting_day(self) -> None:
        election = self._congress(self.north, month=1, year=2027)

        self.assertEqual(
            activate_elections(election_type=Election.Type.congress, today=datetime.date(2027, 1, 24)),
            0,
        )
        election.refresh_from_db()
        self.assertEqual(election.status, Election.Status.created)

    def test_only_the_current_cycle_is_activated(self) -> None:
        january = [self._congress(self.north, month=1, year=2027), self._congress(self.south, month=1, year=2027)]
        february = self._congress(self.north, month=2, year=2027)

        updated = activate_elections(election_type=Election.Type.congress, today=datetime.date(2027, 1, 25))

        self.assertEqual(updated, 2)
        for election in january:
            election.refresh_from_db()
            self.assertEqual(election.status, Election.Status.active)
            self.assertTrue(election.is_active)
        february.refresh_from_db()
        self.assertEqual(february.status, Election.Status.created)

    def test_second_activation_updates_nothing(self) -> None:
        self._congress(self.north, month=1, year=2027)
        today = datetime.date(2027, 1, 25)

        self.assertEqual(activate_elections(election_type=Election.Type.congress, today=today), 1)
        self.assertEqual(activate_elections(election_type=Election.Type.congress, today=today), 0)

    def test_terminated_elections_are_never_reactivated(self) -> None:
        election = self._congress(self.north, month=1, year=2027, status=Election.Status.terminated)

        self.assertEqual(
            activate_elections(election_type=Election.Type.congress, today=datetime.date(2027, 1, 28)),
            0,
        )
        election.refresh_from_db()
        self.assertEqual(election.status, Election.Status.terminated)

    def test_other_election_types_are_left_alone(self) -> None:
        party_election = Election.objects.create(
            election_type=Election.Type.party_president,
            party=self.party,
            month=1,
            year=2027,
        )

        activate_elections(election_type=Election.Type.congress, today=datetime.date(2027, 1, 25))

        party_election.refresh_from_db()
        self.assertEqual(party_election.status, Election.Status.created)

    def test_party_elections_open_any_day_of_their_month(self) -> None:
        Election.objects.create(
            election_type=Election.Type.party_president,
            party=self.party,
            month=1,
            year=2027,
        )

        self.assertEqual(
            activate_elections(election_type=Election.Type.party_president, today=datetime.date(2027, 1, 1)),
            1,
        )

    def test_activation_is_logged(self) -> None:
        self._congress(self.north, month=1, year=2027)

        with self.assertLogs("core.elections_services", level="INFO") as logs:
            activate_elections(election_type=Election.Type.congress, today=datetime.date(2027, 1, 25))

        self.assertTrue(any("election_activate type=congress month=1 year=2027 updated=1" in line for line in logs.output))

    def test_unknown_election_type_is_an_election_error(self) -> None:
        with self.assertRaisesMessage(ElectionError, "unknown election type: 'senate'"):
            activate_elections(election_type="senate", today=datetime.date(2027, 1, 25))
        with self.assertRaises(ElectionError):
            elections_to_activate(election_type="senate", today=datetime.date(2027, 1, 25))
