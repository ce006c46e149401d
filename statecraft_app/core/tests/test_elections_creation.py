import datetime
from unittest.mock import patch

from django.db import IntegrityError, transaction
from django.test import TestCase

from core.elections_services import ElectionError, create_elections
from core.models import Country, Election, Party, Region


class ElectionCreationTests(TestCase):
    def setUp(self) -> None:
        self.freedonia = Country.objects.create(
            name="Freedonia",
            election_system=Country.ElectionSystem.electoral_college,
            total_electoral_votes=20,
        )
        self.sylvania = Country.objects.create(name="Sylvania")
        self.north = Region.objects.create(name="North", owner=self.freedonia)
        self.south = Region.objects.create(name="South", owner=self.freedonia)
        self.coast = Region.objects.create(name="Coast", owner=self.sylvania)
        self.party = Party.objects.create(name="Unity", country=self.freedonia)

    def test_congress_creates_one_inactive_election_per_region(self) -> None:
        created = create_elections(election_type=Election.Type.congress, today=datetime.date(2026, 12, 26))

        self.assertEqual(created, 3)
        elections = Election.objects.of_type(Election.Type.congress)
        self.assertEqual(sorted(e.region_id for e in elections), sorted([self.north.id, self.south.id, self.coast.id]))
        for election in elections:
            self.assertEqual((election.month, election.year), (1, 2027))
            self.assertEqual(election.status, Election.Status.created)
            self.assertFalse(election.is_active)
            self.assertFalse(election.is_completed)
            self.assertFalse(election.candidates.exists())
            self.assertEqual(election.winner, [])

    def test_repeated_creation_for_the_same_cycle_inserts_nothing(self) -> None:
        today = datetime.date(2026, 6, 10)
        self.assertEqual(create_elections(election_type=Election.Type.congress, today=today), 3)
        self.assertEqual(create_elections(election_type=Election.Type.congress, today=today), 0)

        self.assertEqual(Election.objects.of_type(Election.Type.congress).count(), 3)

    def test_new_region_gets_an_election_on_rerun(self) -> None:
        today = datetime.date(2026, 6, 10)
        create_elections(election_type=Election.Type.congress, today=today)
        east = Region.objects.create(name="East", owner=self.sylvania)

        self.assertEqual(create_elections(election_type=Election.Type.congress, today=today), 1)
        self.assertTrue(Election.objects.for_target(election_type=Election.Type.congress, target_id=east.id).exists())

    def test_country_president_snapshots_the_election_system(self) -> None:
        created = create_elections(election_type=Election.Type.country_president, today=datetime.date(2026, 3, 4))

        self.assertEqual(created, 2)
        freedonia_election = Election.objects.get(country=self.freedonia)
        self.assertEqual((freedonia_election.month, freedonia_election.year), (3, 2026))
        self.assertEqual(freedonia_election.system, Country.ElectionSystem.electoral_college)
        self.assertEqual(Election.objects.get(country=self.sylvania).system, Country.ElectionSystem.popular_vote)

    def test_party_president_uses_the_calendar_month(self) -> None:
        created = create_elections(election_type=Election.Type.party_president, today=datetime.date(2026, 12, 31))

        self.assertEqual(created, 1)
        election = Election.objects.get(party=self.party)
        self.assertEqual((election.month, election.year), (12, 2026))
        self.assertEqual(election.target_id, self.party.id)

    def test_database_rejects_a_second_election_for_the_same_cycle(self) -> None:
        Election.objects.create(election_type=Election.Type.congress, region=self.north, month=5, year=2026)

        with self.assertRaises(IntegrityError), transaction.atomic():
            Election.objects.create(election_type=Election.Type.congress, region=self.north, month=5, year=2026)

    def test_database_rejects_a_target_that_does_not_match_the_type(self) -> None:
        with self.assertRaises(IntegrityError), transaction.atomic():
            Election.objects.create(election_type=Election.Type.congress, country=self.freedonia, month=5, year=2026)

    def test_unknown_election_type_is_an_election_error(self) -> None:
        with self.assertRaisesMessage(ElectionError, "unknown election type: 'senate'"):
            create_elections(election_type="senate", today=datetime.date(2026, 6, 10))
        self.assertFalse(Election.objects.exists())

    def test_inserts_dropped_by_the_cycle_constraint_are_not_counted(self) -> None:
        # A concurrent run already inserted North's election after this run
        # selected its targets.
        Election.objects.create(election_type=Election.Type.congress, region=self.north, month=7, year=2026)
        stale_targets = Region.objects.order_by("id")

        with (
            patch("core.elections_services.creation_targets", autospec=True, return_value=stale_targets),
            self.assertLogs("core.elections_services", level="INFO") as logs,
        ):
            created = create_elections(election_type=Election.Type.congress, today=datetime.date(2026, 7, 1))

        self.assertEqual(created, 2)
        self.assertEqual(Election.objects.of_type(Election.Type.congress).for_cycle(month=7, year=2026).count(), 3)
        self.assertTrue(any("created=2 skipped=1" in line for line in logs.output))
