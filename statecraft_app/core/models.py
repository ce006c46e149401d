from __future__ import annotations

from decimal import Decimal
from typing import override

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Q
from django.utils import timezone


class Country(models.Model):
    class ElectionSystem(models.TextChoices):
        popular_vote = "popular_vote", "Popular Vote"
        electoral_college = "electoral_college", "Electoral College"

    name = models.CharField(max_length=255, unique=True)
    election_system = models.CharField(
        max_length=32,
        choices=ElectionSystem.choices,
        default=ElectionSystem.popular_vote,
    )
    total_electoral_votes = models.PositiveIntegerField(
        default=0,
        help_text="Electoral votes apportioned across regions when the electoral college system is used.",
    )

    # Executive branch. Every seat is cleared when a new president is elected.
    president = models.ForeignKey(
        "Citizen", on_delete=models.SET_NULL, blank=True, null=True, related_name="+"
    )
    vice_president = models.ForeignKey(
        "Citizen", on_delete=models.SET_NULL, blank=True, null=True, related_name="+"
    )
    minister_of_foreign_affairs = models.ForeignKey(
        "Citizen", on_delete=models.SET_NULL, blank=True, null=True, related_name="+"
    )
    minister_of_defense = models.ForeignKey(
        "Citizen", on_delete=models.SET_NULL, blank=True, null=True, related_name="+"
    )
    minister_of_treasury = models.ForeignKey(
        "Citizen", on_delete=models.SET_NULL, blank=True, null=True, related_name="+"
    )

    class Meta:
        ordering = ("name", "id")
        verbose_name_plural = "countries"

    @override
    def __str__(self) -> str:
        return self.name


class Region(models.Model):
    name = models.CharField(max_length=255)
    owner = models.ForeignKey(Country, on_delete=models.PROTECT, related_name="regions")
    # Unordered. The ranked winner list of the latest congress election is
    # Election.winner_ids.
    representatives = models.ManyToManyField("Citizen", blank=True, related_name="represented_regions")

    class Meta:
        ordering = ("name", "id")

    @override
    def __str__(self) -> str:
        return self.name


class Party(models.Model):
    name = models.CharField(max_length=255)
    country = models.ForeignKey(Country, on_delete=models.PROTECT, related_name="parties")
    president = models.ForeignKey(
        "Citizen", on_delete=models.SET_NULL, blank=True, null=True, related_name="+"
    )
    vice_president = models.ForeignKey(
        "Citizen", on_delete=models.SET_NULL, blank=True, null=True, related_name="+"
    )

    class Meta:
        ordering = ("name", "id")
        verbose_name_plural = "parties"
        constraints = [
            models.UniqueConstraint(fields=["country", "name"], name="uniq_party_country_name"),
        ]

    @override
    def __str__(self) -> str:
        return self.name


class Citizen(models.Model):
    username = models.CharField(max_length=64, unique=True)
    xp = models.PositiveIntegerField(default=0)
    gold = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("5.00"))
    country = models.ForeignKey(Country, on_delete=models.SET_NULL, blank=True, null=True, related_name="citizens")
    location = models.ForeignKey(Region, on_delete=models.SET_NULL, blank=True, null=True, related_name="residents")
    party = models.ForeignKey(Party, on_delete=models.SET_NULL, blank=True, null=True, related_name="members")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ("username", "id")

    @override
    def __str__(self) -> str:
        return self.username


class Alert(models.Model):
    class Kind(models.TextChoices):
        elected_country_president = "ELECTED_CP", "Elected Country President"
        elected_congress = "ELECTED_CONGRESS", "Elected to Congress"
        elected_party_president = "ELECTED_PP", "Elected Party President"

    citizen = models.ForeignKey(Citizen, on_delete=models.CASCADE, related_name="alerts")
    kind = models.CharField(max_length=32, choices=Kind.choices)
    message = models.TextField()
    read = models.BooleanField(default=False)
    timestamp = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ("-timestamp", "-id")
        indexes = [
            models.Index(fields=["citizen", "read"], name="alert_citizen_read"),
        ]

    @override
    def __str__(self) -> str:
        return f"{self.citizen_id}:{self.kind}"


class ElectionQuerySet(models.QuerySet["Election"]):
    def of_type(self, election_type: str) -> ElectionQuerySet:
        return self.filter(election_type=election_type)

    def for_cycle(self, *, month: int, year: int) -> ElectionQuerySet:
        return self.filter(month=month, year=year)

    def for_target(self, *, election_type: str, target_id: int) -> ElectionQuerySet:
        field = Election.TARGET_FIELD_BY_TYPE[election_type]
        return self.filter(election_type=election_type, **{f"{field}_id": target_id})


class Election(models.Model):
    """One election for one target entity in one (month, year) cycle.

    The status moves strictly forward: created -> active -> terminated.
    A terminated election is never written again.
    """

    class Type(models.TextChoices):
        country_president = "country_president", "Country President"
        congress = "congress", "Congress"
        party_president = "party_president", "Party President"

    class Status(models.TextChoices):
        created = "created", "Created"
        active = "active", "Active"
        terminated = "terminated", "Terminated"

    # Which foreign key holds the target entity for each election type.
    TARGET_FIELD_BY_TYPE: dict[str, str] = {
        "country_president": "country",
        "congress": "region",
        "party_president": "party",
    }

    election_type = models.CharField(max_length=32, choices=Type.choices)
    country = models.ForeignKey(Country, on_delete=models.PROTECT, blank=True, null=True, related_name="elections")
    region = models.ForeignKey(Region, on_delete=models.PROTECT, blank=True, null=True, related_name="elections")
    party = models.ForeignKey(Party, on_delete=models.PROTECT, blank=True, null=True, related_name="elections")
    month = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(12)])
    year = models.PositiveSmallIntegerField()
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.created)

    # Country president elections snapshot the country's system at creation time.
    system = models.CharField(
        max_length=32,
        choices=Country.ElectionSystem.choices,
        blank=True,
        default="",
    )

    # Ordered citizen ids. One id for presidential elections, up to the seat
    # count for congress. Empty until termination, and empty afterwards when
    # the election was inconclusive.
    winner_ids = models.JSONField(blank=True, default=list)

    # Published machine-readable tally output.
    results = models.JSONField(blank=True, default=dict)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    terminated_at = models.DateTimeField(blank=True, null=True)

    objects = ElectionQuerySet.as_manager()

    class Meta:
        ordering = ("-year", "-month", "election_type", "id")
        constraints = [
            models.UniqueConstraint(
                fields=["country", "month", "year"],
                condition=Q(election_type="country_president"),
                name="uniq_election_country_president_cycle",
            ),
            models.UniqueConstraint(
                fields=["region", "month", "year"],
                condition=Q(election_type="congress"),
                name="uniq_election_congress_cycle",
            ),
            models.UniqueConstraint(
                fields=["party", "month", "year"],
                condition=Q(election_type="party_president"),
                name="uniq_election_party_president_cycle",
            ),
            # The target foreign key must match the election type, and only that one is set.
            models.CheckConstraint(
                condition=(
                    (
                        Q(election_type="country_president")
                        & Q(country__isnull=False)
                        & Q(region__isnull=True)
                        & Q(party__isnull=True)
                    )
                    | (
                        Q(election_type="congress")
                        & Q(country__isnull=True)
                        & Q(region__isnull=False)
                        & Q(party__isnull=True)
                    )
                    | (
                        Q(election_type="party_president")
                        & Q(country__isnull=True)
                        & Q(region__isnull=True)
                        & Q(party__isnull=False)
                    )
                ),
                name="chk_election_target_matches_type",
            ),
            models.CheckConstraint(
                condition=Q(month__gte=1) & Q(month__lte=12),
                name="chk_election_month_range",
            ),
        ]
        indexes = [
            models.Index(fields=["election_type", "year", "month", "status"], name="election_cycle_status"),
        ]

    @override
    def __str__(self) -> str:
        return f"{self.get_election_type_display()} #{self.target_id} ({self.year}-{self.month:02d})"

    @property
    def target_id(self) -> int | None:
        field = self.TARGET_FIELD_BY_TYPE[self.election_type]
        return getattr(self, f"{field}_id")

    @property
    def is_active(self) -> bool:
        return self.status == self.Status.active

    @property
    def is_completed(self) -> bool:
        return self.status == self.Status.terminated

    @property
    def winner(self) -> int | list[int] | None:
        """Winner in the shape consumers expect for the election type."""
        if self.election_type == self.Type.congress:
            return list(self.winner_ids)
        if not self.winner_ids:
            return None
        return int(self.winner_ids[0])


class Candidate(models.Model):
    election = models.ForeignKey(Election, on_delete=models.CASCADE, related_name="candidates")
    citizen = models.ForeignKey(Citizen, on_delete=models.PROTECT, related_name="candidacies")
    display_name = models.CharField(max_length=255, blank=True, default="")
    # Region name for congress candidates, party name for presidential ones.
    affiliation_name = models.CharField(max_length=255, blank=True, default="")

    class Meta:
        ordering = ("id",)
        constraints = [
            models.UniqueConstraint(
                fields=["election", "citizen"],
                name="uniq_candidate_election_citizen",
            ),
        ]

    @override
    def __str__(self) -> str:
        return f"{self.display_name or self.citizen_id} ({self.election_id})"


class Vote(models.Model):
    election = models.ForeignKey(Election, on_delete=models.CASCADE, related_name="votes")
    candidate = models.ForeignKey(Candidate, on_delete=models.CASCADE, related_name="votes")
    voter = models.ForeignKey(Citizen, on_delete=models.PROTECT, related_name="+")
    # Voter location when the vote was cast; drives electoral college apportionment.
    region = models.ForeignKey(Region, on_delete=models.PROTECT, blank=True, null=True, related_name="+")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ("created_at", "id")
        constraints = [
            models.UniqueConstraint(fields=["election", "voter"], name="uniq_vote_election_voter"),
        ]

    @override
    def __str__(self) -> str:
        return f"{self.election_id}:{self.voter_id}->{self.candidate_id}"


class CongressSeat(models.Model):
    """A congress seat won in one election.

    Seats accumulate across cycles; a citizen re-elected in a later cycle
    holds one row per win.
    """

    country = models.ForeignKey(Country, on_delete=models.CASCADE, related_name="congress_seats")
    citizen = models.ForeignKey(Citizen, on_delete=models.CASCADE, related_name="congress_seats")
    election = models.ForeignKey(Election, on_delete=models.PROTECT, related_name="congress_seats")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ("country", "created_at", "id")

    @override
    def __str__(self) -> str:
        return f"{self.country_id}:{self.citizen_id}"
