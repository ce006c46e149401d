from __future__ import annotations

import decimal

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


def _citizen_fk() -> models.ForeignKey:
    return models.ForeignKey(
        blank=True,
        null=True,
        on_delete=django.db.models.deletion.SET_NULL,
        related_name="+",
        to="core.citizen",
    )


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Country",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255, unique=True)),
                (
                    "election_system",
                    models.CharField(
                        choices=[("popular_vote", "Popular Vote"), ("electoral_college", "Electoral College")],
                        default="popular_vote",
                        max_length=32,
                    ),
                ),
                (
                    "total_electoral_votes",
                    models.PositiveIntegerField(
                        default=0,
                        help_text="Electoral votes apportioned across regions when the electoral college system is used.",
                    ),
                ),
            ],
            options={
                "ordering": ("name", "id"),
                "verbose_name_plural": "countries",
            },
        ),
        migrations.CreateModel(
            name="Region",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                (
                    "owner",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="regions",
                        to="core.country",
                    ),
                ),
            ],
            options={
                "ordering": ("name", "id"),
            },
        ),
        migrations.CreateModel(
            name="Party",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                (
                    "country",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="parties",
                        to="core.country",
                    ),
                ),
            ],
            options={
                "ordering": ("name", "id"),
                "verbose_name_plural": "parties",
                "constraints": [
                    models.UniqueConstraint(fields=("country", "name"), name="uniq_party_country_name"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Citizen",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("username", models.CharField(max_length=64, unique=True)),
                ("xp", models.PositiveIntegerField(default=0)),
                ("gold", models.DecimalField(decimal_places=2, default=decimal.Decimal("5.00"), max_digits=12)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "country",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="citizens",
                        to="core.country",
                    ),
                ),
                (
                    "location",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="residents",
                        to="core.region",
                    ),
                ),
                (
                    "party",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="members",
                        to="core.party",
                    ),
                ),
            ],
            options={
                "ordering": ("username", "id"),
            },
        ),
        migrations.AddField(model_name="country", name="president", field=_citizen_fk()),
        migrations.AddField(model_name="country", name="vice_president", field=_citizen_fk()),
        migrations.AddField(model_name="country", name="minister_of_foreign_affairs", field=_citizen_fk()),
        migrations.AddField(model_name="country", name="minister_of_defense", field=_citizen_fk()),
        migrations.AddField(model_name="country", name="minister_of_treasury", field=_citizen_fk()),
        migrations.AddField(model_name="party", name="president", field=_citizen_fk()),
        migrations.AddField(model_name="party", name="vice_president", field=_citizen_fk()),
        migrations.AddField(
            model_name="region",
            name="representatives",
            field=models.ManyToManyField(blank=True, related_name="represented_regions", to="core.citizen"),
        ),
        migrations.CreateModel(
            name="Alert",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "kind",
                    models.CharField(
                        choices=[
                            ("ELECTED_CP", "Elected Country President"),
                            ("ELECTED_CONGRESS", "Elected to Congress"),
                            ("ELECTED_PP", "Elected Party President"),
                        ],
                        max_length=32,
                    ),
                ),
                ("message", models.TextField()),
                ("read", models.BooleanField(default=False)),
                ("timestamp", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "citizen",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="alerts",
                        to="core.citizen",
                    ),
                ),
            ],
            options={
                "ordering": ("-timestamp", "-id"),
                "indexes": [models.Index(fields=["citizen", "read"], name="alert_citizen_read")],
            },
        ),
        migrations.CreateModel(
            name="Election",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "election_type",
                    models.CharField(
                        choices=[
                            ("country_president", "Country President"),
                            ("congress", "Congress"),
                            ("party_president", "Party President"),
                        ],
                        max_length=32,
                    ),
                ),
                (
                    "month",
                    models.PositiveSmallIntegerField(
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(12),
                        ]
                    ),
                ),
                ("year", models.PositiveSmallIntegerField()),
                (
                    "status",
                    models.CharField(
                        choices=[("created", "Created"), ("active", "Active"), ("terminated", "Terminated")],
                        default="created",
                        max_length=16,
                    ),
                ),
                (
                    "system",
                    models.CharField(
                        blank=True,
                        choices=[("popular_vote", "Popular Vote"), ("electoral_college", "Electoral College")],
                        default="",
                        max_length=32,
                    ),
                ),
                ("winner_ids", models.JSONField(blank=True, default=list)),
                ("results", models.JSONField(blank=True, default=dict)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("terminated_at", models.DateTimeField(blank=True, null=True)),
                (
                    "country",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="elections",
                        to="core.country",
                    ),
                ),
                (
                    "region",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="elections",
                        to="core.region",
                    ),
                ),
                (
                    "party",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="elections",
                        to="core.party",
                    ),
                ),
            ],
            options={
                "ordering": ("-year", "-month", "election_type", "id"),
                "indexes": [
                    models.Index(fields=["election_type", "year", "month", "status"], name="election_cycle_status"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("election_type", "country_president")),
                        fields=("country", "month", "year"),
                        name="uniq_election_country_president_cycle",
                    ),
                    models.UniqueConstraint(
                        condition=models.Q(("election_type", "congress")),
                        fields=("region", "month", "year"),
                        name="uniq_election_congress_cycle",
                    ),
                    models.UniqueConstraint(
                        condition=models.Q(("election_type", "party_president")),
                        fields=("party", "month", "year"),
                        name="uniq_election_party_president_cycle",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(
                                ("election_type", "country_president"),
                                ("country__isnull", False),
                                ("region__isnull", True),
                                ("party__isnull", True),
                            ),
                            models.Q(
                                ("election_type", "congress"),
                                ("country__isnull", True),
                                ("region__isnull", False),
                                ("party__isnull", True),
                            ),
                            models.Q(
                                ("election_type", "party_president"),
                                ("country__isnull", True),
                                ("region__isnull", True),
                                ("party__isnull", False),
                            ),
                            _connector="OR",
                        ),
                        name="chk_election_target_matches_type",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("month__gte", 1), ("month__lte", 12)),
                        name="chk_election_month_range",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Candidate",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("display_name", models.CharField(blank=True, default="", max_length=255)),
                ("affiliation_name", models.CharField(blank=True, default="", max_length=255)),
                (
                    "citizen",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="candidacies",
                        to="core.citizen",
                    ),
                ),
                (
                    "election",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="candidates",
                        to="core.election",
                    ),
                ),
            ],
            options={
                "ordering": ("id",),
                "constraints": [
                    models.UniqueConstraint(fields=("election", "citizen"), name="uniq_candidate_election_citizen"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Vote",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "candidate",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="votes",
                        to="core.candidate",
                    ),
                ),
                (
                    "election",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="votes",
                        to="core.election",
                    ),
                ),
                (
                    "region",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="+",
                        to="core.region",
                    ),
                ),
                (
                    "voter",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="+",
                        to="core.citizen",
                    ),
                ),
            ],
            options={
                "ordering": ("created_at", "id"),
                "constraints": [
                    models.UniqueConstraint(fields=("election", "voter"), name="uniq_vote_election_voter"),
                ],
            },
        ),
        migrations.CreateModel(
            name="CongressSeat",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "citizen",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="congress_seats",
                        to="core.citizen",
                    ),
                ),
                (
                    "country",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="congress_seats",
                        to="core.country",
                    ),
                ),
                (
                    "election",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="congress_seats",
                        to="core.election",
                    ),
                ),
            ],
            options={
                "ordering": ("country", "created_at", "id"),
            },
        ),
    ]
