from __future__ import annotations

import datetime
from typing import override

from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from core.models import Election

ELECTION_TYPE_CHOICES: tuple[str, ...] = tuple(Election.Type.values)


class ElectionJobCommand(BaseCommand):
    """Run one election job for one election type, or for every type."""

    # Past-tense verb used in the summary line.
    verb: str = ""

    @override
    def add_arguments(self, parser) -> None:
        parser.add_argument(
            "--type",
            dest="election_type",
            choices=ELECTION_TYPE_CHOICES,
            help="Election type to process. Defaults to every type.",
        )
        parser.add_argument(
            "--date",
            help="Process as if today were this UTC date (YYYY-MM-DD).",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Show what would be done without modifying elections.",
        )

    def run_job(self, *, election_type: str, today: datetime.date) -> int:
        raise NotImplementedError

    def count_pending(self, *, election_type: str, today: datetime.date) -> int:
        raise NotImplementedError

    @override
    def handle(self, *args, **options) -> None:
        dry_run: bool = bool(options.get("dry_run"))

        raw_date = options.get("date")
        if raw_date:
            try:
                today = datetime.date.fromisoformat(str(raw_date))
            except ValueError as exc:
                raise CommandError(f"Invalid --date {raw_date!r}; expected YYYY-MM-DD.") from exc
        else:
            today = timezone.now().date()

        selected = options.get("election_type")
        election_types = [selected] if selected else list(ELECTION_TYPE_CHOICES)

        for election_type in election_types:
            if dry_run:
                pending = self.count_pending(election_type=election_type, today=today)
                self.stdout.write(f"[dry-run] Would have {self.verb} {pending} {election_type} election(s).")
                continue

            count = self.run_job(election_type=election_type, today=today)
            self.stdout.write(f"{self.verb.capitalize()} {count} {election_type} election(s).")
