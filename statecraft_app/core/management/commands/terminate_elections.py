from __future__ import annotations

import datetime
from typing import override

from django.core.management.base import CommandError

from core.elections_services import ElectionError, elections_to_terminate, terminate_elections
from core.management.base import ElectionJobCommand


class Command(ElectionJobCommand):
    help = "Tally the current cycle's active elections and apply their results."
    verb = "terminated"

    @override
    def run_job(self, *, election_type: str, today: datetime.date) -> int:
        try:
            return terminate_elections(election_type=election_type, today=today)
        except ElectionError as exc:
            # The whole batch for this type was rolled back.
            raise CommandError(f"Failed to terminate {election_type} elections: {exc}") from exc

    @override
    def count_pending(self, *, election_type: str, today: datetime.date) -> int:
        return elections_to_terminate(election_type=election_type, today=today).count()
