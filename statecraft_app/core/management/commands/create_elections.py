from __future__ import annotations

import datetime
from typing import override

from core.elections_cycle import upcoming_cycle
from core.elections_services import create_elections, creation_targets
from core.management.base import ElectionJobCommand


class Command(ElectionJobCommand):
    help = "Create one election per target entity for the upcoming cycle."
    verb = "created"

    @override
    def run_job(self, *, election_type: str, today: datetime.date) -> int:
        return create_elections(election_type=election_type, today=today)

    @override
    def count_pending(self, *, election_type: str, today: datetime.date) -> int:
        cycle = upcoming_cycle(election_type=election_type, today=today)
        return creation_targets(election_type=election_type, cycle=cycle).count()
