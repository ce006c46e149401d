from __future__ import annotations

import datetime
from typing import override

from core.elections_services import activate_elections, elections_to_activate
from core.management.base import ElectionJobCommand


class Command(ElectionJobCommand):
    help = "Open voting on the current cycle's elections once their voting day has arrived."
    verb = "activated"

    @override
    def run_job(self, *, election_type: str, today: datetime.date) -> int:
        return activate_elections(election_type=election_type, today=today)

    @override
    def count_pending(self, *, election_type: str, today: datetime.date) -> int:
        return elections_to_activate(election_type=election_type, today=today).count()
