from __future__ import annotations

import datetime
import logging
from collections.abc import Sequence
from decimal import Decimal

from django.conf import settings
from django.db import transaction
from django.db.models import Count, F, QuerySet
from django.utils import timezone

from core.elections_cycle import ElectionCycle, current_cycle, upcoming_cycle, voting_window_open
from core.elections_tally import (
    TallyCandidate,
    tally_congress,
    tally_electoral_college,
    tally_single_winner,
)
from core.models import (
    Alert,
    Candidate,
    Citizen,
    CongressSeat,
    Country,
    Election,
    Party,
    Region,
    Vote,
)

logger = logging.getLogger(__name__)


class ElectionError(Exception):
    pass


class ElectionStateError(ElectionError):
    pass


class ElectionSideEffectError(ElectionError):
    pass


def _require_known_type(election_type: str) -> None:
    if election_type not in Election.TARGET_FIELD_BY_TYPE:
        raise ElectionError(f"unknown election type: {election_type!r}")


def _winner_stipend() -> Decimal:
    return Decimal(str(settings.ELECTION_WINNER_GOLD_STIPEND))


def _format_gold(amount: Decimal) -> str:
    return f"{amount.normalize():f}"


def creation_targets(*, election_type: str, cycle: ElectionCycle) -> QuerySet:
    """Target entities that do not have an election of this type for the cycle yet."""
    existing = Election.objects.of_type(election_type).for_cycle(month=cycle.month, year=cycle.year)

    if election_type == Election.Type.country_president:
        return Country.objects.exclude(pk__in=existing.values("country_id")).order_by("id")
    if election_type == Election.Type.congress:
        return Region.objects.exclude(pk__in=existing.values("region_id")).order_by("id")
    if election_type == Election.Type.party_president:
        return Party.objects.exclude(pk__in=existing.values("party_id")).order_by("id")
    raise ElectionError(f"unknown election type: {election_type!r}")


@transaction.atomic
def create_elections(*, election_type: str, today: datetime.date) -> int:
    """Insert one created election per target entity for the upcoming cycle.

    Targets that already hold an election for the cycle are skipped, so a
    repeated run inserts nothing. Returns the number of rows this run added
    to the cycle, which excludes inserts dropped by the cycle uniqueness
    constraints.
    """
    _require_known_type(election_type)
    cycle = upcoming_cycle(election_type=election_type, today=today)
    field = Election.TARGET_FIELD_BY_TYPE[election_type]
    in_cycle = Election.objects.of_type(election_type).for_cycle(month=cycle.month, year=cycle.year)
    before = in_cycle.count()

    to_insert: list[Election] = []
    for target in creation_targets(election_type=election_type, cycle=cycle):
        election = Election(
            election_type=election_type,
            month=cycle.month,
            year=cycle.year,
            status=Election.Status.created,
            **{field: target},
        )
        if election_type == Election.Type.country_president:
            election.system = target.election_system
        to_insert.append(election)

    # The cycle uniqueness constraints cover concurrent runs that slipped past
    # the existence filter above.
    Election.objects.bulk_create(to_insert, ignore_conflicts=True)
    created = in_cycle.count() - before

    logger.info(
        "election_create type=%s month=%s year=%s created=%s skipped=%s",
        election_type,
        cycle.month,
        cycle.year,
        created,
        len(to_insert) - created,
    )
    return created


def elections_to_activate(*, election_type: str, today: datetime.date) -> QuerySet[Election]:
    _require_known_type(election_type)
    if not voting_window_open(election_type=election_type, today=today):
        return Election.objects.none()
    cycle = current_cycle(today=today)
    return (
        Election.objects.of_type(election_type)
        .for_cycle(month=cycle.month, year=cycle.year)
        .filter(status=Election.Status.created)
    )


def activate_elections(*, election_type: str, today: datetime.date) -> int:
    """Open voting on the current cycle's elections. Returns the number activated."""
    _require_known_type(election_type)
    cycle = current_cycle(today=today)
    if not voting_window_open(election_type=election_type, today=today):
        logger.info(
            "election_activate_skipped type=%s month=%s year=%s reason=voting_window_closed",
            election_type,
            cycle.month,
            cycle.year,
        )
        return 0

    updated = elections_to_activate(election_type=election_type, today=today).update(
        status=Election.Status.active,
        updated_at=timezone.now(),
    )
    logger.info(
        "election_activate type=%s month=%s year=%s updated=%s",
        election_type,
        cycle.month,
        cycle.year,
        updated,
    )
    return updated


def elections_to_terminate(*, election_type: str, today: datetime.date) -> QuerySet[Election]:
    _require_known_type(election_type)
    cycle = current_cycle(today=today)
    return (
        Election.objects.of_type(election_type)
        .for_cycle(month=cycle.month, year=cycle.year)
        .filter(status=Election.Status.active)
    )


def _tally_candidates(*, election: Election) -> list[TallyCandidate]:
    rows = (
        Candidate.objects.filter(election=election)
        .annotate(vote_count=Count("votes"))
        .values_list("citizen_id", "vote_count", "citizen__xp")
        .order_by("id")
    )
    return [TallyCandidate(citizen_id=int(cid), votes=int(n), xp=int(xp)) for cid, n, xp in rows]


def _affiliation_by_citizen(*, election: Election) -> dict[int, str]:
    return dict(
        Candidate.objects.filter(election=election).values_list("citizen_id", "affiliation_name")
    )


def reward_winner(*, citizen_id: int, kind: str, message: str) -> None:
    updated = Citizen.objects.filter(pk=citizen_id).update(gold=F("gold") + _winner_stipend())
    if updated != 1:
        raise ElectionSideEffectError(f"winning citizen {citizen_id} could not be rewarded")
    Alert.objects.create(citizen_id=citizen_id, kind=kind, message=message, read=False)


def _finish(*, election: Election, winner_ids: Sequence[int], results: dict[str, object]) -> None:
    if election.status != Election.Status.active:
        raise ElectionStateError(f"election {election.pk} must be active to terminate")

    election.winner_ids = [int(cid) for cid in winner_ids]
    election.results = results
    election.status = Election.Status.terminated
    election.terminated_at = timezone.now()
    election.save(update_fields=["winner_ids", "results", "status", "terminated_at", "updated_at"])


def _terminate_congress(election: Election) -> None:
    candidates = _tally_candidates(election=election)
    seats = int(settings.CONGRESS_SEATS_PER_REGION)
    winner_ids = tally_congress(candidates=candidates, seats=seats)

    region = Region.objects.select_for_update().get(pk=election.region_id)
    affiliation = _affiliation_by_citizen(election=election)
    stipend = _format_gold(_winner_stipend())
    for citizen_id in winner_ids:
        location_name = affiliation.get(citizen_id) or region.name
        reward_winner(
            citizen_id=citizen_id,
            kind=Alert.Kind.elected_congress,
            message=(
                f"You have been elected to Congress as a representative of {location_name} "
                f"and awarded {stipend} gold"
            ),
        )

    region.representatives.set(winner_ids)
    CongressSeat.objects.bulk_create(
        [CongressSeat(country_id=region.owner_id, citizen_id=cid, election=election) for cid in winner_ids]
    )

    _finish(
        election=election,
        winner_ids=winner_ids,
        results={"votes": {str(c.citizen_id): c.votes for c in candidates}, "seats": seats},
    )


def _terminate_party_president(election: Election) -> None:
    candidates = _tally_candidates(election=election)
    winner_id = tally_single_winner(candidates=candidates)

    if winner_id is not None:
        party = Party.objects.select_for_update().get(pk=election.party_id)
        party_name = _affiliation_by_citizen(election=election).get(winner_id) or party.name
        reward_winner(
            citizen_id=winner_id,
            kind=Alert.Kind.elected_party_president,
            message=(
                f"You have been elected as Party President of {party_name} "
                f"and awarded {_format_gold(_winner_stipend())} gold"
            ),
        )
        updated = Party.objects.filter(pk=party.pk).update(president_id=winner_id, vice_president=None)
        if updated != 1:
            raise ElectionSideEffectError(f"party {party.pk} president could not be updated")
    else:
        logger.info("election_inconclusive election_id=%s type=%s", election.pk, election.election_type)

    _finish(
        election=election,
        winner_ids=[winner_id] if winner_id is not None else [],
        results={"votes": {str(c.citizen_id): c.votes for c in candidates}},
    )


def _electoral_college_result(*, election: Election, candidates: Sequence[TallyCandidate]) -> tuple[int | None, dict]:
    country = election.country

    region_votes: dict[int, dict[int, int]] = {}
    rows = (
        Vote.objects.filter(election=election, region__isnull=False)
        .values("region_id", "candidate__citizen_id")
        .annotate(n=Count("id"))
        .order_by("region_id", "candidate_id")
    )
    for row in rows:
        region_votes.setdefault(int(row["region_id"]), {})[int(row["candidate__citizen_id"])] = int(row["n"])

    residents = Citizen.objects.filter(country=country)
    region_populations = dict(
        residents.filter(location_id__in=list(region_votes))
        .values("location_id")
        .annotate(n=Count("id"))
        .values_list("location_id", "n")
    )

    result = tally_electoral_college(
        region_votes=region_votes,
        region_populations=region_populations,
        country_population=residents.count(),
        total_electoral_votes=int(country.total_electoral_votes),
        xp_by_citizen={c.citizen_id: c.xp for c in candidates},
    )
    payload = {
        "system": Country.ElectionSystem.electoral_college.value,
        "region_results": {
            str(rid): {str(cid): n for cid, n in votes.items()} for rid, votes in result.region_results.items()
        },
        "region_electoral_votes": {str(rid): n for rid, n in result.region_electoral_votes.items()},
        "tally": {str(cid): n for cid, n in result.candidate_tallies.items()},
    }
    return result.winner_id, payload


def _terminate_country_president(election: Election) -> None:
    candidates = _tally_candidates(election=election)
    if not candidates:
        _finish(election=election, winner_ids=[], results={})
        return

    if election.system == Country.ElectionSystem.electoral_college:
        winner_id, results = _electoral_college_result(election=election, candidates=candidates)
    else:
        winner_id = tally_single_winner(candidates=candidates)
        results = {
            "system": Country.ElectionSystem.popular_vote.value,
            "votes": {str(c.citizen_id): c.votes for c in candidates},
        }

    if winner_id is not None:
        reward_winner(
            citizen_id=winner_id,
            kind=Alert.Kind.elected_country_president,
            message=f"You have been elected as Country President and awarded {_format_gold(_winner_stipend())} gold",
        )
        updated = Country.objects.filter(pk=election.country_id).update(
            president_id=winner_id,
            vice_president=None,
            minister_of_foreign_affairs=None,
            minister_of_defense=None,
            minister_of_treasury=None,
        )
        if updated != 1:
            raise ElectionSideEffectError(f"country {election.country_id} government could not be updated")
    else:
        logger.info("election_inconclusive election_id=%s type=%s", election.pk, election.election_type)

    _finish(
        election=election,
        winner_ids=[winner_id] if winner_id is not None else [],
        results=results,
    )


_TERMINATORS = {
    Election.Type.country_president: _terminate_country_president,
    Election.Type.congress: _terminate_congress,
    Election.Type.party_president: _terminate_party_president,
}


@transaction.atomic
def terminate_elections(*, election_type: str, today: datetime.date) -> int:
    """Tally every active election of this type for the cycle ending today.

    All elections of the batch, with their side effects, commit together or
    not at all. Returns the number of elections terminated.
    """
    terminate = _TERMINATORS.get(election_type)
    if terminate is None:
        raise ElectionError(f"unknown election type: {election_type!r}")

    cycle = current_cycle(today=today)
    elections = list(
        elections_to_terminate(election_type=election_type, today=today)
        .select_for_update()
        .order_by("id")
    )

    for election in elections:
        terminate(election)
        logger.info(
            "election_terminated election_id=%s type=%s target_id=%s winners=%s",
            election.pk,
            election_type,
            election.target_id,
            election.winner_ids,
        )

    logger.info(
        "election_terminate type=%s month=%s year=%s updated=%s",
        election_type,
        cycle.month,
        cycle.year,
        len(elections),
    )
    return len(elections)
