from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal


@dataclass(frozen=True, slots=True)
class TallyCandidate:
    citizen_id: int
    votes: int
    xp: int


@dataclass(frozen=True, slots=True)
class ElectoralCollegeResult:
    winner_id: int | None
    # region id -> {candidate citizen id -> votes in that region}
    region_results: dict[int, dict[int, int]] = field(default_factory=dict)
    # region id -> electoral votes the region is worth
    region_electoral_votes: dict[int, int] = field(default_factory=dict)
    # candidate citizen id -> electoral votes won
    candidate_tallies: dict[int, int] = field(default_factory=dict)


def rank_congress_candidates(candidates: Iterable[TallyCandidate]) -> list[TallyCandidate]:
    """Candidates with at least one vote, most votes first, xp breaking ties.

    Candidates equal on both keys keep their candidacy order.
    """
    receiving = [c for c in candidates if c.votes > 0]
    return sorted(receiving, key=lambda c: (c.votes, c.xp), reverse=True)


def tally_congress(*, candidates: Sequence[TallyCandidate], seats: int) -> list[int]:
    if seats <= 0:
        raise ValueError("seats must be positive")
    return [c.citizen_id for c in rank_congress_candidates(candidates)[:seats]]


def _most_experienced(tied: Sequence[int], xp_by_citizen: Mapping[int, int]) -> int:
    # Equal xp: the later candidate wins.
    best = tied[0]
    best_xp = -1
    for citizen_id in tied:
        xp = int(xp_by_citizen.get(citizen_id, 0))
        if xp >= best_xp:
            best = citizen_id
            best_xp = xp
    return best


def tally_single_winner(*, candidates: Sequence[TallyCandidate]) -> int | None:
    """Most votes wins; a tie at the top goes to the greatest xp.

    Returns None when nobody received a vote.
    """
    max_votes = max((c.votes for c in candidates), default=0)
    if max_votes <= 0:
        return None

    tied = [c.citizen_id for c in candidates if c.votes == max_votes]
    if len(tied) == 1:
        return tied[0]
    return _most_experienced(tied, {c.citizen_id: c.xp for c in candidates})


def _round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _leader(scores: Mapping[int, int], xp_by_citizen: Mapping[int, int]) -> tuple[int | None, int]:
    """Highest score wins; equal scores go to the greater xp, then to the later candidate.

    Matches the single-winner rule in ``_most_experienced``.
    """
    leader: int | None = None
    best = 0
    for citizen_id, score in scores.items():
        if score > best:
            leader = citizen_id
            best = score
        elif score == best and leader is not None:
            if int(xp_by_citizen.get(citizen_id, 0)) >= int(xp_by_citizen.get(leader, 0)):
                leader = citizen_id
    return leader, best


def tally_electoral_college(
    *,
    region_votes: Mapping[int, Mapping[int, int]],
    region_populations: Mapping[int, int],
    country_population: int,
    total_electoral_votes: int,
    xp_by_citizen: Mapping[int, int],
) -> ElectoralCollegeResult:
    """Winner-take-all per region, regions weighted by population share.

    ``region_votes`` maps region id to per-candidate vote counts in candidate
    order. A region where nobody voted awards its electoral votes to no one.
    """
    region_results: dict[int, dict[int, int]] = {}
    region_winners: dict[int, int] = {}
    for region_id, votes in region_votes.items():
        region_results[region_id] = {int(cid): int(n) for cid, n in votes.items()}
        winner, best = _leader(region_results[region_id], xp_by_citizen)
        if winner is not None and best > 0:
            region_winners[region_id] = winner

    region_electoral_votes: dict[int, int] = {}
    for region_id in region_results:
        population = int(region_populations.get(region_id, 0))
        if country_population <= 0:
            region_electoral_votes[region_id] = 0
            continue
        share = Decimal(total_electoral_votes) * Decimal(population) / Decimal(country_population)
        region_electoral_votes[region_id] = _round_half_up(share)

    candidate_tallies: dict[int, int] = {}
    for region_id, winner in region_winners.items():
        candidate_tallies[winner] = candidate_tallies.get(winner, 0) + region_electoral_votes[region_id]

    winner_id, _ = _leader(candidate_tallies, xp_by_citizen)

    return ElectoralCollegeResult(
        winner_id=winner_id,
        region_results=region_results,
        region_electoral_votes=region_electoral_votes,
        candidate_tallies=candidate_tallies,
    )
