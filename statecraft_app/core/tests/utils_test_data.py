from itertools import count

from core.models import Candidate, Citizen, Election, Vote

_voter_seq = count(1)


def make_citizen(username: str, *, xp: int = 0, **fields) -> Citizen:
    return Citizen.objects.create(username=username, xp=xp, **fields)


def add_candidate(
    election: Election,
    citizen: Citizen,
    *,
    votes: int = 0,
    affiliation_name: str = "",
    vote_region=None,
) -> Candidate:
    """Register a candidate and cast ``votes`` ballots for them from fresh voters."""
    candidate = Candidate.objects.create(
        election=election,
        citizen=citizen,
        display_name=citizen.username,
        affiliation_name=affiliation_name,
    )
    for _ in range(votes):
        cast_vote(election, candidate, region=vote_region)
    return candidate


def cast_vote(election: Election, candidate: Candidate, *, region=None, voter: Citizen | None = None) -> Vote:
    if voter is None:
        voter = Citizen.objects.create(username=f"voter-{next(_voter_seq)}")
    return Vote.objects.create(election=election, candidate=candidate, voter=voter, region=region)
