"""Shared private helpers used across election view sub-modules."""

from django.db.models import Count, Prefetch
from django.http import JsonResponse

from core.models import Candidate, Election

ELECTION_TYPE_BY_SLUG: dict[str, str] = {
    "country": Election.Type.country_president,
    "congress": Election.Type.congress,
    "party": Election.Type.party_president,
}


def _not_found(message: str) -> JsonResponse:
    return JsonResponse({"error": message}, status=404)


def _elections_with_candidates():
    return Election.objects.prefetch_related(
        Prefetch(
            "candidates",
            queryset=Candidate.objects.annotate(vote_count=Count("votes")).order_by("id"),
        )
    )


def _serialize_election(election: Election) -> dict[str, object]:
    candidates = [
        {
            "id": candidate.citizen_id,
            "name": candidate.display_name,
            "affiliation": candidate.affiliation_name,
            "votes": int(getattr(candidate, "vote_count", 0)),
        }
        for candidate in election.candidates.all()
    ]
    return {
        "id": election.pk,
        "type": election.election_type,
        "target_id": election.target_id,
        "month": election.month,
        "year": election.year,
        "status": election.status,
        "is_active": election.is_active,
        "is_completed": election.is_completed,
        "system": election.system or None,
        "candidates": candidates,
        "winner": election.winner,
        "results": election.results,
    }
