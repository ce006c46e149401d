"""Election lookup by target and cycle."""

from django.http import HttpRequest, JsonResponse
from django.utils import timezone
from django.views.decorators.http import require_GET

from core.elections_cycle import upcoming_cycle
from core.models import Country, Election, Region
from core.views_elections._helpers import (
    ELECTION_TYPE_BY_SLUG,
    _elections_with_candidates,
    _not_found,
    _serialize_election,
)


@require_GET
def election_detail(request: HttpRequest, type_slug: str, target_id: int, year: int, month: int) -> JsonResponse:
    election_type = ELECTION_TYPE_BY_SLUG.get(type_slug)
    if election_type is None:
        return _not_found("Unknown election type")

    election = (
        _elections_with_candidates()
        .for_target(election_type=election_type, target_id=target_id)
        .for_cycle(month=month, year=year)
        .first()
    )
    if election is None:
        return _not_found(f"{Election.Type(election_type).label} Election Not Found")

    return JsonResponse({"election": _serialize_election(election)})


@require_GET
def congress_elections_for_country(request: HttpRequest, country_id: int) -> JsonResponse:
    """The upcoming congress election of every region a country owns."""
    if not Country.objects.filter(pk=country_id).exists():
        return _not_found("Country Not Found")

    cycle = upcoming_cycle(election_type=Election.Type.congress, today=timezone.now().date())
    region_ids = list(Region.objects.filter(owner_id=country_id).order_by("id").values_list("id", flat=True))

    by_region = {
        election.region_id: election
        for election in _elections_with_candidates()
        .of_type(Election.Type.congress)
        .for_cycle(month=cycle.month, year=cycle.year)
        .filter(region_id__in=region_ids)
    }
    if len(by_region) != len(region_ids):
        return _not_found("Congress Election Not Found")

    return JsonResponse(
        {
            "month": cycle.month,
            "year": cycle.year,
            "elections": [_serialize_election(by_region[region_id]) for region_id in region_ids],
        }
    )
