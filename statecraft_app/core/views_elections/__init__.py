"""Read-only election endpoints.

All public view functions are re-exported here so that ``core.urls`` can
reference ``views_elections.<view_name>``.
"""

from core.views_elections.detail import congress_elections_for_country, election_detail

__all__ = [
    "congress_elections_for_country",
    "election_detail",
]
