from django.urls import path

from core import views_cron, views_elections, views_health
from core.models import Election

CONGRESS = {"election_type": Election.Type.congress}
COUNTRY_PRESIDENT = {"election_type": Election.Type.country_president}
PARTY_PRESIDENT = {"election_type": Election.Type.party_president}

urlpatterns = [
    path("healthz", views_health.healthz, name="healthz"),
    path("readyz", views_health.readyz, name="readyz"),

    path("api/cron/elections/congress/create/", views_cron.create_elections, CONGRESS, name="cron-congress-create"),
    path(
        "api/cron/elections/congress/activate/",
        views_cron.activate_elections,
        CONGRESS,
        name="cron-congress-activate",
    ),
    path(
        "api/cron/elections/congress/terminate/",
        views_cron.terminate_elections,
        CONGRESS,
        name="cron-congress-terminate",
    ),
    path(
        "api/cron/elections/country/create/",
        views_cron.create_elections,
        COUNTRY_PRESIDENT,
        name="cron-country-create",
    ),
    path(
        "api/cron/elections/country/activate/",
        views_cron.activate_elections,
        COUNTRY_PRESIDENT,
        name="cron-country-activate",
    ),
    path(
        "api/cron/elections/country/terminate/",
        views_cron.terminate_elections,
        COUNTRY_PRESIDENT,
        name="cron-country-terminate",
    ),
    path("api/cron/elections/party/create/", views_cron.create_elections, PARTY_PRESIDENT, name="cron-party-create"),
    path(
        "api/cron/elections/party/activate/",
        views_cron.activate_elections,
        PARTY_PRESIDENT,
        name="cron-party-activate",
    ),
    path(
        "api/cron/elections/party/terminate/",
        views_cron.terminate_elections,
        PARTY_PRESIDENT,
        name="cron-party-terminate",
    ),

    path(
        "api/elections/congress/country/<int:country_id>/",
        views_elections.congress_elections_for_country,
        name="api-congress-elections-for-country",
    ),
    path(
        "api/elections/<slug:type_slug>/<int:target_id>/<int:year>/<int:month>/",
        views_elections.election_detail,
        name="api-election-detail",
    ),
]
