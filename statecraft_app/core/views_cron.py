"""Scheduled election jobs, triggered over HTTP by an external scheduler."""

from __future__ import annotations

import datetime
import hmac
import logging
from collections.abc import Callable
from functools import wraps

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils import timezone
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from core import elections_services

logger = logging.getLogger(__name__)


def has_valid_cron_secret(request: HttpRequest) -> bool:
    expected = str(settings.ELECTIONS_CRON_SECRET or "")
    if not expected:
        return False

    scheme, _, token = str(request.headers.get("Authorization") or "").partition(" ")
    if scheme != "Bearer" or not token:
        return False
    return hmac.compare_digest(token.encode("utf-8"), expected.encode("utf-8"))


def _today() -> datetime.date:
    return timezone.now().astimezone(datetime.UTC).date()


def cron_job(view: Callable[..., HttpResponse]) -> Callable[..., HttpResponse]:
    """Reject calls without the shared secret and turn job failures into a bare 500."""

    @csrf_exempt
    @require_POST
    @wraps(view)
    def wrapper(request: HttpRequest, *args, **kwargs) -> HttpResponse:
        if not has_valid_cron_secret(request):
            logger.warning("election_job_unauthorized path=%s", request.path)
            return HttpResponse(status=401)

        try:
            return view(request, *args, **kwargs)
        except Exception:
            logger.exception("election_job_failed path=%s", request.path)
            return JsonResponse({"success": False}, status=500)

    return wrapper


@cron_job
def create_elections(_request: HttpRequest, *, election_type: str) -> HttpResponse:
    created = elections_services.create_elections(election_type=election_type, today=_today())
    return JsonResponse({"success": True, "created": created})


@cron_job
def activate_elections(_request: HttpRequest, *, election_type: str) -> HttpResponse:
    updated = elections_services.activate_elections(election_type=election_type, today=_today())
    return JsonResponse({"success": True, "updated": updated})


@cron_job
def terminate_elections(_request: HttpRequest, *, election_type: str) -> HttpResponse:
    updated = elections_services.terminate_elections(election_type=election_type, today=_today())
    return JsonResponse({"success": True, "updated": updated})
