"""Django settings for Statecraft.

Every deployment-specific value comes from the environment. Without
DATABASE_HOST the project runs on a local SQLite file, which is what the
test suite and local development use.
"""

from __future__ import annotations

import os
from decimal import Decimal
from pathlib import Path

from django.core.exceptions import ImproperlyConfigured

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes")


def _env_list(name: str, default: str = "") -> list[str]:
    return [item.strip() for item in os.environ.get(name, default).split(",") if item.strip()]


DEBUG: bool = _env_bool("DEBUG")

_INSECURE_DEV_SECRET_KEY = "django-insecure-statecraft-local-development-only"
SECRET_KEY: str = os.environ.get("SECRET_KEY", "") or _INSECURE_DEV_SECRET_KEY

ALLOWED_HOSTS: list[str] = _env_list("ALLOWED_HOSTS", "localhost,127.0.0.1,testserver")

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "core.apps.CoreConfig",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
]

ROOT_URLCONF = "config.urls"
WSGI_APPLICATION = "config.wsgi.application"

_DATABASE_HOST = os.environ.get("DATABASE_HOST", "").strip()
if _DATABASE_HOST:
    if SECRET_KEY == _INSECURE_DEV_SECRET_KEY:
        raise ImproperlyConfigured("SECRET_KEY must be set when DATABASE_HOST is configured.")

    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.postgresql",
            "HOST": _DATABASE_HOST,
            "PORT": os.environ.get("DATABASE_PORT", "5432"),
            "NAME": os.environ.get("DATABASE_NAME", "statecraft"),
            "USER": os.environ.get("DATABASE_USER", "statecraft"),
            "PASSWORD": os.environ.get("DATABASE_PASSWORD", ""),
            "CONN_MAX_AGE": int(os.environ.get("DATABASE_CONN_MAX_AGE", "60")),
        }
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": os.environ.get("SQLITE_PATH", str(BASE_DIR / "db.sqlite3")),
        }
    }

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True

# Scheduled election jobs authenticate with "Authorization: Bearer <secret>".
# An empty secret rejects every call.
ELECTIONS_CRON_SECRET: str = os.environ.get("ELECTIONS_CRON_SECRET", "")

# Day of month on which each election type is held. Elections created after
# that day belong to the next month's cycle. None follows the calendar month.
ELECTION_ROLLOVER_DAYS: dict[str, int | None] = {
    "country_president": 5,
    "congress": 25,
    "party_president": None,
}

CONGRESS_SEATS_PER_REGION: int = 3

ELECTION_WINNER_GOLD_STIPEND: Decimal = Decimal(os.environ.get("ELECTION_WINNER_GOLD_STIPEND", "5.00"))

LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "filters": {
        "health_endpoint": {
            "()": "config.logging_filters.HealthEndpointFilter",
        },
    },
    "formatters": {
        "default": {
            "format": "[{asctime}] {levelname} {name}: {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "default",
        },
    },
    "loggers": {
        "core": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
        "django": {
            "handlers": ["console"],
            "level": "INFO",
            "propagate": False,
        },
        "django.server": {
            "handlers": ["console"],
            "level": "INFO",
            "filters": ["health_endpoint"],
            "propagate": False,
        },
    },
    "root": {
        "handlers": ["console"],
        "level": LOG_LEVEL,
    },
}

SENTRY_DSN: str = os.environ.get("SENTRY_DSN", "").strip()
if SENTRY_DSN:
    import logging

    import sentry_sdk
    from sentry_sdk.integrations.django import DjangoIntegration
    from sentry_sdk.integrations.logging import LoggingIntegration

    sentry_sdk.init(
        dsn=SENTRY_DSN,
        integrations=[
            DjangoIntegration(),
            LoggingIntegration(level=logging.INFO, event_level=logging.ERROR),
        ],
        environment=os.environ.get("SENTRY_ENVIRONMENT", "production"),
        traces_sample_rate=float(os.environ.get("SENTRY_TRACES_SAMPLE_RATE", "0")),
        send_default_pii=False,
    )
