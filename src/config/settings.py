"""Django settings for GPX fuel finder project."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent
PROJECT_ROOT = BASE_DIR.parent

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "change-me-in-production")
DEBUG = os.getenv("DJANGO_DEBUG", "1") == "1"
ALLOWED_HOSTS = [host for host in os.getenv("DJANGO_ALLOWED_HOSTS", "").split(",") if host]

INSTALLED_APPS = [
    "django.contrib.staticfiles",
    "fuel_finder",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "config.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
            ],
        },
    },
]

WSGI_APPLICATION = "config.wsgi.application"
ASGI_APPLICATION = "config.asgi.application"

# Routes and stations live only for the duration of one request.
DATABASES: dict[str, dict[str, object]] = {}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "loggers": {
        "fuel_finder": {
            "handlers": ["console"],
            "level": os.getenv("FUEL_FINDER_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
    },
}

OVERPASS_URL = os.getenv("OVERPASS_URL", "https://overpass-api.de/api/interpreter")
OVERPASS_TIMEOUT_SECONDS = float(os.getenv("OVERPASS_TIMEOUT_SECONDS", "30"))
OVERPASS_QUERY_TIMEOUT_SECONDS = int(os.getenv("OVERPASS_QUERY_TIMEOUT_SECONDS", "25"))
OVERPASS_USER_AGENT = os.getenv("OVERPASS_USER_AGENT", "gpx-fuel-finder/1.0")

FUEL_MAX_DISTANCE_METERS = float(os.getenv("FUEL_MAX_DISTANCE_METERS", "2000"))
FUEL_MIN_INTERVAL_KM = float(os.getenv("FUEL_MIN_INTERVAL_KM", "40"))
FUEL_MAX_INTERVAL_KM = float(os.getenv("FUEL_MAX_INTERVAL_KM", "80"))
FUEL_MAX_CANDIDATES = int(os.getenv("FUEL_MAX_CANDIDATES", "3"))
POI_CACHE_PRECISION = int(os.getenv("POI_CACHE_PRECISION", "3"))

GPX_OUTPUT_DIR = Path(
    os.getenv("GPX_OUTPUT_DIR", str(Path(tempfile.gettempdir()) / "gpx-fuel-finder"))
)
GPX_OUTPUT_TTL_SECONDS = int(os.getenv("GPX_OUTPUT_TTL_SECONDS", "600"))
GPX_MAX_UPLOAD_BYTES = int(os.getenv("GPX_MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))
