"""
pytest configuration for Yardline.
Sets Django settings and provides shared fixtures.
"""

from datetime import timedelta

import pytest
from django.conf import settings


def pytest_configure(config):
    """Configure Django settings before tests run."""
    if not settings.configured:
        settings.configure(
            DATABASES={
                "default": {
                    "ENGINE": "django.db.backends.sqlite3",
                    "NAME":   ":memory:",
                }
            },
            INSTALLED_APPS=[
                "django.contrib.admin",
                "django.contrib.contenttypes",
                "django.contrib.auth",
                "django.contrib.sessions",
                "django.contrib.messages",
                "django.contrib.staticfiles",
                "rest_framework",
                "rest_framework_simplejwt",
                "drf_spectacular",
                "channels",
                "django_filters",
                "corsheaders",
                "apps.drivers",
                "apps.queue",
                "apps.notifications",
                "apps.realtime",
                "apps.ops",
            ],
            REST_FRAMEWORK={
                "DEFAULT_AUTHENTICATION_CLASSES": [],
                "DEFAULT_PERMISSION_CLASSES": [
                    "rest_framework.permissions.AllowAny",
                ],
                "DEFAULT_FILTER_BACKENDS": [
                    "django_filters.rest_framework.DjangoFilterBackend",
                    "rest_framework.filters.SearchFilter",
                    "rest_framework.filters.OrderingFilter",
                ],
                "DEFAULT_PAGINATION_CLASS": "rest_framework.pagination.PageNumberPagination",
                "PAGE_SIZE": 50,
                "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
                "EXCEPTION_HANDLER": "yardline.exceptions.api_exception_handler",
            },
            SPECTACULAR_SETTINGS={
                "TITLE": "Yardline API",
                "DESCRIPTION": "Driver queue and dock dispatch",
                "VERSION": "1.0.0",
                "SERVE_INCLUDE_SCHEMA": False,
            },
            SECRET_KEY="test-secret-key-not-for-production",
            DEBUG=True,
            USE_TZ=True,
            TIME_ZONE="America/Sao_Paulo",
            LANGUAGE_CODE="en-us",
            ROOT_URLCONF="yardline.urls",
            DEFAULT_AUTO_FIELD="django.db.models.BigAutoField",
            TEMPLATES=[{
                "BACKEND": "django.template.backends.django.DjangoTemplates",
                "DIRS": [],
                "APP_DIRS": True,
                "OPTIONS": {
                    "context_processors": [
                        "django.template.context_processors.debug",
                        "django.template.context_processors.request",
                        "django.contrib.auth.context_processors.auth",
                        "django.contrib.messages.context_processors.messages",
                    ],
                },
            }],
            MIDDLEWARE=[
                "django.middleware.security.SecurityMiddleware",
                "corsheaders.middleware.CorsMiddleware",
                "django.contrib.sessions.middleware.SessionMiddleware",
                "django.middleware.common.CommonMiddleware",
                "django.middleware.csrf.CsrfViewMiddleware",
                "django.contrib.auth.middleware.AuthenticationMiddleware",
                "django.contrib.messages.middleware.MessageMiddleware",
            ],
            CHANNEL_LAYERS={
                "default": {
                    "BACKEND": "channels.layers.InMemoryChannelLayer",
                }
            },
            ASGI_APPLICATION="yardline.asgi.application",
            STATIC_URL="/static/",
            STATIC_ROOT="/tmp/staticfiles_test",
            CACHES={
                "default": {
                    "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
                }
            },
            CELERY_TASK_ALWAYS_EAGER=True,   # Execute tasks synchronously in tests
            CELERY_TASK_EAGER_PROPAGATES=True,
            CORS_ALLOW_ALL_ORIGINS=True,
            SIMPLE_JWT={
                "ALGORITHM": "HS256",
            },
            SUBSCRIPTION_TOKEN_LIFETIME=timedelta(hours=1),
            DOCK_RESPONSE_SECONDS=300,
            QUEUE_REFRESH_SECONDS=10,
            QUEUE_LIST_LIMIT=100,
            NOTIFICATIONS_ASYNC=False,
        )


@pytest.fixture
def waypoint(db):
    from apps.drivers.models import Waypoint
    return Waypoint.objects.create(
        city="Rio de Janeiro", code="XRJ2", latitude=-22.9068, longitude=-43.1729, radius_m=500,
    )


@pytest.fixture
def make_driver(db):
    """Enroll a driver directly through the registry."""
    from apps.drivers.service import DriverRegistry

    def _make(tax_id="11122233344", full_name="Ana Souza", origin="SP1", destination="XRJ2", **kwargs):
        return DriverRegistry().register(
            full_name   = full_name,
            tax_id      = tax_id,
            phone       = kwargs.get("phone", "+55 11 99999-0000"),
            email       = kwargs.get("email", "ana@example.com"),
            origin      = origin,
            destination = destination,
        )
    return _make
