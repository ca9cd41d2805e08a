# config/settings/test.py
from .base import *  # noqa
from .base import LOGGING, SIMPLE_JWT

SECRET_KEY = "test-secret-key"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

SIMPLE_JWT = {
    **SIMPLE_JWT,
    "SIGNING_KEY": "test-jwt-secret",
}

CORS_ALLOW_ALL_ORIGINS = True
CORS_ALLOWED_ORIGINS = []

TENANT_SUBDOMAIN_RESOLUTION = True

# Let pytest's caplog see sm_core records (it hooks the root logger).
LOGGING = {
    **LOGGING,
    "handlers": {
        "stdout": {
            **LOGGING["handlers"]["stdout"],
            "formatter": "console",
        },
    },
    "loggers": {
        **LOGGING["loggers"],
        "sm_core": {"level": "DEBUG", "propagate": True},
    },
}
