# config/settings/base.py
from pathlib import Path
import os
from dotenv import load_dotenv
from datetime import timedelta


BASE_DIR = Path(__file__).resolve().parent.parent.parent
load_dotenv(BASE_DIR / ".env")

from config import env  # noqa: E402  (reads os.environ after .env is loaded)

SERVER_ENV = env.get_str("server.env", "development").lower()

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "unsafe-dev-key")
DEBUG = os.getenv("DJANGO_DEBUG", "0") == "1"
ALLOWED_HOSTS = env.get_list("server.allowed_hosts", ["*"])

INSTALLED_APPS = [
    # Django
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "django.contrib.staticfiles",

    # Third-party
    "corsheaders",
    "rest_framework",
    "rest_framework_simplejwt",
    "drf_spectacular",
    "django_filters",

    # Domain apps (modular monolith)
    "sm_core.common.apps.CommonConfig",
    "sm_core.tenants",
    "sm_core.iam.apps.IamConfig",
    "sm_core.audit",
    "sm_core.academics",
    "sm_core.students",
    "sm_core.teachers",
    "sm_core.attendance",
    "sm_core.grades",
    "sm_core.fees",
]

AUTH_USER_MODEL = "iam.User"

# ---------------------------------------------------------------------
# CORS (app.cors.*)
# ---------------------------------------------------------------------
CORS_ENABLED = env.get_bool("app.cors.enable", True)

_cors_origins = env.get_list("app.cors.allowed_origins", ["*"])
CORS_ALLOW_ALL_ORIGINS = "*" in _cors_origins
CORS_ALLOWED_ORIGINS = [] if CORS_ALLOW_ALL_ORIGINS else _cors_origins
CORS_ALLOW_CREDENTIALS = env.get_bool("app.cors.allow_credentials", True)
CORS_ALLOW_METHODS = [
    m.upper() for m in env.get_list("app.cors.allowed_methods", ["GET", "POST", "PUT", "DELETE", "OPTIONS"])
]
CORS_ALLOW_HEADERS = env.get_list(
    "app.cors.allowed_headers",
    ["Origin", "Content-Type", "Accept", "Authorization", "X-Request-ID", "X-Tenant-ID"],
)
CORS_EXPOSE_HEADERS = ["X-Request-ID"]
CORS_PREFLIGHT_MAX_AGE = env.get_int("app.cors.max_age_seconds", 300)

MIDDLEWARE = [
    # Outermost: request id + access log wrap everything else.
    "sm_core.common.middleware.RequestContextMiddleware",
    "sm_core.common.middleware.PreflightNoContentMiddleware",
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
    # Resolves X-Tenant-ID / tenant_id / subdomain and sets app.current_tenant.
    "sm_core.common.middleware.TenantResolutionMiddleware",
]

if not CORS_ENABLED:
    MIDDLEWARE = [
        m for m in MIDDLEWARE
        if m not in (
            "corsheaders.middleware.CorsMiddleware",
            "sm_core.common.middleware.PreflightNoContentMiddleware",
        )
    ]

ROOT_URLCONF = "config.urls"
APPEND_SLASH = False

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
    }
]

WSGI_APPLICATION = "config.wsgi.application"

# ---------------------------------------------------------------------
# Database: write ("default") + optional read replica ("replica")
# ---------------------------------------------------------------------


def _pg_alias(role: str, *, fallback: dict | None = None) -> dict:
    fb = fallback or {}
    prefix = f"db.pg.{role}"
    return {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": env.get_str(f"{prefix}.name", fb.get("NAME", "school")),
        "USER": env.get_str(f"{prefix}.user", fb.get("USER", "school")),
        "PASSWORD": env.get_str(f"{prefix}.password", fb.get("PASSWORD", "school")),
        "HOST": env.get_str(f"{prefix}.host", fb.get("HOST", "127.0.0.1")),
        "PORT": env.get_str(f"{prefix}.port", fb.get("PORT", "5432")),
        # seconds; Django keeps one connection per thread per alias
        "CONN_MAX_AGE": env.get_int(f"{prefix}.max_connection_lifetime", fb.get("CONN_MAX_AGE", 60)),
        "CONN_HEALTH_CHECKS": True,
        "OPTIONS": {
            "sslmode": env.get_str(f"{prefix}.sslmode", fb.get("OPTIONS", {}).get("sslmode", "disable")),
        },
    }


DATABASES = {
    "default": _pg_alias("write"),
}

if env.get("db.pg.read.host"):
    DATABASES["replica"] = _pg_alias("read", fallback=DATABASES["default"])

DATABASE_ROUTERS = ["sm_core.common.db_routers.ReadWriteRouter"]

# Upper bound for workers * threads; Django opens one connection per thread.
DB_MAX_OPEN_CONNECTIONS = env.get_int("db.pg.write.max_open_connection", 20)

PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.BCryptSHA256PasswordHasher",
    "django.contrib.auth.hashers.PBKDF2PasswordHasher",
]

LANGUAGE_CODE = "en-us"
TIME_ZONE = env.get_str("app.timezone", "UTC")
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ---------------------------------------------------------------------
# App metadata (app.*) - surfaced by /v1/health
# ---------------------------------------------------------------------
APP_NAME = env.get_str("app.name", "School Management API")
APP_VERSION = env.get_str("app.version", "0.1.0")
APP_DESCRIPTION = env.get_str("app.description", "Multi-tenant school administration backend")
APP_URL = env.get_str("app.url", "http://localhost:8080")
APP_LOCALE = env.get_str("app.locale", "en")

PAGINATION_DEFAULT_LIMIT = env.get_int("app.pagination.default_limit", 10)
PAGINATION_MAX_LIMIT = env.get_int("app.pagination.max_limit", 100)

# Tenant resolution from Host subdomain (first label of a 3+ label host)
TENANT_SUBDOMAIN_RESOLUTION = env.get_bool("app.tenant.subdomain_resolution", True)

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": (
        "sm_core.iam.auth.BearerTokenAuthentication",
    ),
    "DEFAULT_PERMISSION_CLASSES": (
        "rest_framework.permissions.IsAuthenticated",
    ),
    "DEFAULT_RENDERER_CLASSES": (
        "rest_framework.renderers.JSONRenderer",
    ),
    "DEFAULT_PARSER_CLASSES": (
        "rest_framework.parsers.JSONParser",
    ),
    "DEFAULT_SCHEMA_CLASS": "sm_core.common.openapi.SchoolAutoSchema",

    # Standard {success, message, error} envelope
    "EXCEPTION_HANDLER": "sm_core.common.api.exceptions.api_exception_handler",

    "UNAUTHENTICATED_USER": None,
}

SPECTACULAR_SETTINGS = {
    "TITLE": "School Management API",
    "DESCRIPTION": "Multi-tenant school administration backend",
    "VERSION": APP_VERSION,

    "COMPONENT_SPLIT_REQUEST": True,
    "SORT_OPERATIONS": True,
    "SORT_OPERATION_PARAMETERS": True,

    # /v1/schema and /v1/docs are public
    "SERVE_PERMISSIONS": ["rest_framework.permissions.AllowAny"],
    "SERVE_AUTHENTICATION": [],

    # Declared by BearerTokenAuthenticationScheme (sm_core/iam/openapi.py)
    "SECURITY": [
        {"BearerJWT": []}
    ],
}

SIMPLE_JWT = {
    "ACCESS_TOKEN_LIFETIME": timedelta(hours=env.get_int("jwt.expire_time_hours", 24)),
    "ALGORITHM": "HS256",
    "SIGNING_KEY": env.get_str("jwt.secret", SECRET_KEY),
    "LEEWAY": 0,
    "AUTH_HEADER_TYPES": ("Bearer",),
    "USER_ID_FIELD": "id",
    "USER_ID_CLAIM": "user_id",
    "TOKEN_TYPE_CLAIM": "token_type",
    "UPDATE_LAST_LOGIN": False,
}

# ---------------------------------------------------------------------
# Logging: stdlib logging + python-json-logger; request_id/user_id/tenant_id
# are stamped on every LogRecord (see sm_core.common.logging)
# ---------------------------------------------------------------------
LOG_LEVEL = env.get_str("server.log_level", "info").upper()
LOG_FORMAT = "console" if SERVER_ENV == "development" else "json"

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "json": {
            "()": "sm_core.common.logging.ContextJsonFormatter",
            "fmt": "%(timestamp)s %(level)s %(name)s %(message)s",
        },
        "console": {
            "()": "sm_core.common.logging.ContextConsoleFormatter",
            "format": "%(asctime)s | %(levelname)-8s | %(name)s | rid=%(request_id)s "
                      "tenant=%(tenant_id)s user=%(user_id)s | %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "stdout": {
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stdout",
            "formatter": LOG_FORMAT,
        },
    },
    "root": {
        "handlers": ["stdout"],
        "level": LOG_LEVEL,
    },
    "loggers": {
        "django": {"handlers": ["stdout"], "level": "WARNING", "propagate": False},
        # 4xx/5xx are already covered by sm_core.access
        "django.request": {"handlers": ["stdout"], "level": "ERROR", "propagate": False},
        "sm_core": {"handlers": ["stdout"], "level": LOG_LEVEL, "propagate": False},
    },
}

# Graceful shutdown window consumed by gunicorn.conf.py
SHUTDOWN_GRACE_PERIOD_SECONDS = env.get_int("server.shutdown_grace_period_seconds", 3)
