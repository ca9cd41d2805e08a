# config/settings/prod.py
from .base import *  # noqa
from .base import SECRET_KEY, SIMPLE_JWT

DEBUG = False

if SECRET_KEY == "unsafe-dev-key":
    raise RuntimeError("DJANGO_SECRET_KEY must be set in production")

if SIMPLE_JWT["SIGNING_KEY"] == "unsafe-dev-key":
    raise RuntimeError("JWT_SECRET must be set in production")

SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
SECURE_CONTENT_TYPE_NOSNIFF = True
