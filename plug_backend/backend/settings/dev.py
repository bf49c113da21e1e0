# backend/settings/dev.py
"""
PATH: backend/settings/dev.py

LOCAL DEVELOPMENT SETTINGS

Purpose:
- Run the storefront SPA (Vite) and the cashier screen against a local API.

Rules:
- The cart lives in the session cookie, so the SPA origin must be allowed to
  send credentials.
- Checkout throttles are loosened so repeated test orders don't hit 429.
- App loggers default to DEBUG (placement retries, cart session warnings).
"""

from __future__ import annotations

from .base import *  # noqa: F403
from .base import LOGGING, REST_FRAMEWORK, env

DEBUG = True

ALLOWED_HOSTS = env.list("ALLOWED_HOSTS", default=["localhost", "127.0.0.1"])

# -----------------------------------------
# STOREFRONT SPA (session cart over CORS)
# -----------------------------------------
STOREFRONT_DEV_ORIGINS = ["http://localhost:5173", "http://127.0.0.1:5173"]

CORS_ALLOWED_ORIGINS = env.list("CORS_ALLOWED_ORIGINS", default=STOREFRONT_DEV_ORIGINS)
CSRF_TRUSTED_ORIGINS = env.list("CSRF_TRUSTED_ORIGINS", default=STOREFRONT_DEV_ORIGINS)
CORS_ALLOW_CREDENTIALS = True

SESSION_COOKIE_SAMESITE = "Lax"
SESSION_COOKIE_SECURE = False

# -----------------------------------------
# DRF
# -----------------------------------------
REST_FRAMEWORK = {
    **REST_FRAMEWORK,
    "DEFAULT_RENDERER_CLASSES": (
        "rest_framework.renderers.JSONRenderer",
        "rest_framework.renderers.BrowsableAPIRenderer",
    ),
    "DEFAULT_THROTTLE_RATES": {
        **REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"],
        "public_write": env.str("THROTTLE_PUBLIC_WRITE_RATE", default="120/min"),
    },
}

# -----------------------------------------
# LOGGING
# -----------------------------------------
DEV_LOG_LEVEL = env.str("DEV_LOG_LEVEL", default="DEBUG").upper()

LOGGING = {
    **LOGGING,
    "loggers": {
        name: {**config, "level": DEV_LOG_LEVEL}
        for name, config in LOGGING["loggers"].items()
    },
}
