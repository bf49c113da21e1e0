# backend/settings/test.py
"""
PATH: backend/settings/test.py

TEST SETTINGS
- In-memory SQLite by default; TEST_DATABASE_URL points the suite at another
  database (e.g. Postgres, where row locks make the threaded checkout tests
  exercise SELECT ... FOR UPDATE)
- Fast password hashing
- Throttling relaxed so API tests never hit 429
"""

from __future__ import annotations

from .base import *  # noqa: F403
from .base import REST_FRAMEWORK, STOREFRONT, env

DEBUG = False

DATABASES = {
    "default": env.db("TEST_DATABASE_URL", default="sqlite://:memory:"),
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

REST_FRAMEWORK = {
    **REST_FRAMEWORK,
    "DEFAULT_THROTTLE_CLASSES": (),
    "DEFAULT_THROTTLE_RATES": {
        scope: "10000/min" for scope in REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"]
    },
}

STOREFRONT = {
    **STOREFRONT,
    "NAME": "Pip Beach Plug",
    "CURRENCY": "EGP",
    "CONTACT_NUMBER": "201019284462",
    "COUNTER_DEFAULT_CUSTOMER_NAME": "In-Store Customer",
    "LOW_STOCK_THRESHOLD": 5,
    "TRANSACTION_MAX_ATTEMPTS": 5,
}
