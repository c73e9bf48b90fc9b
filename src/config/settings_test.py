"""Settings for the pytest suite.

Provides a throwaway secret, an in-process cache instead of Redis and a
file-backed sqlite test database: the concurrency tests open one
connection per thread, which an in-memory database cannot share.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-only-insecure-secret-key")

from config.settings import *  # noqa: E402,F401,F403
from config.settings import BASE_DIR  # noqa: E402

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
        "OPTIONS": {"timeout": 20},
        "TEST": {"NAME": BASE_DIR / "test_db.sqlite3"},
    }
}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

ADDRESS_LOOKUP_URL = "https://viacep.test/ws/{postal_code}/json/"
