# PATH: apps/api/config/settings/test.py
from .base import *

DEBUG = False

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

TENANT_DEFAULT_CODE = ""
TENANT_STRICT = True

SOLAPI_MOCK = True
SOLAPI_SENDER = "01000000000"

LOGGING["root"]["level"] = "WARNING"
