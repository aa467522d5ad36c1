"""
Shares – Django Settings (Infrastructure Only)
==============================================
Django serves as the HTTP container for the fractional shares API.
Core workflows are framework-agnostic; Django does not dictate structure.

No database-backed apps are installed: ledger state lives on the ledger.
"""

import os
from pathlib import Path

# ── Paths ─────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent

# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.environ.get(
    "DJANGO_SECRET_KEY", "shares-dev-key-replace-before-deployment"
)

DEBUG = os.environ.get("DJANGO_DEBUG", "1") == "1"

ALLOWED_HOSTS = [
    host.strip()
    for host in os.environ.get("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1").split(",")
    if host.strip()
]

# ── Installed Apps ────────────────────────────────────────────
INSTALLED_APPS: list[str] = []

# ── Middleware ────────────────────────────────────────────────
MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

# ── URL & WSGI ────────────────────────────────────────────────
ROOT_URLCONF = "config.urls"
WSGI_APPLICATION = "config.wsgi.application"

# ── Database ──────────────────────────────────────────────────
DATABASES = {}

# ── Ledger ────────────────────────────────────────────────────
# hedera: Hedera testnet via hiero-sdk-python (needs MY_ACCOUNT_ID / MY_PRIVATE_KEY)
# memory: in-process ledger with seeded dev accounts
SHARES_LEDGER_BACKEND = os.environ.get("SHARES_LEDGER_BACKEND", "hedera")
SHARES_ENV_FILE = os.environ.get("SHARES_ENV_FILE") or None

# ── Logging ───────────────────────────────────────────────────
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "plain"},
    },
    "loggers": {
        "shares": {
            "handlers": ["console"],
            "level": os.environ.get("SHARES_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
    },
}

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"
