"""
Django settings for Little Latte Lane.

Secrets come from the environment - never hardcode credentials.
Run with: uv run python apps/web/manage.py runserver
"""

from decimal import Decimal
from pathlib import Path

import environ  # type: ignore[import-untyped]

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent

# Initialize environ
env = environ.Env(
    DEBUG=(bool, False),
    ALLOWED_HOSTS=(list, []),
    PAYFAST_SANDBOX=(bool, True),
    PAYFAST_ENFORCE_IP_CHECK=(bool, False),
    PAYFAST_VALIDATE_ITN=(bool, True),
    TRUSTED_PROXY_COUNT=(int, 0),
)

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = env("SECRET_KEY")

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = env("DEBUG")

ALLOWED_HOSTS = env("ALLOWED_HOSTS")

# Number of reverse proxies in front of the app that append to X-Forwarded-For.
# Leave at 0 when the app is reached directly so the header is ignored.
TRUSTED_PROXY_COUNT = env("TRUSTED_PROXY_COUNT")

# Application definition
INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    # Local apps
    "apps.web.core",
    "apps.web.restaurant",
    "apps.web.payments",
    "apps.web.kitchen",
    "apps.web.notifications",
    "apps.web.content",
    "apps.web.bookings",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "apps.web.config.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [BASE_DIR / "templates"],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "apps.web.config.wsgi.application"

# Database
# Connection string from the environment: DATABASE_URL
DATABASES = {
    "default": env.db("DATABASE_URL"),
}

# Idempotency keys and rate-limit counters live here
CACHES = {
    "default": env.cache("CACHE_URL", default="locmemcache://"),
}

# Custom user model
AUTH_USER_MODEL = "core.User"

# Password validation
_V = "django.contrib.auth.password_validation"
AUTH_PASSWORD_VALIDATORS = [
    {"NAME": f"{_V}.UserAttributeSimilarityValidator"},
    {"NAME": f"{_V}.MinimumLengthValidator"},
    {"NAME": f"{_V}.CommonPasswordValidator"},
    {"NAME": f"{_V}.NumericPasswordValidator"},
]

# Internationalization
LANGUAGE_CODE = "en-za"
TIME_ZONE = "Africa/Johannesburg"
USE_I18N = True
USE_TZ = True

# Static files (CSS, JavaScript, Images)
STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR.parent.parent / "staticfiles"  # /app/staticfiles in production

# Default primary key field type
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Logging
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": env("LOG_LEVEL", default="INFO"),
    },
    "loggers": {
        "django.request": {"level": "WARNING"},
    },
}

# =============================================================================
# Restaurant
# =============================================================================

# Public site URL used for payment gateway callbacks (falls back to request host)
SITE_URL = env("SITE_URL", default="")

# Delivery fees per zone (ZAR); see restaurant/delivery.py for the zone radii
DELIVERY_FEE_ROBERTS_ESTATE = Decimal(env("DELIVERY_FEE_ROBERTS_ESTATE", default="10.00"))
DELIVERY_FEE_MIDDLEBURG = Decimal(env("DELIVERY_FEE_MIDDLEBURG", default="30.00"))

# Inbox for table and event booking requests
BOOKINGS_EMAIL = env("BOOKINGS_EMAIL", default="admin@littlelattelane.co.za")

# =============================================================================
# Payments
# =============================================================================

YOCO_SECRET_KEY = env("YOCO_SECRET_KEY", default="")
YOCO_WEBHOOK_SECRET = env("YOCO_WEBHOOK_SECRET", default="")

PAYFAST_MERCHANT_ID = env("PAYFAST_MERCHANT_ID", default="")
PAYFAST_MERCHANT_KEY = env("PAYFAST_MERCHANT_KEY", default="")
PAYFAST_PASSPHRASE = env("PAYFAST_PASSPHRASE", default="")
PAYFAST_SANDBOX = env("PAYFAST_SANDBOX")
PAYFAST_ENFORCE_IP_CHECK = env("PAYFAST_ENFORCE_IP_CHECK")
# Confirm each ITN with PayFast's /eng/query/validate endpoint before trusting it
PAYFAST_VALIDATE_ITN = env("PAYFAST_VALIDATE_ITN")

# =============================================================================
# Notifications
# =============================================================================

RESEND_API_KEY = env("RESEND_API_KEY", default="")
EMAIL_FROM = env("EMAIL_FROM", default="Little Latte Lane <orders@littlelattelane.co.za>")

TWILIO_ACCOUNT_SID = env("TWILIO_ACCOUNT_SID", default="")
TWILIO_AUTH_TOKEN = env("TWILIO_AUTH_TOKEN", default="")
TWILIO_FROM_NUMBER = env("TWILIO_FROM_NUMBER", default="")
