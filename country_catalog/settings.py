"""
Django settings for the country_catalog project.

Every deploy-specific value is read from the environment; a ``.env`` file in the
project root is loaded first when present.
"""
import os
from pathlib import Path
from urllib.parse import unquote, urlparse

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv(BASE_DIR / ".env")


def env_bool(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "django-insecure-change-me")

DEBUG = env_bool("DJANGO_DEBUG", False)

ALLOWED_HOSTS = [h.strip() for h in os.getenv("DJANGO_ALLOWED_HOSTS", "*").split(",") if h.strip()]


INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "corsheaders",
    "rest_framework",
    "countries",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "country_catalog.urls"

WSGI_APPLICATION = "country_catalog.wsgi.application"


# Database

DB_ENGINES = {
    "postgres": "django.db.backends.postgresql",
    "postgresql": "django.db.backends.postgresql",
    "mysql": "django.db.backends.mysql",
    "sqlite": "django.db.backends.sqlite3",
}


def database_from_url(url):
    result = urlparse(url)
    if result.scheme not in DB_ENGINES:
        raise ValueError(f"Unsupported DATABASE_URL scheme: {result.scheme!r}")
    if result.scheme == "sqlite":
        return {
            "ENGINE": DB_ENGINES["sqlite"],
            "NAME": result.path[1:] or ":memory:",
        }
    return {
        "ENGINE": DB_ENGINES[result.scheme],
        "NAME": result.path[1:],
        "USER": unquote(result.username or ""),
        "PASSWORD": unquote(result.password or ""),
        "HOST": result.hostname or "",
        "PORT": str(result.port or ""),
    }


DATABASE_URL = os.getenv("DATABASE_URL")

DATABASES = {
    "default": database_from_url(DATABASE_URL) if DATABASE_URL else {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"


# Internationalization

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True


# CORS

CORS_ALLOW_ALL_ORIGINS = env_bool("CORS_ALLOW_ALL_ORIGINS", True)
CORS_ALLOWED_ORIGINS = [o.strip() for o in os.getenv("CORS_ALLOWED_ORIGINS", "").split(",") if o.strip()]


# REST framework

REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "DEFAULT_PARSER_CLASSES": ["rest_framework.parsers.JSONParser"],
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.AllowAny"],
    "UNAUTHENTICATED_USER": None,
    "COERCE_DECIMAL_TO_STRING": False,
}


# External data sources

COUNTRIES_API_URL = os.getenv(
    "COUNTRIES_API_URL",
    "https://restcountries.com/v2/all?fields=name,capital,region,population,flag,currencies",
)
EXCHANGE_RATES_API_URL = os.getenv("EXCHANGE_RATES_API_URL", "https://open.er-api.com/v6/latest/USD")
EXTERNAL_TIMEOUT = float(os.getenv("EXTERNAL_TIMEOUT", "30"))


# Summary image

SUMMARY_IMAGE_PATH = Path(os.getenv("SUMMARY_IMAGE_PATH", BASE_DIR / "cache" / "summary.png"))


# Logging (loguru sink, see countries.apps)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
