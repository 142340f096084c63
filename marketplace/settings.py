"""
Django settings for the project marketplace backend.

This file is deliberately:
- explicit (no magic defaults)
- environment-driven (.env via python-dotenv)
- readable (one section per concern)
"""

from pathlib import Path
from dotenv import load_dotenv
import os

load_dotenv()

# --------------------------------------------------
# Core paths
# --------------------------------------------------

BASE_DIR = Path(__file__).resolve().parent.parent

# --------------------------------------------------
# Security
# --------------------------------------------------

# WARNING: override DJANGO_SECRET_KEY outside local development
SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "marketplace-dev-only-secret-key")

ENV = os.getenv("DJANGO_ENV", "dev")
DEBUG = ENV == "dev"

ALLOWED_HOSTS = ["testserver", "localhost", "127.0.0.1"]
AUTH_USER_MODEL = "accounts.User"

# --------------------------------------------------
# Applications
# --------------------------------------------------

INSTALLED_APPS = [
    # Django core...
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "django_extensions",

    # Project apps
    "localization.apps.LocalizationConfig",
    "locations.apps.LocationsConfig",
    "accounts.apps.AccountsConfig",
    "chats.apps.ChatsConfig",
    "projects.apps.ProjectsConfig",
]

# --------------------------------------------------
# Middleware
# --------------------------------------------------

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.locale.LocaleMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

# --------------------------------------------------
# URL configuration
# --------------------------------------------------

ROOT_URLCONF = "marketplace.urls"

# --------------------------------------------------
# Templates
# --------------------------------------------------

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
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

# --------------------------------------------------
# WSGI
# --------------------------------------------------

WSGI_APPLICATION = "marketplace.wsgi.application"

# --------------------------------------------------
# Database
# --------------------------------------------------

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.getenv("DATABASE_PATH", str(BASE_DIR / "db.sqlite3")),
    }
}

# --------------------------------------------------
# Cache (online presence flags)
# --------------------------------------------------

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "marketplace",
    }
}

# --------------------------------------------------
# Password validation
# --------------------------------------------------

AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator"},
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator"},
    {"NAME": "django.contrib.auth.password_validation.CommonPasswordValidator"},
    {"NAME": "django.contrib.auth.password_validation.NumericPasswordValidator"},
]

# --------------------------------------------------
# Internationalisation
# --------------------------------------------------

LANGUAGE_CODE = "uk"
LANGUAGES = [
    ("uk", "Ukrainian"),
    ("ru", "Russian"),
    ("en", "English"),
]
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# Base locale denormalised onto the parent record's own columns
PRIMARY_LOCALE = "uk"

# Locales scanned by free-text listing search
SEARCH_LOCALES = ("en", "ru")

# Locale whose `name` translation marks a project as international
INTERNATIONAL_LOCALE = "en"

# --------------------------------------------------
# Static files
# --------------------------------------------------

STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

# ============================================================
# MEDIA (User-generated files)
# ============================================================

MEDIA_ROOT = Path(os.getenv("MEDIA_ROOT", str(BASE_DIR / "media")))
MEDIA_URL = "/media/"

PROJECT_PHOTO_PATH = "public/projects/photos"
USER_AVATAR_PATH = "public/users/avatars"
DEFAULT_AVATAR = "users/default.svg"

# --------------------------------------------------
# Listings
# --------------------------------------------------

PROJECTS_PER_PAGE = 12

# --------------------------------------------------
# Logging
# --------------------------------------------------

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "plain",
        },
    },
    "loggers": {
        "marketplace": {
            "handlers": ["console"],
            "level": os.getenv("MARKETPLACE_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
    },
}

# --------------------------------------------------
# Default primary key field type
# --------------------------------------------------

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"
