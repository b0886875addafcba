"""
Settings for the `stimulus_site` project.

Only what `stimulus_forms` needs: the app itself, the template engine that loads the
`stimulus_tags` library, and the package's own settings at their defaults.
Environment variables override the values meant to differ per deployment.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "stimulus-site-insecure-dev-key")
DEBUG = os.environ.get("DJANGO_DEBUG", "1") == "1"
ALLOWED_HOSTS = os.environ.get("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1").split(",")

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "stimulus_forms.apps.StimulusFormsConfig",
]

MIDDLEWARE = []

ROOT_URLCONF = "stimulus_site.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [BASE_DIR / "stimulus_site" / "templates"],
        "APP_DIRS": True,
        "OPTIONS": {"context_processors": []},
    },
]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

USE_TZ = True
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"

# stimulus_forms
STIMULUS_FORMS_JSON_ENCODER = "django.core.serializers.json.DjangoJSONEncoder"
STIMULUS_FORMS_NORMALIZE_CONTROLLER_NAMES = True

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {"console": {"class": "logging.StreamHandler"}},
    "loggers": {
        "stimulus_forms": {
            "handlers": ["console"],
            "level": os.environ.get("STIMULUS_FORMS_LOG_LEVEL", "WARNING"),
        },
    },
}
