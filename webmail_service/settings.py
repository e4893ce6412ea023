"""
Django settings for webmail_service project.

Values come from environment variables, layered as .env then .env.<RUN_ENV>
(see common.utils.env_util.load_env).

For more information on this file, see
https://docs.djangoproject.com/en/4.2/topics/settings/
"""
from pathlib import Path

from common.utils.env_util import load_env, get_run_env

BASE_DIR = Path(__file__).resolve().parent.parent

env = load_env(BASE_DIR)

RUN_ENV = get_run_env()

SECRET_KEY = env("SECRET_KEY", default="django-insecure-webmail-service-dev-key")

DEBUG = env.bool("DEBUG", default=False)

ALLOWED_HOSTS = env.list("ALLOWED_HOSTS", default=["localhost", "127.0.0.1"])


# Application definition

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "django.contrib.sessions",
    "rest_framework",
    "app_mailbox",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "webmail_service.urls"

WSGI_APPLICATION = "webmail_service.wsgi.application"


# Database
# the mailbox app runs on its own alias, see app_mailbox.db_routers

DATABASES = {
    "default": env.db("DATABASE_URL", default=f"sqlite:///{BASE_DIR / 'db.sqlite3'}"),
    "mailbox_rw": env.db("MAILBOX_DATABASE_URL", default=f"sqlite:///{BASE_DIR / 'mailbox.sqlite3'}"),
}

DATABASE_ROUTERS = [
    "app_mailbox.db_routers.ReadWriteRouter",
]

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"


# REST framework

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "common.auth.caller_authentication.SignedTokenAuthentication",
        "common.auth.caller_authentication.SessionCallerAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.IsAuthenticated",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
    ],
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "EXCEPTION_HANDLER": "common.utils.http_util.api_exception_handler",
}


# Caller tokens (Authorization: Bearer <token>)

CALLER_TOKEN_SALT = env("CALLER_TOKEN_SALT", default="webmail_service.caller")

# seconds
CALLER_TOKEN_MAX_AGE = env.int("CALLER_TOKEN_MAX_AGE", default=60 * 60 * 24)


# Internationalization

LANGUAGE_CODE = "en-us"

TIME_ZONE = "UTC"

USE_I18N = True

USE_TZ = True


# Logging

LOG_LEVEL = env("LOG_LEVEL", default="INFO").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": LOG_LEVEL,
    },
    "loggers": {
        "django": {
            "handlers": ["console"],
            "level": "WARNING",
            "propagate": False,
        },
    },
}
