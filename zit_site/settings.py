import os

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "zit-local-browser-insecure-key")
DEBUG = os.environ.get("DJANGO_DEBUG", "") == "1"
ALLOWED_HOSTS = ["localhost", "127.0.0.1", "[::1]", "testserver"]

INSTALLED_APPS = [
    "zit_web",
]
MIDDLEWARE = []

ROOT_URLCONF = "zit_site.urls"
WSGI_APPLICATION = "zit_site.wsgi.application"

# The browser reads the repository files directly; there is no database.
DATABASES = {}

USE_TZ = True

ZIT_REPO_ROOT = os.environ.get("ZIT_REPO_ROOT", os.getcwd())

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {
        "console": {"class": "logging.StreamHandler"},
    },
    "loggers": {
        "zit": {"handlers": ["console"], "level": "DEBUG" if DEBUG else "INFO"},
    },
}
