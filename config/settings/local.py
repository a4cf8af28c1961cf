from .base import *  # noqa: F403
from .base import env_bool

# GENERAL
# ------------------------------------------------------------------------------
DEBUG = env_bool("DJANGO_DEBUG", True)
SECRET_KEY = os.environ.get(  # noqa: F405
    "DJANGO_SECRET_KEY",
    "local-only-insecure-key-change-me",
)
ALLOWED_HOSTS = ["localhost", "0.0.0.0", "127.0.0.1"]  # noqa: S104

# EMAIL
# ------------------------------------------------------------------------------
EMAIL_BACKEND = "django.core.mail.backends.console.EmailBackend"

# HUEY
# ------------------------------------------------------------------------------
HUEY["immediate"] = env_bool("HUEY_IMMEDIATE", True)  # noqa: F405
