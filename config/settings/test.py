"""
With these settings, tests run faster.
"""

from .base import *  # noqa: F403

# GENERAL
# ------------------------------------------------------------------------------
SECRET_KEY = "test-secret-key-not-for-production"
TEST_RUNNER = "django.test.runner.DiscoverRunner"
DATABASES["default"]["NAME"] = ":memory:"  # noqa: F405

# PASSWORDS
# ------------------------------------------------------------------------------
PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

# EMAIL
# ------------------------------------------------------------------------------
EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"

# DEBUGGING FOR TEMPLATES
# ------------------------------------------------------------------------------
TEMPLATES[0]["OPTIONS"]["debug"] = True  # type: ignore[index] # noqa: F405

# HUEY
# ------------------------------------------------------------------------------
HUEY = {"huey_class": "huey.MemoryHuey", "name": "neuralcare-test", "immediate": True}
