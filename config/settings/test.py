"""
Jewellery Stock — Test Settings

In-memory SQLite and fast hashing for the pytest suite. Activated by
pytest-django (see [tool.pytest.ini_options] in pyproject.toml).

@file config/settings/test.py
"""

from .base import *  # noqa: F401, F403

DEBUG = False

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    },
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

REST_FRAMEWORK['DEFAULT_THROTTLE_CLASSES'] = []  # noqa: F405

LOGGING['loggers']['jewelstock']['level'] = 'WARNING'  # noqa: F405
