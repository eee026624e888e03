"""
Test settings for the project tracker.
"""

import copy

from .base import *

DEBUG = False
SECRET_KEY = 'test-secret-key'
ALLOWED_HOSTS = ['*']

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

CHANNEL_LAYERS = {
    "default": {
        "BACKEND": "channels.layers.InMemoryChannelLayer"
    }
}

PROJECT_DOCUMENT_STORE = 'infrastructure.persistence.stores.InMemoryDocumentStore'
PROJECT_SYNC_MODE = 'live'
DASHBOARD_LOCALE = 'en'
SENTRY_DSN = ''

LOGGING = copy.deepcopy(LOGGING)
LOGGING['root']['level'] = 'WARNING'
