"""Test settings: in-memory SQLite, eager Celery and an in-memory mailbox."""

from .base import *  # noqa: F401,F403

DEBUG = False

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = 'memory://'
CELERY_RESULT_BACKEND = 'cache+memory://'

STORAGES = {
    'default': {'BACKEND': 'django.core.files.storage.FileSystemStorage'},
    'staticfiles': {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'},
}

PAYMENT_DETAILS = {
    'seaside': {
        'bank': {
            'bank_name': 'Piraeus Bank',
            'iban': 'GR1601101250000000012300695',
            'account_holder': 'Seaside Rentals',
        },
    },
}

LOGGING['loggers']['apps']['level'] = 'WARNING'  # noqa: F405
