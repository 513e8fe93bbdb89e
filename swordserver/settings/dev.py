"""
Development specific settings for the SWORD server.
"""

import os

from .common import *

try:
    from .secret import DATABASES
    from .secret import SECRET_KEY
    from .secret import SENTRY_DSN
except ImportError:
    raise RuntimeError(
        'A secret variable is missing, did you forget to add/update secret.py in your settings folder?')

DEBUG = True

# Set the log level with LOGLEVEL. If exists, this value is overwritten by the environment variable SWORDSERVER_LOGLEVEL
LOGLEVEL = 'DEBUG'
LOGGING['loggers']['swordserver']['level'] = os.environ.get('SWORDSERVER_LOGLEVEL', LOGLEVEL).upper()

enable_sentry(SENTRY_DSN, LOGGING)

# They are the domains under which your instance should
# be reachable. Leave as is if you run on localhost.
ALLOWED_HOSTS = ['localhost', '127.0.0.1']

# Relative path from the project to store the deposits
MEDIA_ROOT = os.path.join(BASE_DIR, 'swordserver_media')

# Failed deposits are kept during development
SWORD2_KEEP_PACKAGE_ON_FAIL = True
SWORD2_FAILED_PACKAGE_DIR = os.path.join(BASE_DIR, 'swordserver_failed')
