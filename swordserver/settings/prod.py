"""
Production specific settings for the SWORD server.
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

# Double-check your production configuration, always before deployment.
# See https://docs.djangoproject.com/en/stable/howto/deployment/checklist/

DEBUG = False

LOGLEVEL = 'INFO'
LOGGING['loggers']['swordserver']['level'] = os.environ.get('SWORDSERVER_LOGLEVEL', LOGLEVEL).upper()

enable_sentry(SENTRY_DSN, LOGGING)

# They are the domains under which your instance should
# be reachable
ALLOWED_HOSTS = ['sword.example.org']

# Absolute path to where the static files are stored.
# This is what you should change!
STATIC_ROOT = '/home/sword/www/static/'
# Absolute path to the directory where we store deposited bitstreams
# This is what you should change!
MEDIA_ROOT = '/home/sword/media/'

# Absolute path where failed deposits are dumped for later inspection
SWORD2_KEEP_PACKAGE_ON_FAIL = True
SWORD2_FAILED_PACKAGE_DIR = '/home/sword/failed/'
