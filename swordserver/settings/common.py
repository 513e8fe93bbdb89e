# -*- encoding: utf-8 -*-

# SWORD server: deposit negotiation and ingest engine
# Copyright (C) 2014 Antonin Delpeuch
#
# This program is free software; you can redistribute it and/or
# modify it under the terms of the GNU General Public License
# as published by the Free Software Foundation; either version 2
# of the License, or (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program; if not, write to the Free Software
# Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA  02110-1301, USA.
#


"""
Django settings for the SWORD server project.

These are the settings shared by every deployment. Secrets (database,
secret key, Sentry DSN) are imported by ``dev.py`` and ``prod.py`` from a
``secret.py`` file next to this one, see ``secret_template.py``.

For the full list of Django settings and their values, see
https://docs.djangoproject.com/en/stable/ref/settings/
"""

import os

# dirname(__file__) → repo/swordserver/settings
# .. → repo/swordserver
# .. → repo/

BASE_DIR = os.path.abspath(os.path.join(
    os.path.dirname(__file__), '..', '..'))


### SWORD deposits ###
# Name of the bundle in which the original deposits are kept.
# An empty value falls back to 'SWORD'.
SWORD2_BUNDLE_NAME = 'SWORD'
# Keep a copy of what the client sent, next to the ingested content
SWORD2_KEEP_ORIGINAL = True
# On ingest failure, write the package and its headers to
# SWORD2_FAILED_PACKAGE_DIR so that it can be inspected later on
SWORD2_KEEP_PACKAGE_ON_FAIL = False
SWORD2_FAILED_PACKAGE_DIR = None
# Content types accepted in deposits. Wildcards such as */* or
# application/* are allowed.
SWORD2_ACCEPTS = [
    'application/zip',
    'application/xml',
    'application/pdf',
    'application/atom+xml;type=entry',
]
# Accept any content type known to the bitstream format registry
# when depositing on an item
SWORD2_ACCEPT_REGISTERED_FORMATS = True
# Packaging formats accepted in deposits
SWORD2_ACCEPT_PACKAGING = [
    'http://purl.org/net/sword/package/SimpleZip',
    'http://purl.org/net/sword/package/Binary',
]
# Include the verbose description of the deposit in the receipt
SWORD2_VERBOSE_DESCRIPTION_RECEIPT = True


### Application definition ###
# You should not have to change anything in this section.

INSTALLED_APPS = (
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'sword2',
)

MIDDLEWARE = [
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

TEMPLATES = [
        {
            'BACKEND': 'django.template.backends.django.DjangoTemplates',
            'APP_DIRS' : True,
            'OPTIONS': {
                'context_processors': (
                    "django.contrib.auth.context_processors.auth",
                    'django.contrib.messages.context_processors.messages',
                    "django.template.context_processors.request",
                ),
            }
        }
]

ROOT_URLCONF = 'swordserver.urls'

WSGI_APPLICATION = 'swordserver.wsgi.application'

DEFAULT_AUTO_FIELD = 'django.db.models.AutoField'


### Static and media files ###
# Relative URL where static files are accessed (you don't have to change this).
STATIC_URL = '/static/'
# Relative URL where deposited files are accessed (you don't have to change this).
MEDIA_URL = '/media/'

# Internationalization
LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'Europe/Paris'
USE_I18N = True
USE_TZ = True

# Sentry is optional, the DSN is set in secret.py
SENTRY_DSN = None

# Logging is very important thing. Here we define some standards. We use Django logging system, so there it is easy to customize your logging preferences.
# To switch 'console' to level 'DEBUG' please use prod.py resp. dev.py
# To get a logger use logger = logging.getLogger('swordserver.' + __name__) to make sure that it is caught by the swordserver logger.

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'console': {
            'format': '%(asctime)s %(levelname)s %(name)s:%(lineno)s  %(message)s',
            'datefmt': '%Y-%m-%d %H:%M:%S',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'console',
        },
    },
    'loggers': {
    # root logger, includes also third party packages. To omit them, put in 'django' to get just django related logging
        '': {
            'level': 'WARNING',
            'handlers': ['console'],
        },
    # swordserver logger
        'swordserver' : {
            'level': None, # Change this value in prod.py resp dev.py
            'handlers': ['console'],
            'propagate': False,
        },
    },
}


def enable_sentry(dsn, logging_config):
    """
    Initializes Sentry and sends all important logs to it.
    Called from dev.py resp. prod.py once the DSN is known.
    """
    if not dsn:
        return
    try:
        import sentry_sdk
    except ImportError:
        print('Sentry module is not available although a Sentry DSN was set. '
              'Disabling Sentry reporting...')
        return
    sentry_sdk.init(dsn=dsn)

    logging_config['handlers'].update({
        'sentry': {
            'level': 'ERROR',
            'class': 'sentry_sdk.integrations.logging.EventHandler',
            }
        })

    logging_config['loggers']['']['handlers'] += ['sentry']
    logging_config['loggers']['swordserver']['handlers'] += ['sentry']
