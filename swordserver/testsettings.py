import os
import tempfile

from swordserver.settings.common import *

SECRET_KEY = 'swordserver-tests-only'

DEBUG = False

ALLOWED_HOSTS = ['testserver', 'localhost']

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

# Tests override this per test with a temporary directory
MEDIA_ROOT = os.path.join(tempfile.gettempdir(), 'swordserver_media')

# We delete the logger 'swordserver', so that it goes to root logger and gets catched by pytest caplog fixture
try:
    del LOGGING['loggers']['swordserver']
except KeyError:
    pass
