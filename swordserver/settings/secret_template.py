# coding: utf-8

### Security key ###
# This is used by django to generate various things (mainly for
# authentication). Just pick a fairly random string and keep it
# secret.
SECRET_KEY = '40@!t4mmh7325-^wh+jo3teu^!yj3lfz5p%ok(8+7th8pg^hy1'

# Database
# https://docs.djangoproject.com/en/stable/ref/settings/#databases
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.postgresql',
        'NAME': 'swordserver',
        'USER': 'swordserver',
        'PASSWORD': 'swordserver',
        'HOST': 'localhost',
    }
}

### Sentry ###
# Set a DSN to report errors to Sentry, leave None to disable it.
SENTRY_DSN = None
