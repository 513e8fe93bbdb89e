"""
WSGI config for the SWORD server project.

It exposes the WSGI callable as a module-level variable named ``application``.

For more information on this file, see
https://docs.djangoproject.com/en/stable/howto/deployment/wsgi/
"""

import os

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "swordserver.settings.prod")
from django.core.wsgi import get_wsgi_application
application = get_wsgi_application()
