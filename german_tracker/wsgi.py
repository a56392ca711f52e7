"""
WSGI entry point for deployment
"""
import os

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "german_tracker.settings")

from django.core.wsgi import get_wsgi_application

application = get_wsgi_application()
