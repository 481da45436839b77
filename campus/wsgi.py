"""
WSGI config for Campus project.

Expone el callable WSGI como una variable a nivel de módulo llamada ``application``.
Se usa para deployment en servidores de producción (gunicorn en Render).
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'campus.settings')

application = get_wsgi_application()
