from django.apps import AppConfig


class AuthConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.auth'
    # 'auth' ya lo usa django.contrib.auth
    label = 'firebase_auth'
