"""
Django settings for Campus project.

Este archivo contiene toda la configuración del proyecto Django:
apps instaladas, middleware, base de datos, correo y las credenciales
de los dos proyectos de Firebase (AP-LABS y Crowdfunding).
"""

from pathlib import Path
from decouple import config
import dj_database_url

# Build paths inside the project
BASE_DIR = Path(__file__).resolve().parent.parent

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = config('SECRET_KEY', default='django-insecure-change-this-in-production')

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = config('DEBUG', default=True, cast=bool)

ALLOWED_HOSTS = [
    'localhost',
    '127.0.0.1',
    'testserver',
    '.onrender.com',  # Para Render
]

# Agregar hosts adicionales desde variable de entorno
additional_hosts = config('ALLOWED_HOSTS', default='')
if additional_hosts:
    ALLOWED_HOSTS.extend(additional_hosts.split(','))

# Application definition
INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',

    # Third party apps
    'rest_framework',
    'corsheaders',

    # AP-LABS apps
    'apps.auth',
    'apps.bitacora',
    'apps.usuarios',
    'apps.departamentos',
    'apps.laboratorios',
    'apps.inventario',
    'apps.mantenimientos',
    'apps.solicitudes',
    'apps.calendario',
    'apps.notificaciones',
    'apps.mensajes',
    'apps.parametros',
    'apps.reportes',
    'apps.dashboard',

    # Crowdfunding apps
    'apps.cuentas',
    'apps.proyectos',
    'apps.donaciones',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'whitenoise.middleware.WhiteNoiseMiddleware',
    'corsheaders.middleware.CorsMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
    'apps.auth.middleware.FirebaseAuthMiddleware',
]

ROOT_URLCONF = 'campus.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'campus.wsgi.application'

# Database
# Los datos de negocio viven en Firestore; esta base solo respalda
# las apps de Django (admin, sesiones).
DATABASE_URL = config('DATABASE_URL', default=None)

if DATABASE_URL:
    DATABASES = {
        'default': dj_database_url.parse(DATABASE_URL)
    }
else:
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': BASE_DIR / 'db.sqlite3',
        }
    }

# Internationalization
LANGUAGE_CODE = 'es-cr'
TIME_ZONE = config('TIME_ZONE', default='America/Costa_Rica')
USE_I18N = True
USE_TZ = True

# Static files (CSS, JavaScript, Images)
STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'
STORAGES = {
    'default': {
        'BACKEND': 'django.core.files.storage.FileSystemStorage',
    },
    'staticfiles': {
        'BACKEND': 'whitenoise.storage.CompressedManifestStaticFilesStorage',
    },
}

# Default primary key field type
DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# REST Framework Configuration
REST_FRAMEWORK = {
    'DEFAULT_AUTHENTICATION_CLASSES': [],
    'DEFAULT_PERMISSION_CLASSES': [
        'apps.auth.permissions.IsAuthenticated',
    ],
    'UNAUTHENTICATED_USER': None,
    'DEFAULT_RENDERER_CLASSES': [
        'rest_framework.renderers.JSONRenderer',
    ],
    'DEFAULT_PARSER_CLASSES': [
        'rest_framework.parsers.JSONParser',
    ],
}

# CORS Configuration
CORS_ALLOWED_ORIGINS = config(
    'CORS_ALLOWED_ORIGINS',
    default='http://localhost:5173,http://localhost:3000'
).split(',')

CORS_ALLOW_CREDENTIALS = True

# Firebase Configuration (AP-LABS, app por defecto)
FIREBASE_CREDENTIALS_PATH = config('FIREBASE_CREDENTIALS_PATH', default=None)
FIREBASE_CONFIG = {
    'project_id': config('FIREBASE_PROJECT_ID', default=''),
    'private_key_id': config('FIREBASE_PRIVATE_KEY_ID', default=''),
    'private_key': config('FIREBASE_PRIVATE_KEY', default='').replace('\\n', '\n'),
    'client_email': config('FIREBASE_CLIENT_EMAIL', default=''),
    'client_id': config('FIREBASE_CLIENT_ID', default=''),
}

# Firebase Configuration (Crowdfunding, app con nombre propio)
CROWDFUNDING_FIREBASE_CREDENTIALS_PATH = config('CROWDFUNDING_FIREBASE_CREDENTIALS_PATH', default=None)
CROWDFUNDING_FIREBASE_CONFIG = {
    'project_id': config('CROWDFUNDING_FIREBASE_PROJECT_ID', default=''),
    'private_key_id': config('CROWDFUNDING_FIREBASE_PRIVATE_KEY_ID', default=''),
    'private_key': config('CROWDFUNDING_FIREBASE_PRIVATE_KEY', default='').replace('\\n', '\n'),
    'client_email': config('CROWDFUNDING_FIREBASE_CLIENT_EMAIL', default=''),
    'client_id': config('CROWDFUNDING_FIREBASE_CLIENT_ID', default=''),
}

# Dominios de correo permitidos en el registro de cada sistema
DOMINIOS_APLABS = config('DOMINIOS_APLABS', default='@itcr.ac.cr,@estudiantec.cr').split(',')
DOMINIOS_CROWDFUNDING = config('DOMINIOS_CROWDFUNDING', default='@estudiantec.cr,@itcr.cr').split(',')

# Email Configuration
EMAIL_BACKEND = config('EMAIL_BACKEND', default='django.core.mail.backends.console.EmailBackend')
EMAIL_HOST = config('EMAIL_HOST', default='localhost')
EMAIL_PORT = config('EMAIL_PORT', default=587, cast=int)
EMAIL_HOST_USER = config('EMAIL_HOST_USER', default='')
EMAIL_HOST_PASSWORD = config('EMAIL_HOST_PASSWORD', default='')
EMAIL_USE_TLS = config('EMAIL_USE_TLS', default=True, cast=bool)
DEFAULT_FROM_EMAIL = config('DEFAULT_FROM_EMAIL', default='no-responder@campus.local')

# Notificaciones automáticas de devolución de recursos
NOTIFICACIONES_AUTOMATICAS = config('NOTIFICACIONES_AUTOMATICAS', default=False, cast=bool)
INTERVALO_VERIFICACION_HORAS = config('INTERVALO_VERIFICACION_HORAS', default=24, cast=int)

# Logging Configuration
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {module} {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'INFO',
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': 'INFO',
            'propagate': False,
        },
        'apps': {
            'handlers': ['console'],
            'level': 'DEBUG',
            'propagate': False,
        },
        'services': {
            'handlers': ['console'],
            'level': 'DEBUG',
            'propagate': False,
        },
    },
}
