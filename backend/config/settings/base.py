import os
from pathlib import Path

import environ

BASE_DIR = Path(__file__).resolve().parents[2]

env = environ.Env(
    DEBUG=(bool, False),
    ALLOWED_HOSTS=(list, ['localhost', '127.0.0.1']),
    CORS_ALLOW_ALL_ORIGINS=(bool, False),
    DETECTOR_DNS_TIMEOUT=(float, 2.0),
    DETECTOR_WHOIS_TIMEOUT=(float, 10.0),
    DETECTOR_FETCH_TIMEOUT=(float, 8.0),
    DETECTOR_FETCH_MAX_REDIRECTS=(int, 3),
    DETECTOR_FETCH_MAX_CHARS=(int, 200_000),
    DETECTOR_OCR_TIMEOUT=(float, 30.0),
    DETECTOR_OCR_LANGUAGE=(str, 'eng'),
    DETECTOR_EXTRACT_TIMEOUT=(float, 20.0),
    DETECTOR_MAX_EMAIL_LINKS=(int, 3),
)

environ.Env.read_env(os.path.join(BASE_DIR, '.env'))

SECRET_KEY = env('DJANGO_SECRET_KEY', default='django-insecure-change-me')
DEBUG = env('DEBUG')
ALLOWED_HOSTS = env.list('ALLOWED_HOSTS')
APP_VERSION = env('APP_VERSION', default='0.1.0')

INSTALLED_APPS = [
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'corsheaders',
    'rest_framework',
    'detector',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'corsheaders.middleware.CorsMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'config.urls'

WSGI_APPLICATION = 'config.wsgi.application'
ASGI_APPLICATION = 'config.asgi.application'

# Assessments are never persisted; the database is only here for Django's
# own bookkeeping apps.
DATABASES = {
    'default': env.db_url(
        'DATABASE_URL',
        default='sqlite:///db.sqlite3',
    ),
}

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

REST_FRAMEWORK = {
    'DEFAULT_RENDERER_CLASSES': [
        'rest_framework.renderers.JSONRenderer',
    ],
    'DEFAULT_PARSER_CLASSES': [
        'rest_framework.parsers.JSONParser',
    ],
    'DEFAULT_AUTHENTICATION_CLASSES': [],
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.AllowAny',
    ],
    'UNAUTHENTICATED_USER': None,
}

CORS_ALLOW_ALL_ORIGINS = env('CORS_ALLOW_ALL_ORIGINS')
CORS_ALLOWED_ORIGINS = env.list('CORS_ALLOWED_ORIGINS', default=[])
CSRF_TRUSTED_ORIGINS = env.list('CSRF_TRUSTED_ORIGINS', default=[])

DATA_UPLOAD_MAX_MEMORY_SIZE = env.int('DATA_UPLOAD_MAX_MEMORY_SIZE', default=2 * 1024 * 1024)
FILE_UPLOAD_MAX_MEMORY_SIZE = env.int('FILE_UPLOAD_MAX_MEMORY_SIZE', default=2 * 1024 * 1024)

SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')
USE_X_FORWARDED_HOST = True
SECURE_CONTENT_TYPE_NOSNIFF = True
SECURE_REFERRER_POLICY = 'strict-origin-when-cross-origin'
X_FRAME_OPTIONS = 'DENY'

# Uploaded artifacts are copied here for the duration of one assessment and
# removed afterwards.
DETECTOR_UPLOAD_DIR = env('DETECTOR_UPLOAD_DIR', default=str(BASE_DIR / 'uploads'))

DETECTOR_DNS_TIMEOUT = env('DETECTOR_DNS_TIMEOUT')
DETECTOR_WHOIS_TIMEOUT = env('DETECTOR_WHOIS_TIMEOUT')
DETECTOR_FETCH_TIMEOUT = env('DETECTOR_FETCH_TIMEOUT')
DETECTOR_FETCH_MAX_REDIRECTS = env('DETECTOR_FETCH_MAX_REDIRECTS')
DETECTOR_FETCH_MAX_CHARS = env('DETECTOR_FETCH_MAX_CHARS')
DETECTOR_OCR_TIMEOUT = env('DETECTOR_OCR_TIMEOUT')
DETECTOR_OCR_LANGUAGE = env('DETECTOR_OCR_LANGUAGE')
DETECTOR_EXTRACT_TIMEOUT = env('DETECTOR_EXTRACT_TIMEOUT')
DETECTOR_MAX_EMAIL_LINKS = env('DETECTOR_MAX_EMAIL_LINKS')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': env('LOG_LEVEL', default='INFO'),
    },
}
