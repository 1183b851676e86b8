# medpulse/settings/dev.py
# export DJANGO_SETTINGS_MODULE=medpulse.settings.dev

from .base import *  # noqa: F401,F403

DEBUG = True

ALLOWED_HOSTS = ['127.0.0.1',
                 'localhost',
                 'testserver',
                 ".ngrok.io", ".ngrok-free.app",  # ngrok v2/v3
                 ]
CSRF_TRUSTED_ORIGINS = [
    'http://127.0.0.1:8000', 'http://localhost:8000',
    "https://*.ngrok.io", "https://*.ngrok-free.app",
]

# Dev: pas de redirection SSL forcée
SECURE_SSL_REDIRECT = False
CSRF_COOKIE_SECURE = False
SECURE_HSTS_SECONDS = 0

LOGGING['loggers'].update({
    'cms.visits': {
        'handlers': ['console'],
        'level': 'DEBUG',
        'propagate': False,
    },
})

# Dev: permettre la recherche disque pour les assets
WHITENOISE_AUTOREFRESH = True
WHITENOISE_USE_FINDERS = True
