# medpulse/settings/base.py
from __future__ import annotations
import os
from pathlib import Path

# Optionnel en dev, inerte si .env absent
try:
    from dotenv import load_dotenv, find_dotenv  # type: ignore

    _dotenv_path = find_dotenv(filename=os.getenv("DOTENV_FILE", ".env"), usecwd=True)
    if _dotenv_path:
        load_dotenv(_dotenv_path, override=False)
except ImportError:
    pass

BASE_DIR = Path(__file__).resolve().parents[2]  # .../medpulse

_TRUE_VALUES = {"1", "true", "yes", "y", "on"}


def env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return bool(default)
    return str(value).strip().lower() in _TRUE_VALUES


def _float_env(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except (TypeError, ValueError):
        return float(default)


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except (TypeError, ValueError):
        return int(default)


# --------------------------------------------------------------------------------------
# Clés & debug
# --------------------------------------------------------------------------------------
SECRET_KEY = os.getenv('SECRET_KEY', 'CHANGE_ME_DEV_ONLY')
DEBUG = False  # Par défaut: sécurisé. Dev.py le passera à True.

ALLOWED_HOSTS: list[str] = ["medpulseuae.com", "www.medpulseuae.com"]
CSRF_TRUSTED_ORIGINS = ["https://medpulseuae.com"]

# --------------------------------------------------------------------------------------
# Apps
# --------------------------------------------------------------------------------------
DJANGO_APPS = [
    'django.contrib.staticfiles',
]

LOCAL_APPS = [
    "apps.i18n.apps.I18nConfig",
    "apps.content.apps.ContentConfig",
    "apps.cms.apps.CmsConfig",
    "apps.pages.apps.PagesConfig",
]

INSTALLED_APPS = DJANGO_APPS + LOCAL_APPS

# --------------------------------------------------------------------------------------
# Middleware
# WhiteNoise doit être juste après SecurityMiddleware
# --------------------------------------------------------------------------------------
MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'whitenoise.middleware.WhiteNoiseMiddleware',
    'django.middleware.common.CommonMiddleware',
    "apps.i18n.middleware.LanguageMiddleware",
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'medpulse.urls'

# --------------------------------------------------------------------------------------
# Templates
# --------------------------------------------------------------------------------------
TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [BASE_DIR / 'templates'],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.template.context_processors.i18n',
                "apps.i18n.context_processors.language_direction",
            ],
        },
    },
]

WSGI_APPLICATION = 'medpulse.wsgi.application'

# --------------------------------------------------------------------------------------
# I18N / TZ
# --------------------------------------------------------------------------------------
LANGUAGE_CODE = 'ar'
TIME_ZONE = 'Asia/Dubai'
USE_I18N = True
USE_TZ = True

LANGUAGES = [
    ('ar', 'العربية'),
    ('en', 'English'),
]

# --------------------------------------------------------------------------------------
# Static
# --------------------------------------------------------------------------------------
STATIC_URL = '/static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'
STATICFILES_DIRS = [BASE_DIR / 'static']

STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage"},
}

# --------------------------------------------------------------------------------------
# Sécurité (par défaut sûrs; dev.py relâche)
# --------------------------------------------------------------------------------------
CSRF_COOKIE_SECURE = True
SECURE_SSL_REDIRECT = True
SECURE_HSTS_SECONDS = 31536000
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
SECURE_REFERRER_POLICY = "strict-origin-when-cross-origin"
SECURE_CROSS_ORIGIN_OPENER_POLICY = "same-origin"

X_FRAME_OPTIONS = "DENY"

# Reverse proxy (si derrière un LB terminant TLS)
if os.getenv('USE_X_FORWARDED_PROTO', '1') in ('1', 'true', 'True'):
    SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')

# --------------------------------------------------------------------------------------
# Contenu bilingue (spécifications statiques + médias)
# --------------------------------------------------------------------------------------
CONTENT_SPEC_DIR = BASE_DIR / "configs" / "content"
CONTENT_DEFAULT_LANGUAGE = "ar"
CONTENT_LANGUAGE_COOKIE = "medpulse_language"
CONTENT_LANGUAGE_COOKIE_MAX_AGE = 60 * 60 * 24 * 365

CONTENT_MEDIA_DOMAIN = os.getenv("CONTENT_MEDIA_DOMAIN", "https://medpulse-production.up.railway.app")
CONTENT_MEDIA_PLACEHOLDER = os.getenv(
    "CONTENT_MEDIA_PLACEHOLDER", "https://picsum.photos/seed/medpulse/400/300"
)
CONTENT_MARKUP_SANITIZER = "apps.content.sanitizers.bleach_sanitizer"

CONTENT_FONTS = {
    "ar": {"headings": "'Cairo', sans-serif", "body": "'Tajawal', sans-serif"},
    "en": {"headings": "'Poppins', sans-serif", "body": "'Inter', sans-serif"},
}

# --------------------------------------------------------------------------------------
# CMS (backend de contenu, lecture seule)
# --------------------------------------------------------------------------------------
CMS_API_BASE = os.getenv("CMS_API_BASE", f"{CONTENT_MEDIA_DOMAIN}/api")
CMS_ENABLED = env_flag("CMS_ENABLED", default=True)
CMS_FETCH_TIMEOUT = _float_env("CMS_FETCH_TIMEOUT", 4.0)
CMS_MAX_WORKERS = max(1, _int_env("CMS_MAX_WORKERS", 4))

# --------------------------------------------------------------------------------------
# Logging (propre, exploitable)
# --------------------------------------------------------------------------------------
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {'format': '[{levelname}] {name}: {message}', 'style': '{'},
        'verbose': {'format': '{asctime} [{levelname}] {name} {module}:{lineno} - {message}', 'style': '{'},
    },
    'handlers': {
        'console': {'class': 'logging.StreamHandler', 'formatter': 'verbose'},
    },
    'root': {'handlers': ['console'], 'level': LOG_LEVEL},
    'loggers': {
        'django.request': {'handlers': ['console'], 'level': 'WARNING', 'propagate': True},
    },
}
LOGGING["loggers"].update({
    "content.overrides": {"handlers": ["console"], "level": "INFO", "propagate": False},
    "content.media": {"handlers": ["console"], "level": "INFO", "propagate": False},
    "content.richtext": {"handlers": ["console"], "level": "INFO", "propagate": False},
    "content.catalog": {"handlers": ["console"], "level": "INFO", "propagate": False},
})
LOGGING["loggers"].update({
    "cms.client": {"handlers": ["console"], "level": "INFO", "propagate": False},
    "cms.visits": {"handlers": ["console"], "level": "INFO", "propagate": False},
    "pages.views": {"handlers": ["console"], "level": "INFO", "propagate": False},
})
