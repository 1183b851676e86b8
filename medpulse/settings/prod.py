# medpulse/settings/prod.py
from .base import *  # noqa: F401,F403

DEBUG = False

# Domaine(s) à fournir via env
SITE_DOMAIN = os.getenv('SITE_DOMAIN')  # ex: "medpulseuae.com"
SITE_ALIASES = os.getenv("SITE_ALIASES", "")  # ex: "www.medpulseuae.com,foo.example.com"
if not SITE_DOMAIN:
    raise RuntimeError("SITE_DOMAIN is not set in production.")

ALIASES = [h.strip() for h in SITE_ALIASES.split(",") if h.strip()]
ALLOWED_HOSTS = [SITE_DOMAIN, "127.0.0.1"] + ALIASES
CSRF_TRUSTED_ORIGINS = [f"https://{SITE_DOMAIN}"] + [f"https://{h}" for h in ALIASES]

STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {
        "BACKEND": "whitenoise.storage.CompressedManifestStaticFilesStorage"
    },
}

if not CMS_API_BASE:
    raise RuntimeError("CMS_API_BASE is not set in production.")

# Log niveau INFO/ERROR
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
LOGGING['root']['level'] = LOG_LEVEL
LOGGING['loggers']['django.request']['level'] = 'ERROR'
