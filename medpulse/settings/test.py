# medpulse/settings/test.py
from .dev import *  # noqa: F401,F403

DEBUG = False

# Aucun appel réseau pendant les tests: les vues rendent les valeurs statiques.
CMS_ENABLED = False
CMS_API_BASE = "https://cms.test/api"
CMS_FETCH_TIMEOUT = 0.5

CONTENT_MEDIA_DOMAIN = "https://media.test"
CONTENT_MEDIA_PLACEHOLDER = "https://media.test/placeholder.png"

WHITENOISE_AUTOREFRESH = True
WHITENOISE_USE_FINDERS = False

LOGGING['loggers']['cms.visits']['level'] = 'INFO'
