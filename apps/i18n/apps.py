from django.apps import AppConfig


class I18nConfig(AppConfig):
    name = "apps.i18n"
    label = "medpulse_i18n"
    verbose_name = "Bilingual content"
