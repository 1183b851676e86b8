"""
URL configuration for the medpulse project.

Every public page lives in ``apps.pages``; the language is selected with
``?lang=ar|en`` (see ``apps.i18n.middleware``), never with a URL prefix.
"""
from django.urls import include, path

urlpatterns = [
    path("", include("apps.pages.urls")),
]
