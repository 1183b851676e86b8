# apps/pages/views/pages.py
from __future__ import annotations

from typing import Dict

from django.views.generic import TemplateView

from apps.cms.visits import OverrideLoader, PageVisit
from apps.content.media import resolve_hero, resolve_media
from apps.content.overrides import EMPTY_DOCUMENT
from apps.content.specs import ContentSpecification

from ..mixins import ContentPageMixin


class HomeView(ContentPageMixin, TemplateView):
    """
    Page d'accueil.

    En plus de ses propres overrides, la page lit le hero (images ou vidéo)
    depuis les front settings et la photo du fondateur depuis la page founder;
    les trois appels CMS partent en parallèle.
    """

    page_key = "home"
    template_name = "pages/home.html"

    def start_visits(self, spec: ContentSpecification, loader: OverrideLoader) -> Dict[str, PageVisit]:
        founder = self.get_specification("founder")
        visits = super().start_visits(spec, loader)
        visits["founder"] = loader.start(founder.page, founder.db_title)
        visits["front_settings"] = loader.start_front_settings()
        return visits

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        fetched = context["fetched"]
        founder = self.get_specification("founder")
        founder_doc = fetched.get("founder") or EMPTY_DOCUMENT

        context["hero"] = resolve_hero(
            fetched.get("front_settings"),
            default_images=(context["media"]["hero_image"],),
            origin=f"{self.request.scheme}://{self.request.get_host()}",
        )
        context["founder_image"] = resolve_media(
            founder_doc.get("main_image"), founder.media.get("main_image", "")
        )
        return context


class AboutView(ContentPageMixin, TemplateView):
    page_key = "about"
    template_name = "pages/about.html"


class FounderView(ContentPageMixin, TemplateView):
    page_key = "founder"
    template_name = "pages/founder.html"
    gallery_keys = ("gallery",)


class ContactView(ContentPageMixin, TemplateView):
    page_key = "contact"
    template_name = "pages/contact.html"


class ConferencesView(ContentPageMixin, TemplateView):
    page_key = "conferences"
    template_name = "pages/conferences.html"


class ArticlesView(ContentPageMixin, TemplateView):
    page_key = "articles"
    template_name = "pages/articles.html"
