from __future__ import annotations

import logging
import time
from typing import Any, Dict, Mapping, Optional, Tuple

from django.http import Http404

from apps.cms.visits import OverrideLoader, PageVisit, fetch_timeout
from apps.content.catalog import SpecificationError, load_specification
from apps.content.media import resolve_gallery, resolve_media
from apps.content.overrides import EMPTY_DOCUMENT, ResolvedPage, resolve_links, resolve_page
from apps.content.richtext import render_rich
from apps.content.seo import resolve_seo
from apps.content.specs import ContentSpecification
from apps.i18n.utils import normalize_language

log = logging.getLogger("pages.views")

# the home document also carries the site-wide footer (logo, social links)
SITE_PAGE = "home"


def settle_visits(visits: Mapping[str, PageVisit], timeout: float) -> Dict[str, Any]:
    """
    Wait for every visit under one shared deadline, then close them all.

    Whatever has not arrived by the deadline keeps its default; a result
    delivered after the close is discarded by the visit itself.
    """
    deadline = time.monotonic() + max(timeout, 0.0)
    values: Dict[str, Any] = {}
    try:
        for name, visit in visits.items():
            remaining = deadline - time.monotonic()
            if not visit.wait(max(remaining, 0.0)):
                log.info("CMS fetch %s still pending after %.2fs; rendering static defaults", visit.label, timeout)
            values[name] = visit.value
    finally:
        for visit in visits.values():
            visit.close()
    return values


class ContentPageMixin:
    """
    Resolve one page's content for the request language.

    - loads the static specification (``configs/content/<page_key>.yml``)
    - fetches the CMS override document for that page in the background
    - exposes ``content`` (every declared key resolved), ``media`` (absolute
      URLs) and ``seo`` to the template
    """

    page_key: str = ""
    gallery_keys: Tuple[str, ...] = ()
    loader: Optional[OverrideLoader] = None

    def get_loader(self) -> OverrideLoader:
        return self.loader or OverrideLoader()

    def get_language(self) -> str:
        return normalize_language(getattr(self.request, "LANGUAGE_CODE", None))

    def get_specification(self, page: Optional[str] = None) -> ContentSpecification:
        page = page or self.page_key
        try:
            return load_specification(page)
        except SpecificationError as exc:
            log.error("Cannot render page %s: %s", page, exc)
            raise Http404(f"Unknown page {page}") from exc

    def start_visits(self, spec: ContentSpecification, loader: OverrideLoader) -> Dict[str, PageVisit]:
        visits = {"overrides": loader.start(spec.page, spec.db_title)}
        if spec.page != SITE_PAGE:
            site = self.get_specification(SITE_PAGE)
            visits["site"] = loader.start(site.page, site.db_title)
        return visits

    def resolve_media_nodes(self, spec: ContentSpecification, content: ResolvedPage) -> Dict[str, Any]:
        media: Dict[str, Any] = {}
        for key, fallback in spec.media.items():
            if key in self.gallery_keys:
                media[key] = resolve_gallery(content[key])
            else:
                media[key] = resolve_media(content[key], fallback)
        return media

    def get_footer(self, site_doc: Mapping[str, Any]) -> Dict[str, Any]:
        site = self.get_specification(SITE_PAGE)
        return {
            "logo_ref": site_doc.get("logo"),
            "logo_fallback": site.media.get("logo", ""),
            "social_links": resolve_links("social_links", site.links.get("social_links"), site_doc),
        }

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        spec = self.get_specification()
        lang = self.get_language()

        fetched = settle_visits(self.start_visits(spec, self.get_loader()), fetch_timeout())
        override_doc = fetched.get("overrides") or EMPTY_DOCUMENT

        site_doc = override_doc if spec.page == SITE_PAGE else (fetched.get("site") or EMPTY_DOCUMENT)

        content = resolve_page(spec, lang, override_doc)
        context.update(
            page_key=spec.page,
            content=content,
            rich={key: render_rich(content[key]) for key in content.rich_keys},
            footer=self.get_footer(site_doc),
            media=self.resolve_media_nodes(spec, content),
            seo=resolve_seo(lang, spec.seo, override_doc),
            fetched=fetched,
        )
        return context
