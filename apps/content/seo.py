from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from django.utils.html import strip_tags

from apps.i18n.utils import namespaced_key, normalize_language
from apps.i18n.values import BilingualValue, resolve

from .overrides import ScalarOverride, log as overrides_log, scalar_override
from .specs import SeoDefaults

SITE_SEO_DEFAULTS = SeoDefaults(
    meta_title=BilingualValue(ar="MedPulse | نبض الطب", en="MedPulse | Nabd Al-Tibb"),
    meta_description=BilingualValue(
        ar="منصة علمية-إعلامية متخصصة في تقييم المؤتمرات الطبية",
        en="A scientific-media platform specialized in evaluating medical conferences",
    ),
    keywords=BilingualValue(
        ar="مؤتمرات طبية, تقييم, الإمارات",
        en="Medical Conferences, Evaluation, UAE",
    ),
)


@dataclass(frozen=True, slots=True)
class SeoMeta:
    title: str
    description: str
    keywords: str


def _pick(
    seo_doc: Optional[Mapping[str, Any]],
    key: str,
    language: str,
    page_default: BilingualValue,
    site_default: BilingualValue,
) -> str:
    override = scalar_override(seo_doc, namespaced_key(key, language))
    if isinstance(override, ScalarOverride):
        return override.value
    return resolve(page_default, language) or resolve(site_default, language)


def resolve_seo(
    language: Optional[str],
    page_defaults: Optional[SeoDefaults] = None,
    override_doc: Optional[Mapping[str, Any]] = None,
    *,
    dynamic_title: str = "",
    dynamic_description: str = "",
) -> SeoMeta:
    """Page meta tags.

    Title/description precedence: explicit dynamic value > CMS ``seo`` record
    > page default > site default.
    """
    lang = normalize_language(language)
    page_defaults = page_defaults or SeoDefaults()
    seo_doc = override_doc.get("seo") if isinstance(override_doc, Mapping) else None
    if seo_doc is not None and not isinstance(seo_doc, Mapping):
        overrides_log.warning("Override seo has type %s, expected a record; using defaults", type(seo_doc).__name__)
        seo_doc = None

    title = dynamic_title or _pick(
        seo_doc, "meta_title", lang, page_defaults.meta_title, SITE_SEO_DEFAULTS.meta_title
    )
    description = dynamic_description or _pick(
        seo_doc, "meta_description", lang, page_defaults.meta_description, SITE_SEO_DEFAULTS.meta_description
    )
    keywords = _pick(seo_doc, "keywords", lang, page_defaults.keywords, SITE_SEO_DEFAULTS.keywords)
    return SeoMeta(title=strip_tags(title).strip(), description=strip_tags(description).strip(), keywords=keywords)


__all__ = ["SITE_SEO_DEFAULTS", "SeoMeta", "resolve_seo"]
