"""Markup sanitizers for CMS-supplied HTML.

CMS markup is rendered as-is once it has gone through the configured sanitizer
(``settings.CONTENT_MARKUP_SANITIZER``). This module is the trust boundary:
nothing else in the pipeline inspects markup.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Callable

import bleach
from bleach.css_sanitizer import CSSSanitizer
from django.conf import settings
from django.utils.module_loading import import_string

log = logging.getLogger("content.richtext")

Sanitizer = Callable[[str], str]

DEFAULT_SANITIZER_PATH = "apps.content.sanitizers.bleach_sanitizer"

# Tags produced by the admin rich text editor (Quill).
ALLOWED_TAGS = frozenset(
    {
        "a", "b", "blockquote", "br", "code", "em", "h1", "h2", "h3", "h4", "h5", "h6",
        "hr", "i", "img", "li", "ol", "p", "pre", "s", "span", "strong", "sub", "sup",
        "u", "ul", "div", "table", "thead", "tbody", "tfoot", "tr", "th", "td",
    }
)
ALLOWED_ATTRIBUTES = {
    "*": ["class", "dir", "style"],
    "a": ["href", "title", "target", "rel"],
    "img": ["src", "alt", "width", "height"],
    "td": ["colspan", "rowspan"],
    "th": ["colspan", "rowspan"],
}
ALLOWED_PROTOCOLS = frozenset({"http", "https", "mailto", "tel"})
ALLOWED_CSS_PROPERTIES = frozenset({"color", "background-color", "text-align", "font-weight", "font-style", "text-decoration"})

_css_sanitizer = CSSSanitizer(allowed_css_properties=ALLOWED_CSS_PROPERTIES)


def bleach_sanitizer(markup: str) -> str:
    if not markup:
        return ""
    return bleach.clean(
        markup,
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        protocols=ALLOWED_PROTOCOLS,
        css_sanitizer=_css_sanitizer,
        strip=True,
        strip_comments=True,
    )


def passthrough(markup: str) -> str:
    """For deployments whose CMS already sanitises on write."""
    return markup or ""


@lru_cache(maxsize=8)
def _load(path: str) -> Sanitizer:
    return import_string(path)


def get_sanitizer() -> Sanitizer:
    path = getattr(settings, "CONTENT_MARKUP_SANITIZER", None) or DEFAULT_SANITIZER_PATH
    try:
        return _load(path)
    except ImportError:
        log.warning("Cannot import sanitizer %s; falling back to %s", path, DEFAULT_SANITIZER_PATH)
        return bleach_sanitizer


__all__ = ["Sanitizer", "bleach_sanitizer", "get_sanitizer", "passthrough"]
