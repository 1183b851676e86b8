from __future__ import annotations

from typing import Any, Optional

from django import template
from django.utils.http import urlencode

from apps.i18n.values import BilingualValue, resolve
from apps.content.media import resolve_media
from apps.content.richtext import render_rich

register = template.Library()


@register.filter(name="rich")
def rich(value: Any) -> str:
    """
    Render a resolved content string: markup goes through the sanitizer,
    plain text becomes paragraphs / bullet lists.
    Usage : {{ content.mission_text|rich }}
    """
    if not isinstance(value, str):
        return ""
    return render_rich(value)


@register.simple_tag
def media_url(ref: Any, fallback: str = "", domain: Optional[str] = None) -> str:
    return resolve_media(ref, fallback, domain)


@register.simple_tag(takes_context=True)
def bilingual(context, ar: str = "", en: str = "") -> str:
    """Inline bilingual literal: {% bilingual ar='تواصل' en='Contact' %}"""
    return resolve(BilingualValue(ar=ar, en=en), context.get("lang_code"))


@register.simple_tag(takes_context=True)
def switch_language_url(context, lang: str) -> str:
    request = context.get("request")
    if request is None:
        return f"?{urlencode({'lang': lang})}"
    params = request.GET.copy()
    params["lang"] = lang
    return f"{request.path}?{params.urlencode()}"
