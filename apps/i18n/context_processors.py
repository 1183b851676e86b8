from __future__ import annotations

from django.conf import settings

from .utils import SUPPORTED_LANGUAGES, direction, normalize_language

DEFAULT_LANG = getattr(settings, "CONTENT_DEFAULT_LANGUAGE", "ar")

_DEFAULT_FONTS = {
    "ar": {"headings": "'Cairo', sans-serif", "body": "'Tajawal', sans-serif"},
    "en": {"headings": "'Poppins', sans-serif", "body": "'Inter', sans-serif"},
}


def _fonts_for(lang: str) -> dict:
    fonts = getattr(settings, "CONTENT_FONTS", None) or _DEFAULT_FONTS
    selected = fonts.get(lang) or _DEFAULT_FONTS.get(lang) or {}
    return {
        "headings": selected.get("headings", ""),
        "body": selected.get("body", ""),
    }


def language_direction(request):
    lang = normalize_language(getattr(request, "LANGUAGE_CODE", None) or DEFAULT_LANG)
    lang_dir = direction(lang)
    return {
        "lang_code": lang,
        "lang_dir": lang_dir,
        "is_rtl": lang_dir == "rtl",
        "lang_alternates": [code for code in SUPPORTED_LANGUAGES if code != lang],
        "lang_fonts": _fonts_for(lang),
    }


__all__ = ["language_direction"]
