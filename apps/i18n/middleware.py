from __future__ import annotations

from django.conf import settings
from django.utils import translation

from .utils import first_supported, is_supported


def _cookie_name() -> str:
    return getattr(settings, "CONTENT_LANGUAGE_COOKIE", "medpulse_language")


def resolve_language(request) -> str:
    """
    Active language for a request.

    Precedence: ``?lang=`` > persisted cookie > ``CONTENT_DEFAULT_LANGUAGE``.
    """
    params = getattr(request, "GET", None) or {}
    cookies = getattr(request, "COOKIES", None) or {}
    default = getattr(settings, "CONTENT_DEFAULT_LANGUAGE", "ar")
    return first_supported((params.get("lang"), cookies.get(_cookie_name())), default=default)


class LanguageMiddleware:
    """
    Pick the page language and persist an explicit ``?lang=`` choice in a cookie.

    The cookie is owned by the browser; we only read it back on later visits.
    """

    cookie_max_age = getattr(settings, "CONTENT_LANGUAGE_COOKIE_MAX_AGE", 60 * 60 * 24 * 365)

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        lang = resolve_language(request)
        request.LANGUAGE_CODE = lang
        translation.activate(lang)

        response = self.get_response(request)

        requested = (request.GET.get("lang") or "").strip()
        if requested and is_supported(requested):
            response.set_cookie(
                _cookie_name(),
                lang,
                max_age=self.cookie_max_age,
                httponly=False,
                secure=getattr(settings, "SESSION_COOKIE_SECURE", False),
                samesite="Lax",
            )
        return response


__all__ = ["LanguageMiddleware", "resolve_language"]
