from __future__ import annotations

from django.http import HttpResponse
from django.test import RequestFactory, SimpleTestCase, override_settings

from apps.i18n.context_processors import language_direction
from apps.i18n.middleware import LanguageMiddleware, resolve_language


class ResolveLanguageTests(SimpleTestCase):
    factory = RequestFactory()

    def test_query_param_has_priority_over_cookie(self) -> None:
        request = self.factory.get("/?lang=en")
        request.COOKIES["medpulse_language"] = "ar"

        self.assertEqual(resolve_language(request), "en")

    def test_cookie_used_without_query_param(self) -> None:
        request = self.factory.get("/")
        request.COOKIES["medpulse_language"] = "en"

        self.assertEqual(resolve_language(request), "en")

    def test_unknown_values_fall_back_to_default(self) -> None:
        request = self.factory.get("/?lang=fr")
        request.COOKIES["medpulse_language"] = "de"

        self.assertEqual(resolve_language(request), "ar")


class LanguageMiddlewareTests(SimpleTestCase):
    factory = RequestFactory()

    def _middleware(self):
        return LanguageMiddleware(lambda request: HttpResponse(request.LANGUAGE_CODE))

    def test_sets_language_on_request(self) -> None:
        response = self._middleware()(self.factory.get("/about/?lang=en"))

        self.assertEqual(response.content, b"en")

    def test_explicit_choice_is_persisted_in_cookie(self) -> None:
        response = self._middleware()(self.factory.get("/?lang=en"))

        self.assertIn("medpulse_language", response.cookies)
        self.assertEqual(response.cookies["medpulse_language"].value, "en")

    def test_no_cookie_written_without_explicit_choice(self) -> None:
        response = self._middleware()(self.factory.get("/"))

        self.assertNotIn("medpulse_language", response.cookies)

    def test_unsupported_choice_is_not_persisted(self) -> None:
        response = self._middleware()(self.factory.get("/?lang=fr"))

        self.assertEqual(response.content, b"ar")
        self.assertNotIn("medpulse_language", response.cookies)


class LanguageDirectionContextTests(SimpleTestCase):
    factory = RequestFactory()

    def test_arabic_context(self) -> None:
        request = self.factory.get("/")
        request.LANGUAGE_CODE = "ar"

        context = language_direction(request)

        self.assertEqual(context["lang_code"], "ar")
        self.assertEqual(context["lang_dir"], "rtl")
        self.assertTrue(context["is_rtl"])
        self.assertEqual(context["lang_alternates"], ["en"])
        self.assertIn("Cairo", context["lang_fonts"]["headings"])

    def test_english_context(self) -> None:
        request = self.factory.get("/")
        request.LANGUAGE_CODE = "en-US"

        context = language_direction(request)

        self.assertEqual(context["lang_code"], "en")
        self.assertEqual(context["lang_dir"], "ltr")
        self.assertFalse(context["is_rtl"])
        self.assertEqual(context["lang_alternates"], ["ar"])

    @override_settings(CONTENT_FONTS={"en": {"headings": "'Lora', serif"}})
    def test_fonts_read_from_settings(self) -> None:
        request = self.factory.get("/")
        request.LANGUAGE_CODE = "en"

        fonts = language_direction(request)["lang_fonts"]

        self.assertEqual(fonts, {"headings": "'Lora', serif", "body": ""})
