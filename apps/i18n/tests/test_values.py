from __future__ import annotations

from django.test import SimpleTestCase

from apps.i18n.values import BilingualValue, resolve


class BilingualValueTests(SimpleTestCase):
    def test_resolve_returns_branch_verbatim(self) -> None:
        value = BilingualValue(ar=" من نحن ", en=" About Us ")

        self.assertEqual(resolve(value, "ar"), " من نحن ")
        self.assertEqual(resolve(value, "en"), " About Us ")

    def test_unknown_language_gets_primary_branch(self) -> None:
        value = BilingualValue(ar="مرحبا", en="Hello")

        self.assertEqual(resolve(value, "fr"), "مرحبا")
        self.assertEqual(resolve(value, None), "مرحبا")
        self.assertEqual(resolve(value, ""), "مرحبا")

    def test_regional_tag_selects_secondary_branch(self) -> None:
        value = BilingualValue(ar="مرحبا", en="Hello")

        self.assertEqual(resolve(value, "en-GB"), "Hello")

    def test_none_branches_are_stored_as_empty_strings(self) -> None:
        value = BilingualValue(ar=None, en=None)  # type: ignore[arg-type]

        self.assertEqual(value.ar, "")
        self.assertEqual(value.en, "")
        self.assertTrue(value.is_empty())
        self.assertEqual(resolve(value, "en"), "")

    def test_resolve_none_value_is_empty(self) -> None:
        self.assertEqual(resolve(None, "ar"), "")

    def test_from_mapping_and_same(self) -> None:
        value = BilingualValue.from_mapping({"ar": "دبي", "en": "Dubai", "fr": "Dubaï"})

        self.assertEqual(value.as_dict(), {"ar": "دبي", "en": "Dubai"})
        self.assertEqual(BilingualValue.same("2025").as_dict(), {"ar": "2025", "en": "2025"})
        self.assertTrue(BilingualValue.from_mapping(None).is_empty())
