from __future__ import annotations

import tempfile
from pathlib import Path

from django.test import SimpleTestCase, override_settings

from apps.content.catalog import (
    SpecificationError,
    available_pages,
    clear_cache,
    load_specification,
    parse_specification,
)
from apps.content.specs import SECTION, SIDEBAR_CARD

SHIPPED_PAGES = ["about", "articles", "conferences", "contact", "founder", "home"]


class ShippedSpecificationTests(SimpleTestCase):
    def setUp(self) -> None:
        clear_cache()

    def test_every_page_has_a_specification(self) -> None:
        self.assertEqual(available_pages(), SHIPPED_PAGES)

    def test_shipped_specifications_load(self) -> None:
        for page in SHIPPED_PAGES:
            with self.subTest(page=page):
                spec = load_specification(page)
                self.assertEqual(spec.page, page)
                self.assertTrue(list(spec.keys()))
                self.assertTrue(spec.seo.meta_title.ar)
                self.assertTrue(spec.seo.meta_title.en)

    def test_backend_titles(self) -> None:
        self.assertEqual(load_specification("about").db_title, "about us")
        self.assertEqual(load_specification("contact").db_title, "contact us")
        self.assertEqual(load_specification("home").db_title, "home")

    def test_founder_shapes(self) -> None:
        spec = load_specification("founder")

        self.assertIs(spec.collections["sections"].shape, SECTION)
        self.assertIs(spec.collections["sidebar_cards"].shape, SIDEBAR_CARD)
        first_card = spec.collections["sidebar_cards"].items[0]
        self.assertEqual(len(first_card.child("items")), 4)
        self.assertIn("gallery", spec.media)

    def test_home_carries_site_footer(self) -> None:
        spec = load_specification("home")

        self.assertEqual(list(spec.links["social_links"]), ["Facebook", "Instagram", "X", "TikTok", "YouTube"])
        self.assertTrue(spec.media["logo"].startswith("https://"))
        self.assertIn("social_links", set(spec.keys()))

    def test_every_field_is_bilingual(self) -> None:
        # blank defaults are blank in both languages
        for page in SHIPPED_PAGES:
            spec = load_specification(page)
            for key, field in spec.fields.items():
                with self.subTest(page=page, key=key):
                    self.assertEqual(bool(field.default.ar), bool(field.default.en))

    def test_lookup_is_case_insensitive_and_cached(self) -> None:
        self.assertIs(load_specification(" About "), load_specification("about"))

    def test_unknown_page(self) -> None:
        with self.assertRaises(SpecificationError):
            load_specification("experts-archive")
        with self.assertRaises(SpecificationError):
            load_specification("")


class ParseSpecificationTests(SimpleTestCase):
    def test_minimal_page(self) -> None:
        spec = parse_specification({"page": "demo", "fields": {"h1": {"ar": "عنوان", "en": "Title"}}})

        self.assertEqual(spec.db_title, "demo")
        self.assertEqual(spec.fields["h1"].default.en, "Title")
        self.assertEqual(spec.rich_keys(), ())

    def test_specification_is_immutable(self) -> None:
        spec = parse_specification({"page": "demo", "plain": {"email": "a@b.c"}})

        with self.assertRaises(TypeError):
            spec.plain["email"] = "x@y.z"  # type: ignore[index]

    def test_rejects_non_mapping(self) -> None:
        with self.assertRaises(SpecificationError):
            parse_specification(["page"])

    def test_rejects_unknown_sections(self) -> None:
        with self.assertRaises(SpecificationError):
            parse_specification({"page": "demo", "widgets": {}})

    def test_rejects_duplicate_keys(self) -> None:
        with self.assertRaisesMessage(SpecificationError, "declared in both"):
            parse_specification({"page": "demo", "fields": {"logo": {"ar": "a", "en": "b"}}, "media": {"logo": "x.png"}})

    def test_rejects_item_keys_outside_shape(self) -> None:
        payload = {
            "page": "demo",
            "collections": {"goals": {"shape": "point", "items": [{"title": {"ar": "a", "en": "b"}}]}},
        }

        with self.assertRaisesMessage(SpecificationError, "unexpected keys"):
            parse_specification(payload)

    def test_rejects_unknown_shape(self) -> None:
        with self.assertRaises(SpecificationError):
            parse_specification({"page": "demo", "collections": {"goals": {"shape": "carousel"}}})


class LoadFromDirectoryTests(SimpleTestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.addCleanup(clear_cache)
        self.directory = Path(self._tmp.name)
        clear_cache()

    def test_invalid_yaml(self) -> None:
        (self.directory / "broken.yml").write_text("page: [unclosed", encoding="utf-8")

        with override_settings(CONTENT_SPEC_DIR=self.directory):
            with self.assertRaisesMessage(SpecificationError, "invalid YAML"):
                load_specification("broken")

    def test_reload_after_file_change(self) -> None:
        path = self.directory / "demo.yml"
        path.write_text("page: demo\nplain:\n  email: a@b.c\n", encoding="utf-8")

        with override_settings(CONTENT_SPEC_DIR=self.directory):
            self.assertEqual(load_specification("demo").plain["email"], "a@b.c")
            path.write_text("page: demo\nplain:\n  email: changed@b.c\n", encoding="utf-8")
            self.assertEqual(load_specification("demo").plain["email"], "changed@b.c")
            self.assertEqual(available_pages(), ["demo"])
