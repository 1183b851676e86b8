from __future__ import annotations

from django.test import SimpleTestCase, override_settings

from apps.content.media import (
    HeroMedia,
    embed_video_url,
    is_absolute,
    is_web_url,
    resolve_gallery,
    resolve_hero,
    resolve_media,
)

CDN = "https://cdn.example"


class ResolveMediaTests(SimpleTestCase):
    def test_base_path_and_file_name_pair(self) -> None:
        ref = {"base_path": "/img/", "file_name": "a.png"}

        self.assertEqual(resolve_media(ref, "", CDN), "https://cdn.example/img/a.png")

    def test_all_shapes_are_equivalent(self) -> None:
        refs = [
            "https://cdn.example/img/a.png",
            "/img/a.png",
            "img/a.png",
            {"base_path": "/img/", "file_name": "a.png"},
            {"base_url": "img/", "name": "a.png"},
            {"url": "/img/a.png"},
        ]

        urls = {resolve_media(ref, "", CDN) for ref in refs}

        self.assertEqual(urls, {"https://cdn.example/img/a.png"})

    def test_single_separator_between_prefix_and_path(self) -> None:
        self.assertEqual(resolve_media("//img/a.png", "", CDN), "//img/a.png")
        self.assertEqual(resolve_media("/img/a.png", "", CDN + "/"), "https://cdn.example/img/a.png")

    def test_absolute_pair_is_kept(self) -> None:
        ref = {"base_url": "https://other.example/up/", "name": "v.jpg"}

        self.assertEqual(resolve_media(ref, "", CDN), "https://other.example/up/v.jpg")

    def test_data_and_blob_urls_pass_through(self) -> None:
        self.assertEqual(resolve_media("data:image/png;base64,AAA", "", CDN), "data:image/png;base64,AAA")
        self.assertTrue(is_absolute("blob:https://x/1"))
        self.assertFalse(is_web_url("blob:https://x/1"))
        self.assertTrue(is_web_url("//cdn.example/a.png"))

    def test_empty_references_use_fallback(self) -> None:
        for ref in (None, "", "   ", {}, {"base_path": "", "file_name": ""}):
            with self.subTest(ref=ref):
                self.assertEqual(resolve_media(ref, "https://x/fallback.png", CDN), "https://x/fallback.png")

    def test_unrecognised_reference_logs_and_uses_fallback(self) -> None:
        with self.assertLogs("content.media", level="WARNING"):
            self.assertEqual(resolve_media(42, "https://x/fallback.png", CDN), "https://x/fallback.png")

    def test_never_empty(self) -> None:
        self.assertEqual(resolve_media(None), "https://media.test/placeholder.png")
        self.assertEqual(resolve_media("", ""), "https://media.test/placeholder.png")

    def test_default_domain_from_settings(self) -> None:
        self.assertEqual(resolve_media("uploads/a.png"), "https://media.test/uploads/a.png")

    @override_settings(CONTENT_MEDIA_PLACEHOLDER="")
    def test_builtin_placeholder(self) -> None:
        self.assertTrue(resolve_media(None).startswith("https://"))


class ResolveGalleryTests(SimpleTestCase):
    def test_unresolvable_entries_are_dropped(self) -> None:
        urls = resolve_gallery(["a.png", None, {"url": "b.png"}, ""], CDN)

        self.assertEqual(urls, ["https://cdn.example/a.png", "https://cdn.example/b.png"])

    def test_non_list_is_empty(self) -> None:
        self.assertEqual(resolve_gallery(""), [])
        self.assertEqual(resolve_gallery(None), [])
        with self.assertLogs("content.media", level="WARNING"):
            self.assertEqual(resolve_gallery({"url": "a.png"}), [])


class ResolveHeroTests(SimpleTestCase):
    def test_missing_settings_use_default_images(self) -> None:
        hero = resolve_hero(None, default_images=("https://x/hero.jpg",))

        self.assertEqual(hero, HeroMedia(images=("https://x/hero.jpg",)))
        self.assertFalse(hero.is_video)

    def test_images_mode(self) -> None:
        settings = {"mode": "images", "images": [{"base_url": "https://cdn.example/h/", "name": "1.jpg"}]}

        hero = resolve_hero(settings, default_images=("https://x/hero.jpg",))

        self.assertEqual(hero.images, ("https://cdn.example/h/1.jpg",))

    def test_video_mode_builds_embed_url(self) -> None:
        settings = {"mode": "video", "videos": [{"base_url": "https://www.youtube.com/embed/", "name": "abc123"}]}

        hero = resolve_hero(settings, origin="https://medpulseuae.com")

        self.assertTrue(hero.is_video)
        self.assertTrue(hero.video_url.startswith("https://www.youtube.com/embed/abc123?"))
        self.assertIn("autoplay=1", hero.video_url)
        self.assertIn("playlist=abc123", hero.video_url)
        self.assertIn("origin=https%3A%2F%2Fmedpulseuae.com", hero.video_url)

    def test_video_mode_without_video_falls_back_to_images(self) -> None:
        with self.assertLogs("content.media", level="WARNING"):
            hero = resolve_hero({"mode": "video", "videos": []}, default_images=("https://x/hero.jpg",))

        self.assertEqual(hero.mode, "images")
        self.assertEqual(hero.images, ("https://x/hero.jpg",))

    def test_video_with_script_scheme_falls_back_to_images(self) -> None:
        for base_url in ("javascript:alert(document.cookie)//", " JavaScript:x//", "data:text/html,"):
            settings = {"mode": "video", "videos": [{"base_url": base_url, "name": "x"}]}
            with self.subTest(base_url=base_url):
                with self.assertLogs("content.media", level="WARNING"):
                    hero = resolve_hero(settings, default_images=("https://x/hero.jpg",))

                self.assertFalse(hero.is_video)
                self.assertEqual(hero.video_url, "")
                self.assertEqual(hero.images, ("https://x/hero.jpg",))

    def test_protocol_relative_video_is_accepted(self) -> None:
        settings = {"mode": "video", "videos": [{"base_url": "//www.youtube.com/embed/", "name": "abc"}]}

        self.assertTrue(resolve_hero(settings).is_video)

    def test_non_embed_video_url_is_untouched(self) -> None:
        self.assertEqual(embed_video_url("https://cdn.example/v/", "clip.mp4"), "https://cdn.example/v/clip.mp4")
