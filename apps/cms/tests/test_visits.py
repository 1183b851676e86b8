from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

from django.test import SimpleTestCase

from apps.cms.exceptions import CMSDisabled, CMSError
from apps.cms.visits import OverrideLoader, PageVisit
from apps.content.overrides import EMPTY_DOCUMENT, OverrideDocument


class FakeClient:
    def __init__(self, documents=None, *, error: Exception | None = None, gate: threading.Event | None = None):
        self.documents = documents or {}
        self.error = error
        self.gate = gate
        self.calls = []

    def fetch_overrides(self, page, db_title=None):
        self.calls.append((page, db_title))
        if self.gate is not None:
            self.gate.wait(2)
        if self.error is not None:
            raise self.error
        return OverrideDocument(self.documents.get(page, {}))

    def get_front_settings(self):
        return {"mode": "images"}


class PageVisitTests(SimpleTestCase):
    def test_default_until_delivered(self) -> None:
        visit = PageVisit("page:home", EMPTY_DOCUMENT)

        self.assertIs(visit.value, EMPTY_DOCUMENT)
        self.assertFalse(visit.wait(0))

        self.assertTrue(visit.deliver(OverrideDocument({"h1_en": "x"})))
        self.assertTrue(visit.wait(0))
        self.assertTrue(visit.delivered)
        self.assertEqual(visit.value["h1_en"], "x")

    def test_result_after_close_is_discarded(self) -> None:
        with PageVisit("page:home", EMPTY_DOCUMENT) as visit:
            pass

        self.assertTrue(visit.closed)
        self.assertFalse(visit.deliver(OverrideDocument({"h1_en": "late"})))
        self.assertIs(visit.value, EMPTY_DOCUMENT)
        self.assertFalse(visit.delivered)

    def test_failure_settles_with_default(self) -> None:
        visit = PageVisit("page:home", EMPTY_DOCUMENT)

        with self.assertLogs("cms.visits", level="WARNING"):
            visit.fail("timeout")

        self.assertTrue(visit.wait(0))
        self.assertIs(visit.value, EMPTY_DOCUMENT)


class OverrideLoaderTests(SimpleTestCase):
    def setUp(self) -> None:
        self.executor = ThreadPoolExecutor(max_workers=2)
        self.addCleanup(self.executor.shutdown, wait=True)

    def test_start_delivers_document(self) -> None:
        client = FakeClient({"about": {"h1_en": "About"}})
        loader = OverrideLoader(client=client, executor=self.executor)

        visit = loader.start("about", "about us")

        self.assertTrue(visit.wait(2))
        self.assertEqual(visit.value["h1_en"], "About")
        self.assertEqual(client.calls, [("about", "about us")])

    def test_backend_error_keeps_defaults(self) -> None:
        loader = OverrideLoader(client=FakeClient(error=CMSError("API Error: 500")), executor=self.executor)

        with self.assertLogs("cms.visits", level="WARNING") as logs:
            visit = loader.start("home")
            self.assertTrue(visit.wait(2))

        self.assertIs(visit.value, EMPTY_DOCUMENT)
        self.assertIn("API Error: 500", logs.output[0])

    def test_disabled_backend_is_quiet(self) -> None:
        loader = OverrideLoader(client=FakeClient(error=CMSDisabled("off")), executor=self.executor)

        with self.assertNoLogs("cms.visits", level="WARNING"):
            visit = loader.start("home")
            self.assertTrue(visit.wait(2))

        self.assertIs(visit.value, EMPTY_DOCUMENT)

    def test_unexpected_error_is_logged(self) -> None:
        loader = OverrideLoader(client=FakeClient(error=KeyError("attributes")), executor=self.executor)

        with self.assertLogs("cms.visits", level="ERROR"):
            visit = loader.start("home")
            self.assertTrue(visit.wait(2))

        self.assertIs(visit.value, EMPTY_DOCUMENT)

    def test_late_result_is_dropped(self) -> None:
        gate = threading.Event()
        loader = OverrideLoader(client=FakeClient({"home": {"h1_en": "late"}}, gate=gate), executor=self.executor)

        visit = loader.start("home")
        self.assertFalse(visit.wait(0.05))
        visit.close()
        gate.set()
        self.executor.shutdown(wait=True)

        self.assertIs(visit.value, EMPTY_DOCUMENT)
        self.assertFalse(visit.delivered)

    def test_front_settings(self) -> None:
        loader = OverrideLoader(client=FakeClient(), executor=self.executor)

        visit = loader.start_front_settings()

        self.assertTrue(visit.wait(2))
        self.assertEqual(visit.value, {"mode": "images"})

    def test_closing_cancels_a_queued_fetch(self) -> None:
        gate = threading.Event()
        client = FakeClient(gate=gate)
        executor = ThreadPoolExecutor(max_workers=1)
        self.addCleanup(executor.shutdown, wait=True)
        loader = OverrideLoader(client=client, executor=executor)

        running = loader.start("home")
        queued = loader.start("about")
        queued.close()
        gate.set()
        self.assertTrue(running.wait(2))
        executor.shutdown(wait=True)

        self.assertTrue(queued.future.cancelled())
        self.assertEqual(client.calls, [("home", None)])
        self.assertIs(queued.value, EMPTY_DOCUMENT)
