"""Per-visit fetching of CMS override documents.

A page visit starts the backend fetch in the background and renders with
whatever has arrived when the view stops waiting. Until the document is
delivered every field uses its static default. Once the visit is closed, a
result that arrives late is dropped, never applied to a finished render.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import CancelledError, Executor, Future, ThreadPoolExecutor
from typing import Any, Callable, Generic, Optional, TypeVar

from django.conf import settings

from apps.content.overrides import EMPTY_DOCUMENT, OverrideDocument

from .client import CMSClient, get_client
from .exceptions import CMSDisabled, CMSError

log = logging.getLogger("cms.visits")

T = TypeVar("T")


class PageVisit(Generic[T]):
    def __init__(self, label: str, default: T) -> None:
        self.label = label
        self._lock = threading.Lock()
        self._value: T = default
        self._settled = threading.Event()
        self._closed = False
        self._delivered = False
        self.future: Optional[Future] = None

    @property
    def value(self) -> T:
        with self._lock:
            return self._value

    @property
    def delivered(self) -> bool:
        with self._lock:
            return self._delivered

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    def deliver(self, value: T) -> bool:
        with self._lock:
            if self._closed:
                log.debug("Discarding late CMS result for %s", self.label)
                return False
            self._value = value
            self._delivered = True
        self._settled.set()
        return True

    def fail(self, reason: str, *, quiet: bool = False) -> None:
        with self._lock:
            closed = self._closed
        if quiet:
            log.debug("CMS fetch for %s skipped: %s", self.label, reason)
        elif not closed:
            log.warning("CMS fetch for %s failed: %s; using static defaults", self.label, reason)
        self._settled.set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the fetch settles or ``timeout`` elapses; True if settled."""
        return self._settled.wait(timeout)

    def close(self) -> None:
        with self._lock:
            self._closed = True
        # a fetch still queued in the pool never reaches the backend
        if self.future is not None:
            self.future.cancel()

    def __enter__(self) -> "PageVisit[T]":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()


_executor: Optional[ThreadPoolExecutor] = None
_executor_lock = threading.Lock()


def _shared_executor() -> ThreadPoolExecutor:
    global _executor
    with _executor_lock:
        if _executor is None:
            _executor = ThreadPoolExecutor(
                max_workers=int(getattr(settings, "CMS_MAX_WORKERS", 4)),
                thread_name_prefix="cms-fetch",
            )
        return _executor


class OverrideLoader:
    def __init__(self, client: Optional[CMSClient] = None, executor: Optional[Executor] = None) -> None:
        self._client = client
        self._executor = executor

    @property
    def client(self) -> CMSClient:
        return self._client or get_client()

    @property
    def executor(self) -> Executor:
        return self._executor or _shared_executor()

    def _settle(self, visit: PageVisit, future: Future) -> None:
        try:
            result = future.result()
        except CancelledError:
            visit.fail("cancelled", quiet=True)
            return
        except CMSDisabled:
            visit.fail("disabled", quiet=True)
            return
        except CMSError as exc:
            visit.fail(str(exc))
            return
        except Exception as exc:
            log.exception("Unexpected error while fetching %s", visit.label)
            visit.fail(repr(exc))
            return
        visit.deliver(result)

    def submit(self, label: str, fetch: Callable[[], T], default: T) -> PageVisit[T]:
        visit: PageVisit[T] = PageVisit(label, default)
        future = self.executor.submit(fetch)
        visit.future = future
        future.add_done_callback(lambda f: self._settle(visit, f))
        return visit

    def start(self, page: str, db_title: Optional[str] = None) -> PageVisit[OverrideDocument]:
        client = self.client
        return self.submit(f"page:{page}", lambda: client.fetch_overrides(page, db_title), EMPTY_DOCUMENT)

    def start_front_settings(self) -> PageVisit[Any]:
        client = self.client
        return self.submit("front-settings", client.get_front_settings, None)


def fetch_timeout() -> float:
    return float(getattr(settings, "CMS_FETCH_TIMEOUT", 4.0))


__all__ = ["OverrideLoader", "PageVisit", "fetch_timeout"]
