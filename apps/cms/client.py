"""HTTP client for the content management backend (read-only)."""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Optional

import requests
from django.conf import settings

from apps.content.overrides import OverrideDocument

from .exceptions import CMSDisabled, CMSError

log = logging.getLogger("cms.client")

# Page keys as used by the site -> page titles stored by the backend.
PAGE_TITLES: Mapping[str, str] = {
    "home": "home",
    "about": "about us",
    "founder": "founder",
    "contact": "contact us",
    "conferences": "conferences",
    "articles": "articles",
}


def _error_message(response: requests.Response) -> str:
    text = response.text or ""
    try:
        payload = json.loads(text)
    except ValueError:
        return text or f"API Error: {response.status_code}"
    if isinstance(payload, Mapping) and payload.get("message"):
        return str(payload["message"])
    return text or f"API Error: {response.status_code}"


class CMSClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
        enabled: Optional[bool] = None,
    ) -> None:
        self.base_url = (base_url or getattr(settings, "CMS_API_BASE", "")).rstrip("/")
        self.timeout = float(timeout if timeout is not None else getattr(settings, "CMS_FETCH_TIMEOUT", 4.0))
        self.session = session or requests.Session()
        self.enabled = getattr(settings, "CMS_ENABLED", True) if enabled is None else enabled

    # -- transport ---------------------------------------------------------

    def _get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        if not self.enabled or not self.base_url:
            raise CMSDisabled("CMS fetching is disabled")
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            response = self.session.get(
                url,
                params=params,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise CMSError(f"request failed: {exc}", url=url) from exc

        if not response.ok:
            raise CMSError(_error_message(response), status=response.status_code, url=url)

        if not response.text:
            return None
        try:
            return response.json()
        except ValueError:
            log.warning("CMS answered non-JSON body for %s", url)
            return None

    # -- endpoints ---------------------------------------------------------

    def get_static_page(self, title: str) -> Any:
        return self._get("static", params={"title": title})

    def get_front_settings(self) -> Optional[Mapping[str, Any]]:
        """First hero/front-settings record, or ``None``."""
        payload = self._get("get-front-data/")
        data = payload.get("data", payload) if isinstance(payload, Mapping) else payload
        if isinstance(data, list) and data and isinstance(data[0], Mapping):
            return data[0]
        return None

    def fetch_overrides(self, page: str, db_title: Optional[str] = None) -> OverrideDocument:
        """Dynamic override document for ``page``; empty when the backend has none."""
        title = db_title or PAGE_TITLES.get(page, page)
        payload = self.get_static_page(title)
        if isinstance(payload, Mapping) and isinstance(payload.get("data"), Mapping):
            payload = payload["data"]
        attributes = payload.get("attributes") if isinstance(payload, Mapping) else None
        document = OverrideDocument.from_payload(attributes, source=f"cms:{title}")
        log.debug("CMS page=%s title=%s keys=%d", page, title, len(document))
        return document


_default_client: Optional[CMSClient] = None


def get_client() -> CMSClient:
    global _default_client
    if _default_client is None:
        _default_client = CMSClient()
    return _default_client


def reset_client() -> None:
    global _default_client
    _default_client = None


__all__ = ["CMSClient", "PAGE_TITLES", "get_client", "reset_client"]
