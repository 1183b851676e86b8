"""Errors raised by the content management backend client."""

from __future__ import annotations


class CMSError(RuntimeError):
    """Raised when the backend cannot be reached or answers with an error."""

    def __init__(self, message: str, *, status: int | None = None, url: str = "") -> None:
        super().__init__(message)
        self.status = status
        self.url = url


class CMSDisabled(CMSError):
    """Raised when fetching is switched off (``CMS_ENABLED = False``)."""
