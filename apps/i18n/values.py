from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .utils import PRIMARY_LANGUAGE, SECONDARY_LANGUAGE, _clean_tag


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


@dataclass(frozen=True, slots=True)
class BilingualValue:
    """Pair of equivalent strings, one per supported language.

    Both branches are always ``str``: ``None`` is stored as ``""`` so that
    :func:`resolve` can never fail on a half-filled value.
    """

    ar: str = ""
    en: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "ar", _as_text(self.ar))
        object.__setattr__(self, "en", _as_text(self.en))

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "BilingualValue":
        if not isinstance(data, Mapping):
            return cls()
        return cls(ar=data.get(PRIMARY_LANGUAGE), en=data.get(SECONDARY_LANGUAGE))

    @classmethod
    def same(cls, text: Optional[str]) -> "BilingualValue":
        """Language-neutral text (locations, dates) stored in both branches."""
        return cls(ar=text, en=text)

    def is_empty(self) -> bool:
        return not self.ar and not self.en

    def as_dict(self) -> dict[str, str]:
        return {PRIMARY_LANGUAGE: self.ar, SECONDARY_LANGUAGE: self.en}


EMPTY = BilingualValue()


def resolve(value: Optional[BilingualValue], language: Optional[str]) -> str:
    """Return the branch of ``value`` for ``language``, verbatim.

    No trimming, no escaping. Unknown languages get the primary branch.
    """
    if value is None:
        return ""
    tag = _clean_tag(language)
    if tag == SECONDARY_LANGUAGE or tag.split("-", 1)[0] == SECONDARY_LANGUAGE:
        return value.en
    return value.ar


__all__ = ["BilingualValue", "EMPTY", "resolve"]
