from __future__ import annotations

from typing import Iterable, Optional

PRIMARY_LANGUAGE = "ar"
SECONDARY_LANGUAGE = "en"
SUPPORTED_LANGUAGES: tuple[str, ...] = (PRIMARY_LANGUAGE, SECONDARY_LANGUAGE)
RTL_LANGUAGES = frozenset({"ar"})


def _clean_tag(tag: Optional[str]) -> str:
    if not tag:
        return ""
    return str(tag).strip().lower().replace("_", "-")


def is_supported(tag: Optional[str]) -> bool:
    return _clean_tag(tag) in SUPPORTED_LANGUAGES


def normalize_language(tag: Optional[str], default: str = PRIMARY_LANGUAGE) -> str:
    """
    Map any incoming language tag onto one of the supported languages.

    ``en-US`` / ``EN_gb`` become ``en``; anything unknown becomes ``default``
    (the primary language unless told otherwise).
    """
    cleaned = _clean_tag(tag)
    if cleaned in SUPPORTED_LANGUAGES:
        return cleaned
    if "-" in cleaned:
        base = cleaned.split("-", 1)[0]
        if base in SUPPORTED_LANGUAGES:
            return base
    return default if default in SUPPORTED_LANGUAGES else PRIMARY_LANGUAGE


def first_supported(candidates: Iterable[Optional[str]], default: str = PRIMARY_LANGUAGE) -> str:
    for candidate in candidates:
        cleaned = _clean_tag(candidate)
        if not cleaned:
            continue
        base = cleaned.split("-", 1)[0]
        if cleaned in SUPPORTED_LANGUAGES:
            return cleaned
        if base in SUPPORTED_LANGUAGES:
            return base
    return normalize_language(default)


def direction(language: Optional[str]) -> str:
    return "rtl" if normalize_language(language) in RTL_LANGUAGES else "ltr"


def namespaced_key(field_key: str, language: Optional[str]) -> str:
    """``mission_text`` + ``en`` -> ``mission_text_en``."""
    return f"{field_key}_{normalize_language(language)}"


__all__ = [
    "PRIMARY_LANGUAGE",
    "SECONDARY_LANGUAGE",
    "SUPPORTED_LANGUAGES",
    "RTL_LANGUAGES",
    "direction",
    "first_supported",
    "is_supported",
    "namespaced_key",
    "normalize_language",
]
