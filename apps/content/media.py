from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Tuple
from urllib.parse import urlencode

from django.conf import settings

log = logging.getLogger("content.media")

DEFAULT_PLACEHOLDER = "https://picsum.photos/seed/medpulse/400/300"

_ABSOLUTE_PREFIXES: Tuple[str, ...] = ("http://", "https://", "//", "data:", "blob:")
_WEB_PREFIXES: Tuple[str, ...] = ("http://", "https://", "//")
_PAIR_BASE_KEYS: Tuple[str, ...] = ("base_path", "base_url")
_PAIR_NAME_KEYS: Tuple[str, ...] = ("file_name", "name")


def _placeholder() -> str:
    return getattr(settings, "CONTENT_MEDIA_PLACEHOLDER", "") or DEFAULT_PLACEHOLDER


def _domain() -> str:
    return getattr(settings, "CONTENT_MEDIA_DOMAIN", "") or ""


def is_absolute(url: str) -> bool:
    return url.strip().lower().startswith(_ABSOLUTE_PREFIXES)


def is_web_url(url: Any) -> bool:
    """http(s) or protocol-relative; the only URLs allowed in iframes and links."""
    return isinstance(url, str) and url.strip().lower().startswith(_WEB_PREFIXES)


def _join(prefix: str, path: str) -> str:
    path = path.strip()
    if is_absolute(path):
        return path
    prefix = (prefix or "").strip().rstrip("/")
    return f"{prefix}/{path.lstrip('/')}"


def _first(mapping: Mapping[str, Any], keys: Iterable[str]) -> Optional[Any]:
    for key in keys:
        if key in mapping:
            return mapping[key]
    return None


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def resolve_media(ref: Any, fallback_url: str = "", domain_prefix: Optional[str] = None) -> str:
    """Turn any supported media reference into one absolute URL.

    Accepted shapes: absolute URL, relative path, ``{base_path, file_name}``
    (also spelt ``{base_url, name}`` by the events/front-settings endpoints),
    and ``{url}`` upload objects. Anything else degrades to ``fallback_url``;
    the result is never empty.
    """
    fallback = fallback_url or _placeholder()
    prefix = _domain() if domain_prefix is None else domain_prefix

    if ref is None or ref == "" or ref == {}:
        return fallback

    if isinstance(ref, str):
        path = ref.strip()
        if not path:
            return fallback
        if is_absolute(path):
            return path
        return _join(prefix, path)

    if isinstance(ref, Mapping):
        base = _first(ref, _PAIR_BASE_KEYS)
        name = _first(ref, _PAIR_NAME_KEYS)
        if base is not None or name is not None:
            base_text, name_text = _text(base), _text(name)
            if not name_text and not base_text:
                return fallback
            joined = f"{base_text}{name_text}"
            if is_absolute(joined):
                return joined
            return _join(prefix, joined)
        if "url" in ref:
            return resolve_media(_text(ref.get("url")), fallback, prefix)

    log.warning("Unrecognised media reference of type %s; using fallback", type(ref).__name__)
    return fallback


def resolve_gallery(refs: Any, domain_prefix: Optional[str] = None) -> List[str]:
    """Resolve a list of references, dropping the ones that cannot be resolved."""
    if not isinstance(refs, (list, tuple)):
        if refs not in (None, ""):
            log.warning("Gallery of type %s ignored", type(refs).__name__)
        return []
    marker = "\x00missing"
    urls = []
    for ref in refs:
        url = resolve_media(ref, marker, domain_prefix)
        if url != marker:
            urls.append(url)
    return urls


# ---------------------------------------------------------------------------
# Hero (front settings)
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class HeroMedia:
    mode: str = "images"
    images: Tuple[str, ...] = ()
    video_url: str = ""

    @property
    def is_video(self) -> bool:
        return self.mode == "video" and bool(self.video_url)


def embed_video_url(base_url: str, name: str, origin: str = "") -> str:
    url = f"{base_url}{name}"
    if "embed" in url:
        query = {"autoplay": 1, "mute": 1, "controls": 0, "loop": 1, "playlist": name}
        if origin:
            query["origin"] = origin
        url = f"{url}?{urlencode(query)}"
    return url


def resolve_hero(
    front_settings: Any,
    *,
    default_images: Iterable[str] = (),
    origin: str = "",
    domain_prefix: Optional[str] = None,
) -> HeroMedia:
    defaults = tuple(default_images) or (_placeholder(),)
    if not isinstance(front_settings, Mapping):
        return HeroMedia(images=defaults)

    mode = _text(front_settings.get("mode")) or "images"
    if mode == "video":
        videos = front_settings.get("videos") or []
        first = videos[0] if isinstance(videos, (list, tuple)) and videos else None
        if isinstance(first, Mapping):
            base, name = _text(first.get("base_url")), _text(first.get("name"))
            if base and name and is_web_url(f"{base}{name}"):
                return HeroMedia(mode="video", images=defaults, video_url=embed_video_url(base, name, origin))
        log.warning("Hero video mode without a usable http(s) video; showing images")
        return HeroMedia(images=defaults)

    images = tuple(resolve_gallery(front_settings.get("images"), domain_prefix))
    return HeroMedia(mode="images", images=images or defaults)


__all__ = [
    "DEFAULT_PLACEHOLDER",
    "HeroMedia",
    "embed_video_url",
    "is_absolute",
    "is_web_url",
    "resolve_gallery",
    "resolve_hero",
    "resolve_media",
]
