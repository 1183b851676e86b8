"""CMS override resolution.

Every displayable field of a page has a static bilingual default. The content
management backend may supply a replacement per field and per language under a
*namespaced key* (``mission_text_ar`` / ``mission_text_en``), or an ordered
list of records for collection fields. Precedence is strictly
override > static default, all-or-nothing per field and language.

Raw backend values are classified once, here, into :class:`ScalarOverride`,
:class:`CollectionOverride` or :class:`Absent`; nothing downstream looks at
the loose payload again. Malformed values never raise: they log a warning and
count as absent.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Sequence, Tuple, Union

from apps.i18n.utils import namespaced_key, normalize_language
from apps.i18n.values import BilingualValue, resolve

from .media import is_web_url
from .specs import (
    CARD,
    DEFAULT_ICON,
    ContentSpecification,
    ItemShape,
    StaticItem,
    UniformItem,
)

log = logging.getLogger("content.overrides")


def _freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({str(k): _freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    return value


class OverrideDocument(Mapping[str, Any]):
    """Read-only view over one page's CMS payload for a single visit."""

    __slots__ = ("_data", "source")

    def __init__(self, data: Optional[Mapping[str, Any]] = None, *, source: str = "") -> None:
        self._data: Mapping[str, Any] = _freeze(dict(data or {}))
        self.source = source

    @classmethod
    def from_payload(cls, payload: Any, *, source: str = "") -> "OverrideDocument":
        """Build a document from a backend ``attributes`` value.

        Some backends store the attributes as a JSON string; those are decoded.
        Anything that is not a mapping yields an empty document.
        """
        if isinstance(payload, (bytes, bytearray)):
            payload = payload.decode("utf-8", "replace")
        if isinstance(payload, str):
            try:
                payload = json.loads(payload)
            except ValueError:
                log.warning("Override payload for %s is not valid JSON; ignoring it", source or "?")
                return cls(source=source)
        if payload is None:
            return cls(source=source)
        if not isinstance(payload, Mapping):
            log.warning(
                "Override payload for %s has type %s, expected a mapping; ignoring it",
                source or "?",
                type(payload).__name__,
            )
            return cls(source=source)
        return cls(payload, source=source)

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __bool__(self) -> bool:
        return bool(self._data)

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"OverrideDocument(source={self.source!r}, keys={sorted(self._data)!r})"


EMPTY_DOCUMENT = OverrideDocument()


# ---------------------------------------------------------------------------
# Tagged variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ScalarOverride:
    value: str


@dataclass(frozen=True, slots=True)
class CollectionOverride:
    items: Tuple[Mapping[str, Any], ...]


@dataclass(frozen=True, slots=True)
class Absent:
    reason: str = "missing"


Override = Union[ScalarOverride, CollectionOverride, Absent]

ABSENT = Absent()


def _lookup(doc: Optional[Mapping[str, Any]], key: str) -> Tuple[bool, Any]:
    if not doc:
        return False, None
    try:
        if key not in doc:
            return False, None
        return True, doc[key]
    except TypeError:
        return False, None


def scalar_override(doc: Optional[Mapping[str, Any]], key: str) -> Override:
    found, raw = _lookup(doc, key)
    if not found or raw is None:
        return ABSENT
    if isinstance(raw, str):
        if raw == "":
            return Absent("empty")
        return ScalarOverride(raw)
    log.warning(
        "Override %s has type %s where text was expected; using the default",
        key,
        type(raw).__name__,
    )
    return Absent("malformed")


def collection_override(doc: Optional[Mapping[str, Any]], key: str) -> Override:
    found, raw = _lookup(doc, key)
    if not found or raw is None:
        return ABSENT
    if isinstance(raw, (str, bytes)) or not isinstance(raw, Sequence):
        log.warning(
            "Override %s has type %s where a list was expected; using the default",
            key,
            type(raw).__name__,
        )
        return Absent("malformed")
    records = []
    for idx, record in enumerate(raw):
        if isinstance(record, Mapping):
            records.append(record)
        else:
            log.warning("Override %s[%d] is %s, not a record; skipped", key, idx, type(record).__name__)
    if not records:
        # An administrator clearing a list cannot be told apart from an unset list.
        return Absent("empty")
    return CollectionOverride(tuple(records))


# ---------------------------------------------------------------------------
# Item mapping
# ---------------------------------------------------------------------------

UniformMapper = Callable[[Any, str], UniformItem]


def _text(record: Mapping[str, Any], key: str) -> str:
    value = record.get(key)
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def map_override_record(record: Mapping[str, Any], shape: ItemShape, language: str) -> UniformItem:
    """Read ``<prefix>_<language>`` for every field of ``shape``."""
    lang = normalize_language(language)
    values = tuple((name, _text(record, f"{prefix}_{lang}")) for name, prefix in shape.fields)
    children = []
    for name, child_shape in shape.children:
        nested = collection_override(record, name)
        items: Tuple[UniformItem, ...] = ()
        if isinstance(nested, CollectionOverride):
            items = tuple(map_override_record(child, child_shape, lang) for child in nested.items)
        children.append((name, items))
    icon = _text(record, "icon") or DEFAULT_ICON
    return UniformItem(icon=icon, values=values, children=tuple(children))


def static_item_mapper(shape: ItemShape) -> UniformMapper:
    """Default mapper for :class:`StaticItem` defaults declared with ``shape``."""

    def _map(item: Any, language: str) -> UniformItem:
        if isinstance(item, BilingualValue):
            # Bare bilingual strings fill the first field of the shape.
            first = shape.fields[0][0] if shape.fields else "text"
            return UniformItem(icon=DEFAULT_ICON, values=((first, resolve(item, language)),))
        if not isinstance(item, StaticItem):
            log.warning("Static item of type %s cannot be mapped to %s", type(item).__name__, shape.name)
            return UniformItem(values=tuple((name, "") for name in shape.field_names))
        values = tuple((name, resolve(item.value(name), language)) for name in shape.field_names)
        children = tuple(
            (name, tuple(_map_child(child, child_shape, language) for child in item.child(name)))
            for name, child_shape in shape.children
        )
        return UniformItem(icon=item.icon or DEFAULT_ICON, values=values, children=children)

    return _map


def _map_child(item: Any, shape: ItemShape, language: str) -> UniformItem:
    return static_item_mapper(shape)(item, language)


# ---------------------------------------------------------------------------
# Public resolution API
# ---------------------------------------------------------------------------


def resolve_field(
    field_key: str,
    language: Optional[str],
    static_default: Optional[BilingualValue],
    override_doc: Optional[Mapping[str, Any]] = None,
) -> str:
    lang = normalize_language(language)
    override = scalar_override(override_doc, namespaced_key(field_key, lang))
    if isinstance(override, ScalarOverride):
        return override.value
    return resolve(static_default, lang)


def resolve_plain(
    field_key: str,
    default: str = "",
    override_doc: Optional[Mapping[str, Any]] = None,
) -> str:
    """Language-neutral values such as ``intro_icon`` or ``email_val``."""
    override = scalar_override(override_doc, field_key)
    if isinstance(override, ScalarOverride):
        return override.value
    return default or ""


def resolve_collection(
    field_key: str,
    language: Optional[str],
    static_items: Sequence[Any],
    uniform_mapper: Optional[UniformMapper] = None,
    override_doc: Optional[Mapping[str, Any]] = None,
    *,
    shape: ItemShape = CARD,
) -> Tuple[UniformItem, ...]:
    lang = normalize_language(language)
    override = collection_override(override_doc, field_key)
    if isinstance(override, CollectionOverride):
        return tuple(map_override_record(record, shape, lang) for record in override.items)
    mapper = uniform_mapper or static_item_mapper(shape)
    return tuple(mapper(item, lang) for item in static_items or ())


@dataclass(frozen=True, slots=True)
class LinkItem:
    name: str
    url: str


def _link_items(entries: Any, key: str) -> Tuple[LinkItem, ...]:
    items = []
    for name, url in entries:
        if not isinstance(url, str) or not url.strip():
            continue
        if not is_web_url(url):
            log.warning("Override %s.%s is not an http(s) URL; skipped", key, name)
            continue
        label = str(name)
        items.append(LinkItem(name=label[:1].upper() + label[1:], url=url.strip()))
    return tuple(items)


def resolve_links(
    field_key: str,
    defaults: Optional[Mapping[str, str]] = None,
    override_doc: Optional[Mapping[str, Any]] = None,
) -> Tuple[LinkItem, ...]:
    """Ordered ``name -> url`` links such as ``social_links``.

    Only non-empty http(s) strings of an override mapping are kept; when none
    survive, the defaults are used.
    """
    found, raw = _lookup(override_doc, field_key)
    if found and raw is not None:
        if isinstance(raw, Mapping):
            items = _link_items(raw.items(), field_key)
            if items:
                return items
        else:
            log.warning(
                "Override %s has type %s where a mapping was expected; using the default",
                field_key,
                type(raw).__name__,
            )
    return _link_items((defaults or {}).items(), field_key)


class ResolvedPage(Mapping[str, Any]):
    """Every declared key of a specification mapped to its resolved node."""

    def __init__(
        self,
        page: str,
        language: str,
        nodes: Dict[str, Any],
        *,
        rich_keys: Tuple[str, ...] = (),
        overridden: Tuple[str, ...] = (),
    ) -> None:
        self.page = page
        self.language = language
        self._nodes = MappingProxyType(nodes)
        self.rich_keys = frozenset(rich_keys)
        self.overridden = frozenset(overridden)

    def __getitem__(self, key: str) -> Any:
        return self._nodes[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)


def resolve_page(
    spec: ContentSpecification,
    language: Optional[str],
    override_doc: Optional[Mapping[str, Any]] = None,
) -> ResolvedPage:
    lang = normalize_language(language)
    nodes: Dict[str, Any] = {}
    overridden = []

    for key, field in spec.fields.items():
        if isinstance(scalar_override(override_doc, namespaced_key(key, lang)), ScalarOverride):
            overridden.append(key)
        nodes[key] = resolve_field(key, lang, field.default, override_doc)

    for key, default in spec.plain.items():
        nodes[key] = resolve_plain(key, default, override_doc)

    for key, collection in spec.collections.items():
        if isinstance(collection_override(override_doc, key), CollectionOverride):
            overridden.append(key)
        nodes[key] = resolve_collection(
            key,
            lang,
            collection.items,
            static_item_mapper(collection.shape),
            override_doc,
            shape=collection.shape,
        )

    for key, defaults in spec.links.items():
        nodes[key] = resolve_links(key, defaults, override_doc)

    # media references stay raw here; the media resolver turns them into URLs
    for key, fallback in spec.media.items():
        found, raw = _lookup(override_doc, key)
        nodes[key] = raw if found and raw not in (None, "", [], ()) else fallback

    if overridden:
        log.debug("page=%s lang=%s overridden=%s", spec.page, lang, overridden)
    return ResolvedPage(spec.page, lang, nodes, rich_keys=spec.rich_keys(), overridden=tuple(overridden))


__all__ = [
    "ABSENT",
    "Absent",
    "CollectionOverride",
    "EMPTY_DOCUMENT",
    "Override",
    "OverrideDocument",
    "LinkItem",
    "ResolvedPage",
    "ScalarOverride",
    "collection_override",
    "map_override_record",
    "resolve_collection",
    "resolve_field",
    "resolve_links",
    "resolve_page",
    "resolve_plain",
    "scalar_override",
    "static_item_mapper",
]
