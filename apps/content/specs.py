"""Immutable content specification types.

A :class:`ContentSpecification` is built once per page from its YAML file and
describes every displayable field together with its bilingual default.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

from apps.i18n.values import BilingualValue

DEFAULT_ICON = "✨"


@dataclass(frozen=True, slots=True)
class ItemShape:
    """Uniform shape of a collection item.

    ``fields`` pairs each output name with the prefix used by override records
    (``("description", "desc")`` reads ``desc_ar`` / ``desc_en``).
    """

    name: str
    fields: Tuple[Tuple[str, str], ...]
    children: Tuple[Tuple[str, "ItemShape"], ...] = ()

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self.fields)

    @property
    def child_names(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self.children)


CARD = ItemShape("card", (("title", "title"), ("description", "desc")))
POINT = ItemShape("point", (("text", "text"),))
ENTRY = ItemShape("entry", (("label", "label"), ("value", "value")))
SECTION = ItemShape("section", (("title", "title"), ("content", "content")))
TITLE = ItemShape("title", (("title", "title"),))
CONTACT_CARD = ItemShape("contact_card", (("title", "title"),), children=(("points", POINT),))
SIDEBAR_CARD = ItemShape(
    "sidebar_card",
    (("title", "title"), ("content", "content")),
    children=(("items", ENTRY),),
)

SHAPES: Mapping[str, ItemShape] = MappingProxyType(
    {shape.name: shape for shape in (CARD, POINT, ENTRY, SECTION, TITLE, CONTACT_CARD, SIDEBAR_CARD)}
)


@dataclass(frozen=True, slots=True)
class UniformItem:
    """A finished, language-resolved collection item.

    Supports ``item["title"]`` so Django templates can use ``{{ item.title }}``.
    """

    icon: str = DEFAULT_ICON
    values: Tuple[Tuple[str, str], ...] = ()
    children: Tuple[Tuple[str, Tuple["UniformItem", ...]], ...] = ()

    def __getitem__(self, key: str) -> Any:
        if key == "icon":
            return self.icon
        for name, value in self.values:
            if name == key:
                return value
        for name, items in self.children:
            if name == key:
                return items
        raise KeyError(key)

    def get(self, key: str, default: Any = "") -> Any:
        try:
            return self[key]
        except KeyError:
            return default

    def as_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"icon": self.icon}
        data.update(self.values)
        for name, items in self.children:
            data[name] = [item.as_dict() for item in items]
        return data


@dataclass(frozen=True, slots=True)
class StaticItem:
    """Build-time default for one collection item."""

    icon: str = ""
    values: Tuple[Tuple[str, BilingualValue], ...] = ()
    children: Tuple[Tuple[str, Tuple["StaticItem", ...]], ...] = ()

    def value(self, name: str) -> BilingualValue:
        for key, value in self.values:
            if key == name:
                return value
        return BilingualValue()

    def child(self, name: str) -> Tuple["StaticItem", ...]:
        for key, items in self.children:
            if key == name:
                return items
        return ()


@dataclass(frozen=True, slots=True)
class ScalarField:
    default: BilingualValue
    rich: bool = False


@dataclass(frozen=True, slots=True)
class CollectionField:
    shape: ItemShape
    items: Tuple[Any, ...] = ()


@dataclass(frozen=True, slots=True)
class SeoDefaults:
    meta_title: BilingualValue = BilingualValue()
    meta_description: BilingualValue = BilingualValue()
    keywords: BilingualValue = BilingualValue()


def _frozen(data: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    return MappingProxyType(dict(data or {}))


@dataclass(frozen=True)
class ContentSpecification:
    page: str
    db_title: str
    fields: Mapping[str, ScalarField] = field(default_factory=dict)
    plain: Mapping[str, str] = field(default_factory=dict)
    media: Mapping[str, str] = field(default_factory=dict)
    collections: Mapping[str, CollectionField] = field(default_factory=dict)
    links: Mapping[str, Mapping[str, str]] = field(default_factory=dict)
    seo: SeoDefaults = SeoDefaults()

    def __post_init__(self) -> None:
        for name in ("fields", "plain", "media", "collections"):
            object.__setattr__(self, name, _frozen(getattr(self, name)))
        object.__setattr__(
            self, "links", _frozen({key: _frozen(value) for key, value in self.links.items()})
        )

    def keys(self) -> Iterator[str]:
        yield from self.fields
        yield from self.plain
        yield from self.media
        yield from self.collections
        yield from self.links

    def rich_keys(self) -> Tuple[str, ...]:
        return tuple(key for key, spec in self.fields.items() if spec.rich)


__all__ = [
    "CARD",
    "CONTACT_CARD",
    "CollectionField",
    "ContentSpecification",
    "DEFAULT_ICON",
    "ENTRY",
    "ItemShape",
    "POINT",
    "SECTION",
    "SHAPES",
    "SIDEBAR_CARD",
    "ScalarField",
    "SeoDefaults",
    "StaticItem",
    "TITLE",
    "UniformItem",
]
