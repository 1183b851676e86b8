from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml
from django.conf import settings
from pydantic import ValidationError

from apps.i18n.values import BilingualValue

from .schema import CollectionConfig, PageConfig
from .specs import (
    SHAPES,
    CollectionField,
    ContentSpecification,
    ItemShape,
    ScalarField,
    SeoDefaults,
    StaticItem,
)

log = logging.getLogger("content.catalog")

_SpecFingerprint = Tuple[float, int]

_spec_cache: Dict[str, Tuple[_SpecFingerprint, ContentSpecification]] = {}


class SpecificationError(Exception):
    """A page content specification is missing or invalid."""


def _spec_dir() -> Path:
    configured = getattr(settings, "CONTENT_SPEC_DIR", None)
    if configured:
        return Path(configured)
    base_dir = Path(getattr(settings, "BASE_DIR", Path(__file__).resolve().parents[2]))
    return base_dir / "configs" / "content"


def _normalize_page(page: Optional[str]) -> str:
    return str(page or "").strip().lower()


def _spec_path(page: str) -> Path:
    return _spec_dir() / f"{page}.yml"


def _fingerprint(path: Path) -> Optional[_SpecFingerprint]:
    try:
        stat = path.stat()
    except FileNotFoundError:
        return None
    return (stat.st_mtime, stat.st_size)


def _bilingual(raw: Any) -> BilingualValue:
    if isinstance(raw, Mapping):
        return BilingualValue.from_mapping(raw)
    if isinstance(raw, str):
        return BilingualValue.same(raw)
    return BilingualValue()


def _static_item(raw: Mapping[str, Any], shape: ItemShape) -> StaticItem:
    values = tuple((name, _bilingual(raw.get(name))) for name in shape.field_names)
    children = tuple(
        (
            name,
            tuple(_static_item(child, child_shape) for child in (raw.get(name) or []) if isinstance(child, Mapping)),
        )
        for name, child_shape in shape.children
    )
    return StaticItem(icon=str(raw.get("icon") or ""), values=values, children=children)


def _collection(config: CollectionConfig) -> CollectionField:
    shape = SHAPES[config.shape]
    return CollectionField(shape=shape, items=tuple(_static_item(item, shape) for item in config.items))


def build_specification(config: PageConfig) -> ContentSpecification:
    return ContentSpecification(
        page=config.page,
        db_title=config.db_title or config.page,
        fields={
            key: ScalarField(default=BilingualValue(ar=field.ar, en=field.en), rich=field.rich)
            for key, field in config.fields.items()
        },
        plain=dict(config.plain),
        media=dict(config.media),
        collections={key: _collection(coll) for key, coll in config.collections.items()},
        links={key: dict(value) for key, value in config.links.items()},
        seo=SeoDefaults(
            meta_title=BilingualValue(ar=config.seo.meta_title.ar, en=config.seo.meta_title.en),
            meta_description=BilingualValue(
                ar=config.seo.meta_description.ar, en=config.seo.meta_description.en
            ),
            keywords=BilingualValue(ar=config.seo.keywords.ar, en=config.seo.keywords.en),
        ),
    )


def parse_specification(payload: Any, *, source: str = "<memory>") -> ContentSpecification:
    if not isinstance(payload, Mapping):
        raise SpecificationError(f"{source}: expected a mapping at top level, got {type(payload).__name__}")
    try:
        config = PageConfig.model_validate(dict(payload))
    except ValidationError as exc:
        raise SpecificationError(f"{source}: {exc}") from exc
    return build_specification(config)


def load_specification(page: str) -> ContentSpecification:
    """Load (and cache by file fingerprint) the static specification of ``page``."""
    normalized = _normalize_page(page)
    if not normalized:
        raise SpecificationError("empty page name")

    path = _spec_path(normalized)
    fingerprint = _fingerprint(path)
    if fingerprint is None:
        raise SpecificationError(f"no content specification for page '{normalized}' ({path})")

    cached = _spec_cache.get(normalized)
    if cached and cached[0] == fingerprint:
        return cached[1]

    try:
        payload = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise SpecificationError(f"{path}: invalid YAML ({exc})") from exc

    spec = parse_specification(payload, source=str(path))
    if spec.page != normalized:
        log.warning("Specification %s declares page=%s", path, spec.page)
    _spec_cache[normalized] = (fingerprint, spec)
    log.debug("Loaded content specification page=%s keys=%d", normalized, len(list(spec.keys())))
    return spec


def available_pages() -> List[str]:
    directory = _spec_dir()
    if not directory.exists():
        return []
    return sorted(path.stem for path in directory.glob("*.yml"))


def clear_cache() -> None:
    _spec_cache.clear()


__all__ = [
    "SpecificationError",
    "available_pages",
    "build_specification",
    "clear_cache",
    "load_specification",
    "parse_specification",
]
