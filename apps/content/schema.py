# apps/content/schema.py
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, model_validator

ShapeName = Literal["card", "point", "entry", "section", "title", "contact_card", "sidebar_card"]


class BilingualText(BaseModel):
    model_config = ConfigDict(extra="forbid")

    ar: str = ""
    en: str = ""


class ScalarFieldConfig(BilingualText):
    # rich fields go through the rich content normalizer when rendered
    rich: bool = False


class CollectionConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    shape: ShapeName = "card"
    items: List[Dict[str, Any]] = []

    @model_validator(mode="after")
    def _check_item_keys(self) -> "CollectionConfig":
        from .specs import SHAPES

        shape = SHAPES[self.shape]
        allowed = {"icon"} | set(shape.field_names) | set(shape.child_names)
        for idx, item in enumerate(self.items):
            unknown = set(item) - allowed
            if unknown:
                raise ValueError(
                    f"items[{idx}]: unexpected keys {sorted(unknown)} for shape '{self.shape}'"
                )
        return self


class SeoConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    meta_title: BilingualText = BilingualText()
    meta_description: BilingualText = BilingualText()
    keywords: BilingualText = BilingualText()


class PageConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    page: str
    db_title: Optional[str] = None
    fields: Dict[str, ScalarFieldConfig] = {}
    plain: Dict[str, str] = {}
    media: Dict[str, str] = {}
    collections: Dict[str, CollectionConfig] = {}
    # ordered name -> URL maps (social links)
    links: Dict[str, Dict[str, str]] = {}
    seo: SeoConfig = SeoConfig()

    @model_validator(mode="after")
    def _check_unique_keys(self) -> "PageConfig":
        seen: Dict[str, str] = {}
        for section in ("fields", "plain", "media", "collections", "links"):
            for key in getattr(self, section):
                if key in seen:
                    raise ValueError(f"key '{key}' declared in both {seen[key]} and {section}")
                seen[key] = section
        return self
