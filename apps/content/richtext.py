from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Literal, Optional, Tuple

from django.utils.html import format_html, format_html_join
from django.utils.safestring import SafeString, mark_safe

from .sanitizers import Sanitizer, get_sanitizer

log = logging.getLogger("content.richtext")

BlockKind = Literal["paragraph", "list", "spacer", "markup"]

_BULLET_RE = re.compile(r"^[-•*]\s+")
_BULLET_OUT = "- "


@dataclass(frozen=True, slots=True)
class RenderableBlock:
    kind: BlockKind
    text: str = ""
    items: Tuple[str, ...] = ()

    @classmethod
    def paragraph(cls, text: str) -> "RenderableBlock":
        return cls("paragraph", text=text)

    @classmethod
    def bullet_list(cls, items: Iterable[str]) -> "RenderableBlock":
        return cls("list", items=tuple(items))

    @classmethod
    def spacer(cls) -> "RenderableBlock":
        return cls("spacer")

    @classmethod
    def markup(cls, html: str) -> "RenderableBlock":
        return cls("markup", text=html)


SPACER = RenderableBlock.spacer()


def classify(raw: Optional[str]) -> Literal["markup", "text"]:
    """``markup`` when the trimmed content opens with a tag, ``text`` otherwise."""
    if isinstance(raw, str) and raw.strip().startswith("<"):
        return "markup"
    return "text"


def segment_text(raw: str) -> List[RenderableBlock]:
    """Split plain text into paragraphs, bullet lists and spacers, line by line."""
    blocks: List[RenderableBlock] = []
    pending: List[str] = []

    def flush() -> None:
        if pending:
            blocks.append(RenderableBlock.bullet_list(pending))
            pending.clear()

    for line in raw.split("\n"):
        stripped = line.strip()
        match = _BULLET_RE.match(stripped)
        if match:
            pending.append(stripped[match.end():])
            continue
        flush()
        if stripped:
            blocks.append(RenderableBlock.paragraph(stripped))
        else:
            blocks.append(SPACER)

    flush()
    return blocks


def normalize(raw: Optional[str], sanitizer: Optional[Sanitizer] = None) -> List[RenderableBlock]:
    """Turn a CMS/default content string into an ordered list of blocks.

    Markup is passed through as one ``markup`` block after ``sanitizer``
    (``settings.CONTENT_MARKUP_SANITIZER`` when not given). Plain text is
    segmented by :func:`segment_text`. The same input always yields the same
    blocks.
    """
    if not isinstance(raw, str) or not raw:
        return []
    if classify(raw) == "markup":
        clean = (sanitizer or get_sanitizer())(raw)
        return [RenderableBlock.markup(clean)]
    return segment_text(raw)


def normalize_to_string(blocks: Iterable[RenderableBlock]) -> str:
    lines: List[str] = []
    for block in blocks:
        if block.kind == "paragraph":
            lines.append(block.text)
        elif block.kind == "list":
            lines.extend(f"{_BULLET_OUT}{item}" for item in block.items)
        elif block.kind == "spacer":
            lines.append("")
        else:
            lines.append(block.text)
    return "\n".join(lines)


def render_blocks(blocks: Iterable[RenderableBlock], *, list_class: str = "rich-list") -> SafeString:
    parts: List[str] = []
    for block in blocks:
        if block.kind == "markup":
            # already sanitised by normalize()
            parts.append(mark_safe(block.text))
        elif block.kind == "paragraph":
            parts.append(format_html("<p>{}</p>", block.text))
        elif block.kind == "list":
            parts.append(
                format_html(
                    '<ul class="{}">{}</ul>',
                    list_class,
                    format_html_join("", "<li>{}</li>", ((item,) for item in block.items)),
                )
            )
        elif block.kind == "spacer":
            parts.append(mark_safe('<div class="rich-spacer"></div>'))
        else:  # pragma: no cover - closed set of kinds
            log.warning("Unknown block kind %s skipped", block.kind)
    return mark_safe("".join(parts))


def render_rich(raw: Optional[str], sanitizer: Optional[Sanitizer] = None) -> SafeString:
    return render_blocks(normalize(raw, sanitizer=sanitizer))


__all__ = [
    "RenderableBlock",
    "SPACER",
    "classify",
    "normalize",
    "normalize_to_string",
    "render_blocks",
    "render_rich",
    "segment_text",
]
