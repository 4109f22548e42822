"""Layout blocks: the contract between template strategies and renderers.

A strategy turns a ``ResumeStructure`` into a ``Layout``; both the PDF and
the DOCX renderer consume nothing else. Colors are palette roles (accent,
body, muted, light), sizes are size classes, positions are regions.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, Tuple

from ..render_config import PageGeometry, Palette

HEADING = "heading"
BODY = "body"
BULLET = "bullet"
RULE = "rule"

SIDEBAR = "sidebar"
MAIN = "main"
FULL = "full"


@dataclass(frozen=True)
class LayoutBlock:
    kind: str
    text: str = ""
    region: str = MAIN
    emphasis: str = "normal"
    size_class: str = "body"
    color: str = "body"
    italic: bool = False
    align: str = "left"
    label: str = ""
    detail: str = ""
    detail_align: str = "inline"
    detail_color: str = "muted"
    detail_italic: bool = False
    indent: float = 0.0
    space_before: float = 0.0
    keep_with_next: bool = False
    weight: float = 0.5
    section: str = ""

    @property
    def bold(self) -> bool:
        return self.emphasis == "bold"


@dataclass(frozen=True)
class Column:
    """Horizontal slot of a region; ``top`` is where its cursor starts on page one."""

    x: float
    width: float
    top: float


@dataclass(frozen=True)
class Fill:
    """Rectangle painted behind the text, measured from the page top-left."""

    x: float
    y: float
    width: float
    height: float
    color: str = "light"
    every_page: bool = True


@dataclass(frozen=True)
class Layout:
    blocks: Tuple[LayoutBlock, ...]
    columns: Dict[str, Column]
    sizes: Dict[str, float]
    palette: Palette
    geometry: PageGeometry
    font_family: str = "sans"
    bullet_glyph: str = "•"
    fills: Tuple[Fill, ...] = ()
    title: str = ""
    author: str = ""
    template: str = ""
    ascii_only: bool = False
    continuation_top: Dict[str, float] = field(default_factory=dict)

    def __iter__(self) -> Iterator[LayoutBlock]:
        return iter(self.blocks)

    def __len__(self) -> int:
        return len(self.blocks)

    def size(self, size_class: str) -> float:
        return self.sizes.get(size_class, self.sizes.get("body", 10.0))

    def color(self, role: str) -> str:
        return self.palette.resolve(role)

    def region_blocks(self, region: str) -> Tuple[LayoutBlock, ...]:
        return tuple(b for b in self.blocks if b.region == region)

    def top_on_page(self, region: str, page_index: int) -> float:
        """Cursor start for a region; later pages may start higher than page one."""
        if page_index > 0 and region in self.continuation_top:
            return self.continuation_top[region]
        return self.columns[region].top

    def texts(self) -> Tuple[str, ...]:
        """All visible strings in reading order, for tests and previews."""
        out = []
        for b in self.blocks:
            for part in (b.label, b.text, b.detail):
                if part:
                    out.append(part)
        return tuple(out)
