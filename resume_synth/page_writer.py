"""Cursor and pagination for page-description output.

``PageWriter`` keeps one cursor per layout region. Each region flows down
its own column and onto new pages independently, so a long main column does
not drag the sidebar along. Drawing is recorded as operations per page and
painted later; every page starts with the layout's persistent fills.

All coordinates are points measured from the top-left of the page.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence, Tuple, Union

from .layout.blocks import Fill, Layout
from .styles import line_height

LOG = logging.getLogger(__name__)

Measure = Callable[[str, str, float], float]


@dataclass(frozen=True)
class Segment:
    text: str
    font: str
    color: str


@dataclass(frozen=True)
class TextOp:
    x: float
    baseline: float
    text: str
    font: str
    size: float
    color: str


@dataclass(frozen=True)
class RectOp:
    x: float
    y: float
    width: float
    height: float
    color: str


@dataclass(frozen=True)
class LineOp:
    x1: float
    x2: float
    y: float
    weight: float
    color: str


DrawOp = Union[TextOp, RectOp, LineOp]


class PageWriter:
    """Positions lines for every region of a ``Layout`` across pages."""

    def __init__(self, layout: Layout, measure: Measure):
        self.layout = layout
        self.geometry = layout.geometry
        self.measure = measure
        self.pages: List[List[DrawOp]] = []
        self.cursors: Dict[str, Tuple[int, float]] = {}
        self._ensure_page(0)
        for region in layout.columns:
            self.cursors[region] = (0, layout.top_on_page(region, 0))

    # -------------------------------------------------------------------------
    # Pages and cursors
    # -------------------------------------------------------------------------

    @property
    def bottom(self) -> float:
        return self.geometry.height - self.geometry.bottom

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def _ensure_page(self, index: int) -> None:
        while len(self.pages) <= index:
            ops: List[DrawOp] = []
            self.pages.append(ops)
            for fill in self.layout.fills:
                if fill.every_page or len(self.pages) == 1:
                    self.fill_band(len(self.pages) - 1, fill)

    def fill_band(self, page_index: int, fill: Fill) -> None:
        color = self.layout.color(fill.color)
        if color:
            self.pages[page_index].append(RectOp(fill.x, fill.y, fill.width, fill.height, color))

    def position(self, region: str) -> Tuple[int, float]:
        return self.cursors[region]

    def at_top(self, region: str) -> bool:
        page, y = self.cursors[region]
        return y <= self.layout.top_on_page(region, page)

    def advance(self, region: str, dy: float) -> None:
        page, y = self.cursors[region]
        self.cursors[region] = (page, y + dy)

    def space(self, region: str, amount: float) -> None:
        """Vertical gap, dropped at the top of a page."""
        if amount > 0 and not self.at_top(region):
            self.advance(region, amount)

    def new_page_if_needed(self, region: str, height: float) -> bool:
        """Move the region to the next page when ``height`` does not fit."""
        page, y = self.cursors[region]
        if y + height <= self.bottom or self.at_top(region):
            return False
        page += 1
        self._ensure_page(page)
        self.cursors[region] = (page, self.layout.top_on_page(region, page))
        LOG.debug("Page break in %s region -> page %d", region, page + 1)
        return True

    # -------------------------------------------------------------------------
    # Drawing
    # -------------------------------------------------------------------------

    def segments_width(self, segments: Sequence[Segment], size: float) -> float:
        return sum(self.measure(s.text, s.font, size) for s in segments)

    def write_line(
        self,
        region: str,
        segments: Sequence[Segment],
        size: float,
        x_offset: float = 0.0,
        align: str = "left",
        right: Sequence[Segment] = (),
    ) -> None:
        """Draw one line at the region cursor and move the cursor down."""
        height = line_height(size)
        self.new_page_if_needed(region, height)
        page, y = self.cursors[region]
        column = self.layout.columns[region]
        baseline = y + size
        x = column.x + x_offset
        if align == "center":
            x = column.x + (column.width - self.segments_width(segments, size)) / 2.0
        elif align == "right":
            x = column.x + column.width - self.segments_width(segments, size)
        ops = self.pages[page]
        for seg in segments:
            if seg.text:
                ops.append(TextOp(x, baseline, seg.text, seg.font, size, seg.color))
            x += self.measure(seg.text, seg.font, size)
        if right:
            rx = column.x + column.width - self.segments_width(right, size)
            for seg in right:
                ops.append(TextOp(rx, baseline, seg.text, seg.font, size, seg.color))
                rx += self.measure(seg.text, seg.font, size)
        self.advance(region, height)

    def write_heading(self, region: str, text: str, font: str, size: float, color: str,
                      align: str = "left") -> None:
        self.write_line(region, [Segment(text, font, color)], size, align=align)

    def write_glyph(self, region: str, glyph: str, font: str, size: float, color: str,
                    x_offset: float = 0.0) -> None:
        """Draw a glyph on the line the cursor is about to write, without advancing."""
        page, y = self.cursors[region]
        column = self.layout.columns[region]
        self.pages[page].append(TextOp(column.x + x_offset, y + size, glyph, font, size, color))

    def write_rule(self, region: str, color: str, weight: float = 0.5, gap: float = 2.0) -> None:
        height = gap * 2 + weight
        self.new_page_if_needed(region, height)
        page, y = self.cursors[region]
        column = self.layout.columns[region]
        rule_y = y + gap
        self.pages[page].append(LineOp(column.x, column.x + column.width, rule_y, weight, color))
        self.advance(region, height)
