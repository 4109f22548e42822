"""Page-description (PDF) renderer built on the reportlab canvas.

Text is measured with ``pdfmetrics.stringWidth`` and wrapped by hand so the
same ``Layout`` drives every page break decision. Output is byte-for-byte
deterministic for identical input.
"""
from __future__ import annotations

import logging
from io import BytesIO
from typing import List, Optional, Sequence, Tuple

from reportlab.lib.colors import HexColor
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from .layout.blocks import BULLET, RULE, Layout, LayoutBlock
from .page_writer import LineOp, PageWriter, RectOp, Segment, TextOp
from .styles import line_height, pdf_font, pdf_safe

LOG = logging.getLogger(__name__)

BULLET_GAP = 4.0
DETAIL_GAP = 12.0


def measure(text: str, font: str, size: float) -> float:
    return pdfmetrics.stringWidth(text, font, size)


# -----------------------------------------------------------------------------
# Wrapping
# -----------------------------------------------------------------------------


def _break_word(word: str, font: str, size: float, width: float) -> List[str]:
    """Hard-break a token that is wider than the column."""
    parts: List[str] = []
    current = ""
    for ch in word:
        if current and measure(current + ch, font, size) > width:
            parts.append(current)
            current = ch
        else:
            current += ch
    if current:
        parts.append(current)
    return parts


def wrap_segments(runs: Sequence[Segment], size: float, width: float) -> List[List[Segment]]:
    """Greedy word wrap over runs that may differ in font and color."""
    words: List[Tuple[str, Segment, bool]] = []
    prev_trailing_space = False
    for run in runs:
        tokens = run.text.split()
        for j, tok in enumerate(tokens):
            spaced = bool(words) and (j > 0 or run.text[:1].isspace() or prev_trailing_space)
            for k, piece in enumerate(_break_word(tok, run.font, size, width)):
                words.append((piece, run, spaced and k == 0))
        if run.text:
            prev_trailing_space = run.text[-1:].isspace()

    lines: List[List[Segment]] = []
    line: List[Segment] = []
    used = 0.0
    for text, run, spaced in words:
        piece = (" " + text) if spaced and line else text
        w = measure(piece, run.font, size)
        if line and used + w > width:
            lines.append(line)
            line, used = [], 0.0
            piece = text
            w = measure(piece, run.font, size)
        if line and line[-1].font == run.font and line[-1].color == run.color:
            line[-1] = Segment(line[-1].text + piece, run.font, run.color)
        else:
            line.append(Segment(piece, run.font, run.color))
        used += w
    if line:
        lines.append(line)
    return lines


# -----------------------------------------------------------------------------
# Renderer
# -----------------------------------------------------------------------------


class PdfRenderer:
    """Places layout blocks through a ``PageWriter`` and paints a reportlab canvas."""

    def __init__(self, layout: Layout, compress: bool = False):
        self.layout = layout
        self.compress = compress

    def _font(self, block: LayoutBlock, bold: Optional[bool] = None, italic: Optional[bool] = None) -> str:
        return pdf_font(
            self.layout.font_family,
            block.bold if bold is None else bold,
            block.italic if italic is None else italic,
        )

    def _runs(self, block: LayoutBlock) -> Tuple[List[Segment], List[Segment]]:
        """Wrapped runs and the right-aligned runs of a block."""
        color = self.layout.color(block.color)
        runs: List[Segment] = []
        if block.label:
            runs.append(Segment(pdf_safe(block.label), self._font(block, bold=True), color))
        if block.text:
            runs.append(Segment(pdf_safe(block.text), self._font(block), color))
        right: List[Segment] = []
        if block.detail:
            detail = Segment(
                pdf_safe(block.detail),
                self._font(block, italic=block.detail_italic or block.italic),
                self.layout.color(block.detail_color),
            )
            if block.detail_align == "right":
                right.append(detail)
            else:
                runs.append(detail)
        return runs, right

    def _text_width(self, block: LayoutBlock, right: Sequence[Segment]) -> float:
        column = self.layout.columns[block.region]
        size = self.layout.size(block.size_class)
        width = column.width - block.indent
        if block.kind == BULLET:
            width -= BULLET_GAP
        if right:
            width -= sum(measure(s.text, s.font, size) for s in right) + DETAIL_GAP
        return max(width, size * 2)

    def _first_line_height(self, block: LayoutBlock) -> float:
        if block.kind == RULE:
            return 4.0 + block.weight
        return block.space_before + line_height(self.layout.size(block.size_class))

    def _follow_height(self, blocks: Sequence[LayoutBlock], index: int) -> float:
        """Height that must stay on the page after a keep-with-next block."""
        region = blocks[index].region
        total = 0.0
        for block in blocks[index + 1:]:
            if block.region != region:
                continue
            total += self._first_line_height(block)
            if block.kind != RULE:
                break
        return total

    def _place(self, writer: PageWriter, block: LayoutBlock, follow: float) -> None:
        region = block.region
        if block.kind == RULE:
            writer.write_rule(region, self.layout.color(block.color), block.weight)
            return

        size = self.layout.size(block.size_class)
        runs, right = self._runs(block)
        lines = wrap_segments(runs, size, self._text_width(block, right))
        if not lines:
            return

        needed = block.space_before + line_height(size) * (len(lines) if block.keep_with_next else 1)
        if block.keep_with_next:
            needed += follow
        if not writer.new_page_if_needed(region, needed):
            writer.space(region, block.space_before)

        offset = block.indent
        if block.kind == BULLET:
            writer.new_page_if_needed(region, line_height(size))
            glyph = pdf_safe(self.layout.bullet_glyph)
            writer.write_glyph(region, glyph, self._font(block, bold=False, italic=False), size,
                               self.layout.color(block.color), x_offset=max(0.0, block.indent - 8.0))
            offset = block.indent + BULLET_GAP
        for i, line in enumerate(lines):
            writer.write_line(
                region,
                line,
                size,
                x_offset=offset,
                align=block.align,
                right=right if i == 0 else (),
            )

    def _paint(self, writer: PageWriter, pdf: canvas.Canvas) -> None:
        height = self.layout.geometry.height
        for ops in writer.pages:
            for op in ops:
                if isinstance(op, RectOp):
                    pdf.setFillColor(HexColor(op.color))
                    pdf.rect(op.x, height - op.y - op.height, op.width, op.height, stroke=0, fill=1)
                elif isinstance(op, LineOp):
                    pdf.setStrokeColor(HexColor(op.color))
                    pdf.setLineWidth(op.weight)
                    pdf.line(op.x1, height - op.y, op.x2, height - op.y)
                elif isinstance(op, TextOp):
                    pdf.setFillColor(HexColor(op.color))
                    pdf.setFont(op.font, op.size)
                    pdf.drawString(op.x, height - op.baseline, op.text)
            pdf.showPage()

    def render(self) -> bytes:
        geometry = self.layout.geometry
        buf = BytesIO()
        pdf = canvas.Canvas(
            buf,
            pagesize=(geometry.width, geometry.height),
            invariant=1,
            pageCompression=1 if self.compress else 0,
        )
        pdf.setTitle(pdf_safe(self.layout.title))
        pdf.setAuthor(pdf_safe(self.layout.author))
        pdf.setSubject("Resume")
        pdf.setCreator("resume_synth")

        writer = PageWriter(self.layout, measure)
        blocks = list(self.layout)
        for i, block in enumerate(blocks):
            follow = self._follow_height(blocks, i) if block.keep_with_next else 0.0
            self._place(writer, block, follow)
        LOG.debug("PDF layout %s: %d page(s)", self.layout.template, writer.page_count)
        self._paint(writer, pdf)
        pdf.save()
        return buf.getvalue()


def render_pdf(layout: Layout, compress: bool = False) -> bytes:
    return PdfRenderer(layout, compress=compress).render()
