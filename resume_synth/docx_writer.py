"""Word-processing (DOCX) renderer built on python-docx.

Consumes the same ``Layout`` as the PDF renderer. Two-region layouts become
a borderless 1x2 table with the sidebar cell shaded; single-column layouts
are written as a linear run of paragraphs.
"""
from __future__ import annotations

import logging
from io import BytesIO
from typing import Dict, List, Optional

from docx import Document  # type: ignore
from docx.enum.table import WD_TABLE_ALIGNMENT  # type: ignore
from docx.enum.text import WD_ALIGN_PARAGRAPH, WD_TAB_ALIGNMENT  # type: ignore
from docx.oxml import OxmlElement  # type: ignore
from docx.oxml.ns import qn  # type: ignore
from docx.shared import Pt, RGBColor  # type: ignore

from .layout.blocks import BULLET, FULL, MAIN, RULE, SIDEBAR, Fill, Layout, LayoutBlock
from .styles import docx_font, hex_fill, parse_hex_color

LOG = logging.getLogger(__name__)

ALIGNMENTS = {
    "left": WD_ALIGN_PARAGRAPH.LEFT,
    "center": WD_ALIGN_PARAGRAPH.CENTER,
    "right": WD_ALIGN_PARAGRAPH.RIGHT,
}


# -------------------------------------------------------------------------
# Paragraph and cell styling helpers
# -------------------------------------------------------------------------

def _tight_paragraph(p, before_pt: float = 0, after_pt: float = 0) -> None:
    """Set paragraph spacing in points with single line spacing."""
    pf = p.paragraph_format
    pf.space_before = Pt(before_pt)
    pf.space_after = Pt(after_pt)
    pf.line_spacing = 1.0


def _apply_paragraph_shading(p, hex_color: str) -> None:
    """Shade a paragraph background."""
    pPr = p._p.get_or_add_pPr()
    shd = OxmlElement('w:shd')
    shd.set(qn('w:val'), 'clear')
    shd.set(qn('w:color'), 'auto')
    shd.set(qn('w:fill'), hex_fill(hex_color))
    pPr.append(shd)


def _add_bottom_border(p, hex_color: str, weight: float = 0.5) -> None:
    """Draw a horizontal rule under a paragraph."""
    pPr = p._p.get_or_add_pPr()
    pBdr = OxmlElement('w:pBdr')
    bottom = OxmlElement('w:bottom')
    bottom.set(qn('w:val'), 'single')
    # Border size is in eighths of a point
    bottom.set(qn('w:sz'), str(max(2, int(round(weight * 8)))))
    bottom.set(qn('w:space'), '1')
    bottom.set(qn('w:color'), hex_fill(hex_color))
    pBdr.append(bottom)
    pPr.append(pBdr)


def _set_cell_shading(cell, hex_color: str) -> None:
    """Set background shading on a table cell."""
    if not parse_hex_color(hex_color):
        return
    tcPr = cell._tc.get_or_add_tcPr()
    shd = OxmlElement('w:shd')
    shd.set(qn('w:val'), 'clear')
    shd.set(qn('w:fill'), hex_fill(hex_color))
    tcPr.append(shd)


def _remove_cell_borders(cell) -> None:
    """Remove all borders from a table cell."""
    tcPr = cell._tc.get_or_add_tcPr()
    tcBorders = OxmlElement('w:tcBorders')
    for border_name in ['top', 'left', 'bottom', 'right']:
        border = OxmlElement(f'w:{border_name}')
        border.set(qn('w:val'), 'nil')
        tcBorders.append(border)
    tcPr.append(tcBorders)


def _color_run(run, hex_color: Optional[str]) -> None:
    rgb = parse_hex_color(hex_color)
    if rgb:
        run.font.color.rgb = RGBColor(*rgb)


# -------------------------------------------------------------------------
# Renderer
# -------------------------------------------------------------------------

class DocxRenderer:
    """Writes a ``Layout`` into a python-docx ``Document``."""

    def __init__(self, layout: Layout):
        self.layout = layout
        self.doc = None

    def render(self) -> bytes:
        self.doc = Document()
        self._apply_page_styles()
        self._set_document_metadata()
        self._render_bands()
        if SIDEBAR in self.layout.columns:
            self._render_columns()
        else:
            self._render_blocks(self.doc, self.layout.region_blocks(FULL), self.layout.columns[FULL].width)
        buf = BytesIO()
        self.doc.save(buf)
        LOG.debug("DOCX layout %s: %d block(s)", self.layout.template, len(self.layout))
        return buf.getvalue()

    # -------------------------------------------------------------------------
    # Page setup and metadata
    # -------------------------------------------------------------------------

    def _apply_page_styles(self) -> None:
        g = self.layout.geometry
        sec = self.doc.sections[0]
        sec.page_width = Pt(g.width)
        sec.page_height = Pt(g.height)
        sec.top_margin = Pt(g.top)
        sec.bottom_margin = Pt(g.bottom)
        sec.left_margin = Pt(g.left)
        sec.right_margin = Pt(g.right)

        normal = self.doc.styles["Normal"]
        normal.font.name = docx_font(self.layout.font_family)
        normal.font.size = Pt(self.layout.size("body"))
        _color_run(normal, self.layout.color("body"))

    def _set_document_metadata(self) -> None:
        cp = self.doc.core_properties
        cp.title = self.layout.title or "Resume"
        cp.subject = "Resume"
        if self.layout.author:
            cp.author = self.layout.author

    def _render_bands(self) -> None:
        """Full-width first-page fills become a shaded strip above the content."""
        g = self.layout.geometry
        for fill in self.layout.fills:
            if fill.every_page or fill.width < g.width:
                continue
            color = self.layout.color(fill.color)
            if not color:
                continue
            p = self.doc.add_paragraph()
            run = p.add_run(" ")
            run.font.size = Pt(max(1.0, min(fill.height, 12.0)))
            _apply_paragraph_shading(p, color)
            _tight_paragraph(p, after_pt=6)

    def _sidebar_fill(self) -> Optional[Fill]:
        for fill in self.layout.fills:
            if fill.every_page:
                return fill
        return None

    # -------------------------------------------------------------------------
    # Two-region layouts
    # -------------------------------------------------------------------------

    def _render_columns(self) -> None:
        cols = self.layout.columns
        content = self.layout.geometry.content_width
        total = cols[SIDEBAR].width + cols[MAIN].width
        sidebar_width = content * cols[SIDEBAR].width / total
        main_width = content - sidebar_width

        head = self.layout.region_blocks(FULL)
        if head:
            self._render_blocks(self.doc, head, content)

        table = self.doc.add_table(rows=1, cols=2)
        table.alignment = WD_TABLE_ALIGNMENT.CENTER
        table.autofit = False
        table.columns[0].width = Pt(sidebar_width)
        table.columns[1].width = Pt(main_width)

        sidebar_cell = table.rows[0].cells[0]
        main_cell = table.rows[0].cells[1]
        sidebar_cell.width = Pt(sidebar_width)
        main_cell.width = Pt(main_width)
        _remove_cell_borders(sidebar_cell)
        _remove_cell_borders(main_cell)

        fill = self._sidebar_fill()
        if fill:
            color = self.layout.color(fill.color)
            if color:
                _set_cell_shading(sidebar_cell, color)

        self._render_blocks(sidebar_cell, self.layout.region_blocks(SIDEBAR), sidebar_width)
        self._render_blocks(main_cell, self.layout.region_blocks(MAIN), main_width)

    # -------------------------------------------------------------------------
    # Blocks
    # -------------------------------------------------------------------------

    def _render_blocks(self, container, blocks, width: float) -> None:
        """Write blocks into a document or table cell.

        A fresh table cell already holds one empty paragraph; it is reused
        for the first block so the cell does not start with a blank line.
        """
        reuse = None
        paragraphs = getattr(container, "paragraphs", [])
        if container is not self.doc and paragraphs and not paragraphs[0].text:
            reuse = paragraphs[0]

        last = None
        for block in blocks:
            if block.kind == RULE:
                if last is not None:
                    _add_bottom_border(last, self.layout.color(block.color), block.weight)
                    last.paragraph_format.space_after = Pt(4)
                continue
            if reuse is not None:
                p, reuse = reuse, None
            else:
                p = container.add_paragraph()
            self._fill_paragraph(p, block, width)
            last = p

    def _run(self, p, text: str, block: LayoutBlock, color_role: str, bold: Optional[bool] = None,
             italic: Optional[bool] = None):
        run = p.add_run(text)
        run.bold = block.bold if bold is None else bold
        run.italic = block.italic if italic is None else italic
        run.font.size = Pt(self.layout.size(block.size_class))
        run.font.name = docx_font(self.layout.font_family)
        _color_run(run, self.layout.color(color_role))
        return run

    def _fill_paragraph(self, p, block: LayoutBlock, width: float) -> None:
        pf = p.paragraph_format
        p.alignment = ALIGNMENTS.get(block.align, WD_ALIGN_PARAGRAPH.LEFT)
        _tight_paragraph(p, before_pt=block.space_before, after_pt=1)
        if block.keep_with_next:
            pf.keep_with_next = True

        if block.kind == BULLET:
            hang = 10.0
            pf.left_indent = Pt(block.indent + hang)
            pf.first_line_indent = Pt(-hang)
            self._run(p, f"{self.layout.bullet_glyph} ", block, block.color, bold=False, italic=False)
        elif block.indent:
            pf.left_indent = Pt(block.indent)

        if block.label:
            self._run(p, block.label, block, block.color, bold=True)
        if block.text:
            self._run(p, block.text, block, block.color)
        if block.detail:
            detail_italic = block.detail_italic or block.italic
            if block.detail_align == "right":
                pf.tab_stops.add_tab_stop(Pt(width), WD_TAB_ALIGNMENT.RIGHT)
                self._run(p, "\t" + block.detail, block, block.detail_color, italic=detail_italic)
            else:
                self._run(p, block.detail, block, block.detail_color, italic=detail_italic)


def render_docx(layout: Layout) -> bytes:
    return DocxRenderer(layout).render()


def paragraph_texts(content: bytes) -> List[str]:
    """Visible paragraph text of a DOCX, body and table cells in document order."""
    doc = Document(BytesIO(content))
    out: List[str] = [p.text for p in doc.paragraphs]
    for table in doc.tables:
        seen: Dict[int, bool] = {}
        for row in table.rows:
            for cell in row.cells:
                if id(cell._tc) in seen:
                    continue
                seen[id(cell._tc)] = True
                out.extend(p.text for p in cell.paragraphs)
    return [t for t in out if t]
