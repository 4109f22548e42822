"""Cover letter layouts.

A cover letter is plain prose: paragraphs separated by blank lines. It is
laid out in a single column with the template's font family and rendered by
the same PDF and DOCX writers as a resume.
"""
from __future__ import annotations

import logging
import re
from typing import List, Optional

from .errors import EmptyDocumentError
from .layout.blocks import BODY, FULL, Column, Fill, Layout, LayoutBlock
from .normalizer import ascii_safe, clean_markdown
from .render_config import MM, PageGeometry, Template, TemplateConfig

LOG = logging.getLogger(__name__)

ACCENT_BAND = 4 * MM
PARAGRAPH_GAP = 8.0

SIZES = {"body": 11.0, "small": 10.0}

_BLANK_LINES_RE = re.compile(r"\n\s*\n")


def split_paragraphs(text: str) -> List[str]:
    """Paragraphs of ``text``; lines inside a paragraph are joined with spaces."""
    out = []
    for chunk in _BLANK_LINES_RE.split((text or "").replace("\r\n", "\n")):
        para = " ".join(line.strip() for line in chunk.splitlines() if line.strip())
        para = clean_markdown(para)
        if para:
            out.append(para)
    return out


def cover_letter_layout(
    text: str,
    config: TemplateConfig,
    geometry: Optional[PageGeometry] = None,
    author: str = "",
) -> Layout:
    paragraphs = split_paragraphs(text)
    if not paragraphs:
        raise EmptyDocumentError("Cover letter has no content to render")

    template = config.template
    geometry = geometry or PageGeometry.for_template(template)
    ascii_only = template is Template.ATS
    blocks = tuple(
        LayoutBlock(
            BODY,
            text=ascii_safe(p) if ascii_only else p,
            region=FULL,
            space_before=0.0 if i == 0 else PARAGRAPH_GAP,
        )
        for i, p in enumerate(paragraphs)
    )

    fills = ()
    top = geometry.top
    if template is Template.MODERN:
        fills = (Fill(0.0, 0.0, geometry.width, ACCENT_BAND, color="accent", every_page=False),)
        top = max(top, ACCENT_BAND + 6 * MM)

    LOG.debug("Cover letter: %d paragraph(s), template %s", len(blocks), template.value)
    return Layout(
        blocks=blocks,
        columns={FULL: Column(x=geometry.left, width=geometry.content_width, top=top)},
        sizes=dict(SIZES),
        palette=config.palette(),
        geometry=geometry,
        font_family="serif" if template is Template.TRADITIONAL else "sans",
        bullet_glyph="-" if ascii_only else "•",
        fills=fills,
        title=f"{author} - Cover Letter" if author else "Cover Letter",
        author=author,
        template=template.value,
        ascii_only=ascii_only,
        continuation_top={FULL: geometry.top},
    )
