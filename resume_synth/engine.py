"""Engine facade: structure in, document bytes out.

Dispatches a ``ResumeStructure`` through the template's layout strategy to
the requested renderer, names the file and wraps writer failures.

Examples:
    >>> from resume_synth.model import ResumeStructure
    >>> doc = synthesize(ResumeStructure(name="Jane Doe"), fmt="pdf")  # doctest: +SKIP
    >>> doc.filename  # doctest: +SKIP
    'Modern_Resume_2024-05-01.pdf'
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Dict, Optional

from .builder import build_from_form, build_from_text
from .cover_letter import cover_letter_layout
from .docx_writer import render_docx
from .errors import ConfigError, EmptyDocumentError, RenderFailure, SynthesisError
from .layout import Layout, get_strategy
from .model import ResumeStructure
from .pdf_writer import render_pdf
from .render_config import EngineSettings, PageGeometry, Template, TemplateConfig

LOG = logging.getLogger(__name__)

PDF = "pdf"
DOCX = "docx"
FORMATS = (PDF, DOCX)

MEDIA_TYPES: Dict[str, str] = {
    PDF: "application/pdf",
    DOCX: "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


@dataclass(frozen=True)
class RenderedDocument:
    content: bytes
    filename: str
    media_type: str
    fmt: str


def parse_format(fmt: Any) -> str:
    value = str(fmt or "").strip().lower().lstrip(".")
    if value not in FORMATS:
        raise ConfigError(f"Unknown format: {fmt!r}", hint="Use one of: " + ", ".join(FORMATS))
    return value


def document_filename(template: Any, fmt: str, today: Optional[date] = None, kind: str = "resume") -> str:
    """``<Template>_Resume_<date>.<ext>`` or ``Cover_Letter_<date>.<ext>``."""
    stamp = (today or date.today()).isoformat()
    fmt = parse_format(fmt)
    if kind == "cover_letter":
        return f"Cover_Letter_{stamp}.{fmt}"
    return f"{Template.parse(template).display_name}_Resume_{stamp}.{fmt}"


def _write(layout: Layout, fmt: str, settings: EngineSettings) -> bytes:
    writers: Dict[str, Callable[[], bytes]] = {
        PDF: lambda: render_pdf(layout, compress=settings.compress_pdf),
        DOCX: lambda: render_docx(layout),
    }
    try:
        content = writers[fmt]()
    except SynthesisError:
        raise
    except Exception as exc:
        raise RenderFailure(fmt, str(exc) or exc.__class__.__name__) from exc
    if not content:
        raise RenderFailure(fmt, "writer produced no output")
    return content


def synthesize(
    structure: ResumeStructure,
    template: Any = "modern",
    color: Any = "blue",
    fmt: Any = PDF,
    geometry: Optional[PageGeometry] = None,
    settings: Optional[EngineSettings] = None,
    today: Optional[date] = None,
) -> RenderedDocument:
    """Render a resume structure to PDF or DOCX bytes.

    Raises:
        ConfigError: unknown template, color or format.
        EmptyDocumentError: the structure has nothing to render.
        RenderFailure: the binary writer raised.
    """
    config = TemplateConfig.of(template, color)
    fmt = parse_format(fmt)
    settings = settings or EngineSettings()
    if structure.is_empty():
        raise EmptyDocumentError()

    geometry = geometry or settings.geometry(config.template)
    max_bullets = settings.modern_max_bullets if config.template is Template.MODERN else None
    layout = get_strategy(config.template, max_bullets=max_bullets).layout(structure, config, geometry)
    LOG.debug("Layout %s/%s: %d block(s)", config.template.value, config.color.value, len(layout))

    content = _write(layout, fmt, settings)
    return RenderedDocument(
        content=content,
        filename=document_filename(config.template, fmt, today),
        media_type=MEDIA_TYPES[fmt],
        fmt=fmt,
    )


def synthesize_from_text(text: str, template: Any = "modern", color: Any = "blue", fmt: Any = PDF,
                         **kwargs: Any) -> RenderedDocument:
    return synthesize(build_from_text(text), template=template, color=color, fmt=fmt, **kwargs)


def synthesize_from_form(
    form: Any,
    ai_prose: Optional[str] = None,
    template: Any = "modern",
    color: Any = "blue",
    fmt: Any = PDF,
    today: Optional[date] = None,
    **kwargs: Any,
) -> RenderedDocument:
    structure = build_from_form(form, ai_prose, today=today)
    return synthesize(structure, template=template, color=color, fmt=fmt, today=today, **kwargs)


def synthesize_cover_letter(
    text: str,
    template: Any = "modern",
    color: Any = "blue",
    fmt: Any = PDF,
    author: str = "",
    settings: Optional[EngineSettings] = None,
    today: Optional[date] = None,
) -> RenderedDocument:
    """Render cover letter prose; paragraphs are separated by blank lines."""
    config = TemplateConfig.of(template, color)
    fmt = parse_format(fmt)
    settings = settings or EngineSettings()
    layout = cover_letter_layout(text, config, settings.geometry(config.template), author=author)
    content = _write(layout, fmt, settings)
    return RenderedDocument(
        content=content,
        filename=document_filename(config.template, fmt, today, kind="cover_letter"),
        media_type=MEDIA_TYPES[fmt],
        fmt=fmt,
    )
