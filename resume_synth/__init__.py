"""Deterministic resume and cover letter synthesis to PDF and DOCX.

Entry points:
    build_from_text / build_from_form  -> ResumeStructure
    synthesize                         -> RenderedDocument (bytes + filename)
    synthesize_cover_letter            -> RenderedDocument
"""

__version__ = "0.1.0"

from .builder import FormData, StructureBuilder, build_from_form, build_from_text  # noqa: E402
from .engine import (  # noqa: E402
    RenderedDocument,
    document_filename,
    synthesize,
    synthesize_cover_letter,
    synthesize_from_form,
    synthesize_from_text,
)
from .errors import ConfigError, EmptyDocumentError, RenderFailure, SynthesisError  # noqa: E402
from .model import Contact, EducationEntry, ExperienceEntry, ResumeStructure, Skills  # noqa: E402

__all__ = [
    "__version__",
    "Contact",
    "ConfigError",
    "EducationEntry",
    "EmptyDocumentError",
    "ExperienceEntry",
    "FormData",
    "RenderFailure",
    "RenderedDocument",
    "ResumeStructure",
    "Skills",
    "StructureBuilder",
    "SynthesisError",
    "build_from_form",
    "build_from_text",
    "document_filename",
    "synthesize",
    "synthesize_cover_letter",
    "synthesize_from_form",
    "synthesize_from_text",
]
