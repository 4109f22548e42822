"""Tests for resume_synth/engine.py."""

from __future__ import annotations

import unittest
from datetime import date
from unittest.mock import patch

from resume_synth.docx_writer import paragraph_texts
from resume_synth.engine import (
    MEDIA_TYPES,
    document_filename,
    parse_format,
    synthesize,
    synthesize_from_form,
    synthesize_from_text,
)
from resume_synth.errors import ConfigError, EmptyDocumentError, RenderFailure
from resume_synth.model import ResumeStructure
from resume_synth.render_config import COLOR_PRESETS, ColorPreset, EngineSettings

from tests.resume_synth_tests.fixtures import (
    SAMPLE_AI_PROSE,
    SAMPLE_RESUME_TEXT,
    docx_document,
    make_form,
    make_job,
    make_structure,
    pdf_char_colors,
    pdf_text,
)

TODAY = date(2024, 5, 1)


class TestFilenames(unittest.TestCase):
    def test_resume_names(self):
        self.assertEqual(document_filename("modern", "pdf", TODAY), "Modern_Resume_2024-05-01.pdf")
        self.assertEqual(document_filename("ats", "DOCX", TODAY), "ATS_Resume_2024-05-01.docx")
        self.assertEqual(document_filename("traditional", ".pdf", TODAY), "Traditional_Resume_2024-05-01.pdf")

    def test_cover_letter_name(self):
        self.assertEqual(
            document_filename("modern", "docx", TODAY, kind="cover_letter"),
            "Cover_Letter_2024-05-01.docx",
        )

    def test_parse_format(self):
        self.assertEqual(parse_format(" PDF "), "pdf")
        with self.assertRaises(ConfigError):
            parse_format("odt")


class TestSynthesize(unittest.TestCase):
    def test_pdf(self):
        doc = synthesize(make_structure(), "modern", "blue", "pdf", today=TODAY)
        self.assertEqual(doc.filename, "Modern_Resume_2024-05-01.pdf")
        self.assertEqual(doc.media_type, "application/pdf")
        self.assertEqual(doc.fmt, "pdf")
        self.assertTrue(doc.content.startswith(b"%PDF"))

    def test_docx(self):
        doc = synthesize(make_structure(), "ats", "blue", "docx", today=TODAY)
        self.assertEqual(doc.filename, "ATS_Resume_2024-05-01.docx")
        self.assertEqual(doc.media_type, MEDIA_TYPES["docx"])
        self.assertTrue(doc.content.startswith(b"PK"))

    def test_empty_structure(self):
        for fmt in ("pdf", "docx"):
            with self.subTest(fmt=fmt):
                with self.assertRaises(EmptyDocumentError):
                    synthesize(ResumeStructure(), fmt=fmt)

    def test_unknown_options(self):
        with self.assertRaises(ConfigError):
            synthesize(make_structure(), template="fancy")
        with self.assertRaises(ConfigError):
            synthesize(make_structure(), color="magenta")
        with self.assertRaises(ConfigError):
            synthesize(make_structure(), fmt="odt")

    def test_config_checked_before_emptiness(self):
        with self.assertRaises(ConfigError):
            synthesize(ResumeStructure(), template="fancy")

    def test_writer_failure_is_wrapped(self):
        with patch("resume_synth.engine.render_pdf", side_effect=ValueError("boom")):
            with self.assertRaises(RenderFailure) as ctx:
                synthesize(make_structure(), fmt="pdf")
        self.assertEqual(ctx.exception.format, "pdf")
        self.assertIn("boom", str(ctx.exception))
        self.assertIsInstance(ctx.exception.__cause__, ValueError)

    def test_empty_writer_output(self):
        with patch("resume_synth.engine.render_docx", return_value=b""):
            with self.assertRaises(RenderFailure):
                synthesize(make_structure(), fmt="docx")

    def test_modern_bullet_limit_from_settings(self):
        job = make_job(achievements=tuple(f"Delivered outcome number {i} for the platform" for i in range(6)))
        structure = make_structure(experience=(job,))
        text = pdf_text(synthesize(structure, settings=EngineSettings(modern_max_bullets=2)).content)
        self.assertIn("outcome number 1", text)
        self.assertNotIn("outcome number 2", text)

    def test_letter_page_size(self):
        doc = synthesize(make_structure(), "traditional", fmt="pdf", settings=EngineSettings(page_size="letter"))
        self.assertIn(b"612 792", doc.content)


class TestSynthesizeFromInputs(unittest.TestCase):
    def test_from_text(self):
        doc = synthesize_from_text(SAMPLE_RESUME_TEXT, "traditional", fmt="pdf", today=TODAY)
        self.assertEqual(doc.filename, "Traditional_Resume_2024-05-01.pdf")
        self.assertIn("Acme Corp", pdf_text(doc.content))

    def test_from_form(self):
        doc = synthesize_from_form(make_form(), SAMPLE_AI_PROSE, "modern", "teal", "pdf", today=TODAY)
        text = pdf_text(doc.content)
        self.assertIn("Seasoned engineer", text)
        self.assertIn("Mentored six engineers", text)
        self.assertNotIn("Terraform", text)

    def test_from_empty_text(self):
        with self.assertRaises(EmptyDocumentError):
            synthesize_from_text("   \n\n", fmt="docx")


class TestModernBlueScenario(unittest.TestCase):
    """The Jane Doe resume rendered Modern/blue in both formats."""

    ACCENT = COLOR_PRESETS[ColorPreset.BLUE]["primary"]

    def _render(self, fmt: str) -> bytes:
        return synthesize(make_structure(), "modern", "blue", fmt, today=TODAY).content

    def test_pdf(self):
        content = self._render("pdf")
        text = pdf_text(content)
        for expected in ("Jane Doe", "Acme", "Python"):
            self.assertIn(expected, text)
        for artifact in ("undefined", "NaN"):
            self.assertNotIn(artifact, text)

        chars = [(ch, c) for ch, c in pdf_char_colors(content) if not ch.isspace()]
        joined = "".join(ch for ch, _ in chars)
        start = joined.find("EXPERIENCE")
        self.assertGreaterEqual(start, 0)
        heading_colors = [c for _, c in chars[start:start + len("EXPERIENCE")]]
        if not all(isinstance(c, (tuple, list)) and len(c) == 3 for c in heading_colors):
            self.skipTest("pdfminer did not report RGB fill colors")
        expected = tuple(int(self.ACCENT[i:i + 2], 16) / 255.0 for i in (1, 3, 5))
        for color in heading_colors:
            for got, want in zip(color, expected):
                self.assertAlmostEqual(float(got), want, delta=0.01)

    def test_docx(self):
        content = self._render("docx")
        texts = paragraph_texts(content)
        joined = "\n".join(texts)
        for expected in ("Jane Doe", "Acme", "Python"):
            self.assertIn(expected, joined)
        for artifact in ("undefined", "NaN"):
            self.assertNotIn(artifact, joined)

        doc = docx_document(content)
        cells = [cell for row in doc.tables[0].rows for cell in row.cells]
        heading = next(
            p for cell in cells for p in cell.paragraphs if p.text == "PROFESSIONAL EXPERIENCE"
        )
        colors = {str(run.font.color.rgb) for run in heading.runs if run.text.strip()}
        self.assertEqual(colors, {self.ACCENT.lstrip("#").upper()})


if __name__ == "__main__":
    unittest.main()
