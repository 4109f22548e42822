"""Tests for resume_synth model, render configuration and errors."""

from __future__ import annotations

import io
import os
import unittest
from contextlib import redirect_stderr
from dataclasses import FrozenInstanceError

from resume_synth.errors import ConfigError, EmptyDocumentError, ExitCode, RenderFailure, handle_error
from resume_synth.model import ResumeStructure, Skills, unique_terms
from resume_synth.render_config import (
    MM,
    ColorPreset,
    PageGeometry,
    Template,
    TemplateConfig,
    load_settings,
)

from tests.resume_synth_tests.fixtures import TempDirMixin, make_structure


class TestResumeStructure(unittest.TestCase):
    def test_from_dict_aliases(self):
        structure = ResumeStructure.from_dict({
            "name": "Jane Doe",
            "email": "jane@example.com",
            "contact": {"website": "janedoe.dev"},
            "experience": [{"title": "Engineer", "company": "Acme", "bullets": ["Shipped the thing"]}],
            "education": [{"degree": "BSc", "institution": "MIT", "year": "2015"}],
            "skills": ["Python", "SQL"],
        })
        self.assertEqual(structure.contact.email, "jane@example.com")
        self.assertEqual(structure.contact.portfolio, "janedoe.dev")
        self.assertEqual(structure.experience[0].achievements, ("Shipped the thing",))
        self.assertEqual(structure.education[0].school, "MIT")
        self.assertEqual(structure.education[0].period, "2015")
        self.assertEqual(structure.skills.technical, ("Python", "SQL"))

    def test_from_dict_tolerates_none(self):
        structure = ResumeStructure.from_dict({
            "name": None,
            "contact": None,
            "experience": None,
            "education": [None, "junk"],
            "skills": None,
        })
        self.assertTrue(structure.is_empty())
        self.assertTrue(ResumeStructure.from_dict(None).is_empty())

    def test_to_dict_round_trip(self):
        structure = make_structure()
        self.assertEqual(ResumeStructure.from_dict(structure.to_dict()), structure)

    def test_empty_entries_are_dropped(self):
        structure = ResumeStructure.from_dict({"experience": [{"title": ""}], "education": [{}]})
        self.assertEqual(structure.experience, ())
        self.assertEqual(structure.education, ())

    def test_frozen(self):
        structure = make_structure()
        with self.assertRaises(FrozenInstanceError):
            structure.name = "Someone Else"

    def test_skills_dedupe_case_insensitive(self):
        skills = Skills(technical=("Python", "python", " SQL ", ""))
        self.assertEqual(skills.technical, ("Python", "SQL"))
        self.assertEqual(unique_terms(["a", None, "A", "b"]), ("a", "b"))


class TestTemplateConfig(unittest.TestCase):
    def test_parse(self):
        self.assertIs(Template.parse(" Modern "), Template.MODERN)
        self.assertIs(ColorPreset.parse("GREEN"), ColorPreset.GREEN)
        self.assertEqual(Template.ATS.display_name, "ATS")
        self.assertEqual(Template.TRADITIONAL.display_name, "Traditional")

    def test_unknown_values(self):
        with self.assertRaises(ConfigError) as ctx:
            Template.parse("fancy")
        self.assertIn("modern", ctx.exception.hint)
        with self.assertRaises(ConfigError):
            ColorPreset.parse("magenta")

    def test_modern_palette_follows_preset(self):
        palette = TemplateConfig.of("modern", "green").palette()
        self.assertEqual(palette.accent, "#16a34a")
        self.assertEqual(palette.light, "#f0fdf4")
        self.assertEqual(palette.resolve("light"), "#f0fdf4")

    def test_other_templates_ignore_color(self):
        for template in ("traditional", "ats"):
            palette = TemplateConfig.of(template, "red").palette()
            self.assertEqual(palette.accent, "#000000")
            self.assertEqual(palette.light, "")
        self.assertEqual(TemplateConfig.of("ats").palette().body, "#000000")


class TestPageGeometry(unittest.TestCase):
    def test_letter(self):
        geometry = PageGeometry.for_template(Template.MODERN, "letter")
        self.assertEqual(geometry.width, 612.0)
        self.assertEqual(geometry.height, 792.0)

    def test_template_margins(self):
        self.assertAlmostEqual(PageGeometry.for_template(Template.TRADITIONAL).left, 20 * MM)
        self.assertAlmostEqual(PageGeometry.for_template(Template.ATS).top, 18 * MM)
        geometry = PageGeometry.for_template(Template.MODERN)
        self.assertAlmostEqual(geometry.content_width, geometry.width - 30 * MM)

    def test_unknown_page_size(self):
        with self.assertRaises(ConfigError):
            PageGeometry.for_template(Template.MODERN, "tabloid")


class TestLoadSettings(TempDirMixin, unittest.TestCase):
    def _write(self, text: str) -> str:
        path = os.path.join(self.tmpdir, "settings.yaml")
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
        return path

    def test_valid(self):
        settings = load_settings(self._write("page_size: Letter\nmargin_mm: 12\nmodern_max_bullets: 3\ncolor: x\n"))
        self.assertEqual(settings.page_size, "letter")
        self.assertEqual(settings.margin_mm, 12.0)
        self.assertEqual(settings.modern_max_bullets, 3)
        self.assertEqual(settings.extra, {"color": "x"})
        self.assertAlmostEqual(settings.geometry(Template.ATS).left, 12 * MM)

    def test_missing_file_gives_defaults(self):
        settings = load_settings(os.path.join(self.tmpdir, "nope.yaml"))
        self.assertEqual(settings.page_size, "a4")
        self.assertEqual(settings.modern_max_bullets, 5)
        self.assertIsNone(settings.margin_mm)

    def test_bad_page_size(self):
        with self.assertRaises(ConfigError):
            load_settings(self._write("page_size: tabloid\n"))

    def test_bad_numbers(self):
        with self.assertRaises(ConfigError):
            load_settings(self._write("modern_max_bullets: 0\n"))
        with self.assertRaises(ConfigError):
            load_settings(self._write("margin_mm: wide\n"))

    def test_not_a_mapping(self):
        with self.assertRaises(ConfigError):
            load_settings(self._write("- a\n- b\n"))


class TestHandleError(unittest.TestCase):
    def test_synthesis_error_codes(self):
        buf = io.StringIO()
        with redirect_stderr(buf):
            code = handle_error(ConfigError("Unknown template: 'x'", hint="Use modern"))
        self.assertEqual(code, ExitCode.CONFIG_ERROR)
        self.assertIn("Error: Unknown template", buf.getvalue())
        self.assertIn("Hint: Use modern", buf.getvalue())

    def test_other_errors(self):
        with redirect_stderr(io.StringIO()):
            self.assertEqual(handle_error(EmptyDocumentError()), 7)
            self.assertEqual(handle_error(RenderFailure("pdf", "boom")), 8)
            self.assertEqual(handle_error(FileNotFoundError(2, "No such file", "x.yaml")), 6)
            self.assertEqual(handle_error(KeyboardInterrupt()), 130)
            self.assertEqual(handle_error(RuntimeError("?")), 1)

    def test_render_failure_message(self):
        err = RenderFailure("docx", "boom")
        self.assertEqual(str(err), "docx rendering failed: boom")
        self.assertEqual(err.format, "docx")


if __name__ == "__main__":
    unittest.main()
