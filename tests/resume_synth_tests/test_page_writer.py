"""Tests for resume_synth/page_writer.py pagination and resume_synth/styles.py."""

from __future__ import annotations

import unittest

from resume_synth.layout import FULL, MAIN, SIDEBAR, get_strategy
from resume_synth.page_writer import LineOp, PageWriter, RectOp, Segment, TextOp
from resume_synth.render_config import TemplateConfig
from resume_synth.styles import docx_font, hex_fill, line_height, parse_hex_color, pdf_font, pdf_safe

from tests.resume_synth_tests.fixtures import make_structure


def fixed_measure(text: str, font: str, size: float) -> float:
    return len(text) * size * 0.5


def _writer(template: str = "modern") -> PageWriter:
    layout = get_strategy(template).layout(make_structure(), TemplateConfig.of(template, "blue"))
    return PageWriter(layout, fixed_measure)


class TestPageWriter(unittest.TestCase):
    def test_no_break_at_top_of_page(self):
        writer = _writer()
        self.assertTrue(writer.at_top(MAIN))
        self.assertFalse(writer.new_page_if_needed(MAIN, 10_000))
        self.assertEqual(writer.page_count, 1)

    def test_break_moves_only_that_region(self):
        writer = _writer()
        writer.advance(MAIN, 50)
        self.assertTrue(writer.new_page_if_needed(MAIN, 10_000))
        self.assertEqual(writer.page_count, 2)
        self.assertEqual(writer.position(MAIN), (1, writer.geometry.top))
        self.assertEqual(writer.position(SIDEBAR), (0, writer.layout.columns[SIDEBAR].top))

    def test_fills_per_page(self):
        writer = _writer()
        writer.advance(MAIN, 50)
        writer.new_page_if_needed(MAIN, 10_000)
        first = [op for op in writer.pages[0] if isinstance(op, RectOp)]
        second = [op for op in writer.pages[1] if isinstance(op, RectOp)]
        self.assertEqual(len(first), 2)
        self.assertEqual(len(second), 1)
        self.assertEqual(second[0].color, "#eff6ff")

    def test_single_column_templates_have_no_fills(self):
        writer = _writer("traditional")
        self.assertEqual(writer.pages, [[]])
        self.assertEqual(writer.position(FULL), (0, writer.geometry.top))

    def test_space_dropped_at_top(self):
        writer = _writer("ats")
        writer.space(FULL, 12)
        self.assertEqual(writer.position(FULL)[1], writer.geometry.top)
        writer.advance(FULL, 1)
        writer.space(FULL, 12)
        self.assertEqual(writer.position(FULL)[1], writer.geometry.top + 13)

    def test_write_line_and_right_detail(self):
        writer = _writer("ats")
        writer.write_line(FULL, [Segment("Engineer", "Helvetica", "#000000")], 10,
                          right=[Segment("2020", "Helvetica", "#000000")])
        ops = [op for op in writer.pages[0] if isinstance(op, TextOp)]
        self.assertEqual([op.text for op in ops], ["Engineer", "2020"])
        column = writer.layout.columns[FULL]
        self.assertAlmostEqual(ops[1].x, column.x + column.width - 20.0)
        self.assertAlmostEqual(ops[0].baseline, writer.geometry.top + 10)
        self.assertAlmostEqual(writer.position(FULL)[1], writer.geometry.top + line_height(10))

    def test_centered_line(self):
        writer = _writer("traditional")
        writer.write_heading(FULL, "abcd", "Times-Bold", 10, "#000000", align="center")
        op = writer.pages[0][0]
        column = writer.layout.columns[FULL]
        self.assertAlmostEqual(op.x, column.x + (column.width - 20.0) / 2.0)

    def test_rule(self):
        writer = _writer("traditional")
        writer.write_rule(FULL, "#000000", weight=0.5)
        (op,) = writer.pages[0]
        self.assertIsInstance(op, LineOp)
        self.assertAlmostEqual(op.y, writer.geometry.top + 2.0)

    def test_long_flow_paginates(self):
        writer = _writer("ats")
        for _ in range(200):
            writer.write_line(FULL, [Segment("line", "Helvetica", "#000000")], 10)
        self.assertGreater(writer.page_count, 2)
        for ops in writer.pages:
            for op in ops:
                self.assertLessEqual(op.baseline, writer.bottom + 10)


class TestStyles(unittest.TestCase):
    def test_colors(self):
        self.assertEqual(parse_hex_color("#2563eb"), (0x25, 0x63, 0xEB))
        self.assertIsNone(parse_hex_color("#123"))
        self.assertIsNone(parse_hex_color("zzzzzz"))
        self.assertEqual(hex_fill("#eff6ff"), "EFF6FF")
        with self.assertRaises(ValueError):
            hex_fill("nope")

    def test_fonts(self):
        self.assertEqual(pdf_font("serif", bold=True), "Times-Bold")
        self.assertEqual(pdf_font("sans", italic=True), "Helvetica-Oblique")
        self.assertEqual(pdf_font("unknown"), "Helvetica")
        self.assertEqual(docx_font("serif"), "Times New Roman")

    def test_pdf_safe(self):
        self.assertEqual(pdf_safe("Café – “ok”"), "Café – “ok”")
        self.assertEqual(pdf_safe("− Zoë Dvořák"), "- Zoë Dvorák")
        self.assertEqual(pdf_safe("中"), "?")


if __name__ == "__main__":
    unittest.main()
