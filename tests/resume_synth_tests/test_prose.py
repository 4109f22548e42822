"""Tests for resume_synth/prose.py and resume_synth/providers.py."""

from __future__ import annotations

import unittest

from resume_synth.prose import (
    extract_prose_summary,
    find_job_block,
    prose_section,
    strip_sidebar_sections,
)
from resume_synth.providers import ProviderChain

from tests.resume_synth_tests.fixtures import SAMPLE_AI_PROSE

AMBIGUOUS_PROSE = """## EXPERIENCE
**Developer | Acme Labs | 2018 - 2020**
- Built internal tooling used by every product team
**Senior Engineer | Acme | 2020 - Present**
- Led migration of payment services to Kubernetes
"""


class TestStripSidebarSections(unittest.TestCase):
    def test_removes_skills_section(self):
        stripped = strip_sidebar_sections(SAMPLE_AI_PROSE)
        self.assertNotIn("Terraform", stripped)
        self.assertNotIn("## SKILLS", stripped)
        self.assertIn("Mentored six engineers", stripped)

    def test_removes_education_and_keeps_following_sections(self):
        text = "## EDUCATION\nBachelor of Arts\n## EXPERIENCE\n- Did things worth noting"
        stripped = strip_sidebar_sections(text)
        self.assertNotIn("Bachelor", stripped)
        self.assertIn("Did things worth noting", stripped)

    def test_empty(self):
        self.assertEqual(strip_sidebar_sections(""), "")


class TestExtractProseSummary(unittest.TestCase):
    def test_summary_section(self):
        self.assertEqual(
            extract_prose_summary(SAMPLE_AI_PROSE),
            "Seasoned engineer with a track record of shipping reliable platforms.",
        )

    def test_no_summary(self):
        self.assertEqual(extract_prose_summary("## EXPERIENCE\n- Built things"), "")
        self.assertEqual(extract_prose_summary(""), "")


class TestFindJobBlock(unittest.TestCase):
    def test_exact_company_and_title(self):
        prose = strip_sidebar_sections(SAMPLE_AI_PROSE)
        match = find_job_block(prose, "Acme", "Senior Engineer", ["Acme", "Globex"])
        self.assertTrue(match.exact)
        self.assertFalse(match.ambiguous)
        self.assertEqual(len(match.bullets), 3)
        self.assertTrue(match.bullets[0].startswith("- Led migration"))

    def test_block_stops_at_next_company(self):
        prose = strip_sidebar_sections(SAMPLE_AI_PROSE)
        match = find_job_block(prose, "Globex", "Engineer", ["Acme", "Globex"])
        self.assertEqual(match.bullets, ["- Maintained billing platform serving 500 enterprise customers"])

    def test_company_only_match(self):
        prose = strip_sidebar_sections(SAMPLE_AI_PROSE)
        match = find_job_block(prose, "Globex", "Staff Engineer", ["Acme", "Globex"])
        self.assertFalse(match.exact)
        self.assertEqual(len(match.bullets), 1)

    def test_overlapping_company_names_are_ambiguous(self):
        match = find_job_block(AMBIGUOUS_PROSE, "Acme", "Operations Manager", ["Acme", "Acme Labs"])
        self.assertTrue(match.ambiguous)
        self.assertEqual(match.bullets, [])

    def test_exact_title_resolves_overlap(self):
        match = find_job_block(AMBIGUOUS_PROSE, "Acme", "Senior Engineer", ["Acme", "Acme Labs"])
        self.assertFalse(match.ambiguous)
        self.assertEqual(match.bullets, ["- Led migration of payment services to Kubernetes"])

    def test_missing_company(self):
        match = find_job_block(SAMPLE_AI_PROSE, "Initech", "Engineer")
        self.assertFalse(match.ambiguous)
        self.assertEqual(match.bullets, [])
        self.assertEqual(find_job_block(SAMPLE_AI_PROSE, "").bullets, [])

    def test_whole_word_match_only(self):
        match = find_job_block("**Engineer | Acmeco | 2020**\n- Built a thing that matters", "Acme")
        self.assertEqual(match.bullets, [])


class TestProseSections(unittest.TestCase):
    def test_headings_open_sections(self):
        self.assertEqual(prose_section("## SKILLS"), "skills")
        self.assertEqual(prose_section("TECHNICAL SKILLS"), "skills")
        self.assertEqual(prose_section("## Experience"), "experience")
        self.assertEqual(prose_section("Languages:"), "languages")
        self.assertEqual(prose_section("**Skills**"), "skills")
        self.assertEqual(prose_section("## PROFESSIONAL SUMMARY"), "summary")

    def test_job_lines_are_not_sections(self):
        for line in (
            "**Education Program Manager** | Acme | 2020 - Present",
            "**Language Teacher | Acme | 2019 - 2021**",
            "Skills Trainer | Acme | 2018 - 2019",
            "- Trained staff on new certification workflows",
            "",
        ):
            with self.subTest(line=line):
                self.assertIsNone(prose_section(line))


class TestSidebarWordsInJobTitles(unittest.TestCase):
    PROSE = """## PROFESSIONAL EXPERIENCE
**Education Program Manager** | Acme | 2020 - Present
- Expanded after-school programs to twelve district campuses
- Secured state grant funding for teacher training initiatives
- Cut program onboarding time in half with a new intake process

**Contact Center Lead | Globex | 2017 - 2020**
- Ran a forty-seat support floor with a 95% satisfaction score

## CERTIFICATIONS
- Certified Program Manager credential from the state board
"""

    def test_job_lines_survive_stripping(self):
        stripped = strip_sidebar_sections(self.PROSE)
        self.assertIn("**Education Program Manager** | Acme | 2020 - Present", stripped)
        self.assertIn("Contact Center Lead", stripped)
        self.assertNotIn("state board", stripped)

    def test_block_found_after_stripping(self):
        prose = strip_sidebar_sections(self.PROSE)
        match = find_job_block(prose, "Acme", "Education Program Manager", ["Acme", "Globex"])
        self.assertTrue(match.exact)
        self.assertEqual(len(match.bullets), 3)
        match = find_job_block(prose, "Globex", "Contact Center Lead", ["Acme", "Globex"])
        self.assertEqual(match.bullets, ["- Ran a forty-seat support floor with a 95% satisfaction score"])


class TestSummaryMentions(unittest.TestCase):
    PROSE = """## PROFESSIONAL SUMMARY
Platform engineer who rebuilt the billing stack at Acme.

## PROFESSIONAL EXPERIENCE
**Senior Platform Engineer**
Acme | 2020 - Present
- Rebuilt invoicing on an event-driven pipeline
- Reduced failed payment retries by 40% across regions
- Introduced contract tests for every billing service
"""

    def test_summary_mention_is_not_an_anchor(self):
        match = find_job_block(self.PROSE, "Acme", "Backend Developer", ["Acme"])
        self.assertFalse(match.ambiguous)
        self.assertEqual(match.anchor, "Acme | 2020 - Present")
        self.assertEqual(len(match.bullets), 3)

    def test_two_experience_lines_still_ambiguous(self):
        prose = self.PROSE + "\nAcme | 2016 - 2018\n- Maintained the reporting warehouse for finance\n"
        self.assertTrue(find_job_block(prose, "Acme", "Backend Developer", ["Acme"]).ambiguous)


class TestProviderChain(unittest.TestCase):
    def test_first_non_empty_wins(self):
        chain = ProviderChain("summary")
        chain.add("ai", lambda: "").add("form", lambda: "From the form").add("synth", lambda: "Synth")
        self.assertEqual(chain.resolve(), ("form", "From the form"))

    def test_default_when_nothing_produces(self):
        chain = ProviderChain("bullets").add("ai", lambda: [])
        self.assertEqual(chain.value(default=["fallback"]), ["fallback"])
        self.assertEqual(chain.resolve(default=None), ("", None))

    def test_later_providers_not_called(self):
        calls = []

        def second():
            calls.append("second")
            return "x"

        ProviderChain("x").add("first", lambda: "y").add("second", second).value()
        self.assertEqual(calls, [])


if __name__ == "__main__":
    unittest.main()
