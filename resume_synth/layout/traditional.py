"""Traditional template: one serif column with centered header and ruled sections."""
from __future__ import annotations

from typing import List

from ..model import ResumeStructure
from ..render_config import PageGeometry, Template, TemplateConfig
from .base import LayoutStrategy
from .blocks import FULL, HEADING, Column, Layout, LayoutBlock

SECTION_ORDER = ("summary", "experience", "education", "skills")


class TraditionalLayout(LayoutStrategy):
    template = Template.TRADITIONAL
    font_family = "serif"
    bullet_glyph = "•"
    sizes = {
        "name": 20.0,
        "heading": 12.0,
        "job_title": 11.0,
        "body": 10.5,
        "small": 10.0,
    }

    def _section(self, title: str, key: str) -> List[LayoutBlock]:
        return [
            self._heading(title, region=FULL, section=key, color="accent", space_before=12.0),
            self._rule(region=FULL, color="accent", weight=0.5, section=key),
        ]

    def _summary(self, s: ResumeStructure) -> List[LayoutBlock]:
        if not s.summary:
            return []
        return self._section("SUMMARY", "summary") + [
            self._body(s.summary, region=FULL, space_before=4.0, section="summary")
        ]

    def _experience(self, s: ResumeStructure) -> List[LayoutBlock]:
        if not s.experience:
            return []
        out = self._section("EXPERIENCE", "experience")
        for i, job in enumerate(s.experience):
            out.append(self._body(job.title or job.company, region=FULL, emphasis="bold", size_class="job_title",
                                  detail=job.period, detail_align="right", detail_color="body",
                                  space_before=4.0 if i == 0 else 8.0, keep_with_next=True,
                                  section="experience"))
            place = ", ".join(p for p in (job.company if job.title else "", job.location) if p)
            if place:
                out.append(self._body(place, region=FULL, italic=True, keep_with_next=bool(job.achievements),
                                      section="experience"))
            out.extend(self._bullets(job.achievements, region=FULL))
        return out

    def _education(self, s: ResumeStructure) -> List[LayoutBlock]:
        if not s.education:
            return []
        out = self._section("EDUCATION", "education")
        for i, edu in enumerate(s.education):
            out.append(self._body(edu.degree or edu.school, region=FULL, emphasis="bold",
                                  detail=edu.period, detail_align="right", detail_color="body",
                                  space_before=4.0 if i == 0 else 6.0, keep_with_next=True,
                                  section="education"))
            if edu.degree and edu.school:
                out.append(self._body(edu.school, region=FULL, italic=True, section="education"))
            if edu.details:
                out.append(self._body(edu.details, region=FULL, size_class="small", section="education"))
        return out

    def _skills(self, s: ResumeStructure) -> List[LayoutBlock]:
        rows = [
            ("Technical Skills: ", s.skills.technical),
            ("Professional Skills: ", s.skills.soft),
            ("Languages: ", s.skills.languages),
            ("Certifications: ", s.skills.certifications),
        ]
        rows = [(label, items) for label, items in rows if items]
        if not rows:
            return []
        out = self._section("SKILLS", "skills")
        for i, (label, items) in enumerate(rows):
            out.append(self._body(", ".join(items), region=FULL, label=label,
                                  space_before=4.0 if i == 0 else 2.0, section="skills"))
        return out

    def _blocks(self, structure: ResumeStructure, geometry: PageGeometry) -> List[LayoutBlock]:
        out: List[LayoutBlock] = []
        if structure.name:
            out.append(LayoutBlock(HEADING, text=structure.name, region=FULL, emphasis="bold",
                                   size_class="name", color="accent", align="center", section="name"))
        contact = self._contact_line(structure)
        if contact:
            out.append(self._body(contact, region=FULL, size_class="small", align="center",
                                  space_before=2.0, section="contact"))
        if out:
            out.append(self._rule(region=FULL, color="accent", weight=0.8, section="contact"))
        builders = {
            "summary": self._summary,
            "experience": self._experience,
            "education": self._education,
            "skills": self._skills,
        }
        for key in SECTION_ORDER:
            out.extend(builders[key](structure))
        return out

    def _assemble(self, structure, config: TemplateConfig, geometry: PageGeometry, blocks) -> Layout:
        return Layout(
            blocks=tuple(blocks),
            columns={FULL: Column(x=geometry.left, width=geometry.content_width, top=geometry.top)},
            sizes=dict(self.sizes),
            palette=config.palette(),
            geometry=geometry,
            font_family=self.font_family,
            bullet_glyph=self.bullet_glyph,
            title=self._document_title(structure),
            author=structure.name,
            template=self.template.value,
        )
