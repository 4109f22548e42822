"""ATS template: plain single column that parsers read reliably.

No rules, fills or columns; upper-case plain headings; ASCII bullets and
ASCII-folded text.
"""
from __future__ import annotations

from typing import List

from ..model import ResumeStructure
from ..render_config import PageGeometry, Template, TemplateConfig
from .base import LayoutStrategy
from .blocks import FULL, HEADING, Column, Layout, LayoutBlock


class ATSLayout(LayoutStrategy):
    template = Template.ATS
    font_family = "sans"
    bullet_glyph = "-"
    ascii_only = True
    sizes = {
        "name": 18.0,
        "heading": 12.0,
        "job_title": 11.0,
        "body": 10.5,
        "small": 10.0,
    }

    def _section(self, title: str, key: str) -> LayoutBlock:
        return self._heading(title.upper(), region=FULL, section=key, color="body", space_before=12.0)

    def _blocks(self, structure: ResumeStructure, geometry: PageGeometry) -> List[LayoutBlock]:
        out: List[LayoutBlock] = []
        if structure.name:
            out.append(LayoutBlock(HEADING, text=structure.name, region=FULL, emphasis="bold",
                                   size_class="name", color="body", section="name"))
        contact = self._contact_line(structure)
        if contact:
            out.append(self._body(contact, region=FULL, space_before=2.0, section="contact"))

        if structure.summary:
            out.append(self._section("Summary", "summary"))
            out.append(self._body(structure.summary, region=FULL, space_before=2.0, section="summary"))

        if structure.experience:
            out.append(self._section("Experience", "experience"))
            for i, job in enumerate(structure.experience):
                if job.title:
                    out.append(self._body(job.title, region=FULL, emphasis="bold", size_class="job_title",
                                          space_before=2.0 if i == 0 else 8.0, keep_with_next=True,
                                          section="experience"))
                meta = " | ".join(p for p in (job.company, job.location, job.period) if p)
                if meta:
                    out.append(self._body(meta, region=FULL, keep_with_next=bool(job.achievements),
                                          section="experience"))
                out.extend(self._bullets(job.achievements, region=FULL))

        if structure.education:
            out.append(self._section("Education", "education"))
            for i, edu in enumerate(structure.education):
                if edu.degree:
                    out.append(self._body(edu.degree, region=FULL, emphasis="bold",
                                          space_before=2.0 if i == 0 else 6.0, keep_with_next=True,
                                          section="education"))
                meta = " | ".join(p for p in (edu.school, edu.period) if p)
                if meta:
                    out.append(self._body(meta, region=FULL, section="education"))
                if edu.details:
                    out.append(self._body(edu.details, region=FULL, section="education"))

        skills = list(structure.skills.technical) + list(structure.skills.soft)
        if skills:
            out.append(self._section("Skills", "skills"))
            out.append(self._body(", ".join(skills), region=FULL, space_before=2.0, section="skills"))
        if structure.skills.languages:
            out.append(self._section("Languages", "languages"))
            out.append(self._body(", ".join(structure.skills.languages), region=FULL, space_before=2.0,
                                  section="languages"))
        if structure.skills.certifications:
            out.append(self._section("Certifications", "certifications"))
            out.extend(self._bullets(structure.skills.certifications, region=FULL, section="certifications",
                                        limit=False))
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
            ascii_only=True,
        )
