"""Modern template: tinted sidebar plus a main column.

The sidebar takes about 30% of the page width and carries contact, skills,
languages, education and certifications. The main column carries the name,
summary and experience. An accent bar runs across the top of page one.
"""
from __future__ import annotations

from typing import List

from ..model import ResumeStructure
from ..render_config import MM, PageGeometry, Template, TemplateConfig
from .base import LayoutStrategy
from .blocks import BODY, HEADING, MAIN, SIDEBAR, Column, Fill, Layout, LayoutBlock

SIDEBAR_RATIO = 0.30
HEADER_BAR = 8 * MM
SIDEBAR_PADDING = 8 * MM
GUTTER = 10 * MM
MAX_CERTIFICATIONS = 6


class ModernLayout(LayoutStrategy):
    template = Template.MODERN
    font_family = "sans"
    bullet_glyph = "•"
    sizes = {
        "name": 28.0,
        "heading": 12.0,
        "sidebar_heading": 11.0,
        "job_title": 11.0,
        "body": 10.0,
        "small": 9.0,
    }

    # -------------------------------------------------------------------------
    # Sidebar
    # -------------------------------------------------------------------------

    def _sidebar_heading(self, text: str, section: str, first: bool) -> LayoutBlock:
        return self._heading(
            text, region=SIDEBAR, section=section, size_class="sidebar_heading",
            space_before=0.0 if first else 12.0,
        )

    def _sidebar_items(self, items, section: str) -> List[LayoutBlock]:
        return [
            LayoutBlock(BODY, text=f"{self.bullet_glyph} {item}", region=SIDEBAR, size_class="small", section=section)
            for item in items
        ]

    def _sidebar(self, structure: ResumeStructure) -> List[LayoutBlock]:
        out: List[LayoutBlock] = []

        def heading(text: str, section: str) -> None:
            out.append(self._sidebar_heading(text, section, first=not out))

        contact = structure.contact.fields()
        if contact:
            heading("CONTACT", "contact")
            out.extend(self._body(c, region=SIDEBAR, size_class="small", section="contact") for c in contact)

        skills = structure.skills
        if skills.technical or skills.soft:
            heading("SKILLS", "skills")
            for label, items in (("Technical:", skills.technical), ("Professional:", skills.soft)):
                if not items:
                    continue
                out.append(self._body(label, region=SIDEBAR, size_class="small", emphasis="bold",
                                      space_before=3.0, section="skills"))
                out.extend(self._sidebar_items(items, "skills"))

        if skills.languages:
            heading("LANGUAGES", "languages")
            out.extend(self._sidebar_items(skills.languages, "languages"))

        if structure.education:
            heading("EDUCATION", "education")
            for i, edu in enumerate(structure.education):
                if edu.degree:
                    out.append(self._body(edu.degree, region=SIDEBAR, size_class="small", emphasis="bold",
                                          space_before=0.0 if i == 0 else 6.0, keep_with_next=True,
                                          section="education"))
                if edu.school:
                    out.append(self._body(edu.school, region=SIDEBAR, size_class="small", section="education"))
                if edu.period:
                    out.append(self._body(edu.period, region=SIDEBAR, size_class="small", color="muted",
                                          italic=True, section="education"))
                if edu.details:
                    out.append(self._body(edu.details, region=SIDEBAR, size_class="small", color="muted",
                                          section="education"))

        if skills.certifications:
            heading("CERTIFICATIONS", "certifications")
            out.extend(self._sidebar_items(skills.certifications[:MAX_CERTIFICATIONS], "certifications"))
        return out

    # -------------------------------------------------------------------------
    # Main column
    # -------------------------------------------------------------------------

    def _main(self, structure: ResumeStructure) -> List[LayoutBlock]:
        out: List[LayoutBlock] = []
        if structure.name:
            out.append(LayoutBlock(HEADING, text=structure.name, region=MAIN, emphasis="bold",
                                   size_class="name", color="accent", section="name"))
        if structure.summary:
            out.append(self._heading("PROFESSIONAL SUMMARY", section="summary", space_before=10.0 if out else 0.0))
            out.append(self._rule(section="summary"))
            out.append(self._body(structure.summary, space_before=4.0, section="summary"))
        if structure.experience:
            out.append(self._heading("PROFESSIONAL EXPERIENCE", section="experience",
                                     space_before=12.0 if out else 0.0))
            out.append(self._rule(section="experience"))
            for i, job in enumerate(structure.experience):
                if job.title:
                    out.append(self._body(job.title, emphasis="bold", size_class="job_title",
                                          space_before=4.0 if i == 0 else 10.0, keep_with_next=True,
                                          section="experience"))
                place = ", ".join(p for p in (job.company, job.location) if p)
                if place or job.period:
                    detail = f" | {job.period}" if place and job.period else job.period
                    out.append(self._body(place, color="accent", detail=detail, detail_color="muted",
                                          detail_italic=True, keep_with_next=bool(job.achievements),
                                          section="experience"))
                out.extend(self._bullets(job.achievements))
        return out

    def _blocks(self, structure: ResumeStructure, geometry: PageGeometry) -> List[LayoutBlock]:
        return self._main(structure) + self._sidebar(structure)

    def _assemble(self, structure, config: TemplateConfig, geometry: PageGeometry, blocks) -> Layout:
        sidebar_width = geometry.width * SIDEBAR_RATIO
        main_x = sidebar_width + GUTTER
        top = HEADER_BAR + 12 * MM
        columns = {
            SIDEBAR: Column(x=SIDEBAR_PADDING, width=sidebar_width - 2 * SIDEBAR_PADDING, top=top),
            MAIN: Column(x=main_x, width=geometry.width - main_x - geometry.right, top=top),
        }
        fills = (
            Fill(0.0, 0.0, sidebar_width, geometry.height, color="light", every_page=True),
            Fill(0.0, 0.0, geometry.width, HEADER_BAR, color="accent", every_page=False),
        )
        return Layout(
            blocks=tuple(blocks),
            columns=columns,
            sizes=dict(self.sizes),
            palette=config.palette(),
            geometry=geometry,
            font_family=self.font_family,
            bullet_glyph=self.bullet_glyph,
            fills=fills,
            title=self._document_title(structure),
            author=structure.name,
            template=self.template.value,
            continuation_top={SIDEBAR: geometry.top, MAIN: geometry.top},
        )
